"""Tests for domain models."""

import math
from datetime import UTC, date, datetime, time, timedelta, timezone
from uuid import uuid4

import pytest

from personal_trainer.domain.models import (
    WorkoutSession,
    combine_day_and_time,
    new_client,
    sessions_for_deposit,
)


def test_new_client_prepays_sessions() -> None:
    client = new_client(
        name="Jordan Park",
        phone="555-0199",
        email="jordan@example.com",
        total_deposit=500.00,
        price_per_session=50.00,
    )

    assert client.sessions_remaining == 10
    assert client.sessions_used == 0
    assert client.is_active
    assert client.date_created.tzinfo is not None


def test_sessions_for_deposit_rounds_down() -> None:
    assert sessions_for_deposit(175.0, 50.0) == 3
    assert sessions_for_deposit(0.0, 50.0) == 0


@pytest.mark.parametrize("price", [0.0, -10.0])
def test_sessions_for_deposit_rejects_non_positive_price(price: float) -> None:
    with pytest.raises(ValueError):
        sessions_for_deposit(100.0, price)


def test_new_client_rejects_negative_deposit() -> None:
    with pytest.raises(ValueError):
        new_client("A", "", "", total_deposit=-1.0, price_per_session=50.0)


def test_new_clients_get_distinct_ids() -> None:
    first = new_client("A", "", "", 100.0, 50.0)
    second = new_client("A", "", "", 100.0, 50.0)

    assert first.id != second.id


def test_workout_session_defaults() -> None:
    session = WorkoutSession(
        client_id=uuid4(),
        date=datetime.now(tz=UTC),
        exercises="Rows",
        notes="",
        client_signature="Sam",
    )

    assert session.is_completed
    assert session.duration == 3600


def test_combine_day_and_time_drops_seconds() -> None:
    combined = combine_day_and_time(date(2024, 3, 8), time(7, 15, 42))

    assert combined == datetime(2024, 3, 8, 7, 15, tzinfo=UTC)


def test_combine_day_and_time_keeps_explicit_offset() -> None:
    offset = timezone(timedelta(hours=2))

    combined = combine_day_and_time(date(2024, 3, 8), time(9, 0, tzinfo=offset))

    assert combined.utcoffset() == timedelta(hours=2)


@pytest.mark.parametrize(
    ("deposit", "price"),
    [
        (math.inf, 50.0),
        (math.nan, 50.0),
        (500.0, math.inf),
        (500.0, math.nan),
        (1e308, 1e-308),
    ],
)
def test_sessions_for_deposit_rejects_non_finite_amounts(
    deposit: float, price: float
) -> None:
    with pytest.raises(ValueError):
        sessions_for_deposit(deposit, price)


def test_new_client_rejects_infinite_deposit() -> None:
    with pytest.raises(ValueError):
        new_client("A", "", "", total_deposit=math.inf, price_per_session=50.0)
