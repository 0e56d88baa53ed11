"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

import pytest

from personal_trainer.config import Settings
from personal_trainer.containers import AppContainer
from personal_trainer.domain.models import Appointment, Client, WorkoutSession
from personal_trainer.errors import PersistenceError
from personal_trainer.services.store import SettingsStore, TrainerStore


@dataclass
class InMemorySettingsStore(SettingsStore):
    """In-memory key-value store for tests."""

    values: dict[str, str] = field(default_factory=dict)
    writes: list[str] = field(default_factory=list)

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.writes.append(key)
        self.values[key] = value


@dataclass
class FailingSettingsStore(InMemorySettingsStore):
    """Settings store whose writes fail for selected keys."""

    failing_keys: set[str] = field(default_factory=set)

    def set(self, key: str, value: str) -> None:
        if key in self.failing_keys:
            raise PersistenceError(f"quota exceeded for {key}")
        super().set(key, value)


def make_client(
    name: str = "Alex Rivera",
    sessions_remaining: int = 10,
    total_deposit: float = 500.0,
    price_per_session: float = 50.0,
) -> Client:
    return Client(
        name=name,
        phone="555-0100",
        email=f"{name.split()[0].lower()}@example.com",
        sessions_remaining=sessions_remaining,
        total_deposit=total_deposit,
        price_per_session=price_per_session,
        date_created=datetime(2024, 3, 1, 9, 30, tzinfo=UTC),
    )


def make_workout(
    client_id: UUID, when: datetime | None = None, exercises: str = "Squats"
) -> WorkoutSession:
    return WorkoutSession(
        client_id=client_id,
        date=when or datetime(2024, 3, 5, 18, 0, tzinfo=UTC),
        exercises=exercises,
        notes="Felt strong",
        client_signature="Alex Rivera",
        duration=3600,
    )


def make_appointment(client_id: UUID, when: datetime | None = None) -> Appointment:
    return Appointment(
        client_id=client_id,
        date=when or datetime(2024, 3, 8, 7, 0, tzinfo=UTC),
        duration=2700,
        notes="Bring shoes",
    )


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(data_path=tmp_path / "trainer_data.json")


@pytest.fixture
def settings_store() -> InMemorySettingsStore:
    return InMemorySettingsStore()


@pytest.fixture
def store(settings_store: InMemorySettingsStore) -> TrainerStore:
    return TrainerStore(settings_store)


@pytest.fixture
def container(settings: Settings, store: TrainerStore) -> AppContainer:
    return AppContainer(settings=settings, store=store)
