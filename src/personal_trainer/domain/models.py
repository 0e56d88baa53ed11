"""Domain models for clients, workouts and appointments."""

import math
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, time
from uuid import UUID, uuid4

UNKNOWN_CLIENT_NAME = "Unknown Client"

WORKOUT_DURATIONS: tuple[float, ...] = (1800, 2700, 3600, 5400, 7200)
APPOINTMENT_DURATIONS: tuple[float, ...] = (1800, 2700, 3600, 5400)
DEFAULT_DURATION = 3600.0


@dataclass(frozen=True)
class Client:
    """A client with a prepaid session balance."""

    name: str
    phone: str
    email: str
    sessions_remaining: int
    total_deposit: float
    price_per_session: float
    date_created: datetime
    is_active: bool = True
    id: UUID = field(default_factory=uuid4)

    @property
    def sessions_used(self) -> int:
        """Sessions consumed so far.

        Derived from the deposit on every read. Only valid while
        ``price_per_session`` stays what it was when the client was created.
        """
        return sessions_for_deposit(
            self.total_deposit, self.price_per_session
        ) - self.sessions_remaining


@dataclass(frozen=True)
class WorkoutSession:
    """A completed workout signed off by the client."""

    client_id: UUID
    date: datetime
    exercises: str
    notes: str
    client_signature: str
    duration: float = DEFAULT_DURATION
    is_completed: bool = True
    id: UUID = field(default_factory=uuid4)


@dataclass(frozen=True)
class Appointment:
    """A scheduled appointment with a client."""

    client_id: UUID
    date: datetime
    duration: float = DEFAULT_DURATION
    notes: str = ""
    is_confirmed: bool = False
    id: UUID = field(default_factory=uuid4)


def sessions_for_deposit(total_deposit: float, price_per_session: float) -> int:
    """Return how many whole sessions a deposit buys."""
    if not math.isfinite(price_per_session) or price_per_session <= 0:
        raise ValueError("price_per_session must be a finite amount above zero")
    if not math.isfinite(total_deposit):
        raise ValueError("total_deposit must be a finite amount")
    sessions = total_deposit / price_per_session
    if not math.isfinite(sessions):
        raise ValueError("total_deposit buys more sessions than can be counted")
    return math.floor(sessions)


def new_client(
    name: str,
    phone: str,
    email: str,
    total_deposit: float,
    price_per_session: float,
) -> Client:
    """Create an active client whose balance is prepaid by the deposit."""
    if not math.isfinite(total_deposit) or total_deposit < 0:
        raise ValueError("total_deposit must be a finite amount of zero or more")
    return Client(
        name=name,
        phone=phone,
        email=email,
        sessions_remaining=sessions_for_deposit(total_deposit, price_per_session),
        total_deposit=total_deposit,
        price_per_session=price_per_session,
        date_created=datetime.now(tz=UTC),
        is_active=True,
    )


def combine_day_and_time(day: date, time_of_day: time) -> datetime:
    """Build an appointment datetime from a calendar day and a time of day."""
    combined = datetime.combine(day, time_of_day.replace(second=0, microsecond=0))
    if combined.tzinfo is None:
        combined = combined.replace(tzinfo=UTC)
    return combined


@dataclass(frozen=True)
class ClientRef:
    """Result of resolving a soft client reference."""

    client_id: UUID
    client: Client | None

    @property
    def is_dangling(self) -> bool:
        """Return True when the referenced client no longer exists."""
        return self.client is None

    @property
    def display_name(self) -> str:
        """Return the client name, or a placeholder for dangling references."""
        if self.client is None:
            return UNKNOWN_CLIENT_NAME
        return self.client.name


@dataclass(frozen=True)
class WorkoutRecorded:
    """Outcome of recording a workout session."""

    session: WorkoutSession
    client: Client | None

    @property
    def balance_applied(self) -> bool:
        """Return True when a client balance was decremented."""
        return self.client is not None
