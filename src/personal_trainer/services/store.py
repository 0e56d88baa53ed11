"""In-memory store for clients, workout sessions and appointments."""

import json
import logging
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Protocol, TypeVar
from uuid import UUID

from personal_trainer.domain.models import (
    Appointment,
    Client,
    ClientRef,
    WorkoutRecorded,
    WorkoutSession,
)
from personal_trainer.domain.serialization import (
    appointment_to_dict,
    client_to_dict,
    parse_appointment,
    parse_client,
    parse_workout_session,
    workout_session_to_dict,
)
from personal_trainer.errors import InsufficientSessionsError, PersistenceError

logger = logging.getLogger(__name__)

CLIENTS_KEY = "clients"
WORKOUT_SESSIONS_KEY = "workoutSessions"
APPOINTMENTS_KEY = "appointments"

RECENT_WORKOUTS_LIMIT = 5

T = TypeVar("T")

Listener = Callable[["TrainerStore"], None]


class SettingsStore(Protocol):
    """Process-wide key-value store holding serialized collections."""

    def get(self, key: str) -> str | None:
        """Return the blob stored under a key, if present."""

    def set(self, key: str, value: str) -> None:
        """Store a blob under a key, replacing any previous value."""


@dataclass
class TrainerStore:
    """Single source of truth for the three record collections.

    Every mutation is applied in memory and then written out as a full
    snapshot of each collection it touched. A failed write restores the
    previous in-memory state and raises :class:`PersistenceError`.
    """

    settings_store: SettingsStore
    allow_negative_balance: bool = False
    _clients: list[Client] = field(default_factory=list, init=False, repr=False)
    _workout_sessions: list[WorkoutSession] = field(
        default_factory=list, init=False, repr=False
    )
    _appointments: list[Appointment] = field(
        default_factory=list, init=False, repr=False
    )
    _listeners: list[Listener] = field(default_factory=list, init=False, repr=False)
    _lock: threading.RLock = field(
        default_factory=threading.RLock, init=False, repr=False
    )

    def __post_init__(self) -> None:
        self.load()

    @property
    def clients(self) -> tuple[Client, ...]:
        """Return all clients in insertion order."""
        with self._lock:
            return tuple(self._clients)

    @property
    def workout_sessions(self) -> tuple[WorkoutSession, ...]:
        """Return all workout sessions in insertion order."""
        with self._lock:
            return tuple(self._workout_sessions)

    @property
    def appointments(self) -> tuple[Appointment, ...]:
        """Return all appointments in insertion order."""
        with self._lock:
            return tuple(self._appointments)

    def load(self) -> None:
        """Replace in-memory state with the persisted snapshots."""
        with self._lock:
            self._clients = self._load_collection(CLIENTS_KEY, parse_client)
            self._workout_sessions = self._load_collection(
                WORKOUT_SESSIONS_KEY, parse_workout_session
            )
            self._appointments = self._load_collection(
                APPOINTMENTS_KEY, parse_appointment
            )
        logger.info(
            "Loaded %d clients, %d workout sessions, %d appointments",
            len(self._clients),
            len(self._workout_sessions),
            len(self._appointments),
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener and return a function that removes it."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    # Clients

    def add_client(self, client: Client) -> None:
        """Append a client. The caller precomputes its session balance."""
        with self._mutation() as touched:
            self._clients.append(client)
            touched.append(CLIENTS_KEY)

    def update_client(self, client: Client) -> bool:
        """Replace the client with the same id; return False if absent."""
        with self._mutation() as touched:
            index = _index_of(self._clients, client.id)
            if index is None:
                return False
            self._clients[index] = client
            touched.append(CLIENTS_KEY)
        return True

    def delete_client(self, client: Client) -> None:
        """Remove a client along with its workout sessions and appointments."""
        with self._mutation() as touched:
            self._clients = [item for item in self._clients if item.id != client.id]
            self._workout_sessions = [
                item for item in self._workout_sessions if item.client_id != client.id
            ]
            self._appointments = [
                item for item in self._appointments if item.client_id != client.id
            ]
            touched.extend((CLIENTS_KEY, WORKOUT_SESSIONS_KEY, APPOINTMENTS_KEY))

    def get_client(self, client_id: UUID) -> Client | None:
        """Return the client with the given id, if present."""
        with self._lock:
            index = _index_of(self._clients, client_id)
            return None if index is None else self._clients[index]

    def active_clients(self) -> list[Client]:
        """Return clients that have not been deactivated."""
        with self._lock:
            return [client for client in self._clients if client.is_active]

    def resolve_client(self, client_id: UUID) -> ClientRef:
        """Resolve a soft client reference, naming the dangling case."""
        return ClientRef(client_id=client_id, client=self.get_client(client_id))

    # Workout sessions

    def add_workout_session(self, session: WorkoutSession) -> WorkoutRecorded:
        """Record a workout and deduct one session from the client's balance.

        A session for an unknown client is still stored; no balance changes.
        """
        updated: Client | None = None
        with self._mutation() as touched:
            index = _index_of(self._clients, session.client_id)
            if index is None:
                logger.warning(
                    "Workout %s references unknown client %s",
                    session.id,
                    session.client_id,
                )
            else:
                current = self._clients[index]
                if current.sessions_remaining <= 0 and not self.allow_negative_balance:
                    raise InsufficientSessionsError(
                        current.id, current.sessions_remaining
                    )
                updated = replace(
                    current, sessions_remaining=current.sessions_remaining - 1
                )
                self._clients[index] = updated
                touched.append(CLIENTS_KEY)
            self._workout_sessions.append(session)
            touched.append(WORKOUT_SESSIONS_KEY)
        return WorkoutRecorded(session=session, client=updated)

    def get_workout_sessions(self, client_id: UUID) -> list[WorkoutSession]:
        """Return all workout sessions for a client, unordered."""
        with self._lock:
            return [
                item for item in self._workout_sessions if item.client_id == client_id
            ]

    def recent_workout_sessions(
        self, client_id: UUID, limit: int = RECENT_WORKOUTS_LIMIT
    ) -> list[WorkoutSession]:
        """Return a client's most recent workouts, newest first."""
        sessions = self.get_workout_sessions(client_id)
        return sorted(sessions, key=lambda item: item.date, reverse=True)[:limit]

    def workout_history(self) -> list[WorkoutSession]:
        """Return every workout session, newest first."""
        return sorted(self.workout_sessions, key=lambda item: item.date, reverse=True)

    # Appointments

    def add_appointment(self, appointment: Appointment) -> None:
        """Append an appointment."""
        with self._mutation() as touched:
            self._appointments.append(appointment)
            touched.append(APPOINTMENTS_KEY)

    def update_appointment(self, appointment: Appointment) -> bool:
        """Replace the appointment with the same id; return False if absent."""
        with self._mutation() as touched:
            index = _index_of(self._appointments, appointment.id)
            if index is None:
                return False
            self._appointments[index] = appointment
            touched.append(APPOINTMENTS_KEY)
        return True

    def get_appointment(self, appointment_id: UUID) -> Appointment | None:
        """Return the appointment with the given id, if present."""
        with self._lock:
            index = _index_of(self._appointments, appointment_id)
            return None if index is None else self._appointments[index]

    def get_appointments(self, client_id: UUID) -> list[Appointment]:
        """Return all appointments for a client, unordered."""
        with self._lock:
            return [item for item in self._appointments if item.client_id == client_id]

    def appointments_on(self, day: date) -> list[Appointment]:
        """Return appointments on a calendar day, earliest first."""
        matches = [item for item in self.appointments if item.date.date() == day]
        return sorted(matches, key=lambda item: item.date)

    # Persistence

    @contextmanager
    def _mutation(self) -> Iterator[list[str]]:
        """Apply a change under the lock and save the collections it touched.

        The body appends the keys it changed; nothing is saved or announced
        when it appends none. Listeners run after the lock is released.
        """
        touched: list[str] = []
        with self._lock:
            snapshot = (
                list(self._clients),
                list(self._workout_sessions),
                list(self._appointments),
            )
            written: list[str] = []
            try:
                yield touched
                for key in touched:
                    self._save(key)
                    written.append(key)
            except Exception:
                self._clients, self._workout_sessions, self._appointments = snapshot
                self._restore(written)
                raise
        if touched:
            self._notify()

    def _save(self, key: str) -> None:
        try:
            payload = json.dumps(self._serialize(key))
            self.settings_store.set(key, payload)
        except PersistenceError:
            logger.exception("Failed to save %s", key)
            raise
        except Exception as exc:
            logger.exception("Failed to save %s", key)
            raise PersistenceError(f"Failed to save {key}") from exc

    def _restore(self, keys: list[str]) -> None:
        """Rewrite collections already saved by a failed mutation."""
        for key in keys:
            try:
                self._save(key)
            except PersistenceError:
                logger.error("Stored %s no longer matches memory", key)

    def _serialize(self, key: str) -> list[dict[str, object]]:
        if key == CLIENTS_KEY:
            return [client_to_dict(item) for item in self._clients]
        if key == WORKOUT_SESSIONS_KEY:
            return [workout_session_to_dict(item) for item in self._workout_sessions]
        if key == APPOINTMENTS_KEY:
            return [appointment_to_dict(item) for item in self._appointments]
        raise KeyError(key)

    def _load_collection(
        self, key: str, parse: Callable[[dict[str, object]], T]
    ) -> list[T]:
        raw = self.settings_store.get(key)
        if raw is None:
            return []
        try:
            rows = json.loads(raw)
            if not isinstance(rows, list):
                raise TypeError(f"expected a list, got {type(rows).__name__}")
            return [parse(row) for row in rows]
        except (ValueError, KeyError, TypeError, ArithmeticError):
            logger.warning("Discarding unreadable %s snapshot", key, exc_info=True)
            return []

    def _notify(self) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(self)
            except Exception:
                logger.exception("Store listener failed")


def _index_of(items: list, item_id: UUID) -> int | None:
    for index, item in enumerate(items):
        if item.id == item_id:
            return index
    return None
