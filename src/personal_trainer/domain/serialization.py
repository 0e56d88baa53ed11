"""Conversion between domain records and JSON-compatible mappings.

Persisted blobs use camelCase field names so stored snapshots keep the shape
they have always had.
"""

from datetime import datetime
from uuid import UUID

from personal_trainer.domain.models import (
    Appointment,
    Client,
    WorkoutSession,
    sessions_for_deposit,
)


def client_to_dict(client: Client) -> dict[str, object]:
    """Serialize a client record."""
    return {
        "id": str(client.id),
        "name": client.name,
        "phone": client.phone,
        "email": client.email,
        "sessionsRemaining": client.sessions_remaining,
        "totalDeposit": client.total_deposit,
        "pricePerSession": client.price_per_session,
        "dateCreated": client.date_created.isoformat(),
        "isActive": client.is_active,
    }


def workout_session_to_dict(session: WorkoutSession) -> dict[str, object]:
    """Serialize a workout session record."""
    return {
        "id": str(session.id),
        "clientId": str(session.client_id),
        "date": session.date.isoformat(),
        "exercises": session.exercises,
        "notes": session.notes,
        "clientSignature": session.client_signature,
        "isCompleted": session.is_completed,
        "duration": session.duration,
    }


def appointment_to_dict(appointment: Appointment) -> dict[str, object]:
    """Serialize an appointment record."""
    return {
        "id": str(appointment.id),
        "clientId": str(appointment.client_id),
        "date": appointment.date.isoformat(),
        "duration": appointment.duration,
        "notes": appointment.notes,
        "isConfirmed": appointment.is_confirmed,
    }


def parse_client(row: dict[str, object]) -> Client:
    """Parse a stored client row.

    Rows whose amounts cannot produce a session count raise ``ValueError``.
    """
    total_deposit = float(row["totalDeposit"])
    price_per_session = float(row["pricePerSession"])
    sessions_for_deposit(total_deposit, price_per_session)
    return Client(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        phone=str(row.get("phone", "")),
        email=str(row.get("email", "")),
        sessions_remaining=int(row["sessionsRemaining"]),
        total_deposit=total_deposit,
        price_per_session=price_per_session,
        date_created=datetime.fromisoformat(str(row["dateCreated"])),
        is_active=bool(row.get("isActive", True)),
    )


def parse_workout_session(row: dict[str, object]) -> WorkoutSession:
    """Parse a stored workout session row."""
    return WorkoutSession(
        id=UUID(str(row["id"])),
        client_id=UUID(str(row["clientId"])),
        date=datetime.fromisoformat(str(row["date"])),
        exercises=str(row.get("exercises", "")),
        notes=str(row.get("notes", "")),
        client_signature=str(row.get("clientSignature", "")),
        is_completed=bool(row.get("isCompleted", True)),
        duration=float(row["duration"]),
    )


def parse_appointment(row: dict[str, object]) -> Appointment:
    """Parse a stored appointment row."""
    return Appointment(
        id=UUID(str(row["id"])),
        client_id=UUID(str(row["clientId"])),
        date=datetime.fromisoformat(str(row["date"])),
        duration=float(row["duration"]),
        notes=str(row.get("notes", "")),
        is_confirmed=bool(row.get("isConfirmed", False)),
    )
