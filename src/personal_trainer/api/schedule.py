"""Schedule, appointment and workout history endpoints."""

from __future__ import annotations

from dataclasses import replace
from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, HTTPException, Request, status

from personal_trainer.api.clients import serialize_workout
from personal_trainer.api.schemas import AppointmentCreate, AppointmentUpdate
from personal_trainer.domain.models import Appointment, combine_day_and_time

if TYPE_CHECKING:
    from personal_trainer.services.store import TrainerStore

router = APIRouter(tags=["schedule"])


def _store(request: Request) -> TrainerStore:
    return request.app.state.container.store


@router.get("/schedule")
async def schedule(day: date, request: Request) -> dict[str, object]:
    """Return the appointments booked on a day, earliest first."""
    store = _store(request)
    return {
        "day": day.isoformat(),
        "appointments": [
            _serialize_appointment(store, appointment)
            for appointment in store.appointments_on(day)
        ],
    }


@router.post("/appointments", status_code=status.HTTP_201_CREATED)
async def create_appointment(
    payload: AppointmentCreate, request: Request
) -> dict[str, object]:
    """Book an appointment for an existing client."""
    store = _store(request)
    if store.get_client(payload.client_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    appointment = Appointment(
        client_id=payload.client_id,
        date=combine_day_and_time(payload.day, payload.start_time),
        duration=payload.duration,
        notes=payload.notes,
    )
    store.add_appointment(appointment)
    return _serialize_appointment(store, appointment)


@router.put("/appointments/{appointment_id}")
async def update_appointment(
    appointment_id: UUID, payload: AppointmentUpdate, request: Request
) -> dict[str, object]:
    """Move or edit an appointment."""
    store = _store(request)
    current = store.get_appointment(appointment_id)
    if current is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    day = payload.day or current.date.date()
    time_of_day = payload.start_time or current.date.timetz()
    changes = payload.model_dump(exclude_none=True, include={"duration", "notes"})
    updated = replace(
        current, date=combine_day_and_time(day, time_of_day), **changes
    )
    if not store.update_appointment(updated):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return _serialize_appointment(store, updated)


@router.get("/workouts")
async def workout_history(request: Request) -> dict[str, object]:
    """Return every recorded workout, newest first."""
    store = _store(request)
    return {
        "workouts": [
            {
                **serialize_workout(session),
                "client_name": store.resolve_client(session.client_id).display_name,
            }
            for session in store.workout_history()
        ]
    }


def _serialize_appointment(
    store: TrainerStore, appointment: Appointment
) -> dict[str, object]:
    client_ref = store.resolve_client(appointment.client_id)
    return {
        "id": str(appointment.id),
        "client_id": str(appointment.client_id),
        "client_name": client_ref.display_name,
        "client_missing": client_ref.is_dangling,
        "date": appointment.date.isoformat(),
        "duration_minutes": int(appointment.duration // 60),
        "notes": appointment.notes,
        "is_confirmed": appointment.is_confirmed,
    }
