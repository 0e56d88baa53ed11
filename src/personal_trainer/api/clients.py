"""Client and workout endpoints."""

from __future__ import annotations

from dataclasses import replace
from datetime import UTC, datetime
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, HTTPException, Request, Response, status

from personal_trainer.api.schemas import ClientCreate, ClientUpdate, WorkoutCreate
from personal_trainer.domain.models import Client, WorkoutSession, new_client

if TYPE_CHECKING:
    from personal_trainer.services.store import TrainerStore

router = APIRouter(prefix="/clients", tags=["clients"])


def _store(request: Request) -> TrainerStore:
    return request.app.state.container.store


def _require_client(store: TrainerStore, client_id: UUID) -> Client:
    client = store.get_client(client_id)
    if client is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return client


@router.get("")
async def list_clients(request: Request) -> dict[str, object]:
    """Return active clients."""
    clients = _store(request).active_clients()
    return {"clients": [serialize_client(client) for client in clients]}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_client(payload: ClientCreate, request: Request) -> dict[str, object]:
    """Create a client whose balance is prepaid by the deposit."""
    try:
        client = new_client(
            name=payload.name,
            phone=payload.phone,
            email=payload.email,
            total_deposit=payload.total_deposit,
            price_per_session=payload.price_per_session,
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        ) from exc
    _store(request).add_client(client)
    return serialize_client(client)


@router.get("/{client_id}")
async def client_detail(client_id: UUID, request: Request) -> dict[str, object]:
    """Return a client with their most recent workouts."""
    store = _store(request)
    client = _require_client(store, client_id)
    return {
        **serialize_client(client),
        "recent_workouts": [
            serialize_workout(session)
            for session in store.recent_workout_sessions(client_id)
        ],
    }


@router.put("/{client_id}")
async def update_client(
    client_id: UUID, payload: ClientUpdate, request: Request
) -> dict[str, object]:
    """Edit a client's contact details or active flag."""
    store = _store(request)
    client = _require_client(store, client_id)
    changes = payload.model_dump(exclude_none=True)
    updated = replace(client, **changes)
    if not store.update_client(updated):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return serialize_client(updated)


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_client(client_id: UUID, request: Request) -> Response:
    """Delete a client and everything recorded against them."""
    store = _store(request)
    client = store.get_client(client_id)
    if client is not None:
        store.delete_client(client)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{client_id}/workouts", status_code=status.HTTP_201_CREATED)
async def record_workout(
    client_id: UUID, payload: WorkoutCreate, request: Request
) -> dict[str, object]:
    """Record a signed-off workout against the client's balance."""
    store = _store(request)
    _require_client(store, client_id)
    session = WorkoutSession(
        client_id=client_id,
        date=datetime.now(tz=UTC),
        exercises=payload.exercises,
        notes=payload.notes,
        client_signature=payload.client_signature,
        duration=payload.duration,
    )
    recorded = store.add_workout_session(session)
    return {
        "workout": serialize_workout(recorded.session),
        "client": serialize_client(recorded.client) if recorded.client else None,
    }


def serialize_client(client: Client) -> dict[str, object]:
    """Render a client for API responses."""
    return {
        "id": str(client.id),
        "name": client.name,
        "phone": client.phone,
        "email": client.email,
        "sessions_remaining": client.sessions_remaining,
        "sessions_used": client.sessions_used,
        "total_deposit": client.total_deposit,
        "price_per_session": client.price_per_session,
        "date_created": client.date_created.isoformat(),
        "is_active": client.is_active,
    }


def serialize_workout(session: WorkoutSession) -> dict[str, object]:
    """Render a workout session for API responses."""
    return {
        "id": str(session.id),
        "client_id": str(session.client_id),
        "date": session.date.isoformat(),
        "exercises": session.exercises,
        "notes": session.notes,
        "client_signature": session.client_signature,
        "is_completed": session.is_completed,
        "duration_minutes": int(session.duration // 60),
    }
