"""Pydantic models for the HTTP surface."""

from datetime import date, time
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from personal_trainer.domain.models import (
    APPOINTMENT_DURATIONS,
    DEFAULT_DURATION,
    WORKOUT_DURATIONS,
)


class ClientCreate(BaseModel):
    """Add-client form."""

    name: str = Field(min_length=1)
    phone: str = ""
    email: str = ""
    total_deposit: float = Field(ge=0, allow_inf_nan=False)
    price_per_session: float = Field(gt=0, allow_inf_nan=False)


class ClientUpdate(BaseModel):
    """Editable client fields."""

    name: str | None = Field(default=None, min_length=1)
    phone: str | None = None
    email: str | None = None
    is_active: bool | None = None


class WorkoutCreate(BaseModel):
    """Record-workout form."""

    exercises: str = Field(min_length=1)
    notes: str = ""
    client_signature: str = Field(min_length=1)
    duration: float = DEFAULT_DURATION

    @field_validator("duration")
    @classmethod
    def _check_duration(cls, value: float) -> float:
        if value not in WORKOUT_DURATIONS:
            raise ValueError(f"duration must be one of {WORKOUT_DURATIONS}")
        return value


class AppointmentCreate(BaseModel):
    """New-appointment form."""

    client_id: UUID
    day: date
    start_time: time
    duration: float = DEFAULT_DURATION
    notes: str = ""

    @field_validator("duration")
    @classmethod
    def _check_duration(cls, value: float) -> float:
        if value not in APPOINTMENT_DURATIONS:
            raise ValueError(f"duration must be one of {APPOINTMENT_DURATIONS}")
        return value


class AppointmentUpdate(BaseModel):
    """Editable appointment fields."""

    day: date | None = None
    start_time: time | None = None
    duration: float | None = None
    notes: str | None = None

    @field_validator("duration")
    @classmethod
    def _check_duration(cls, value: float | None) -> float | None:
        if value is not None and value not in APPOINTMENT_DURATIONS:
            raise ValueError(f"duration must be one of {APPOINTMENT_DURATIONS}")
        return value
