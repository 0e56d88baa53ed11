"""Errors raised by the trainer store."""

from uuid import UUID


class TrainerStoreError(Exception):
    """Base error for store operations."""


class PersistenceError(TrainerStoreError):
    """Raised when a collection snapshot could not be written."""


class InsufficientSessionsError(TrainerStoreError):
    """Raised when a workout is recorded for a client with no sessions left."""

    def __init__(self, client_id: UUID, sessions_remaining: int) -> None:
        super().__init__(
            f"Client {client_id} has {sessions_remaining} sessions remaining"
        )
        self.client_id = client_id
        self.sessions_remaining = sessions_remaining
