"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from personal_trainer.api.clients import router as clients_router
from personal_trainer.api.schedule import router as schedule_router
from personal_trainer.app_logging import configure_logging
from personal_trainer.containers import AppContainer
from personal_trainer.errors import InsufficientSessionsError, PersistenceError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    app.include_router(clients_router)
    app.include_router(schedule_router)

    @app.exception_handler(InsufficientSessionsError)
    async def insufficient_sessions(
        request: Request, exc: InsufficientSessionsError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={
                "detail": "No sessions remaining",
                "sessions_remaining": exc.sessions_remaining,
            },
        )

    @app.exception_handler(PersistenceError)
    async def persistence_failed(
        request: Request, exc: PersistenceError
    ) -> JSONResponse:
        logger.error("Request %s failed to persist: %s", request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": "Changes could not be saved"},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
