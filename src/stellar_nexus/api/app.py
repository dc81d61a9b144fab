"""FastAPI application wiring for Stellar Nexus."""

from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from stellar_nexus.api import routes
from stellar_nexus.api.runtime import ApiState, build_state
from stellar_nexus.config import get_settings
from stellar_nexus.domain.errors import (
    GameError,
    InsufficientResourceError,
    InvalidRequestError,
    NotFoundError,
    StateConflictError,
    TransientError,
)

logger = logging.getLogger(__name__)

ERROR_STATUS: tuple[tuple[type[GameError], int], ...] = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (InsufficientResourceError, status.HTTP_400_BAD_REQUEST),
    (StateConflictError, status.HTTP_409_CONFLICT),
    (InvalidRequestError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (TransientError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def status_for(error: GameError) -> int:
    for error_type, status_code in ERROR_STATUS:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


async def handle_game_error(request: Request, exc: GameError) -> JSONResponse:
    """Translate a rejected action into a JSON error without its internal details."""
    status_code = status_for(exc)
    level = logging.WARNING if exc.retryable else logging.INFO
    logger.log(level, "%s %s rejected: %s", request.method, request.url.path, exc.to_dict())
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "code": exc.code, "retryable": exc.retryable},
    )


def create_app(*, state_factory: Callable[[], ApiState] = build_state) -> FastAPI:
    """Instantiate the FastAPI application with routing and lifecycle hooks."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        state = state_factory()
        state.startup()
        app.state.api_state = state
        try:
            yield
        finally:
            await state.shutdown()

    app = FastAPI(title="Stellar Nexus API", version="0.1.0", lifespan=lifespan)
    settings = get_settings()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(GameError, handle_game_error)
    app.include_router(routes.router)
    return app


app = create_app()
