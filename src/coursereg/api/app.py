"""FastAPI application setup."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from coursereg.api.dependencies import (
    close_service,
    close_store,
    init_event_manager,
    init_service,
    init_store,
)
from coursereg.api.models import APIResponse, rejection_content
from coursereg.api.routes import courses, events, learners, registrations
from coursereg.config import Settings
from coursereg.registration import (
    CreditCapExceededError,
    DuplicateRegistrationError,
    MissingLearnerIdError,
    RegistrationError,
    RegistrationService,
    UnknownCourseError,
)
from coursereg.store import (
    OfferingExistsError,
    OfferingNotFoundError,
    StoreError,
    StoreUnavailableError,
)

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = logging.getLogger(__name__)

_REJECTION_STATUS: dict[type[RegistrationError], int] = {
    MissingLearnerIdError: status.HTTP_400_BAD_REQUEST,
    UnknownCourseError: status.HTTP_404_NOT_FOUND,
    DuplicateRegistrationError: status.HTTP_409_CONFLICT,
    CreditCapExceededError: status.HTTP_409_CONFLICT,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings: Settings = app.state.settings

    # Startup
    store = init_store(settings)
    event_manager = init_event_manager()
    service = RegistrationService(
        catalog=store,
        registrations=store,
        credit_cap=settings.credit_cap,
        on_accepted=event_manager.emit_registration_accepted,
    )
    init_service(service)
    logger.info("Registration API started (credit_cap=%d)", settings.credit_cap)

    yield
    # Shutdown
    close_service()
    close_store()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="coursereg API",
        description="REST API for course registration with a credit-hour cap",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Store config for lifespan manager
    app.state.settings = settings if settings is not None else Settings.from_env()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    @app.exception_handler(RegistrationError)
    async def registration_rejected_handler(
        _request: Request, exc: RegistrationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=_REJECTION_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST),
            content=rejection_content(exc.error_kind.value, str(exc), exc.current_total),
        )

    @app.exception_handler(OfferingNotFoundError)
    async def offering_not_found_handler(
        _request: Request, _exc: OfferingNotFoundError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=APIResponse[None](data=None, error="Course not found").model_dump(),
        )

    @app.exception_handler(OfferingExistsError)
    async def offering_exists_handler(_request: Request, _exc: OfferingExistsError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content=APIResponse[None](
                data=None, error="Course with this code already exists"
            ).model_dump(),
        )

    @app.exception_handler(StoreUnavailableError)
    async def store_unavailable_handler(
        _request: Request, _exc: StoreUnavailableError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=APIResponse[None](data=None, error="Store unavailable").model_dump(),
        )

    @app.exception_handler(StoreError)
    async def store_error_handler(_request: Request, _exc: StoreError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=APIResponse[None](data=None, error="Internal server error").model_dump(),
        )

    # Include routers
    app.include_router(courses.router, prefix="/api/v1")
    app.include_router(learners.router, prefix="/api/v1")
    app.include_router(registrations.router, prefix="/api/v1")
    app.include_router(events.router, prefix="/api/v1")

    return app
