from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from src.api.routes import register_routes
from src.core.config import get_settings
from src.core.logging import setup_logging
from src.infrastructure.db.session import dispose_engine
from starlette.responses import Response
from structlog.contextvars import bind_contextvars, clear_contextvars

logger = structlog.get_logger()

_LOCATION_PREFIXES = {"query", "body", "path", "header"}


def validation_details(exc: RequestValidationError) -> list[dict[str, str]]:
    """Flatten request validation errors into ``{"field", "message"}`` pairs."""
    details = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in _LOCATION_PREFIXES]
        details.append({"field": ".".join(location), "message": error.get("msg", "")})
    return details


def create_app() -> FastAPI:
    """Application factory for the public API."""
    settings = get_settings()
    setup_logging(settings.log_level, service=settings.app_name)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "service_startup",
            service=settings.app_name,
            environment=settings.environment,
            version=settings.version,
        )
        yield
        await dispose_engine()
        logger.info("service_shutdown", service=settings.app_name)

    app = FastAPI(title=settings.app_name, version=settings.version, lifespan=lifespan)

    cors_origins = [
        "http://localhost:3000",  # Astro/Next dev
        "http://localhost:4321",  # Astro default dev port
        "http://127.0.0.1:3000",
    ]

    # Allow all origins in local/development environment
    if settings.environment in ["local", "development"]:
        cors_origins = ["*"]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials="*" not in cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        details = validation_details(exc)
        logger.info("request_validation_failed", details=details)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=jsonable_encoder(
                {
                    "detail": {
                        "error": "validation_error",
                        "message": "Invalid request parameters",
                        "details": details,
                    }
                }
            ),
        )

    @app.middleware("http")
    async def correlation_id_middleware(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = request.headers.get("x-request-id", str(uuid4()))
        bind_contextvars(
            request_id=request_id,
            path=str(request.url.path),
            method=request.method,
        )
        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            clear_contextvars()

    return app


app = create_app()
