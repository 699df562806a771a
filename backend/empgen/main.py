import logging
import traceback
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from prometheus_client import CollectorRegistry
from prometheus_fastapi_instrumentator import Instrumentator
from pydantic import BaseModel
from starlette.middleware.base import BaseHTTPMiddleware

from empgen.api.v1 import api_router
from empgen.api.v1.pages import STATIC_DIR
from empgen.core.config import Settings, settings as default_settings
from empgen.core.errors import PersistenceError
from empgen.core.logging_config import setup_logging, RequestLoggingMiddleware
from empgen.core.lifecycle import ServiceState, lifespan
from empgen.core.version import get_full_version
from empgen.db.session import check_db_connection
from empgen.db.store import EmployeeStore

logger = logging.getLogger("empgen")

INTERNAL_ERROR_MESSAGE = "Internal server error"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Middleware to add security headers to all responses.
    """
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        # The landing page loads its script from /static and calls the API on the same origin
        if "text/html" in response.headers.get("content-type", ""):
            response.headers["Content-Security-Policy"] = (
                "default-src 'self'; "
                "script-src 'self'; "
                "style-src 'self' 'unsafe-inline'; "
                "connect-src 'self'"
            )

        return response


class ErrorResponse(BaseModel):
    """Standardized error response format."""
    error: str
    detail: str | None = None
    timestamp: str
    path: str | None = None


class HealthResponse(BaseModel):
    """Health check response format."""
    status: str
    service: str
    version: str
    environment: str
    state: ServiceState
    checks: dict[str, bool]


async def persistence_exception_handler(request: Request, exc: PersistenceError) -> PlainTextResponse:
    """
    Storage faults surface to the caller as a generic 500; the cause is only logged.
    """
    logger.error(f"Error handling {request.method} {request.url.path}: {exc}")
    return PlainTextResponse(
        INTERNAL_ERROR_MESSAGE,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Catch-all handler for unexpected exceptions.
    In production, internal details are hidden behind a reference ID.
    """
    settings: Settings = getattr(request.app.state, "settings", default_settings)
    error_id = datetime.utcnow().strftime("%Y%m%d%H%M%S%f")

    logger.error(
        f"Unhandled exception [{error_id}]: {exc}\n"
        f"Path: {request.url.path}\n"
        f"Method: {request.method}\n"
        f"Traceback: {traceback.format_exc()}"
    )

    if settings.ENVIRONMENT.lower() == "production":
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(
                error=INTERNAL_ERROR_MESSAGE,
                detail=f"An unexpected error occurred. Reference ID: {error_id}",
                timestamp=datetime.utcnow().isoformat(),
                path=request.url.path,
            ).model_dump(),
        )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(
            error=exc.__class__.__name__,
            detail=str(exc),
            timestamp=datetime.utcnow().isoformat(),
            path=request.url.path,
        ).model_dump(),
    )


async def health_check(request: Request):
    """
    Health check endpoint. Returns 503 until the store has connected or
    while MongoDB does not answer a ping.
    """
    app_state = request.app.state
    settings: Settings = app_state.settings
    service_state = getattr(app_state, "service_state", ServiceState.STARTING)
    store: EmployeeStore = app_state.store

    checks = {
        "ready": service_state is ServiceState.READY,
        "database": await check_db_connection(store.client),
    }
    healthy = all(checks.values())

    response = HealthResponse(
        status="healthy" if healthy else "unhealthy",
        service="empgen",
        version=get_full_version(),
        environment=settings.ENVIRONMENT,
        state=service_state,
        checks=checks,
    )

    if not healthy:
        logger.warning(f"Health check failed: {checks}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=response.model_dump(mode="json"),
        )

    return response


def create_app(
    settings: Settings = default_settings,
    store: Optional[EmployeeStore] = None,
) -> FastAPI:
    """
    Build the application. The store is owned by the app: it is connected by
    the lifespan before routes answer and closed on shutdown. Logging is
    configured from the same settings.
    """
    setup_logging(settings)

    app = FastAPI(
        title=f"{settings.PROJECT_NAME} API",
        version=get_full_version(),
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.store = store if store is not None else EmployeeStore(settings)
    app.state.service_state = ServiceState.STARTING

    app.add_exception_handler(PersistenceError, persistence_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)

    app.add_api_route("/health", health_check, methods=["GET"], response_model=HealthResponse, tags=["health"])
    app.include_router(api_router)
    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

    if settings.ENABLE_METRICS:
        # Registry per app
        Instrumentator(
            should_group_status_codes=False,
            should_ignore_untemplated=True,
            excluded_handlers=["/health", "/metrics", "/static.*"],
            registry=CollectorRegistry(),
        ).instrument(app).expose(app, include_in_schema=False)

    return app


app = create_app()
