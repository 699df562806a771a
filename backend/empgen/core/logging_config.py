"""
Logging for the employee generator.

Production writes one JSON object per line; development writes a compact
colored line per record. Every handled HTTP request is logged once by
``RequestLoggingMiddleware`` with its request id, status and duration.
"""

import json
import logging
import sys
import time
import uuid
from datetime import datetime, timezone

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from empgen.core.config import Settings

# Attributes RequestLoggingMiddleware attaches to its records
REQUEST_FIELDS = ("request_id", "method", "path", "status", "duration_ms")

# Requests not worth a log line
QUIET_PATHS = ("/health", "/metrics", "/static")

NOISY_LOGGERS = ("uvicorn.access", "pymongo", "httpx")


class JSONFormatter(logging.Formatter):
    """One JSON object per record, tagged with the service and environment."""

    def __init__(self, service: str, environment: str):
        super().__init__()
        self.service = service
        self.environment = environment

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service,
            "environment": self.environment,
        }

        request = {
            field: getattr(record, field)
            for field in REQUEST_FIELDS
            if hasattr(record, field)
        }
        if request:
            entry["request"] = request

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str, ensure_ascii=False)


class ConsoleFormatter(logging.Formatter):
    """Single-line development output with the level name colored."""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(self):
        super().__init__("%(asctime)s | %(levelname)s | %(name)s | %(message)s", "%H:%M:%S")

    def formatMessage(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno, "")
        line = super().formatMessage(record)
        if not color:
            return line
        return line.replace(record.levelname, f"{color}{record.levelname:<8}{self.RESET}", 1)


def resolve_log_level(settings: Settings) -> str:
    return (settings.LOG_LEVEL or ("DEBUG" if settings.DEBUG else "INFO")).upper()


def use_json_logs(settings: Settings) -> bool:
    if settings.JSON_LOGS is not None:
        return settings.JSON_LOGS
    return settings.ENVIRONMENT.lower() == "production"


def setup_logging(settings: Settings) -> None:
    """Install a single stdout handler on the root logger for these settings."""
    level = resolve_log_level(settings)
    json_logs = use_json_logs(settings)

    handler = logging.StreamHandler(sys.stdout)
    if json_logs:
        handler.setFormatter(JSONFormatter(settings.PROJECT_NAME, settings.ENVIRONMENT))
    else:
        handler.setFormatter(ConsoleFormatter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger("empgen.logging").info(
        f"Logging configured: level={level}, format={'json' if json_logs else 'console'}"
    )


def generate_request_id() -> str:
    return uuid.uuid4().hex[:8]


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Tags each response with an ``x-request-id`` header and logs the request.
    Failed requests (status >= 400 or an exception) are logged at WARNING.
    """

    logger = logging.getLogger("empgen.http")

    async def dispatch(self, request: Request, call_next):
        request_id = generate_request_id()
        request.state.request_id = request_id
        started = time.perf_counter()

        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers["x-request-id"] = request_id
            return response
        finally:
            self._log(request, request_id, status_code, (time.perf_counter() - started) * 1000)

    def _log(self, request: Request, request_id: str, status_code: int, duration_ms: float) -> None:
        path = request.url.path
        if path.startswith(QUIET_PATHS):
            return
        self.logger.log(
            logging.WARNING if status_code >= 400 else logging.INFO,
            f"{request.method} {path} {status_code} {duration_ms:.1f}ms",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": path,
                "status": status_code,
                "duration_ms": round(duration_ms, 1),
            },
        )
