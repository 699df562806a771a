"""
Service lifecycle: the employee store is connected before routes answer and
closed when the application stops.
"""

import logging
from contextlib import asynccontextmanager
from enum import Enum

from empgen.core.errors import StoreConnectionError

logger = logging.getLogger("empgen.lifecycle")


class ServiceState(str, Enum):
    STARTING = "starting"
    READY = "ready"
    STOPPED = "stopped"


@asynccontextmanager
async def lifespan(app):
    """
    FastAPI lifespan: ``starting`` until the store connects, ``ready`` while
    serving, ``stopped`` once the store is closed.

    A connection failure propagates, so the server aborts startup and never
    binds its port. Each run starts from ``starting``, so an app may be
    served again after it stopped.
    """
    settings = app.state.settings
    store = app.state.store

    app.state.service_state = ServiceState.STARTING
    try:
        await store.connect()
    except StoreConnectionError as e:
        logger.critical(f"❌ Failed to connect to DB: {e}")
        raise

    app.state.service_state = ServiceState.READY
    logger.info(f"🚀 Server is running at http://{settings.HOST}:{settings.PORT}")
    try:
        yield
    finally:
        app.state.service_state = ServiceState.STOPPED
        await store.close()
        logger.info("Employee store closed, service stopped")
