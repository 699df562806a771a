import logging

from fastapi import HTTPException, Request, status

from empgen.core.config import Settings
from empgen.core.lifecycle import ServiceState
from empgen.db.store import EmployeeStore

logger = logging.getLogger("empgen.deps")


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> EmployeeStore:
    """
    Return the application's employee store.

    Routes only answer while the service is ready; before the store connects
    and after it is closed the service reports 503.
    """
    state = getattr(request.app.state, "service_state", ServiceState.STARTING)
    if state is not ServiceState.READY:
        logger.warning(f"Rejected {request.url.path}: service is {state.value}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Service is {state.value}",
        )
    return request.app.state.store
