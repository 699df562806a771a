"""
Shared test fixtures and configuration for the employee generator tests.
"""
import os
from typing import List, Optional, Sequence, Set
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

# Set test environment before importing app modules
os.environ["ENVIRONMENT"] = "development"
os.environ["DEBUG"] = "true"

from empgen.core.config import Settings
from empgen.core.errors import PersistenceError, StoreConnectionError
from empgen.models.employee import Employee


class InMemoryEmployeeStore:
    """
    Test double with the EmployeeStore interface, backed by a list.

    ``fail_on`` names operations that raise PersistenceError without touching
    the records; ``unreachable`` makes ``connect`` fail.
    """

    def __init__(self, unreachable: bool = False):
        self.records: List[Employee] = []
        self.fail_on: Set[str] = set()
        self.unreachable = unreachable
        self.closed = False
        self._client: Optional[MagicMock] = None

    @property
    def client(self):
        return self._client

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    async def connect(self) -> None:
        if self.unreachable:
            raise StoreConnectionError("Could not connect to MongoDB at mongodb://unreachable:27017/company")
        client = MagicMock()
        client.admin.command = AsyncMock(return_value={"ok": 1.0})
        self._client = client

    async def close(self) -> None:
        self.closed = True
        self._client = None

    def _check(self, operation: str) -> None:
        if operation in self.fail_on:
            raise PersistenceError(operation, RuntimeError("injected storage fault"))

    async def insert_one(self, employee: Employee) -> Employee:
        self._check("insert_one")
        stored = employee.model_copy(update={"id": str(ObjectId())})
        self.records.append(stored)
        return stored

    async def insert_many(self, employees: Sequence[Employee]) -> List[Employee]:
        self._check("insert_many")
        stored = [employee.model_copy(update={"id": str(ObjectId())}) for employee in employees]
        self.records.extend(stored)
        return stored

    async def delete_all(self) -> int:
        self._check("delete_many")
        deleted = len(self.records)
        self.records.clear()
        return deleted

    async def count(self) -> int:
        return len(self.records)


@pytest.fixture
def test_settings():
    """Settings isolated from any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def memory_store():
    return InMemoryEmployeeStore()


@pytest.fixture
def unreachable_store():
    return InMemoryEmployeeStore(unreachable=True)


@pytest.fixture
def test_app(test_settings, memory_store):
    from empgen.main import create_app

    return create_app(settings=test_settings, store=memory_store)


@pytest.fixture
def client(test_app):
    """TestClient with the lifespan run, so the service is ready."""
    with TestClient(test_app) as test_client:
        yield test_client


@pytest.fixture
def mock_mongo_client():
    """PyMongo async client mock whose database/collection lookups return the same collection mock."""
    client = MagicMock()
    client.close = AsyncMock()
    client.admin.command = AsyncMock(return_value={"ok": 1.0})
    database = MagicMock()
    collection = MagicMock()
    client.__getitem__.return_value = database
    database.__getitem__.return_value = collection
    collection.insert_one = AsyncMock()
    collection.insert_many = AsyncMock()
    collection.delete_many = AsyncMock()
    collection.count_documents = AsyncMock()
    return client


@pytest.fixture
def mock_request():
    """Create a mock FastAPI request object."""
    request = MagicMock()
    request.url = MagicMock()
    request.url.path = "/generate"
    request.method = "GET"
    request.app.state.settings = Settings(_env_file=None)
    return request
