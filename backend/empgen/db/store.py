"""
MongoDB-backed persistence for employee records.

The store owns a single PyMongo async client for the lifetime of the application.
Inserts and deletes translate driver faults into PersistenceError so the HTTP
layer can map them uniformly.

Bulk inserts use MongoDB's default ordered ``insert_many`` without a
transaction: if a document fails, the documents before it stay persisted and
the rest are skipped.
"""

import asyncio
import contextlib
import logging
from typing import Callable, List, Optional, Sequence

from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import PyMongoError

from empgen.core.config import Settings, settings as default_settings
from empgen.core.errors import PersistenceError, StoreConnectionError
from empgen.db.session import create_client, ping
from empgen.models.employee import Employee

logger = logging.getLogger("empgen.db.store")


class EmployeeStore:
    """Employee collection access bound to one MongoDB client."""

    def __init__(
        self,
        settings: Settings = default_settings,
        client_factory: Callable[[Settings], AsyncMongoClient] = create_client,
    ):
        self.settings = settings
        self._client_factory = client_factory
        self._client: Optional[AsyncMongoClient] = None
        self._collection: Optional[AsyncCollection] = None
        # Only set when writes must not interleave
        self._write_lock: Optional[asyncio.Lock] = asyncio.Lock() if settings.SERIALIZE_WRITES else None

    @property
    def client(self) -> Optional[AsyncMongoClient]:
        return self._client

    @property
    def is_connected(self) -> bool:
        return self._collection is not None

    @property
    def collection(self) -> AsyncCollection:
        if self._collection is None:
            raise RuntimeError("EmployeeStore is not connected")
        return self._collection

    async def connect(self) -> None:
        """
        Open the client and confirm the server answers.

        Raises:
            StoreConnectionError: the server could not be reached or the URL is invalid
        """
        target = f"{self.settings.MONGO_URL}/{self.settings.MONGO_DB}"
        logger.info(f"Connecting to MongoDB at {target}")
        try:
            client = self._client_factory(self.settings)
        except PyMongoError as e:
            raise StoreConnectionError(f"Invalid MongoDB target {target}: {e}") from e

        try:
            await ping(client)
        except PyMongoError as e:
            await client.close()
            raise StoreConnectionError(f"Could not connect to MongoDB at {target}: {e}") from e

        self._client = client
        self._collection = client[self.settings.MONGO_DB][self.settings.EMPLOYEE_COLLECTION]
        logger.info("✅ DB connected successfully")

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            logger.info("MongoDB client closed")
        self._client = None
        self._collection = None

    def _writing(self):
        return self._write_lock if self._write_lock is not None else contextlib.nullcontext()

    async def insert_one(self, employee: Employee) -> Employee:
        """Persist one record and return it with its assigned id."""
        async with self._writing():
            try:
                result = await self.collection.insert_one(employee.to_document())
            except PyMongoError as e:
                raise PersistenceError("insert_one", e) from e
        return employee.model_copy(update={"id": str(result.inserted_id)})

    async def insert_many(self, employees: Sequence[Employee]) -> List[Employee]:
        """Persist all records in a single ordered bulk insert."""
        if not employees:
            return []
        async with self._writing():
            try:
                result = await self.collection.insert_many(
                    [employee.to_document() for employee in employees]
                )
            except PyMongoError as e:
                raise PersistenceError("insert_many", e) from e
        return [
            employee.model_copy(update={"id": str(inserted_id)})
            for employee, inserted_id in zip(employees, result.inserted_ids)
        ]

    async def delete_all(self) -> int:
        """Remove every record in the collection and return how many were removed."""
        async with self._writing():
            try:
                result = await self.collection.delete_many({})
            except PyMongoError as e:
                raise PersistenceError("delete_many", e) from e
        return result.deleted_count

    async def count(self) -> int:
        try:
            return await self.collection.count_documents({})
        except PyMongoError as e:
            raise PersistenceError("count_documents", e) from e
