import logging

from pymongo import AsyncMongoClient

from empgen.core.config import Settings, settings as default_settings

logger = logging.getLogger("empgen.db")


def create_client(settings: Settings = default_settings) -> AsyncMongoClient:
    """
    Build the MongoDB client. The client connects in the background, so
    creating it never blocks; use ``ping`` to verify reachability.
    """
    return AsyncMongoClient(
        settings.MONGO_URL,
        serverSelectionTimeoutMS=settings.MONGO_SERVER_SELECTION_TIMEOUT_MS,
    )


async def ping(client: AsyncMongoClient) -> None:
    await client.admin.command("ping")


async def check_db_connection(client: AsyncMongoClient | None) -> bool:
    """
    Verify database connectivity. Used by health checks.
    Returns True if the server answers a ping, False otherwise.
    """
    if client is None:
        return False
    try:
        await ping(client)
        return True
    except Exception as e:
        logger.debug(f"MongoDB ping failed: {e}")
        return False
