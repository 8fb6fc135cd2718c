import asyncio
from typing import Dict, Optional
from azure.cosmos import PartitionKey
from azure.cosmos.aio import CosmosClient, ContainerProxy
from azure.identity.aio import DefaultAzureCredential

from enum import Enum

from product_ingest.config import load_settings
from product_ingest.exceptions import StartupError
from product_ingest.logging_config import get_child_logger

logger = get_child_logger("db")

# Every collection is partitioned on the record's PartitionKey field
PARTITION_KEY_PATH = "/PartitionKey"


class ContainerType(str, Enum):
    PRODUCTS = "products"


_client: Optional[CosmosClient] = None
_credential: Optional[DefaultAzureCredential] = None
_containers: Dict[ContainerType, ContainerProxy] = {}
_lock = asyncio.Lock()


def _create_client(settings) -> CosmosClient:
    global _credential
    if settings.connection_string:
        logger.info("Creating Cosmos DB client from connection string")
        return CosmosClient.from_connection_string(settings.connection_string)

    logger.info("Creating Cosmos DB client with DefaultAzureCredential")
    _credential = DefaultAzureCredential()
    return CosmosClient(settings.endpoint, _credential)


async def ensure_collection_exists(
    client: CosmosClient, database_name: str, name: str
) -> ContainerProxy:
    """
    Create the database and collection if they are missing.

    Safe to call repeatedly: an existing collection and its items are left
    untouched.
    """
    database = await client.create_database_if_not_exists(id=database_name)
    container = await database.create_container_if_not_exists(
        id=name, partition_key=PartitionKey(path=PARTITION_KEY_PATH)
    )
    logger.info(
        "Collection ready", extra={"database": database_name, "collection": name}
    )
    return container


async def get_container(container_type: ContainerType) -> ContainerProxy:
    """
    Return the process-wide container handle, creating it on first use.

    Raises:
        StartupError: If configuration is missing or the store cannot be reached
    """
    global _client
    container = _containers.get(container_type)
    if container is not None:
        return container

    async with _lock:
        if container_type in _containers:
            return _containers[container_type]

        settings = load_settings()
        collections = {ContainerType.PRODUCTS: settings.products_table_name}

        try:
            if _client is None:
                _client = _create_client(settings)
            container = await ensure_collection_exists(
                _client, settings.database_name, collections[container_type]
            )
        except Exception as e:
            logger.error(
                "Unable to initialise table store",
                extra={"container": container_type.value, "error_type": type(e).__name__},
                exc_info=True,
            )
            raise StartupError(
                f"Unable to initialise collection '{collections[container_type]}': {e}"
            ) from e

        _containers[container_type] = container
        return container


async def close() -> None:
    """Release the shared client and credential."""
    global _client, _credential
    _containers.clear()
    if _client is not None:
        await _client.close()
        _client = None
    if _credential is not None:
        await _credential.close()
        _credential = None
