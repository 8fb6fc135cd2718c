import logging
import os
from dataclasses import dataclass
from typing import Optional

from product_ingest.exceptions import StartupError

DEFAULT_DATABASE_NAME = "ProductCatalog"
DEFAULT_PRODUCTS_TABLE_NAME = "Products"


@dataclass(frozen=True)
class Settings:
    """Table store settings read from the Functions app settings."""

    connection_string: Optional[str]
    endpoint: Optional[str]
    database_name: str = DEFAULT_DATABASE_NAME
    products_table_name: str = DEFAULT_PRODUCTS_TABLE_NAME


def load_settings() -> Settings:
    """
    Build settings from the process environment.

    A connection string wins over an endpoint; with only an endpoint the
    client authenticates through DefaultAzureCredential.

    Raises:
        StartupError: If neither COSMOSDB_CONNECTION_STRING nor
            COSMOSDB_ENDPOINT is set
    """
    connection_string = os.environ.get("COSMOSDB_CONNECTION_STRING") or None
    endpoint = os.environ.get("COSMOSDB_ENDPOINT") or None
    if not connection_string and not endpoint:
        raise StartupError(
            "COSMOSDB_CONNECTION_STRING or COSMOSDB_ENDPOINT environment variable must be set"
        )

    return Settings(
        connection_string=connection_string,
        endpoint=endpoint,
        database_name=os.environ.get("COSMOSDB_DATABASE") or DEFAULT_DATABASE_NAME,
        products_table_name=(
            os.environ.get("PRODUCTS_TABLE_NAME") or DEFAULT_PRODUCTS_TABLE_NAME
        ),
    )


def get_log_level(default: int = logging.INFO) -> int:
    """Level for the package logger from LOG_LEVEL, e.g. DEBUG or WARNING."""
    name = (os.environ.get("LOG_LEVEL") or "").strip().upper()
    level = logging.getLevelName(name) if name else default
    return level if isinstance(level, int) else default
