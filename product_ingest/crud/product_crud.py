from azure.cosmos.exceptions import CosmosHttpResponseError
from azure.cosmos.aio import ContainerProxy

from product_ingest.models.product import ProductRecord
from product_ingest.exceptions import ProductAlreadyExistsError, StorageError
from product_ingest.logging_config import get_child_logger, tracer

logger = get_child_logger("crud.product")


async def insert_entity(
    container: ContainerProxy, record: ProductRecord
) -> ProductRecord:
    """
    Insert a product into the products table.

    Args:
        container: Cosmos DB container client
        record: Product to insert, written as received

    Returns:
        The stored product, with the store's Timestamp and ETag

    Raises:
        ProductAlreadyExistsError: If the partition and row key are already taken
        StorageError: If the insert fails for any other reason
    """
    with tracer.start_as_current_span("insert_entity") as span:
        span.set_attribute("product.partition_key", record.partition_key)
        span.set_attribute("product.row_key", record.row_key)

        logger.info(
            "Inserting product",
            extra={
                "partition_key": record.partition_key,
                "row_key": record.row_key,
                "product_name": record.name,
            },
        )

        try:
            result = await container.create_item(body=record.to_entity())
        except CosmosHttpResponseError as e:
            span.set_attribute("error", True)
            span.set_attribute("error.type", "cosmos_http_error")
            span.set_attribute("error.status_code", e.status_code or 0)

            if e.status_code == 409:
                logger.warning(
                    "Product already exists",
                    extra={"partition_key": record.partition_key, "row_key": record.row_key},
                )
                raise ProductAlreadyExistsError(
                    f"Product with PartitionKey '{record.partition_key}' and "
                    f"RowKey '{record.row_key}' already exists",
                    original_exception=e,
                ) from e

            logger.error(
                "Cosmos DB error during product insert",
                extra={
                    "status_code": e.status_code,
                    "error_message": e.message,
                    "partition_key": record.partition_key,
                    "row_key": record.row_key,
                },
                exc_info=True,
            )
            raise StorageError(
                f"Cosmos DB error during product insert: Status Code {e.status_code}, Message: {e.message}",
                original_exception=e,
            ) from e
        except Exception as e:
            span.set_attribute("error", True)
            span.set_attribute("error.type", type(e).__name__)

            logger.error(
                "Unexpected error during product insert",
                extra={
                    "error_type": type(e).__name__,
                    "partition_key": record.partition_key,
                    "row_key": record.row_key,
                },
                exc_info=True,
            )
            raise StorageError(
                "An unexpected error occurred during database operation.",
                original_exception=e,
            ) from e

        logger.info(
            "Product inserted successfully",
            extra={"partition_key": record.partition_key, "row_key": record.row_key},
        )
        return ProductRecord.from_entity(result)
