from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import PlainTextResponse
from azure.cosmos.aio import ContainerProxy

from product_ingest.models.product import decode_product
from product_ingest.crud.product_crud import insert_entity
from product_ingest.db import get_container, ContainerType

from product_ingest.logging_config import tracer, get_child_logger

logger = get_child_logger("routes.product")

router = APIRouter(prefix="/products", tags=["products"])

INVALID_PRODUCT_MESSAGE = "Invalid product data."


async def get_products_container() -> ContainerProxy:
    return await get_container(ContainerType.PRODUCTS)


@router.post("", response_class=PlainTextResponse)
async def handle_create_product(
    request: Request,
    container: ContainerProxy = Depends(get_products_container),
) -> PlainTextResponse:
    """
    Store one product posted as JSON.

    Storage failures are left to the application's exception handlers.
    """
    with tracer.start_as_current_span("handle_create_product") as span:
        logger.info("Processing a request for a product")

        body = await request.body()
        try:
            product = decode_product(body.decode("utf-8-sig"))
        except UnicodeDecodeError:
            product = None

        if product is None:
            span.set_attribute("product.valid", False)
            return PlainTextResponse(
                INVALID_PRODUCT_MESSAGE, status_code=status.HTTP_400_BAD_REQUEST
            )

        span.set_attribute("product.valid", True)
        stored = await insert_entity(container=container, record=product)
        span.set_attribute("product.etag", stored.etag or "")

        return PlainTextResponse(
            f"Product {stored.name} added successfully.",
            status_code=status.HTTP_200_OK,
        )
