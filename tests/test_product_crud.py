"""Tests for inserting products into the table store."""

import pytest
from azure.cosmos.exceptions import CosmosHttpResponseError

from product_ingest.crud.product_crud import insert_entity
from product_ingest.exceptions import ProductAlreadyExistsError, StorageError
from product_ingest.models.product import ProductRecord


class TestInsertEntity:

    @pytest.mark.asyncio
    async def test_insert_returns_stored_record(self, fake_container, widget):
        stored = await insert_entity(fake_container, ProductRecord.model_validate(widget))

        assert stored.name == "Widget"
        assert stored.etag is not None
        assert stored.timestamp is not None
        assert ("Toys", "1") in fake_container.items

    @pytest.mark.asyncio
    async def test_duplicate_key_raises(self, fake_container, widget):
        record = ProductRecord.model_validate(widget)
        await insert_entity(fake_container, record)

        with pytest.raises(ProductAlreadyExistsError) as exc_info:
            await insert_entity(fake_container, record)

        assert isinstance(exc_info.value, StorageError)
        assert exc_info.value.original_exception.status_code == 409

    @pytest.mark.asyncio
    async def test_cosmos_error_becomes_storage_error(self, container_factory, widget):
        container = container_factory(
            fail_with=CosmosHttpResponseError(status_code=403, message="Forbidden")
        )

        with pytest.raises(StorageError) as exc_info:
            await insert_entity(container, ProductRecord.model_validate(widget))

        assert not isinstance(exc_info.value, ProductAlreadyExistsError)
        assert "403" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_unexpected_error_becomes_storage_error(self, container_factory, widget):
        container = container_factory(fail_with=TimeoutError("timed out"))

        with pytest.raises(StorageError) as exc_info:
            await insert_entity(container, ProductRecord.model_validate(widget))

        assert isinstance(exc_info.value.original_exception, TimeoutError)
        assert len(container.create_calls) == 1
