"""Shared fixtures: an in-memory stand-in for the products container."""

import pytest
from azure.cosmos.exceptions import CosmosResourceExistsError
from fastapi.testclient import TestClient

from function_app import app
from product_ingest.routes.product_route import get_products_container


class FakeContainer:
    """Minimal async container with table-store insert semantics."""

    def __init__(self, fail_with=None):
        self.items = {}
        self.create_calls = []
        self.fail_with = fail_with

    async def create_item(self, body):
        self.create_calls.append(body)
        if self.fail_with is not None:
            raise self.fail_with

        key = (body["PartitionKey"], body["id"])
        if key in self.items:
            raise CosmosResourceExistsError(
                status_code=409,
                message="Entity with the specified id already exists in the system.",
            )
        stored = dict(body, _ts=1700000000, _etag='"0000d01a-0000-0000-0000-000000000000"')
        self.items[key] = stored
        return dict(stored)


@pytest.fixture
def container_factory():
    return FakeContainer


@pytest.fixture
def fake_container():
    return FakeContainer()


@pytest.fixture
def client(fake_container):
    """TestClient wired to the fake container."""

    async def override():
        return fake_container

    app.dependency_overrides[get_products_container] = override
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def widget():
    return {
        "PartitionKey": "Toys",
        "RowKey": "1",
        "Name": "Widget",
        "ProductDescription": "A small widget",
        "Price": 9.99,
        "Category": "Toys",
        "ImageUrlPath": "https://example.blob.core.windows.net/images/widget.png",
    }
