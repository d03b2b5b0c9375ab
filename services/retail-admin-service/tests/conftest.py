"""
Retail Admin Service Tests - Test Configuration.

Provides fixtures for a Functions API stubbed with ``httpx.MockTransport``,
an in-memory storage backend, and sample entities.
"""

import os

os.environ.setdefault("FUNCTIONS_BASE_URL", "http://functions.test/api")
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

import json
from typing import Any, Callable, Dict, List, Tuple

import httpx
import pytest

from app.domain.entities import Customer, Order, Product
from app.infrastructure.functions_client import FunctionsApiClient
from app.repositories.memory_backend import InMemoryStorageBackend
from app.services.resilient_client import ResilientClient

BASE_URL = "http://functions.test/api"

Handler = Callable[[httpx.Request], httpx.Response]


class RecordingHandler:
    """
    Stub Functions API.

    Routes are keyed by (method, path) relative to the API base URL and map
    to a response or to an exception to raise. Every request is recorded.
    """

    def __init__(self) -> None:
        self.routes: Dict[Tuple[str, str], Any] = {}
        self.requests: List[httpx.Request] = []
        self.default: Any = None

    def on(self, method: str, path: str, response: Any) -> "RecordingHandler":
        self.routes[(method, path)] = response
        return self

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path[len("/api"):]
        outcome = self.routes.get((request.method, path), self.default)
        if outcome is None:
            return httpx.Response(404)
        if isinstance(outcome, Exception):
            raise outcome
        if callable(outcome):
            return outcome(request)
        return outcome

    def body(self, index: int = -1) -> Any:
        return json.loads(self.requests[index].content)


def unreachable(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("[Errno 111] Connection refused", request=request)


@pytest.fixture
def api() -> RecordingHandler:
    return RecordingHandler()


@pytest.fixture
def storage() -> InMemoryStorageBackend:
    return InMemoryStorageBackend()


@pytest.fixture
def remote(api: RecordingHandler) -> FunctionsApiClient:
    return FunctionsApiClient(
        base_url=BASE_URL,
        timeout=5.0,
        connect_timeout=1.0,
        transport=httpx.MockTransport(api),
    )


@pytest.fixture
def client(remote: FunctionsApiClient, storage: InMemoryStorageBackend) -> ResilientClient:
    return ResilientClient(remote, storage)


@pytest.fixture
def offline_client(storage: InMemoryStorageBackend) -> ResilientClient:
    """Resilient client whose Functions API refuses every connection."""
    remote = FunctionsApiClient(
        base_url=BASE_URL,
        timeout=5.0,
        connect_timeout=1.0,
        transport=httpx.MockTransport(unreachable),
    )
    return ResilientClient(remote, storage)


@pytest.fixture
def sample_customer() -> Customer:
    return Customer(
        row_key="c1",
        first_name="Jo",
        last_name="Bee",
        email="j@x.com",
        shipping_address="1 Rd",
    )


@pytest.fixture
def sample_product() -> Product:
    return Product(
        row_key="p1",
        product_name="Kettle",
        description="1.7L stainless steel",
        price=24.5,
        stock_quantity=10,
        image_url="https://img.test/kettle.png",
    )


@pytest.fixture
def sample_order() -> Order:
    return Order(
        row_key="o1",
        customer_id="c1",
        product_id="p1",
        quantity=2,
        unit_price=24.5,
        total_price=49.0,
        status="Submitted",
    )
