"""
Shared fixtures.

Provides an in-memory ordering provider and a scripted prompter so the setup
wizard, the order pipeline and the CLI run without network or terminal.
"""

from __future__ import annotations

import copy
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

import pytest

from adapters.config_store import JsonConfigStore
from core.domain.errors import ProviderError
from core.domain.models import (
    NearbyStore,
    OrderAmounts,
    PlacementResult,
    ProviderOrder,
    TrackingStatus,
)

VALID_CONFIG: dict[str, Any] = {
    "customer": {
        "firstName": "Test",
        "lastName": "User",
        "email": "test@example.com",
        "phone": "555-123-4567",
        "address": {
            "street": "123 Main St",
            "city": "Portland",
            "region": "OR",
            "postalCode": "97201",
        },
    },
    "payment": {
        "number": "4111111111111111",
        "expiration": "12/27",
        "securityCode": "123",
        "postalCode": "97201",
        "tipAmount": 5,
    },
    "store": {
        "storeID": "1234",
        "name": "Downtown Portland",
        "phone": "503-555-0100",
    },
    "presets": {
        "test": {
            "name": "Test Pizza",
            "items": [{"code": "PIZZA123", "qty": 1}],
        },
        "family": {
            "name": "Family Night",
            "items": [
                {"code": "14SCREEN", "qty": 2},
                {"code": "2LCOKE", "qty": 1},
            ],
        },
    },
}


class ScriptedPrompter:
    """Answers questions from a fixed script and records everything shown."""

    def __init__(self, answers: list[str] | None = None) -> None:
        self.answers = list(answers or [])
        self.questions: list[str] = []
        self.secret_questions: list[str] = []
        self.messages: list[tuple[str, str]] = []
        self.progress_labels: list[str] = []

    def ask(self, question: str, *, secret: bool = False) -> str:
        self.questions.append(question)
        if secret:
            self.secret_questions.append(question)
        if not self.answers:
            raise AssertionError(f"No scripted answer left for {question!r}")
        return self.answers.pop(0)

    def _record(self, level: str, message: str) -> None:
        self.messages.append((level, message))

    def info(self, message: str) -> None:
        self._record("info", message)

    def success(self, message: str) -> None:
        self._record("success", message)

    def warn(self, message: str) -> None:
        self._record("warn", message)

    def error(self, message: str) -> None:
        self._record("error", message)

    def hint(self, message: str) -> None:
        self._record("hint", message)

    @contextmanager
    def progress(self, message: str) -> Iterator[None]:
        self.progress_labels.append(message)
        yield

    def text(self, level: str | None = None) -> str:
        return "\n".join(msg for lvl, msg in self.messages if level is None or lvl == level)


class FakeProvider:
    """In-memory `OrderingProvider`; set `fail_on` to make a call raise."""

    def __init__(
        self,
        *,
        stores: list[NearbyStore] | None = None,
        total: float = 23.45,
        tracking: list[TrackingStatus] | None = None,
        fail_on: dict[str, str] | None = None,
    ) -> None:
        self.stores = stores if stores is not None else []
        self.total = total
        self.tracking = tracking if tracking is not None else []
        self.fail_on = fail_on or {}
        self.calls: list[str] = []
        self.placed: list[ProviderOrder] = []

    def _maybe_fail(self, name: str) -> None:
        self.calls.append(name)
        if name in self.fail_on:
            raise ProviderError(self.fail_on[name])

    async def find_nearby_stores(self, address: str) -> list[NearbyStore]:
        self._maybe_fail("find_nearby_stores")
        return self.stores

    async def validate(self, order: ProviderOrder) -> None:
        self._maybe_fail("validate")
        order.order_id = "ORDER-1"

    async def price(self, order: ProviderOrder) -> OrderAmounts:
        self._maybe_fail("price")
        return OrderAmounts(customer=self.total)

    async def place(self, order: ProviderOrder) -> PlacementResult:
        self._maybe_fail("place")
        self.placed.append(order)
        return PlacementResult(order_id=order.order_id, estimated_wait_minutes="25-35")

    async def lookup_by_phone(self, phone: str) -> list[TrackingStatus]:
        self._maybe_fail("lookup_by_phone")
        return self.tracking


def make_store(**overrides: Any) -> NearbyStore:
    data = {
        "StoreID": "7094",
        "IsOnlineCapable": True,
        "IsDeliveryStore": True,
        "MinDistance": 1.2,
        "AddressDescription": "100 Oak St\nPortland, OR 97201",
        "Phone": "503-555-0199",
    }
    data.update(overrides)
    return NearbyStore.model_validate(data)


@pytest.fixture
def valid_config() -> dict[str, Any]:
    return copy.deepcopy(VALID_CONFIG)


@pytest.fixture
def config_store(tmp_path: Path) -> JsonConfigStore:
    return JsonConfigStore(tmp_path / "dominos-cli" / "config.json")


@pytest.fixture
def saved_store(config_store: JsonConfigStore, valid_config: dict[str, Any]) -> JsonConfigStore:
    config_store.save(valid_config)
    return config_store


@pytest.fixture
def fake_provider() -> FakeProvider:
    return FakeProvider(stores=[make_store()])
