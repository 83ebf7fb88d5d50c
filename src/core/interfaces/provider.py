"""Ordering provider contract.

Why Protocol:
- Structural contract (duck typing) without rigid inheritance.
- Keeps the order pipeline and the setup wizard independent of any concrete
  ordering API, so tests can drive them with an in-memory fake.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from core.domain.models import (
    NearbyStore,
    OrderAmounts,
    PlacementResult,
    ProviderOrder,
    TrackingStatus,
)


@runtime_checkable
class OrderingProvider(Protocol):
    """Minimal capability set consumed by the core.

    Design rules:
    - Every call is asynchronous because it does network I/O.
    - Every call is attempted once; failures raise `ProviderError` with the
      provider's message.
    """

    async def find_nearby_stores(self, address: str) -> Sequence[NearbyStore]:
        """Stores near a free-text delivery address, in provider order."""

        ...

    async def validate(self, order: ProviderOrder) -> None:
        """Validates items/address with the provider. May set `order.order_id`."""

        ...

    async def price(self, order: ProviderOrder) -> OrderAmounts:
        """Prices the order and returns the customer-facing amounts."""

        ...

    async def place(self, order: ProviderOrder) -> PlacementResult:
        """Submits the order with the payments already attached."""

        ...

    async def lookup_by_phone(self, phone: str) -> Sequence[TrackingStatus]:
        """Active orders for a phone number (may be empty)."""

        ...
