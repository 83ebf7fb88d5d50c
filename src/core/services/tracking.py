"""Order tracking by phone number."""

from __future__ import annotations

import logging

from core.domain.errors import MissingPhoneError, ProviderError
from core.domain.models import TrackingStatus
from core.interfaces.config_store import ConfigStore
from core.interfaces.provider import OrderingProvider

logger = logging.getLogger(__name__)

TRACK_HINT = "Try: dominos track [phone-number]"


def resolve_phone(explicit: str | None, store: ConfigStore) -> str:
    """Explicit argument first, then the configured customer phone."""

    if explicit and explicit.strip():
        return explicit.strip()
    doc = store.load() or {}
    customer = doc.get("customer")
    phone = customer.get("phone") if isinstance(customer, dict) else None
    if not phone:
        raise MissingPhoneError()
    return str(phone)


async def lookup_active_order(provider: OrderingProvider, phone: str) -> TrackingStatus | None:
    """First active order for `phone`, or None when there is nothing to track.

    Provider failures that only say there are no orders count as "nothing to
    track"; anything else is raised as `ProviderError`.
    """

    try:
        results = await provider.lookup_by_phone(phone)
    except ProviderError as exc:
        if "No orders" in exc.message:
            logger.info("tracking: provider reported no orders")
            return None
        raise ProviderError(exc.message, hint=TRACK_HINT) from exc

    if not results:
        return None
    return results[0]
