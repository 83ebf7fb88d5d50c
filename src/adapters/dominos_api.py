"""Ordering provider: Domino's public ordering API.

Implements `core.interfaces.provider.OrderingProvider` over httpx:
- store locator: GET /power/store-locator
- validate/price/place: POST /power/{validate,price,place}-order
- tracking: GET <tracker>/tracker-presentation-service/v2/orders

Every call is a single attempt. HTTP errors, transport errors and responses
with `Status == -1` become `ProviderError` carrying the API's status codes.
"""

from __future__ import annotations

import logging
import re
from typing import Any

import httpx
from pydantic import ValidationError

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.errors import ProviderError
from core.domain.models import (
    NearbyStore,
    OrderAmounts,
    PaymentRequest,
    PlacementResult,
    ProviderOrder,
    TrackingStatus,
)

logger = logging.getLogger(__name__)

_NON_DIGITS = re.compile(r"\D")

# (prefix pattern, card type) checked in order.
_CARD_TYPES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"^4"), "VISA"),
    (re.compile(r"^(5[1-5]|2[2-7])"), "MASTERCARD"),
    (re.compile(r"^3[47]"), "AMEX"),
    (re.compile(r"^(6011|65|64[4-9])"), "DISCOVER"),
    (re.compile(r"^(36|38|30[0-5])"), "DINERS"),
    (re.compile(r"^35"), "JCB"),
)

_TRACKER_HEADERS = {
    "DPZ-Language": "en",
    "DPZ-Market": "UNITED_STATES",
    "Accept": "application/json",
}


def card_type(number: str) -> str:
    digits = _NON_DIGITS.sub("", number)
    for pattern, name in _CARD_TYPES:
        if pattern.match(digits):
            return name
    return ""


def split_address_line(line: str) -> dict[str, str]:
    """Split a "street, city, region postal" line into the API address shape."""

    parts = [part.strip() for part in line.split(",")]
    street = parts[0] if parts else ""
    city = parts[1] if len(parts) > 1 else ""
    tail = " ".join(parts[2:]).split()
    region = tail[0] if tail else ""
    postal_code = " ".join(tail[1:])
    return {
        "Street": street,
        "City": city,
        "Region": region,
        "PostalCode": postal_code,
        "Type": "House",
    }


def _payment_payload(payment: PaymentRequest) -> dict[str, Any]:
    return {
        "Type": "CreditCard",
        "Amount": round(payment.amount, 2),
        "Number": _NON_DIGITS.sub("", payment.number),
        "CardType": card_type(payment.number),
        # MM/YY → MMYY
        "Expiration": _NON_DIGITS.sub("", payment.expiration),
        "SecurityCode": payment.security_code,
        "PostalCode": payment.postal_code,
        "TipAmount": round(payment.tip_amount, 2),
    }


def _status_codes(data: dict[str, Any]) -> list[str]:
    codes: list[str] = []
    order = data.get("Order") if isinstance(data.get("Order"), dict) else {}
    for source in (data.get("StatusItems"), order.get("StatusItems")):
        if not isinstance(source, list):
            continue
        for item in source:
            if not isinstance(item, dict):
                continue
            code = item.get("Code") or item.get("PulseCode")
            message = item.get("Message")
            text = f"{code}: {message}" if code and message else (code or message)
            if text and str(text) not in codes:
                codes.append(str(text))
    return codes


class DominosApiProvider:
    """HTTP adapter for store lookup, ordering and tracking."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    async def _request(
        self,
        method: str,
        path: str,
        *,
        base_url: str | None = None,
        headers: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> Any:
        logger.debug("%s %s", method, path)
        try:
            async with build_async_client(
                self._settings,
                base_url=base_url,
                extra_headers=headers,
                transport=self._transport,
            ) as client:
                response = await client.request(method, path, **kwargs)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            if status == 404 and "tracker" in path:
                raise ProviderError("No orders found for this phone number") from exc
            raise ProviderError(f"Ordering API returned HTTP {status} for {path}") from exc
        except httpx.HTTPError as exc:
            raise ProviderError(f"Could not reach the ordering API: {exc}") from exc
        except ValueError as exc:
            raise ProviderError(f"Ordering API sent an unreadable response for {path}") from exc

    def _order_payload(self, order: ProviderOrder) -> dict[str, Any]:
        customer = order.customer
        products = [
            {"Code": item.code, "Qty": item.qty, "ID": index, "isNew": True, "Options": item.options}
            for index, item in enumerate(order.items, start=1)
        ]
        return {
            "Order": {
                "Address": split_address_line(customer.address),
                "Coupons": [],
                "CustomerID": "",
                "Email": customer.email,
                "Extension": "",
                "FirstName": customer.first_name,
                "LastName": customer.last_name,
                "LanguageCode": self._settings.language_code,
                "OrderChannel": "OLO",
                "OrderID": order.order_id,
                "OrderMethod": "Web",
                "OrderTaker": None,
                "Payments": [_payment_payload(p) for p in order.payments],
                "Phone": _NON_DIGITS.sub("", customer.phone),
                "PhonePrefix": "",
                "Products": products,
                "ServiceMethod": order.service_method,
                "SourceOrganizationURI": "order.dominos.com",
                "StoreID": str(order.store_id),
                "Tags": {},
                "Version": "1.0",
                "NoCombine": True,
                "Partners": {},
                "OrderInfoCollection": [],
            }
        }

    async def _post_order(self, action: str, order: ProviderOrder) -> dict[str, Any]:
        logger.debug("%s order: store=%s items=%d", action, order.store_id, len(order.items))
        data = await self._request("POST", f"/power/{action}-order", json=self._order_payload(order))
        if not isinstance(data, dict):
            raise ProviderError(f"Unexpected {action}-order response")
        if data.get("Status") == -1:
            codes = _status_codes(data) or ["unknown error"]
            message = f"{action.capitalize()} rejected: {', '.join(codes)}"
            if any("card" in code.lower() or "payment" in code.lower() for code in codes):
                message += " (payment was declined)"
            raise ProviderError(message)
        result = data.get("Order")
        return result if isinstance(result, dict) else {}

    async def find_nearby_stores(self, address: str) -> list[NearbyStore]:
        street, _, rest = address.partition(",")
        data = await self._request(
            "GET",
            "/power/store-locator",
            params={"s": street.strip(), "c": rest.strip(), "type": "Delivery"},
        )
        if not isinstance(data, dict) or data.get("Status") == -1:
            codes = _status_codes(data) if isinstance(data, dict) else []
            raise ProviderError(f"Store locator rejected the address: {', '.join(codes) or address}")
        try:
            return [NearbyStore.model_validate(store) for store in data.get("Stores") or []]
        except ValidationError as exc:
            raise ProviderError(f"Unexpected store locator response: {exc.error_count()} invalid fields") from exc

    async def validate(self, order: ProviderOrder) -> None:
        result = await self._post_order("validate", order)
        order_id = result.get("OrderID")
        if order_id:
            order.order_id = str(order_id)

    async def price(self, order: ProviderOrder) -> OrderAmounts:
        result = await self._post_order("price", order)
        amounts = result.get("Amounts") or result.get("AmountsBreakdown") or {}
        if "Customer" not in amounts:
            raise ProviderError("Price response did not include a customer total")
        wait = result.get("EstimatedWaitMinutes")
        if wait:
            order.estimated_wait_minutes = str(wait)
        return OrderAmounts(customer=float(amounts["Customer"]), raw=amounts)

    async def place(self, order: ProviderOrder) -> PlacementResult:
        if not order.payments:
            raise ProviderError("Cannot place an order without a payment")
        result = await self._post_order("place", order)
        wait = result.get("EstimatedWaitMinutes") or order.estimated_wait_minutes
        return PlacementResult(
            order_id=str(result.get("OrderID") or order.order_id) or None,
            estimated_wait_minutes=str(wait) if wait else None,
            raw=result,
        )

    async def lookup_by_phone(self, phone: str) -> list[TrackingStatus]:
        data = await self._request(
            "GET",
            "/tracker-presentation-service/v2/orders",
            base_url=self._settings.tracker_base_url,
            headers=_TRACKER_HEADERS,
            params={"phonenumber": _NON_DIGITS.sub("", phone)},
        )
        if isinstance(data, dict):
            data = data.get("orders") or data.get("Orders") or []
        if not isinstance(data, list):
            raise ProviderError("Unexpected tracking response")
        try:
            return [TrackingStatus.model_validate(item) for item in data if isinstance(item, dict)]
        except ValidationError as exc:
            raise ProviderError(f"Unexpected tracking response: {exc.error_count()} invalid fields") from exc
