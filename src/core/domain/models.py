"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation and self-documenting fields (Field) without coupling the
  core to any I/O library.
- The persisted config uses camelCase keys and the ordering API uses
  PascalCase ones. Aliases keep both at the boundary while Python code reads
  snake_case.

Note:
- These models describe *what* the data is, not *how* it is fetched or stored.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic.config import ConfigDict


def _as_text(value: Any) -> Any:
    # Hand-edited JSON often carries ids and codes as numbers.
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class _ConfigModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class Address(_ConfigModel):
    street: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    region: str = Field(..., min_length=1)
    postal_code: str = Field(..., min_length=1)

    @field_validator("postal_code", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> Any:
        return _as_text(value)


class CustomerInfo(_ConfigModel):
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    address: Address

    @field_validator("phone", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> Any:
        return _as_text(value)


class PaymentInfo(_ConfigModel):
    """Card details. `number` is stored in cleartext; never print it unmasked."""

    number: str = Field(..., min_length=1)
    expiration: str = Field(..., min_length=1, description="MM/YY")
    security_code: str = Field(..., min_length=1)
    postal_code: str = Field(..., min_length=1)
    tip_amount: float = Field(default=0.0, ge=0)

    @field_validator("number", "security_code", "postal_code", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> Any:
        return _as_text(value)


class StoreInfo(_ConfigModel):
    store_id: str = Field(..., min_length=1, alias="storeID", pattern=r"^\d+$")
    name: str = ""
    phone: str | None = None

    @field_validator("store_id", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> Any:
        return _as_text(value)


class PresetItem(_ConfigModel):
    code: str = Field(..., min_length=1, description="Provider menu code, e.g. '14SCREEN'.")
    qty: int = Field(default=1, ge=1)


class Preset(_ConfigModel):
    name: str = ""
    items: list[PresetItem] = Field(default_factory=list)


class AppConfig(_ConfigModel):
    """Typed view of a configuration document that already passed validation."""

    customer: CustomerInfo
    payment: PaymentInfo
    store: StoreInfo
    presets: dict[str, Preset] = Field(default_factory=dict)


# Provider-facing models. Provider-neutral on purpose: adapters translate them
# to whatever wire format the ordering API speaks.


class ProviderCustomer(BaseModel):
    first_name: str
    last_name: str
    email: str
    phone: str
    address: str = Field(..., description="Single free-text delivery line.")


class OrderItem(BaseModel):
    code: str = Field(..., min_length=1)
    qty: int = Field(default=1, ge=1)
    options: dict[str, Any] = Field(default_factory=dict)


class PaymentRequest(BaseModel):
    amount: float
    number: str
    expiration: str
    security_code: str
    postal_code: str
    tip_amount: float = 0.0


class OrderAmounts(BaseModel):
    customer: float = Field(..., description="What the customer is charged.")
    raw: dict[str, Any] = Field(default_factory=dict)


class ProviderOrder(BaseModel):
    store_id: int
    customer: ProviderCustomer
    service_method: str = "Delivery"
    items: list[OrderItem] = Field(default_factory=list)
    payments: list[PaymentRequest] = Field(default_factory=list)
    order_id: str = ""
    amounts: OrderAmounts | None = None
    estimated_wait_minutes: str | None = None

    def add_item(self, item: OrderItem) -> None:
        self.items.append(item)


class PlacementResult(BaseModel):
    order_id: str | None = None
    estimated_wait_minutes: str | None = None
    raw: dict[str, Any] = Field(default_factory=dict)


class NearbyStore(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    store_id: str = Field(..., alias="StoreID")
    is_online_capable: bool = Field(default=False, alias="IsOnlineCapable")
    is_delivery_store: bool = Field(default=False, alias="IsDeliveryStore")
    min_distance: float = Field(default=0.0, alias="MinDistance")
    address_description: str = Field(default="", alias="AddressDescription")
    phone: str | None = Field(default=None, alias="Phone")

    @field_validator("store_id", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> Any:
        return _as_text(value)

    @property
    def accepts_online_delivery(self) -> bool:
        return self.is_online_capable and self.is_delivery_store


class TrackingStep(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str = Field(default="", alias="Name")
    complete: bool = Field(default=False, alias="Complete")


class TrackingStatus(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    order_status: str = Field(default="Unknown", alias="OrderStatus")
    order_id: str | None = Field(default=None, alias="OrderID")
    store_id: str | None = Field(default=None, alias="StoreID")
    order_taken_time: datetime | None = Field(default=None, alias="OrderTakenTime")
    status_items: list[TrackingStep] = Field(default_factory=list, alias="StatusItems")
    estimated_wait_minutes: str | None = Field(default=None, alias="EstimatedWaitMinutes")

    @field_validator("order_id", "store_id", "estimated_wait_minutes", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> Any:
        return _as_text(value)

    def minutes_since_taken(self, now: datetime | None = None) -> int | None:
        if self.order_taken_time is None:
            return None
        taken = self.order_taken_time
        if now is None:
            now = datetime.now(timezone.utc) if taken.tzinfo else datetime.now()
        return int((now - taken).total_seconds() // 60)
