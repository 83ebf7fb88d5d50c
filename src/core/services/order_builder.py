"""Preset → provider order transform.

Pure code: no I/O and no provider calls. The pipeline feeds the result to the
ordering provider.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.domain.errors import PresetNotFoundError
from core.domain.models import (
    AppConfig,
    OrderItem,
    PaymentRequest,
    Preset,
    ProviderCustomer,
    ProviderOrder,
)


@dataclass
class PresetOrderRequest:
    """Everything one `order` invocation builds from the config."""

    preset_name: str
    preset: Preset
    order: ProviderOrder
    customer: ProviderCustomer


class OrderBuilder:
    def __init__(self, config: AppConfig) -> None:
        self._config = config

    def available_presets(self) -> list[str]:
        return list(self._config.presets)

    def build_customer(self) -> ProviderCustomer:
        info = self._config.customer
        address = info.address
        return ProviderCustomer(
            first_name=info.first_name,
            last_name=info.last_name,
            email=info.email,
            phone=info.phone,
            address=f"{address.street}, {address.city}, {address.region} {address.postal_code}",
        )

    def build_from_preset(self, preset_name: str) -> PresetOrderRequest:
        preset = self._config.presets.get(preset_name)
        if preset is None:
            raise PresetNotFoundError(preset_name, self.available_presets())

        customer = self.build_customer()
        order = ProviderOrder(store_id=int(self._config.store.store_id), customer=customer)

        # One single-unit line per unit of quantity, in preset order.
        for item in preset.items:
            for _ in range(item.qty):
                order.add_item(OrderItem(code=item.code))

        return PresetOrderRequest(
            preset_name=preset_name,
            preset=preset,
            order=order,
            customer=customer,
        )

    def build_payment(self, amount: float) -> PaymentRequest:
        payment = self._config.payment
        return PaymentRequest(
            amount=amount,
            number=payment.number,
            expiration=payment.expiration,
            security_code=payment.security_code,
            postal_code=payment.postal_code,
            tip_amount=payment.tip_amount,
        )
