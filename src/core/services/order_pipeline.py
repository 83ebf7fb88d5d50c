"""Order orchestration.

Runs one preset order end to end:

    load config → validate → build → provider validate → provider price →
    summary → confirm → attach payment → provider place

The pipeline never exits the process. It reports through the injected
`Prompter` and returns an `OrderOutcome` whose exit code the CLI forwards.
Each provider call is attempted once; recovery means re-running the command.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from core.domain.errors import ConfigInvalidError, ExitCode, PresetNotFoundError, ProviderError
from core.domain.models import AppConfig, PlacementResult
from core.interfaces.config_store import ConfigStore
from core.interfaces.prompter import Prompter
from core.interfaces.provider import OrderingProvider
from core.services.config_validator import parse_config
from core.services.order_builder import OrderBuilder, PresetOrderRequest
from core.services.setup_wizard import SetupWizard, setup_and_save

logger = logging.getLogger(__name__)


class OrderState(str, Enum):
    NO_CONFIG = "no_config"
    CONFIG_INVALID = "config_invalid"
    PRESET_MISSING = "preset_missing"
    VALIDATING = "validating"
    VALIDATED = "validated"
    PRICING = "pricing"
    PRICED = "priced"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    CANCELLED = "cancelled"
    PLACING = "placing"
    PLACED = "placed"
    FAILED = "failed"


@dataclass
class OrderOutcome:
    state: OrderState
    exit_code: ExitCode
    history: list[OrderState] = field(default_factory=list)
    placement: PlacementResult | None = None


class OrderPipeline:
    def __init__(
        self,
        *,
        store: ConfigStore,
        provider: OrderingProvider,
        prompter: Prompter,
    ) -> None:
        self._store = store
        self._provider = provider
        self._io = prompter
        self._history: list[OrderState] = []

    def _enter(self, state: OrderState) -> None:
        logger.info("order pipeline: %s", state.value)
        self._history.append(state)

    def _finish(
        self,
        state: OrderState,
        exit_code: ExitCode,
        placement: PlacementResult | None = None,
    ) -> OrderOutcome:
        if not self._history or self._history[-1] is not state:
            self._enter(state)
        return OrderOutcome(
            state=state,
            exit_code=exit_code,
            history=list(self._history),
            placement=placement,
        )

    async def run(self, preset_name: str) -> OrderOutcome:
        self._history = []

        if not self._store.exists():
            return await self._first_run()

        doc = self._store.load() or {}
        try:
            config = parse_config(doc)
        except ConfigInvalidError as exc:
            self._io.error("Configuration has errors:")
            for defect in exc.defects:
                self._io.info(f"  • {defect}")
            self._io.hint("Run: dominos config validate")
            return self._finish(OrderState.CONFIG_INVALID, ExitCode.CONFIG_ERROR)

        builder = OrderBuilder(config)
        try:
            request = builder.build_from_preset(preset_name)
        except PresetNotFoundError as exc:
            self._io.error(exc.message)
            self._show_available_presets(config)
            return self._finish(OrderState.PRESET_MISSING, ExitCode.CONFIG_ERROR)

        self._io.info(f"Building order: {request.preset.name or request.preset_name}")
        return await self._submit(config, builder, request)

    async def _first_run(self) -> OrderOutcome:
        self._enter(OrderState.NO_CONFIG)
        self._io.warn("No configuration found. Running setup...")
        wizard = SetupWizard(provider=self._provider, prompter=self._io)
        await setup_and_save(store=self._store, wizard=wizard, prompter=self._io)
        self._io.warn("Setup complete! Now add a preset to your config:")
        self._io.hint("  dominos config edit")
        self._io.hint("Then try ordering again.")
        return self._finish(OrderState.NO_CONFIG, ExitCode.OK)

    def _show_available_presets(self, config: AppConfig) -> None:
        if not config.presets:
            self._io.hint("No presets configured. Add one with:")
            self._io.hint("  dominos config edit")
            return
        self._io.hint("Available presets:")
        for name, preset in config.presets.items():
            self._io.hint(f"  • {name} - {preset.name}")

    async def _submit(
        self,
        config: AppConfig,
        builder: OrderBuilder,
        request: PresetOrderRequest,
    ) -> OrderOutcome:
        order = request.order

        self._enter(OrderState.VALIDATING)
        with self._io.progress("Validating order..."):
            try:
                await self._provider.validate(order)
            except ProviderError as exc:
                return self._fail("Validation failed", exc)
        self._enter(OrderState.VALIDATED)
        self._io.success("Order validated")

        self._enter(OrderState.PRICING)
        with self._io.progress("Getting price..."):
            try:
                order.amounts = await self._provider.price(order)
            except ProviderError as exc:
                return self._fail("Pricing failed", exc)
        self._enter(OrderState.PRICED)
        self._io.success("Order priced")

        total = order.amounts.customer
        self._io.success(f"Total: ${total:.2f} (includes ${config.payment.tip_amount:.2f} tip)")
        self._io.info("Order Summary:")
        for item in request.preset.items:
            self._io.info(f"  • {item.qty}x {item.code}")

        self._enter(OrderState.AWAITING_CONFIRMATION)
        answer = self._io.ask("Place this order? (Y/n): ")
        if answer.strip().lower().startswith("n"):
            self._io.hint("Order cancelled")
            return self._finish(OrderState.CANCELLED, ExitCode.OK)

        # Payment amount is always the priced total.
        order.payments = [builder.build_payment(total)]

        self._enter(OrderState.PLACING)
        with self._io.progress("Placing order..."):
            try:
                placement = await self._provider.place(order)
            except ProviderError as exc:
                outcome = self._fail("Order failed", exc)
                if "payment" in exc.message.lower():
                    self._io.hint("Check your payment information:")
                    self._io.hint("  dominos config edit")
                return outcome

        self._io.success("Order placed!")
        self._io.hint("Order details:")
        self._io.info(f"  Store: {config.store.name}")
        if config.store.phone:
            self._io.info(f"  Phone: {config.store.phone}")
        if placement.estimated_wait_minutes:
            self._io.info(f"  Estimated wait: {placement.estimated_wait_minutes} minutes")
        self._io.hint("Track your order:")
        self._io.hint("  dominos track")
        return self._finish(OrderState.PLACED, ExitCode.OK, placement=placement)

    def _fail(self, label: str, exc: ProviderError) -> OrderOutcome:
        logger.info("%s: %s", label, exc.message)
        self._io.error(label)
        self._io.error(exc.message)
        return self._finish(OrderState.FAILED, ExitCode.PROVIDER_FAILURE)
