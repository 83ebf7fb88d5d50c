"""
Tests for the order pipeline state machine.
"""

import asyncio

import pytest

from conftest import FakeProvider, ScriptedPrompter, make_store
from core.domain.errors import ExitCode
from core.services.order_pipeline import OrderPipeline, OrderState

SETUP_ANSWERS = [
    "123 Main St, Portland, OR, 97201",
    "Test",
    "User",
    "555-123-4567",
    "test@example.com",
    "1",
    "4111111111111111",
    "12/27",
    "123",
    "97201",
    "3",
    "y",
]


def run_pipeline(store, provider, prompter, preset="test"):
    pipeline = OrderPipeline(store=store, provider=provider, prompter=prompter)
    return asyncio.run(pipeline.run(preset))


class TestHappyPath:
    def test_places_order(self, saved_store, fake_provider):
        prompter = ScriptedPrompter(["y"])

        outcome = run_pipeline(saved_store, fake_provider, prompter)

        assert outcome.state is OrderState.PLACED
        assert outcome.exit_code == ExitCode.OK
        assert outcome.history == [
            OrderState.VALIDATING,
            OrderState.VALIDATED,
            OrderState.PRICING,
            OrderState.PRICED,
            OrderState.AWAITING_CONFIRMATION,
            OrderState.PLACING,
            OrderState.PLACED,
        ]
        assert fake_provider.calls == ["validate", "price", "place"]
        assert outcome.placement.estimated_wait_minutes == "25-35"

    def test_charges_priced_total(self, saved_store):
        provider = FakeProvider(total=31.07)
        prompter = ScriptedPrompter([""])

        run_pipeline(saved_store, provider, prompter)

        (order,) = provider.placed
        (payment,) = order.payments
        assert payment.amount == 31.07
        assert payment.number == "4111111111111111"
        assert payment.tip_amount == 5.0

    def test_summary_and_details(self, saved_store, fake_provider):
        prompter = ScriptedPrompter(["Y"])

        run_pipeline(saved_store, fake_provider, prompter, preset="family")

        assert "Total: $23.45 (includes $5.00 tip)" in prompter.text("success")
        info = prompter.text("info")
        assert "  • 2x 14SCREEN" in info
        assert "  • 1x 2LCOKE" in info
        assert "  Store: Downtown Portland" in info
        assert "  Phone: 503-555-0100" in info
        assert "  Estimated wait: 25-35 minutes" in info
        assert "  dominos track" in prompter.text("hint")
        assert prompter.questions == ["Place this order? (Y/n): "]

    def test_quantities_are_expanded(self, saved_store, fake_provider):
        run_pipeline(saved_store, fake_provider, ScriptedPrompter(["y"]), preset="family")

        (order,) = fake_provider.placed
        assert [item.code for item in order.items] == ["14SCREEN", "14SCREEN", "2LCOKE"]
        assert all(item.qty == 1 for item in order.items)

    def test_progress_shown_for_each_provider_call(self, saved_store, fake_provider):
        prompter = ScriptedPrompter(["y"])
        run_pipeline(saved_store, fake_provider, prompter)
        assert prompter.progress_labels == [
            "Validating order...",
            "Getting price...",
            "Placing order...",
        ]


class TestCancellation:
    @pytest.mark.parametrize("answer", ["n", "N", "no", " No "])
    def test_declining_cancels_without_placing(self, saved_store, fake_provider, answer):
        prompter = ScriptedPrompter([answer])

        outcome = run_pipeline(saved_store, fake_provider, prompter)

        assert outcome.state is OrderState.CANCELLED
        assert outcome.exit_code == ExitCode.OK
        assert fake_provider.calls == ["validate", "price"]
        assert fake_provider.placed == []
        assert "Order cancelled" in prompter.text("hint")


class TestConfigProblems:
    def test_first_run_runs_setup_and_stops(self, config_store):
        provider = FakeProvider(stores=[make_store()])
        prompter = ScriptedPrompter(SETUP_ANSWERS)

        outcome = run_pipeline(config_store, provider, prompter)

        assert outcome.state is OrderState.NO_CONFIG
        assert outcome.exit_code == ExitCode.OK
        assert config_store.exists()
        assert provider.calls == ["find_nearby_stores"]
        assert "Setup complete!" in prompter.text("warn")

    def test_invalid_config_lists_defects(self, config_store, valid_config):
        del valid_config["customer"]["email"]
        config_store.save(valid_config)
        provider = FakeProvider()
        prompter = ScriptedPrompter()

        outcome = run_pipeline(config_store, provider, prompter)

        assert outcome.state is OrderState.CONFIG_INVALID
        assert outcome.exit_code == ExitCode.CONFIG_ERROR
        assert "  • Missing customer.email" in prompter.text("info")
        assert "Run: dominos config validate" in prompter.text("hint")
        assert provider.calls == []

    def test_unknown_preset_lists_available(self, saved_store):
        provider = FakeProvider()
        prompter = ScriptedPrompter()

        outcome = run_pipeline(saved_store, provider, prompter, preset="nonexistent")

        assert outcome.state is OrderState.PRESET_MISSING
        assert outcome.exit_code == ExitCode.CONFIG_ERROR
        assert "Preset 'nonexistent' not found" in prompter.text("error")
        hints = prompter.text("hint")
        assert "  • test - Test Pizza" in hints
        assert "  • family - Family Night" in hints
        assert provider.calls == []

    def test_unknown_preset_with_no_presets(self, config_store, valid_config):
        valid_config["presets"] = {}
        config_store.save(valid_config)
        prompter = ScriptedPrompter()

        outcome = run_pipeline(config_store, FakeProvider(), prompter)

        assert outcome.state is OrderState.PRESET_MISSING
        assert "No presets configured" in prompter.text("hint")


class TestProviderFailures:
    @pytest.mark.parametrize(
        "step, label, calls",
        [
            ("validate", "Validation failed", ["validate"]),
            ("price", "Pricing failed", ["validate", "price"]),
        ],
    )
    def test_failure_before_confirmation(self, saved_store, step, label, calls):
        provider = FakeProvider(fail_on={step: "store is closed"})
        prompter = ScriptedPrompter()

        outcome = run_pipeline(saved_store, provider, prompter)

        assert outcome.state is OrderState.FAILED
        assert outcome.exit_code == ExitCode.PROVIDER_FAILURE
        assert prompter.text("error").splitlines() == [label, "store is closed"]
        assert provider.calls == calls
        assert prompter.questions == []

    def test_declined_payment_points_at_config(self, saved_store):
        provider = FakeProvider(fail_on={"place": "Place rejected (payment was declined)"})
        prompter = ScriptedPrompter(["y"])

        outcome = run_pipeline(saved_store, provider, prompter)

        assert outcome.state is OrderState.FAILED
        assert outcome.exit_code == ExitCode.PROVIDER_FAILURE
        assert "Check your payment information:" in prompter.text("hint")

    def test_other_placement_failure_has_no_payment_hint(self, saved_store):
        provider = FakeProvider(fail_on={"place": "store offline"})
        prompter = ScriptedPrompter(["y"])

        outcome = run_pipeline(saved_store, provider, prompter)

        assert outcome.exit_code == ExitCode.PROVIDER_FAILURE
        assert "payment" not in prompter.text("hint").lower()
