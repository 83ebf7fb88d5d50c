"""
Tests for phone resolution and active-order lookup.
"""

import asyncio
from datetime import datetime

import pytest

from conftest import FakeProvider
from core.domain.errors import MissingPhoneError, ProviderError
from core.domain.models import TrackingStatus
from core.services.tracking import TRACK_HINT, lookup_active_order, resolve_phone


def status(**overrides):
    data = {
        "OrderStatus": "Oven",
        "OrderID": "ABC123",
        "StoreID": "1234",
        "OrderTakenTime": "2024-05-01T18:00:00",
        "StatusItems": [
            {"Name": "Prep", "Complete": True},
            {"Name": "Oven", "Complete": False},
        ],
    }
    data.update(overrides)
    return TrackingStatus.model_validate(data)


class TestResolvePhone:
    def test_explicit_argument_wins(self, saved_store):
        assert resolve_phone(" 555-987-6543 ", saved_store) == "555-987-6543"

    def test_falls_back_to_config(self, saved_store):
        assert resolve_phone(None, saved_store) == "555-123-4567"
        assert resolve_phone("", saved_store) == "555-123-4567"

    def test_no_phone_anywhere(self, config_store):
        with pytest.raises(MissingPhoneError) as excinfo:
            resolve_phone(None, config_store)
        assert excinfo.value.hint == "Usage: dominos track [phone]"

    def test_config_without_phone(self, config_store, valid_config):
        del valid_config["customer"]["phone"]
        config_store.save(valid_config)
        with pytest.raises(MissingPhoneError):
            resolve_phone(None, config_store)


class TestLookupActiveOrder:
    def test_returns_first_order(self):
        first, second = status(), status(OrderID="XYZ")
        provider = FakeProvider(tracking=[first, second])

        assert asyncio.run(lookup_active_order(provider, "5551234567")) is first

    def test_no_results(self):
        assert asyncio.run(lookup_active_order(FakeProvider(), "5551234567")) is None

    def test_no_orders_error_means_nothing_to_track(self):
        provider = FakeProvider(fail_on={"lookup_by_phone": "No orders found for this phone number"})
        assert asyncio.run(lookup_active_order(provider, "5551234567")) is None

    def test_other_errors_carry_track_hint(self):
        provider = FakeProvider(fail_on={"lookup_by_phone": "Could not reach the ordering API"})

        with pytest.raises(ProviderError) as excinfo:
            asyncio.run(lookup_active_order(provider, "5551234567"))

        assert excinfo.value.message == "Could not reach the ordering API"
        assert excinfo.value.hint == TRACK_HINT


class TestTrackingStatus:
    def test_minutes_since_taken(self):
        assert status().minutes_since_taken(datetime(2024, 5, 1, 18, 12, 30)) == 12

    def test_unknown_order_time(self):
        assert status(OrderTakenTime=None).minutes_since_taken() is None

    def test_defaults(self):
        bare = TrackingStatus.model_validate({})
        assert bare.order_status == "Unknown"
        assert bare.status_items == []
