"""
Tests for card masking.
"""

from core.services.masking import mask_card_number, masked_config


def test_mask_keeps_last_four():
    assert mask_card_number("4111111111111111") == "****-****-****-1111"


def test_masked_config_does_not_touch_original(valid_config):
    masked = masked_config(valid_config)

    assert masked["payment"]["number"] == "****-****-****-1111"
    assert valid_config["payment"]["number"] == "4111111111111111"
    assert "4111111111111111" not in str(masked)


def test_masked_config_without_payment():
    assert masked_config({"customer": {"firstName": "Test"}}) == {"customer": {"firstName": "Test"}}
