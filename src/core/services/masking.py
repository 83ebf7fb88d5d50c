"""Display helpers for configuration documents."""

from __future__ import annotations

import copy
from typing import Any


def mask_card_number(number: str) -> str:
    digits = "".join(ch for ch in str(number) if ch.isdigit())
    return f"****-****-****-{digits[-4:]}"


def masked_config(doc: dict[str, Any]) -> dict[str, Any]:
    """Deep copy of `doc` safe to print: the card number is masked, the original is untouched."""

    masked = copy.deepcopy(doc)
    payment = masked.get("payment")
    if isinstance(payment, dict) and payment.get("number"):
        payment["number"] = mask_card_number(payment["number"])
    return masked
