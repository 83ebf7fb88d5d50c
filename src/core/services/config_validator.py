"""Configuration document validation.

The check order is fixed (customer → payment → store → presets) and so is
the short-circuit rule: a missing customer/payment/store block stops the
whole validation, while missing leaf fields inside a block accumulate.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from core.domain.errors import ConfigInvalidError
from core.domain.models import AppConfig
from core.interfaces.config_store import ConfigStore

_CUSTOMER_FIELDS = ("firstName", "lastName", "email", "phone")
_ADDRESS_FIELDS = ("street", "city", "region", "postalCode")
_PAYMENT_FIELDS = ("number", "expiration", "securityCode", "postalCode")


def _is_missing(value: Any) -> bool:
    # Empty blocks ({}) count as present; their leaves are then reported.
    if value is None or value is False or value == "":
        return True
    return isinstance(value, (int, float)) and value == 0


def _block(doc: Any, key: str) -> Any:
    value = doc.get(key) if isinstance(doc, Mapping) else None
    return None if _is_missing(value) else value


def _missing_fields(block: Any, prefix: str, fields: tuple[str, ...]) -> list[str]:
    source = block if isinstance(block, Mapping) else {}
    return [f"Missing {prefix}.{name}" for name in fields if _is_missing(source.get(name))]


def validate_config(doc: Mapping[str, Any]) -> list[str]:
    """Return the ordered list of defects; an empty list means valid."""

    errors: list[str] = []

    customer = _block(doc, "customer")
    if customer is None:
        return ["Missing customer configuration"]
    errors.extend(_missing_fields(customer, "customer", _CUSTOMER_FIELDS))

    address = _block(customer, "address")
    if address is None:
        errors.append("Missing customer.address")
    else:
        errors.extend(_missing_fields(address, "customer.address", _ADDRESS_FIELDS))

    payment = _block(doc, "payment")
    if payment is None:
        errors.append("Missing payment configuration")
        return errors
    errors.extend(_missing_fields(payment, "payment", _PAYMENT_FIELDS))

    store = _block(doc, "store")
    if store is None:
        errors.append("Missing store configuration")
        return errors
    errors.extend(_missing_fields(store, "store", ("storeID",)))

    if not isinstance(doc.get("presets"), Mapping):
        errors.append("Missing or invalid presets configuration")

    return errors


def validate_stored(store: ConfigStore) -> list[str]:
    """Defects of the stored document, the same ones `parse_config` rejects."""

    doc = store.load()
    if doc is None:
        return ["No configuration found"]
    try:
        parse_config(doc)
    except ConfigInvalidError as exc:
        return exc.defects
    return []


def _describe(error: dict[str, Any]) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()))
    return f"Invalid {location}: {error.get('msg', 'invalid value')}"


def parse_config(doc: Mapping[str, Any]) -> AppConfig:
    """Validate `doc` and return its typed view.

    Raises `ConfigInvalidError` with the validator's defects, or with the
    type errors pydantic finds in a document the validator accepted (a
    non-numeric qty, a negative tip...).
    """

    defects = validate_config(doc)
    if defects:
        raise ConfigInvalidError(defects)
    try:
        return AppConfig.model_validate(doc)
    except ValidationError as exc:
        raise ConfigInvalidError([_describe(err) for err in exc.errors()]) from exc
