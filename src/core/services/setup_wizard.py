"""Interactive first-run setup.

Collects contact details, looks up nearby delivery stores, lets the user pick
one, collects payment details and returns a configuration document ready to
be saved. Saving is the caller's job.

All terminal I/O goes through a `Prompter`, so the read/validate/re-prompt
loops can be driven by scripted answers in tests.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable

from core.domain.errors import ProviderError, SetupError, UserCancelledError
from core.domain.models import NearbyStore
from core.interfaces.config_store import ConfigStore
from core.interfaces.prompter import Prompter
from core.interfaces.provider import OrderingProvider

logger = logging.getLogger(__name__)

# Returns None when the answer is acceptable, else the rejection message.
Validator = Callable[[str], "str | None"]

MAX_STORES = 5

_NON_DIGITS = re.compile(r"\D")


def validate_address(address: str) -> str | None:
    if not address or not address.strip():
        return "Address is required"
    return None


def validate_phone(phone: str) -> str | None:
    if not phone or not phone.strip():
        return "Phone number is required"
    if len(_NON_DIGITS.sub("", phone)) < 10:
        return "Invalid phone number"
    return None


def validate_email(email: str) -> str | None:
    if not email or not email.strip():
        return "Email is required"
    if "@" not in email:
        return "Invalid email address"
    return None


def validate_choice(count: int) -> Validator:
    def _validate(answer: str) -> str | None:
        try:
            choice = int(answer.strip())
        except ValueError:
            return "Invalid choice"
        if choice < 1 or choice > count:
            return "Invalid choice"
        return None

    return _validate


def parse_address(raw: str) -> dict[str, str]:
    """Best-effort split of a free-text address on commas.

    Positions map to street, city, region, postal code. With fewer than four
    parts the postal code falls back to the last part, with one exception to
    that positional rule: when there are exactly three parts and the last one
    reads "OR 97201" (two tokens, the second containing a digit), it is split
    into region and postal code instead.
    """

    parts = [part.strip() for part in raw.split(",")]
    street = parts[0] if len(parts) > 0 else ""
    city = parts[1] if len(parts) > 1 else ""
    region = parts[2] if len(parts) > 2 else ""
    postal_code = parts[3] if len(parts) > 3 else parts[-1]

    if len(parts) == 3:
        tokens = region.split()
        if len(tokens) == 2 and any(ch.isdigit() for ch in tokens[1]):
            region, postal_code = tokens

    return {
        "street": street,
        "city": city,
        "region": region,
        "postalCode": postal_code,
    }


def parse_tip(raw: str) -> float:
    try:
        value = float(raw.strip().lstrip("$"))
    except ValueError:
        return 0.0
    return value if value > 0 else 0.0


class SetupWizard:
    """Fixed question script; each question re-prompts until its validator accepts."""

    def __init__(self, *, provider: OrderingProvider, prompter: Prompter) -> None:
        self._provider = provider
        self._io = prompter

    def prompt(self, question: str, validator: Validator | None = None, *, secret: bool = False) -> str:
        while True:
            answer = self._io.ask(question, secret=secret)
            if validator is None:
                return answer
            rejection = validator(answer)
            if rejection is None:
                return answer
            self._io.error(rejection)

    async def find_stores(self, address: str) -> list[NearbyStore]:
        with self._io.progress("Finding nearby stores..."):
            try:
                stores = await self._provider.find_nearby_stores(address)
            except ProviderError as exc:
                self._io.error("Could not find stores")
                raise ProviderError(f"Store lookup failed: {exc.message}") from exc

        eligible = [store for store in stores if store.accepts_online_delivery][:MAX_STORES]
        logger.info("store lookup returned %d stores, %d eligible", len(stores), len(eligible))
        self._io.success(f"Found {len(eligible)} stores")
        return eligible

    def choose_store(self, stores: list[NearbyStore]) -> NearbyStore:
        self._io.info("Select your preferred store:")
        for index, store in enumerate(stores, start=1):
            self._io.info(f"  {index}. {store.address_description} ({store.min_distance:.1f} miles)")
        choice = self.prompt("Choice: ", validate_choice(len(stores)))
        return stores[int(choice.strip()) - 1]

    async def run(self) -> dict[str, Any]:
        self._io.info("Welcome to Dominos CLI!")
        self._io.info("No configuration found. Let's set up your account.")

        address = self.prompt("Delivery Address: ", validate_address)
        first_name = self.prompt("First Name: ")
        last_name = self.prompt("Last Name: ")
        phone = self.prompt("Phone: ", validate_phone)
        email = self.prompt("Email: ", validate_email)

        stores = await self.find_stores(address)
        if not stores:
            raise SetupError(f"No online delivery stores found near {address}")
        store = self.choose_store(stores)

        self._io.info("Payment Information:")
        card_number = self.prompt("Card Number: ", secret=True)
        expiration = self.prompt("Expiration (MM/YY): ")
        cvv = self.prompt("CVV: ", secret=True)
        billing_zip = self.prompt("Billing Zip: ")
        tip_amount = self.prompt("Default Tip Amount ($): ")

        self._io.warn("WARNING: Payment info will be stored in plaintext")
        self._io.warn("Keep your config file secure!")

        confirm = self.prompt("Continue? (y/N): ")
        if confirm.lower() != "y":
            logger.info("setup cancelled at confirmation")
            raise UserCancelledError()

        return {
            "customer": {
                "firstName": first_name,
                "lastName": last_name,
                "email": email,
                "phone": phone,
                "address": parse_address(address),
            },
            "payment": {
                "number": _NON_DIGITS.sub("", card_number),
                "expiration": expiration,
                "securityCode": cvv,
                "postalCode": billing_zip,
                "tipAmount": parse_tip(tip_amount),
            },
            "store": {
                "storeID": store.store_id,
                "name": store.address_description,
                "phone": store.phone,
            },
            "presets": {},
        }


async def setup_and_save(*, store: ConfigStore, wizard: SetupWizard, prompter: Prompter) -> dict[str, Any]:
    """Run the wizard and persist its document in full."""

    doc = await wizard.run()
    store.save(doc)
    logger.info("configuration saved to %s", store.location())
    prompter.success("Configuration saved!")
    prompter.hint(f"Location: {store.location()}")
    prompter.info("You're ready to order! Try:")
    prompter.hint("  dominos config edit   (to add order presets)")
    return doc
