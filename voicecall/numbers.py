"""Phone number validation and normalization.

Accepted shapes (punctuation and spaces are ignored):
  8558701311          10-digit US number        -> +18558701311
  1-855-870-1311      11 digits starting with 1 -> +18558701311
  +44 20 7946 0958    "+" and 7..15 digits      -> +442079460958
"""

from __future__ import annotations

import logging
import re

from .constants import DOMESTIC_DIGITS, INTERNATIONAL_MAX_DIGITS, INTERNATIONAL_MIN_DIGITS
from .errors import InvalidFormat

LOG = logging.getLogger(__name__)

_NON_DIGIT = re.compile(r"\D")
_DIGIT = re.compile(r"\d")


def has_digits(text: str) -> bool:
    return bool(_DIGIT.search(text or ""))


def clean_number(raw: str) -> str:
    """Drop everything but digits, keeping a single leading "+" if present."""
    text = (raw or "").strip()
    digits = _NON_DIGIT.sub("", text)
    if text.startswith("+"):
        return "+" + digits
    return digits


def validate_phone_number(raw: str) -> str:
    """Return the cleaned form of ``raw`` or raise InvalidFormat."""
    cleaned = clean_number(raw)
    LOG.debug("Validating phone number: %s -> %s", raw, cleaned)

    digits = cleaned.lstrip("+")
    if not digits:
        raise InvalidFormat(f"No valid digits found in phone number: {raw}")

    if cleaned.startswith("+"):
        if not INTERNATIONAL_MIN_DIGITS <= len(digits) <= INTERNATIONAL_MAX_DIGITS:
            raise InvalidFormat(
                f"Invalid international phone number length: {cleaned}",
                hint=f"Expected {INTERNATIONAL_MIN_DIGITS}-{INTERNATIONAL_MAX_DIGITS} digits after '+'",
            )
        return cleaned

    if len(digits) == DOMESTIC_DIGITS:
        return cleaned
    if len(digits) == DOMESTIC_DIGITS + 1 and digits.startswith("1"):
        return cleaned
    raise InvalidFormat(
        f"Invalid US phone number length: {cleaned} (expected 10 or 11 digits)",
        hint="Prefix international numbers with '+' and the country code",
    )


def normalize_phone_number(raw: str) -> str:
    """Return the canonical "+"-prefixed dialable form of ``raw``.

    Validates first, so only the three accepted shapes reach the mapping.
    """
    cleaned = validate_phone_number(raw)
    if cleaned.startswith("+"):
        return cleaned
    if len(cleaned) == DOMESTIC_DIGITS:
        return "+1" + cleaned
    return "+" + cleaned
