"""Turn a number or contact name into a placed Google Voice call.

Steps, in order: resolve the token (saved contact or direct number),
validate and normalize it, optionally save it as a contact, pick a
browser, record history and open the dialer URL.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .browser import BrowserBinding, BrowserSelector, URLOpener
from .config import CallConfig
from .constants import CALL_URL_TEMPLATE
from .errors import InvalidInput, StoreWriteFailure
from .numbers import has_digits, normalize_phone_number
from .store import Contact, ContactStore, validate_contact_name

LOG = logging.getLogger(__name__)


class SourceKind(str, Enum):
    DIRECT_NUMBER = "direct_number"
    RESOLVED_CONTACT = "resolved_contact"


@dataclass(frozen=True)
class CallTarget:
    raw_input: str
    canonical_number: str
    source_kind: SourceKind


@dataclass
class CallOutcome:
    target: CallTarget
    binding: BrowserBinding
    url: str
    dry_run: bool = False
    saved_contact: Optional[Contact] = None
    contact_replaced: bool = False
    warnings: tuple = ()


def build_call_url(canonical_number: str) -> str:
    # Only "+" needs escaping; the rest is digits.
    return CALL_URL_TEMPLATE.format(number=canonical_number.replace("+", "%2B"))


class CallResolver:
    def __init__(
        self,
        store: ContactStore,
        selector: BrowserSelector,
        opener: URLOpener,
        config: CallConfig,
    ) -> None:
        self.store = store
        self.selector = selector
        self.opener = opener
        self.config = config

    def resolve(self, token: str) -> CallTarget:
        """Map ``token`` to a canonical number.

        Raises InvalidInput when the token is not a saved contact and has no
        digits, InvalidFormat when the number fails validation.
        """
        stored = self.store.lookup(token)
        if stored is not None:
            LOG.debug("Found contact: %s -> %s", token, stored)
            number, kind = stored, SourceKind.RESOLVED_CONTACT
        elif not has_digits(token):
            raise InvalidInput(
                f"Contact '{token}' not found and doesn't appear to be a phone number",
                hint="Use --list-contacts to see available contacts",
            )
        else:
            number, kind = token, SourceKind.DIRECT_NUMBER

        canonical = normalize_phone_number(number)
        LOG.debug("Formatted number: %s", canonical)
        return CallTarget(raw_input=token, canonical_number=canonical, source_kind=kind)

    def place_call(
        self,
        token: str,
        *,
        browser: Optional[str] = None,
        contact_name: Optional[str] = None,
    ) -> CallOutcome:
        if contact_name is not None:
            validate_contact_name(contact_name)

        target = self.resolve(token)
        warnings = []

        saved: Optional[Contact] = None
        replaced = False
        if contact_name is not None:
            replaced = any(c.name == contact_name for c in self.store.list_contacts())
            try:
                saved = self.store.add_or_replace(contact_name, target.canonical_number)
            except StoreWriteFailure as exc:
                LOG.warning("Could not save contact '%s': %s", contact_name, exc)
                warnings.append(f"Contact not saved: {exc}")

        binding = self.selector.pick(browser)
        url = build_call_url(target.canonical_number)

        try:
            self.store.record_history(target.canonical_number)
        except StoreWriteFailure as exc:
            LOG.warning("Could not record call history: %s", exc)
            warnings.append(f"History not recorded: {exc}")

        if not self.config.dry_run:
            self.opener.open_url(url, binding)

        return CallOutcome(
            target=target,
            binding=binding,
            url=url,
            dry_run=self.config.dry_run,
            saved_contact=saved,
            contact_replaced=replaced,
            warnings=tuple(warnings),
        )
