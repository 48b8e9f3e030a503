"""Voice call pipeline primitives built on shared core scaffolding."""
from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

from core.pipeline import BaseProducer, SafeProcessor

from .constants import HISTORY_DISPLAY_LIMIT
from .resolver import CallOutcome, CallResolver
from .store import Contact, ContactStore, HistoryEntry


@dataclass
class CallRequest:
    target: str
    browser: Optional[str] = None
    contact_name: Optional[str] = None


class CallProcessor(SafeProcessor[CallRequest, CallOutcome]):
    """Resolve, persist and dispatch one call."""

    def __init__(self, resolver: CallResolver) -> None:
        self._resolver = resolver

    def _process_safe(self, payload: CallRequest) -> CallOutcome:
        return self._resolver.place_call(
            payload.target,
            browser=payload.browser,
            contact_name=payload.contact_name,
        )


class CallProducer(BaseProducer):
    def _produce_success(self, payload: CallOutcome, diagnostics: Optional[Dict[str, Any]]) -> None:
        number = payload.target.canonical_number
        contact = payload.saved_contact
        if payload.dry_run:
            if contact is not None:
                print(f"[DRY RUN] Would add contact: {contact.name} -> {contact.number}")
            print(f"[DRY RUN] Would open URL in {payload.binding.display_name}: {payload.url}")
            return
        if contact is not None:
            verb = "updated" if payload.contact_replaced else "added"
            print(f"Contact {verb}: {contact.name} -> {contact.number}")
        print(f"Opening Google Voice call to {number} in {payload.binding.display_name}")


@dataclass
class ContactsRequest:
    emit_json: bool = False


@dataclass
class ContactsResult:
    contacts: List[Contact]
    emit_json: bool = False


class ContactsProcessor(SafeProcessor[ContactsRequest, ContactsResult]):
    def __init__(self, store: ContactStore) -> None:
        self._store = store

    def _process_safe(self, payload: ContactsRequest) -> ContactsResult:
        return ContactsResult(contacts=self._store.list_contacts(), emit_json=payload.emit_json)


class ContactsProducer(BaseProducer):
    def _produce_success(self, payload: ContactsResult, diagnostics: Optional[Dict[str, Any]]) -> None:
        if payload.emit_json:
            print(json.dumps([asdict(c) for c in payload.contacts], ensure_ascii=False, indent=2))
            return
        if not payload.contacts:
            print("No contacts found. Add contacts with --add-contact option.")
            return
        print("Saved contacts:")
        for c in payload.contacts:
            print(f"  {c.name:<20} {c.number}")


@dataclass
class HistoryRequest:
    limit: int = HISTORY_DISPLAY_LIMIT
    emit_json: bool = False


@dataclass
class HistoryResult:
    entries: List[HistoryEntry]
    emit_json: bool = False


class HistoryProcessor(SafeProcessor[HistoryRequest, HistoryResult]):
    def __init__(self, store: ContactStore) -> None:
        self._store = store

    def _process_safe(self, payload: HistoryRequest) -> HistoryResult:
        return HistoryResult(entries=self._store.recent_history(payload.limit), emit_json=payload.emit_json)


class HistoryProducer(BaseProducer):
    def _produce_success(self, payload: HistoryResult, diagnostics: Optional[Dict[str, Any]]) -> None:
        if payload.emit_json:
            print(json.dumps([asdict(e) for e in payload.entries], indent=2))
            return
        if not payload.entries:
            print("No call history found.")
            return
        print("Recent call history:")
        for e in payload.entries:
            print(f"  {e.timestamp:<19} {e.number}")
