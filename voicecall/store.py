"""Contact list and call history backed by plain text files.

Contacts file: one ``name:number`` record per line, in insertion order.
History file: one ``timestamp:number`` record per line, oldest first,
trimmed to the most recent ``max_history`` entries on every append.

Writes go to a temp file beside the target and are moved into place with
os.replace, so a reader sees either the old or the new file. The existing
file's permission bits are carried over (new files get 0644) and a
symlinked file is updated through its link.
"""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Tuple

from .constants import MAX_HISTORY_ENTRIES, TIMESTAMP_FORMAT
from .errors import InvalidInput, StoreWriteFailure

LOG = logging.getLogger(__name__)

NEW_FILE_MODE = 0o644


@dataclass(frozen=True)
class Contact:
    name: str
    number: str

    def to_line(self) -> str:
        return f"{self.name}:{self.number}"


@dataclass(frozen=True)
class HistoryEntry:
    timestamp: str  # local time, ISO-like
    number: str

    def to_line(self) -> str:
        return f"{self.timestamp}:{self.number}"


def validate_contact_name(name: str) -> str:
    if not name or not name.strip():
        raise InvalidInput("Contact name must not be empty")
    if ":" in name or "\n" in name or "\r" in name:
        raise InvalidInput(
            f"Contact name cannot contain ':' or line breaks: {name!r}",
            hint="Pick a name without colons",
        )
    return name


def _read_records(path: Path) -> List[Tuple[str, str]]:
    """Split each non-blank line on its last ':'.

    Lines without a separator, or with nothing on one side of it, are skipped.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (FileNotFoundError, NotADirectoryError):
        return []
    records: List[Tuple[str, str]] = []
    for line in text.splitlines():
        if not line.strip():
            continue
        key, sep, value = line.rpartition(":")
        value = value.strip()
        if not sep or not key or not value:
            LOG.debug("Skipping malformed line in %s: %r", path, line)
            continue
        records.append((key, value))
    return records


def _atomic_write(path: Path, lines: Iterable[str]) -> None:
    """Replace ``path`` with ``lines``, keeping its permissions.

    A symlinked file is written through to its target so the link survives.
    """
    path = Path(os.path.realpath(path))
    try:
        mode = stat.S_IMODE(path.stat().st_mode)
    except OSError:
        mode = NEW_FILE_MODE
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
    except OSError as exc:
        raise StoreWriteFailure(f"Cannot write to {path.parent}: {exc}") from exc
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            os.chmod(tmp_name, mode)
            for line in lines:
                fh.write(line + "\n")
        os.replace(tmp_name, path)
    except OSError as exc:
        try:
            os.unlink(tmp_name)
        except OSError:
            pass
        raise StoreWriteFailure(f"Failed to update {path}: {exc}") from exc


class ContactStore:
    """Owns the contacts and history files.

    With ``dry_run`` set, mutating calls return what they would have written
    without touching disk.
    """

    def __init__(
        self,
        contacts_path: Path,
        history_path: Path,
        *,
        max_history: int = MAX_HISTORY_ENTRIES,
        dry_run: bool = False,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        if max_history < 1:
            raise ValueError("max_history must be at least 1")
        self.contacts_path = Path(contacts_path).expanduser()
        self.history_path = Path(history_path).expanduser()
        self.max_history = max_history
        self.dry_run = dry_run
        self._clock = clock or datetime.now

    @classmethod
    def from_config(cls, config, clock: Optional[Callable[[], datetime]] = None) -> "ContactStore":
        return cls(
            config.contacts_file,
            config.history_file,
            max_history=config.max_history,
            dry_run=config.dry_run,
            clock=clock,
        )

    # -- contacts ---------------------------------------------------------

    def list_contacts(self) -> List[Contact]:
        return [Contact(name=k, number=v) for k, v in _read_records(self.contacts_path)]

    def lookup(self, name: str) -> Optional[str]:
        """Return the stored number for ``name``: exact case first, then case-insensitive."""
        contacts = self.list_contacts()
        if not contacts:
            return None
        LOG.debug("Looking up contact: %s", name)
        for contact in contacts:
            if contact.name == name:
                return contact.number
        folded = name.casefold()
        for contact in contacts:
            if contact.name.casefold() == folded:
                return contact.number
        return None

    def add_or_replace(self, name: str, number: str) -> Contact:
        validate_contact_name(name)
        contact = Contact(name=name, number=number)
        existing = self.list_contacts()
        kept = [c for c in existing if c.name != name]
        if len(kept) != len(existing):
            LOG.warning("Contact '%s' already exists, updating...", name)
        if self.dry_run:
            LOG.debug("Dry run: not writing contact %s -> %s", name, number)
            return contact
        kept.append(contact)
        _atomic_write(self.contacts_path, (c.to_line() for c in kept))
        LOG.debug("Contact saved: %s -> %s", name, number)
        return contact

    # -- history ----------------------------------------------------------

    def history(self) -> List[HistoryEntry]:
        return [HistoryEntry(timestamp=k, number=v) for k, v in _read_records(self.history_path)]

    def record_history(self, number: str) -> HistoryEntry:
        entry = HistoryEntry(timestamp=self._clock().strftime(TIMESTAMP_FORMAT), number=number)
        if self.dry_run:
            return entry
        LOG.debug("Adding to call history: %s", number)
        entries = self.history()
        entries.append(entry)
        _atomic_write(self.history_path, (e.to_line() for e in entries[-self.max_history:]))
        return entry

    def recent_history(self, limit: int) -> List[HistoryEntry]:
        """Up to ``limit`` most recent entries, oldest first."""
        if limit <= 0:
            return []
        return self.history()[-limit:]
