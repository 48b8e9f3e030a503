"""Shared test fixtures and utilities.

This module provides common helpers to simplify testing across the
assistant test suite.
"""

from __future__ import annotations

import io
import subprocess
from contextlib import contextmanager, redirect_stderr, redirect_stdout
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable, Optional, Sequence

REPO_ROOT = Path(__file__).resolve().parents[1]


# -----------------------------------------------------------------------------
# Path helpers
# -----------------------------------------------------------------------------


def repo_root() -> Path:
    return REPO_ROOT


def run(cmd: Sequence[str], cwd: Optional[str] = None, env: Optional[dict] = None):
    return subprocess.run(cmd, cwd=cwd, env=env, stdout=subprocess.PIPE, stderr=subprocess.PIPE, text=True)  # noqa: S603


# -----------------------------------------------------------------------------
# Output capture helpers
# -----------------------------------------------------------------------------


@contextmanager
def capture_stdout():
    """Context manager that captures stdout and yields a StringIO buffer."""
    buf = io.StringIO()
    with redirect_stdout(buf):
        yield buf


@contextmanager
def capture_output():
    """Capture stdout and stderr; yields (out, err) StringIO buffers."""
    out, err = io.StringIO(), io.StringIO()
    with redirect_stdout(out), redirect_stderr(err):
        yield out, err


# -----------------------------------------------------------------------------
# Voice call helpers
# -----------------------------------------------------------------------------


def ticking_clock(start: Optional[datetime] = None, step: timedelta = timedelta(minutes=1)) -> Callable[[], datetime]:
    """Clock that advances by ``step`` on every call."""
    state = {"now": start or datetime(2024, 1, 1, 9, 0, 0)}

    def _now() -> datetime:
        current = state["now"]
        state["now"] = current + step
        return current

    return _now


def make_store(tmp: str, *, dry_run: bool = False, max_history: int = 50, clock=None):
    from voicecall.store import ContactStore

    root = Path(tmp)
    return ContactStore(
        root / "contacts.txt",
        root / "history.txt",
        max_history=max_history,
        dry_run=dry_run,
        clock=clock or ticking_clock(),
    )
