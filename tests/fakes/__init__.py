"""Shared fake/mock objects for testing.

Modules:
    voicecall - FakeAppProbe, FakeURLOpener, FakeCommandRunner for the call launcher
"""

from __future__ import annotations

from tests.fakes.voicecall import FakeAppProbe, FakeCommandRunner, FakeURLOpener, make_probe

__all__ = [
    "FakeAppProbe",
    "FakeCommandRunner",
    "FakeURLOpener",
    "make_probe",
]
