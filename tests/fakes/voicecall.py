"""Fakes for the voice call OS capabilities (app probe, URL opener, command runner)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Set, Tuple

from voicecall.browser import AppProbe, BrowserBinding, CommandResult, CommandRunner, URLOpener
from voicecall.errors import ExternalOpenFailure


@dataclass
class FakeAppProbe(AppProbe):
    """Reports the given app names as installed and records every probe."""

    installed: Set[str] = field(default_factory=set)
    opener: bool = True
    probes: List[str] = field(default_factory=list)

    def is_installed(self, app_name: str) -> bool:
        self.probes.append(app_name)
        return app_name in self.installed

    def has_default_opener(self) -> bool:
        self.probes.append("default")
        return self.opener


@dataclass
class FakeURLOpener(URLOpener):
    opened: List[Tuple[str, BrowserBinding]] = field(default_factory=list)
    error: Optional[str] = None

    def open_url(self, url: str, binding: BrowserBinding) -> None:
        if self.error:
            raise ExternalOpenFailure(self.error)
        self.opened.append((url, binding))


@dataclass
class FakeCommandRunner(CommandRunner):
    result: CommandResult = field(default_factory=lambda: CommandResult(stdout="", stderr="", returncode=0))
    calls: List[List[str]] = field(default_factory=list)

    def run(self, cmd: Sequence[str], timeout: Optional[float] = None) -> CommandResult:
        self.calls.append(list(cmd))
        return self.result


def make_probe(*app_names: str, opener: bool = True) -> FakeAppProbe:
    return FakeAppProbe(installed=set(app_names), opener=opener)
