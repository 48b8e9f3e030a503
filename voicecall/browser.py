"""Browser discovery and URL launching.

The OS-facing pieces (is an app installed? open this URL) sit behind
AppProbe and URLOpener so selection logic can be exercised with fakes.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from .constants import (
    APPLICATION_DIRS,
    BROWSERS,
    DEFAULT_BROWSER,
    DEFAULT_OPENER,
    FALLBACK_ORDER,
    NEW_TAB_BROWSERS,
    OPEN_TIMEOUT,
)
from .errors import ExternalOpenFailure, NoBrowserAvailable

LOG = logging.getLogger(__name__)


@dataclass
class CommandResult:
    stdout: str
    stderr: str
    returncode: int


class CommandRunner:
    """Simple abstraction to allow faking subprocess calls in tests."""

    def run(self, cmd: Sequence[str], timeout: Optional[float] = None) -> CommandResult:  # pragma: no cover - interface
        raise NotImplementedError


class SubprocessRunner(CommandRunner):
    def run(self, cmd: Sequence[str], timeout: Optional[float] = None) -> CommandResult:
        try:
            proc = subprocess.run(  # noqa: S603 - cmd is built from BROWSERS literals
                list(cmd),
                capture_output=True,
                text=True,
                timeout=timeout,
            )
            return CommandResult(stdout=proc.stdout, stderr=proc.stderr, returncode=proc.returncode)
        except subprocess.TimeoutExpired:
            return CommandResult(stdout="", stderr="timeout", returncode=124)
        except FileNotFoundError:
            return CommandResult(stdout="", stderr=f"{cmd[0]}: not found", returncode=127)


@dataclass(frozen=True)
class BrowserBinding:
    selected: str
    app_name: str

    @classmethod
    def for_key(cls, key: str) -> "BrowserBinding":
        return cls(selected=key, app_name=BROWSERS[key])

    @property
    def is_default(self) -> bool:
        return self.selected == DEFAULT_OPENER

    @property
    def display_name(self) -> str:
        return "system default browser" if self.is_default else self.app_name


class AppProbe:
    def is_installed(self, app_name: str) -> bool:  # pragma: no cover - interface
        raise NotImplementedError

    def has_default_opener(self) -> bool:  # pragma: no cover - interface
        raise NotImplementedError


class MacAppProbe(AppProbe):
    """Looks for ``<App>.app`` bundles under the standard Applications folders."""

    def __init__(
        self,
        search_dirs: Sequence[str] = APPLICATION_DIRS,
        which: Callable[[str], Optional[str]] = shutil.which,
    ) -> None:
        self._dirs = [Path(d).expanduser() for d in search_dirs]
        self._which = which

    def is_installed(self, app_name: str) -> bool:
        return any((d / f"{app_name}.app").is_dir() for d in self._dirs)

    def has_default_opener(self) -> bool:
        return self._which("open") is not None


class URLOpener:
    def open_url(self, url: str, binding: BrowserBinding) -> None:  # pragma: no cover - interface
        raise NotImplementedError


def open_command(url: str, binding: BrowserBinding) -> List[str]:
    if binding.is_default:
        return ["open", url]
    if binding.selected in NEW_TAB_BROWSERS:
        return ["open", "-na", binding.app_name, "--args", "--new-tab", url]
    return ["open", "-na", binding.app_name, url]


class MacURLOpener(URLOpener):
    """Launches the URL with macOS ``open``."""

    def __init__(self, runner: Optional[CommandRunner] = None, timeout: float = OPEN_TIMEOUT) -> None:
        self._runner = runner or SubprocessRunner()
        self._timeout = timeout

    def open_url(self, url: str, binding: BrowserBinding) -> None:
        cmd = open_command(url, binding)
        LOG.debug("Opening URL in %s: %s", binding.selected, url)
        result = self._runner.run(cmd, timeout=self._timeout)
        if result.returncode != 0:
            detail = (result.stderr or result.stdout).strip() or f"exit status {result.returncode}"
            raise ExternalOpenFailure(
                f"Could not open {binding.display_name}: {detail}",
                hint="Try --browser default or check that the browser launches normally",
            )


class BrowserSelector:
    """Picks a browser: requested, then configured default, then fallback order, then system opener.

    Availability is probed on every call; nothing is cached.
    """

    def __init__(self, probe: AppProbe, default_browser: Optional[str] = DEFAULT_BROWSER) -> None:
        self._probe = probe
        self._default_browser = default_browser

    def is_available(self, key: str) -> bool:
        LOG.debug("Checking browser availability: %s", key)
        if key == DEFAULT_OPENER:
            return self._probe.has_default_opener()
        app_name = BROWSERS.get(key)
        if app_name is None:
            LOG.error("Unknown browser: %s", key)
            return False
        found = self._probe.is_installed(app_name)
        LOG.debug("%s: %s", "Found browser" if found else "Browser not found", app_name)
        return found

    def pick(self, requested: Optional[str] = None) -> BrowserBinding:
        if requested:
            if self.is_available(requested):
                return BrowserBinding.for_key(requested)
            LOG.debug("Requested browser %s unavailable, falling back", requested)
        if self._default_browser and self._default_browser != requested:
            if self.is_available(self._default_browser):
                return BrowserBinding.for_key(self._default_browser)
        for key in FALLBACK_ORDER:
            if key in (requested, self._default_browser):
                continue
            if self.is_available(key):
                return BrowserBinding.for_key(key)
        if not self.is_available(DEFAULT_OPENER):
            raise NoBrowserAvailable(hint="Install a browser or make sure the macOS 'open' command is on PATH")
        return BrowserBinding.for_key(DEFAULT_OPENER)
