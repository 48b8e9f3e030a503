"""Voice call error kinds, each bound to its process exit code."""

from __future__ import annotations

from typing import Optional

from core.cli_errors import CLIError, ExitCode


class InvalidInput(CLIError):
    """Token is neither a saved contact nor something that looks like a number."""

    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message, ExitCode.INVALID_INPUT, hint)


class InvalidFormat(CLIError):
    """Number fails the length/shape rules."""

    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message, ExitCode.INVALID_INPUT, hint)


class NoBrowserAvailable(CLIError):
    def __init__(self, message: str = "No suitable browser found", hint: Optional[str] = None):
        super().__init__(message, ExitCode.NO_BROWSER, hint)


class ExternalOpenFailure(CLIError):
    """The `open` command (or whatever launches the browser) failed."""

    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message, ExitCode.NETWORK_ERROR, hint)


class StoreWriteFailure(CLIError):
    """Contacts or history file could not be written."""

    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message, ExitCode.ERROR, hint)
