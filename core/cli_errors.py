"""Standardized CLI error codes and error handling.

Every failure a command can hit is a CLIError carrying the exit code the
process should end with, so handlers and pipelines never guess codes.
"""
from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional


class ExitCode(IntEnum):
    """Process exit codes."""
    SUCCESS = 0
    ERROR = 1
    INVALID_INPUT = 2
    NO_BROWSER = 3
    NETWORK_ERROR = 4
    INTERRUPTED = 130  # Standard for Ctrl+C


@dataclass
class CLIError(Exception):
    """CLI error with exit code and message."""
    message: str
    code: ExitCode = ExitCode.ERROR
    hint: Optional[str] = None

    def __str__(self) -> str:
        return self.message


class ConfigError(CLIError):
    """Configuration file or environment value is unusable."""
    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message, ExitCode.ERROR, hint)


class UsageError(CLIError):
    """Usage/argument error."""
    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message, ExitCode.INVALID_INPUT, hint)


def report_error(message: str, hint: Optional[str] = None) -> None:
    print(f"Error: {message}", file=sys.stderr)
    if hint:
        print(f"Hint: {hint}", file=sys.stderr)


def handle_error(error: BaseException, verbose: bool = False) -> int:
    """Handle an exception and return appropriate exit code.

    Args:
        error: The exception to handle.
        verbose: If True, print stack trace for unexpected errors.

    Returns:
        Exit code to use.
    """
    if isinstance(error, CLIError):
        report_error(error.message, error.hint)
        return int(error.code)

    if isinstance(error, KeyboardInterrupt):
        print("\nInterrupted.", file=sys.stderr)
        return int(ExitCode.INTERRUPTED)

    # Unexpected error
    report_error(str(error) or type(error).__name__)
    if verbose:
        import traceback
        traceback.print_exception(type(error), error, error.__traceback__)
    return int(ExitCode.ERROR)
