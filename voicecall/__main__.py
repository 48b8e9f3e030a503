"""Voice Call CLI

Place a Google Voice call from the terminal.

  voicecall 8558701311
  voicecall -b safari "+44 20 7946 0958"
  voicecall --add-contact "Pizza Place" 8558701311
  voicecall "Pizza Place"
  voicecall --history | --list-contacts
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from core.cli_errors import UsageError, handle_error
from core.pipeline import run_pipeline

from . import __version__
from .browser import BrowserSelector, MacAppProbe, MacURLOpener
from .config import CallConfig, load_call_config
from .constants import BROWSERS, HISTORY_DISPLAY_LIMIT
from .pipeline import (
    CallProcessor,
    CallProducer,
    CallRequest,
    ContactsProcessor,
    ContactsProducer,
    ContactsRequest,
    HistoryProcessor,
    HistoryProducer,
    HistoryRequest,
)
from .resolver import CallResolver
from .store import ContactStore

LOG = logging.getLogger(__name__)

EPILOG = """\
supported phone number formats:
  8558701311              10-digit US number
  +1-855-870-1311         international format with country code
  (855) 870-1311          US format with parentheses
  855.870.1311            dotted format

examples:
  voicecall 8558701311                             call using the default browser
  voicecall +44-20-7946-0958                       call a UK number
  voicecall -b safari 8558701311                   use Safari
  voicecall --add-contact "Pizza Place" 8558701311 call and save as a contact
  voicecall "Pizza Place"                          call a saved contact
  voicecall --dry-run 8558701311                   preview without calling

browsers:
  chrome (default), safari, firefox, edge, default (system default browser)

exit codes:
  0 success, 1 general error, 2 invalid input, 3 no browser available,
  4 network/browser launch error
"""


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="voicecall",
        description="Google Voice call launcher",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("target", nargs="?", help="Phone number to call or saved contact name")
    p.add_argument("-b", "--browser", choices=list(BROWSERS), help="Browser to use (falls back if not installed)")
    p.add_argument("-c", "--add-contact", dest="contact_name", metavar="NAME", help="Save the number as contact NAME")
    p.add_argument("--history", action="store_true", help="Show recent call history and exit")
    p.add_argument(
        "--history-limit",
        type=int,
        default=HISTORY_DISPLAY_LIMIT,
        metavar="N",
        help=f"Entries shown by --history (default {HISTORY_DISPLAY_LIMIT})",
    )
    p.add_argument("--list-contacts", action="store_true", help="Show saved contacts and exit")
    p.add_argument("--json", action="store_true", help="Emit JSON for --history/--list-contacts")
    p.add_argument("--config", help="Path to config YAML (default ~/.config/voicecall/config.yaml)")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable verbose output")
    p.add_argument("-d", "--dry-run", action="store_true", help="Show what would be done without executing")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def _configure_logging(verbose: bool) -> None:
    logger = logging.getLogger("voicecall")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        logger.addHandler(handler)


def build_resolver(config: CallConfig, store: Optional[ContactStore] = None) -> CallResolver:
    store = store or ContactStore.from_config(config)
    selector = BrowserSelector(MacAppProbe(), default_browser=config.default_browser)
    return CallResolver(store, selector, MacURLOpener(), config)


def cmd_list_contacts(args, config: CallConfig) -> int:
    request = ContactsRequest(emit_json=args.json)
    return run_pipeline(request, ContactsProcessor(ContactStore.from_config(config)), ContactsProducer())


def cmd_history(args, config: CallConfig) -> int:
    request = HistoryRequest(limit=args.history_limit, emit_json=args.json)
    return run_pipeline(request, HistoryProcessor(ContactStore.from_config(config)), HistoryProducer())


def cmd_call(args, config: CallConfig) -> int:
    if not args.target:
        raise UsageError("Phone number or contact name required", hint="Run voicecall --help for usage")
    request = CallRequest(target=args.target, browser=args.browser, contact_name=args.contact_name)
    return run_pipeline(request, CallProcessor(build_resolver(config)), CallProducer())


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the voice call CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    LOG.debug("Google Voice Call v%s", __version__)

    try:
        config = load_call_config(args.config, verbose=args.verbose, dry_run=args.dry_run)
        if args.list_contacts:
            return cmd_list_contacts(args, config)
        if args.history:
            return cmd_history(args, config)
        return cmd_call(args, config)
    except KeyboardInterrupt as e:
        return handle_error(e)
    except Exception as e:
        return handle_error(e, verbose=args.verbose)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
