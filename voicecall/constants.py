"""Voice call constants.

Browser bindings, storage defaults and the Google Voice URL template.
"""

from __future__ import annotations

# Browser key -> macOS application name ("default" is the system opener)
BROWSERS = {
    "chrome": "Google Chrome",
    "safari": "Safari",
    "firefox": "Firefox",
    "edge": "Microsoft Edge",
    "default": "default",
}

DEFAULT_OPENER = "default"

# Tried in order when neither the requested nor the configured browser is installed
FALLBACK_ORDER = ("chrome", "safari", "firefox", "edge")

DEFAULT_BROWSER = "chrome"

# Browsers that take the URL after `--args --new-tab`
NEW_TAB_BROWSERS = frozenset({"chrome", "firefox", "edge"})

APPLICATION_DIRS = ("/Applications", "~/Applications")

CALL_URL_TEMPLATE = "https://voice.google.com/calls?a=nc,{number}"

DEFAULT_CONTACTS_FILE = "~/.google-voice-contacts.txt"
DEFAULT_HISTORY_FILE = "~/.google-voice-history.txt"
MAX_HISTORY_ENTRIES = 50
HISTORY_DISPLAY_LIMIT = 20

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# Digit-count bounds for "+"-prefixed (E.164-style) numbers
INTERNATIONAL_MIN_DIGITS = 7
INTERNATIONAL_MAX_DIGITS = 15
DOMESTIC_DIGITS = 10

OPEN_TIMEOUT = 15.0
