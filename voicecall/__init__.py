"""Voice call package.

Small CLI that places a Google Voice call from the terminal: resolves a
phone number or saved contact to a canonical dialable number, picks an
installed browser and opens the Google Voice dialer URL. Keeps a local
contact list and a short call history in plain text files.

Public CLI entry lives in voicecall.__main__.
"""

__all__ = [
    "__version__",
]

__version__ = "2.0.0"
