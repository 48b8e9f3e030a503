"""Runtime configuration for the voice call CLI.

Precedence, lowest to highest: built-in defaults, YAML config file,
VOICECALL_* environment variables, command-line flags.

Example ~/.config/voicecall/config.yaml:

    default_browser: safari
    contacts_file: ~/Documents/voice-contacts.txt
    max_history: 100
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from core.cli_errors import ConfigError
from core.yamlio import load_config

from .constants import (
    BROWSERS,
    DEFAULT_BROWSER,
    DEFAULT_CONTACTS_FILE,
    DEFAULT_HISTORY_FILE,
    MAX_HISTORY_ENTRIES,
)

ENV_CONFIG = "VOICECALL_CONFIG"
ENV_OVERRIDES = {
    "VOICECALL_DEFAULT_BROWSER": "default_browser",
    "VOICECALL_CONTACTS_FILE": "contacts_file",
    "VOICECALL_HISTORY_FILE": "history_file",
    "VOICECALL_MAX_HISTORY": "max_history",
}
CONFIG_KEYS = frozenset(ENV_OVERRIDES.values())


@dataclass(frozen=True)
class CallConfig:
    contacts_file: Path = field(default_factory=lambda: Path(DEFAULT_CONTACTS_FILE).expanduser())
    history_file: Path = field(default_factory=lambda: Path(DEFAULT_HISTORY_FILE).expanduser())
    max_history: int = MAX_HISTORY_ENTRIES
    default_browser: str = DEFAULT_BROWSER
    verbose: bool = False
    dry_run: bool = False


def default_config_path(environ: Optional[Mapping[str, str]] = None) -> Path:
    env = os.environ if environ is None else environ
    explicit = env.get(ENV_CONFIG)
    if explicit:
        return Path(explicit).expanduser()
    xdg = env.get("XDG_CONFIG_HOME")
    root = Path(xdg).expanduser() if xdg else Path("~/.config").expanduser()
    return root / "voicecall" / "config.yaml"


def _coerce(values: Dict[str, Any], source: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key, value in values.items():
        if key not in CONFIG_KEYS:
            raise ConfigError(f"Unknown setting '{key}' in {source}", hint=f"Known settings: {', '.join(sorted(CONFIG_KEYS))}")
        if value is None:
            continue
        if key == "default_browser":
            browser = str(value).strip().lower()
            if browser not in BROWSERS:
                raise ConfigError(
                    f"Unknown default_browser '{value}' in {source}",
                    hint=f"Choose one of: {', '.join(BROWSERS)}",
                )
            out[key] = browser
        elif key == "max_history":
            try:
                limit = int(value)
            except (TypeError, ValueError):
                raise ConfigError(f"max_history must be an integer in {source}, got {value!r}") from None
            if limit < 1:
                raise ConfigError(f"max_history must be at least 1 in {source}")
            out[key] = limit
        else:
            out[key] = Path(str(value)).expanduser()
    return out


def load_call_config(
    config_path: Optional[str] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
    verbose: bool = False,
    dry_run: bool = False,
) -> CallConfig:
    """Build a CallConfig from the config file, environment and CLI flags.

    A missing default config file is fine; an explicitly named one must exist.
    """
    env = os.environ if environ is None else environ
    if config_path:
        path = Path(config_path).expanduser()
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")
    else:
        path = default_config_path(env)

    settings = _coerce(load_config(path), str(path))
    env_values = {key: env[name] for name, key in ENV_OVERRIDES.items() if env.get(name)}
    settings.update(_coerce(env_values, "environment"))

    return replace(CallConfig(), verbose=verbose, dry_run=dry_run, **settings)
