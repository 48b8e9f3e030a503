"""Shared YAML read helpers for assistant CLIs."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, Union

from .cli_errors import ConfigError

__all__ = ["load_config"]

Pathish = Union[str, Path]


def _require_yaml():
    try:
        import yaml  # type: ignore

        return yaml
    except Exception as exc:  # pragma: no cover - runtime guard
        raise RuntimeError("PyYAML not installed. Run: pip install pyyaml") from exc


def load_config(path: Optional[Pathish]) -> Dict[str, Any]:
    """Load a YAML mapping into a dict; returns {} if missing/empty.

    Raises ConfigError when the file cannot be parsed or its root is not a
    mapping.
    """
    if not path:
        return {}
    yaml = _require_yaml()
    p = Path(path).expanduser()
    if not p.exists():
        return {}
    text = p.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Could not parse {p}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping at the top of {p}, got {type(data).__name__}")
    return data
