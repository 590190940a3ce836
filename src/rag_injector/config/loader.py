from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any, Dict


DEFAULT_CONFIG_PATH = Path("config.toml")


def load_raw_config(path: str | Path | None = None) -> Dict[str, Any]:
    """
    Load the injector config (config.toml by default).

    Returns an empty dict when the file is missing so every option falls back
    to its environment variable or built-in default.
    """
    target = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if not target.is_file():
        return {}

    with target.open("rb") as handle:
        return tomllib.load(handle)


def section(config: dict | None, name: str | None = None) -> Dict[str, Any]:
    """Return the ``[raginjector]`` table, or one of its sub-tables."""

    root = (config or {}).get("raginjector", {})
    if name is None:
        return root
    return root.get(name, {})


def as_bool(raw: Any) -> bool:
    return str(raw).strip().lower() in ("1", "true", "yes", "on")


def as_choice(raw: Any, allowed: tuple[str, ...], option: str) -> str:
    """Validate a closed enumeration value, raising on anything unknown."""

    value = str(raw).strip()
    if value not in allowed:
        raise ValueError(
            f"Invalid value {value!r} for {option}; expected one of: {', '.join(allowed)}"
        )
    return value


__all__ = ["load_raw_config", "section", "as_bool", "as_choice", "DEFAULT_CONFIG_PATH"]
