"""Utility helpers shared by the harness configuration loader."""

from __future__ import annotations

import typing as typ

from .models import HarnessConfigError

TRUTHY = frozenset({"1", "true", "yes", "on"})
FALSY = frozenset({"", "0", "false", "no", "off"})


def _section(raw: typ.Mapping[str, typ.Any], name: str) -> dict[str, typ.Any]:
    """Return the mapping stored under ``name`` or an empty dict."""
    value = raw.get(name)
    if value is None:
        return {}
    if not isinstance(value, dict):
        msg = f"Section '{name}' must be a mapping."
        raise HarnessConfigError(msg)
    return dict(value)


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _coerce_bool(value: object, *, field: str) -> bool:
    """Interpret YAML booleans and common environment spellings."""
    match value:
        case bool():
            return value
        case int():
            return value != 0
        case str() as text:
            lowered = text.strip().lower()
            if lowered in TRUTHY:
                return True
            if lowered in FALSY:
                return False
    msg = f"'{field}' must be a boolean, got {value!r}."
    raise HarnessConfigError(msg)


def _coerce_int(value: object, *, field: str, minimum: int = 0) -> int:
    """Return ``value`` as an int no smaller than ``minimum``."""
    if isinstance(value, bool):
        msg = f"'{field}' must be an integer, got {value!r}."
        raise HarnessConfigError(msg)
    try:
        number = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        msg = f"'{field}' must be an integer, got {value!r}."
        raise HarnessConfigError(msg) from exc
    if number < minimum:
        msg = f"'{field}' must be >= {minimum}, got {number}."
        raise HarnessConfigError(msg)
    return number


def _coerce_port(value: object) -> int:
    """Return a TCP port; ``0`` asks the OS for a free one."""
    port = _coerce_int(value, field="port")
    if port > 65535:
        msg = f"'port' must be <= 65535, got {port}."
        raise HarnessConfigError(msg)
    return port


def _env_flag(env: typ.Mapping[str, str], name: str) -> bool:
    """Return ``True`` when environment variable ``name`` is set and truthy."""
    value = env.get(name)
    if value is None:
        return False
    return value.strip().lower() not in FALSY


__all__ = [
    "_coerce_bool",
    "_coerce_int",
    "_coerce_port",
    "_env_flag",
    "_optional_str",
    "_section",
]
