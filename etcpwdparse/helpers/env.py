"""Helpers to read environment variables consistently."""

from __future__ import annotations

import os
from typing import Optional

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def get_env_bool(name: str, default: Optional[bool] = None) -> Optional[bool]:
    """Interpret ``name`` as a boolean when it is set."""

    value = os.getenv(name)
    if value is None:
        return default
    normalized = value.strip().lower()
    if not normalized:
        return default
    if normalized in _TRUTHY:
        return True
    if normalized in _FALSY:
        return False
    return default


def get_env_str(name: str, default: Optional[str] = None) -> Optional[str]:
    """Return the stripped value of ``name``, or ``default`` when unset or blank."""

    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped or default


__all__ = [
    "get_env_bool",
    "get_env_str",
]
