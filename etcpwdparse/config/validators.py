"""
Reusable validation helpers for configuration values.

Every helper raises :class:`ConfigValidationError` with a ``details``
mapping describing the rejected value.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Set

from etcpwdparse.exceptions import ConfigValidationError


def validate_choice(value: str, valid_choices: Set[str], field_name: str) -> None:
    """
    Check that a single value is one of the allowed options.

    Args:
        value: Value to validate.
        valid_choices: Allowed values.
        field_name: Field name used in the error message.
    """
    if value not in valid_choices:
        raise ConfigValidationError(
            f"Invalid {field_name}: {value}. Use one of: {', '.join(sorted(valid_choices))}",
            details={"value": value, "valid_choices": sorted(valid_choices)},
        )


def validate_not_empty(value: Any, field_name: str) -> None:
    """Reject empty strings and collections."""
    if not value:
        raise ConfigValidationError(f"{field_name} must not be empty")


def validate_type(value: Any, expected_type: type | tuple[type, ...], field_name: str) -> None:
    """
    Strictly check that the value has the expected type.

    No implicit conversion is performed (``"true"`` is not a bool). ``None``
    is accepted and left to the dataclass default.

    Raises:
        ConfigValidationError: If the type does not match.
    """
    if value is None:
        return

    if not isinstance(value, expected_type):
        types = expected_type if isinstance(expected_type, tuple) else (expected_type,)
        expected = " or ".join(t.__name__ for t in types)
        raise ConfigValidationError(
            f"{field_name} must be of type {expected}.",
            details={
                "value": value,
                "expected": expected,
                "got": type(value).__name__,
            },
        )


def ensure_parent_exists(path: Optional[str | Path]) -> Optional[Path]:
    """
    Create the parent directory of a file path.

    Returns:
        The expanded path, or None when ``path`` is None.
    """
    if path is None:
        return None
    resolved = Path(path).expanduser()
    resolved.parent.mkdir(parents=True, exist_ok=True)
    return resolved
