"""Exception hierarchy shared by every etcpwdparse module."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional


class EtcPasswdError(Exception):
    """Base class for all etcpwdparse errors."""

    def __init__(self, message: str, *, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
        return f"{self.message} ({details_str})"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# ==================== Passwd file ====================

class PasswdReadError(EtcPasswdError, OSError):
    """The passwd file could not be opened, read or decoded."""

    def __init__(
        self,
        path: str | Path,
        reason: str,
        *,
        errno: Optional[int] = None,
        strerror: Optional[str] = None,
    ):
        self.path = Path(path)
        self.reason = reason
        super().__init__(
            f"Could not read passwd file {self.path}",
            details={"reason": reason},
        )
        # OSError.__init__ above only received the message.
        self.errno = errno
        self.strerror = strerror or reason
        self.filename = str(self.path)


class PasswdFormatError(EtcPasswdError, ValueError):
    """A passwd line has the wrong field count or a non numeric id."""

    def __init__(self, message: str, *, line: str, field: Optional[str] = None):
        self.line = line
        self.field = field
        self.line_number: Optional[int] = None
        super().__init__(message, details={"field": field} if field else None)

    def at_line(self, line_number: int) -> "PasswdFormatError":
        """Record where the offending line sits in its file."""

        self.line_number = line_number
        self.details["line_number"] = line_number
        return self


class UserNotFoundError(EtcPasswdError, KeyError):
    """No entry exists for the requested username."""

    def __init__(self, username: str):
        self.username = username
        super().__init__(f"No such user with username {username!r}")


# ==================== Configuration ====================

class ConfigValidationError(EtcPasswdError, ValueError):
    """A configuration value has the wrong type or an unsupported value."""


class ConfigLoaderError(EtcPasswdError):
    """The configuration file could not be read or validated."""


__all__ = [
    "EtcPasswdError",
    "PasswdReadError",
    "PasswdFormatError",
    "UserNotFoundError",
    "ConfigValidationError",
    "ConfigLoaderError",
]
