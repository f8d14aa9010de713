"""
etcpwdparse - lookups over a local passwd file.

Loads an ``/etc/passwd`` style file into memory and answers lookups by
username or uid without going through NSS:

- accounts: PasswdEntry, the line parser and PasswdCache
- config: typed configuration loaded from YAML and the environment
- logging_service: rich based logger
- exceptions: error hierarchy
"""

from etcpwdparse.accounts import PasswdCache, PasswdEntry, parse_passwd_line
from etcpwdparse.config import DEFAULT_PASSWD_PATH, get_config
from etcpwdparse.exceptions import (
    ConfigLoaderError,
    ConfigValidationError,
    EtcPasswdError,
    PasswdFormatError,
    PasswdReadError,
    UserNotFoundError,
)
from etcpwdparse.logging_service import configure_logging, get_logger

__version__ = "1.0.0"

__all__ = [
    # Accounts
    "PasswdCache",
    "PasswdEntry",
    "parse_passwd_line",
    "DEFAULT_PASSWD_PATH",
    # Exceptions
    "EtcPasswdError",
    "PasswdReadError",
    "PasswdFormatError",
    "UserNotFoundError",
    "ConfigValidationError",
    "ConfigLoaderError",
    # Ambient
    "get_config",
    "get_logger",
    "configure_logging",
    # Version
    "__version__",
]
