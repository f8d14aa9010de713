"""Passwd entries, the line parser and the lookup cache."""

from .cache import PasswdCache
from .entry import PasswdEntry
from .parser import parse_passwd_line

__all__ = [
    "PasswdCache",
    "PasswdEntry",
    "parse_passwd_line",
]
