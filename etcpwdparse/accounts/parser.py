"""Parsing of single passwd lines."""

from __future__ import annotations

import re

from etcpwdparse.config.constants import FIELD_COUNT, FIELD_SEPARATOR
from etcpwdparse.exceptions import PasswdFormatError

from .entry import PasswdEntry

# int() would also take underscores and non-ASCII digits.
_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_passwd_line(line: str) -> PasswdEntry:
    """Parse a ``username:password:uid:gid:info:homedir:shell`` line.

    Every field is stripped of surrounding whitespace; empty fields are kept
    as empty strings.

    Raises:
        PasswdFormatError: If the line does not have exactly seven fields or
            the uid/gid fields are not base-10 integers.
    """

    parts = [part.strip() for part in line.strip().split(FIELD_SEPARATOR)]
    if len(parts) != FIELD_COUNT:
        raise PasswdFormatError(
            f"Passwd line had wrong number of parts {len(parts)} != {FIELD_COUNT}",
            line=line,
        )

    username, password, raw_uid, raw_gid, info, homedir, shell = parts
    return PasswdEntry(
        username=username,
        password=password,
        uid=_parse_id(raw_uid, "uid", line),
        gid=_parse_id(raw_gid, "gid", line),
        info=info,
        homedir=homedir,
        shell=shell,
    )


def _parse_id(value: str, field: str, line: str) -> int:
    if not _INTEGER_PATTERN.fullmatch(value):
        raise PasswdFormatError(
            f"Passwd line had badly formatted {field} {value!r}",
            line=line,
            field=field,
        )
    return int(value)


__all__ = ["parse_passwd_line"]
