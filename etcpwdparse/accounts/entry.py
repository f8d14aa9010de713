"""Domain representation of one passwd line."""

from __future__ import annotations

from dataclasses import dataclass

from etcpwdparse.config.constants import FIELD_SEPARATOR


@dataclass(frozen=True, slots=True)
class PasswdEntry:
    """Immutable account record parsed from a passwd file.

    The password field is usually a placeholder (``x``) pointing at the
    shadow file; it is stored verbatim and never interpreted.
    """

    username: str
    password: str
    uid: int
    gid: int
    info: str
    homedir: str
    shell: str

    def to_line(self) -> str:
        """Return the entry in ``username:password:uid:gid:info:homedir:shell`` form."""

        return FIELD_SEPARATOR.join(
            (
                self.username,
                self.password,
                str(self.uid),
                str(self.gid),
                self.info,
                self.homedir,
                self.shell,
            )
        )


__all__ = ["PasswdEntry"]
