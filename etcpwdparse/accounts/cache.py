"""In-memory passwd cache with lookups by username and uid."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Dict, Iterator, Optional, Tuple

from etcpwdparse.config.constants import COMMENT_PREFIX, DEFAULT_PASSWD_PATH
from etcpwdparse.exceptions import PasswdFormatError, PasswdReadError, UserNotFoundError
from etcpwdparse.logging_service import PasswdLogger, get_logger

from .entry import PasswdEntry
from .parser import parse_passwd_line

if TYPE_CHECKING:
    from etcpwdparse.config.models import CacheConfig


class PasswdCache:
    """Entries of a passwd file plus name and uid indexes.

    Only the local file is read; accounts served by LDAP or other NSS
    sources are not visible here.

    When a username or uid appears more than once, the index points at the
    last occurrence in file order while :meth:`list_entries` keeps them all.

    A load builds its results aside and swaps them in only once the whole
    file has been processed, so a failed load leaves the previous contents
    untouched. The swap is not atomic across threads; callers sharing a
    cache between threads must serialize reloads and lookups themselves.
    """

    def __init__(
        self,
        skip_malformed: bool = False,
        *,
        default_path: str | Path = DEFAULT_PASSWD_PATH,
        logger: Optional[PasswdLogger] = None,
    ) -> None:
        self._skip_malformed = skip_malformed
        self._default_path = Path(default_path)
        self._logger = logger or get_logger()
        self._entries: Tuple[PasswdEntry, ...] = ()
        self._by_name: Dict[str, PasswdEntry] = {}
        self._by_uid: Dict[int, PasswdEntry] = {}
        self._loaded_path: Optional[Path] = None

    @classmethod
    def from_config(cls, config: "CacheConfig", *, logger: Optional[PasswdLogger] = None) -> "PasswdCache":
        """Build an empty cache from a :class:`CacheConfig`."""

        return cls(config.skip_malformed, default_path=config.passwd_path, logger=logger)

    @classmethod
    def new_loaded(cls, path: str | Path = DEFAULT_PASSWD_PATH) -> "PasswdCache":
        """Return a cache loaded from ``path`` that rejects malformed lines.

        Raises:
            PasswdReadError: If the file cannot be read.
            PasswdFormatError: If any line is malformed.
        """

        cache = cls(False, default_path=path)
        cache.load_default()
        return cache

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @property
    def skip_malformed(self) -> bool:
        return self._skip_malformed

    @property
    def default_path(self) -> Path:
        return self._default_path

    @property
    def loaded_path(self) -> Optional[Path]:
        """Path of the last successful load, or None."""

        return self._loaded_path

    @property
    def is_loaded(self) -> bool:
        return self._loaded_path is not None

    def load_default(self, path: str | Path | None = None) -> None:
        """Load from ``path``, or from :attr:`default_path` when omitted."""

        self.load_from_path(path if path is not None else self._default_path)

    def load_from_path(self, path: str | Path) -> None:
        """Read ``path`` and replace the cached content.

        Blank lines and lines starting with ``#`` are ignored.

        Raises:
            PasswdReadError: If the file cannot be opened, read or decoded.
            PasswdFormatError: If a line is malformed and ``skip_malformed``
                is disabled. ``line_number`` is set on the error.
        """

        source = Path(path)
        log = self._logger.bind(path=str(source))
        log.debug("Loading passwd file", skip_malformed=self._skip_malformed)

        try:
            with source.open("r", encoding="utf-8", newline="") as handle:
                content = handle.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise PasswdReadError(
                source,
                str(exc),
                errno=getattr(exc, "errno", None),
                strerror=getattr(exc, "strerror", None),
            ) from exc

        entries: list[PasswdEntry] = []
        by_name: Dict[str, PasswdEntry] = {}
        by_uid: Dict[int, PasswdEntry] = {}
        skipped = 0

        for line_number, raw_line in enumerate(content.split("\n"), start=1):
            line = raw_line.strip()
            if not line or line.startswith(COMMENT_PREFIX):
                continue
            try:
                entry = parse_passwd_line(line)
            except PasswdFormatError as exc:
                exc.at_line(line_number)
                if not self._skip_malformed:
                    raise
                skipped += 1
                log.debug("Skipped malformed line", line_number=line_number, reason=exc.message)
                continue
            entries.append(entry)
            by_name[entry.username] = entry
            by_uid[entry.uid] = entry

        self._entries = tuple(entries)
        self._by_name = by_name
        self._by_uid = by_uid
        self._loaded_path = source
        log.debug("Loaded passwd file", entries=len(entries), skipped=skipped)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def lookup_by_name(self, name: str) -> Optional[PasswdEntry]:
        """Return the entry for ``name``, or None."""

        return self._by_name.get(name)

    def lookup_by_uid(self, uid: int) -> Optional[PasswdEntry]:
        """Return the entry for ``uid``, or None."""

        return self._by_uid.get(uid)

    def uid_for_username(self, name: str) -> int:
        """Shortcut returning the uid of ``name``, e.g. for ``os.chown``.

        Raises:
            UserNotFoundError: If no entry has that username.
        """

        return self._require(name).uid

    def home_dir_for_username(self, name: str) -> str:
        """Shortcut returning the home directory of ``name``.

        Raises:
            UserNotFoundError: If no entry has that username.
        """

        return self._require(name).homedir

    def list_entries(self) -> Tuple[PasswdEntry, ...]:
        """Return every entry in file order, duplicates included."""

        return self._entries

    def _require(self, name: str) -> PasswdEntry:
        entry = self.lookup_by_name(name)
        if entry is None:
            raise UserNotFoundError(name)
        return entry

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[PasswdEntry]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(entries={len(self._entries)}, loaded_path={self._loaded_path!r})"


__all__ = ["PasswdCache"]
