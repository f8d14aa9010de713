"""
Typed configuration models.

Each model is a dataclass validated in ``__post_init__`` and built from
plain mappings (parsed YAML) through ``from_dict``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from etcpwdparse.config.constants import DEFAULT_PASSWD_PATH, LEVEL_VALUES
from etcpwdparse.config.validators import (
    ensure_parent_exists,
    validate_choice,
    validate_not_empty,
    validate_type,
)


@dataclass
class LoggerConfig:
    """Settings for :class:`etcpwdparse.logging_service.PasswdLogger`."""

    name: str = "etcpwdparse"
    min_level: str = "INFO"
    log_file: Optional[Path] = None
    overwrite_file: bool = False
    show_time: bool = True
    use_colors: bool = True
    rich_traceback: bool = False

    def __post_init__(self):
        self.min_level = self.min_level.upper()
        validate_choice(self.min_level, set(LEVEL_VALUES), "min_level")
        if self.log_file:
            self.log_file = ensure_parent_exists(self.log_file)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> LoggerConfig:
        clean = {k: v for k, v in data.items() if k in cls.__annotations__}

        if "name" in clean: validate_type(clean["name"], str, "logging.name")
        if "min_level" in clean: validate_type(clean["min_level"], str, "logging.min_level")
        if "log_file" in clean: validate_type(clean["log_file"], (str, Path), "logging.log_file")
        if "overwrite_file" in clean: validate_type(clean["overwrite_file"], bool, "logging.overwrite_file")
        if "show_time" in clean: validate_type(clean["show_time"], bool, "logging.show_time")
        if "use_colors" in clean: validate_type(clean["use_colors"], bool, "logging.use_colors")
        if "rich_traceback" in clean: validate_type(clean["rich_traceback"], bool, "logging.rich_traceback")

        if clean.get("log_file"):
            clean["log_file"] = Path(clean["log_file"])

        return cls(**{k: v for k, v in clean.items() if v is not None})


@dataclass
class CacheConfig:
    """Settings used to build a :class:`etcpwdparse.accounts.PasswdCache`."""

    passwd_path: Path = Path(DEFAULT_PASSWD_PATH)
    skip_malformed: bool = False

    def __post_init__(self):
        validate_not_empty(str(self.passwd_path), "passwd_path")
        self.passwd_path = Path(self.passwd_path)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> CacheConfig:
        clean = {k: v for k, v in data.items() if k in cls.__annotations__}

        if "passwd_path" in clean: validate_type(clean["passwd_path"], (str, Path), "cache.passwd_path")
        if "skip_malformed" in clean: validate_type(clean["skip_malformed"], bool, "cache.skip_malformed")

        return cls(**{k: v for k, v in clean.items() if v is not None})


@dataclass
class AppConfig:
    """
    Root configuration.
    Aggregates the cache and logging settings.
    """

    cache: Optional[CacheConfig] = None
    logging: Optional[LoggerConfig] = None

    def __post_init__(self):
        if self.cache is None: self.cache = CacheConfig()
        if self.logging is None: self.logging = LoggerConfig()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> AppConfig:
        cache = data.get("cache") or {}
        logging = data.get("logging") or {}
        validate_type(cache, dict, "cache")
        validate_type(logging, dict, "logging")
        return cls(
            cache=CacheConfig.from_dict(cache),
            logging=LoggerConfig.from_dict(logging),
        )
