"""
Configuration loader.

Reads the YAML configuration file and applies environment overrides,
returning a validated :class:`AppConfig`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, Optional

import yaml

from etcpwdparse.config.constants import DEFAULT_CONFIG_FILENAME, ENV_PREFIX
from etcpwdparse.config.models import AppConfig
from etcpwdparse.exceptions import ConfigLoaderError, ConfigValidationError
from etcpwdparse.helpers import get_env_bool, get_env_str


class ConfigLoader:
    """Builds :class:`AppConfig` instances."""

    DEFAULT_FILENAME = DEFAULT_CONFIG_FILENAME

    # ENV_VAR suffix -> (path in the nested dict, reader)
    ENV_OVERRIDES: Dict[str, tuple[list[str], Callable[[str], Any]]] = {
        "LOG_LEVEL": (["logging", "min_level"], get_env_str),
        "LOG_FILE": (["logging", "log_file"], get_env_str),
        "LOG_COLOR": (["logging", "use_colors"], get_env_bool),
        "PASSWD_PATH": (["cache", "passwd_path"], get_env_str),
        "SKIP_MALFORMED": (["cache", "skip_malformed"], get_env_bool),
    }

    @classmethod
    def load(cls, path: Optional[Path | str] = None) -> AppConfig:
        """
        Load the full configuration.

        Precedence:
        1. Code defaults
        2. YAML file
        3. Environment variables (ETCPWDPARSE_*)

        Args:
            path: Optional path to the YAML file. A missing file yields defaults.

        Returns:
            AppConfig: Validated configuration.

        Raises:
            ConfigLoaderError: On parse, IO or validation errors.
        """
        config_path = Path(path) if path else Path(cls.DEFAULT_FILENAME)

        file_data = cls._read_yaml(config_path)
        merged_data = cls._apply_env_overrides(file_data)

        try:
            return AppConfig.from_dict(merged_data)
        except ConfigValidationError as e:
            raise ConfigLoaderError(
                f"Invalid configuration: {e}", details={"path": str(config_path)}
            ) from e

    @staticmethod
    def _read_yaml(path: Path) -> Dict[str, Any]:
        """Read the YAML file, returning an empty mapping when it does not exist."""
        if not path.exists():
            return {}

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigLoaderError(f"Could not read {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigLoaderError(
                f"Top level of {path} must be a mapping",
                details={"got": type(data).__name__},
            )
        return data

    @classmethod
    def _apply_env_overrides(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        """Apply ETCPWDPARSE_* overrides on a copy of ``data``."""
        out = {k: dict(v) if isinstance(v, dict) else v for k, v in data.items()}

        for suffix, (keys, reader) in cls.ENV_OVERRIDES.items():
            value = reader(f"{ENV_PREFIX}{suffix}")
            if value is not None:
                cls._set_nested(out, keys, value)

        return out

    @staticmethod
    def _set_nested(data: Dict[str, Any], keys: list, value: Any) -> None:
        current = data
        for key in keys[:-1]:
            current = current.setdefault(key, {})
        current[keys[-1]] = value
