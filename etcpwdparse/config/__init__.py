"""
Configuration package.

Use ``get_config()`` to obtain the process-wide configuration.
"""

from typing import Optional

from etcpwdparse.config.constants import DEFAULT_PASSWD_PATH, LEVEL_VALUES
from etcpwdparse.config.loader import ConfigLoader
from etcpwdparse.config.models import AppConfig, CacheConfig, LoggerConfig

_CONFIG_INSTANCE: Optional[AppConfig] = None


def get_config(reload: bool = False, config_path: Optional[str] = None) -> AppConfig:
    """
    Return the global configuration, loading it on first use.

    Args:
        reload: When True, read the file and environment again.
        config_path: Optional path to the YAML file.
    """
    global _CONFIG_INSTANCE

    if _CONFIG_INSTANCE is None or reload:
        _CONFIG_INSTANCE = ConfigLoader.load(config_path)

    return _CONFIG_INSTANCE


__all__ = [
    "get_config",
    "AppConfig",
    "CacheConfig",
    "LoggerConfig",
    "ConfigLoader",
    "DEFAULT_PASSWD_PATH",
    "LEVEL_VALUES",
]
