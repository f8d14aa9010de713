"""Tests for the configuration loader and models."""

from __future__ import annotations

import os
import pathlib
import tempfile
import unittest
from unittest.mock import patch

from etcpwdparse.config import AppConfig, CacheConfig, ConfigLoader, LoggerConfig, get_config
from etcpwdparse.exceptions import ConfigLoaderError, ConfigValidationError

_CLEAN_ENV = {k: v for k, v in os.environ.items() if not k.startswith("ETCPWDPARSE_")}


@patch.dict(os.environ, _CLEAN_ENV, clear=True)
class ConfigLoaderTests(unittest.TestCase):
    """Precedence: defaults, then YAML, then ETCPWDPARSE_* variables."""

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.tmp_dir = pathlib.Path(self._tmp.name)

    def write_yaml(self, content: str) -> pathlib.Path:
        path = self.tmp_dir / "etcpwdparse.yaml"
        path.write_text(content, encoding="utf-8")
        return path

    def test_missing_file_gives_defaults(self) -> None:
        config = ConfigLoader.load(self.tmp_dir / "absent.yaml")

        self.assertEqual(config.cache.passwd_path, pathlib.Path("/etc/passwd"))
        self.assertFalse(config.cache.skip_malformed)
        self.assertEqual(config.logging.min_level, "INFO")
        self.assertIsNone(config.logging.log_file)

    def test_yaml_values_are_applied(self) -> None:
        path = self.write_yaml(
            "cache:\n"
            "  passwd_path: /srv/chroot/etc/passwd\n"
            "  skip_malformed: true\n"
            "logging:\n"
            "  min_level: debug\n"
            "  use_colors: false\n"
            "  unknown_key: ignored\n"
        )

        config = ConfigLoader.load(path)

        self.assertEqual(config.cache.passwd_path, pathlib.Path("/srv/chroot/etc/passwd"))
        self.assertTrue(config.cache.skip_malformed)
        self.assertEqual(config.logging.min_level, "DEBUG")
        self.assertFalse(config.logging.use_colors)

    def test_environment_overrides_yaml(self) -> None:
        path = self.write_yaml("cache:\n  skip_malformed: false\nlogging:\n  min_level: INFO\n")
        log_file = self.tmp_dir / "logs" / "etcpwdparse.log"
        env = {
            "ETCPWDPARSE_SKIP_MALFORMED": "yes",
            "ETCPWDPARSE_PASSWD_PATH": "/tmp/passwd",
            "ETCPWDPARSE_LOG_LEVEL": "warning",
            "ETCPWDPARSE_LOG_FILE": str(log_file),
            "ETCPWDPARSE_LOG_COLOR": "0",
        }

        with patch.dict(os.environ, env):
            config = ConfigLoader.load(path)

        self.assertTrue(config.cache.skip_malformed)
        self.assertEqual(config.cache.passwd_path, pathlib.Path("/tmp/passwd"))
        self.assertEqual(config.logging.min_level, "WARNING")
        self.assertEqual(config.logging.log_file, log_file)
        self.assertTrue(log_file.parent.is_dir())
        self.assertFalse(config.logging.use_colors)

    def test_invalid_level_is_rejected(self) -> None:
        path = self.write_yaml("logging:\n  min_level: LOUD\n")

        with self.assertRaises(ConfigLoaderError) as ctx:
            ConfigLoader.load(path)
        self.assertIsInstance(ctx.exception.__cause__, ConfigValidationError)

    def test_wrong_type_is_rejected(self) -> None:
        path = self.write_yaml("cache:\n  skip_malformed: 'sometimes'\n")

        with self.assertRaises(ConfigLoaderError):
            ConfigLoader.load(path)

    def test_non_mapping_document_is_rejected(self) -> None:
        path = self.write_yaml("- just\n- a list\n")

        with self.assertRaises(ConfigLoaderError):
            ConfigLoader.load(path)

    def test_broken_yaml_is_rejected(self) -> None:
        path = self.write_yaml("cache: [unterminated\n")

        with self.assertRaises(ConfigLoaderError):
            ConfigLoader.load(path)

    def test_get_config_is_cached_until_reload(self) -> None:
        path = self.write_yaml("cache:\n  skip_malformed: true\n")

        first = get_config(reload=True, config_path=str(path))
        self.assertIs(get_config(), first)

        path.write_text("cache:\n  skip_malformed: false\n", encoding="utf-8")
        second = get_config(reload=True, config_path=str(path))
        self.assertIsNot(second, first)
        self.assertFalse(second.cache.skip_malformed)


class ConfigModelTests(unittest.TestCase):
    """Direct construction of the dataclasses."""

    def test_app_config_fills_sections(self) -> None:
        config = AppConfig()

        self.assertIsInstance(config.cache, CacheConfig)
        self.assertIsInstance(config.logging, LoggerConfig)

    def test_logger_level_is_normalized(self) -> None:
        self.assertEqual(LoggerConfig(min_level="success").min_level, "SUCCESS")

    def test_logger_rejects_unknown_level(self) -> None:
        with self.assertRaises(ConfigValidationError):
            LoggerConfig(min_level="verbose")

    def test_cache_config_converts_strings(self) -> None:
        self.assertEqual(CacheConfig(passwd_path="/etc/passwd").passwd_path, pathlib.Path("/etc/passwd"))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
