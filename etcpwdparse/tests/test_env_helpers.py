"""Tests for the environment helpers."""

from __future__ import annotations

import os
import unittest
from unittest.mock import patch

from etcpwdparse.helpers import get_env_bool, get_env_str


class EnvHelperTests(unittest.TestCase):
    """Conversion rules for ETCPWDPARSE_* style variables."""

    def test_get_env_bool(self) -> None:
        cases = {"1": True, "TRUE": True, " on ": True, "no": False, "0": False, "maybe": None, "": None}
        for raw, expected in cases.items():
            with self.subTest(raw=raw):
                with patch.dict(os.environ, {"ETCPWDPARSE_TEST_FLAG": raw}):
                    self.assertEqual(get_env_bool("ETCPWDPARSE_TEST_FLAG"), expected)

    def test_get_env_bool_default_when_unset(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            self.assertTrue(get_env_bool("ETCPWDPARSE_TEST_FLAG", True))

    def test_get_env_str(self) -> None:
        with patch.dict(os.environ, {"ETCPWDPARSE_TEST_VALUE": "  /etc/passwd  "}):
            self.assertEqual(get_env_str("ETCPWDPARSE_TEST_VALUE"), "/etc/passwd")
        with patch.dict(os.environ, {"ETCPWDPARSE_TEST_VALUE": "   "}):
            self.assertEqual(get_env_str("ETCPWDPARSE_TEST_VALUE", "fallback"), "fallback")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
