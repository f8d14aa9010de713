"""
Constants shared by the parser, the cache and the configuration layer.
"""

from typing import Dict

# ============================================================================
# Passwd format
# ============================================================================

# Standard location of the local account database.
DEFAULT_PASSWD_PATH: str = "/etc/passwd"

FIELD_SEPARATOR: str = ":"
FIELD_COUNT: int = 7
COMMENT_PREFIX: str = "#"

# ============================================================================
# Configuration
# ============================================================================

DEFAULT_CONFIG_FILENAME: str = "etcpwdparse.yaml"
ENV_PREFIX: str = "ETCPWDPARSE_"

# ============================================================================
# Logging
# ============================================================================

LEVEL_VALUES: Dict[str, int] = {
    "DEBUG": 10,
    "INFO": 20,
    "SUCCESS": 25,
    "WARNING": 30,
    "ERROR": 40,
    "CRITICAL": 50,
}
