"""Small helpers shared between modules."""

from .env import get_env_bool, get_env_str

__all__ = [
    "get_env_bool",
    "get_env_str",
]
