"""Utility functions module."""

from shared.utils.logging import setup_logging, intercept_std_logging
from shared.utils.env import get_env, get_env_int, get_env_bool

__all__ = [
    "setup_logging",
    "intercept_std_logging",
    "get_env",
    "get_env_int",
    "get_env_bool",
]
