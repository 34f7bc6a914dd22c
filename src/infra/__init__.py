"""
Infrastructure module - configuration and logging.
"""

from .config import AppConfig, load_config
from .logging_config import setup_logging

__all__ = [
    "AppConfig",
    "load_config",
    "setup_logging",
]
