"""
API Dependencies package.

Cross-cutting concerns: authentication and provider injection.
"""

from .auth import verify_api_key, auth_enabled
from .providers import get_config, get_provider

__all__ = ["verify_api_key", "auth_enabled", "get_config", "get_provider"]
