"""
API Routers package.
"""

from . import story, inspiration

__all__ = ["story", "inspiration"]
