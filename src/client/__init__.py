"""
Terminal client: in-memory session state and an HTTP client for the API.
"""

from .session import StorySession
from .api_client import StoryWeaverClient, ClientRequestError

__all__ = ["StorySession", "StoryWeaverClient", "ClientRequestError"]
