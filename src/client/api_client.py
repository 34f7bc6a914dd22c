"""
HTTP client for the StoryWeaver API.
"""

import logging
import os
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger("storyweaver")

DEFAULT_BASE_URL = "http://127.0.0.1:8000"
# Ideation plus two media renders can take well over a minute
DEFAULT_TIMEOUT = 180.0


class ClientRequestError(Exception):
    """Raised when the server answers with a non-2xx status."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"[{status_code}] {message}")


class StoryWeaverClient:
    """
    Thin wrapper around httpx.Client for the two generation endpoints.

    Usage:
        with StoryWeaverClient() as client:
            beat = client.request_story(session.build_story_request("start"))
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = base_url or os.getenv("STORYWEAVER_URL", DEFAULT_BASE_URL)
        headers = {}
        key = api_key or os.getenv("STORYWEAVER_API_KEY")
        if key:
            headers["X-API-Key"] = key
        self._http = httpx.Client(
            base_url=self.base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    def __enter__(self) -> "StoryWeaverClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def _post(self, path: str, body: Dict[str, Any], fallback_error: str) -> Dict[str, Any]:
        logger.debug(f"[Client] POST {path}")
        response = self._http.post(path, json=body)
        if response.is_success:
            return response.json()

        try:
            message = response.json().get("error") or fallback_error
        except (ValueError, AttributeError):
            message = fallback_error
        logger.warning(f"[Client] POST {path} failed: {response.status_code} {message}")
        raise ClientRequestError(response.status_code, message)

    def request_story(self, body: Dict[str, Any]) -> Dict[str, Any]:
        """POST /story; returns the beat dict."""
        return self._post("/story", body, "Failed to generate story beat.")

    def request_inspiration(self, body: Dict[str, Any]) -> Dict[str, Any]:
        """POST /inspiration; returns the kit dict."""
        return self._post("/inspiration", body, "Failed to craft inspiration kit.")
