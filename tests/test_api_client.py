"""
Tests for the StoryWeaver HTTP client.
"""

import json

import httpx
import pytest

from conftest import SAMPLE_IDEATION, make_beat
from src.client.api_client import ClientRequestError, StoryWeaverClient


def _client(handler, **kwargs):
    return StoryWeaverClient(base_url="http://test", transport=httpx.MockTransport(handler), **kwargs)


class TestStoryWeaverClient:
    """Tests for StoryWeaverClient."""

    def test_request_story_posts_body(self):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=make_beat("Next"))

        with _client(handler) as client:
            beat = client.request_story({"mode": "start"})

        assert beat["title"] == "Next"
        assert seen == {"path": "/story", "body": {"mode": "start"}}

    def test_request_inspiration(self):
        def handler(request):
            assert request.url.path == "/inspiration"
            return httpx.Response(200, json=dict(SAMPLE_IDEATION, audioBase64="YQ==", audioMimeType="audio/mpeg"))

        with _client(handler) as client:
            kit = client.request_inspiration({"theme": "t"})

        assert kit["textSpark"] == SAMPLE_IDEATION["textSpark"]

    def test_error_body_is_surfaced(self):
        def handler(request):
            return httpx.Response(400, json={"error": "Missing required fields: mode"})

        with _client(handler) as client:
            with pytest.raises(ClientRequestError) as exc_info:
                client.request_story({})

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Missing required fields: mode"

    def test_non_json_error_uses_fallback(self):
        def handler(request):
            return httpx.Response(502, text="Bad gateway")

        with _client(handler) as client:
            with pytest.raises(ClientRequestError) as exc_info:
                client.request_inspiration({})

        assert exc_info.value.message == "Failed to craft inspiration kit."

    def test_api_key_header(self):
        def handler(request):
            assert request.headers["X-API-Key"] == "secret"
            return httpx.Response(200, json=make_beat())

        with _client(handler, api_key="secret") as client:
            client.request_story({"mode": "start"})
