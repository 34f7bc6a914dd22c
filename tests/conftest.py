"""
Pytest configuration and shared fixtures.
"""

import copy
import os
from typing import Any, Dict, List, Optional

import pytest

from src.story.model_provider import GenerativeProvider, SpeechResult


SAMPLE_BEAT: Dict[str, Any] = {
    "title": "Rain on Glass",
    "narrative": "The city hums under a violet monsoon while Mara decodes the signal.",
    "choices": [
        {"id": "c1", "label": "Follow the signal", "description": "Trace it to the flooded transit hub."},
        {"id": "c2", "label": "Warn the council", "description": "Risk exposure to save the district."},
    ],
    "twist": "The signal is her own voice, recorded tomorrow.",
    "genreContext": "Speculative Fiction",
    "characterFocus": {
        "name": "Mara",
        "motivation": "Protect her brother",
        "conflict": "Her implant is failing",
    },
    "creativeFeedback": {
        "strengths": ["Vivid sensory setting"],
        "opportunities": ["Clarify the stakes for the council"],
        "pacingNote": "Tight opening, consider a breath before the twist.",
        "dialogueNote": "Give Mara one line of spoken doubt.",
    },
    "microGoals": ["Outline the signal's origin", "Sketch the brother's arc"],
    "suggestedDailyChallenge": "Write 200 words from the brother's view today.",
    "suggestedWeeklyChallenge": "Draft the council scene by Sunday.",
    "inspiration": {
        "imagePrompt": "Cinematic neon street in monsoon rain, teal and magenta lighting",
        "audioPrompt": "Slow synth pads, 70 BPM, distant thunder",
        "textSpark": "What if tomorrow could call you collect?",
    },
}

SAMPLE_IDEATION: Dict[str, Any] = {
    "imagePrompt": "A lighthouse made of glass at dusk, volumetric fog",
    "audioPrompt": "Solo cello over soft waves, 60 BPM",
    "textSpark": "The light only shines for those who are lost.",
    "vibeTags": ["moody", "coastal", "lonely"],
}


def make_beat(title: str = "Rain on Glass", **overrides: Any) -> Dict[str, Any]:
    """Deep copy of SAMPLE_BEAT with a different title and overrides."""
    beat = copy.deepcopy(SAMPLE_BEAT)
    beat["title"] = title
    beat.update(overrides)
    return beat


class FakeProvider(GenerativeProvider):
    """
    In-memory provider double.

    structured_results is consumed in order; an Exception instance is
    raised instead of returned. Every call is recorded.
    """

    def __init__(
        self,
        structured_results: Optional[List[Any]] = None,
        image: Optional[str] = "aW1hZ2U=",
        audio: bytes = b"ID3-audio",
        image_error: Optional[Exception] = None,
        speech_error: Optional[Exception] = None,
    ):
        self.structured_results = list(structured_results or [])
        self.image = image
        self.audio = audio
        self.image_error = image_error
        self.speech_error = speech_error
        self.structured_calls: List[Dict[str, Any]] = []
        self.image_calls: List[str] = []
        self.speech_calls: List[str] = []

    @property
    def provider_name(self) -> str:
        return "fake"

    async def generate_structured(self, system_prompt, user_prompt, schema_name, schema):
        self.structured_calls.append({
            "system_prompt": system_prompt,
            "user_prompt": user_prompt,
            "schema_name": schema_name,
            "schema": schema,
        })
        result = self.structured_results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    async def generate_image(self, prompt):
        self.image_calls.append(prompt)
        if self.image_error:
            raise self.image_error
        return self.image

    async def generate_speech(self, text):
        self.speech_calls.append(text)
        if self.speech_error:
            raise self.speech_error
        return SpeechResult(audio=self.audio, mime_type="audio/mpeg")


@pytest.fixture(autouse=True, scope="function")
def reset_auth_env():
    """
    Run every test with API auth disabled unless the test enables it.
    """
    original = {name: os.environ.get(name) for name in ("API_AUTH_ENABLED", "API_KEY")}
    os.environ["API_AUTH_ENABLED"] = "false"

    yield

    for name, value in original.items():
        if value is not None:
            os.environ[name] = value
        elif name in os.environ:
            del os.environ[name]


@pytest.fixture
def sample_beat():
    return make_beat()


@pytest.fixture
def fake_provider():
    return FakeProvider()


@pytest.fixture
def app_config():
    from src.infra.config import AppConfig
    return AppConfig(openai_api_key="test-key", log_dir=None)


@pytest.fixture
def api_client(fake_provider, app_config):
    """TestClient with provider and config overridden; lifespan not run."""
    from fastapi.testclient import TestClient
    from src.api.dependencies.providers import get_config, get_provider
    from src.api.main import app

    app.dependency_overrides[get_provider] = lambda: fake_provider
    app.dependency_overrides[get_config] = lambda: app_config
    client = TestClient(app)

    yield client

    app.dependency_overrides.clear()
