"""
Tests for story_service and inspiration_service.
"""

import base64
import json

import pytest

from conftest import SAMPLE_IDEATION, FakeProvider, make_beat
from src.api.schemas.inspiration import InspirationRequest
from src.api.schemas.story import StoryBeat, StoryRequest
from src.api.services.inspiration_service import generate_inspiration_kit
from src.api.services.story_service import condense_beat, condense_history, generate_story_beat
from src.story.errors import ProviderResponseError
from src.story.prompts import INSPIRATION_SCHEMA_NAME, STORY_SCHEMA_NAME, STORY_SYSTEM_PROMPT


def _beats(count):
    return [StoryBeat.model_validate(make_beat(f"Beat {i}")) for i in range(count)]


class TestCondenseHistory:
    """Tests for condense_history."""

    @pytest.mark.parametrize("count", [0, 1, 3, 4, 7])
    def test_keeps_at_most_three(self, count):
        history = condense_history(_beats(count), None)

        assert len(history) == min(3, count)

    def test_keeps_the_most_recent_in_order(self):
        history = condense_history(_beats(5), None)

        assert [entry["title"] for entry in history] == ["Beat 2", "Beat 3", "Beat 4"]

    def test_custom_limit(self):
        assert len(condense_history(_beats(5), None, limit=1)) == 1
        assert condense_history(_beats(5), None, limit=0) == []

    def test_projection_fields(self):
        entry = condense_beat(StoryBeat.model_validate(make_beat()), "c2")

        assert entry == {
            "title": "Rain on Glass",
            "narrative": make_beat()["narrative"],
            "choiceTaken": "Warn the council",
            "genreContext": "Speculative Fiction",
            "twist": make_beat()["twist"],
            "characterFocus": make_beat()["characterFocus"],
        }

    def test_choice_taken_absent_without_match(self):
        beat = StoryBeat.model_validate(make_beat())

        assert "choiceTaken" not in condense_beat(beat, "missing-id")
        assert "choiceTaken" not in condense_beat(beat, None)


class TestGenerateStoryBeat:
    """Tests for generate_story_beat."""

    @pytest.mark.asyncio
    async def test_sends_condensed_history_and_returns_beat(self):
        provider = FakeProvider(structured_results=[make_beat("Next")])
        request = StoryRequest.model_validate({
            "mode": "continue",
            "currentGenre": "Speculative Fiction",
            "userIntent": "Raise the stakes",
            "choiceId": "c1",
            "previousBeats": [make_beat(f"Beat {i}") for i in range(4)],
            "audienceProfile": "Adults",
        })

        beat = await generate_story_beat(provider, request)

        assert beat.title == "Next"
        call = provider.structured_calls[0]
        assert call["system_prompt"] == STORY_SYSTEM_PROMPT
        assert call["schema_name"] == STORY_SCHEMA_NAME
        payload = json.loads(call["user_prompt"])
        assert [entry["title"] for entry in payload["storySoFar"]] == ["Beat 1", "Beat 2", "Beat 3"]
        assert all(entry["choiceTaken"] == "Follow the signal" for entry in payload["storySoFar"])
        assert payload["choiceId"] == "c1"
        assert payload["targetGenre"] is None

    @pytest.mark.asyncio
    async def test_extra_field_is_rejected(self):
        provider = FakeProvider(structured_results=[make_beat(extra="not allowed")])
        request = StoryRequest(mode="start", current_genre="Noir Mystery", user_intent="Go")

        with pytest.raises(ProviderResponseError) as exc_info:
            await generate_story_beat(provider, request)

        assert "extra" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_too_few_choices_rejected(self):
        beat = make_beat()
        beat["choices"] = beat["choices"][:1]
        provider = FakeProvider(structured_results=[beat])
        request = StoryRequest(mode="start", current_genre="Noir Mystery", user_intent="Go")

        with pytest.raises(ProviderResponseError):
            await generate_story_beat(provider, request)

    @pytest.mark.asyncio
    async def test_missing_field_rejected(self):
        beat = make_beat()
        del beat["twist"]
        provider = FakeProvider(structured_results=[beat])
        request = StoryRequest(mode="start", current_genre="Noir Mystery", user_intent="Go")

        with pytest.raises(ProviderResponseError) as exc_info:
            await generate_story_beat(provider, request)

        assert "twist" in str(exc_info.value)


class TestGenerateInspirationKit:
    """Tests for generate_inspiration_kit."""

    def _request(self):
        return InspirationRequest(theme="Lighthouse", vibe="moody", medium="mixed", focus="scene")

    @pytest.mark.asyncio
    async def test_merges_ideation_and_media(self):
        provider = FakeProvider(structured_results=[dict(SAMPLE_IDEATION)], audio=b"\x00\x01audio")

        result = await generate_inspiration_kit(provider, self._request())

        assert result.text_spark == SAMPLE_IDEATION["textSpark"]
        assert result.vibe_tags == SAMPLE_IDEATION["vibeTags"]
        assert result.image_base64 == "aW1hZ2U="
        assert base64.b64decode(result.audio_base64) == b"\x00\x01audio"
        assert result.audio_mime_type == "audio/mpeg"
        assert provider.image_calls == [SAMPLE_IDEATION["imagePrompt"]]
        assert provider.speech_calls == [SAMPLE_IDEATION["audioPrompt"]]
        assert provider.structured_calls[0]["schema_name"] == INSPIRATION_SCHEMA_NAME

    @pytest.mark.asyncio
    async def test_missing_image_is_null(self):
        provider = FakeProvider(structured_results=[dict(SAMPLE_IDEATION)], image=None)

        result = await generate_inspiration_kit(provider, self._request())

        assert result.image_base64 is None

    @pytest.mark.asyncio
    async def test_speech_failure_fails_kit(self):
        provider = FakeProvider(
            structured_results=[dict(SAMPLE_IDEATION)],
            speech_error=RuntimeError("tts down"),
        )

        with pytest.raises(RuntimeError, match="tts down"):
            await generate_inspiration_kit(provider, self._request())

    @pytest.mark.asyncio
    async def test_too_few_tags_rejected_before_media(self):
        ideation = dict(SAMPLE_IDEATION, vibeTags=["one"])
        provider = FakeProvider(structured_results=[ideation])

        with pytest.raises(ProviderResponseError):
            await generate_inspiration_kit(provider, self._request())

        assert provider.image_calls == []
        assert provider.speech_calls == []
