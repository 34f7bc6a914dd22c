"""
Story beat generation service.

Condenses the caller's beat history, sends it with the request fields to
the provider, and validates the returned beat.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from src.infra.config import DEFAULT_HISTORY_LIMIT
from src.story.model_provider import GenerativeProvider
from src.story.prompts import (
    STORY_BEAT_SCHEMA,
    STORY_SCHEMA_NAME,
    STORY_SYSTEM_PROMPT,
    build_story_user_prompt,
)
from ..schemas.story import StoryBeat, StoryRequest
from .parsing import parse_provider_object

logger = logging.getLogger("storyweaver")


def condense_beat(beat: StoryBeat, choice_id: Optional[str]) -> Dict[str, Any]:
    """
    Project a beat to the fields the provider needs for continuity.

    choiceTaken is only present when choice_id matches one of the
    beat's choices.
    """
    condensed: Dict[str, Any] = {
        "title": beat.title,
        "narrative": beat.narrative,
    }
    choice = beat.find_choice(choice_id)
    if choice is not None:
        condensed["choiceTaken"] = choice.label
    condensed["genreContext"] = beat.genre_context
    condensed["twist"] = beat.twist
    condensed["characterFocus"] = beat.character_focus.model_dump(by_alias=True)
    return condensed


def condense_history(
    beats: Sequence[StoryBeat],
    choice_id: Optional[str],
    limit: int = DEFAULT_HISTORY_LIMIT,
) -> List[Dict[str, Any]]:
    """
    Condense the most recent beats, oldest first.

    Only the last `limit` beats are kept to bound prompt size; continuity
    beyond that horizon is not preserved.
    """
    if limit <= 0:
        return []
    return [condense_beat(beat, choice_id) for beat in list(beats)[-limit:]]


async def generate_story_beat(
    provider: GenerativeProvider,
    request: StoryRequest,
    history_limit: int = DEFAULT_HISTORY_LIMIT,
) -> StoryBeat:
    """
    Generate the next story beat.

    Args:
        provider: Generative provider
        request: Validated request (required fields already checked)
        history_limit: Number of prior beats forwarded to the provider

    Returns:
        StoryBeat exactly as produced by the provider

    Raises:
        StoryWeaverError: Missing credential or off-schema response
        Exception: Provider/network failures propagate unchanged
    """
    story_so_far = condense_history(request.previous_beats, request.choice_id, history_limit)
    logger.info(
        f"[StoryService] mode={request.mode} genre={request.current_genre} "
        f"history={len(story_so_far)}/{len(request.previous_beats)}"
    )

    user_prompt = build_story_user_prompt(
        mode=request.mode,
        current_genre=request.current_genre,
        user_intent=request.user_intent,
        story_so_far=story_so_far,
        target_genre=request.target_genre,
        choice_id=request.choice_id,
        audience_profile=request.audience_profile,
    )

    data = await provider.generate_structured(
        STORY_SYSTEM_PROMPT,
        user_prompt,
        STORY_SCHEMA_NAME,
        STORY_BEAT_SCHEMA,
    )
    beat = parse_provider_object(StoryBeat, data, STORY_SCHEMA_NAME)

    logger.info(f"[StoryService] Generated beat '{beat.title}' with {len(beat.choices)} choices")
    return beat
