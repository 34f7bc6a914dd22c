"""
Prompt templates and output schemas.

Holds the two fixed system prompts, the JSON schemas the provider must
conform to, and the builders for the user-turn payloads. Both schemas are
strict: additionalProperties is false everywhere and every property is
listed in "required".
"""

import json
from typing import Any, Dict, List, Optional

STORY_SCHEMA_NAME = "story_beat"
INSPIRATION_SCHEMA_NAME = "inspiration_kit"


def _string_list(min_items: int, max_items: int) -> Dict[str, Any]:
    return {
        "type": "array",
        "minItems": min_items,
        "maxItems": max_items,
        "items": {"type": "string"},
    }


def _strict_object(properties: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "type": "object",
        "additionalProperties": False,
        "required": list(properties.keys()),
        "properties": properties,
    }


STRING = {"type": "string"}

STORY_BEAT_SCHEMA: Dict[str, Any] = _strict_object({
    "title": STRING,
    "narrative": STRING,
    "choices": {
        "type": "array",
        "minItems": 2,
        "maxItems": 4,
        "items": _strict_object({
            "id": STRING,
            "label": STRING,
            "description": STRING,
        }),
    },
    "twist": STRING,
    "genreContext": STRING,
    "characterFocus": _strict_object({
        "name": STRING,
        "motivation": STRING,
        "conflict": STRING,
    }),
    "creativeFeedback": _strict_object({
        "strengths": _string_list(1, 3),
        "opportunities": _string_list(1, 3),
        "pacingNote": STRING,
        "dialogueNote": STRING,
    }),
    "microGoals": _string_list(2, 4),
    "suggestedDailyChallenge": STRING,
    "suggestedWeeklyChallenge": STRING,
    "inspiration": _strict_object({
        "imagePrompt": STRING,
        "audioPrompt": STRING,
        "textSpark": STRING,
    }),
})

INSPIRATION_SCHEMA: Dict[str, Any] = _strict_object({
    "imagePrompt": STRING,
    "audioPrompt": STRING,
    "textSpark": STRING,
    "vibeTags": _string_list(3, 6),
})

STORY_SYSTEM_PROMPT = """
You are StoryWeaver Mentor, an AI guide for aspiring writers, filmmakers, and artists.

Goals:
- Craft vibrant, choose-your-own-adventure story beats that adapt to the user's goals and selections.
- Protect continuity: use the provided previous beats when relevant, but evolve the story in surprising, coherent ways.
- Provide concise, actionable creative feedback covering plot, character, pacing, and dialogue.
- Generate multimedia inspiration hooks: a DALL·E-ready image prompt, an audio mood cue, and a compact text spark.
- Track progress with focused micro-goals and accountability challenges.
- Support genre shifting while preserving character identities and emotional arcs.

Rules:
- Always conform exactly to the provided JSON schema.
- Story beats must be no longer than 220 words. Keep them high-energy and sensory rich.
- Choices should be distinct strategic directions for the story, not minor variations.
- When 'mode' is 'genre-shift', reframe the tone and world-building to the requested target genre while honoring core characters and conflicts.
- Creative feedback should reference the current narrative beat directly.
- Micro goals should be phrased as short imperatives (e.g., "Outline the antagonist's secret agenda").
- Daily/weekly challenges should be motivational and time-bound.
- Image prompts must be detailed, cinematic, and include style/lighting cues. Assume they will be used with DALL·E 3.
- Audio prompts should describe instrumentation, tempo, and atmosphere for a 30-second loopable cue.
- Text spark should be 1-2 evocative sentences that invite experimentation.
""".strip()

INSPIRATION_SYSTEM_PROMPT = """
You are MuseCrafter, an AI that fabricates multimedia inspiration kits for creators.
Produce rich, cinematic prompts for imagery and sound, along with a concise text spark.
Respond strictly using the provided JSON schema.
""".strip()

INSPIRATION_INSTRUCTION = (
    "Supply detailed prompts suitable for DALL·E 3 and short audio cue generation. "
    "Reflect the requested vibe and focus."
)


def build_story_user_prompt(
    mode: str,
    current_genre: str,
    user_intent: str,
    story_so_far: List[Dict[str, Any]],
    target_genre: Optional[str] = None,
    choice_id: Optional[str] = None,
    audience_profile: str = "",
) -> str:
    """
    Build the user turn for story beat generation.

    Args:
        mode: "start", "continue" or "genre-shift"
        current_genre: Genre the story is currently told in
        user_intent: Free-text creative goal
        story_so_far: Condensed history (already trimmed and projected)
        target_genre: Genre to shift into (genre-shift only)
        choice_id: Id of the choice the reader picked
        audience_profile: Free-text audience description

    Returns:
        JSON string with explicit nulls for absent optionals
    """
    return json.dumps({
        "mode": mode,
        "currentGenre": current_genre,
        "targetGenre": target_genre,
        "userIntent": user_intent,
        "choiceId": choice_id,
        "audienceProfile": audience_profile,
        "storySoFar": story_so_far,
    }, ensure_ascii=False)


def build_inspiration_user_prompt(theme: str, vibe: str, medium: str, focus: str) -> str:
    """Build the user turn for inspiration ideation."""
    return json.dumps({
        "theme": theme,
        "vibe": vibe,
        "medium": medium,
        "focus": focus,
        "instruction": INSPIRATION_INSTRUCTION,
    }, ensure_ascii=False)
