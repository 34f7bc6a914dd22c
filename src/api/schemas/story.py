"""
Story beat schemas.

Wire format is camelCase; attributes are snake_case. Models that mirror
STORY_BEAT_SCHEMA forbid extra fields so a provider response with unknown
keys is rejected instead of silently trimmed.
"""

from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

StoryMode = Literal["start", "continue", "genre-shift"]


class StrictModel(BaseModel):
    """Base for provider-facing structures: aliases on, extras forbidden."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")


def blank_to_none(value):
    """Blank or whitespace-only strings count as absent for enum fields."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


class StoryChoice(StrictModel):
    """One branch the reader can take after a beat."""

    id: str
    label: str
    description: str


class CharacterFocus(StrictModel):
    name: str
    motivation: str
    conflict: str


class CreativeFeedback(StrictModel):
    strengths: List[str] = Field(..., min_length=1, max_length=3)
    opportunities: List[str] = Field(..., min_length=1, max_length=3)
    pacing_note: str = Field(..., alias="pacingNote")
    dialogue_note: str = Field(..., alias="dialogueNote")


class BeatInspiration(StrictModel):
    image_prompt: str = Field(..., alias="imagePrompt")
    audio_prompt: str = Field(..., alias="audioPrompt")
    text_spark: str = Field(..., alias="textSpark")


class StoryBeat(StrictModel):
    """One generated unit of interactive narrative."""

    title: str
    narrative: str
    choices: List[StoryChoice] = Field(..., min_length=2, max_length=4)
    twist: str
    genre_context: str = Field(..., alias="genreContext")
    character_focus: CharacterFocus = Field(..., alias="characterFocus")
    creative_feedback: CreativeFeedback = Field(..., alias="creativeFeedback")
    micro_goals: List[str] = Field(..., alias="microGoals", min_length=2, max_length=4)
    suggested_daily_challenge: str = Field(..., alias="suggestedDailyChallenge")
    suggested_weekly_challenge: str = Field(..., alias="suggestedWeeklyChallenge")
    inspiration: BeatInspiration

    def find_choice(self, choice_id: Optional[str]) -> Optional[StoryChoice]:
        """Return the choice with the given id, or None."""
        if choice_id is None:
            return None
        for choice in self.choices:
            if choice.id == choice_id:
                return choice
        return None


class StoryRequest(BaseModel):
    """
    Request for the next story beat.

    mode, currentGenre and userIntent are required, but are declared
    optional here so the router can report every missing name in one 400
    instead of the default 422 validation payload.
    """

    model_config = ConfigDict(populate_by_name=True)

    mode: Optional[StoryMode] = Field(
        default=None,
        description="Generation mode",
        json_schema_extra={"examples": ["start", "continue", "genre-shift"]}
    )
    current_genre: Optional[str] = Field(
        default=None,
        alias="currentGenre",
        json_schema_extra={"examples": ["Speculative Fiction", "Noir Mystery"]}
    )
    target_genre: Optional[str] = Field(
        default=None,
        alias="targetGenre",
        description="Genre to shift into (genre-shift mode)"
    )
    user_intent: Optional[str] = Field(
        default=None,
        alias="userIntent",
        json_schema_extra={"examples": ["Craft a character-driven pilot that balances wonder with emotional stakes."]}
    )
    choice_id: Optional[str] = Field(
        default=None,
        alias="choiceId",
        description="Id of the choice taken from the previous beat"
    )
    previous_beats: List[StoryBeat] = Field(
        default_factory=list,
        alias="previousBeats",
        description="Beats generated so far, oldest first"
    )
    audience_profile: str = Field(default="", alias="audienceProfile")

    @field_validator("mode", mode="before")
    @classmethod
    def blank_mode_is_missing(cls, value):
        return blank_to_none(value)

    def missing_fields(self) -> List[str]:
        """Wire names of required fields that are absent or blank."""
        required = [
            ("mode", self.mode),
            ("currentGenre", self.current_genre),
            ("userIntent", self.user_intent),
        ]
        return [name for name, value in required if not value or not value.strip()]
