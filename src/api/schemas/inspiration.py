"""
Inspiration kit schemas.
"""

from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .story import StrictModel, blank_to_none

Vibe = Literal["moody", "uplifting", "mysterious", "epic", "intimate"]
Medium = Literal["text", "image", "audio", "mixed"]
Focus = Literal["character", "world", "scene", "mood"]


class InspirationRequest(BaseModel):
    """Request for an inspiration kit. All four fields are required."""

    theme: Optional[str] = Field(
        default=None,
        json_schema_extra={"examples": ["Neon-lit metropolis in monsoon season"]}
    )
    vibe: Optional[Vibe] = None
    medium: Optional[Medium] = None
    focus: Optional[Focus] = None

    @field_validator("vibe", "medium", "focus", mode="before")
    @classmethod
    def blank_choice_is_missing(cls, value):
        return blank_to_none(value)

    def missing_fields(self) -> List[str]:
        values = [
            ("theme", self.theme),
            ("vibe", self.vibe),
            ("medium", self.medium),
            ("focus", self.focus),
        ]
        return [name for name, value in values if not value or not value.strip()]


class InspirationIdeation(StrictModel):
    """Structured ideation returned by the provider before media rendering."""

    image_prompt: str = Field(..., alias="imagePrompt")
    audio_prompt: str = Field(..., alias="audioPrompt")
    text_spark: str = Field(..., alias="textSpark")
    vibe_tags: List[str] = Field(..., alias="vibeTags", min_length=3, max_length=6)


class InspirationResult(BaseModel):
    """Ideation merged with rendered media (base64, inline)."""

    model_config = ConfigDict(populate_by_name=True)

    text_spark: str = Field(..., alias="textSpark")
    image_prompt: str = Field(..., alias="imagePrompt")
    audio_prompt: str = Field(..., alias="audioPrompt")
    vibe_tags: List[str] = Field(..., alias="vibeTags")
    image_base64: Optional[str] = Field(default=None, alias="imageBase64")
    audio_base64: str = Field(..., alias="audioBase64")
    audio_mime_type: str = Field(..., alias="audioMimeType")
