"""
API Schemas package.

Pydantic models for request/response validation.
"""

from .story import (
    StoryMode,
    StoryChoice,
    CharacterFocus,
    CreativeFeedback,
    BeatInspiration,
    StoryBeat,
    StoryRequest,
)
from .inspiration import (
    InspirationRequest,
    InspirationIdeation,
    InspirationResult,
)
from .common import ErrorResponse, HealthResponse

__all__ = [
    "StoryMode",
    "StoryChoice",
    "CharacterFocus",
    "CreativeFeedback",
    "BeatInspiration",
    "StoryBeat",
    "StoryRequest",
    "InspirationRequest",
    "InspirationIdeation",
    "InspirationResult",
    "ErrorResponse",
    "HealthResponse",
]
