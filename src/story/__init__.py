"""
Story module - provider access and prompt material.

- Prompt templates and strict output schemas
- Provider abstraction (OpenAI)
- Response text extraction
"""

from .errors import (
    StoryWeaverError,
    MissingCredentialError,
    UnrecognizedResponseError,
    ProviderResponseError,
)

from .prompts import (
    STORY_SYSTEM_PROMPT,
    INSPIRATION_SYSTEM_PROMPT,
    STORY_BEAT_SCHEMA,
    INSPIRATION_SCHEMA,
    build_story_user_prompt,
    build_inspiration_user_prompt,
)

from .response_extractor import (
    decode_response_text,
    extract_response_text,
)

from .model_provider import (
    GenerativeProvider,
    OpenAIProvider,
    SpeechResult,
    create_provider,
)

__all__ = [
    # errors
    "StoryWeaverError",
    "MissingCredentialError",
    "UnrecognizedResponseError",
    "ProviderResponseError",
    # prompts
    "STORY_SYSTEM_PROMPT",
    "INSPIRATION_SYSTEM_PROMPT",
    "STORY_BEAT_SCHEMA",
    "INSPIRATION_SCHEMA",
    "build_story_user_prompt",
    "build_inspiration_user_prompt",
    # response_extractor
    "decode_response_text",
    "extract_response_text",
    # model_provider
    "GenerativeProvider",
    "OpenAIProvider",
    "SpeechResult",
    "create_provider",
]
