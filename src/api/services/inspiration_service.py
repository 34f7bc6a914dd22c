"""
Inspiration kit generation service.

Ideation first, then image and speech rendering run concurrently. There is
no partial delivery: if either render fails the whole kit fails.
"""

import asyncio
import base64
import logging

from src.story.model_provider import GenerativeProvider
from src.story.prompts import (
    INSPIRATION_SCHEMA,
    INSPIRATION_SCHEMA_NAME,
    INSPIRATION_SYSTEM_PROMPT,
    build_inspiration_user_prompt,
)
from ..schemas.inspiration import InspirationIdeation, InspirationRequest, InspirationResult
from .parsing import parse_provider_object

logger = logging.getLogger("storyweaver")


async def generate_ideation(
    provider: GenerativeProvider,
    request: InspirationRequest,
) -> InspirationIdeation:
    """Run the structured ideation pass."""
    user_prompt = build_inspiration_user_prompt(
        theme=request.theme,
        vibe=request.vibe,
        medium=request.medium,
        focus=request.focus,
    )
    data = await provider.generate_structured(
        INSPIRATION_SYSTEM_PROMPT,
        user_prompt,
        INSPIRATION_SCHEMA_NAME,
        INSPIRATION_SCHEMA,
    )
    return parse_provider_object(InspirationIdeation, data, INSPIRATION_SCHEMA_NAME)


async def generate_inspiration_kit(
    provider: GenerativeProvider,
    request: InspirationRequest,
) -> InspirationResult:
    """
    Generate a complete inspiration kit.

    Returns:
        InspirationResult with base64 image (None if the provider returned
        no image) and base64 audio

    Raises:
        Exception: Any ideation, image or speech failure
    """
    logger.info(
        f"[InspirationService] theme='{request.theme}' vibe={request.vibe} "
        f"medium={request.medium} focus={request.focus}"
    )
    ideation = await generate_ideation(provider, request)
    logger.info(f"[InspirationService] Ideation ready, tags={ideation.vibe_tags}")

    image_base64, speech = await asyncio.gather(
        provider.generate_image(ideation.image_prompt),
        provider.generate_speech(ideation.audio_prompt),
    )

    logger.info(
        f"[InspirationService] Media ready (image={'yes' if image_base64 else 'no'}, "
        f"audio={len(speech.audio)} bytes)"
    )
    return InspirationResult(
        text_spark=ideation.text_spark,
        image_prompt=ideation.image_prompt,
        audio_prompt=ideation.audio_prompt,
        vibe_tags=ideation.vibe_tags,
        image_base64=image_base64,
        audio_base64=base64.b64encode(speech.audio).decode("ascii"),
        audio_mime_type=speech.mime_type,
    )
