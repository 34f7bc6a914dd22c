"""
Story router.

Endpoints:
- POST /story - Generate the next story beat (blocking)
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from src.infra.config import AppConfig
from src.story.model_provider import GenerativeProvider
from ..dependencies.providers import get_config, get_provider
from ..errors import provider_error_detail
from ..schemas.common import ErrorResponse
from ..schemas.story import StoryBeat, StoryRequest
from ..services import story_service

# Handlers live on the shared "storyweaver" logger, not per-module loggers
logger = logging.getLogger("storyweaver")

router = APIRouter()


@router.post(
    "",
    response_model=StoryBeat,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def create_story_beat(
    request: StoryRequest,
    provider: GenerativeProvider = Depends(get_provider),
    config: AppConfig = Depends(get_config),
):
    """
    Generate the next story beat.

    The last few previous beats are condensed and sent for continuity;
    the provider's beat is returned unchanged.

    Raises:
        HTTPException: 400 on missing mode/currentGenre/userIntent,
            500 on provider or schema failure
    """
    missing = request.missing_fields()
    if missing:
        raise HTTPException(
            status_code=400,
            detail=f"Missing required fields: {', '.join(missing)}"
        )

    try:
        return await story_service.generate_story_beat(
            provider,
            request,
            history_limit=config.history_limit,
        )
    except Exception as e:
        logger.error(f"[StoryAPI] Generation error: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=provider_error_detail(e, "Unexpected error generating story beat", config)
        )
