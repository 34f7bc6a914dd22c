"""
Inspiration router.

Endpoints:
- POST /inspiration - Generate an inspiration kit (ideation + image + audio)
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from src.infra.config import AppConfig
from src.story.model_provider import GenerativeProvider
from ..dependencies.providers import get_config, get_provider
from ..errors import provider_error_detail
from ..schemas.common import ErrorResponse
from ..schemas.inspiration import InspirationRequest, InspirationResult
from ..services import inspiration_service

# Handlers live on the shared "storyweaver" logger, not per-module loggers
logger = logging.getLogger("storyweaver")

router = APIRouter()


@router.post(
    "",
    response_model=InspirationResult,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def create_inspiration_kit(
    request: InspirationRequest,
    provider: GenerativeProvider = Depends(get_provider),
    config: AppConfig = Depends(get_config),
):
    """
    Generate an inspiration kit.

    Media payloads are returned inline as base64. If the image or the
    audio render fails, the whole request fails.
    """
    missing = request.missing_fields()
    if missing:
        raise HTTPException(
            status_code=400,
            detail=f"Missing required fields: {', '.join(missing)}"
        )

    try:
        return await inspiration_service.generate_inspiration_kit(provider, request)
    except Exception as e:
        logger.error(f"[InspirationAPI] Generation error: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=provider_error_detail(e, "Unexpected error generating inspiration kit", config)
        )
