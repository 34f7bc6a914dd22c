"""
Error envelope for the HTTP API.

Every non-2xx response body is {"error": "<message>"}. Request validation
failures are client errors and map to 400 rather than FastAPI's default 422.
"""

import logging
from typing import Any, Dict, Sequence

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.infra.config import AppConfig

logger = logging.getLogger("storyweaver")


def format_validation_errors(errors: Sequence[Dict[str, Any]]) -> str:
    """Render request validation errors as one line, body prefix dropped."""
    parts = []
    for item in errors:
        loc = [str(p) for p in item.get("loc", ()) if p != "body"]
        location = ".".join(loc) or "body"
        parts.append(f"{location}: {item.get('msg', 'invalid')}")
    return "Invalid request body: " + "; ".join(parts)


def provider_error_detail(error: Exception, fallback: str, config: AppConfig) -> str:
    """
    Message returned to the client for a failed generation.

    The underlying message is passed through unless
    EXPOSE_PROVIDER_ERRORS=false, in which case only the fallback is sent.
    """
    if not config.expose_provider_errors:
        return fallback
    return str(error) or fallback


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = format_validation_errors(exc.errors())
    logger.info(f"[API] Rejected {request.method} {request.url.path}: {message}")
    return JSONResponse(status_code=400, content={"error": message})
