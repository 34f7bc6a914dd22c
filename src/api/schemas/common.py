"""
Shared response schemas.
"""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error envelope used by every non-2xx response."""

    error: str = Field(..., description="Human-readable error message")


class HealthResponse(BaseModel):
    status: str
    version: str
