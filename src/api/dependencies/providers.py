"""
Provider and configuration dependencies.

Both objects are created once in the application lifespan and stored on
app.state; handlers receive them through these functions so tests can swap
them with app.dependency_overrides. Neither falls back to a fresh instance
when startup has not run.
"""

from fastapi import Request

from src.infra.config import AppConfig
from src.story.model_provider import GenerativeProvider


def _from_state(request: Request, name: str):
    value = getattr(request.app.state, name, None)
    if value is None:
        raise RuntimeError(f"app.state.{name} is not initialised; application startup has not run")
    return value


def get_config(request: Request) -> AppConfig:
    return _from_state(request, "config")


def get_provider(request: Request) -> GenerativeProvider:
    """
    Return the provider created at startup.

    Raises:
        RuntimeError: The application lifespan has not run
    """
    return _from_state(request, "provider")
