"""
Environment configuration.

All settings come from environment variables (a local .env file is loaded
by the entry points via python-dotenv). load_config() reads them at call
time so tests can patch os.environ.
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional

DEFAULT_STORY_MODEL = "gpt-4o-mini"
DEFAULT_IMAGE_MODEL = "dall-e-3"
DEFAULT_IMAGE_SIZE = "1024x1024"
DEFAULT_SPEECH_MODEL = "gpt-4o-mini-tts"
DEFAULT_SPEECH_VOICE = "coral"
DEFAULT_SPEECH_FORMAT = "mp3"
DEFAULT_HISTORY_LIMIT = 3


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() == "true"


def _env_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass
class AppConfig:
    """Runtime settings for the API server."""
    openai_api_key: Optional[str] = None
    openai_base_url: Optional[str] = None
    story_model: str = DEFAULT_STORY_MODEL
    image_model: str = DEFAULT_IMAGE_MODEL
    image_size: str = DEFAULT_IMAGE_SIZE
    speech_model: str = DEFAULT_SPEECH_MODEL
    speech_voice: str = DEFAULT_SPEECH_VOICE
    speech_format: str = DEFAULT_SPEECH_FORMAT
    history_limit: int = DEFAULT_HISTORY_LIMIT
    expose_provider_errors: bool = True
    cors_allow_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    log_dir: Optional[str] = "logs"


def load_config() -> AppConfig:
    """
    Build AppConfig from the current environment.

    Returns:
        AppConfig with defaults applied for unset variables
    """
    return AppConfig(
        openai_api_key=os.getenv("OPENAI_API_KEY") or None,
        openai_base_url=os.getenv("OPENAI_BASE_URL") or None,
        story_model=os.getenv("STORY_MODEL", DEFAULT_STORY_MODEL),
        image_model=os.getenv("IMAGE_MODEL", DEFAULT_IMAGE_MODEL),
        image_size=os.getenv("IMAGE_SIZE", DEFAULT_IMAGE_SIZE),
        speech_model=os.getenv("SPEECH_MODEL", DEFAULT_SPEECH_MODEL),
        speech_voice=os.getenv("SPEECH_VOICE", DEFAULT_SPEECH_VOICE),
        speech_format=os.getenv("SPEECH_FORMAT", DEFAULT_SPEECH_FORMAT),
        history_limit=int(os.getenv("STORY_HISTORY_LIMIT", str(DEFAULT_HISTORY_LIMIT))),
        expose_provider_errors=_env_flag("EXPOSE_PROVIDER_ERRORS", "true"),
        cors_allow_origins=_env_list("CORS_ALLOW_ORIGINS", "*"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        log_dir=os.getenv("LOG_DIR", "logs") or None,
    )
