"""
Model provider abstraction for story and inspiration generation.

The provider exposes three black-box capabilities:
- structured text constrained to a caller-supplied JSON schema
- image generation returning base64 bytes
- speech generation returning encoded audio

Usage:
    provider = create_provider(load_config())
    data = await provider.generate_structured(system_prompt, user_prompt, name, schema)
"""

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional

from openai import AsyncOpenAI

from src.infra.config import AppConfig
from .errors import MissingCredentialError, ProviderResponseError
from .response_extractor import decode_response_text

logger = logging.getLogger("storyweaver")

AUDIO_MIME_TYPES = {
    "mp3": "audio/mpeg",
    "opus": "audio/ogg",
    "aac": "audio/aac",
    "flac": "audio/flac",
    "wav": "audio/wav",
    "pcm": "audio/L16",
}


@dataclass
class SpeechResult:
    """Encoded audio returned by speech generation."""
    audio: bytes
    mime_type: str


class GenerativeProvider(ABC):
    """Abstract base class for generative AI providers."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return provider name for status output."""
        pass

    @abstractmethod
    async def generate_structured(
        self,
        system_prompt: str,
        user_prompt: str,
        schema_name: str,
        schema: Dict[str, Any],
    ) -> Dict[str, Any]:
        """
        Generate a JSON object conforming to schema.

        Returns:
            The decoded JSON object

        Raises:
            MissingCredentialError: No API key configured
            UnrecognizedResponseError: Response has no known text shape
            ProviderResponseError: Output is not a JSON object
        """
        pass

    @abstractmethod
    async def generate_image(self, prompt: str) -> Optional[str]:
        """Render an image; returns base64 data or None if none came back."""
        pass

    @abstractmethod
    async def generate_speech(self, text: str) -> SpeechResult:
        """Render text to encoded audio."""
        pass

    def status(self) -> Dict[str, Any]:
        return {"provider": self.provider_name}

    async def close(self) -> None:
        """Release network resources. Called on application shutdown."""
        pass


class OpenAIProvider(GenerativeProvider):
    """OpenAI provider (Responses, Images and Audio Speech APIs)."""

    def __init__(self, config: AppConfig, client: Optional[AsyncOpenAI] = None):
        self.config = config
        self._client = client
        if self._client is None and config.openai_api_key:
            self._client = AsyncOpenAI(
                api_key=config.openai_api_key,
                base_url=config.openai_base_url,
            )

    @property
    def provider_name(self) -> str:
        return "openai"

    def _require_client(self) -> AsyncOpenAI:
        if not self.config.openai_api_key or self._client is None:
            raise MissingCredentialError("OPENAI_API_KEY")
        return self._client

    async def generate_structured(
        self,
        system_prompt: str,
        user_prompt: str,
        schema_name: str,
        schema: Dict[str, Any],
    ) -> Dict[str, Any]:
        client = self._require_client()
        logger.info(f"[OpenAIProvider] Structured generation '{schema_name}' with {self.config.story_model}")

        response = await client.responses.create(
            model=self.config.story_model,
            input=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            text={
                "format": {
                    "type": "json_schema",
                    "name": schema_name,
                    "schema": schema,
                    "strict": True,
                },
            },
        )

        text = decode_response_text(response)
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ProviderResponseError(schema_name, f"malformed JSON ({e.msg})") from e

        if not isinstance(data, dict):
            raise ProviderResponseError(schema_name, f"expected a JSON object, got {type(data).__name__}")

        logger.info(f"[OpenAIProvider] Received '{schema_name}' ({len(text)} chars)")
        return data

    async def generate_image(self, prompt: str) -> Optional[str]:
        client = self._require_client()
        logger.info(f"[OpenAIProvider] Image generation with {self.config.image_model}")

        result = await client.images.generate(
            model=self.config.image_model,
            prompt=prompt,
            size=self.config.image_size,
            response_format="b64_json",
            n=1,
        )

        data = result.data or []
        image_b64 = data[0].b64_json if data else None
        if image_b64 is None:
            logger.warning("[OpenAIProvider] Image response carried no b64_json payload")
        return image_b64

    async def generate_speech(self, text: str) -> SpeechResult:
        client = self._require_client()
        audio_format = self.config.speech_format
        logger.info(
            f"[OpenAIProvider] Speech generation with {self.config.speech_model} "
            f"(voice={self.config.speech_voice}, format={audio_format})"
        )

        response = await client.audio.speech.create(
            model=self.config.speech_model,
            voice=self.config.speech_voice,
            input=text,
            response_format=audio_format,
        )

        audio = response.content
        logger.info(f"[OpenAIProvider] Received {len(audio)} audio bytes")
        return SpeechResult(
            audio=audio,
            mime_type=AUDIO_MIME_TYPES.get(audio_format, "application/octet-stream"),
        )

    def status(self) -> Dict[str, Any]:
        return {
            "provider": self.provider_name,
            "configured": bool(self.config.openai_api_key),
            "story_model": self.config.story_model,
            "image_model": self.config.image_model,
            "image_size": self.config.image_size,
            "speech_model": self.config.speech_model,
            "speech_voice": self.config.speech_voice,
            "speech_format": self.config.speech_format,
        }

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()


def create_provider(config: AppConfig) -> GenerativeProvider:
    """
    Create the provider for the given configuration.

    Never raises for a missing key: the credential is checked per call so
    the server can start and report the problem as a request error.
    """
    if not config.openai_api_key:
        logger.warning("[Provider] OPENAI_API_KEY is not set; generation requests will fail")
    return OpenAIProvider(config)
