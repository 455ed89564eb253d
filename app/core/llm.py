"""
Provider adapters.

Each adapter turns a conversation into one completion request against a
single provider. A missing configuration or any failure yields ``None``;
callers cannot and need not tell the two apart.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from google import genai
from google.genai import types
from openai import AsyncOpenAI

from app.core.config import Settings
from app.core.constants import TurnRole
from app.core.exceptions import ProviderError
from app.schemas.quiz import ConversationTurn

logger = logging.getLogger(__name__)


class LLMProvider(str, Enum):
    GEMINI = "gemini"
    OPENAI = "openai"


@dataclass(frozen=True)
class ProviderConfig:
    """Connection settings for one provider, resolved once at startup."""
    provider: LLMProvider
    model: str
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    temperature: float = 0.3
    timeout: float = 60.0

    @classmethod
    def from_settings(cls, provider: LLMProvider, settings: Settings) -> "ProviderConfig":
        if provider == LLMProvider.GEMINI:
            return cls(
                provider=provider,
                model=settings.GEMINI_MODEL,
                api_key=_secret(settings.GEMINI_API_KEY),
                temperature=settings.LLM_TEMPERATURE,
                timeout=settings.LLM_TIMEOUT,
            )
        return cls(
            provider=provider,
            model=settings.AI_MODEL,
            api_key=_secret(settings.AI_API_KEY),
            base_url=settings.AI_BASE_URL,
            temperature=settings.LLM_TEMPERATURE,
            timeout=settings.LLM_TIMEOUT,
        )


def _secret(value) -> Optional[str]:
    return value.get_secret_value() if value is not None else None


def split_system_and_user(conversation: Sequence[ConversationTurn]) -> Tuple[Optional[str], str]:
    """Join system turns into one instruction and user turns into one prompt."""
    system_parts = [turn.content for turn in conversation if turn.role == TurnRole.SYSTEM]
    user_parts = [turn.content for turn in conversation if turn.role == TurnRole.USER]
    system_text = "\n".join(system_parts) or None
    return system_text, "\n".join(user_parts)


class BaseProviderAdapter(ABC):
    """Uniform ``complete`` call over one generative provider."""

    def __init__(self, config: ProviderConfig):
        self.config = config
        self._client = None

    @property
    def name(self) -> str:
        return self.config.provider.value

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        ...

    @abstractmethod
    def _create_client(self):
        ...

    @abstractmethod
    async def _request(self, conversation: Sequence[ConversationTurn]) -> Optional[str]:
        ...

    @property
    def client(self):
        if self._client is None:
            self._client = self._create_client()
        return self._client

    async def complete(self, conversation: Sequence[ConversationTurn]) -> Optional[str]:
        """Return raw completion text, or None when unavailable."""
        if not self.is_configured:
            logger.debug(f"Provider '{self.name}' not configured, skipping", extra={"provider": self.name})
            return None

        try:
            text = await self._request(conversation)
            if not text:
                raise ProviderError("Empty completion in response envelope", provider=self.name)
            logger.debug(f"Provider '{self.name}' returned {len(text)} chars", extra={"provider": self.name})
            return text
        except Exception as e:
            logger.error(f"{self.name} call failed: {e}", extra={"provider": self.name})
            return None


class GeminiAdapter(BaseProviderAdapter):
    """Primary provider: Google Gemini via the google-genai SDK."""

    @property
    def is_configured(self) -> bool:
        return bool(self.config.api_key)

    def _create_client(self) -> genai.Client:
        return genai.Client(
            api_key=self.config.api_key,
            http_options=types.HttpOptions(timeout=int(self.config.timeout * 1000)),
        )

    async def _request(self, conversation: Sequence[ConversationTurn]) -> Optional[str]:
        system_text, user_text = split_system_and_user(conversation)
        response = await self.client.aio.models.generate_content(
            model=self.config.model,
            contents=user_text,
            config=types.GenerateContentConfig(
                system_instruction=system_text,
                temperature=self.config.temperature,
                response_mime_type="application/json",
            ),
        )
        return response.text


class OpenAICompatibleAdapter(BaseProviderAdapter):
    """Secondary provider: any API exposing OpenAI style chat completions."""

    @property
    def is_configured(self) -> bool:
        return bool(self.config.base_url and self.config.api_key)

    def _create_client(self) -> AsyncOpenAI:
        # Retrying belongs to the structured generator, not the SDK
        return AsyncOpenAI(
            api_key=self.config.api_key,
            base_url=self.config.base_url,
            timeout=self.config.timeout,
            max_retries=0,
        )

    async def _request(self, conversation: Sequence[ConversationTurn]) -> Optional[str]:
        messages: List[Dict[str, str]] = [
            {"role": turn.role.value, "content": turn.content} for turn in conversation
        ]
        response = await self.client.chat.completions.create(
            model=self.config.model,
            messages=messages,
            temperature=self.config.temperature,
            response_format={"type": "json_object"},
        )
        return response.choices[0].message.content


ADAPTERS = {
    LLMProvider.GEMINI: GeminiAdapter,
    LLMProvider.OPENAI: OpenAICompatibleAdapter,
}


def create_adapter(config: ProviderConfig) -> BaseProviderAdapter:
    """Build the adapter matching ``config.provider``."""
    return ADAPTERS[config.provider](config)
