# multi_llm.py
"""
Provider chain with a fixed preference order.
The first provider that produces text wins; the rest are not called.
"""

import logging
from typing import List, Optional, Sequence

from app.core.config import Settings
from app.core.exceptions import ConfigurationError
from app.core.llm import BaseProviderAdapter, LLMProvider, ProviderConfig, create_adapter
from app.schemas.quiz import ConversationTurn

logger = logging.getLogger(__name__)


class ProviderChain:
    """
    Tries each provider adapter in priority order.

    Strategy:
    - Gemini first (primary)
    - OpenAI compatible endpoint second
    - None when neither produced output, so the caller can fall back
    """

    def __init__(self, adapters: Sequence[BaseProviderAdapter]):
        """Initialize chain with adapters in preference order."""
        self.adapters: List[BaseProviderAdapter] = list(adapters)
        logger.info(f"ProviderChain initialized: {' -> '.join(self.provider_names) or '(empty)'}")

    @property
    def provider_names(self) -> List[str]:
        return [adapter.name for adapter in self.adapters]

    async def complete(self, conversation: Sequence[ConversationTurn]) -> Optional[str]:
        """Return text from the first provider that answers, else None."""
        for adapter in self.adapters:
            text = await adapter.complete(conversation)
            if text is not None:
                logger.debug(f"Completion served by '{adapter.name}'", extra={"provider": adapter.name})
                return text

        logger.debug("No provider produced output")
        return None

    def get_stats(self) -> dict:
        """Describe each provider in the chain."""
        return {
            adapter.name: {
                "model": adapter.config.model,
                "configured": adapter.is_configured,
            }
            for adapter in self.adapters
        }


def parse_provider_order(names: Sequence[str]) -> List[LLMProvider]:
    """Validate configured provider names, keeping their order."""
    order: List[LLMProvider] = []
    for name in names:
        try:
            provider = LLMProvider(name.strip().lower())
        except ValueError:
            valid = [p.value for p in LLMProvider]
            raise ConfigurationError(f"Unknown provider '{name}'. Expected one of {valid}")
        if provider in order:
            raise ConfigurationError(f"Provider '{name}' listed more than once")
        order.append(provider)
    return order


def create_provider_chain(settings: Settings) -> ProviderChain:
    """Build the chain described by ``LLM_PROVIDER_ORDER``."""
    adapters = [
        create_adapter(ProviderConfig.from_settings(provider, settings))
        for provider in parse_provider_order(settings.LLM_PROVIDER_ORDER)
    ]
    return ProviderChain(adapters)
