"""
Robust structured generation.

Asks the provider chain for JSON, validates it against a pydantic model and,
on any failure, appends a repair turn and tries again. When the attempt
budget is spent the fallback factory supplies the result, so ``generate``
always returns a valid value.
"""

import logging
from typing import Callable, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ValidationError

from app.core.constants import REPAIR_INSTRUCTION, TurnRole
from app.core.exceptions import JSONParseError, ProviderError, StructureValidationError
from app.core.multi_llm import ProviderChain
from app.core.parsers import QuizJSONOutputParser
from app.schemas.quiz import ConversationTurn

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

Conversation = Tuple[ConversationTurn, ...]

REPAIR_TURN = ConversationTurn(role=TurnRole.USER, content=REPAIR_INSTRUCTION)


class StructuredGenerator:
    """
    Generates provider output that satisfies a structure contract.

    Attempts are strictly sequential. Each failed attempt extends the
    conversation by exactly one repair turn; the caller's conversation is
    never mutated.

    Example:
        generator = StructuredGenerator(chain, max_attempts=3)
        quiz = await generator.generate(prompt, QuestionSet, lambda: fallback(topic))
    """

    def __init__(self, chain: ProviderChain, max_attempts: int = 3):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.chain = chain
        self.max_attempts = max_attempts
        self.parser = QuizJSONOutputParser()

    async def generate(
        self,
        conversation: Tuple[ConversationTurn, ...],
        schema: Type[T],
        fallback_factory: Callable[[], T],
    ) -> T:
        """Return validated model output, or the fallback after exhaustion."""
        conversation = tuple(conversation)

        for attempt in range(1, self.max_attempts + 1):
            context = {"schema": schema.__name__, "attempt": attempt}
            try:
                result = await self._attempt(conversation, schema)
                logger.info(f"{schema.__name__} generated on attempt {attempt}/{self.max_attempts}", extra=context)
                return result
            except (ProviderError, JSONParseError, StructureValidationError) as e:
                logger.warning(f"{schema.__name__} attempt {attempt}/{self.max_attempts} failed: {e}", extra=context)
            except Exception:
                logger.exception(f"{schema.__name__} attempt {attempt}/{self.max_attempts} failed unexpectedly", extra=context)

            conversation = conversation + (REPAIR_TURN,)

        logger.warning(
            f"{schema.__name__} generation exhausted, using fallback content",
            extra={"schema": schema.__name__, "attempt": self.max_attempts},
        )
        return fallback_factory()

    async def _attempt(self, conversation: Conversation, schema: Type[T]) -> T:
        text: Optional[str] = await self.chain.complete(conversation)
        if text is None:
            raise ProviderError("No provider produced output")

        payload = self.parser.parse(text)

        try:
            return schema.model_validate(payload)
        except ValidationError as e:
            raise StructureValidationError(
                f"Output does not match {schema.__name__}: {e.error_count()} error(s)",
                errors=e.errors(),
            )
