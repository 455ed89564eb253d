import logging

from app.core.config import Settings
from app.core.constants import (
    CHOICE_COUNT,
    CHOICE_IDS,
    FALLBACK_QUESTIONS,
    FEEDBACK_MAX_CHARS,
    FEEDBACK_TEMPLATES,
    QUESTION_COUNT,
    get_score_tier,
)
from app.core.multi_llm import create_provider_chain
from app.core.prompt_manager import PromptManager, get_prompt_manager
from app.core.structured_generator import StructuredGenerator
from app.schemas.quiz import Choice, FeedbackMessage, Question, QuestionSet

logger = logging.getLogger(__name__)


def fallback_question_set(topic: str) -> QuestionSet:
    """Canned 5x4 quiz naming the topic in every question and choice."""
    questions = []
    for question_id, template, label, correct_id in FALLBACK_QUESTIONS:
        choices = [
            Choice(
                id=choice_id,
                text=f"{label} {choice_id.upper()} about {topic}",
                isCorrect=choice_id == correct_id,
            )
            for choice_id in CHOICE_IDS
        ]
        questions.append(Question(id=question_id, question=template.format(topic=topic), choices=choices))
    return QuestionSet(questions=questions)


def fallback_feedback(topic: str, score: int) -> FeedbackMessage:
    """Canned feedback picked by score tier."""
    message = FEEDBACK_TEMPLATES[get_score_tier(score)].format(topic=topic)
    return FeedbackMessage(message=message[:FEEDBACK_MAX_CHARS])


class QuizService:
    """
    Exposes the two quiz operations. Neither one raises: both return model
    output when a provider cooperates and canned content otherwise.
    """

    def __init__(self, generator: StructuredGenerator, prompts: PromptManager = None):
        self.generator = generator
        self.prompts = prompts or get_prompt_manager()

    @classmethod
    def from_settings(cls, settings: Settings) -> "QuizService":
        chain = create_provider_chain(settings)
        return cls(StructuredGenerator(chain, max_attempts=settings.LLM_MAX_ATTEMPTS))

    async def generate_question_set(self, topic: str) -> QuestionSet:
        conversation = self.prompts.build_conversation(
            "questions_system",
            "questions_user",
            TOPIC=topic,
            QUESTION_COUNT=QUESTION_COUNT,
            CHOICE_COUNT=CHOICE_COUNT,
        )
        logger.info(f"Generating questions for topic '{topic}'")
        return await self.generator.generate(
            conversation,
            QuestionSet,
            lambda: fallback_question_set(topic),
        )

    async def generate_feedback(self, topic: str, score: int) -> FeedbackMessage:
        conversation = self.prompts.build_conversation(
            "feedback_system",
            "feedback_user",
            TOPIC=topic,
            SCORE=score,
            QUESTION_COUNT=QUESTION_COUNT,
            MAX_CHARS=FEEDBACK_MAX_CHARS,
        )
        logger.info(f"Generating feedback for topic '{topic}' (score {score}/{QUESTION_COUNT})")
        return await self.generator.generate(
            conversation,
            FeedbackMessage,
            lambda: fallback_feedback(topic, score),
        )
