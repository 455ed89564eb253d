"""
Quiz-related Pydantic schemas.

These models are the structure contracts model output is validated against.
Strict field types keep a provider from slipping "true" in for a boolean.
"""

from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, field_validator

from app.core.constants import (
    CHOICE_COUNT,
    FEEDBACK_MAX_CHARS,
    QUESTION_COUNT,
    TurnRole,
)


# question id -> selected choice id
AnswerMap = Dict[str, str]


class ConversationTurn(BaseModel):
    """One role-tagged message sent to a provider."""
    model_config = ConfigDict(frozen=True)

    role: TurnRole
    content: str


class Choice(BaseModel):
    """A single answer option."""
    model_config = ConfigDict(frozen=True)

    id: StrictStr = Field(..., min_length=1)
    text: StrictStr = Field(..., min_length=1)
    isCorrect: StrictBool


class Question(BaseModel):
    """Individual quiz question with exactly one correct choice."""
    model_config = ConfigDict(frozen=True)

    id: StrictStr = Field(..., min_length=1)
    question: StrictStr = Field(..., min_length=1)
    choices: List[Choice] = Field(..., min_length=CHOICE_COUNT, max_length=CHOICE_COUNT)

    @field_validator("choices")
    @classmethod
    def check_choices(cls, choices: List[Choice]) -> List[Choice]:
        correct = sum(1 for choice in choices if choice.isCorrect)
        if correct != 1:
            raise ValueError(f"Each question must have exactly one correct choice (found {correct})")

        ids = [choice.id for choice in choices]
        if len(set(ids)) != len(ids):
            raise ValueError(f"Choice ids must be unique within a question: {ids}")
        return choices

    @property
    def correct_choice_id(self) -> str:
        return next(choice.id for choice in self.choices if choice.isCorrect)

    def has_choice(self, choice_id: str) -> bool:
        return any(choice.id == choice_id for choice in self.choices)


class QuestionSet(BaseModel):
    """Complete quiz: exactly five questions."""
    model_config = ConfigDict(frozen=True)

    questions: List[Question] = Field(..., min_length=QUESTION_COUNT, max_length=QUESTION_COUNT)

    @field_validator("questions")
    @classmethod
    def check_unique_ids(cls, questions: List[Question]) -> List[Question]:
        ids = [question.id for question in questions]
        if len(set(ids)) != len(ids):
            raise ValueError(f"Question ids must be unique within a quiz: {ids}")
        return questions

    def get_question(self, question_id: str) -> Optional[Question]:
        return next((q for q in self.questions if q.id == question_id), None)


class FeedbackMessage(BaseModel):
    """Narrative feedback shown on the results screen."""
    model_config = ConfigDict(frozen=True)

    message: StrictStr = Field(..., min_length=1, max_length=FEEDBACK_MAX_CHARS)


def score_answers(question_set: QuestionSet, answers: AnswerMap) -> int:
    """Count questions whose selected choice is the correct one."""
    return sum(
        1 for question in question_set.questions
        if answers.get(question.id) == question.correct_choice_id
    )
