"""Schemas package."""

from .quiz import (
    AnswerMap,
    Choice,
    ConversationTurn,
    FeedbackMessage,
    Question,
    QuestionSet,
    score_answers,
)
from .requests import QuizGenerationRequest, FeedbackRequest
from .responses import QuestionsResponse, FeedbackResponse, ErrorResponse, InvalidRequestResponse

__all__ = [
    # Quiz
    "AnswerMap",
    "Choice",
    "ConversationTurn",
    "FeedbackMessage",
    "Question",
    "QuestionSet",
    "score_answers",
    # Requests
    "QuizGenerationRequest",
    "FeedbackRequest",
    # Responses
    "QuestionsResponse",
    "FeedbackResponse",
    "ErrorResponse",
    "InvalidRequestResponse",
]
