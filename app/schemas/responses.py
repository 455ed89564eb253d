"""Response schemas."""

from pydantic import BaseModel, Field
from typing import Any, List

from app.schemas.quiz import Question


class QuestionsResponse(BaseModel):
    questions: List[Question]


class FeedbackResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    """Error body shared by every non-2xx response."""
    error: str


class InvalidRequestResponse(ErrorResponse):
    """Error body returned when a request fails validation."""
    error: str = Field(default="Invalid request")
    details: List[Any] = Field(default_factory=list)
