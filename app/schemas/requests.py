"""Request schemas. Strict types: "3" or true is not a score."""

from pydantic import BaseModel, Field, StrictInt, StrictStr

from app.core.constants import SCORE_MAX, SCORE_MIN, TOPIC_MAX_LENGTH, TOPIC_MIN_LENGTH


class QuizGenerationRequest(BaseModel):
    """Request to generate a question set."""
    topic: StrictStr = Field(
        ...,
        min_length=TOPIC_MIN_LENGTH,
        max_length=TOPIC_MAX_LENGTH,
        description="Quiz topic"
    )

    class Config:
        json_schema_extra = {
            "example": {"topic": "Photosynthesis"}
        }


class FeedbackRequest(BaseModel):
    """Request for feedback on a finished quiz."""
    topic: StrictStr = Field(..., min_length=TOPIC_MIN_LENGTH, max_length=TOPIC_MAX_LENGTH)
    score: StrictInt = Field(..., ge=SCORE_MIN, le=SCORE_MAX, description="Correct answers out of 5")

    class Config:
        json_schema_extra = {
            "example": {"topic": "Photosynthesis", "score": 4}
        }
