from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
import logging

from app.core.config import settings
from app.schemas import (
    ErrorResponse,
    FeedbackRequest,
    FeedbackResponse,
    QuestionsResponse,
    QuizGenerationRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix=settings.API_PREFIX,
    tags=["quiz"],
    responses={500: {"model": ErrorResponse}},
)


def error_response(message: str, status_code: int = 500) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


@router.post("/generate", response_model=QuestionsResponse)
async def generate_questions(body: QuizGenerationRequest, request: Request):
    """Generate five multiple-choice questions for a topic."""
    service = getattr(request.app.state, "quiz_service", None)
    if service is None:
        return error_response("Services not initialized")
    try:
        question_set = await service.generate_question_set(body.topic)
        return QuestionsResponse(questions=question_set.questions)
    except Exception:
        logger.exception("Error generating questions")
        return error_response("Failed to generate questions")


@router.post("/feedback", response_model=FeedbackResponse)
async def generate_feedback(body: FeedbackRequest, request: Request):
    """Generate a short feedback message for a finished quiz."""
    service = getattr(request.app.state, "quiz_service", None)
    if service is None:
        return error_response("Services not initialized")
    try:
        feedback = await service.generate_feedback(body.topic, body.score)
        return FeedbackResponse(message=feedback.message)
    except Exception:
        logger.exception("Error generating feedback")
        return error_response("Failed to generate feedback")
