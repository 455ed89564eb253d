from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging
import uvicorn

from app.core.config import settings
from app.core.logging_config import setup_logging
from app.routers import quiz
from app.schemas import InvalidRequestResponse
from app.services.quiz_service import QuizService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    setup_logging(settings.ENVIRONMENT, settings.LOG_LEVEL, settings.LOG_DIR)
    app.state.quiz_service = QuizService.from_settings(settings)
    logger.info(f"{settings.APP_NAME} started (providers: {app.state.quiz_service.generator.chain.get_stats()})")

    yield
    # Shutdown
    logger.info(f"{settings.APP_NAME} shutting down")

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def invalid_request_handler(request: Request, exc: RequestValidationError):
    body = InvalidRequestResponse(details=jsonable_encoder(exc.errors()))
    return JSONResponse(status_code=400, content=body.model_dump())


@app.get("/health")
async def health_check():
    return {"status": "ok", "version": settings.APP_VERSION}


app.include_router(quiz.router)


if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
    )
