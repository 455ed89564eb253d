from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.core.config import Settings
from app.services.quiz_service import QuizService
from tests.fakes import make_question_payload


@pytest.fixture
def valid_questions_json() -> str:
    return json.dumps(make_question_payload())


@pytest.fixture
def unconfigured_settings() -> Settings:
    return Settings(
        GEMINI_API_KEY=None,
        AI_BASE_URL=None,
        AI_API_KEY=None,
        LLM_PROVIDER_ORDER=["gemini", "openai"],
        LLM_MAX_ATTEMPTS=3,
    )


@pytest.fixture
def offline_service(unconfigured_settings) -> QuizService:
    """Service whose providers are both unconfigured."""
    return QuizService.from_settings(unconfigured_settings)
