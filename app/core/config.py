from pydantic import SecretStr
from pydantic_settings import BaseSettings
from typing import List, Optional

class Settings(BaseSettings):
    # App Config
    APP_NAME: str = "AI-Assisted Knowledge Quiz"
    APP_VERSION: str = "0.1.0"
    API_PREFIX: str = "/api/quiz"
    HOST: str = "0.0.0.0"
    PORT: int = 4000

    # Logging
    ENVIRONMENT: str = "development" # "development" or "production"
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None

    # Primary provider: Google Gemini
    GEMINI_API_KEY: Optional[SecretStr] = None
    GEMINI_MODEL: str = "gemini-1.5-flash"

    # Secondary provider: any OpenAI compatible API
    AI_BASE_URL: Optional[str] = None
    AI_API_KEY: Optional[SecretStr] = None
    AI_MODEL: str = "gpt-4o-mini"

    # Generation policy
    LLM_TEMPERATURE: float = 0.3
    LLM_TIMEOUT: float = 60.0
    LLM_MAX_ATTEMPTS: int = 3
    LLM_PROVIDER_ORDER: List[str] = ["gemini", "openai"]

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
