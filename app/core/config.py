from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env")

    # JWT
    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Banco de dados
    DATABASE_URL: str
    DATABASE_ECHO: bool = False

    LOG_LEVEL: str = "INFO"

    # generative backend (OpenAI-compatible chat completions)
    LLM_BASE_URL: str = "https://models.inference.ai.azure.com"
    LLM_API_KEY: Optional[str] = None
    LLM_MODEL: str = "gpt-4o"
    LLM_TEMPERATURE: float = 0.7
    LLM_MAX_TOKENS: int = 4096
    LLM_TOP_P: float = 1.0
    LLM_TIMEOUT_SECONDS: float = 60.0

    # quiz pipeline
    MAX_QUESTIONS_PER_QUIZ: int = 50
    DEFAULT_QUIZ_DURATION: int = 10
    DEFAULT_QUESTION_POINTS: int = 10

    # sessions
    JOIN_CODE_LENGTH: int = 6
    JOIN_CODE_MAX_ATTEMPTS: int = 5
    DRAFT_GRACE_MINUTES: int = 30


settings = Settings()
