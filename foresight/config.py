"""Application configuration."""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_ENV: str = "development"
    API_V1_PREFIX: str = "/api"
    HOST: str = "0.0.0.0"
    PORT: int = 3003
    LOG_LEVEL: str = "INFO"

    # OpenAI
    OPENAI_API_KEY: str = ""
    OPENAI_MODEL: str = "gpt-4o-mini"
    OPENAI_MAX_TOKENS: int = 2000
    OPENAI_TEMPERATURE: Optional[float] = None
    OPENAI_TIMEOUT_SECONDS: Optional[float] = None
    SYSTEM_PROMPT: str = "You are a helpful assistant."

    # Pipeline shape
    SCENARIO_COUNT: int = 2
    ITEMS_MIN: int = 3
    ITEMS_MAX: int = 5
    TOPIC_CANDIDATES: int = 10
    MAX_STAKEHOLDERS: int = 5

    # Concurrency (baseline is strictly sequential)
    PIPELINE_PARALLEL_AGENTS: bool = False
    PIPELINE_ITEM_CONCURRENCY: int = 1
    GENERATION_MAX_IN_FLIGHT: int = 4

    # Retry (1 attempt = no retry)
    RETRY_MAX_ATTEMPTS: int = 1
    RETRY_BASE_DELAY: float = 1.0
    RETRY_MAX_DELAY: float = 30.0

    # Output
    OUTPUT_DIR: str = "logs"
    OUTPUT_PREFIX: str = "ai_positive_scenarios"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


settings = Settings()
