from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Security: Read from .env, never hardcode keys here.
    # A missing key only disables AI summaries, runs are unaffected.
    OPENAI_API_KEY: str | None = None
    OPENAI_BASE_URL: str | None = None # e.g. an Azure OpenAI endpoint

    # Model Configuration
    OPENAI_MODEL: str = "gpt-4o-mini"

    # Generation Parameters
    LLM_TEMPERATURE: float = 0.2

    # Command Executor
    # When unset, commands are answered by the built-in mock executor
    EXECUTOR_URL: str | None = None
    EXECUTOR_TIMEOUT_SECONDS: float = 10.0

    # Loop protection for cyclic guides
    RUN_STEP_BUDGET: int = 100

    # Storage Configuration
    STORAGE_BACKEND: Literal["memory", "database"] = "memory"
    DATABASE_URL: str = "sqlite:///./incident_triage.db"

    LOG_LEVEL: str = "INFO"

    # Loads from a .env file in the root directory
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

# Singleton instance
settings = Settings()
