from __future__ import annotations

from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv(override=False)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    LLM_PROVIDER: str = "deepseek"
    LLM_MODEL: Optional[str] = None
    LLM_API_KEY: Optional[str] = None
    OLLAMA_BASE_URL: str = "http://localhost:11434"
    LLM_TIMEOUT: float = 60.0

    TEMPERATURE: float = 0.7
    PLANNER_TEMPERATURE: float = 0.3
    REFINER_TEMPERATURE: float = 0.3
    VALIDATOR_TEMPERATURE: float = 0.1
    SEMANTIC_VALIDATION: bool = True

    LOG_LEVEL: str = "INFO"
    LANGFUSE_HOST: Optional[str] = None
    LANGFUSE_PUBLIC_KEY: Optional[str] = None
    LANGFUSE_SECRET_KEY: Optional[str] = None

    @property
    def tracing_enabled(self) -> bool:
        return bool(self.LANGFUSE_PUBLIC_KEY and self.LANGFUSE_SECRET_KEY)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
