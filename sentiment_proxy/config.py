"""Application settings loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Strongly typed application configuration."""

    hugging_face_key: str = Field(alias="HUGGING_FACE_KEY")
    inference_api_url: str = Field(
        default="https://api-inference.huggingface.co/models",
        alias="INFERENCE_API_URL",
    )
    model_id: str = Field(
        default="distilbert-base-uncased-finetuned-sst-2-english", alias="MODEL_ID"
    )
    max_retries: int = Field(default=10, ge=1, alias="MAX_RETRIES")
    retry_delay: float = Field(
        default=3.0, ge=0.0, alias="RETRY_DELAY", description="Seconds"
    )
    upstream_timeout: float = Field(
        default=30.0, gt=0.0, alias="UPSTREAM_TIMEOUT", description="Seconds"
    )
    max_text_length: int = Field(default=5000, alias="MAX_TEXT_LENGTH")
    cors_allow_origin: str = Field(default="*", alias="CORS_ALLOW_ORIGIN")
    environment: str = Field(default="development", alias="ENVIRONMENT")
    log_level: Literal["debug", "info", "warning", "error", "critical"] = Field(
        default="info", alias="LOG_LEVEL"
    )
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8000, alias="PORT")

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, protected_namespaces=()
    )

    @property
    def model_url(self) -> str:
        return f"{self.inference_api_url.rstrip('/')}/{self.model_id}"


@lru_cache
def get_settings() -> Settings:
    """Return a cached instance of settings."""

    return Settings()
