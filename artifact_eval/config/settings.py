"""Application settings and configuration."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DIMENSIONS = "correctness,completeness,consistency,relevance,format"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: Literal["development", "staging", "production"] = Field(
        default="development", alias="ENVIRONMENT"
    )
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="json", alias="LOG_FORMAT")

    # Evaluation defaults (used by the shared evaluator)
    eval_passing_threshold: float = Field(
        default=0.7, ge=0.0, le=1.0, alias="EVAL_PASSING_THRESHOLD"
    )
    eval_strict_mode: bool = Field(default=False, alias="EVAL_STRICT_MODE")
    eval_dimensions: str = Field(default=DEFAULT_DIMENSIONS, alias="EVAL_DIMENSIONS")

    # Optional thread-pool fan-out across dimensions
    eval_parallel: bool = Field(default=False, alias="EVAL_PARALLEL")
    eval_max_workers: int = Field(default=5, ge=1, alias="EVAL_MAX_WORKERS")

    @property
    def eval_dimension_list(self) -> list[str]:
        """Get configured evaluation dimensions as a list."""
        return [d.strip().lower() for d in self.eval_dimensions.split(",") if d.strip()]

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development."""
        return self.environment == "development"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
