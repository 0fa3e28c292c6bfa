"""Package configuration from environment variables."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    scenesvg_env: str = "development"
    scenesvg_log_level: str = "info"

    # Fractional digits kept when formatting numeric attributes
    scenesvg_precision: int = Field(default=5, ge=0, le=12)
    # Shared geometric tolerance for every shape predicate
    scenesvg_epsilon: float = Field(default=1e-7, gt=0.0, lt=1.0)

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
