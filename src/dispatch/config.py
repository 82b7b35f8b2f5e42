"""Application configuration and settings management."""

from typing import Annotated, Any

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="FSD_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Field Service Dispatch API"
    api_prefix: str = "/api"
    log_level: str = Field(default="INFO", description="Root logging level applied by create_app().")
    frontend_allowed_origins: Annotated[tuple[str, ...], NoDecode] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:5000",
            "http://127.0.0.1:5000",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    # Technician suggestion scoring
    suggestion_limit: int = Field(default=5, ge=1, description="Maximum number of ranked suggestions returned.")
    base_score: int = Field(default=100)
    specialty_match_bonus: int = Field(default=30, ge=0)
    workload_penalty_per_job: int = Field(default=10, ge=0)
    heavy_workload_threshold: int = Field(default=3, ge=1)
    proximity_near_miles: float = Field(default=5.0, gt=0.0)
    proximity_mid_miles: float = Field(default=15.0, gt=0.0)
    proximity_near_bonus: int = Field(default=20, ge=0)
    proximity_mid_bonus: int = Field(default=10, ge=0)
    location_freshness_minutes: int = Field(default=60, ge=0)
    location_freshness_bonus: int = Field(default=5, ge=0)

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: Any) -> str:
        return str(value or "INFO").strip().upper()

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            # Try JSON first
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
