"""Application configuration and settings management."""

from pathlib import Path
from typing import Any

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="TRACKER_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Team Tracker API"
    api_prefix: str = "/api"
    log_level: str = "INFO"
    database_url: str = Field(
        default="sqlite:///data/team_tracker.db",
        description="SQLAlchemy URL of the tracker database.",
    )
    db_timeout_seconds: float = Field(
        default=5.0,
        gt=0.0,
        description="Upper bound on any single wait for the database (busy, pool or statement timeout).",
    )
    lock_timeout_seconds: float = Field(
        default=5.0,
        gt=0.0,
        description="Upper bound on waiting for the write gate before failing with a timeout.",
    )
    catalog_file: Path = Field(
        default=Path("data/locations.kml"),
        description="Location catalog (KML, CSV or XLSX) used to seed an empty database.",
    )
    seed_on_startup: bool = True
    active_window_hours: int = Field(
        default=24,
        ge=0,
        description="A team with a visit inside this window counts as active.",
    )
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("catalog_file", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
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
