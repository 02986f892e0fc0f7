"""Application configuration and settings management."""

from pathlib import Path
from typing import Any

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="WASTEROUTE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Waste Collection Route Optimizer API"
    api_prefix: str = "/api"
    log_level: str = Field(default="INFO", description="Root log level applied when the app starts.")
    data_root: Path = Field(default=Path("data"), description="Root directory for data files and route outputs.")
    bins_file: Path = Field(
        default=Path("data/bins.json"),
        description="Smart bin snapshot (JSON array of bin documents).",
    )
    requests_file: Path = Field(
        default=Path("data/requests.json"),
        description="Waste pickup request snapshot (JSON array of request documents).",
    )
    default_start_lat: float = Field(default=6.9271, ge=-90.0, le=90.0, description="Depot latitude (Colombo).")
    default_start_lng: float = Field(default=79.8612, ge=-180.0, le=180.0, description="Depot longitude (Colombo).")
    fill_level_threshold: int = Field(default=70, ge=0, le=100)
    max_stops: int = Field(default=50, ge=0)
    average_speed_kmh: float = Field(
        default=30.0,
        gt=0.0,
        description="Average urban speed of a collection vehicle, stops included.",
    )
    service_time_minutes: float = Field(default=5.0, ge=0.0, description="Time budget spent at each stop.")
    tie_epsilon_km: float = Field(
        default=0.05,
        ge=0.0,
        description="Candidates this close to the nearest one are treated as equidistant.",
    )
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:3000",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("data_root", "bins_file", "requests_file", mode="before")
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
            # Try JSON first
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            # Try comma-separated
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
