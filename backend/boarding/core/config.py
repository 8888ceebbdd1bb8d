"""Application configuration via pydantic settings."""

from functools import lru_cache
from pathlib import Path

from typing import Any, Literal

from pydantic import AliasChoices, Field
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Typed application configuration."""

    app_env: str = Field("local", alias="APP_ENV")
    app_name: str = "Healthy Pet Boarding Calendar API"
    api_v1_prefix: str = "/api/v1"

    store_backend: Literal["auto", "database", "local"] = Field(
        "auto", alias="STORE_BACKEND"
    )
    database_url: str | None = Field(default=None, alias="DATABASE_URL")
    sync_database_url: str | None = Field(default=None, alias="SYNC_DATABASE_URL")
    local_store_path: Path = Field(
        Path(".storage") / "vet-boarding-reservations.json",
        alias="LOCAL_STORE_PATH",
    )
    clinic_timezone: str | None = Field(default=None, alias="CLINIC_TIMEZONE")

    gemini_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("API_KEY", "GEMINI_API_KEY"),
    )
    gemini_model: str = Field("gemini-2.5-flash", alias="GEMINI_MODEL")
    summary_temperature: float = Field(0.5, alias="SUMMARY_TEMPERATURE")
    summary_top_p: float = Field(0.95, alias="SUMMARY_TOP_P")

    cors_allow_origins: list[str] = Field(
        default_factory=lambda: [
            "http://localhost:5173",
            "http://localhost:5174",
        ],
        alias="CORS_ALLOW_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=False, alias="CORS_ALLOW_CREDENTIALS")

    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parents[3] / ".env",
        case_sensitive=False,
        populate_by_name=True,
    )

    @property
    def database_configured(self) -> bool:
        return bool(self.database_url)

    @property
    def summary_configured(self) -> bool:
        return bool(self.gemini_api_key)

    @field_validator("cors_allow_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("database_url", "gemini_api_key", "clinic_timezone", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""
    return Settings()  # type: ignore[call-arg]
