"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="Tasks Repository")
    app_env: str = Field(default="development")
    debug: bool = Field(default=False)

    # Local store
    database_url: str = Field(
        default="sqlite+aiosqlite:///./tasks.db",
        description="SQLAlchemy URL for the local task store (async driver)",
    )

    # Remote store
    remote_latency_ms: int = Field(
        default=5000,
        ge=0,
        description="Artificial latency applied to remote reads",
    )
    seed_remote: bool = Field(
        default=True,
        description="Populate the simulated remote service with demo tasks",
    )

    # Logging
    log_level: str = Field(default="INFO")
    log_json: bool = Field(
        default=False,
        description="Render log events as JSON instead of console output",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def remote_latency_seconds(self) -> float:
        """Remote latency expressed for asyncio.sleep."""
        return self.remote_latency_ms / 1000


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
