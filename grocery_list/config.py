"""Configuration management for the application."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_STATIC_DIR = Path(__file__).resolve().parent / "static"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = Field(default="sqlite:///grocery.db")

    # Server
    host: str = Field(default="0.0.0.0")  # noqa: S104
    port: int = Field(default=3001)
    log_level: str = Field(default="info")

    # Demo mode
    gl_demo: bool = Field(default=False)
    demo_database_path: Path = Field(default=Path("grocery_demo.db"))
    demo_reset_interval_minutes: float = Field(default=15, gt=0)

    # Frontend
    static_dir: Path = Field(default=DEFAULT_STATIC_DIR)

    # API
    environment: str = Field(default="development")

    @model_validator(mode="after")
    def validate_demo_settings(self) -> "Settings":
        """Validate that demo mode runs against a SQLite database."""
        if self.gl_demo and not self.database_url.startswith("sqlite"):
            raise ValueError("GL_DEMO requires a SQLite DATABASE_URL")
        return self

    @property
    def is_demo(self) -> bool:
        """Check if running as a public demo with periodic resets."""
        return self.gl_demo

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def demo_reset_interval_seconds(self) -> float:
        return self.demo_reset_interval_minutes * 60


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
