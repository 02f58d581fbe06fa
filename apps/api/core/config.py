"""Centralized application configuration via Pydantic Settings.

Loads all env vars into a typed Settings instance. Replaces scattered
os.environ.get() calls throughout the codebase.
"""

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Supabase (identity provider + transaction store)
    SUPABASE_URL: str = Field(default="", description="Supabase project URL")
    SUPABASE_ANON_KEY: str = Field(default="", description="Supabase anon/public key")

    # CORS
    ALLOWED_ORIGINS: str = Field(
        default="http://localhost:3000",
        description="Comma-separated allowed origins for CORS",
    )

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Python log level")
    ENVIRONMENT: str = Field(
        default="development",
        description="Runtime environment: development, staging, production",
    )

    # App
    APP_VERSION: str = Field(default="0.1.0", description="Application version")

    # Ingestion
    MAX_UPLOAD_BYTES: int = Field(
        default=10 * 1024 * 1024, description="Largest accepted statement upload"
    )

    # Categorization
    SIMILARITY_THRESHOLD: float = Field(
        default=0.6,
        ge=0.0,
        le=1.0,
        description="Minimum edit-distance similarity for batch suggestions",
    )
    VENDOR_OVERRIDES_FILE: str = Field(
        default="",
        description="Optional JSON file of vendor -> category overrides loaded at startup",
    )

    @property
    def allowed_origins(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]

    @property
    def log_level(self) -> str:
        return self.LOG_LEVEL

    @property
    def json_logs(self) -> bool:
        return self.ENVIRONMENT == "production"

    model_config = {"env_file": ".env", "extra": "ignore"}


def get_settings() -> Settings:
    """Factory for Settings; tests build their own instances."""
    return Settings()


settings = get_settings()
