"""Editor Finder application settings loaded from environment variables."""

from enum import StrEnum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from editorfinder.errors import ValidationError


class Environment(StrEnum):
    """Deployment environment."""

    DEV = "dev"
    STAGING = "staging"
    PROD = "prod"


class LogLevel(StrEnum):
    """Supported log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Settings(BaseSettings):
    """Application-wide settings loaded from environment variables / .env file.

    All secrets and deployment-specific values live here. Never hardcode them.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Firestore ---
    FIRESTORE_PROJECT_ID: str = Field(
        default="",
        description="Google Cloud project hosting the Firestore database.",
    )
    FIRESTORE_DATABASE: str = Field(
        default="(default)",
        description="Firestore database name within the project.",
    )
    FIRESTORE_EMULATOR_HOST: str = Field(
        default="",
        description="host:port of a local Firestore emulator (dev only).",
    )

    # --- Third-party data providers ---
    TMDB_API_KEY: str = Field(
        default="",
        description="The Movie Database API key used by the TMDb sync.",
    )
    APIFY_TOKEN: str = Field(
        default="",
        description="Apify token for the web-research provider.",
    )
    SCRAPING_DELAY_MS: int = Field(
        default=2000,
        ge=0,
        description="Delay between provider batches, in milliseconds.",
    )

    # --- Admin ---
    ADMIN_API_KEY: str = Field(
        default="",
        description="Bearer token required by admin endpoints in production.",
    )

    # --- Knowledge ---
    KNOWLEDGE_UPDATE_CREATES_MISSING: bool = Field(
        default=True,
        description=(
            "When true, an update against a missing knowledge document "
            "creates it with defaults first."
        ),
    )

    # --- Logging ---
    LOG_LEVEL: LogLevel = Field(
        default=LogLevel.INFO,
        description="Application log level.",
    )

    # --- Environment ---
    ENVIRONMENT: Environment = Field(
        default=Environment.DEV,
        description="Deployment environment (dev/staging/prod).",
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.ENVIRONMENT == Environment.PROD

    def missing_store_config(self) -> list[str]:
        """Return the names of required Firestore variables that are unset."""
        if self.FIRESTORE_EMULATOR_HOST:
            return []
        return [] if self.FIRESTORE_PROJECT_ID else ["FIRESTORE_PROJECT_ID"]

    def require_store_config(self) -> None:
        """Raise ``ValidationError`` naming any missing Firestore variables."""
        missing = self.missing_store_config()
        if missing:
            raise ValidationError(
                f"Missing required environment variables: {', '.join(missing)}",
            )


def get_settings() -> Settings:
    """Factory function for dependency injection via FastAPI Depends."""
    return Settings()
