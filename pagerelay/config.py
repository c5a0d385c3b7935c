"""
Page Relay — Application Configuration
========================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; checked again during app startup.
"""

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    The upstream credential and database identifier are supplied out-of-band
    (environment or .env). Everything else has a development default.
    """

    # ── Upstream (Notion) ─────────────────────────────────────────────────
    # Integration token sent as a Bearer credential on every upstream call
    notion_api_key: str = Field(
        default="",
        description="Notion integration token",
    )

    # Target database whose pages this relay lists and creates
    notion_database_id: str = Field(
        default="",
        description="Notion database (collection) identifier",
    )

    notion_api_url: str = Field(default="https://api.notion.com/v1")
    notion_version: str = Field(default="2022-06-28")

    # Seconds before an upstream call is abandoned. None disables the timeout.
    upstream_timeout: Optional[float] = Field(default=None, gt=0)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Comma-separated origins; "*" keeps the relay fully permissive
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=3001, ge=1024, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    def validate_required_for_production(self) -> None:
        """
        What:  Validates that the upstream credential and database are configured.
        When:  Called during app startup (lifespan).
        How:   Collects every problem and raises one ValueError listing them.
        """
        errors = []
        if not self.notion_api_key:
            errors.append(
                "NOTION_API_KEY is not set. "
                "Create an internal integration at https://www.notion.so/my-integrations"
            )
        if not self.notion_database_id:
            errors.append(
                "NOTION_DATABASE_ID is not set. "
                "Share the database with the integration and copy its ID from the URL"
            )
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


# Singleton instance, imported throughout the application
settings = Settings()
