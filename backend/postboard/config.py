"""
Postboard Backend — Application Configuration
===============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; validated before the app starts.
"""

from typing import FrozenSet, List, Tuple

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for local development against a
    SQLite file. Production deployments override DATABASE_URL and API_TOKENS.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # Format: sqlite+aiosqlite:///./file.db or postgresql+asyncpg://user:pw@host/db
    database_url: str = Field(
        default="sqlite+aiosqlite:///./postboard.db",
        description="Async SQLAlchemy connection URL",
    )

    # Pool options are only handed to the engine for server databases
    db_pool_size: int = Field(default=20, ge=5, le=100)
    db_max_overflow: int = Field(default=10, ge=0, le=50)
    db_pool_pre_ping: bool = Field(default=True)

    # ── Authentication ────────────────────────────────────────────────────
    # What: Bearer tokens accepted by the auth gate, comma-separated
    api_tokens: str = Field(default="valid-token")

    @property
    def api_token_set(self) -> FrozenSet[str]:
        """Parsed set of accepted bearer tokens (blank entries dropped)."""
        return frozenset(t.strip() for t in self.api_tokens.split(",") if t.strip())

    # ── Response Envelope ─────────────────────────────────────────────────
    # What: Path prefixes whose responses are never wrapped in the envelope.
    # Resolved once per route when the router registers it.
    response_passthrough_paths: str = Field(default="/health,/metrics,/docs")

    @property
    def response_passthrough_list(self) -> Tuple[str, ...]:
        return tuple(
            p.strip() for p in self.response_passthrough_paths.split(",") if p.strip()
        )

    # ── CORS ──────────────────────────────────────────────────────────────
    cors_origins: str = Field(default="http://localhost:3000")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=3000, ge=1024, le=65535)

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
    }

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    def validate_required_for_production(self) -> None:
        """
        Validates that critical settings are configured.

        Called during app startup (lifespan). Raises ValueError listing
        every problem found.
        """
        errors = []
        if not self.api_token_set:
            errors.append("API_TOKENS is empty; every protected route would reject all requests")
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


# Singleton instance, imported throughout the application
settings = Settings()
