"""
Relay Hub Backend: Application Configuration
===============================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
       Upstream credentials are read once and never mutated afterwards.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a frozen singleton `settings` object.
Who:   Injected into route handlers through the `get_settings` dependency.
When:  Loaded once at module import time; checked again during app startup.

Design Decision:
    The model is frozen so that no handler can change a credential or URL
    mid-flight. Tests build their own Settings instance and swap it in with
    FastAPI's dependency_overrides instead of patching module state.
"""

from typing import List

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every upstream credential defaults to an empty string so the server can
    still boot (and answer /health) while a key is missing. Missing keys are
    reported by missing_credentials() at startup.

    Attributes are grouped by upstream for readability.
    """

    # ── Face++ (face detection) ───────────────────────────────────────────
    # How to obtain: https://console.faceplusplus.com/app/apikey/list
    face_api_key: str = Field(default="", description="Face++ API key")
    face_api_secret: str = Field(default="", description="Face++ API secret")
    face_api_url: str = Field(
        default="https://api-us.faceplusplus.com/facepp/v3/detect",
        description="Face++ detect endpoint",
    )

    # ── OpenWeatherMap ────────────────────────────────────────────────────
    weather_api_key: str = Field(default="", description="OpenWeatherMap API key")
    weather_api_url: str = Field(
        default="https://api.openweathermap.org/data/2.5/weather",
        description="Current weather endpoint",
    )

    # ── Chat completions (Llama API) ──────────────────────────────────────
    # LLAMA_API_KEY is the historical variable name; CHAT_API_KEY also works
    chat_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("chat_api_key", "llama_api_key"),
        description="Bearer token for the chat-completion API",
    )
    chat_api_url: str = Field(default="https://api.llama-api.com/chat/completions")
    chat_model: str = Field(default="llama-2-70b-chat")
    chat_temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    chat_max_tokens: int = Field(default=2000, ge=1, le=32768)

    # What: Timeout in seconds for every outbound upstream call
    # Why 60: httpx defaults to 5s, which chat completions routinely exceed
    upstream_timeout: float = Field(default=60.0, gt=0, le=600)

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, ge=1, le=65535)

    # What: Directory holding the browser client bundle, mounted at "/"
    static_dir: str = Field(default="public")

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated URLs, or "*" for any origin
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

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
        "frozen": True,
    }

    def missing_credentials(self) -> List[str]:
        """
        What:  Names of upstream credentials that are not configured.
        When:  Called during app startup (lifespan) and by /health.
        """
        required = {
            "FACE_API_KEY": self.face_api_key,
            "FACE_API_SECRET": self.face_api_secret,
            "WEATHER_API_KEY": self.weather_api_key,
            "LLAMA_API_KEY": self.chat_api_key,
        }
        return [name for name, value in required.items() if not value]


# Singleton instance, constructed once per process
settings = Settings()


def get_settings() -> Settings:
    """FastAPI dependency returning the process-wide settings."""
    return settings
