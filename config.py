"""
Configuration module for the Artifact Lens application.
Handles environment variables and application settings.
"""
import os
from dotenv import load_dotenv

load_dotenv()


def _optional_float(name: str, default: float | None) -> float | None:
    """Read a float setting; an empty value or 'none' disables it."""
    raw = os.getenv(name)
    if raw is None:
        return default
    if raw.strip().lower() in ("", "none"):
        return None
    return float(raw)


class Config:
    """Application configuration class."""

    # API Keys
    OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")

    # External services
    CONTEXT_SERVICE_URL: str = os.getenv("CONTEXT_SERVICE_URL", "https://dev.sarvah.ai/api/v0/qa/")
    IMAGE_SEARCH_URL: str = os.getenv("IMAGE_SEARCH_URL", "https://dev.sarvah.ai/api/v0/imgsearch/")
    CONTEXT_QUESTION: str = "Find similar context"

    # Completion settings
    APP_TITLE: str = "Artifact Lens"
    OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "gpt-4o")
    MAX_OUTPUT_TOKENS: int = int(os.getenv("MAX_OUTPUT_TOKENS", "1500"))

    # Timeouts (in seconds, None waits forever)
    UPSTREAM_TIMEOUT: float | None = _optional_float("UPSTREAM_TIMEOUT", 60.0)
    COMPLETION_TIMEOUT: float | None = _optional_float("COMPLETION_TIMEOUT", None)

    # Connection pool for the context / image search services
    MAX_UPSTREAM_CONNECTIONS: int = 20

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and print warnings for missing API keys."""
        if not cls.OPENAI_API_KEY:
            print("   WARNING: OPENAI_API_KEY not found in .env file")
            print("   Chat completions will fail until a provider key is configured.")


Config.validate()
