"""
Application configuration using Pydantic Settings.

All environment variables are accessed through this config object.
Never use os.getenv() directly in business logic.
"""

from pathlib import Path
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Storage Configuration
    DATA_DIR: str = Field(
        default="",
        description="Directory holding db.json (auto-detected when empty)",
    )
    VERCEL: str = Field(default="", description="Set by Vercel deployments")
    AWS_LAMBDA_FUNCTION_NAME: str = Field(default="", description="Set by AWS Lambda")
    ENCRYPTION_KEY: str = Field(
        default="default-key",
        description="Secret used to derive the API key encryption key",
    )

    # Application Configuration
    ALLOWED_ORIGINS: List[str] = Field(
        default=["http://localhost:3000"],
        description="CORS allowed origins",
    )
    AUTO_IMPORT_API_KEYS: bool = Field(
        default=False,
        description="Register provider keys from the environment on startup",
    )
    HTTP_TIMEOUT_SECONDS: float = Field(
        default=120.0,
        description="Timeout applied to every outbound provider call",
    )

    # Provider credentials (environment fallback)
    OPENAI_API_KEY: str = Field(default="", description="OpenAI API key")
    GOOGLE_API_KEY: str = Field(default="", description="Google key for Gemini and Veo")
    KLING_API_KEY: str = Field(default="", description="Kling (PiAPI) API key")
    SEEDREAM_API_KEY: str = Field(default="", description="Seedream (BytePlus Ark) API key")

    # Provider endpoints
    OPENAI_BASE_URL: str = Field(default="https://api.openai.com/v1")
    GEMINI_BASE_URL: str = Field(default="https://generativelanguage.googleapis.com/v1beta")
    SEEDREAM_BASE_URL: str = Field(default="https://ark.ap-southeast.bytepluses.com/api/v3")
    KLING_BASE_URL: str = Field(default="https://api.piapi.ai/api/kling")
    VEO_BASE_URL: str = Field(default="https://generativelanguage.googleapis.com/v1beta")
    VEO_MODEL: str = Field(default="veo-3.1", description="Veo model used for video jobs")

    # Long-running job polling
    KLING_POLL_INTERVAL_MS: int = Field(default=5000, description="Wait between Kling status checks")
    KLING_MAX_ATTEMPTS: int = Field(default=60, description="Kling status checks before timeout (5 min)")
    VEO_POLL_INTERVAL_MS: int = Field(default=5000, description="Wait between Veo status checks")
    VEO_MAX_ATTEMPTS: int = Field(default=120, description="Veo status checks before timeout (10 min)")

    # Usage log maintenance
    USAGE_LOG_RETENTION_DAYS: int = Field(
        default=30,
        description="Usage log entries older than this are pruned",
    )
    USAGE_CLEANUP_INTERVAL_HOURS: int = Field(
        default=1,
        description="How often the usage log pruning job runs",
    )

    def data_directory(self) -> Path:
        """Resolve the data directory; serverless hosts only allow writes to /tmp."""
        if self.DATA_DIR:
            return Path(self.DATA_DIR)
        if self.VERCEL or self.AWS_LAMBDA_FUNCTION_NAME:
            return Path("/tmp/data")
        return Path.cwd() / "data"


# Global settings instance
settings = Settings()
