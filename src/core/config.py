"""
Configuration Management
Pydantic Settings with strict validation
"""
from typing import Optional, List
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with strict validation"""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )

    # Application
    APP_NAME: str = "Resume Maker Sync"
    DEBUG: bool = False
    ENVIRONMENT: str = Field(default="development")

    # Redis (per-user local store)
    REDIS_URL: str = "redis://localhost:6379/0"

    # Resume record store (same-origin REST routes)
    RESUME_API_BASE_URL: str = "http://localhost:3000"
    HTTP_TIMEOUT_SECONDS: float = 30.0

    # Editor persistence
    LOCAL_SAVE_DEBOUNCE_SECONDS: float = 1.5
    AUTOSAVE_DEBOUNCE_SECONDS: float = 1.5
    DEFAULT_RESUME_TITLE: str = "My Resume"
    DEFAULT_TEMPLATE_ID: str = "classic"

    # PDF rendering service (service-to-service HMAC auth)
    PDF_SERVICE_URL: str = "http://localhost:8080/api/v1/resumes/generate-pdf"
    PDF_SERVICE_ID: str = "nextjs-api"
    PDF_SERVICE_HMAC_SECRET: Optional[str] = Field(
        default=None,
        description="Shared secret used to sign requests to the PDF service"
    )
    SERVICE_AUTH_MAX_SKEW_SECONDS: int = 300

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_JSON_FORMAT: bool = True
    LOG_TO_FILE: bool = False

    # CORS
    CORS_ORIGINS: List[str] = Field(default_factory=lambda: ["*"])

    @field_validator("LOCAL_SAVE_DEBOUNCE_SECONDS", "AUTOSAVE_DEBOUNCE_SECONDS")
    @classmethod
    def validate_debounce(cls, v: float) -> float:
        """Debounce windows must be non-negative"""
        if v < 0:
            raise ValueError("debounce window must be >= 0 seconds")
        return v


# Global settings instance
settings = Settings()
