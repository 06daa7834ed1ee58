"""
RK Media Server v1.0.0 - Configuration
Application settings and environment variables
"""

from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import Optional, Union

PLACEHOLDER_JWT_SECRET = "change-this-secret-key-in-production"


class Settings(BaseSettings):
    """Application settings"""

    # Application
    APP_NAME: str = "RK Media Server"
    VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///database.sqlite"

    # Media storage (relative to the working directory unless absolute)
    MEDIA_SUBDIR: str = "Media"

    # Duration probing
    FFPROBE_BINARY: str = "ffprobe"
    FFPROBE_TIMEOUT: Optional[float] = None  # None = wait for ffprobe

    # Security
    JWT_SECRET: str  # required, no default
    JWT_ALGORITHM: str = "HS256"

    # CORS
    CORS_ORIGINS: Union[list[str], str] = ["http://localhost:4200", "http://localhost:3000"]

    # Frontend (prebuilt SPA)
    UI_DIST_PATH: str = "rk-media-server-ui/dist/rk-media-server-ui/browser"

    # Uploads
    UPLOAD_MAX_FILE_SIZE: int = 100 * 1024 * 1024  # 100 MB
    UPLOAD_MAX_FILES: int = 100

    @field_validator("JWT_SECRET")
    @classmethod
    def reject_placeholder_secret(cls, v):
        """Refuse an empty secret or the well-known placeholder"""
        if not v.strip() or v == PLACEHOLDER_JWT_SECRET:
            raise ValueError("JWT_SECRET must be set to a private value")
        return v

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS_ORIGINS from comma-separated string or list"""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",")]
        return v

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
