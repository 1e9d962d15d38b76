"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

TEN_MEGABYTES = 10 * 1024 * 1024

DEFAULT_MIME_TYPES = [
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "application/pdf",
]
DEFAULT_EXTENSIONS = [".doc", ".docx", ".pdf"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    mongo_uri: str = "mongodb://localhost:27017"
    database_name: str = "jobportal"

    # Auth
    jwt_secret: str = "super_secret_random_key_CHANGE_THIS"
    jwt_algorithm: str = "HS256"
    jwt_expires_minutes: int = 24 * 60

    # Object storage
    s3_bucket_name: str = ""
    aws_region: str = "us-east-1"
    s3_endpoint_url: Optional[str] = None

    # CV uploads
    max_file_size_bytes: int = TEN_MEGABYTES
    allowed_mime_types: List[str] = DEFAULT_MIME_TYPES
    allowed_extensions: List[str] = DEFAULT_EXTENSIONS

    # Application
    allowed_origins: str = ""
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
