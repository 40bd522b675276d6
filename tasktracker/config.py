"""Configuration settings using Pydantic BaseSettings."""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Storage Configuration
    data_file: Path = Field(default=Path("data/tasks.json"), description="JSON file mirroring the task collection")

    # Application Configuration
    app_host: str = Field(default="0.0.0.0", description="HTTP listener host")
    app_port: int = Field(default=8080, description="HTTP listener port")
    debug: bool = Field(default=False, description="Enable debug mode")
    environment: str = Field(default="development", description="Deployment environment name")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: Optional[Path] = Field(default=None, description="Log file path")

    # CORS Configuration
    cors_allow_methods: str = Field(
        default="GET, POST, PUT, DELETE, OPTIONS",
        description="Value of the Access-Control-Allow-Methods header"
    )
    cors_allow_headers: str = Field(
        default="Content-Type, Authorization, Accept, X-Requested-With, Origin",
        description="Value of the Access-Control-Allow-Headers header"
    )

    class Config:
        """Pydantic configuration."""
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


# Global settings instance
settings = Settings()
