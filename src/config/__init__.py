"""
Configuration for the Variant Attribute Service.

Settings are read from environment variables (and a local .env file) through
pydantic-settings.
"""

from typing import Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Config(BaseSettings):
    """Application configuration with environment variable support"""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Service information
    service_name: str = Field(default="variant-attribute-service")
    service_version: str = Field(default="1.0.0")
    environment: str = Field(default="development")

    # Server configuration
    host: str = Field(default="0.0.0.0")  # nosec B104
    port: int = Field(default=8003)

    # Logging configuration
    log_level: Optional[str] = Field(default=None)
    log_format: Optional[str] = Field(default=None)
    log_to_file: bool = Field(default=False)
    log_to_console: bool = Field(default=True)
    log_file_path: Optional[str] = Field(default=None)

    # Catalog collaborators
    catalog_api_url: str = Field(default="http://localhost:5000")
    upload_api_url: str = Field(default="http://localhost:5000")
    upload_folder: str = Field(default="images/variants")
    http_timeout: float = Field(default=10.0)

    # Correlation
    correlation_id_header: str = Field(default="X-Correlation-ID")

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def effective_log_level(self) -> str:
        """Explicit LOG_LEVEL wins, otherwise DEBUG in development."""
        if self.log_level:
            return self.log_level.upper()
        return "DEBUG" if self.is_development else "INFO"

    @property
    def effective_log_format(self) -> str:
        if self.log_format:
            return self.log_format.lower()
        return "json" if self.is_production else "console"

    @property
    def effective_log_file_path(self) -> str:
        return self.log_file_path or f"logs/{self.service_name}.log"


# Global config instance
config = Config()
