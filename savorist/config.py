"""Configuration management for Savorist using Pydantic."""

import logging
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Storage Configuration
    database_path: Path = Field(
        default=Path("savorist.db"), description="SQLite database file"
    )
    seed_on_startup: bool = Field(
        default=True, description="Insert the demo catalog when the store is empty"
    )

    # Server Configuration
    server_host: str = Field(default="0.0.0.0", description="Server host")
    server_port: int = Field(default=8080, description="Server port")
    server_url: str = Field(
        default="http://localhost:8080",
        description="Server URL for the client to connect to the API",
    )

    # Query Configuration
    nearby_limit: int = Field(
        default=10, gt=0, description="Maximum restaurants in the nearby view"
    )

    # Client Configuration
    preferences_dir: Path = Field(
        default=Path(".savorist"),
        description="Directory holding the on-device favorites and profile",
    )
    request_timeout: float = Field(
        default=10.0, gt=0, description="HTTP client timeout in seconds"
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")

    def model_post_init(self, __context) -> None:
        """Validate configuration after initialization."""
        if not self.seed_on_startup:
            logger.warning("SEED_ON_STARTUP disabled - catalog will not be seeded")


# Global config instance
config: Config | None = None


def get_config() -> Config:
    """Get or create the global configuration instance."""
    global config
    if config is None:
        config = Config()
    return config


def setup_logging(cfg: Config | None = None) -> None:
    """Configure logging for the application."""
    if cfg is None:
        cfg = get_config()

    log_level = getattr(logging, cfg.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Reduce noise from external libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
