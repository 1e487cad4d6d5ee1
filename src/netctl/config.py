"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    data_dir: Path = Path.home() / ".local" / "share" / "netctl"
    database_filename: str = "netctl.db"
    hamdb_base_url: str = "https://api.hamdb.org"
    hamdb_app_name: str = "netctl"
    hamdb_timeout_seconds: float = 10.0
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_prefix="NETCTL_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def database_path(self) -> Path:
        """Location of the SQLite database file."""
        return self.data_dir / self.database_filename
