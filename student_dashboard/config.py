"""Application configuration helpers."""

from pathlib import Path
from typing import Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Typed configuration loaded from environment variables.

    ``database_url`` defaults to a SQLite file inside ``data_dir`` and
    ``api_url`` to the address the API itself binds, so overriding either of
    those alone moves the defaults with it.
    """

    app_name: str = "Student Dashboard"
    api_host: str = "127.0.0.1"
    api_port: int = 5000
    data_dir: Path = Field(default_factory=lambda: Path("data").resolve())
    database_url: Optional[str] = None
    log_level: str = "INFO"
    api_url: Optional[str] = None
    client_timeout: float = 15.0

    model_config = SettingsConfigDict(
        env_prefix="STUDENTDASH_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @model_validator(mode="after")
    def derive_defaults(self) -> "Settings":
        self.data_dir = self.data_dir.resolve()
        if not self.database_url:
            self.database_url = f"sqlite:///{self.data_dir / 'student_dashboard.db'}"
        if not self.api_url:
            self.api_url = f"http://{self.api_host}:{self.api_port}/api"
        return self

    def ensure_directories(self) -> None:
        """Create the on-disk folder for the SQLite database."""
        self.data_dir.mkdir(parents=True, exist_ok=True)


def get_settings() -> Settings:
    """Return a settings instance and ensure directories exist."""
    settings = Settings()
    settings.ensure_directories()
    return settings
