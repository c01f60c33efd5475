"""Application configuration management."""
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = Field(
        default="sqlite:///./data/photos.db",
        description="SQLAlchemy URL of the photo metadata database"
    )
    database_echo: bool = Field(default=False, description="Echo SQL statements")

    # Assets
    images_dir: Path = Field(
        default=Path("./src/images/photography"),
        description="Directory holding one sub-directory of images per category"
    )
    asset_url_prefix: str = Field(
        default="/images/photography",
        description="Public path prefix used to build photo paths"
    )
    staging_dir: Path = Field(
        default=Path("./src/images/photography/_staging"),
        description="Directory scanned when generating CSV templates"
    )
    backups_dir: Path = Field(default=Path("./backups"), description="Export destination")

    # Curated surfaces
    homepage_slots: int = Field(
        default=7,
        ge=1,
        description="Number of homepage featured photos (slot 1 is the hero)"
    )
    lightbox_width: int = Field(default=1920, ge=1, description="Lightbox variant width")
    lightbox_quality: int = Field(default=85, ge=1, le=100, description="Lightbox variant quality")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: Optional[Path] = Field(default=None, description="Log file path")

    model_config = SettingsConfigDict(
        env_prefix="PORTFOLIO_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("asset_url_prefix")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Photo paths are joined with '/', so the prefix never ends with one."""
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        return v.upper()

    def __init__(self, **kwargs):
        """Initialize settings and resolve all paths."""
        super().__init__(**kwargs)
        self.images_dir = self.images_dir.resolve()
        self.staging_dir = self.staging_dir.resolve()
        self.backups_dir = self.backups_dir.resolve()

        if self.log_file:
            self.log_file = self.log_file.resolve()

    @property
    def database_path(self) -> Optional[Path]:
        """Filesystem path of a file-backed SQLite database, if any."""
        prefix = "sqlite:///"
        if not self.database_url.startswith(prefix):
            return None
        raw = self.database_url[len(prefix):]
        if not raw or raw == ":memory:":
            return None
        return Path(raw).resolve()

    def ensure_directories_exist(self):
        """Create the database and log directories if they don't exist."""
        if self.database_path:
            self.database_path.parent.mkdir(parents=True, exist_ok=True)

        if self.log_file:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)


# Shared instance for scripts. Library code accepts an injected Settings.
settings = Settings()
