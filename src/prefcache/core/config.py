import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Project Paths
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    DATA_DIR: Path = Path(
        os.getenv("PREFCACHE_DATA_DIR", str(BASE_DIR.parent / "data"))
    )

    # Preferences database
    DB_NAME: str = "preferences.db"

    @property
    def DB_PATH(self) -> Path:
        return self.DATA_DIR / self.DB_NAME

    @property
    def DB_URL(self) -> str:
        # Use forward slashes so Windows paths work in the URL (no backslash escapes)
        path = self.DB_PATH.resolve().as_posix()
        return f"sqlite:///{path}"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_RETENTION: str = "10 days"
    LOG_ROTATION: str = "10 MB"

    # Performance & Debugging
    DB_ECHO: bool = False  # Enable SQLAlchemy query logging

    # Bump when stored preferences need a reset; the part before the "r" is
    # the release, the part after counts resets within that release.
    PREFS_VERSION: str = "1.1.1r1"


settings = Settings()
