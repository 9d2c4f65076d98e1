"""Configuration management using pydantic-settings"""

from datetime import time
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # Application
    app_name: str = Field(default="Confsched")
    app_env: str = Field(default="development")
    debug: bool = Field(default=True)
    log_level: str = Field(default="INFO")

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000)

    # Content
    talks_file: Path = Field(default=Path("talks.json"))
    public_dir: Path = Field(default=Path("public"))

    # Schedule layout
    schedule_start: time = Field(default=time(10, 0))
    talk_minutes: int = Field(default=60, ge=1)
    lunch_minutes: int = Field(default=60, ge=0)
    transition_minutes: int = Field(default=10, ge=0)
    lunch_after_index: int = Field(default=2, ge=0)

    @property
    def talks_path(self) -> Path:
        return _resolve(self.talks_file)

    @property
    def public_root(self) -> Path:
        return _resolve(self.public_dir)


def _resolve(path: Path) -> Path:
    """Anchor relative paths at the project root"""
    if path.is_absolute():
        return path
    return PROJECT_ROOT / path


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
