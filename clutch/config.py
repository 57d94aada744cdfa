"""Service settings for Clutch, read from the environment or a .env file."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Where the routing document lives and how the HTTP API is served.

    ``default_target`` is only used while no routing document exists or the
    existing one cannot be loaded.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=5033)
    log_level: str = Field(default="INFO")

    routing_config: str = Field(default="routing.yaml", description="YAML or JSON routing document")
    default_target: str = Field(default="com.apple.Safari", description="Browser used without a document")

    @property
    def routing_config_path(self) -> Path:
        """Routing document path with ``~`` expanded."""
        return Path(self.routing_config).expanduser()


@lru_cache
def get_settings() -> Settings:
    return Settings()
