"""Application configuration."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # API
    app_name: str = "CCW Reciprocity Map"
    debug: bool = False
    cors_origins: str = "*"

    # Data tables
    data_dir: Path = PACKAGE_DATA_DIR
    state_laws_file: str = "state_laws.yaml"
    reciprocity_file: str = "reciprocity.yaml"

    # Treat honors/honoredBy disagreements as fatal instead of logging them
    strict_graph_symmetry: bool = False

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    model_config = SettingsConfigDict(
        env_prefix="CCWMAP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def state_laws_path(self) -> Path:
        return self.data_dir / self.state_laws_file

    @property
    def reciprocity_path(self) -> Path:
        return self.data_dir / self.reciprocity_file


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
