"""BYTESONG global configuration."""

from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Server
    host: str = "0.0.0.0"  # noqa: S104
    port: int = Field(default=8000, validation_alias=AliasChoices("BYTESONG_PORT", "PORT"))
    static_dir: Path = Path("./static")
    max_upload_mb: int = 64

    # Rendering
    sample_rate: int = 22000
    channels: str = "stereo"

    # Seeded corpora
    corpus_size: int = 2 * 1024 * 1024
    corpus_generator: str = "structured"

    model_config = {"env_prefix": "BYTESONG_", "populate_by_name": True}


settings = Settings()
