"""Runtime settings, read from ``STOCKSCAN_*`` environment variables or ``.env``."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# When installed in editable mode the project root is the repo root.
_PROJECT_ROOT = Path(__file__).resolve().parents[3]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="STOCKSCAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storage
    data_dir: Path = _PROJECT_ROOT / "data"
    products_file: str = "products.json"

    # Logging
    log_level: str = "WARNING"

    # Display
    price_label: str = "Toman"

    @property
    def products_path(self) -> Path:
        return self.data_dir / self.products_file


@lru_cache
def get_settings() -> Settings:
    return Settings()
