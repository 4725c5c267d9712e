"""Application settings and configuration."""

from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


def get_default_data_dir() -> Path:
    """Return the default data directory."""
    return Path.home() / ".portfolio_tracker"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Stock Portfolio Tracker"
    app_version: str = "0.1.0"

    # Data directory (SQLite database lives here unless DATABASE_URL is set)
    data_dir: Optional[Path] = None
    database_url: Optional[str] = None

    log_level: str = "INFO"
    port: int = 3001

    # Upstream quote service
    stock_api_provider: Literal["alphavantage", "polygon", "stub"] = "alphavantage"
    alpha_vantage_api_key: Optional[str] = None
    polygon_api_key: Optional[str] = None
    upstream_timeout_seconds: float = 10.0
    upstream_min_interval_seconds: float = 0.0

    # Price cache
    price_cache_expiration: int = 15  # minutes
    batch_request_delay_seconds: float = 0.5
    max_batch_tickers: int = 20

    # Historical reconstruction
    historical_lookback_days: int = 10
    max_history_years: int = 20
    history_fetch_workers: int = 4

    def get_data_dir(self) -> Path:
        """Get the data directory, creating it if needed."""
        data_dir = self.data_dir or get_default_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def get_database_url(self) -> str:
        """Get database URL, deriving from data_dir if not set."""
        if self.database_url:
            return self.database_url
        db_path = self.get_data_dir() / "portfolio.db"
        return f"sqlite:///{db_path}"

    @property
    def price_cache_ttl_seconds(self) -> int:
        return self.price_cache_expiration * 60


# Global settings instance (can be replaced at runtime)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
