"""Configuration settings for the application."""
from pydantic_settings import BaseSettings


class ConfigurationError(Exception):
    """Raised when a required setting is missing or malformed."""


class Settings(BaseSettings):
    """Application settings."""

    app_name: str = "Tour Booking Reports API"
    debug: bool = False
    log_level: str = "INFO"
    database_url: str = "sqlite:///./tours.db"

    # Exchange rate providers (base currency MYR)
    currency_primary_url: str = "https://open.er-api.com/v6/latest/MYR"
    currency_backup_url: str = "https://api.exchangerate-api.com/v4/latest/MYR"
    currency_timeout_seconds: float = 5.0
    currency_cache_seconds: int = 6 * 60 * 60
    fallback_usd_rate: float = 0.224
    fallback_eur_rate: float = 0.214

    class Config:
        env_file = ".env"
        case_sensitive = False

    def database_path(self) -> str:
        """
        Resolve the SQLite file path from ``database_url``.

        Raises:
            ConfigurationError: If the URL is empty or not a sqlite URL
        """
        url = (self.database_url or "").strip()
        if not url:
            raise ConfigurationError("DATABASE_URL is not set")

        prefix = "sqlite:///"
        if not url.startswith(prefix):
            raise ConfigurationError(
                f"Unsupported DATABASE_URL '{url}'. Expected 'sqlite:///<path>'"
            )

        path = url[len(prefix):]
        if not path:
            raise ConfigurationError("DATABASE_URL has no database path")
        return path


settings = Settings()
