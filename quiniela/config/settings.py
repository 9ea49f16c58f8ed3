import logging
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # Results page
    quiniela_url: str = Field(
        "https://www.loteriasyapuestas.es/es/resultados/quiniela",
        description="Official quiniela results page used for teams and results.",
    )
    request_timeout: float = Field(
        30.0, gt=0, description="HTTP timeout in seconds for page fetches."
    )
    user_agent: str = Field(
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
        description="User-Agent header sent to the results page.",
    )
    accept_language: str = Field("es-ES,es;q=0.9")

    # Parser tuning
    noise_tables_path: Optional[Path] = Field(
        None,
        description="Optional JSON file overriding the built-in OCR noise tables.",
    )
    pleno_hints_enabled: bool = Field(
        True,
        description="Allow the partial-token hint table to fill a missing Pleno al 15.",
    )

    # Logging Configuration
    log_level: str = Field(
        "INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."
    )

    model_config = SettingsConfigDict(
        env_prefix="QUINIELA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )


def load_settings() -> AppSettings:
    """Loads and validates application settings."""
    try:
        settings = AppSettings()
        log_level_upper = settings.log_level.upper()
        # Validate log_level even if loaded from .env
        if log_level_upper not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            logging.warning(
                f"Invalid LOG_LEVEL '{settings.log_level}' found in .env or default. Using INFO."
            )
            settings.log_level = "INFO"
        else:
            settings.log_level = log_level_upper
        return settings
    except Exception as e:
        logging.exception(f"Error loading application settings: {e}")
        raise SystemExit("Failed to load application settings. Exiting.")


settings: AppSettings = load_settings()
