"""
Centralized configuration with environment variable overrides.

Booking defaults and logging settings live here so the engine, the
booking tools and the CLI never hardcode them.
"""

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


@dataclass(frozen=True)
class BookingConfig:
    """Booking calendar defaults."""

    default_guests: int = _safe_int("DEFAULT_GUESTS", "1")
    max_booking_nights: int = _safe_int("MAX_BOOKING_NIGHTS", "365")
    currency_symbol: str = os.getenv("CURRENCY_SYMBOL", "$")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    booking: BookingConfig = field(default_factory=BookingConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    app_name: str = os.getenv("APP_NAME", "holidaze")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    if config.booking.default_guests < 1:
        raise ValueError(
            f"DEFAULT_GUESTS must be >= 1, got {config.booking.default_guests}"
        )
    if config.booking.max_booking_nights < 1:
        raise ValueError(
            f"MAX_BOOKING_NIGHTS must be >= 1, got {config.booking.max_booking_nights}"
        )
    if not config.booking.currency_symbol:
        raise ValueError("CURRENCY_SYMBOL must not be empty")
    if config.log_level.upper() not in logging.getLevelNamesMapping():
        raise ValueError(f"LOG_LEVEL is not a logging level: {config.log_level!r}")


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logger.info("Configuration loaded for '%s'", config.app_name)
    return config


# Singleton instance
settings = load_config()
