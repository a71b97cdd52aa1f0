"""
Glass quoting frontend configuration.

Frozen dataclass for immutable configuration with environment overrides.
All magic numbers and configuration values should be defined here.

Environment variables can override defaults (read at module import time):
- API_BASE_URL: Backend API URL
- API_TIMEOUT_SECONDS: Override API timeout
- MAX_RETRY_ATTEMPTS: Transport-level retries (0 disables them)
- APP_VERSION: Override version string
- DEFAULT_MARKUP_PERCENT: Markup prefilled in the calculator
- LOG_LEVEL: Root logging level
"""

import os
from dataclasses import dataclass, field


def _get_int_env(name: str, default: int) -> int:
    """Get integer environment variable or return default."""
    val = os.getenv(name)
    if val is not None:
        try:
            return int(val)
        except ValueError:
            pass
    return default


def _get_float_env(name: str, default: float) -> float:
    """Get float environment variable or return default."""
    val = os.getenv(name)
    if val is not None:
        try:
            return float(val)
        except ValueError:
            pass
    return default


def _get_str_env(name: str, default: str) -> str:
    """Get string environment variable or return default."""
    return os.getenv(name, default)


@dataclass(frozen=True)
class GlassQuoteConfig:
    """Immutable application configuration.

    frozen=True ensures config values cannot be accidentally modified.
    Environment variables are read at module import time.
    """

    # Application
    APP_NAME: str = "Vidriería Villarroel"
    APP_ICON: str = "🪟"
    APP_VERSION: str = field(
        default_factory=lambda: _get_str_env('APP_VERSION', "1.0.0")
    )
    BUSINESS_NAME: str = field(
        default_factory=lambda: _get_str_env('BUSINESS_NAME', "Vidriería Villarroel")
    )

    # Backend API
    API_BASE_URL: str = field(
        default_factory=lambda: _get_str_env('API_BASE_URL', 'http://localhost:4000')
    )
    API_TIMEOUT_SECONDS: float = field(
        default_factory=lambda: _get_float_env('API_TIMEOUT_SECONDS', 30.0)
    )
    # Failed requests are surfaced to the user, never retried silently
    MAX_RETRY_ATTEMPTS: int = field(
        default_factory=lambda: _get_int_env('MAX_RETRY_ATTEMPTS', 0)
    )
    GENERIC_ERROR_MESSAGE: str = "Error en la petición"

    # Quote calculator
    DEFAULT_MARKUP_PERCENT: str = field(
        default_factory=lambda: _get_str_env('DEFAULT_MARKUP_PERCENT', "30")
    )
    CURRENCY_SYMBOL: str = "$"
    DISPLAY_DECIMALS: int = 2

    # Export
    WHATSAPP_BASE_URL: str = "https://wa.me/"
    DATE_FORMAT: str = "%d/%m/%Y %H:%M"
    CSV_FILE_NAME: str = "presupuestos.csv"

    # Logging
    LOG_LEVEL: str = field(
        default_factory=lambda: _get_str_env('LOG_LEVEL', "INFO")
    )

    @property
    def API_ROOT(self) -> str:
        """Base URL without a trailing slash."""
        return self.API_BASE_URL.rstrip('/')


# Global immutable config instance
config = GlassQuoteConfig()

# Dashboard sections (anchor, label) in display order
DASHBOARD_SECTIONS = [
    ("calculator", "Calculadora"),
    ("glass-types", "Vidrios"),
    ("quotes-list", "Presupuestos"),
]
