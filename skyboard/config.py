"""
Configuration management for SkyBoard.

Loads settings from environment variables with sensible defaults.
Upstream endpoints, credentials, timeouts and cache lifetimes are all
centralized here so the services never carry magic numbers.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class OpenSkyConfig:
    """OpenSky Network API configuration (flights)."""
    username: Optional[str] = os.getenv('OPENSKY_USERNAME') or None
    password: Optional[str] = os.getenv('OPENSKY_PASSWORD') or None
    base_url: str = 'https://opensky-network.org/api'
    timeout_seconds: float = float(os.getenv('OPENSKY_TIMEOUT_SECONDS', '8'))

    @property
    def is_authenticated(self) -> bool:
        return bool(self.username and self.password)


@dataclass(frozen=True)
class N2YOConfig:
    """N2YO API configuration (satellites above an observer)."""
    api_key: Optional[str] = os.getenv('N2YO_API_KEY') or None
    base_url: str = 'https://api.n2yo.com/rest/v1/satellite'
    timeout_seconds: float = float(os.getenv('N2YO_TIMEOUT_SECONDS', '10'))

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)


@dataclass(frozen=True)
class SolarSystemConfig:
    """Le Systeme Solaire API configuration (solar-system bodies)."""
    api_key: Optional[str] = os.getenv('SOLAR_SYSTEM_API_KEY') or None
    base_url: str = 'https://api.le-systeme-solaire.net/rest'
    timeout_seconds: float = float(os.getenv('SOLAR_SYSTEM_TIMEOUT_SECONDS', '20'))


@dataclass(frozen=True)
class RetryConfig:
    """Retry policy for the upstreams that retry (satellites, solar-system)."""
    max_attempts: int = int(os.getenv('UPSTREAM_MAX_ATTEMPTS', '2'))
    backoff_seconds: float = float(os.getenv('RETRY_BACKOFF_SECONDS', '1.0'))


@dataclass(frozen=True)
class CacheConfig:
    """In-memory cache lifetimes, one per domain."""
    flights_ttl_seconds: float = float(os.getenv('FLIGHTS_CACHE_TTL_SECONDS', '30'))
    satellites_ttl_seconds: float = float(os.getenv('SATELLITES_CACHE_TTL_SECONDS', '60'))
    solar_system_ttl_seconds: float = float(os.getenv('SOLAR_SYSTEM_CACHE_TTL_SECONDS', str(24 * 60 * 60)))
    satellites_max_entries: int = 256  # Distinct observer/category keys kept


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration."""
    opensky: OpenSkyConfig
    n2yo: N2YOConfig
    solar_system: SolarSystemConfig
    retry: RetryConfig
    cache: CacheConfig

    # Flask settings
    debug: bool
    port: int


def load_config() -> AppConfig:
    """Load and validate all configuration."""
    return AppConfig(
        opensky=OpenSkyConfig(),
        n2yo=N2YOConfig(),
        solar_system=SolarSystemConfig(),
        retry=RetryConfig(),
        cache=CacheConfig(),
        debug=os.getenv('FLASK_DEBUG', '0') == '1',
        port=int(os.getenv('PORT', '5000')),
    )


# Singleton instance
config = load_config()
