"""
Upstream ingestion for SkyBoard.

One client per third-party API (OpenSky, N2YO, Le Systeme Solaire), each
paired with a pure normalizer that maps the raw JSON onto record models.
Shared HTTP, retry and coercion helpers live alongside.
"""

from skyboard.ingestion.errors import (
    NetworkError,
    UpstreamError,
    UpstreamErrorKind,
    UpstreamHttpError,
    UpstreamMalformed,
    UpstreamTimeout,
)
from skyboard.ingestion.n2yo_client import N2YOClient, ObserverQuery
from skyboard.ingestion.opensky_client import OpenSkyClient
from skyboard.ingestion.solar_system_client import SolarSystemClient

__all__ = [
    'OpenSkyClient',
    'N2YOClient',
    'ObserverQuery',
    'SolarSystemClient',
    'UpstreamError',
    'UpstreamErrorKind',
    'UpstreamTimeout',
    'UpstreamHttpError',
    'UpstreamMalformed',
    'NetworkError',
]
