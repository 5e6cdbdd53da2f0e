"""
SkyBoard Backend Package.

Aircraft, satellite and solar-system positions behind one Flask API, with
in-memory caching and synthetic fallbacks when upstreams are unavailable.

Modules:
    api/         REST endpoints for flights, satellites, solar-system bodies and status
    services/    Fetch-cache-fallback pipeline, one service per domain
    ingestion/   Upstream clients (OpenSky, N2YO, Le Systeme Solaire) and normalizers
    synthetic/   Synthetic data generators used as stand-ins for live data
    models/      Record dataclasses and the provenance envelope
    cache.py     Thread-safe TTL cache with an injectable clock
    config.py    Centralized configuration from environment variables
"""

__version__ = '1.0.0'
