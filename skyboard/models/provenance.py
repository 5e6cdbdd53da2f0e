"""
Provenance tagging for API responses.

Every domain endpoint wraps its records in the same envelope:

    {<records>: [...], cached, timestamp, total, source, error?, warning?}

The `source` tag tells the dashboard where the data came from. It is a
closed enumeration so a typo in a provenance label fails loudly instead of
silently shipping an unknown string to clients.
"""

from enum import Enum
from typing import Any, Iterable, Optional


class Source(str, Enum):
    """
    Where a response's records came from.

    - OPENSKY / N2YO / SOLAR_SYSTEM_API: fresh from the live upstream
    - CACHE: served from the in-process cache within its TTL
    - MOCK: synthetic data explicitly requested with mock=true
    - FALLBACK: synthetic data substituted after an upstream failure
    - EMERGENCY_FALLBACK: synthetic data after an unexpected internal error
    """
    OPENSKY = 'opensky'
    N2YO = 'n2yo'
    SOLAR_SYSTEM_API = 'solar-system-api'
    CACHE = 'cache'
    MOCK = 'mock'
    FALLBACK = 'fallback'
    EMERGENCY_FALLBACK = 'emergency_fallback'

    @property
    def is_live(self) -> bool:
        """True for the upstream API tags."""
        return self in (Source.OPENSKY, Source.N2YO, Source.SOLAR_SYSTEM_API)

    @property
    def is_degraded(self) -> bool:
        """True when the records are a stand-in for unavailable live data."""
        if self in (Source.FALLBACK, Source.EMERGENCY_FALLBACK):
            return True
        if self.is_live or self in (Source.CACHE, Source.MOCK):
            return False
        raise ValueError(f'Unhandled source: {self!r}')


def build_envelope(
    records_key: str,
    records: Iterable[Any],
    *,
    source: Source,
    timestamp: int,
    total: int,
    error: Optional[str] = None,
    warning: Optional[str] = None,
    **extra: Any,
) -> dict:
    """
    Build the JSON-ready response envelope.

    Records are serialized with their `to_dict()`. Domain-specific fields
    (processed, filtered, categoryName, ...) are passed through `extra`.
    """
    envelope = {
        records_key: [r.to_dict() for r in records],
        'cached': source is Source.CACHE,
        'timestamp': timestamp,
        'total': total,
        'source': source.value,
    }
    envelope.update(extra)
    if error is not None:
        envelope['error'] = error
    if warning is not None:
        envelope['warning'] = warning
    return envelope
