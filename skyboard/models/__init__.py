"""
Record models for SkyBoard.

Immutable dataclasses describing the stable, normalized shape of each domain
regardless of whether the data came from a live upstream or the synthetic
generators, plus the provenance envelope shared by every endpoint.
"""

from skyboard.models.flight import FlightRecord, FlightStatus
from skyboard.models.provenance import Source, build_envelope
from skyboard.models.satellite import SatelliteRecord
from skyboard.models.solar_body import BodyType, SolarBodyRecord

__all__ = [
    'FlightRecord',
    'FlightStatus',
    'SatelliteRecord',
    'SolarBodyRecord',
    'BodyType',
    'Source',
    'build_envelope',
]
