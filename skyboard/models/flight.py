"""
FlightRecord - normalized aircraft position.

Produced either from an OpenSky state vector or by the synthetic flight
generator. Units are display units: altitude in feet, speed in knots,
vertical rate in feet per minute.
"""

from dataclasses import dataclass
from enum import Enum


class FlightStatus(str, Enum):
    """
    Coarse flight status shown on the dashboard.

    Live data only distinguishes TAXIING (on ground) from EN_ROUTE.
    The synthetic generator also emits TAKEOFF and LANDING.
    """
    EN_ROUTE = 'En Route'
    LANDING = 'Landing'
    TAKEOFF = 'Takeoff'
    TAXIING = 'Taxiing'
    BOARDING = 'Boarding'
    DELAYED = 'Delayed'

    @property
    def is_grounded(self) -> bool:
        return self in (FlightStatus.TAXIING, FlightStatus.BOARDING, FlightStatus.DELAYED)


CALLSIGN_MAX_LENGTH = 10
REGISTRATION_MAX_LENGTH = 10
COUNTRY_MAX_LENGTH = 50


@dataclass(frozen=True)
class FlightRecord:
    """A single aircraft position as served by /api/flights."""
    id: str
    callsign: str
    latitude: float
    longitude: float
    altitude: float
    speed: float
    heading: float
    status: FlightStatus
    aircraft_type: str
    origin: str
    destination: str
    squawk: str
    registration: str
    country: str
    last_contact: int
    on_ground: bool
    vertical_rate: float

    def __repr__(self) -> str:
        return f'<FlightRecord {self.id} {self.callsign} @ {self.altitude:.0f}ft>'

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict for API responses."""
        return {
            'id': self.id,
            'callsign': self.callsign,
            'latitude': self.latitude,
            'longitude': self.longitude,
            'altitude': self.altitude,
            'speed': self.speed,
            'heading': self.heading,
            'status': self.status.value,
            'aircraft_type': self.aircraft_type,
            'origin': self.origin,
            'destination': self.destination,
            'squawk': self.squawk,
            'registration': self.registration,
            'country': self.country,
            'lastContact': self.last_contact,
            'onGround': self.on_ground,
            'verticalRate': self.vertical_rate,
        }
