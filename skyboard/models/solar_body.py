"""
SolarBodyRecord - a star, planet, moon, asteroid or comet.

Units follow Le Systeme Solaire: radius and distance in km, mass in kg,
density in kg/m3 (g/cm3 upstream values pass through unchanged), gravity in
m/s2, temperature as reported, orbital period in days, rotation period in
hours (negative for retrograde rotation).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class BodyType(str, Enum):
    """Classification of a solar-system body."""
    PLANET = 'planet'
    MOON = 'moon'
    ASTEROID = 'asteroid'
    COMET = 'comet'
    STAR = 'star'


@dataclass(frozen=True)
class SolarBodyRecord:
    """A solar-system body as served by /api/solar-system."""
    id: str
    name: str
    english_name: str
    type: BodyType
    is_planet: bool
    radius: float
    mass: float
    density: float
    gravity: float
    temperature: float
    distance_from_sun: float
    orbital_period: float
    rotation_period: float
    moons: int
    discovered_by: Optional[str] = None
    discovery_date: Optional[str] = None
    parent_body: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict; optional fields are omitted when unset."""
        result = {
            'id': self.id,
            'name': self.name,
            'englishName': self.english_name,
            'type': self.type.value,
            'isPlanet': self.is_planet,
            'radius': self.radius,
            'mass': self.mass,
            'density': self.density,
            'gravity': self.gravity,
            'temperature': self.temperature,
            'distanceFromSun': self.distance_from_sun,
            'orbitalPeriod': self.orbital_period,
            'rotationPeriod': self.rotation_period,
            'moons': self.moons,
        }
        if self.discovered_by:
            result['discoveredBy'] = self.discovered_by
        if self.discovery_date:
            result['discoveryDate'] = self.discovery_date
        if self.parent_body:
            result['parentBody'] = self.parent_body
        return result
