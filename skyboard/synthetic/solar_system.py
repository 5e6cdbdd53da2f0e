"""
Fixed solar-system table: the Sun and the eight planets.

Used when Le Systeme Solaire is unavailable or mock data is requested.
No randomness; values are real physical constants, with rotation periods
negative for retrograde rotators (Venus, Uranus).
"""

from typing import Iterable, List

from skyboard.models.solar_body import BodyType, SolarBodyRecord

ALL_TYPES = 'all'

# (id, name, type, radius km, mass kg, density kg/m3, gravity m/s2, temp C,
#  distance km, orbital period days, rotation period h, moons)
_BODIES = (
    ('sun', 'Sun', BodyType.STAR, 696340, 1.989e30, 1408, 274, 5778, 0, 0, 25.05, 0),
    ('mercury', 'Mercury', BodyType.PLANET, 2439.7, 3.301e23, 5427, 3.7, 167, 57.9e6, 88, 1407.6, 0),
    ('venus', 'Venus', BodyType.PLANET, 6051.8, 4.867e24, 5243, 8.87, 464, 108.2e6, 225, -5832.5, 0),
    ('earth', 'Earth', BodyType.PLANET, 6371, 5.972e24, 5514, 9.8, 15, 149.6e6, 365.25, 23.93, 1),
    ('mars', 'Mars', BodyType.PLANET, 3389.5, 6.39e23, 3933, 3.71, -65, 227.9e6, 687, 24.62, 2),
    ('jupiter', 'Jupiter', BodyType.PLANET, 69911, 1.898e27, 1326, 24.79, -110, 778.5e6, 4333, 9.93, 95),
    ('saturn', 'Saturn', BodyType.PLANET, 58232, 5.683e26, 687, 10.44, -140, 1432e6, 10759, 10.66, 146),
    ('uranus', 'Uranus', BodyType.PLANET, 25362, 8.681e25, 1271, 8.69, -195, 2867e6, 30687, -17.24, 28),
    ('neptune', 'Neptune', BodyType.PLANET, 24622, 1.024e26, 1638, 11.15, -200, 4515e6, 60190, 16.11, 16),
)


def generate_solar_bodies() -> List[SolarBodyRecord]:
    """Return the fixed nine-body table, Sun first, planets in order from the Sun."""
    return [
        SolarBodyRecord(
            id=body_id,
            name=name,
            english_name=name,
            type=body_type,
            is_planet=body_type is BodyType.PLANET,
            radius=float(radius),
            mass=float(mass),
            density=float(density),
            gravity=float(gravity),
            temperature=float(temperature),
            distance_from_sun=float(distance),
            orbital_period=float(orbital_period),
            rotation_period=float(rotation_period),
            moons=moons,
        )
        for (body_id, name, body_type, radius, mass, density, gravity, temperature,
             distance, orbital_period, rotation_period, moons) in _BODIES
    ]


def filter_bodies(bodies: Iterable[SolarBodyRecord], body_type: str) -> List[SolarBodyRecord]:
    """Keep bodies of `body_type`, preserving order; 'all' keeps everything."""
    if body_type == ALL_TYPES:
        return list(bodies)
    return [body for body in bodies if body.type.value == body_type]
