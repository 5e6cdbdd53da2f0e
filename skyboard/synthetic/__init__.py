"""
Synthetic ("mock") data generators.

Stand-ins for live upstream data: plausible, internally consistent records
that satisfy the same range invariants as normalized live data. They are not
simulations and make no physical-fidelity claims.
"""

from skyboard.synthetic.flights import generate_flights
from skyboard.synthetic.satellites import category_name, generate_satellites
from skyboard.synthetic.solar_system import filter_bodies, generate_solar_bodies

__all__ = [
    'generate_flights',
    'generate_satellites',
    'category_name',
    'generate_solar_bodies',
    'filter_bodies',
]
