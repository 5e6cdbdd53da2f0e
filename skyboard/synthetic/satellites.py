"""
Synthetic satellite generator.

The N2YO category id selects a name pool and an altitude band:

    category 2  (ISS)       400 - 420 km
    category 52 (Starlink)  540 - 560 km
    category 20 (GPS)       20000 - 20200 km
    anything else           200 - 35200 km (LEO to GEO)

Positions are uniform over lat +/-80, lng +/-180. Designators and launch
dates only look plausible; they are not real catalogue entries.
"""

import random
import string
from typing import Dict, List, Optional, Tuple

from skyboard.models.satellite import SatelliteRecord

MAX_SATELLITES = 100
BASE_SATID = 25544  # ISS NORAD id

MAX_LATITUDE = 80.0
MAX_LONGITUDE = 180.0

CATEGORY_ALL = 0
CATEGORY_ISS = 2
CATEGORY_GPS = 20
CATEGORY_STARLINK = 52

NAME_POOLS: Dict[int, Tuple[str, ...]] = {
    CATEGORY_ALL: (
        'STARLINK-1234', 'ISS (ZARYA)', 'NOAA 19', 'GPS BIIR-2', 'IRIDIUM 33',
        'COSMOS 2251', 'TERRA', 'AQUA', 'LANDSAT 8', 'SENTINEL-1A',
    ),
    1: ('ISS (ZARYA)', 'IRIDIUM 33', 'COSMOS 2251', 'TERRA', 'AQUA'),
    CATEGORY_ISS: ('ISS (ZARYA)', 'PROGRESS MS-21', 'SOYUZ MS-23'),
    3: ('NOAA 19', 'NOAA 18', 'GOES-16', 'GOES-17', 'METOP-B', 'METOP-C'),
    18: ('AO-91', 'AO-92', 'SO-50', 'ISS', 'LILACSAT 2'),
    CATEGORY_GPS: ('GPS BIIR-2', 'GPS BIIF-3', 'GPS BIIF-4', 'GPS BIIF-5'),
    CATEGORY_STARLINK: tuple(f'STARLINK-{1000 + i}' for i in range(20)),
}

ALTITUDE_BANDS: Dict[int, Tuple[float, float]] = {
    CATEGORY_ISS: (400.0, 420.0),
    CATEGORY_STARLINK: (540.0, 560.0),
    CATEGORY_GPS: (20000.0, 20200.0),
}
DEFAULT_ALTITUDE_BAND = (200.0, 35200.0)

# N2YO "what's up" categories
CATEGORY_NAMES: Dict[int, str] = {
    0: 'All Categories',
    1: 'Brightest',
    2: 'ISS',
    3: 'Weather',
    4: 'NOAA',
    5: 'GOES',
    6: 'Earth Resources',
    7: 'Search & Rescue',
    8: 'Disaster Monitoring',
    9: 'Tracking and Data Relay',
    10: 'Geostationary',
    11: 'Intelsat',
    12: 'Gorizont',
    13: 'Raduga',
    14: 'Molniya',
    15: 'Iridium',
    16: 'Orbcomm',
    17: 'Globalstar',
    18: 'Amateur Radio',
    19: 'Experimental',
    20: 'GPS Operational',
    21: 'Glonass Operational',
    22: 'Galileo',
    23: 'Satellite-Based Augmentation',
    24: 'Navy Navigation',
    25: 'Russian LEO Navigation',
    26: 'Space & Earth Science',
    27: 'Geodetic',
    28: 'Engineering',
    29: 'Education',
    30: 'Military',
    31: 'Radar Calibration',
    32: 'CubeSats',
    33: 'XM and Sirius',
    34: 'TV',
    35: 'Beidou Navigation',
    36: 'Yaogan',
    37: 'Westford Needles',
    38: 'Parus',
    39: 'Strela',
    40: 'Gonets',
    41: 'Tsiklon',
    42: 'Tsikada',
    43: 'O3B Networks',
    44: 'Tselina',
    45: 'Celestis',
    46: 'IRNSS',
    47: 'QZSS',
    48: 'Flock',
    49: 'Lemur',
    50: 'GPS Constellation',
    51: 'Glonass Constellation',
    52: 'Starlink',
    53: 'OneWeb',
    54: 'Chinese Space Station',
    55: 'Qianfan',
    56: 'Kuiper',
}


def category_name(category_id: int) -> str:
    return CATEGORY_NAMES.get(category_id, 'Unknown Category')


def name_pool(category_id: int) -> Tuple[str, ...]:
    return NAME_POOLS.get(category_id, NAME_POOLS[CATEGORY_ALL])


def altitude_band(category_id: int) -> Tuple[float, float]:
    return ALTITUDE_BANDS.get(category_id, DEFAULT_ALTITUDE_BAND)


def satellite_name(names: Tuple[str, ...], index: int) -> str:
    """Cycle through the pool, suffixing the index once names repeat."""
    base = names[index % len(names)]
    return base if index < len(names) else f'{base}-{index}'


def make_int_designator(index: int, rng: random.Random) -> str:
    """Looks like '1998-067A': launch year, launch number, piece letter."""
    year = 1998 + index // 10
    piece = string.ascii_uppercase[index % 26]
    return f'{year}-{rng.randrange(100):03d}{piece}'


def make_launch_date(rng: random.Random) -> str:
    return f'{rng.randint(2000, 2023)}-{rng.randint(1, 12):02d}-{rng.randint(1, 28):02d}'


def generate_satellites(
    category_id: int = CATEGORY_ALL,
    count: int = 50,
    rng: Optional[random.Random] = None,
) -> List[SatelliteRecord]:
    """Generate up to `count` synthetic satellites (never more than MAX_SATELLITES)."""
    rng = rng or random.Random()
    names = name_pool(category_id)
    low, high = altitude_band(category_id)

    satellites = []
    for i in range(max(0, min(count, MAX_SATELLITES))):
        satellites.append(SatelliteRecord(
            satid=BASE_SATID + i,
            satname=satellite_name(names, i),
            int_designator=make_int_designator(i, rng),
            launch_date=make_launch_date(rng),
            satlat=rng.uniform(-MAX_LATITUDE, MAX_LATITUDE),
            satlng=rng.uniform(-MAX_LONGITUDE, MAX_LONGITUDE),
            satalt=rng.uniform(low, high),
        ))

    return satellites
