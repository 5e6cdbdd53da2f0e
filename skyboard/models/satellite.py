"""SatelliteRecord - a satellite above an observer, in N2YO's field naming."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SatelliteRecord:
    """
    Position of one satellite.

    Fields:
        satid: NORAD catalog number
        satname: Satellite name (e.g., 'ISS (ZARYA)')
        int_designator: International designator (e.g., '1998-067A')
        launch_date: Launch date as YYYY-MM-DD, or 'Unknown'
        satlat / satlng: Sub-satellite point in decimal degrees
        satalt: Altitude in km
    """
    satid: int
    satname: str
    int_designator: str
    launch_date: str
    satlat: float
    satlng: float
    satalt: float

    def to_dict(self) -> dict:
        return {
            'satid': self.satid,
            'satname': self.satname,
            'intDesignator': self.int_designator,
            'launchDate': self.launch_date,
            'satlat': self.satlat,
            'satlng': self.satlng,
            'satalt': self.satalt,
        }
