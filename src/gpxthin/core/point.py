from dataclasses import dataclass

@dataclass(frozen=True)
class Point:
    """
    Represents a single GPS sample (lat, lon, ele).
    frozen=True lets the filters share one instance between list slots when merging.
    """
    lat: float
    lon: float
    ele: int | None = None

    def same_position(self, other: 'Point') -> bool:
        return self.lat == other.lat and self.lon == other.lon
