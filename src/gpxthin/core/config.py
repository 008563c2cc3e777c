from dataclasses import dataclass
import math

from gpxthin.core.errors import InvalidParameterError

EARTH_MEAN_RADIUS_M = 6371008.8  # arithmetic mean radius
METERS_PER_DEGREE = EARTH_MEAN_RADIUS_M * 2 * math.pi / 360

DEFAULT_EPSILON_M = 2.0
DEFAULT_NEARBY_M = 0.0
DEFAULT_SPIKE_FACTOR = 0.0
DEFAULT_DIGITS = 5

MAX_EPSILON_M = 100.0
MAX_NEARBY_M = 100.0
MAX_SPIKE_FACTOR = 10.0


def meters_to_degrees(meters: float) -> float:
    """
    Flat-earth conversion of a distance in meters to degree units.
    Latitude independent, adequate for thresholds of a few meters.
    """
    return meters / METERS_PER_DEGREE


def degrees_to_meters(degrees: float) -> float:
    return degrees * METERS_PER_DEGREE


def _check_range(name: str, value: float, upper: float):
    if not math.isfinite(value) or value < 0 or value > upper:
        raise InvalidParameterError(f"Invalid {name}: {value!r} (expected 0-{upper:g})")


@dataclass(frozen=True)
class ReductionConfig:
    """
    Parameters of the reduction pipeline, passed explicitly to each stage.

    Args:
        spike_factor: Spike removal factor, 0 disables the spike filter.
        nearby_meters: Points closer than this are collapsed, 0 disables it.
        epsilon_meters: Maximum RDP deviation in meters.
        elevation: Keep elevation values on the output points.
    """
    spike_factor: float = DEFAULT_SPIKE_FACTOR
    nearby_meters: float = DEFAULT_NEARBY_M
    epsilon_meters: float = DEFAULT_EPSILON_M
    elevation: bool = True

    def __post_init__(self):
        _check_range("spike factor", self.spike_factor, MAX_SPIKE_FACTOR)
        _check_range("nearby distance", self.nearby_meters, MAX_NEARBY_M)
        _check_range("precision", self.epsilon_meters, MAX_EPSILON_M)

    @property
    def epsilon_degrees(self) -> float:
        return meters_to_degrees(self.epsilon_meters)

    @property
    def nearby_degrees(self) -> float:
        return meters_to_degrees(self.nearby_meters)
