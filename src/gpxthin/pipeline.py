import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from gpxthin.core.config import ReductionConfig
from gpxthin.core.errors import EmptyTrackError
from gpxthin.core.point import Point
from gpxthin.modules.filters.nearby import ProximityCollapser
from gpxthin.modules.filters.spike import SpikeFilter
from gpxthin.modules.simplification.rdp import RDPSimplifier, trim_degenerate_endpoints

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class ReductionResult:
    """
    Outcome of reducing one track.

    points: Retained points, in track order.
    filtered: Working points after spike/proximity filtering and endpoint trim.
    mask: Retained flag for each entry of filtered.
    total_points: Number of points in the input track.
    """
    points: List[Point]
    filtered: List[Point] = field(repr=False)
    mask: List[bool] = field(repr=False)
    total_points: int = 0

    @property
    def retained_points(self) -> int:
        return len(self.points)

class TrackReducer:
    """
    Runs the reduction stages over a track in fixed order:
    spike filter, proximity collapse, endpoint trim, RDP.
    """

    def __init__(self, config: Optional[ReductionConfig] = None):
        self.config = config or ReductionConfig()
        self.spike_filter = SpikeFilter(self.config.spike_factor)
        self.collapser = ProximityCollapser(self.config.nearby_degrees)
        self.simplifier = RDPSimplifier(self.config.epsilon_degrees)

    def reduce(self, points: Sequence[Point]) -> ReductionResult:
        """
        Reduces a single track. The input sequence is left untouched.

        Raises:
            EmptyTrackError: if the track has no points.
        """
        if not points:
            raise EmptyTrackError("Cannot reduce a track without points")

        working = list(points)
        if self.config.spike_factor > 0:
            working = self.spike_filter.filter(working)
        if self.config.nearby_meters > 0:
            working = self.collapser.filter(working)

        n = trim_degenerate_endpoints(working)
        if n < len(working):
            logger.debug("Trimmed %d trailing points matching the start", len(working) - n)
        working = working[:n]

        mask = self.simplifier.simplify(working, n)
        kept = [p for p, keep in zip(working, mask) if keep]
        if not self.config.elevation:
            kept = [dataclasses.replace(p, ele=None) for p in kept]

        logger.debug("Reduced track from %d to %d points", len(points), len(kept))
        return ReductionResult(points=kept, filtered=working, mask=mask, total_points=len(points))

    def reduce_all(self, tracks: Iterable[Sequence[Point]]) -> List[ReductionResult]:
        """
        Reduces several tracks independently with the same configuration.
        """
        return [self.reduce(track) for track in tracks]
