import logging
from typing import List, Sequence

from gpxthin.core.point import Point
from gpxthin.modules.geometry.distance import planar_distance

logger = logging.getLogger(__name__)

class ProximityCollapser:
    """
    Collapses runs of points that lie closer together than a threshold.
    """

    def __init__(self, threshold: float):
        """
        Args:
            threshold: Minimum spacing in degree units. Values <= 0 disable the collapse.
        """
        self.threshold = threshold

    def filter(self, points: Sequence[Point]) -> List[Point]:
        """
        Returns a copy of points where each point closer than the threshold to
        its (possibly already merged) predecessor is replaced by that predecessor.

        Note: the scan stops at n - 2 like the spike filter, so the final pair
        of points is never compared.
        """
        result = list(points)
        if self.threshold <= 0:
            return result

        merged = 0
        for i in range(len(result) - 2):
            if planar_distance(result[i], result[i + 1]) < self.threshold:
                result[i + 1] = result[i]
                merged += 1

        logger.debug("Proximity collapse merged %d of %d points", merged, len(result))
        return result
