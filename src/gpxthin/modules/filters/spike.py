import logging
import math
from typing import List, Sequence

from gpxthin.core.errors import InvalidParameterError
from gpxthin.core.point import Point
from gpxthin.modules.geometry.distance import planar_distance, perpendicular_distance

logger = logging.getLogger(__name__)

class SpikeFilter:
    """
    Removes single anomalous points ("spikes") by merging them into their predecessor.

    For each consecutive triple a, b, c the middle point b is a spike when
    the chord a-c is shorter than either leg, or when b's perpendicular
    distance to the chord, multiplied by the factor, exceeds the chord length.
    """

    def __init__(self, factor: float):
        """
        Args:
            factor: Spike factor. Larger values remove flatter spikes, 0 disables the filter.
        """
        if not math.isfinite(factor) or factor < 0:
            raise InvalidParameterError(f"Spike factor must be a finite non-negative number, got {factor!r}")
        self.factor = factor

    def filter(self, points: Sequence[Point]) -> List[Point]:
        """
        Returns a copy of points with every spike replaced by the point before it.
        The pass runs left to right and each replacement is seen by the next triple.
        """
        result = list(points)
        if self.factor == 0:
            return result

        merged = 0
        for i in range(len(result) - 2):
            a, b, c = result[i], result[i + 1], result[i + 2]
            ab = planar_distance(a, b)
            bc = planar_distance(b, c)
            ac = planar_distance(a, c)

            if ac < ab or ac < bc:
                result[i + 1] = a
                merged += 1
                continue

            pd = perpendicular_distance(b, a, c)
            if pd * self.factor > ac:
                result[i + 1] = a
                merged += 1

        logger.debug("Spike filter merged %d of %d points", merged, len(result))
        return result
