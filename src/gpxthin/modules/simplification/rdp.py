import logging
import math
from typing import List, Optional, Sequence, Tuple

from gpxthin.core.errors import InvalidParameterError
from gpxthin.core.point import Point
from gpxthin.modules.geometry.distance import perpendicular_distance

logger = logging.getLogger(__name__)

def trim_degenerate_endpoints(points: Sequence[Point]) -> int:
    """
    Returns the effective track length after dropping trailing points that
    sit exactly on the first point, so the outer RDP chord has a length.
    A single remaining point is always kept.
    """
    n = len(points)
    while n > 1 and points[0].same_position(points[n - 1]):
        n -= 1
    return n

class RDPSimplifier:
    """
    Ramer-Douglas-Peucker polyline simplification.

    Works on index ranges of a single list and keeps a parallel retained mask,
    so points are never copied. The ranges are kept on an explicit stack
    instead of recursing, which keeps very long tracks within Python's
    recursion limit.
    """

    def __init__(self, epsilon: float):
        """
        Args:
            epsilon: Maximum allowed perpendicular deviation in degree units.
        """
        if not math.isfinite(epsilon) or epsilon < 0:
            raise InvalidParameterError(f"Epsilon must be a finite non-negative number, got {epsilon!r}")
        self.epsilon = epsilon

    def simplify(self, points: Sequence[Point], n: Optional[int] = None) -> List[bool]:
        """
        Marks which of the first n points survive simplification.

        Args:
            points: Ordered track points.
            n: Number of leading points to consider. Defaults to len(points).

        Returns:
            Retained mask of length n. The first and last of the n points are always True.
        """
        if n is None:
            n = len(points)
        retained = [True] * n
        if n < 3:
            return retained

        # Inclusive (start, end) ranges. The left half of a split is pushed
        # last so it is finished before the right half starts.
        stack: List[Tuple[int, int]] = [(0, n - 1)]
        while stack:
            start, end = stack.pop()
            if end - start < 2:
                continue

            index, dmax = self._farthest(points, start, end)
            if dmax > self.epsilon:
                stack.append((index, end))
                stack.append((start, index))
            else:
                for i in range(start + 1, end):
                    retained[i] = False

        logger.debug("RDP kept %d of %d points", sum(retained), n)
        return retained

    def _farthest(self, points: Sequence[Point], start: int, end: int) -> Tuple[int, float]:
        # First index wins on ties.
        index = start
        dmax = 0.0
        first, last = points[start], points[end]
        for i in range(start + 1, end):
            d = perpendicular_distance(points[i], first, last)
            if d > dmax:
                index = i
                dmax = d
        return index, dmax
