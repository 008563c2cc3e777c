from typing import List
import math

from shapely.geometry import LineString

from gpxthin.core.point import Point

class RDPOracleShapely:
    """
    Douglas-Peucker via shapely (GEOS), used as an external cross-check.

    GEOS works on plain planar coordinates, so the track is projected once
    with the longitude scale at the first point's latitude. Near the equator
    this matches the reducer's per-point projection; elsewhere results can
    differ for points close to the tolerance.
    """

    def __init__(self, epsilon: float):
        self.epsilon = epsilon

    def process(self, trajectory: List[Point]) -> List[Point]:
        if len(trajectory) < 3:
            return list(trajectory)

        scale = math.cos(trajectory[0].lat * math.pi / 180)
        line = LineString([(p.lon * scale, p.lat) for p in trajectory])
        simplified = line.simplify(self.epsilon, preserve_topology=False)

        # Map the surviving vertices back to the original points, in order.
        result = []
        j = 0
        for x, y in simplified.coords:
            while j < len(trajectory) and (trajectory[j].lon * scale, trajectory[j].lat) != (x, y):
                j += 1
            if j < len(trajectory):
                result.append(trajectory[j])
                j += 1
        return result
