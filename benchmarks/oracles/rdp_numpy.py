from typing import List
import numpy as np

from gpxthin.core.point import Point

class RDPOracleNumpy:
    """
    Reference Ramer-Douglas-Peucker implementation, vectorized with numpy.
    Uses the same flat projection as the reducer: every candidate point is
    projected with the longitude scale at its own latitude.
    Plain recursion, so only suitable for moderate track sizes.
    """

    def __init__(self, epsilon: float):
        """
        Args:
            epsilon: Maximum deviation in degree units.
        """
        self.epsilon = epsilon

    def process(self, trajectory: List[Point]) -> List[bool]:
        n = len(trajectory)
        lat = np.array([p.lat for p in trajectory], dtype=float)
        lon = np.array([p.lon for p in trajectory], dtype=float)
        retained = np.ones(n, dtype=bool)
        if n >= 3:
            self._simplify(lat, lon, retained, 0, n - 1)
        return retained.tolist()

    def _distances(self, lat, lon, start, end):
        p_lat = lat[start + 1:end]
        scale = np.cos(p_lat * np.pi / 180)
        p_lon = lon[start + 1:end] * scale
        a_lat, b_lat = lat[start], lat[end]
        a_lon = lon[start] * scale
        b_lon = lon[end] * scale

        dx = b_lat - a_lat
        dy = b_lon - a_lon
        d = np.sqrt(dx * dx + dy * dy)

        # Zero-length baseline: fall back to the distance to the start point
        direct = np.sqrt((a_lat - p_lat) ** 2 + (a_lon - p_lon) ** 2)
        with np.errstate(divide='ignore', invalid='ignore'):
            perp = np.abs(p_lat * dy - p_lon * dx + b_lat * a_lon - b_lon * a_lat) / d
        return np.where(d == 0.0, direct, perp)

    def _simplify(self, lat, lon, retained, start, end):
        if end - start < 2:
            return
        dists = self._distances(lat, lon, start, end)
        # argmax returns the first maximum, matching the strict '>' scan
        offset = int(np.argmax(dists))
        dmax = dists[offset]
        if dmax > self.epsilon:
            index = start + 1 + offset
            self._simplify(lat, lon, retained, start, index)
            self._simplify(lat, lon, retained, index, end)
        else:
            retained[start + 1:end] = False
