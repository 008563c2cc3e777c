import math

from gpxthin.core.point import Point

def _lon_scale(lat: float) -> float:
    # Degrees of longitude shrink with cos(latitude).
    return math.cos(lat * math.pi / 180)

def planar_distance(a: Point, b: Point) -> float:
    """
    Flat-earth distance between a and b in degree units.
    The longitude scale is taken from the first point only, so the result
    is not exactly symmetric for points at different latitudes.
    """
    scale = _lon_scale(a.lat)
    d_lat = a.lat - b.lat
    d_lon = a.lon * scale - b.lon * scale
    return math.sqrt(d_lat * d_lat + d_lon * d_lon)

def perpendicular_distance(p: Point, a: Point, b: Point) -> float:
    """
    Distance in degree units from p to the infinite line through a and b,
    all three projected with the longitude scale at p's latitude.

    A zero-length baseline (a and b coincide) has no direction, so the
    distance from p to a is returned instead.
    """
    scale = _lon_scale(p.lat)
    p_lon = p.lon * scale
    a_lon = a.lon * scale
    b_lon = b.lon * scale

    dx = b.lat - a.lat
    dy = b_lon - a_lon
    d = math.sqrt(dx * dx + dy * dy)
    if d == 0.0:
        return planar_distance(p, a)

    return abs(p.lat * dy - p_lon * dx + b.lat * a_lon - b_lon * a.lat) / d
