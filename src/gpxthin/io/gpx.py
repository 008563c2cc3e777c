"""
GPX collaborators of the reducer: reading points, writing the reduced track
and splitting multi-track files.

Parsing goes through gpxpy. Writing is done by hand because the output uses
a compact fixed-precision coordinate format that gpxpy does not produce.
"""

import copy
import logging
import math
from pathlib import Path
from typing import List, Sequence

import gpxpy
import gpxpy.gpx

from gpxthin import __version__
from gpxthin.core.config import DEFAULT_DIGITS
from gpxthin.core.errors import EmptyTrackError, InvalidParameterError, InvalidPointError
from gpxthin.core.point import Point

logger = logging.getLogger(__name__)

GPX_HEADER_FULL = (
    '<?xml version="1.0" encoding="UTF-8"?>'
    f'<gpx version="1.1" creator="gpxthin {__version__}" '
    'xmlns="http://www.topografix.com/GPX/1/1" '
    'xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" '
    'xsi:schemaLocation="http://www.topografix.com/GPX/1/1 http://www.topografix.com/GPX/1/1/gpx.xsd">'
    '<trk><trkseg>'
)
GPX_HEADER_MIN = '<gpx><trk><trkseg>'
GPX_FOOTER = '</trkseg></trk></gpx>'

def _to_point(gpx_point, elevation: bool) -> Point:
    if not (math.isfinite(gpx_point.latitude) and math.isfinite(gpx_point.longitude)):
        raise InvalidPointError(
            f"Non-finite coordinate lat={gpx_point.latitude!r} lon={gpx_point.longitude!r}"
        )
    ele = None
    # Non-finite elevations are treated as missing
    if elevation and gpx_point.elevation is not None and math.isfinite(gpx_point.elevation):
        # Truncate toward zero, 12.9 -> 12 and -3.7 -> -3
        ele = int(gpx_point.elevation)
    return Point(lat=gpx_point.latitude, lon=gpx_point.longitude, ele=ele)

def read_gpx_points(path: str | Path, elevation: bool = True) -> List[Point]:
    """
    Reads every track point and route point of a GPX file into one ordered list.
    Track points of all tracks and segments come first, followed by route points.

    Args:
        path: GPX file to read.
        elevation: Keep <ele> values (truncated to int). If False, ele is None.

    Raises:
        gpxpy.gpx.GPXException: if the file cannot be parsed.
        InvalidPointError: if a point has a NaN or infinite coordinate.
    """
    path = Path(path)
    with open(path, 'r', encoding='utf-8') as f:
        gpx = gpxpy.parse(f)

    points = []
    for track in gpx.tracks:
        for segment in track.segments:
            points.extend(_to_point(p, elevation) for p in segment.points)
    for route in gpx.routes:
        points.extend(_to_point(p, elevation) for p in route.points)

    logger.debug("Read %d points from %s", len(points), path)
    return points

def _num_digits(value: float, digits: int) -> int:
    # %g counts significant digits, so add the digits of the integer part.
    int_value = int(abs(value))
    if int_value >= 100:
        return digits + 3
    if int_value >= 10:
        return digits + 2
    if int_value >= 1:
        return digits + 1
    return digits

def _format_coord(value: float, digits: int) -> str:
    if not math.isfinite(value):
        raise InvalidPointError(f"Cannot write non-finite coordinate {value!r}")
    return '%.*g' % (_num_digits(value, digits), value)

def format_gpx(
    points: Sequence[Point],
    digits: int = DEFAULT_DIGITS,
    elevation: bool = True,
    minimal: bool = False
) -> str:
    """
    Serializes points as a single-segment GPX track.

    Args:
        points: Points to write, in order.
        digits: Decimal digits kept for coordinates (1-9). Trailing zeros are dropped.
        elevation: Write <ele> for points that have one.
        minimal: Use the bare <gpx> header. Smaller, but not accepted by all apps/devices.
    """
    if not 1 <= digits <= 9:
        raise InvalidParameterError(f"Invalid number of digits: {digits!r} (expected 1-9)")

    parts = [GPX_HEADER_MIN if minimal else GPX_HEADER_FULL]
    for p in points:
        lat = _format_coord(p.lat, digits)
        lon = _format_coord(p.lon, digits)
        if elevation and p.ele is not None:
            parts.append(f'<trkpt lat="{lat}" lon="{lon}"><ele>{p.ele}</ele></trkpt>')
        else:
            parts.append(f'<trkpt lat="{lat}" lon="{lon}"></trkpt>')
    parts.append(GPX_FOOTER)
    return ''.join(parts)

def write_gpx(
    points: Sequence[Point],
    path: str | Path,
    digits: int = DEFAULT_DIGITS,
    elevation: bool = True,
    minimal: bool = False
) -> Path:
    """
    Writes points to path as GPX. The document is formatted completely before
    the file is opened, so a formatting error never leaves a partial file.
    """
    content = format_gpx(points, digits=digits, elevation=elevation, minimal=minimal)
    path = Path(path)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(content)
    return path

def split_gpx_file(path: str | Path) -> List[Path]:
    """
    Splits a GPX file into one file per <trk>, named <path>1.gpx, <path>2.gpx, ...
    Metadata and waypoints are copied to every file, routes are dropped.

    Returns:
        Paths of the written files, in track order.

    Raises:
        EmptyTrackError: if the file contains no tracks.
    """
    path = Path(path)
    with open(path, 'r', encoding='utf-8') as f:
        gpx = gpxpy.parse(f)

    if not gpx.tracks:
        raise EmptyTrackError(f"No <trk> found in {path}")

    written = []
    for count, track in enumerate(gpx.tracks, start=1):
        # Shallow copy: metadata and waypoints are shared, only the track list differs
        single = copy.copy(gpx)
        single.tracks = [track]
        single.routes = []

        out_path = Path(f"{path}{count}.gpx")
        with open(out_path, 'w', encoding='utf-8') as f:
            f.write(single.to_xml())
        written.append(out_path)

    logger.debug("Split %s into %d files", path, len(written))
    return written
