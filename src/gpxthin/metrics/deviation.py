from typing import Dict, List, Sequence
import math

from gpxthin.core.config import degrees_to_meters
from gpxthin.core.point import Point
from gpxthin.modules.geometry.distance import perpendicular_distance

def calculate_deviation_error(p_original: Point, p_start: Point, p_end: Point) -> float:
    """
    Calculates the deviation of a dropped point from the chord that replaces it.

    Args:
        p_original: The dropped point.
        p_start: The retained point before it.
        p_end: The retained point after it.

    Returns:
        Perpendicular distance in meters, using the same flat projection as the reducer.
    """
    return degrees_to_meters(perpendicular_distance(p_original, p_start, p_end))

def calculate_deviation_stats(points: Sequence[Point], mask: Sequence[bool]) -> Dict[str, float | List[float]]:
    """
    Calculates how far the dropped points lie from the simplified track.

    Metrics:
    - average_deviation: Mean deviation over all dropped points.
    - max_deviation: Maximum deviation encountered.
    - rmse: Root Mean Square Error.

    Args:
        points: Points the retained mask refers to (the filtered track).
        mask: Retained flag per point.

    Returns:
        Dictionary containing 'average_deviation', 'max_deviation', 'rmse' and 'deviations' (meters).
    """
    if len(points) != len(mask):
        raise ValueError("points and mask must have the same length")

    kept = [i for i, keep in enumerate(mask) if keep]
    deviations = []

    # Every dropped point lies between two consecutive retained indices.
    for start, end in zip(kept, kept[1:]):
        for i in range(start + 1, end):
            deviations.append(calculate_deviation_error(points[i], points[start], points[end]))

    if not deviations:
        return {'average_deviation': 0.0, 'max_deviation': 0.0, 'rmse': 0.0, 'deviations': []}

    avg = sum(deviations) / len(deviations)
    mse = sum(e*e for e in deviations) / len(deviations)

    return {
        'average_deviation': avg,
        'max_deviation': max(deviations),
        'rmse': math.sqrt(mse),
        'deviations': deviations
    }
