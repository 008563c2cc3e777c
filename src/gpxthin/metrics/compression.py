from typing import Sequence
from gpxthin.core.point import Point

def calculate_compression_ratio(original: Sequence[Point], compressed: Sequence[Point]) -> float:
    """
    Calculates the compression ratio.
    Ratio = Original Count / Compressed Count.

    Args:
        original: List of original points.
        compressed: List of retained points.

    Returns:
        Compression ratio (e.g., 10.0 for 10:1 compression). Returns 1.0 if compressed is empty.
    """
    if not compressed:
        return 1.0
    return len(original) / len(compressed)

def retained_percentage(total: int, retained: int) -> float:
    """
    Share of retained items in percent, e.g. 25.0 when 1 of 4 points survives.
    Also used for byte sizes. Returns 100.0 when total is 0.
    """
    if total <= 0:
        return 100.0
    return retained * 100.0 / total
