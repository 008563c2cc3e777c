from .compression import calculate_compression_ratio, retained_percentage
from .deviation import calculate_deviation_error, calculate_deviation_stats
