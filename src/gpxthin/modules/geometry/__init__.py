from .distance import planar_distance, perpendicular_distance
