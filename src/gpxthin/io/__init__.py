from .gpx import format_gpx, read_gpx_points, split_gpx_file, write_gpx
from .csv_reader import CSVTrackReader
