import logging
import math
import pandas as pd
from typing import Iterator, Dict, List
from pathlib import Path

from gpxthin.core.point import Point

logger = logging.getLogger(__name__)

class CSVTrackReader:
    """
    Reads a track from a CSV file with one point per row.
    Coordinates are required; the elevation column is optional.
    """
    def __init__(
        self,
        filepath: str | Path,
        sep: str = ',',
        col_mapping: Dict[str, str] = None,
        elevation: bool = True
    ):
        self.filepath = Path(filepath)
        self.sep = sep
        self.elevation = elevation

        self.mapping = col_mapping or {
            'lat': 'latitude',
            'lon': 'longitude',
            'ele': 'elevation'
        }

    def stream(self) -> Iterator[Point]:
        """
        Yields points from the file one by one, in file order.
        Rows with a missing, non-numeric or infinite coordinate are skipped.
        Infinite elevations are read as missing.
        """
        header = pd.read_csv(self.filepath, nrows=0, sep=self.sep)
        lat_col = self.mapping['lat']
        lon_col = self.mapping['lon']
        if lat_col not in header.columns or lon_col not in header.columns:
            raise ValueError(
                f"CSV must contain '{lat_col}' and '{lon_col}' columns. Found: {list(header.columns)}"
            )
        ele_col = self.mapping.get('ele')
        has_ele_col = self.elevation and ele_col in header.columns

        skipped = 0
        with pd.read_csv(self.filepath, chunksize=1000, sep=self.sep) as reader:
            for chunk in reader:
                chunk[lat_col] = pd.to_numeric(chunk[lat_col], errors='coerce')
                chunk[lon_col] = pd.to_numeric(chunk[lon_col], errors='coerce')
                if has_ele_col:
                    chunk[ele_col] = pd.to_numeric(chunk[ele_col], errors='coerce')

                for _, row in chunk.iterrows():
                    if not (math.isfinite(row[lat_col]) and math.isfinite(row[lon_col])):
                        skipped += 1
                        continue

                    ele = None
                    if has_ele_col and math.isfinite(row[ele_col]):
                        ele = int(row[ele_col])

                    yield Point(lat=float(row[lat_col]), lon=float(row[lon_col]), ele=ele)

        if skipped:
            logger.warning("Skipped %d rows with invalid coordinates in %s", skipped, self.filepath)

    def read(self) -> List[Point]:
        return list(self.stream())
