import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import gpxpy.gpx

from gpxthin import __version__
from gpxthin.core.config import (
    DEFAULT_DIGITS,
    DEFAULT_EPSILON_M,
    DEFAULT_NEARBY_M,
    DEFAULT_SPIKE_FACTOR,
    ReductionConfig,
)
from gpxthin.core.errors import GpxThinError, InvalidParameterError
from gpxthin.io.csv_reader import CSVTrackReader
from gpxthin.io.gpx import read_gpx_points, split_gpx_file, write_gpx
from gpxthin.metrics import retained_percentage
from gpxthin.pipeline import ReductionResult, TrackReducer

logger = logging.getLogger(__name__)

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gpxthin",
        description="Reduce the number of trackpoints in GPX files within a given precision.",
    )
    parser.add_argument("files", nargs="*", metavar="FILE", help="GPX (or CSV) files to reduce")
    parser.add_argument("-d", dest="digits", type=int, default=DEFAULT_DIGITS,
                        help=f"number of digits (default {DEFAULT_DIGITS})")
    parser.add_argument("-e", dest="elevation", action="store_false",
                        help="omit elevation info")
    parser.add_argument("-m", dest="minimal", action="store_true",
                        help="use minimal <gpx> (not compatible with all apps/devices)")
    parser.add_argument("-n", dest="nearby", type=float, default=DEFAULT_NEARBY_M,
                        help="remove nearby points (default 0 m, disabled)")
    parser.add_argument("-p", dest="precision", type=float, default=DEFAULT_EPSILON_M,
                        help=f"precision in meters (default {DEFAULT_EPSILON_M:g} m)")
    parser.add_argument("-q", dest="quiet", action="store_true", help="quiet")
    parser.add_argument("-s", dest="spike", type=float, default=DEFAULT_SPIKE_FACTOR,
                        help="remove spikes (default 0, disabled)")
    parser.add_argument("-t", dest="split", action="store_true",
                        help="split gpx file into individual tracks")
    parser.add_argument("-v", dest="verbose", action="store_true", help="verbose logging")
    parser.add_argument("-V", "--version", action="version", version=f"gpxthin {__version__}")
    return parser

def load_points(path: Path, elevation: bool):
    if path.suffix.lower() == ".csv":
        return CSVTrackReader(path, elevation=elevation).read()
    return read_gpx_points(path, elevation=elevation)

def print_report(in_path: Path, out_path: Path, result: ReductionResult):
    in_size = in_path.stat().st_size
    out_size = out_path.stat().st_size
    print(f"{in_path} => {out_path}")
    print(f"{result.total_points:8d} => {result.retained_points:8d} "
          f"({retained_percentage(result.total_points, result.retained_points):.2f}%) trackpoints")
    print(f"{in_size:8d} => {out_size:8d} ({retained_percentage(in_size, out_size):.2f}%) bytes")

def process_file(path: Path, reducer: TrackReducer, args: argparse.Namespace) -> Path:
    """
    Reduces one input file and writes <path>.gpx. Returns the output path.
    """
    points = load_points(path, reducer.config.elevation)
    result = reducer.reduce(points)
    out_path = write_gpx(
        result.points,
        Path(f"{path}.gpx"),
        digits=args.digits,
        elevation=reducer.config.elevation,
        minimal=args.minimal,
    )
    if not args.quiet:
        print_report(path, out_path, result)
    return out_path

def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not 1 <= args.digits <= 9:
        parser.error("Invalid number of digits (1-9)")
    try:
        config = ReductionConfig(
            spike_factor=args.spike,
            nearby_meters=args.nearby,
            epsilon_meters=args.precision,
            elevation=args.elevation,
        )
    except InvalidParameterError as e:
        parser.error(str(e))

    if not args.files:
        parser.print_help()
        return 0

    reducer = TrackReducer(config)
    status = 0
    for name in args.files:
        path = Path(name)
        try:
            if args.split:
                for out_path in split_gpx_file(path):
                    if not args.quiet:
                        print(f"{path} => {out_path}")
            else:
                process_file(path, reducer, args)
        except (GpxThinError, gpxpy.gpx.GPXException, OSError, OverflowError, ValueError) as e:
            logger.error("%s: %s", path, e)
            status = 1

    return status

if __name__ == "__main__":
    sys.exit(main())
