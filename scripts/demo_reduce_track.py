import os
import sys
import argparse
import matplotlib.pyplot as plt

# Add project root to sys.path to find packages
current_dir = os.path.dirname(os.path.abspath(__file__))
project_root = os.path.join(current_dir, "..")
sys.path.append(project_root)
sys.path.append(os.path.join(project_root, "src"))

from gpxthin.core.config import ReductionConfig
from gpxthin.io.csv_reader import CSVTrackReader
from gpxthin.io.gpx import read_gpx_points
from gpxthin.metrics import calculate_compression_ratio, calculate_deviation_stats
from gpxthin.pipeline import TrackReducer

def load_track(filepath: str):
    if not os.path.exists(filepath):
        print(f"Error: File not found at {filepath}")
        return []
    if filepath.lower().endswith(".csv"):
        return CSVTrackReader(filepath).read()
    return read_gpx_points(filepath)

def print_metrics(name, track, result):
    stats = calculate_deviation_stats(result.filtered, result.mask)
    print(f"\n--- Metrics for {name} ---")
    print(f" Compression Ratio: {calculate_compression_ratio(track, result.points):.2f}")
    print(f" Retained Points: {result.retained_points} (Original: {result.total_points})")
    print(f" Average Deviation: {stats['average_deviation']:.2f} m")
    print(f" Max Deviation: {stats['max_deviation']:.2f} m")
    print(f" RMSE: {stats['rmse']:.2f} m")

def main():
    parser = argparse.ArgumentParser(description="Compare track reduction at several precisions")
    parser.add_argument("track", help="GPX or CSV track")
    parser.add_argument("--precisions", type=float, nargs="+", default=[1.0, 5.0, 20.0])
    parser.add_argument("--spike", type=float, default=0.0)
    parser.add_argument("--nearby", type=float, default=0.0)
    parser.add_argument("--output", default=None, help="Save the plot instead of showing it")
    args = parser.parse_args()

    print(f"Loading data from {args.track}...")
    track = load_track(args.track)
    print(f"Loaded {len(track)} points.")
    if not track:
        return

    fig, axes = plt.subplots(1, len(args.precisions), figsize=(6 * len(args.precisions), 6), squeeze=False)

    for ax, precision in zip(axes[0], args.precisions):
        config = ReductionConfig(spike_factor=args.spike, nearby_meters=args.nearby, epsilon_meters=precision)
        result = TrackReducer(config).reduce(track)
        print_metrics(f"{precision:g} m", track, result)

        ax.plot([p.lon for p in track], [p.lat for p in track], color='grey', linewidth=1, alpha=0.5, label='Original')
        ax.plot([p.lon for p in result.points], [p.lat for p in result.points], color='red', linewidth=1.5,
                marker='o', markersize=3, label='Reduced')
        ax.set_title(f"{precision:g} m: {result.retained_points}/{result.total_points} points")
        ax.set_aspect('equal', adjustable='datalim')
        ax.legend()

    plt.tight_layout()
    if args.output:
        plt.savefig(args.output, dpi=150)
        print(f"\nPlot saved to {args.output}")
    else:
        plt.show()

if __name__ == "__main__":
    main()
