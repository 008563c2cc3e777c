import unittest
import math
from gpxthin.core.config import meters_to_degrees
from gpxthin.core.errors import InvalidParameterError
from gpxthin.core.point import Point
from gpxthin.metrics import calculate_deviation_stats
from gpxthin.modules.simplification.rdp import RDPSimplifier, trim_degenerate_endpoints

def wiggly_track(n=200):
    """A meandering track around Amsterdam, roughly 1 m between samples."""
    return [
        Point(
            lat=52.37 + i * 0.00001,
            lon=4.89 + 0.00005 * math.sin(i * 0.3) + 0.00002 * math.sin(i * 1.7),
        )
        for i in range(n)
    ]

class TestRDPSimplifier(unittest.TestCase):
    def test_collinear_points_reduce_to_endpoints(self):
        points = [Point(float(i), 0.0) for i in range(5)]
        mask = RDPSimplifier(0.01).simplify(points)
        self.assertEqual(mask, [True, False, False, False, True])

    def test_peak_is_kept(self):
        points = [
            Point(0.0, 0.0),
            Point(0.1, 1.0),
            Point(2.0, 2.0),
            Point(0.1, 3.0),
            Point(0.0, 4.0),
        ]
        mask = RDPSimplifier(0.7).simplify(points)
        self.assertEqual(mask, [True, False, True, False, True])

    def test_endpoints_always_retained(self):
        points = wiggly_track()
        for epsilon in [0.0, 1e-6, 1e-3, 1.0]:
            mask = RDPSimplifier(epsilon).simplify(points)
            self.assertTrue(mask[0])
            self.assertTrue(mask[-1])

    def test_small_ranges_untouched(self):
        simplifier = RDPSimplifier(1.0)
        self.assertEqual(simplifier.simplify([]), [])
        self.assertEqual(simplifier.simplify([Point(0.0, 0.0)]), [True])
        self.assertEqual(simplifier.simplify([Point(0.0, 0.0), Point(0.0, 0.0)]), [True, True])

    def test_only_first_n_points_considered(self):
        points = [Point(float(i), 0.0) for i in range(4)] + [Point(0.0, 0.0)]
        mask = RDPSimplifier(0.01).simplify(points, 4)
        self.assertEqual(mask, [True, False, False, True])

    def test_first_farthest_point_wins_tie(self):
        # Both interior points are exactly one degree off the chord
        points = [Point(0.0, 0.0), Point(1.0, 1.0), Point(-1.0, 2.0), Point(0.0, 4.0)]
        index, dmax = RDPSimplifier(0.5)._farthest(points, 0, 3)
        self.assertEqual(index, 1)
        self.assertAlmostEqual(dmax, 1.0)

    def test_idempotent(self):
        points = wiggly_track()
        simplifier = RDPSimplifier(meters_to_degrees(2.0))

        mask = simplifier.simplify(points)
        kept = [p for p, keep in zip(points, mask) if keep]
        self.assertLess(len(kept), len(points))

        self.assertEqual(simplifier.simplify(kept), [True] * len(kept))

    def test_larger_epsilon_never_keeps_more(self):
        points = wiggly_track()
        counts = [
            sum(RDPSimplifier(meters_to_degrees(m)).simplify(points))
            for m in [0.0, 0.5, 1.0, 2.0, 5.0, 10.0, 50.0]
        ]
        self.assertEqual(counts, sorted(counts, reverse=True))
        self.assertEqual(counts[-1], 2)

    def test_dropped_points_within_epsilon(self):
        points = wiggly_track()
        mask = RDPSimplifier(meters_to_degrees(3.0)).simplify(points)
        stats = calculate_deviation_stats(points, mask)
        self.assertGreater(len(stats['deviations']), 0)
        self.assertLessEqual(stats['max_deviation'], 3.0 + 1e-9)

    def test_closed_loop_without_trim(self):
        # Zero-length outer chord: distances fall back to the distance from the start
        points = [Point(0.0, 0.0), Point(1.0, 0.0), Point(1.0, 1.0), Point(0.0, 0.0)]
        self.assertEqual(RDPSimplifier(0.1).simplify(points), [True, True, True, True])
        self.assertEqual(RDPSimplifier(2.0).simplify(points), [True, False, False, True])

    def test_long_zigzag_without_recursion_limit(self):
        # Zigzag deviations are far above epsilon, so every point survives
        n = 1500
        points = [Point(i * 0.0001, 0.001 if i % 2 else -0.001) for i in range(n)]
        mask = RDPSimplifier(meters_to_degrees(1.0)).simplify(points)
        self.assertEqual(sum(mask), n)

    def test_negative_epsilon_rejected(self):
        with self.assertRaises(InvalidParameterError):
            RDPSimplifier(-0.1)

    def test_non_finite_epsilon_rejected(self):
        for epsilon in (math.nan, math.inf):
            with self.assertRaises(InvalidParameterError):
                RDPSimplifier(epsilon)

class TestTrimDegenerateEndpoints(unittest.TestCase):
    def test_closed_triangle(self):
        points = [Point(0.0, 0.0), Point(0.0, 10.0), Point(0.0, 0.0)]
        self.assertEqual(trim_degenerate_endpoints(points), 2)

    def test_several_trailing_duplicates(self):
        points = [Point(1.0, 1.0), Point(2.0, 2.0), Point(1.0, 1.0, 5), Point(1.0, 1.0)]
        self.assertEqual(trim_degenerate_endpoints(points), 2)

    def test_open_track_untouched(self):
        points = [Point(0.0, 0.0), Point(0.0, 1.0)]
        self.assertEqual(trim_degenerate_endpoints(points), 2)

    def test_all_identical_keeps_one(self):
        self.assertEqual(trim_degenerate_endpoints([Point(3.0, 3.0)] * 4), 1)
        self.assertEqual(trim_degenerate_endpoints([Point(3.0, 3.0)]), 1)

if __name__ == '__main__':
    unittest.main()
