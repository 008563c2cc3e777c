import unittest
from gpxthin.core.config import meters_to_degrees
from gpxthin.core.point import Point
from gpxthin.modules.filters.nearby import ProximityCollapser

class TestProximityCollapser(unittest.TestCase):
    def setUp(self):
        self.collapser = ProximityCollapser(meters_to_degrees(5.0))

    def test_close_points_collapse(self):
        # ~2 m apart at mid latitude, then ~110 m steps
        p0 = Point(45.0, 7.0)
        p1 = Point(45.00002, 7.0)
        p2 = Point(45.001, 7.0)
        p3 = Point(45.002, 7.0)

        result = self.collapser.filter([p0, p1, p2, p3])

        self.assertEqual(result, [p0, p0, p2, p3])

    def test_distance_measured_from_merged_point(self):
        # 3 m steps: the second point merges, the third is 6 m from the anchor
        p0 = Point(45.0, 7.0)
        p1 = Point(45.0 + meters_to_degrees(3.0), 7.0)
        p2 = Point(45.0 + meters_to_degrees(6.0), 7.0)
        p3 = Point(45.01, 7.0)

        result = self.collapser.filter([p0, p1, p2, p3])

        self.assertEqual(result, [p0, p0, p2, p3])

    def test_final_pair_not_compared(self):
        p0 = Point(0.0, 0.0)
        p1 = Point(0.01, 0.0)
        p2 = Point(0.01, 0.0000001)

        result = self.collapser.filter([p0, p1, p2])

        self.assertEqual(result, [p0, p1, p2])

    def test_disabled_is_noop(self):
        points = [Point(0.0, 0.0), Point(0.0, 0.0), Point(0.0, 0.0000001)]
        self.assertEqual(ProximityCollapser(0.0).filter(points), points)
        self.assertEqual(ProximityCollapser(-1.0).filter(points), points)

    def test_length_preserved(self):
        points = [Point(45.0 + i * 1e-6, 7.0) for i in range(50)]
        result = self.collapser.filter(points)
        self.assertEqual(len(result), len(points))

if __name__ == '__main__':
    unittest.main()
