from __future__ import annotations

import unittest

from plotit.quadrants import AxisSide, LegendCorner, Quadrants, axis_side, get_quadrants, legend_corner, quadrants_for


class QuadrantTests(unittest.TestCase):
    def test_axis_side_treats_zero_as_positive(self) -> None:
        self.assertIs(axis_side(0.0, 5.0), AxisSide.POSITIVE)
        self.assertIs(axis_side(0.0, 0.0), AxisSide.POSITIVE)
        self.assertIs(axis_side(-5.0, 0.0), AxisSide.NEGATIVE)
        self.assertIs(axis_side(-5.0, -1.0), AxisSide.NEGATIVE)
        self.assertIs(axis_side(-1.0, 1.0), AxisSide.BOTH)

    def test_all_nine_layouts(self) -> None:
        cases = [
            ((0.5, 1.5, 0.5, 1.5), Quadrants.TOP_RIGHT),
            ((-1.5, -0.5, 0.5, 1.5), Quadrants.TOP_LEFT),
            ((0.5, 1.5, -1.5, -0.5), Quadrants.BOTTOM_RIGHT),
            ((-1.5, -0.5, -1.5, -0.5), Quadrants.BOTTOM_LEFT),
            ((0.5, 1.5, -1.0, 1.0), Quadrants.RIGHT_PAIR),
            ((-1.5, -0.5, -1.0, 1.0), Quadrants.LEFT_PAIR),
            ((-1.0, 1.0, 0.5, 1.5), Quadrants.TOP_PAIR),
            ((-1.0, 1.0, -1.5, -0.5), Quadrants.BOTTOM_PAIR),
            ((-5.0, 5.0, -3.0, 3.0), Quadrants.ALL),
        ]
        for bounds, expected in cases:
            with self.subTest(bounds=bounds):
                self.assertIs(get_quadrants(*bounds), expected)

    def test_sides_round_trip_through_lookup(self) -> None:
        for quadrants in Quadrants:
            self.assertIs(quadrants_for(quadrants.x_side, quadrants.y_side), quadrants)

    def test_negating_y_moves_top_right_to_bottom_right(self) -> None:
        self.assertIs(get_quadrants(0.5, 1.5, 0.5, 1.5), Quadrants.TOP_RIGHT)
        self.assertIs(get_quadrants(0.5, 1.5, -1.5, -0.5), Quadrants.BOTTOM_RIGHT)

    def test_legend_corner_keeps_clear_of_the_axes(self) -> None:
        self.assertIs(legend_corner(Quadrants.TOP_RIGHT), LegendCorner.TOP_RIGHT)
        self.assertIs(legend_corner(Quadrants.ALL), LegendCorner.TOP_RIGHT)
        self.assertIs(legend_corner(Quadrants.TOP_LEFT), LegendCorner.TOP_LEFT)
        self.assertIs(legend_corner(Quadrants.LEFT_PAIR), LegendCorner.TOP_LEFT)
        self.assertIs(legend_corner(Quadrants.BOTTOM_RIGHT), LegendCorner.BOTTOM_RIGHT)
        self.assertIs(legend_corner(Quadrants.BOTTOM_PAIR), LegendCorner.BOTTOM_RIGHT)
        self.assertIs(legend_corner(Quadrants.BOTTOM_LEFT), LegendCorner.BOTTOM_LEFT)
        self.assertTrue(LegendCorner.BOTTOM_LEFT.is_left)
        self.assertTrue(LegendCorner.BOTTOM_LEFT.is_bottom)
        self.assertFalse(LegendCorner.TOP_RIGHT.is_left)


if __name__ == "__main__":
    unittest.main()
