from __future__ import annotations

import math
import unittest

import numpy as np

from plotit.best_fit import (
    BEST_FIT_KINDS,
    Cosine,
    Cubic,
    CurveRun,
    Exponential,
    Gaussian,
    GenericPolynomial,
    Linear,
    Quadratic,
    Sine,
    clip_run,
    evaluate_curve,
    sample_curve,
    split_runs,
)
from plotit.colours import Colour
from plotit.mapper import CoordinateMapper
from plotit.samples import SampleSet
from plotit.scales import PlotArea, resolve_axis_layout


def _at(best_fit, x: float) -> float:
    return float(evaluate_curve(best_fit, np.asarray([x]))[0])


class CurveFamilyTests(unittest.TestCase):
    def test_polynomials(self) -> None:
        self.assertAlmostEqual(_at(Linear(gradient=2.0, y_intercept=1.0), 3.0), 7.0)
        self.assertAlmostEqual(_at(Quadratic(intercept=1.0, linear_coeff=2.0, quadratic_coeff=3.0), 2.0), 17.0)
        self.assertAlmostEqual(
            _at(Cubic(intercept=1.0, linear_coeff=2.0, quadratic_coeff=3.0, cubic_coeff=4.0), 2.0), 49.0
        )
        self.assertAlmostEqual(_at(GenericPolynomial(coefficients={0: 1.0, 3: 2.0}), 2.0), 17.0)

    def test_polynomial_order_does_not_matter(self) -> None:
        a = GenericPolynomial(coefficients={0: 1.0, 1: -2.0, 4: 0.5})
        b = GenericPolynomial(coefficients={4: 0.5, 0: 1.0, 1: -2.0})
        xs = np.linspace(-3.0, 3.0, 13)
        np.testing.assert_allclose(evaluate_curve(a, xs), evaluate_curve(b, xs))

    def test_polynomial_rejects_negative_powers(self) -> None:
        with self.assertRaises(ValueError):
            GenericPolynomial(coefficients={-1: 1.0})

    def test_exponential(self) -> None:
        curve = Exponential(constant=2.0, base=3.0, power=2.0, vertical_shift=1.0)
        self.assertAlmostEqual(_at(curve, 1.0), 19.0)

    def test_gaussian_peak(self) -> None:
        curve = Gaussian(variance=1.0, expected_value=0.0)
        self.assertAlmostEqual(_at(curve, 0.0), 1.0 / math.sqrt(2.0 * math.pi))
        self.assertAlmostEqual(_at(curve, 1.0), _at(curve, -1.0))

    def test_trigonometric(self) -> None:
        self.assertAlmostEqual(_at(Sine(amplitude=2.0, period=1.0, phase_shift=math.pi / 2, vertical_shift=1.0), 0.0), 3.0)
        self.assertAlmostEqual(_at(Cosine(amplitude=2.0, period=1.0, vertical_shift=1.0), 0.0), 3.0)
        self.assertAlmostEqual(_at(Sine(amplitude=1.0, period=2.0), math.pi / 4), 1.0)

    def test_default_colour_is_black(self) -> None:
        self.assertIs(Linear(gradient=1.0, y_intercept=0.0).colour, Colour.BLACK)
        self.assertEqual(len(BEST_FIT_KINDS), 8)


class SampleCurveTests(unittest.TestCase):
    def test_flat_line_is_constant(self) -> None:
        runs = sample_curve(Linear(gradient=0.0, y_intercept=2.5), -10.0, 10.0, 201)
        self.assertEqual(len(runs), 1)
        self.assertEqual(len(runs[0]), 201)
        self.assertTrue(np.all(runs[0].ys == 2.5))

    def test_flat_line_maps_to_one_pixel_row(self) -> None:
        samples = SampleSet.from_columns([0.0, 10.0], [0.0, 5.0])
        layout = resolve_axis_layout([samples], 10, 10, PlotArea(left=0, top=0, right=500, bottom=400))
        run = sample_curve(Linear(gradient=0.0, y_intercept=2.5), 0.0, 10.0, 101)[0]
        _, py = CoordinateMapper(layout).to_pixels(run.xs, run.ys)
        self.assertEqual(len(set(py.tolist())), 1)

    def test_rising_line_climbs_in_pixel_space(self) -> None:
        samples = SampleSet.from_columns([0.0, 10.0], [0.0, 10.0])
        layout = resolve_axis_layout([samples], 10, 10, PlotArea(left=0, top=0, right=500, bottom=400))
        run = sample_curve(Linear(gradient=1.0, y_intercept=0.0), 0.0, 10.0, layout.x_pixel_length + 1)[0]
        px, py = CoordinateMapper(layout).to_pixels(run.xs, run.ys)
        self.assertTrue(np.all(np.diff(px) >= 0))
        self.assertTrue(np.all(np.diff(py) <= 0))
        self.assertGreater(py[0], py[-1])

    def test_overflow_ends_the_run(self) -> None:
        runs = sample_curve(Exponential(constant=1.0, base=10.0, power=400.0), 0.0, 1.0, 101)
        self.assertEqual(len(runs), 1)
        self.assertLess(runs[0].xs[-1], 1.0)
        self.assertTrue(np.all(np.isfinite(runs[0].ys)))

    def test_degenerate_gaussian_yields_no_runs(self) -> None:
        self.assertEqual(sample_curve(Gaussian(variance=0.0, expected_value=0.0), -1.0, 1.0, 50), [])

    def test_split_runs_breaks_on_gaps_and_drops_single_points(self) -> None:
        xs = np.arange(9, dtype=np.float64)
        keep = np.asarray([True, True, False, True, True, True, False, True, False])
        runs = split_runs(xs, xs * 2.0, keep)
        self.assertEqual([r.xs.tolist() for r in runs], [[0.0, 1.0], [3.0, 4.0, 5.0]])

    def test_clip_run_cuts_at_the_band_edges(self) -> None:
        xs = np.asarray([0.0, 1.0, 2.0, 3.0])
        run = CurveRun(xs=xs, ys=xs * 10.0 - 5.0)
        pieces = clip_run(run, 0.0, 10.0)
        self.assertEqual(len(pieces), 1)
        np.testing.assert_allclose(pieces[0].xs, [0.5, 1.0, 1.5])
        np.testing.assert_allclose(pieces[0].ys, [0.0, 5.0, 10.0])

    def test_clip_run_keeps_a_crossing_between_two_outside_samples(self) -> None:
        run = CurveRun(xs=np.asarray([0.0, 1.0]), ys=np.asarray([-100.0, 100.0]))
        pieces = clip_run(run, -1.0, 1.0)
        self.assertEqual(len(pieces), 1)
        np.testing.assert_allclose(pieces[0].xs, [0.495, 0.505])
        np.testing.assert_allclose(pieces[0].ys, [-1.0, 1.0])

    def test_clip_run_splits_when_the_curve_leaves_and_returns(self) -> None:
        xs = np.asarray([0.0, 1.0, 2.0, 3.0, 4.0])
        run = CurveRun(xs=xs, ys=np.asarray([0.0, 0.0, 5.0, 0.0, 0.0]))
        pieces = clip_run(run, -1.0, 1.0)
        self.assertEqual(len(pieces), 2)
        np.testing.assert_allclose(pieces[0].xs, [0.0, 1.0, 1.2])
        np.testing.assert_allclose(pieces[1].xs, [2.8, 3.0, 4.0])

    def test_clip_run_drops_flat_runs_outside_the_band(self) -> None:
        run = CurveRun(xs=np.asarray([0.0, 1.0, 2.0]), ys=np.asarray([3.0, 3.0, 3.0]))
        self.assertEqual(clip_run(run, -1.0, 1.0), [])

    def test_count_must_allow_a_segment(self) -> None:
        with self.assertRaises(ValueError):
            sample_curve(Linear(gradient=1.0, y_intercept=0.0), 0.0, 1.0, 1)


if __name__ == "__main__":
    unittest.main()
