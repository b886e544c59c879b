from __future__ import annotations

import unittest

import numpy as np

from cellplot.errors import BinLookupError, PlotDataError
from cellplot.histogram import Histogram, assign_bins, find_bin, uniform_bounds
from cellplot.stats import data_range, median, quartiles
from cellplot.style import BoxStyle


class HistogramTests(unittest.TestCase):
    def test_counts_with_bin_count(self) -> None:
        self.assertEqual(Histogram.from_samples([0.0], 3).bin_counts, (0.0, 1.0, 0.0))
        self.assertEqual(Histogram.from_samples([0.0, 3.0], 3).bin_counts, (1.0, 0.0, 1.0))
        self.assertEqual(Histogram.from_samples([0.0, 1.0, 2.0, 3.0], 3).bin_counts, (2.0, 1.0, 1.0))

    def test_uniform_bounds_end_on_upper(self) -> None:
        h = Histogram.from_samples([0.0, 1.0], 3)
        self.assertEqual(len(h.bin_bounds), 4)
        self.assertEqual(h.bin_bounds[0], 0.0)
        self.assertAlmostEqual(h.bin_bounds[1], 1.0 / 3.0)
        self.assertAlmostEqual(h.bin_bounds[2], 2.0 / 3.0)
        self.assertEqual(h.bin_bounds[3], 1.0)
        self.assertEqual(uniform_bounds(0.0, 0.3, 3)[-1], 0.3)

    def test_degenerate_samples_widen_range(self) -> None:
        h = Histogram.from_samples([2.0, 2.0], 3)
        self.assertEqual(h.x_range(), (1.5, 2.5))
        self.assertEqual(h.bin_counts, (0.0, 2.0, 0.0))

    def test_range_too_narrow_for_bin_count_is_padded(self) -> None:
        with np.errstate(all="raise"):
            with self.assertLogs("cellplot.histogram", "WARNING"):
                h = Histogram.from_samples([1.0, 1.0 + 4.44e-16], 30)
        self.assertEqual(h.num_bins, 30)
        self.assertAlmostEqual(h.x_range()[0], 0.5)
        self.assertAlmostEqual(h.x_range()[1], 1.5)
        self.assertEqual(sum(h.bin_counts), 2.0)
        self.assertTrue(all(b > a for a, b in zip(h.bin_bounds, h.bin_bounds[1:])))

    def test_range_that_cannot_be_split_raises(self) -> None:
        with np.errstate(all="raise"):
            with self.assertRaisesRegex(PlotDataError, "30 distinct bins"):
                Histogram.from_samples([1e16, 1e16 + 2.0], 30)
        self.assertEqual(Histogram.from_samples([1e16, 1e16 + 2.0], 1).bin_counts, (2.0,))

    def test_shared_boundary_goes_to_lower_bin(self) -> None:
        self.assertEqual(find_bin(1.0, [0.0, 1.0, 2.0]), 0)
        self.assertEqual(find_bin(0.0, [0.0, 1.0, 2.0]), 0)
        self.assertEqual(find_bin(2.0, [0.0, 1.0, 2.0]), 1)
        np.testing.assert_array_equal(assign_bins(np.array([0.5, 1.5, 1.0]), [0.0, 1.0, 2.0]), [0, 1, 0])

    def test_value_outside_explicit_bounds_raises(self) -> None:
        with self.assertRaises(BinLookupError) as ctx:
            Histogram.from_samples([0.5, 5.0], [0.0, 1.0, 2.0])
        self.assertEqual(ctx.exception.value, 5.0)
        self.assertEqual((ctx.exception.lower, ctx.exception.upper), (0.0, 2.0))
        self.assertIsInstance(ctx.exception, PlotDataError)

    def test_densities_divide_by_bin_width(self) -> None:
        h = Histogram.from_samples([0.25, 1.0, 2.0], [0.0, 0.5, 3.0])
        self.assertEqual(h.bin_counts, (1.0, 2.0))
        np.testing.assert_allclose(h.bin_densities, [2.0, 0.8])
        self.assertEqual(h.values, h.bin_counts)
        self.assertEqual(h.as_density().values, h.bin_densities)

    def test_ranges(self) -> None:
        h = Histogram.from_samples([0.0, 1.0, 2.0, 3.0], 3)
        self.assertEqual(h.x_range(), (0.0, 3.0))
        self.assertEqual(h.y_range(), (0.0, 2.0))

    def test_empty_samples_need_explicit_bounds(self) -> None:
        with self.assertRaises(PlotDataError):
            Histogram.from_samples([], 3)
        h = Histogram.from_samples([], [0.0, 1.0])
        self.assertEqual(h.bin_counts, (0.0,))

    def test_invalid_bins(self) -> None:
        for bins in [0, True, [1.0], [0.0, 0.0, 1.0]]:
            with self.subTest(bins=bins):
                with self.assertRaises(PlotDataError):
                    Histogram.from_samples([0.5], bins)

    def test_non_finite_samples_rejected(self) -> None:
        with self.assertRaises(PlotDataError):
            Histogram.from_samples([1.0, float("nan")], 3)

    def test_style_merges(self) -> None:
        h = Histogram.from_samples([1.0, 2.0], 2, style=BoxStyle(fill="red"))
        self.assertEqual(h.style.fill, "red")
        self.assertEqual(h.with_style(BoxStyle()).style.fill, "red")


class StatsTests(unittest.TestCase):
    def test_median(self) -> None:
        self.assertEqual(median([1.0]), 1.0)
        self.assertEqual(median([1.0, 2.0]), 1.5)
        self.assertEqual(median([1.0, 2.0, 4.0]), 2.0)
        self.assertEqual(median([7.0, 1.0, 3.0, 2.0]), 2.5)

    def test_quartiles(self) -> None:
        self.assertEqual(quartiles([1.0]), (1.0, 1.0, 1.0))
        self.assertEqual(quartiles([1.0, 2.0]), (1.0, 1.5, 2.0))
        self.assertEqual(quartiles([1.0, 2.0, 4.0]), (1.0, 2.0, 4.0))
        self.assertEqual(quartiles([1.0, 2.0, 3.0, 4.0]), (1.5, 2.5, 3.5))

    def test_stats_reject_bad_input(self) -> None:
        with self.assertRaises(PlotDataError):
            median([])
        with self.assertRaises(PlotDataError):
            quartiles([1.0, float("inf")])

    def test_data_range(self) -> None:
        self.assertEqual(data_range([3.0, -1.0, 2.0]), (-1.0, 3.0))
        self.assertEqual(data_range([]), (float("inf"), float("-inf")))


if __name__ == "__main__":
    unittest.main()
