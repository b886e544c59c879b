from __future__ import annotations

import unittest

from cellplot.axis import ContinuousAxis
from cellplot.errors import PlotDataError, UnsupportedRenderError
from cellplot.histogram import Histogram
from cellplot.series import BarChart, Plot
from cellplot.style import LineStyle, PointStyle
from cellplot.text.cells import bins_for_cells, tick_offset_map, value_to_cell_offset
from cellplot.text.glyphs import render_face_bars, render_face_line, render_face_points, segment_glyph
from cellplot.text.render import render_text


N = None


class CellMappingTests(unittest.TestCase):
    def test_value_to_cell_offset_before_axis(self) -> None:
        axis = ContinuousAxis.new(5.0, 10.0, 6)
        self.assertEqual(value_to_cell_offset(3.0, axis, 10), -4)

    def test_value_to_cell_offset_rounds_half_away_from_zero(self) -> None:
        axis = ContinuousAxis.new(0.0, 10.0)
        self.assertEqual(value_to_cell_offset(0.25, axis, 20), 1)
        self.assertEqual(value_to_cell_offset(-0.25, axis, 20), -1)

    def test_tick_offset_map(self) -> None:
        axis = ContinuousAxis.new(0.0, 10.0, 6)
        self.assertEqual(tick_offset_map(axis, 20), {0: 0.0, 4: 2.0, 8: 4.0, 12: 6.0, 16: 8.0, 20: 10.0})

    def test_bins_for_cells_reference_vectors(self) -> None:
        cases = [
            ([-4, -1, 4, 7, 10], [1, 1, 1, 1, 1, 2, 2, 2, 3, 3, 3, N]),
            ([0, 2, 4, 8, 10], [N, 0, 0, 1, 1, 2, 2, 2, 2, 3, 3, N]),
            ([3, 5, 7, 9, 10], [N, N, N, N, 0, 0, 1, 1, 2, 2, 3, N]),
            ([0, 2, 4, 6, 8], [N, 0, 0, 1, 1, 2, 2, 3, 3, N, N, N]),
            ([0, 3, 6, 9, 12], [N, 0, 0, 0, 1, 1, 1, 2, 2, 2, 3, 3]),
            ([-5, -4, -3, -1, 0], [3] + [N] * 11),
            ([10, 12, 14, 16, 18], [N] * 11 + [0]),
            ([15, 17, 19, 21, 23], [N] * 12),
            ([-19, -17, -15, -13, -11], [N] * 12),
        ]
        for bounds, expected in cases:
            with self.subTest(bounds=bounds):
                self.assertEqual(bins_for_cells(bounds, 10), expected)


class GlyphTests(unittest.TestCase):
    def test_render_face_bars(self) -> None:
        data = [0.3, 0.5, 6.4, 5.3, 3.6, 3.6, 3.5, 7.5, 4.0]
        h = Histogram.from_samples(data, 10)
        x_axis = ContinuousAxis.new(0.3, 7.5, 6)
        y_axis = ContinuousAxis.new(0.0, 3.0, 6)
        face = render_face_bars(h.bin_bounds, h.values, x_axis, y_axis, 20, 10)
        expected = "\n".join(
            [
                "       ---          ",
                "       | |          ",
                "       | |          ",
                "--     | |          ",
                " |     | |          ",
                " |     | |          ",
                " |     | |          ",
                " |     | |---- -----",
                " |     | | | | | | |",
                " |     | | | | | | |",
            ]
        )
        self.assertEqual(face, expected)

    def test_render_face_bars_rejects_mismatched_values(self) -> None:
        axis = ContinuousAxis.new(0.0, 1.0)
        with self.assertRaises(PlotDataError):
            render_face_bars([0.0, 0.5, 1.0], [1.0], axis, axis, 10, 5)

    def test_render_face_points(self) -> None:
        data = [(-3.0, 2.3), (-1.6, 5.3), (0.3, 0.7), (4.3, -1.4), (6.4, 4.3), (8.5, 3.7)]
        x_axis = ContinuousAxis.new(-3.575, 9.075, 6)
        y_axis = ContinuousAxis.new(-1.735, 5.635, 6)
        face = render_face_points(data, x_axis, y_axis, 20, 10, PointStyle())
        expected = "\n".join(
            [
                "  ●                 ",
                "                    ",
                "               ●    ",
                "                  ● ",
                "                    ",
                "●                   ",
                "                    ",
                "     ●              ",
                "                    ",
                "                    ",
            ]
        )
        self.assertEqual(face, expected)

    def test_render_face_points_uses_marker_glyph(self) -> None:
        axis = ContinuousAxis.new(0.0, 4.0)
        face = render_face_points([(2.0, 2.0)], axis, axis, 4, 4, PointStyle(marker="cross"))
        self.assertEqual(face.split("\n")[2], " ×  ")

    def test_render_face_line_diagonal(self) -> None:
        axis = ContinuousAxis.new(0.0, 10.0)
        rows = render_face_line([(0.0, 0.0), (10.0, 10.0)], axis, axis, 10, 10).split("\n")
        self.assertEqual(len(rows), 10)
        for i, row in enumerate(rows):
            with self.subTest(row=i):
                self.assertEqual(row, " " * (9 - i) + "/" + " " * i)

    def test_render_face_line_horizontal(self) -> None:
        axis = ContinuousAxis.new(0.0, 10.0)
        rows = render_face_line([(0.0, 5.0), (10.0, 5.0)], axis, axis, 10, 10).split("\n")
        self.assertEqual(rows[5], "-" * 10)
        self.assertEqual(rows[4], " " * 10)

    def test_render_face_line_clips_far_segments(self) -> None:
        axis = ContinuousAxis.new(0.0, 10.0)
        face = render_face_line([(-1e9, 5.0), (1e9, 5.0)], axis, axis, 10, 10)
        self.assertEqual(face.split("\n")[5], "-" * 10)

    def test_segment_glyph(self) -> None:
        self.assertEqual(segment_glyph(10, 1), "-")
        self.assertEqual(segment_glyph(1, 10), "|")
        self.assertEqual(segment_glyph(3, 3), "/")
        self.assertEqual(segment_glyph(3, -3), "\\")


class RenderTextTests(unittest.TestCase):
    def setUp(self) -> None:
        self.axis = ContinuousAxis.new(0.0, 10.0)

    def test_points_overlay_lines(self) -> None:
        plot = Plot.new([(0.0, 5.0), (5.0, 5.0), (10.0, 5.0)], line_style=LineStyle(), point_style=PointStyle())
        row = render_text(plot, self.axis, self.axis, 10, 10).split("\n")[5]
        self.assertEqual(row, "----●----●")

    def test_plot_without_style_is_unsupported(self) -> None:
        with self.assertRaises(UnsupportedRenderError):
            render_text(Plot.new([(1.0, 1.0)]), self.axis, self.axis, 10, 10)

    def test_categorical_representation_is_unsupported(self) -> None:
        with self.assertRaises(UnsupportedRenderError):
            render_text(BarChart(3.0, "a"), self.axis, self.axis, 10, 10)

    def test_face_has_requested_dimensions(self) -> None:
        h = Histogram.from_samples([1.0, 2.0, 2.5, 7.0], 4)
        rows = render_text(h, self.axis, self.axis, 13, 7).split("\n")
        self.assertEqual(len(rows), 7)
        self.assertTrue(all(len(row) == 13 for row in rows))


if __name__ == "__main__":
    unittest.main()
