from __future__ import annotations

from itertools import islice
import math
import sys
import unittest

from cellplot.errors import InvalidRangeError
from cellplot.scales import (
    TICK_RESOLUTION,
    format_tick,
    nice_steps,
    pad_range_to_zero,
    plan_ticks,
    round_half_away,
    round_tick,
    tick_count,
    tick_step_for_range,
)


class TickPlanningTests(unittest.TestCase):
    def test_plan_ticks_reference_ranges(self) -> None:
        cases = [
            ((0.0, 3.0, 6), [0.0, 1.0, 2.0, 3.0]),
            ((0.0, 100.0, 6), [0.0, 20.0, 40.0, 60.0, 80.0, 100.0]),
            ((-10.0, -3.0, 6), [-10.0, -8.0, -6.0, -4.0]),
            ((1.0, 1.5, 6), [1.0, 1.1, 1.2, 1.3, 1.4, 1.5]),
            ((0.0, 1.0, 6), [0.0, 0.2, 0.4, 0.6, 0.8, 1.0]),
            ((0.0, 0.3, 4), [0.0, 0.1, 0.2, 0.3]),
            ((0.0, 12.0, 6), [0.0, 4.0, 8.0, 12.0]),
            ((0.0, 15.0, 6), [0.0, 5.0, 10.0, 15.0]),
            ((0.0, 24.0, 6), [0.0, 5.0, 10.0, 15.0, 20.0]),
            ((0.0, 3475.0, 6), [0.0, 1000.0, 2000.0, 3000.0]),
        ]
        for (lower, upper, max_ticks), expected in cases:
            with self.subTest(lower=lower, upper=upper, max_ticks=max_ticks):
                self.assertEqual(plan_ticks(lower, upper, max_ticks), expected)

    def test_ticks_are_ascending_inside_range_and_bounded(self) -> None:
        for lower, upper in [(-7.93, 15.58), (0.001, 0.0042), (-1e6, 3.5e6), (120.0, 121.0)]:
            ticks = plan_ticks(lower, upper, 6)
            with self.subTest(lower=lower, upper=upper):
                self.assertLessEqual(len(ticks), 6)
                self.assertEqual(ticks, sorted(set(ticks)))
                self.assertTrue(all(lower <= t <= upper for t in ticks))

    def test_narrow_and_tiny_ranges_give_distinct_multiples_of_a_nice_step(self) -> None:
        ranges = [
            (1.0, 1.0 + 1e-15),
            (1.0, 1.0 + 4.44e-16),
            (123.456, 123.456 + 1e-12),
            (1e6, 1e6 + 1e-9),
            (1e15, 1e15 + 3.0),
            (-1e9 - 1e-6, -1e9),
            (0.0, 1e-13),
            (-1e-14, 1e-14),
            (1e-20, 2e-20),
            (-3e-300, 5e-300),
        ]
        for lower, upper in ranges:
            with self.subTest(lower=lower, upper=upper):
                step = tick_step_for_range(lower, upper, 6)
                ticks = plan_ticks(lower, upper, 6)
                self.assertEqual(ticks, sorted(set(ticks)))
                self.assertLessEqual(len(ticks), 6)
                self.assertTrue(all(lower <= t <= upper for t in ticks))
                mantissa = step / 10.0 ** math.floor(math.log10(step))
                self.assertTrue(any(math.isclose(mantissa, base) for base in (1.0, 2.0, 4.0, 5.0, 10.0)))
                for t in ticks:
                    nearest = round(t / step) * step
                    self.assertLessEqual(abs(t - nearest), 0.5 * TICK_RESOLUTION + 4 * math.ulp(t))

    def test_narrow_range_does_not_repeat_ticks(self) -> None:
        self.assertEqual(plan_ticks(1.0, 1.0 + 1e-15, 6), [1.0, 1.0 + 1e-15])

    def test_steps_finer_than_tick_resolution_are_never_chosen(self) -> None:
        self.assertEqual(tick_count(0.0, 1e-15, 2e-16), sys.maxsize)
        self.assertGreaterEqual(tick_step_for_range(1.0, 1.0 + 1e-15, 6), TICK_RESOLUTION * (1.0 - 1e-9))

    def test_range_straddling_zero_contains_exact_zero(self) -> None:
        self.assertIn(0.0, plan_ticks(-7.93, 15.58, 6))

    def test_far_from_zero_range_still_finds_ticks(self) -> None:
        self.assertEqual(plan_ticks(1_000_000.0, 1_000_003.0, 6), [1_000_000.0, 1_000_001.0, 1_000_002.0, 1_000_003.0])

    def test_single_tick_request_stops_at_zero(self) -> None:
        self.assertEqual(plan_ticks(-1.0, 1.0, 1), [0.0])

    def test_nice_steps_sequence(self) -> None:
        self.assertEqual(list(islice(nice_steps(1.0), 7)), [1.0, 2.0, 4.0, 5.0, 10.0, 20.0, 40.0])
        self.assertEqual(list(islice(nice_steps(3.0), 5)), [4.0, 5.0, 10.0, 20.0, 40.0])
        self.assertEqual(list(islice(nice_steps(8.0), 3)), [10.0, 20.0, 40.0])

    def test_nice_steps_rejects_non_positive_start(self) -> None:
        with self.assertRaises(ValueError):
            next(nice_steps(0.0))

    def test_tick_step_for_range(self) -> None:
        self.assertAlmostEqual(tick_step_for_range(0.0, 0.06, 6), 0.02)
        self.assertEqual(tick_step_for_range(-7.93, 15.58, 6), 5.0)
        self.assertEqual(tick_step_for_range(0.0, 14.0, 6), 4.0)

    def test_tick_count(self) -> None:
        self.assertEqual(tick_count(-7.93, 15.58, 4.0), 5)
        self.assertEqual(tick_count(-8.0, 15.58, 4.0), 6)
        self.assertEqual(tick_count(-8.0, 15.58, 5.0), 5)

    def test_invalid_requests_raise(self) -> None:
        for args in [(1.0, 1.0, 6), (2.0, 1.0, 6), (0.0, float("nan"), 6), (float("-inf"), 1.0, 6), (0.0, 1.0, 0), (0.0, 1.0, True)]:
            with self.subTest(args=args):
                with self.assertRaises(InvalidRangeError):
                    plan_ticks(*args)


class RoundingAndFormattingTests(unittest.TestCase):
    def test_round_half_away_from_zero(self) -> None:
        self.assertEqual(round_half_away(2.5), 3)
        self.assertEqual(round_half_away(-2.5), -3)
        self.assertEqual(round_half_away(0.5), 1)
        self.assertEqual(round_half_away(2.4999), 2)
        self.assertEqual(round_half_away(-0.4), 0)

    def test_round_tick_removes_float_noise(self) -> None:
        self.assertEqual(round_tick(0.1 * 3), 0.3)
        self.assertEqual(round_tick(0.1 * 6), 0.6)

    def test_format_tick(self) -> None:
        self.assertEqual(format_tick(0.0), "0")
        self.assertEqual(format_tick(-0.0), "0")
        self.assertEqual(format_tick(0.2), "0.2")
        self.assertEqual(format_tick(100.0), "100")
        self.assertEqual(format_tick(-4.0), "-4")
        self.assertEqual(format_tick(1.5), "1.5")
        self.assertEqual(format_tick(1e-7), "0.0000001")
        self.assertEqual(format_tick(1e16), "10000000000000000")

    def test_pad_range_to_zero(self) -> None:
        self.assertEqual(pad_range_to_zero(2.0, 2.0), (0.0, 2.0))
        self.assertEqual(pad_range_to_zero(-2.0, 2.0), (-2.0, 2.0))
        self.assertEqual(pad_range_to_zero(-2.0, -2.0), (-2.0, 0.0))


if __name__ == "__main__":
    unittest.main()
