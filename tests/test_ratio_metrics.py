from __future__ import annotations

import unittest

from signalnoise.domain.models import RatioMetrics, Task, TaskType
from signalnoise.domain.ratio_metrics import (
    NO_TASKS_MESSAGE,
    compute_ratio_metrics,
    format_percent,
    format_tenths,
    ratio_string,
)


def _tasks(signal: int, signal_done: int, noise: int = 0, noise_done: int = 0) -> list[Task]:
    tasks: list[Task] = []
    for idx in range(signal):
        tasks.append(Task(id=f"s{idx}", title=f"signal {idx}", type=TaskType.SIGNAL, date="2025-01-01", done=idx < signal_done))
    for idx in range(noise):
        tasks.append(Task(id=f"n{idx}", title=f"noise {idx}", type=TaskType.NOISE, date="2025-01-01", done=idx < noise_done))
    return tasks


class TestFormatting(unittest.TestCase):
    def test_format_percent_rounds_half_up(self) -> None:
        self.assertEqual("63", format_percent(62.5))
        self.assertEqual("3", format_percent(2.5))
        self.assertEqual("1", format_percent(0.5))
        self.assertEqual("67", format_percent(200 / 3))
        self.assertEqual("0", format_percent(0.0))
        self.assertEqual("100", format_percent(100.0))

    def test_format_tenths_rounds_half_up(self) -> None:
        self.assertEqual("33.3", format_tenths(100 / 3))
        self.assertEqual("66.7", format_tenths(200 / 3))
        self.assertEqual("12.5", format_tenths(12.45))
        self.assertEqual("0.0", format_tenths(0.0))
        self.assertEqual("100.0", format_tenths(100.0))

    def test_ratio_string(self) -> None:
        self.assertEqual("63:38", ratio_string(62.5, 37.5))


class TestComputeRatioMetrics(unittest.TestCase):
    def test_empty_list_returns_zero_metrics(self) -> None:
        metrics = compute_ratio_metrics([])
        self.assertEqual(RatioMetrics(summary_message=NO_TASKS_MESSAGE), metrics)
        self.assertEqual("", metrics.planned_ratio_warning)
        self.assertEqual("", metrics.completion_warning)
        self.assertEqual("", metrics.effective_ratio_warning)

    def test_planned_percents_sum_to_100(self) -> None:
        for signal in range(0, 7):
            for noise in range(0, 7):
                if signal + noise == 0:
                    continue
                metrics = compute_ratio_metrics(_tasks(signal, 0, noise, 0))
                self.assertAlmostEqual(100.0, metrics.planned_signal_percent + metrics.planned_noise_percent)

    def test_no_signal_tasks_keeps_completion_at_zero(self) -> None:
        metrics = compute_ratio_metrics(_tasks(0, 0, 4, 3))
        self.assertEqual(0, metrics.signal_total)
        self.assertEqual(0.0, metrics.completion_signal_percent)
        self.assertAlmostEqual(75.0, metrics.completion_noise_percent)
        self.assertEqual("", metrics.completion_warning)

    def test_all_signal_example(self) -> None:
        metrics = compute_ratio_metrics(_tasks(10, 8))
        self.assertEqual(10, metrics.total)
        self.assertAlmostEqual(100.0, metrics.planned_signal_percent)
        self.assertAlmostEqual(0.0, metrics.planned_noise_percent)
        self.assertAlmostEqual(80.0, metrics.completion_signal_percent)
        self.assertAlmostEqual(80.0, metrics.effective_signal_percent)
        self.assertEqual("", metrics.completion_warning)
        self.assertEqual("ℹ️ Very signal-focused (100:0). Some noise tasks are normal.", metrics.planned_ratio_warning)
        self.assertEqual("✅ Excellent! Effective ratio is 100:0.", metrics.effective_ratio_warning)
        self.assertEqual(
            "🎉 Excellent work! You planned 100:0 and executed 100:0. Keep it up!",
            metrics.summary_message,
        )

    def test_mixed_example(self) -> None:
        metrics = compute_ratio_metrics(_tasks(8, 6, 2, 2))
        self.assertEqual(10, metrics.total)
        self.assertEqual(6, metrics.signal_done)
        self.assertEqual(2, metrics.noise_done)
        self.assertAlmostEqual(80.0, metrics.planned_signal_percent)
        self.assertEqual("✅ Good balance (80:20). Close to 80:20 goal.", metrics.planned_ratio_warning)
        self.assertAlmostEqual(75.0, metrics.completion_signal_percent)
        self.assertAlmostEqual(100.0, metrics.completion_noise_percent)
        self.assertEqual("⚠️ Completing more noise (100%) than signal (75%).", metrics.completion_warning)
        self.assertAlmostEqual(60.0, metrics.effective_signal_percent)
        self.assertAlmostEqual(20.0, metrics.effective_noise_percent)
        self.assertEqual("✅ Good effective ratio (75:25). Close to 80:20 goal!", metrics.effective_ratio_warning)
        self.assertIn("80:20", metrics.summary_message)
        self.assertIn("75:25", metrics.summary_message)
        self.assertEqual(
            "🎉 Excellent work! You planned 80:20 and executed 75:25. Keep it up!",
            metrics.summary_message,
        )

    def test_planned_too_much_noise(self) -> None:
        metrics = compute_ratio_metrics(_tasks(1, 0, 1, 0))
        self.assertEqual("⚠️ Planned too much noise (50:50). Goal is 80:20.", metrics.planned_ratio_warning)

    def test_planned_boundaries_are_good_balance(self) -> None:
        seventy = compute_ratio_metrics(_tasks(7, 0, 3, 0))
        ninety = compute_ratio_metrics(_tasks(9, 0, 1, 0))
        self.assertTrue(seventy.planned_ratio_warning.startswith("✅ Good balance (70:30)"))
        self.assertTrue(ninety.planned_ratio_warning.startswith("✅ Good balance (90:10)"))

    def test_completion_signal_ahead(self) -> None:
        metrics = compute_ratio_metrics(_tasks(4, 3, 2, 1))
        self.assertEqual(
            "✅ Good focus! Signal completion (75%) ahead of noise (50%).",
            metrics.completion_warning,
        )

    def test_completion_gap_has_no_warning(self) -> None:
        equal = compute_ratio_metrics(_tasks(2, 1, 2, 1))
        self.assertEqual("", equal.completion_warning)

        # noise 60% vs signal 50%: above signal but within the 15 point margin
        within_margin = compute_ratio_metrics(_tasks(2, 1, 5, 3))
        self.assertAlmostEqual(60.0, within_margin.completion_noise_percent)
        self.assertEqual("", within_margin.completion_warning)

    def test_effective_ratio_can_differ_from_100(self) -> None:
        metrics = compute_ratio_metrics(_tasks(4, 1, 4, 1))
        self.assertAlmostEqual(12.5, metrics.effective_signal_percent)
        self.assertAlmostEqual(12.5, metrics.effective_noise_percent)

    def test_effective_alert_and_low_summary(self) -> None:
        metrics = compute_ratio_metrics(_tasks(1, 1, 1, 1))
        self.assertEqual("⚠️ Actual work split was 50:50, not 80:20.", metrics.effective_ratio_warning)
        self.assertEqual(
            "💡 You planned 50:50, but executed 50:50. Try shifting focus to Signal tasks tomorrow.",
            metrics.summary_message,
        )

    def test_good_progress_summary(self) -> None:
        metrics = compute_ratio_metrics(_tasks(2, 2, 1, 1))
        self.assertEqual(
            "👍 Good progress! You planned 67:33 and executed 67:33. Try to focus more on Signal tasks.",
            metrics.summary_message,
        )
        self.assertEqual("⚠️ Actual work split was 67:33, not 80:20.", metrics.effective_ratio_warning)

    def test_nothing_done_summary(self) -> None:
        metrics = compute_ratio_metrics(_tasks(3, 0, 1, 0))
        self.assertEqual("", metrics.effective_ratio_warning)
        self.assertEqual(
            "You have 4 tasks planned (75% Signal, 25% Noise). Start checking them off!",
            metrics.summary_message,
        )

    def test_compute_is_deterministic(self) -> None:
        tasks = tuple(_tasks(5, 2, 3, 1))
        first = compute_ratio_metrics(tasks)
        second = compute_ratio_metrics(tasks)
        self.assertEqual(first, second)
        self.assertEqual(repr(first), repr(second))


if __name__ == "__main__":
    unittest.main()
