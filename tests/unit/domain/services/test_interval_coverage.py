"""Unit tests for IntervalCoverageCalculator service."""

from datetime import datetime, timedelta, timezone

import pytest

from src.domain.entities.telemetry import (
    UNBOUNDED,
    Bounded,
    ServiceContainerMetric,
)
from src.domain.services.interval_coverage import IntervalCoverageCalculator

MAX_DELTA = 0.5

WINDOW_END = datetime(2019, 3, 1, 12, 0, 0, tzinfo=timezone.utc)
WINDOW_START = WINDOW_END - timedelta(seconds=600)


def intervals(times: list[tuple[int, int]]) -> list[ServiceContainerMetric]:
    """Build closed intervals from (start, end) offsets in seconds from WINDOW_START."""
    return [
        ServiceContainerMetric(
            container_id="C01",
            start_time=WINDOW_START + timedelta(seconds=start),
            stop_time=Bounded(WINDOW_START + timedelta(seconds=end)),
        )
        for start, end in times
    ]


class TestIntervalCoverageCalculator:
    """Tests for IntervalCoverageCalculator service."""

    @pytest.fixture
    def calculator(self):
        """Create calculator instance for testing."""
        return IntervalCoverageCalculator()

    def coverage(self, calculator, times):
        return calculator.calculate_coverage(intervals(times), WINDOW_START, WINDOW_END)

    def test_full_window(self, calculator):
        assert self.coverage(calculator, [(0, 600)]) == pytest.approx(100.0, abs=MAX_DELTA)

    def test_interval_starting_before_window(self, calculator):
        assert self.coverage(calculator, [(-150, 600)]) == pytest.approx(
            100.0, abs=MAX_DELTA
        )

    def test_contiguous_intervals(self, calculator):
        assert self.coverage(calculator, [(0, 300), (300, 600)]) == pytest.approx(
            100.0, abs=MAX_DELTA
        )

    def test_split_intervals_match_single_interval(self, calculator):
        """Splitting at exact boundaries does not change the coverage."""
        single = self.coverage(calculator, [(0, 600)])
        split = self.coverage(
            calculator, [(0, 100), (100, 200), (200, 400), (400, 600)]
        )
        assert split == single

    def test_two_separate_intervals(self, calculator):
        assert self.coverage(calculator, [(0, 150), (450, 600)]) == pytest.approx(
            50.0, abs=MAX_DELTA
        )

    def test_overlapping_intervals(self, calculator):
        """0..200 + 300..450 + 500..600 = 450/600."""
        times = [
            (-50, 50),
            (0, 100),
            (50, 150),
            (100, 200),
            (300, 400),
            (350, 450),
            (500, 600),
            (550, 650),
        ]
        assert self.coverage(calculator, times) == pytest.approx(75.0, abs=MAX_DELTA)

    def test_overlap_is_idempotent(self, calculator):
        once = self.coverage(calculator, [(0, 300)])
        twice = self.coverage(calculator, [(0, 300), (0, 300), (100, 200)])
        assert once == twice

    def test_no_intervals(self, calculator):
        assert calculator.calculate_coverage([], WINDOW_START, WINDOW_END) == 0.0

    def test_intervals_outside_window(self, calculator):
        assert self.coverage(calculator, [(-300, -100), (700, 900)]) == 0.0

    def test_unbounded_interval_covers_to_window_end(self, calculator):
        scms = [ServiceContainerMetric(container_id="C01", start_time=WINDOW_START)]

        assert scms[0].stop_time is UNBOUNDED
        assert calculator.calculate_coverage(scms, WINDOW_START, WINDOW_END) == 100.0

    def test_unbounded_interval_starting_mid_window(self, calculator):
        scms = [
            ServiceContainerMetric(
                container_id="C01",
                start_time=WINDOW_START + timedelta(seconds=300),
                stop_time=UNBOUNDED,
            )
        ]

        # buckets 300..600 of 0..600
        assert calculator.calculate_coverage(
            scms, WINDOW_START, WINDOW_END
        ) == pytest.approx(301 / 601 * 100)

    def test_single_second_window(self, calculator):
        scms = intervals([(0, 0)])

        assert calculator.calculate_coverage(scms, WINDOW_START, WINDOW_START) == 100.0

    def test_window_end_before_start_raises(self, calculator):
        with pytest.raises(ValueError, match="window_end"):
            calculator.calculate_coverage([], WINDOW_END, WINDOW_START)

    def test_large_window(self, calculator):
        """A year-long window with one hour of downtime."""
        start = WINDOW_START
        end = start + timedelta(days=365)
        down = start + timedelta(days=100)
        scms = [
            ServiceContainerMetric(
                container_id="C01", start_time=start, stop_time=Bounded(down)
            ),
            ServiceContainerMetric(
                container_id="C01", start_time=down + timedelta(hours=1)
            ),
        ]

        coverage = calculator.calculate_coverage(scms, start, end)

        total = 365 * 86400 + 1
        assert coverage == pytest.approx(100.0 * (total - 3599) / total)
