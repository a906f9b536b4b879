"""Interval coverage calculator.

This service measures which fraction of an observation window is covered by
at least one container up-interval. It backs the availability variable.
"""

from collections.abc import Iterable
from datetime import datetime

from src.domain.entities.telemetry import ServiceContainerMetric


class IntervalCoverageCalculator:
    """Computes the percentage of a window covered by a set of intervals.

    Algorithm:
    1. Split the window into one-second buckets (window length + 1 buckets)
    2. Clip every interval to the window; an open interval ends at window_end
    3. Map each clipped interval to an inclusive range of bucket indices
    4. Merge overlapping/adjacent ranges and count the covered buckets
    5. Return 100 * covered / total buckets

    The result equals that of a per-second coverage mask; the cost is
    O(n log n) in the number of intervals, whatever the window length.
    """

    def calculate_coverage(
        self,
        intervals: Iterable[ServiceContainerMetric],
        window_start: datetime,
        window_end: datetime,
    ) -> float:
        """Compute the covered percentage of [window_start, window_end].

        Args:
            intervals: Container up-intervals (may overlap, may be open-ended)
            window_start: Start of the observation window
            window_end: End of the observation window

        Returns:
            Coverage percentage (0.0-100.0)

        Raises:
            ValueError: If window_end is before window_start
        """
        if window_end < window_start:
            raise ValueError("window_end must not be before window_start")

        window_seconds = int((window_end - window_start).total_seconds()) + 1

        ranges = []
        for interval in intervals:
            bucket_range = self._bucket_range(interval, window_start, window_end)
            if bucket_range is not None:
                ranges.append(bucket_range)

        covered = self._count_covered_buckets(ranges)
        return 100.0 * covered / window_seconds

    @staticmethod
    def _bucket_range(
        interval: ServiceContainerMetric,
        window_start: datetime,
        window_end: datetime,
    ) -> tuple[int, int] | None:
        """Clip an interval to the window and return its inclusive bucket range.

        Returns:
            (first_bucket, last_bucket), or None if nothing of the interval
            falls inside the window
        """
        start = max(window_start, interval.start_time)
        end = interval.stop_time.clip(window_end)
        if start > end:
            return None

        first = int((start - window_start).total_seconds())
        last = int((end - window_start).total_seconds())
        return (first, last)

    @staticmethod
    def _count_covered_buckets(ranges: list[tuple[int, int]]) -> int:
        """Count buckets covered by the union of inclusive index ranges."""
        if not ranges:
            return 0

        ranges.sort()
        covered = 0
        current_first, current_last = ranges[0]

        for first, last in ranges[1:]:
            if first > current_last + 1:
                covered += current_last - current_first + 1
                current_first, current_last = first, last
            else:
                current_last = max(current_last, last)

        covered += current_last - current_first + 1
        return covered
