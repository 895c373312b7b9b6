"""
Progress reporting for base-count limited sampling.

Reports are emitted whenever the running total lands on an exact multiple of
the reporting interval, and always once the target has been reached.
"""

import time
from typing import Callable, Optional

from .types import ProgressSnapshot

PROGRESS_INTERVAL = 100_000  # Report every 100,000 bases

_ABBREVIATIONS = (
    (1_000_000_000, "G"),
    (1_000_000, "M"),
    (1_000, "K"),
)


def format_abbreviated(value: int) -> str:
    """Abbreviate a base count using integer division, e.g. 2_500_000 -> '2M'."""
    for scale, suffix in _ABBREVIATIONS:
        if value >= scale:
            return f"{value // scale}{suffix}"
    return str(value)


def percent_complete(total_bases: int, target_bases: int) -> int:
    """Percentage of the target reached, truncated and limited to 100."""
    if target_bases <= 0:
        return 100
    return min(100, int(total_bases / target_bases * 100))


def format_progress(
    total_bases: int, target_bases: int, rate: Optional[int] = None
) -> str:
    """Format progress message for consistent logging."""
    base = (
        f"Progress: {percent_complete(total_bases, target_bases)}% "
        f"({format_abbreviated(total_bases)}/{format_abbreviated(target_bases)} bases)"
    )
    if rate is not None:
        base += f" | Rate: {rate} bases/sec"
    return base


class ProgressReporter:
    """
    Emits progress lines while records are being sampled.

    The throughput in each line is measured since the previous emitted report,
    so the snapshot only moves when a line is actually emitted.
    """

    def __init__(
        self,
        target_bases: int,
        interval: int = PROGRESS_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
        emit: Callable[[str], None] = print,
    ):
        self.target_bases = target_bases
        self.interval = interval
        self.clock = clock
        self.emit = emit
        self.snapshot = ProgressSnapshot(last_report_time=clock())

    def should_report(self, total_bases: int) -> bool:
        return total_bases % self.interval == 0 or total_bases >= self.target_bases

    def rate_since_last_report(self, total_bases: int, now: float) -> int:
        # Millisecond resolution; anything shorter counts as no elapsed time
        elapsed = round(now - self.snapshot.last_report_time, 3)
        if elapsed <= 0:
            return 0
        return round((total_bases - self.snapshot.last_report_total) / elapsed)

    def update(self, total_bases: int) -> Optional[str]:
        """Report progress for the running total, returning the emitted line if any."""
        if not self.should_report(total_bases):
            return None

        now = self.clock()
        rate = self.rate_since_last_report(total_bases, now)
        message = format_progress(total_bases, self.target_bases, rate)
        self.emit(message)

        self.snapshot = ProgressSnapshot(
            last_report_time=now, last_report_total=total_bases
        )
        return message
