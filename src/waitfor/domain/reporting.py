"""Progress reporting for wait_for"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from waitfor.domain.options import WaitOptions

REPORT_FORMAT = "%s-%s wait for %s, in progress"


def default_reporter(opts: "WaitOptions", start_time: datetime) -> None:
    """Log '<start>-<now> wait for <description>, in progress' through opts.logger"""
    opts.logger(
        REPORT_FORMAT,
        start_time.astimezone(timezone.utc).strftime("%H:%M:%S"),
        datetime.now(timezone.utc).strftime("%H:%M:%S"),
        opts.description,
    )


class ReportCadence:
    """Spreads about ``reports`` progress reports evenly over the time budget

    A report is due when (given + 1) / (reports + 1) < elapsed / budget, so the
    number of reports depends on wall-clock time rather than on how many
    attempts were made.
    """

    def __init__(self, reports: int, budget: float):
        self.reports = reports
        self.budget = budget
        self.given = 0

    def due(self, elapsed: float) -> bool:
        if self.reports <= 0 or self.budget <= 0:
            return False
        return (self.given + 1) / (self.reports + 1) < elapsed / self.budget

    def mark(self) -> None:
        self.given += 1
