"""Interval scheduling for wait_for"""


class IntervalSchedule:
    """Virtual schedule of attempt times with exponential backoff.

    The next attempt is due at ``prior + interval`` where ``prior`` is the time
    of the previous attempt, never later than ``deadline``. All times are
    ``time.monotonic()`` seconds.
    """

    def __init__(self, start: float, deadline: float, interval: float, max_interval: float, backoff: float):
        self.prior = start
        self.deadline = deadline
        self.interval = interval
        self.max_interval = max_interval
        self.backoff = backoff

    def next_sleep(self, now: float) -> float:
        """Advance the schedule and return seconds to sleep (negative when behind)"""
        next_at = self.prior + self.interval
        self.prior = now
        self.interval = min(self.interval * self.backoff, self.max_interval)
        if next_at > self.deadline:
            next_at = self.deadline
        return next_at - now
