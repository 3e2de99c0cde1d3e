"""Errors raised by wait_for and the probes"""

from datetime import datetime
from typing import Optional


class WaitError(Exception):
    """Base class for errors produced by the polling loop itself"""

    pass


class WaitCancelledError(WaitError):
    """Default error carried by a CancelToken"""

    pass


class WaitTimeoutError(WaitError, TimeoutError):
    """The time budget ran out before the condition was observed

    Attributes:
        start: Wall-clock time the wait started
        end: Wall-clock time the wait gave up
        description: Human description of the condition
        elapsed: Seconds between start and end
        cause: Last error returned by the predicate, if any
    """

    def __init__(
        self,
        start: datetime,
        end: datetime,
        description: str,
        elapsed: float,
        cause: Optional[BaseException] = None,
    ):
        self.start = start
        self.end = end
        self.description = description
        self.elapsed = elapsed
        self.cause = cause
        reason = str(cause) if cause is not None else "not ok"
        super().__init__(
            f"{start:%H:%M:%S} to {end:%H:%M:%S} wait for {description} "
            f"gave up after {format_duration(elapsed)}: {reason}"
        )


class ProbeError(Exception):
    """A probe observed that its condition does not hold (yet)"""

    pass


def format_duration(seconds: float) -> str:
    """Format seconds the way a person reads them: 850ms, 12.5s, 3m4.2s"""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    if seconds < 60:
        return f"{seconds:.3g}s"
    minutes, rest = divmod(round(seconds, 1), 60)
    rest = f"{rest:.1f}".rstrip("0").rstrip(".")
    if minutes < 60:
        return f"{int(minutes)}m{rest}s"
    hours, minutes = divmod(int(minutes), 60)
    return f"{hours}h{minutes}m{rest}s"
