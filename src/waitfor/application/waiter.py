"""The polling loop behind wait_for"""

from __future__ import annotations

import logging
import time
from datetime import datetime
from typing import Callable, Optional, Tuple, Union

from waitfor.domain.errors import WaitTimeoutError
from waitfor.domain.options import Option, WaitOptions, resolve_options
from waitfor.domain.reporting import ReportCadence
from waitfor.domain.schedule import IntervalSchedule

logger = logging.getLogger(__name__)

PredicateResult = Union[bool, Tuple[bool, Optional[BaseException]]]
Predicate = Callable[[], PredicateResult]


def wait_for(predicate: Predicate, *options: Option) -> None:
    """Call ``predicate`` repeatedly until it reports success.

    The predicate returns an ``(ok, error)`` pair (tuple or list) or a bare bool. Between calls the
    loop sleeps for an interval that starts at the configured start interval
    and grows by the backoff factor up to the max interval.

    Returns None when the predicate returns ``(True, None)``.

    Raises:
        The predicate's own error when it returns ``(True, error)``, or
            ``(False, error)`` with exit_on_error enabled.
        WaitTimeoutError: When the time limit passes first. It wraps the last
            error returned by the predicate, if any.
        The cancel token's error when the token fires first.
        pydantic.ValidationError: When the options are invalid.
        TypeError: When the predicate returns anything else.
    """
    opts = resolve_options(*options)
    _Session(opts).run(predicate)


class _Session:
    """State of a single wait_for call"""

    def __init__(self, opts: WaitOptions):
        self.opts = opts
        self.start_time = datetime.now().astimezone()
        self.start = time.monotonic()
        self.deadline = self.start + opts.time_limit
        self.schedule = IntervalSchedule(
            start=self.start,
            deadline=self.deadline,
            interval=opts.start_interval,
            max_interval=opts.max_interval,
            backoff=opts.backoff,
        )
        self.cadence = ReportCadence(opts.reports, opts.time_limit)

    def run(self, predicate: Predicate) -> None:
        opts = self.opts
        attempts = 0
        while True:
            ok, err = _call(predicate)
            attempts += 1
            if ok:
                if err is not None:
                    raise err
                logger.debug(f"Wait for {opts.description} done after {attempts} attempt(s)")
                return
            if err is not None:
                if opts.exit_on_error:
                    raise err
                logger.debug(f"Wait for {opts.description}, attempt {attempts}: {err}")

            now = time.monotonic()
            if now >= self.deadline:
                raise WaitTimeoutError(
                    start=self.start_time,
                    end=datetime.now().astimezone(),
                    description=opts.description,
                    elapsed=now - self.start,
                    cause=err,
                ) from err

            if self.cadence.due(now - self.start):
                opts.reporter(opts, self.start_time)
                self.cadence.mark()
                now = time.monotonic()

            sleep_for = self.schedule.next_sleep(now)
            if sleep_for < 0:
                continue
            self._sleep(sleep_for)

    def _sleep(self, seconds: float) -> None:
        token = self.opts.cancel
        if token is None:
            time.sleep(seconds)
            return
        if token.wait(seconds):
            raise token.error


def _call(predicate: Predicate) -> Tuple[bool, Optional[BaseException]]:
    result = predicate()
    if isinstance(result, bool):
        return result, None
    if isinstance(result, (tuple, list)) and len(result) == 2:
        ok, err = result
        return bool(ok), err
    raise TypeError(f"predicate must return a bool or an (ok, error) pair, got {result!r}")
