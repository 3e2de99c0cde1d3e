"""Options for wait_for

Each option is a plain function from WaitOptions to WaitOptions. Options are
applied left to right on top of the defaults, so a later option overrides an
earlier one that sets the same field. Durations are seconds (float) or
``datetime.timedelta``.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any, Callable, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from waitfor.domain.cancel import CancelToken
from waitfor.domain.reporting import default_reporter

logger = logging.getLogger(__name__)

Duration = Union[float, int, timedelta]
Logger = Callable[..., Any]
Reporter = Callable[..., Any]


def _default_logger() -> Logger:
    return logging.getLogger("waitfor").info


class WaitOptions(BaseModel):
    """Resolved settings for one wait_for call.

    Attributes:
        time_limit: Total time budget in seconds
        start_interval: First sleep between attempts in seconds
        max_interval: Upper bound for the sleep between attempts
        backoff: Factor applied to the interval after every attempt (>= 1.0)
        reports: Approximate number of progress reports over the time budget (0 = none)
        reporter: Called as reporter(options, start_time) when a report is due
        logger: printf-style callable, logger(fmt, *args)
        description: Human description of the awaited condition
        cancel: Optional cancellation handle
        exit_on_error: Stop at the first predicate error instead of retrying
    """

    time_limit: float = Field(30 * 60.0, ge=0.0)
    start_interval: float = Field(1.0, ge=0.0)
    max_interval: float = Field(60.0, ge=0.0)
    backoff: float = Field(1.02, ge=1.0)
    reports: int = Field(30, ge=0)
    reporter: Reporter = default_reporter
    logger: Logger = Field(default_factory=_default_logger)
    description: str = "condition"
    cancel: Optional[CancelToken] = None
    exit_on_error: bool = False

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        arbitrary_types_allowed=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _clamp_start_interval(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        try:
            start = float(data.get("start_interval", cls.model_fields["start_interval"].default))
            maximum = float(data.get("max_interval", cls.model_fields["max_interval"].default))
        except (TypeError, ValueError):
            return data
        if start > maximum:
            logger.warning(
                f"start interval {start}s is above max interval {maximum}s, using {maximum}s"
            )
            data = {**data, "start_interval": maximum}
        return data


Option = Callable[[WaitOptions], WaitOptions]


def _seconds(d: Duration) -> float:
    if isinstance(d, timedelta):
        return d.total_seconds()
    return float(d)


def _set(**fields: Any) -> Option:
    def option(opts: WaitOptions) -> WaitOptions:
        return opts.model_copy(update=fields)

    return option


def with_limit(d: Duration) -> Option:
    """Set the maximum total time to try"""
    return _set(time_limit=_seconds(d))


def with_min_interval(d: Duration) -> Option:
    return _set(start_interval=_seconds(d))


def with_max_interval(d: Duration) -> Option:
    return _set(max_interval=_seconds(d))


def with_interval(d: Duration) -> Option:
    """Set both the starting and the maximum interval"""
    seconds = _seconds(d)
    return _set(start_interval=seconds, max_interval=seconds)


def with_backoff(factor: float) -> Option:
    """Set how much the interval grows after each attempt.

    Reasonable values are in the range 1.01 to 1.04; the default is 1.02.
    Values below 1.0 are rejected when the options are resolved.
    """
    return _set(backoff=factor)


def with_logger(f: Logger) -> Option:
    return _set(logger=f)


def with_reporter(f: Reporter) -> Option:
    return _set(reporter=f)


def with_description(s: str) -> Option:
    return _set(description=s)


def with_cancel(token: CancelToken) -> Option:
    return _set(cancel=token)


def exit_on_error(enabled: bool = True) -> Option:
    """Stop waiting at the first error returned by the predicate"""
    return _set(exit_on_error=enabled)


def with_reports(n: int) -> Option:
    """Ask for approximately ``n`` progress reports before timeout (0 disables)"""
    return _set(reports=n)


def resolve_options(*options: Option) -> WaitOptions:
    """Apply options over the defaults and validate the result

    Raises:
        pydantic.ValidationError: If the resolved options are invalid
            (e.g. backoff below 1.0 or a negative duration)
    """
    opts = WaitOptions()
    for option in options:
        opts = option(opts)
    # model_copy skips validation, so validate the final combination once
    return WaitOptions.model_validate({name: getattr(opts, name) for name in WaitOptions.model_fields})
