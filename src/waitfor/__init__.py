"""waitfor - poll a condition with backoff, progress reports and cancellation"""

from waitfor.application.waiter import wait_for
from waitfor.domain.cancel import CancelToken
from waitfor.domain.errors import ProbeError, WaitCancelledError, WaitError, WaitTimeoutError
from waitfor.domain.options import (
    WaitOptions,
    exit_on_error,
    resolve_options,
    with_backoff,
    with_cancel,
    with_description,
    with_interval,
    with_limit,
    with_logger,
    with_max_interval,
    with_min_interval,
    with_reporter,
    with_reports,
)

__all__ = [
    "wait_for",
    "CancelToken",
    "WaitOptions",
    "resolve_options",
    "with_limit",
    "with_min_interval",
    "with_max_interval",
    "with_interval",
    "with_backoff",
    "with_logger",
    "with_reporter",
    "with_description",
    "with_cancel",
    "exit_on_error",
    "with_reports",
    "WaitError",
    "WaitTimeoutError",
    "WaitCancelledError",
    "ProbeError",
]
