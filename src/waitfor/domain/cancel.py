"""Cancellation handle for wait_for"""

from __future__ import annotations

import logging
import threading
from typing import Optional

from waitfor.domain.errors import WaitCancelledError

logger = logging.getLogger(__name__)


class CancelToken:
    """External signal that aborts a running wait

    The token is created by the caller before the wait starts and may be
    cancelled from any thread. A wait blocked on the token wakes up as soon as
    it is cancelled and raises ``token.error`` unchanged.
    """

    def __init__(self):
        self._event = threading.Event()
        self._error: Optional[BaseException] = None
        self._timer: Optional[threading.Timer] = None
        self._lock = threading.Lock()

    @classmethod
    def with_timeout(cls, seconds: float) -> "CancelToken":
        """Create a token that cancels itself after ``seconds``"""
        token = cls()
        timer = threading.Timer(seconds, token.cancel, args=(WaitCancelledError("deadline exceeded"),))
        timer.daemon = True
        token._timer = timer
        timer.start()
        return token

    def cancel(self, error: Optional[BaseException] = None) -> None:
        """Cancel the token. Only the first call sets the error."""
        with self._lock:
            if self._event.is_set():
                return
            self._error = error if error is not None else WaitCancelledError("wait cancelled")
            self._event.set()
        logger.debug(f"Cancel token fired: {self._error}")
        if self._timer is not None:
            self._timer.cancel()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def error(self) -> Optional[BaseException]:
        """Error to surface on cancellation (None while not cancelled)"""
        return self._error

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until cancelled or ``timeout`` elapses

        Returns:
            True if the token was cancelled
        """
        return self._event.wait(timeout)
