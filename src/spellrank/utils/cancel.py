from __future__ import annotations

import threading
import time

from spellrank.utils.errors import Cancelled


class CancelToken:
    """Cancellation signal shared between a caller and a running scan.

    Fires when cancel() is called or, if given, once deadline_s seconds
    have passed since construction. Safe to share across worker threads.
    """

    def __init__(self, deadline_s: float | None = None):
        self._event = threading.Event()
        self._deadline = None if deadline_s is None else time.monotonic() + float(deadline_s)

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        if self._deadline is not None and time.monotonic() >= self._deadline:
            self._event.set()
            return True
        return False

    def raise_if_cancelled(self) -> None:
        if self.cancelled:
            raise Cancelled("suggestion scan cancelled")
