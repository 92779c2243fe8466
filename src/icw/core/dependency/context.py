"""Cancellation and deadline context for graph builds."""

from __future__ import annotations

import threading
import time

from icw.exceptions import OperationCancelledError


class BuildContext:
    """Deadline and cancellation flag threaded through a graph build.

    Args:
        timeout: Seconds the whole build may take. None for no deadline.
        cancel_event: Event another thread may set to stop the build.
    """

    def __init__(
        self,
        timeout: float | None = None,
        cancel_event: threading.Event | None = None,
    ) -> None:
        self._deadline = time.monotonic() + timeout if timeout is not None else None
        self._cancel_event = cancel_event or threading.Event()

    def cancel(self) -> None:
        self._cancel_event.set()

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def remaining(self) -> float | None:
        """Seconds left before the deadline, or None without a deadline."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def check(self) -> None:
        """Raise if the build was cancelled or ran out of time.

        Raises:
            OperationCancelledError: On cancellation or an expired deadline.
        """
        if self._cancel_event.is_set():
            raise OperationCancelledError("graph build cancelled")
        if self._deadline is not None and time.monotonic() >= self._deadline:
            raise OperationCancelledError("graph build timed out")
