"""Cooperative cancellation for long-running planning calls."""

from __future__ import annotations

import threading


class PackingCancelledError(Exception):
    """Raised when a planning run is stopped through its cancellation token."""

    def __init__(self, message: str = "Packing was cancelled") -> None:
        self.message = message
        super().__init__(message)


class CancellationToken:
    """Thread-safe flag checked by the engine between bands.

    The token is set from any thread (typically the one that submitted a
    background job); the engine polls it and stops before the next band.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request cancellation."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        """Raise PackingCancelledError if cancellation was requested."""
        if self._event.is_set():
            raise PackingCancelledError()
