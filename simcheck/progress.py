"""
Progress reporting for the image similarity checker.

ProgressReporter is an observable integer cell (0-100) owned by an engine
instance. Every write notifies the registered observers synchronously, on
the thread that performed the write and in the order the values were
written. Marshaling notifications onto a UI thread is the caller's job.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable

from .config import PROGRESS_MAX

_logger = logging.getLogger(__name__)

ProgressObserver = Callable[[int], None]


class ProgressReporter:
    """
    Holds the current progress value and fans writes out to observers.

    Observers are plain callables taking the new value. Values are
    delivered without coalescing or debouncing.
    """

    def __init__(self):
        self._value = 0
        self._observers: list[ProgressObserver] = []
        self._lock = threading.Lock()

    @property
    def value(self) -> int:
        """Snapshot of the most recently written value."""
        with self._lock:
            return self._value

    def subscribe(self, observer: ProgressObserver) -> ProgressObserver:
        """
        Register an observer.

        Returns:
            The observer, so it can be used as a decorator or kept for unsubscribe
        """
        with self._lock:
            self._observers.append(observer)
        return observer

    def unsubscribe(self, observer: ProgressObserver) -> None:
        """Remove a previously registered observer (no-op if unknown)."""
        with self._lock:
            try:
                self._observers.remove(observer)
            except ValueError:
                pass

    def set(self, value: int) -> None:
        """
        Store a new value and notify every observer with it.

        Args:
            value: Progress percentage in [0, 100]

        Raises:
            ValueError: If value is outside [0, 100]
        """
        value = int(value)
        if not 0 <= value <= PROGRESS_MAX:
            raise ValueError(f"Progress must be between 0 and {PROGRESS_MAX}, got {value}")

        with self._lock:
            self._value = value
            observers = list(self._observers)

        for observer in observers:
            try:
                observer(value)
            except Exception:
                _logger.exception(f"Progress observer {observer!r} failed on value {value}")

    def reset(self) -> None:
        """Set the value back to 0 without notifying observers."""
        with self._lock:
            self._value = 0


__all__ = ['ProgressReporter', 'ProgressObserver']
