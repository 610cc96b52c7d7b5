"""Debouncer — run an action once a burst of triggers has gone quiet.

Each debounce() call (re)starts a one-shot daemon threading.Timer, so only
the last call in a burst fires. The action runs on the timer thread; use
bindkit.textual (or your UI's own marshaling) to touch widgets from it.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable

from bindkit.errors import DisposedError, InvalidArgumentError

logger = logging.getLogger("bindkit.debounce")


class Debouncer:
    """Coalesce rapid triggers into a single delayed call."""

    def __init__(self, interval: float, action: Callable[[], None]) -> None:
        if not callable(action):
            raise InvalidArgumentError("action must be callable")
        if interval < 0:
            raise InvalidArgumentError("interval must be non-negative")
        self._interval = interval
        self._action = action
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._generation = 0
        self._disposed = False

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def pending(self) -> bool:
        """True while a run is scheduled and has not fired yet."""
        with self._lock:
            return self._timer is not None

    def debounce(self) -> None:
        """Schedule the action, restarting the wait if one is already pending."""
        with self._lock:
            if self._disposed:
                raise DisposedError("Debouncer has been disposed")
            if self._timer is not None:
                self._timer.cancel()
            self._generation += 1
            t = threading.Timer(self._interval, self._fire, args=[self._generation])
            t.daemon = True
            self._timer = t
            t.start()

    def start(self, action: Callable[[], None], interval: float | None = None) -> None:
        """Single-shot use: swap in action (and interval), then restart the wait."""
        if not callable(action):
            raise InvalidArgumentError("action must be callable")
        if interval is not None and interval < 0:
            raise InvalidArgumentError("interval must be non-negative")
        with self._lock:
            if self._disposed:
                raise DisposedError("Debouncer has been disposed")
            self._action = action
            if interval is not None:
                self._interval = interval
        self.debounce()

    def cancel(self) -> None:
        """Drop a pending run, if any."""
        with self._lock:
            self._cancel_locked()

    stop = cancel

    def dispose(self) -> None:
        with self._lock:
            if self._disposed:
                raise DisposedError("Debouncer has been disposed")
            self._cancel_locked()
            self._disposed = True

    def _cancel_locked(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        # A timer that already started waiting for the lock must not run.
        self._generation += 1

    def _fire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or self._disposed:
                return
            self._timer = None
            action = self._action
        try:
            action()
        except Exception:
            logger.exception("Debounced action %r failed", action)

    def __enter__(self) -> Debouncer:
        return self

    def __exit__(self, *exc_info) -> None:
        if not self._disposed:
            self.dispose()
