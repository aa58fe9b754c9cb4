"""
Last-value-wins debouncing on top of a scheduler.

A scheduler is anything with ``call_later(delay, callback)`` returning a
handle that has ``cancel()``. ``asyncio`` event loops satisfy this directly,
which is what the live listing sessions use; tests pass a manual clock.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Generic, Protocol, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_NOTHING = object()


class TimerHandle(Protocol):
    def cancel(self) -> Any: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], Any]) -> TimerHandle: ...


class Debouncer(Generic[T]):
    """Emit only the most recent value once *delay* seconds pass without a new one.

    Superseded values are dropped, never queued. Only one timer is armed at a
    time: every ``push`` cancels the previous timer before arming a new one.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        delay: float,
        callback: Callable[[T], None],
    ) -> None:
        if delay < 0:
            raise ValueError("delay must be >= 0")
        self._scheduler = scheduler
        self._delay = delay
        self._callback = callback
        self._handle: TimerHandle | None = None
        self._value: Any = _NOTHING

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def push(self, value: T) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._value = value
        self._handle = self._scheduler.call_later(self._delay, self._fire)

    def cancel(self) -> bool:
        """Drop the pending value without emitting it."""
        if self._handle is None:
            return False
        self._handle.cancel()
        self._handle = None
        self._value = _NOTHING
        return True

    def flush(self) -> bool:
        """Emit the pending value now instead of waiting for the window."""
        if self._handle is None:
            return False
        self._handle.cancel()
        self._fire()
        return True

    def _fire(self) -> None:
        value = self._value
        self._handle = None
        self._value = _NOTHING
        if value is _NOTHING:
            return
        logger.debug("Debounce window settled after %.3fs", self._delay)
        self._callback(value)
