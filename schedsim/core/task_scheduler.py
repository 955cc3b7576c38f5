"""Timer drivers for periodic ticks and deferred one-shot tasks.

Both drivers keep pending work in an ``EventQueue`` and run every callback
sequentially, so two callbacks never overlap. ``ThreadedTaskScheduler``
follows the wall clock on a single background thread;
``VirtualTaskScheduler`` only moves when ``advance`` is called.
"""

import math
import threading
import time
from typing import Any, Callable

from .event_queue import Event, EventType, EventQueue
from ..utils.logger import setup_logger


class TaskScheduler:
    """Base class holding the event queue and dispatch logic."""

    def __init__(self):
        """Initialize task scheduler."""
        self.logger = setup_logger(self.__class__.__name__)
        self.event_queue = EventQueue()
        self._lock = threading.RLock()

    def now(self) -> float:
        """Current time in seconds on this scheduler's clock."""
        raise NotImplementedError

    def call_every(self, interval: float, callback: Callable[..., Any],
                   *args, priority: int = 0) -> Event:
        """Run ``callback`` every ``interval`` seconds, first after one interval.

        Returns:
            Event handle; call ``cancel()`` on it to stop the repetition
        """
        event = Event(
            time=self.now() + interval,
            priority=priority,
            event_type=EventType.TICK,
            callback=callback,
            args=args,
            interval=interval,
        )
        return self._schedule(event)

    def call_later(self, delay: float, callback: Callable[..., Any],
                   *args, priority: int = 10) -> Event:
        """Run ``callback`` once after ``delay`` seconds.

        Returns:
            Event handle; call ``cancel()`` on it to drop the callback
        """
        event = Event(
            time=self.now() + max(0.0, delay),
            priority=priority,
            event_type=EventType.DEFERRED,
            callback=callback,
            args=args,
        )
        return self._schedule(event)

    def pending(self) -> int:
        """Number of live scheduled events."""
        with self._lock:
            return self.event_queue.size()

    def shutdown(self) -> None:
        """Drop all pending events."""
        with self._lock:
            self.event_queue.clear()

    def _schedule(self, event: Event) -> Event:
        with self._lock:
            self.event_queue.push(event)
            self._wake()
        return event

    def _wake(self) -> None:
        """Hook for drivers that sleep until the next due event."""

    def _dispatch(self, event: Event) -> None:
        """Fire one event and re-arm it if periodic."""
        try:
            event.fire()
        except Exception:
            self.logger.exception(f"Timer callback failed ({event.event_type.value})")

        if event.interval is None:
            return

        with self._lock:
            if event.cancelled:
                return
            # Skip periods missed while the callback was running
            elapsed = self.now() - event.time
            missed = max(0, math.floor(elapsed / event.interval))
            event.time = event.time + event.interval * (missed + 1)
            self.event_queue.push(event)
            self._wake()


class ThreadedTaskScheduler(TaskScheduler):
    """Wall-clock driver running every callback on one daemon thread."""

    def __init__(self, name: str = "schedsim-timer"):
        """Initialize and start the driver thread.

        Args:
            name: Thread name
        """
        super().__init__()
        self._condition = threading.Condition(self._lock)
        self._running = True
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)
        self._thread.start()

    def now(self) -> float:
        return time.monotonic()

    def shutdown(self) -> None:
        """Stop the driver thread and drop pending events."""
        with self._condition:
            self._running = False
            self.event_queue.clear()
            self._condition.notify_all()
        if threading.current_thread() is not self._thread:
            self._thread.join(timeout=5.0)

    def _wake(self) -> None:
        self._condition.notify_all()

    def _run(self) -> None:
        while True:
            with self._condition:
                event = None
                while self._running:
                    event = self.event_queue.peek()
                    if event is None:
                        self._condition.wait()
                        continue
                    delay = event.time - self.now()
                    if delay <= 0:
                        break
                    self._condition.wait(timeout=delay)
                if not self._running:
                    return
                event = self.event_queue.pop()
            self._dispatch(event)


class VirtualTaskScheduler(TaskScheduler):
    """Manually advanced clock for tests and headless runs."""

    def __init__(self, start_time: float = 0.0):
        """Initialize virtual clock.

        Args:
            start_time: Initial clock value in seconds
        """
        super().__init__()
        self._now = start_time

    def now(self) -> float:
        return self._now

    def advance(self, seconds: float) -> int:
        """Move the clock forward, firing every event that comes due.

        Args:
            seconds: Amount of virtual time to advance

        Returns:
            Number of events fired
        """
        if seconds < 0:
            raise ValueError("Cannot advance the clock backwards")

        target = self._now + seconds
        fired = 0
        while True:
            with self._lock:
                event = self.event_queue.peek()
                if event is None or event.time > target:
                    break
                event = self.event_queue.pop()
                self._now = max(self._now, event.time)
            self._dispatch(event)
            fired += 1

        self._now = target
        return fired
