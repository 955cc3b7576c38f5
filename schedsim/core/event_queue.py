"""Time-ordered queue of pending timer events."""

import heapq
from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Tuple


class EventType(Enum):
    """Kinds of timer events driven by a task scheduler."""
    # Periodic engine tick
    TICK = "tick"

    # One-shot deferred work (respawns)
    DEFERRED = "deferred"


@dataclass(order=True)
class Event:
    """Pending callback in the timer queue.

    Attributes:
        time: Due time in seconds on the scheduler's clock
        priority: Priority for tie-breaking (lower = earlier)
        seq: Insertion order, keeps same-time events FIFO
        event_type: Type of event
        callback: Function invoked when the event fires
        args: Positional arguments for the callback
        interval: Repeat period for periodic events, None for one-shot
    """
    time: float
    priority: int = field(default=0)
    seq: int = field(default=0)
    event_type: EventType = field(default=EventType.DEFERRED, compare=False)
    callback: Optional[Callable[..., Any]] = field(default=None, compare=False)
    args: Tuple = field(default=(), compare=False)
    interval: Optional[float] = field(default=None, compare=False)
    cancelled: bool = field(default=False, compare=False)

    def __post_init__(self):
        """Validate event after initialization."""
        if self.time < 0:
            raise ValueError("Event time cannot be negative")
        if self.interval is not None and self.interval <= 0:
            raise ValueError("Event interval must be positive")

    def cancel(self) -> None:
        """Mark event so the queue drops it instead of firing it."""
        self.cancelled = True

    def fire(self) -> Any:
        """Invoke the callback."""
        if self.callback is None:
            return None
        return self.callback(*self.args)


class EventQueue:
    """Priority queue for managing timer events.

    Events are ordered by time, with earlier events processed first.
    For events at the same time, priority and then insertion order decide.
    Cancelled events stay in the heap until they reach the top and are
    discarded there.
    """

    def __init__(self):
        """Initialize empty event queue."""
        self._queue = []
        self._event_count = 0

    def push(self, event: Event) -> Event:
        """Add event to the queue.

        Args:
            event: Event to add

        Returns:
            The pushed event, usable as a cancellation handle
        """
        event.seq = self._event_count
        heapq.heappush(self._queue, event)
        self._event_count += 1
        return event

    def pop(self) -> Event:
        """Remove and return the next live event.

        Returns:
            Next event to process

        Raises:
            IndexError: If queue is empty
        """
        self._discard_cancelled()
        if self.is_empty():
            raise IndexError("Cannot pop from empty event queue")
        return heapq.heappop(self._queue)

    def peek(self) -> Optional[Event]:
        """Return the next live event without removing it.

        Returns:
            Next event, or None if queue is empty
        """
        self._discard_cancelled()
        return self._queue[0] if self._queue else None

    def is_empty(self) -> bool:
        """Check if queue holds no live events."""
        self._discard_cancelled()
        return len(self._queue) == 0

    def size(self) -> int:
        """Get number of live events in queue."""
        return sum(1 for event in self._queue if not event.cancelled)

    def clear(self) -> None:
        """Remove all events from queue."""
        for event in self._queue:
            event.cancel()
        self._queue.clear()

    def _discard_cancelled(self) -> None:
        while self._queue and self._queue[0].cancelled:
            heapq.heappop(self._queue)

    def __len__(self) -> int:
        """Get number of live events in queue."""
        return self.size()

    def __repr__(self) -> str:
        """String representation of event queue."""
        return f"EventQueue(size={self.size()}, next={self.peek()})"
