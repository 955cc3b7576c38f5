"""Fan-out of engine events to subscribers."""

import threading
from enum import Enum
from typing import Any, Callable, List

from ..utils.logger import setup_logger


class StreamEvent(Enum):
    """Events emitted by the engine. Values are the wire names."""
    STATE_UPDATE = "state_update"
    METRICS_UPDATE = "metrics_update"
    AI_DECISION = "ai_decision"
    SIMULATION_END = "simulation_end"


Subscriber = Callable[[StreamEvent, Any], None]


class Broadcaster:
    """Deliver every published event to every subscriber.

    A subscriber that raises is logged and skipped; delivery to the others
    and the caller's work continue.
    """

    def __init__(self):
        """Initialize broadcaster with no subscribers."""
        self.logger = setup_logger(self.__class__.__name__)
        self._subscribers: List[Subscriber] = []
        self._lock = threading.Lock()
        self.delivery_failures = 0

    def subscribe(self, subscriber: Subscriber) -> Callable[[], None]:
        """Register a subscriber.

        Args:
            subscriber: Callable receiving ``(event, payload)``

        Returns:
            Function that removes the subscription
        """
        with self._lock:
            self._subscribers.append(subscriber)

        def unsubscribe() -> None:
            self.unsubscribe(subscriber)

        return unsubscribe

    def unsubscribe(self, subscriber: Subscriber) -> None:
        """Remove a subscriber; unknown subscribers are ignored."""
        with self._lock:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

    def publish(self, event: StreamEvent, payload: Any) -> int:
        """Send an event to all subscribers.

        Args:
            event: Event type
            payload: JSON-ready payload

        Returns:
            Number of subscribers that accepted the event
        """
        with self._lock:
            subscribers = list(self._subscribers)

        delivered = 0
        for subscriber in subscribers:
            try:
                subscriber(event, payload)
                delivered += 1
            except Exception as e:
                self.delivery_failures += 1
                self.logger.warning(
                    f"Dropping {event.value} for subscriber {subscriber!r}: {e}"
                )
        return delivered

    def __len__(self) -> int:
        with self._lock:
            return len(self._subscribers)
