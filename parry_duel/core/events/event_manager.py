"""
Event bus for decoupled communication between the encounter and its views.

The turn state machine and the outcome evaluator publish events while a tick
runs; nothing is delivered until the game loop flushes the queue with
:meth:`EventManager.process_events` at the end of that tick. The UI and log
managers subscribe, so every frame is drawn from a fully delivered tick.
Delivery is strictly in publication order.
"""

import threading
from collections import defaultdict, deque
from dataclasses import dataclass
from typing import Callable, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .events import GameEvent, EventType


@dataclass
class QueuedEvent:
    """An event waiting for the end-of-tick flush."""
    event: "GameEvent"
    source: str = "unknown"  # For debugging


EventSubscriber = Callable[["GameEvent"], None]


class EventManager:
    """Queue of encounter events flushed once per tick."""

    def __init__(self, enable_debug_logging: bool = False):
        """Initialize the event manager.

        Args:
            enable_debug_logging: Whether to report publish and delivery through the debug callback
        """
        self.enable_debug_logging = enable_debug_logging

        self._subscribers: dict["EventType", list[EventSubscriber]] = defaultdict(list)
        self._event_queue: deque[QueuedEvent] = deque()
        self._lock = threading.RLock()

        self._debug_callback: Optional[Callable[[str], None]] = None

    def set_debug_callback(self, callback: Optional[Callable[[str], None]]) -> None:
        """Set a callback function for debug logging."""
        self._debug_callback = callback

    def _debug_log(self, message: str) -> None:
        if self.enable_debug_logging and self._debug_callback:
            self._debug_callback(f"[EVENT] {message}")

    def subscribe(
        self,
        event_type: "EventType",
        subscriber: EventSubscriber,
        subscriber_name: Optional[str] = None
    ) -> None:
        """Subscribe to events of a specific type.

        Args:
            event_type: The type of events to subscribe to
            subscriber: Callback function to handle events
            subscriber_name: Optional name for debugging
        """
        with self._lock:
            self._subscribers[event_type].append(subscriber)

            subscriber_display = subscriber_name or getattr(subscriber, '__name__', 'anonymous')
            self._debug_log(f"Subscribed {subscriber_display} to {event_type.name} events")

    def unsubscribe(self, event_type: "EventType", subscriber: EventSubscriber) -> bool:
        """Unsubscribe from events of a specific type.

        Returns:
            True if subscriber was found and removed
        """
        with self._lock:
            try:
                self._subscribers[event_type].remove(subscriber)
                self._debug_log(f"Unsubscribed from {event_type.name} events")
                return True
            except ValueError:
                return False

    def publish(self, event: "GameEvent", source: Optional[str] = None) -> None:
        """Queue an event for the end-of-tick flush."""
        with self._lock:
            queued_event = QueuedEvent(event=event, source=source or "unknown")
            self._event_queue.append(queued_event)

            self._debug_log(f"Published {event.__class__.__name__} (tick: {event.tick}, source: {queued_event.source})")

    def process_events(self) -> int:
        """Deliver every queued event in publication order.

        Events published by subscribers during the flush join the back of the
        queue and are delivered in the same call.

        Returns:
            Number of events delivered
        """
        processed_count = 0

        while True:
            with self._lock:
                if not self._event_queue:
                    break
                queued_event = self._event_queue.popleft()

            self._deliver(queued_event)
            processed_count += 1

        return processed_count

    def _deliver(self, queued_event: QueuedEvent) -> None:
        event = queued_event.event
        self._debug_log(f"Delivering {event.__class__.__name__} from {queued_event.source} (tick: {event.tick})")

        with self._lock:
            subscribers = list(self._subscribers.get(event.event_type, []))

        for subscriber in subscribers:
            try:
                subscriber(event)
            except Exception as e:
                self._debug_log(
                    f"Error in subscriber {getattr(subscriber, '__name__', 'anonymous')}: {e}"
                )

    def shutdown(self) -> None:
        """Drop all subscribers and queued events."""
        with self._lock:
            self._subscribers.clear()
            self._event_queue.clear()
            self._debug_log("Event manager shutdown complete")
