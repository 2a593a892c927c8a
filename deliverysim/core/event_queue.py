"""Event queue implementation for discrete event simulation."""

import heapq
from collections import deque
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Deque, Dict, Iterator, List, Optional


class EventType(Enum):
    """Types of events in the simulation."""
    SPAWN = "spawn"
    START_MOVE = "start_move"
    REACH_WAYPOINT = "reach_waypoint"
    PICKUP_COMPLETE = "pickup_complete"
    DELIVERY_COMPLETE = "delivery_complete"
    FINISH_JOURNEY = "finish_journey"


EventHandler = Callable[["Event"], None]


@dataclass(frozen=True)
class Event:
    """Event in the discrete event simulation.

    Attributes:
        time: Simulation time the event fires at
        event_type: Type of event
        data: Event-specific payload
        handler: Callable invoked with the event when it fires
        sequence: Insertion number assigned by the queue, breaks ties FIFO
    """
    time: float
    event_type: EventType
    data: Dict[str, Any] = field(default_factory=dict, compare=False)
    handler: Optional[EventHandler] = field(default=None, compare=False, repr=False)
    sequence: int = -1

    def __post_init__(self):
        """Validate event after initialization."""
        if self.time < 0:
            raise ValueError("Event time cannot be negative")


class EventQueue:
    """Time-keyed queue of simulation events.

    Events are grouped into per-time slots. Slots are visited in increasing
    time order and each slot is drained first-in first-out, so events that
    share a timestamp run in the order they were pushed.
    """

    def __init__(self):
        """Initialize empty event queue."""
        self._times: List[float] = []
        self._slots: Dict[float, Deque[Event]] = {}
        self._size = 0
        self._next_sequence = 0

    def push(self, event: Event) -> Event:
        """Add event to the queue.

        Args:
            event: Event to add

        Returns:
            The stored event, stamped with its sequence number
        """
        event = replace(event, sequence=self._next_sequence)
        self._next_sequence += 1

        slot = self._slots.get(event.time)
        if slot is None:
            slot = deque()
            self._slots[event.time] = slot
            heapq.heappush(self._times, event.time)
        slot.append(event)
        self._size += 1
        return event

    def pop(self) -> Event:
        """Remove and return the next event.

        Returns:
            Next event to process

        Raises:
            IndexError: If queue is empty
        """
        if self.is_empty():
            raise IndexError("Cannot pop from empty event queue")

        time = self._times[0]
        slot = self._slots[time]
        event = slot.popleft()
        if not slot:
            heapq.heappop(self._times)
            del self._slots[time]
        self._size -= 1
        return event

    def peek(self) -> Optional[Event]:
        """Return the next event without removing it.

        Returns:
            Next event, or None if queue is empty
        """
        if self.is_empty():
            return None
        return self._slots[self._times[0]][0]

    def next_time(self) -> Optional[float]:
        """Smallest pending timestamp, or None if the queue is empty."""
        return self._times[0] if self._times else None

    def is_empty(self) -> bool:
        """Check if queue is empty.

        Returns:
            True if queue is empty
        """
        return self._size == 0

    def size(self) -> int:
        """Get number of events in queue.

        Returns:
            Number of events
        """
        return self._size

    def clear(self) -> None:
        """Remove all events from queue."""
        self._times.clear()
        self._slots.clear()
        self._size = 0

    def __iter__(self) -> Iterator[Event]:
        """Iterate pending events in processing order without consuming them."""
        for time in sorted(self._times):
            yield from self._slots[time]

    def __len__(self) -> int:
        """Get number of events in queue."""
        return self._size

    def __repr__(self) -> str:
        """String representation of event queue."""
        return f"EventQueue(size={self._size}, next={self.peek()})"
