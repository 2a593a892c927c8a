"""Boxes and the FIFO pool of boxes waiting to be picked up."""

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, Iterator, List, Optional, Tuple

from ..core.errors import EmptyPoolError

Point = Tuple[float, float]


class BoxState(Enum):
    """Who currently holds a box."""
    AVAILABLE = "available"
    ASSIGNED = "assigned"
    CARRIED = "carried"
    DELIVERED = "delivered"


@dataclass
class Box:
    """A deliverable item."""
    box_id: int
    position: Point
    state: BoxState = BoxState.AVAILABLE
    carrier_id: Optional[int] = None

    def assign_to(self, traveller_id: int) -> None:
        self.state = BoxState.ASSIGNED
        self.carrier_id = traveller_id

    def pick_up(self, traveller_id: int, position: Point) -> None:
        if self.carrier_id != traveller_id:
            raise ValueError(f"Box {self.box_id} is not assigned to traveller {traveller_id}")
        self.state = BoxState.CARRIED
        self.position = position

    def deliver(self, position: Point) -> None:
        self.state = BoxState.DELIVERED
        self.carrier_id = None
        self.position = position

    def __repr__(self) -> str:
        return f"Box(id={self.box_id}, state={self.state.value})"


class BoxPool:
    """FIFO queue of boxes awaiting pickup.

    Boxes leave from the head in the order they were added and the pool is
    never reordered.
    """

    def __init__(self, boxes: Optional[List[Box]] = None):
        self._boxes: Deque[Box] = deque(boxes or [])

    @classmethod
    def create(cls, num_boxes: int, position: Point = (0.0, 0.0)) -> "BoxPool":
        """Build a pool holding ``num_boxes`` fresh boxes at ``position``.

        Args:
            num_boxes: Number of boxes
            position: Where the boxes wait (the pickup point)

        Returns:
            New pool
        """
        if num_boxes < 0:
            raise ValueError("num_boxes cannot be negative")
        return cls([Box(box_id=i, position=tuple(position)) for i in range(num_boxes)])

    @property
    def count(self) -> int:
        """Number of unclaimed boxes."""
        return len(self._boxes)

    def dequeue(self) -> Box:
        """Remove and return the head box.

        Returns:
            Box at the head of the pool

        Raises:
            EmptyPoolError: If no boxes remain
        """
        if not self._boxes:
            raise EmptyPoolError("No boxes left in the pool")
        return self._boxes.popleft()

    def enqueue(self, box: Box) -> None:
        """Return a box to the tail of the pool."""
        box.state = BoxState.AVAILABLE
        box.carrier_id = None
        self._boxes.append(box)

    def peek(self) -> Optional[Box]:
        """Head box without removing it, or None."""
        return self._boxes[0] if self._boxes else None

    def clear(self) -> None:
        self._boxes.clear()

    def __len__(self) -> int:
        return len(self._boxes)

    def __iter__(self) -> Iterator[Box]:
        return iter(self._boxes)

    def __repr__(self) -> str:
        return f"BoxPool(count={len(self._boxes)})"
