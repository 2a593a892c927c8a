"""Per-traveller activity timeline used for Gantt charts."""

from dataclasses import dataclass
from typing import Dict, List, Optional

from ..models.activity import TravellerActivity


@dataclass
class TravellerSegment:
    """One activity interval of a traveller.

    ``end_time`` stays None while the activity is ongoing.
    """
    activity: TravellerActivity
    start_time: float
    traveller_id: int
    traveller_name: str
    end_time: Optional[float] = None

    @property
    def is_open(self) -> bool:
        return self.end_time is None

    def duration(self, current_time: Optional[float] = None) -> float:
        """Segment length; an open segment is measured up to ``current_time``."""
        end = self.end_time
        if end is None:
            end = current_time if current_time is not None else self.start_time
        return end - self.start_time

    def to_dict(self, current_time: Optional[float] = None) -> Dict:
        end = self.end_time
        if end is None and current_time is not None:
            end = current_time
        return {
            'activity': self.activity.value,
            'start_time': self.start_time,
            'end_time': end,
        }


class TimelineRecorder:
    """Append-only activity log for a single traveller.

    Segments are contiguous: starting a new activity closes the open one at
    the same instant, and only the last segment may be open.
    """

    def __init__(self, traveller_id: int, traveller_name: str):
        self.traveller_id = traveller_id
        self.traveller_name = traveller_name
        self._segments: List[TravellerSegment] = []

    @property
    def segments(self) -> List[TravellerSegment]:
        return list(self._segments)

    @property
    def current(self) -> Optional[TravellerSegment]:
        """The open segment, if any."""
        if self._segments and self._segments[-1].is_open:
            return self._segments[-1]
        return None

    def begin(self, activity: TravellerActivity, time: float) -> TravellerSegment:
        """Close the open segment (if any) and open one for ``activity``.

        Args:
            activity: Activity starting now
            time: Current simulation time

        Returns:
            The newly opened segment
        """
        self.close(time)
        segment = TravellerSegment(
            activity=activity,
            start_time=time,
            traveller_id=self.traveller_id,
            traveller_name=self.traveller_name,
        )
        self._segments.append(segment)
        return segment

    def close(self, time: float) -> None:
        """Close the open segment at ``time``; no-op when nothing is open."""
        segment = self.current
        if segment is None:
            return
        if time < segment.start_time:
            raise ValueError(
                f"Cannot close {segment.activity.value} segment at t={time:.3f}, "
                f"it started at t={segment.start_time:.3f}"
            )
        segment.end_time = time

    def snapshot(self, current_time: float) -> List[Dict]:
        """Timeline as plain dicts, with an open end reported as ``current_time``."""
        return [segment.to_dict(current_time) for segment in self._segments]

    def __len__(self) -> int:
        return len(self._segments)
