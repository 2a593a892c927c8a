"""Simulation clock: owns simulation time and drains the event queue."""

from typing import Any, Callable, Dict, List, Optional

from .errors import PastScheduleError, SimulationError, SimulationIssue
from .event_queue import Event, EventHandler, EventQueue, EventType
from ..utils.logger import setup_logger


class SimulationClock:
    """Event-driven simulation clock.

    Simulation time only moves inside :meth:`advance_simulation`. Pending
    events up to the target time are processed first, in time order and
    FIFO within a timestamp; once the queue has nothing left before the
    target the clock free-runs to it. A per-frame driver calls :meth:`tick`
    with real elapsed time, which is scaled by ``time_scale`` and clamped to
    ``max_time_step`` before advancing.
    """

    def __init__(self, time_scale: float = 1.0, max_time_step: float = 1.0):
        """Initialize clock.

        Args:
            time_scale: Simulated seconds per real second (0 pauses)
            max_time_step: Largest simulated step a single tick may take
        """
        if max_time_step <= 0:
            raise ValueError("max_time_step must be positive")

        self.logger = setup_logger(self.__class__.__name__)
        self.event_queue = EventQueue()
        self.max_time_step = max_time_step

        self._current_time = 0.0
        self._time_scale = 0.0
        self.time_scale = time_scale
        self._is_running = True
        self._advancing = False

        self._time_listeners: List[Callable[[float], None]] = []
        self._event_listeners: List[Callable[[Event], None]] = []
        self._issue_listeners: List[Callable[[SimulationIssue], None]] = []

        self.events_processed = 0

    @property
    def current_time(self) -> float:
        """Current simulation time in seconds."""
        return self._current_time

    @property
    def time_scale(self) -> float:
        """Simulation speed multiplier."""
        return self._time_scale

    @time_scale.setter
    def time_scale(self, value: float) -> None:
        if value < 0:
            raise ValueError("time_scale cannot be negative")
        self._time_scale = float(value)

    @property
    def is_running(self) -> bool:
        """Whether ticks advance the simulation."""
        return self._is_running

    @is_running.setter
    def is_running(self, value: bool) -> None:
        self._is_running = bool(value)

    @property
    def pending_count(self) -> int:
        """Number of events waiting in the queue."""
        return len(self.event_queue)

    @property
    def next_event_time(self) -> Optional[float]:
        """Time of the next pending event, or None."""
        return self.event_queue.next_time()

    def add_time_listener(self, listener: Callable[[float], None]) -> None:
        """Register a callback invoked with the new time for every event slot and free-run."""
        self._time_listeners.append(listener)

    def add_event_listener(self, listener: Callable[[Event], None]) -> None:
        """Register a callback invoked after each event is handled successfully."""
        self._event_listeners.append(listener)

    def add_issue_listener(self, listener: Callable[[SimulationIssue], None]) -> None:
        """Register a callback invoked for every recoverable simulation error."""
        self._issue_listeners.append(listener)

    def schedule_event(self, time: float, event_type: EventType,
                       data: Optional[Dict[str, Any]] = None,
                       handler: Optional[EventHandler] = None) -> None:
        """Schedule an event.

        Scheduling earlier than the current time is rejected: the request is
        logged and reported as an issue, and the queue is left untouched.

        Args:
            time: Simulation time at which the event fires
            event_type: Type of event
            data: Optional event payload
            handler: Callable invoked with the event when it fires
        """
        if time < self._current_time:
            self.report_issue(PastScheduleError(
                f"Rejected {event_type.value} event at t={time:.3f}, "
                f"current time is {self._current_time:.3f}"
            ))
            return

        event = self.event_queue.push(Event(
            time=time,
            event_type=event_type,
            data=data if data is not None else {},
            handler=handler,
        ))
        self.logger.debug(
            f"Scheduled {event_type.value} #{event.sequence} for t={time:.3f} "
            f"(current: {self._current_time:.3f})"
        )

    def advance_simulation(self, delta_time: float) -> int:
        """Advance simulation time, processing every event that falls due.

        Args:
            delta_time: Simulated seconds to advance

        Returns:
            Number of events processed

        Raises:
            ValueError: If delta_time is negative
            RuntimeError: If called from inside an event handler
        """
        if delta_time < 0:
            raise ValueError("delta_time cannot be negative")
        if self._advancing:
            raise RuntimeError("advance_simulation cannot be called from an event handler")

        target_time = self._current_time + delta_time
        processed = 0

        self._advancing = True
        try:
            while not self.event_queue.is_empty() and self.event_queue.next_time() <= target_time:
                slot_time = self.event_queue.next_time()
                self._set_time(slot_time)

                # Handlers may add events at this same time; they join the drain
                while self.event_queue.next_time() == slot_time:
                    self._process_event(self.event_queue.pop())
                    processed += 1
        finally:
            self._advancing = False

        if self._current_time < target_time:
            self._set_time(target_time)

        return processed

    def tick(self, elapsed_wall_time: float) -> float:
        """Advance by one frame of real time.

        Args:
            elapsed_wall_time: Real seconds since the previous tick

        Returns:
            Simulated seconds advanced this tick
        """
        if not self._is_running or self._time_scale <= 0:
            return 0.0

        delta_time = min(elapsed_wall_time * self._time_scale, self.max_time_step)
        if delta_time <= 0:
            return 0.0

        self.advance_simulation(delta_time)
        return delta_time

    def fast_forward(self, step: float = 1000.0) -> int:
        """Process every pending event, ignoring time scale and pause state.

        Args:
            step: Simulated seconds per advance call

        Returns:
            Number of events processed
        """
        processed = 0
        while not self.event_queue.is_empty():
            processed += self.advance_simulation(step)
        return processed

    def reset(self) -> None:
        """Drop all pending events and rewind time to zero."""
        self.event_queue.clear()
        self._current_time = 0.0
        self.events_processed = 0
        self.logger.info(f"Clock reset - running: {self._is_running}, time scale: {self._time_scale}")

    def get_scheduled_events(self) -> List[Event]:
        """Get pending events in processing order (for debugging)."""
        return list(self.event_queue)

    def report_issue(self, error: SimulationError) -> None:
        """Log a recoverable error and forward it to issue listeners."""
        self.logger.warning(f"[{self._current_time:.2f}] {error.kind}: {error}")
        issue = SimulationIssue.from_error(error, self._current_time)
        for listener in self._issue_listeners:
            listener(issue)

    def format_time(self) -> str:
        """Format simulation time as HH:MM:SS."""
        total_seconds = int(self._current_time)
        hours = total_seconds // 3600
        minutes = (total_seconds % 3600) // 60
        seconds = total_seconds % 60
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}"

    def _set_time(self, time: float) -> None:
        self._current_time = time
        for listener in self._time_listeners:
            listener(time)

    def _process_event(self, event: Event) -> None:
        """Run an event's handler and notify listeners.

        Args:
            event: Event to process
        """
        try:
            if event.handler is not None:
                event.handler(event)
        except SimulationError as e:
            self.report_issue(e)
            return
        finally:
            self.events_processed += 1

        for listener in self._event_listeners:
            listener(event)

        self.logger.debug(f"[{self._current_time:.2f}] Processed event: {event.event_type.value}")
