"""Core simulation components."""

from .simulator import Simulator
from .clock import SimulationClock
from .event_queue import Event, EventType, EventQueue
from .metrics_collector import MetricsCollector
from .errors import (
    SimulationError, EmptyPoolError, PastScheduleError,
    UnknownTravellerError, SimulationIssue,
)

__all__ = [
    "Simulator",
    "SimulationClock",
    "Event",
    "EventType",
    "EventQueue",
    "MetricsCollector",
    "SimulationError",
    "EmptyPoolError",
    "PastScheduleError",
    "UnknownTravellerError",
    "SimulationIssue",
]
