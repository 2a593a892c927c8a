"""Recoverable simulation error kinds and the issue record reported upward."""

from dataclasses import dataclass


class SimulationError(Exception):
    """Base class for local, recoverable simulation conditions."""

    kind = "simulation_error"


class EmptyPoolError(SimulationError):
    """A box was requested from a pool with no boxes left."""

    kind = "empty_pool"


class PastScheduleError(SimulationError):
    """An event was scheduled earlier than the current simulation time."""

    kind = "past_schedule"


class UnknownTravellerError(SimulationError):
    """An event refers to a traveller that is no longer active."""

    kind = "unknown_traveller"


@dataclass(frozen=True)
class SimulationIssue:
    """Status signal describing a recoverable error, for display by a UI."""
    kind: str
    time: float
    message: str

    @classmethod
    def from_error(cls, error: SimulationError, time: float) -> "SimulationIssue":
        return cls(kind=error.kind, time=time, message=str(error))
