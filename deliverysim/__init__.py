"""DeliverySim: discrete event simulator for box delivery travellers."""

from .core.simulator import Simulator
from .core.clock import SimulationClock
from .core.event_queue import Event, EventType, EventQueue
from .core.metrics_collector import MetricsCollector
from .logistics.box_pool import Box, BoxPool
from .logistics.traveller import Traveller, TravellerManager
from .models.activity import TravellerActivity
from .models.simulation_config import SimulationConfig
from .utils.logger import setup_logger

__version__ = "0.1.0"
__all__ = [
    "Simulator",
    "SimulationClock",
    "Event",
    "EventType",
    "EventQueue",
    "MetricsCollector",
    "Box",
    "BoxPool",
    "Traveller",
    "TravellerManager",
    "TravellerActivity",
    "SimulationConfig",
    "setup_logger",
]
