"""Configuration and state models."""

from .activity import TravellerActivity
from .simulation_config import SimulationConfig, LayoutConfig

__all__ = ["TravellerActivity", "SimulationConfig", "LayoutConfig"]
