"""Typed simulation configuration."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from dataclasses_json import dataclass_json


@dataclass_json
@dataclass
class LayoutConfig:
    """Positions of the three fixed points of the delivery floor."""
    start: List[float] = field(default_factory=lambda: [0.0, 0.0])
    pickup: List[float] = field(default_factory=lambda: [200.0, 0.0])
    delivery: List[float] = field(default_factory=lambda: [400.0, 0.0])

    def __post_init__(self):
        for name in ('start', 'pickup', 'delivery'):
            point = getattr(self, name)
            if len(point) != 2:
                raise ValueError(f"layout.{name} must be an [x, y] pair, got {point}")

    def point(self, name: str) -> Tuple[float, float]:
        x, y = getattr(self, name)
        return (float(x), float(y))


@dataclass_json
@dataclass
class SimulationConfig:
    """Configuration of a delivery simulation run.

    Attributes:
        starting_boxes: Boxes placed in the pool on reset
        starting_travellers: Travellers spawned on reset
        leg_duration: Simulated seconds to travel one leg
        dwell_delay: Handling time for pickup and delivery
        start_delay: Wait between spawning and the first move
        return_delay: Wait between a delivery and the next pickup leg
            (defaults to dwell_delay)
        spawn_interval: Spacing of the initial traveller spawns
        max_time_step: Largest simulated step one tick may take
        time_scale: Initial speed multiplier
    """
    starting_boxes: int = 10
    starting_travellers: int = 1
    leg_duration: float = 2.0
    dwell_delay: float = 0.5
    start_delay: float = 0.1
    return_delay: Optional[float] = None
    spawn_interval: float = 1.0
    max_time_step: float = 1.0
    time_scale: float = 1.0
    layout: LayoutConfig = field(default_factory=LayoutConfig)

    def __post_init__(self):
        """Validate configuration after initialization."""
        if isinstance(self.layout, dict):
            self.layout = LayoutConfig.from_dict(self.layout)

        if int(self.starting_boxes) != self.starting_boxes or self.starting_boxes < 0:
            raise ValueError(f"starting_boxes must be a non-negative integer, got {self.starting_boxes}")
        if int(self.starting_travellers) != self.starting_travellers or self.starting_travellers < 0:
            raise ValueError(
                f"starting_travellers must be a non-negative integer, got {self.starting_travellers}"
            )
        self.starting_boxes = int(self.starting_boxes)
        self.starting_travellers = int(self.starting_travellers)

        if self.leg_duration <= 0:
            raise ValueError(f"leg_duration must be positive, got {self.leg_duration}")
        for name in ('dwell_delay', 'start_delay', 'spawn_interval'):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} cannot be negative, got {getattr(self, name)}")
        if self.return_delay is not None and self.return_delay < 0:
            raise ValueError(f"return_delay cannot be negative, got {self.return_delay}")
        if self.max_time_step <= 0:
            raise ValueError(f"max_time_step must be positive, got {self.max_time_step}")
        if self.time_scale < 0:
            raise ValueError(f"time_scale cannot be negative, got {self.time_scale}")

    @property
    def effective_return_delay(self) -> float:
        return self.dwell_delay if self.return_delay is None else self.return_delay

    @classmethod
    def from_config(cls, config: Dict) -> "SimulationConfig":
        """Build from a full configuration dictionary.

        Args:
            config: Dictionary with ``simulation`` and optional ``layout`` sections

        Returns:
            Validated simulation configuration
        """
        section = dict(config.get('simulation', {}) or {})
        section['layout'] = dict(config.get('layout', {}) or {})
        return cls.from_dict(section)
