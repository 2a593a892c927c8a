"""Simulation controller composing the clock, the box pool and the travellers."""

from typing import Callable, Dict, List, Optional

from .clock import SimulationClock
from .errors import SimulationIssue
from .event_queue import Event, EventType
from .metrics_collector import MetricsCollector
from ..logistics.box_pool import Box, BoxPool
from ..logistics.traveller import Traveller, TravellerManager
from ..models.simulation_config import SimulationConfig
from ..utils.logger import setup_logger


class Simulator:
    """Discrete event simulator for box delivery.

    This class is the composition point of the simulation, managing:
    - The clock and its event queue
    - The box pool and the delivered boxes
    - Traveller spawning and retirement
    - External commands (spawn, reset, pause, speed changes)
    - Completion detection and result collection
    """

    MAX_SPEED = 1000.0

    def __init__(self, config: Dict):
        """Initialize simulator.

        Args:
            config: Simulation configuration dictionary
        """
        self.config = config
        self.logger = setup_logger(self.__class__.__name__)
        self.sim_config = SimulationConfig.from_config(config)

        self.clock = SimulationClock(
            time_scale=self.sim_config.time_scale,
            max_time_step=self.sim_config.max_time_step,
        )
        self.box_pool = BoxPool()
        self.delivered_boxes: List[Box] = []
        self.traveller_manager = TravellerManager(
            self.clock, self.box_pool, self.delivered_boxes, self.sim_config
        )
        self.metrics_collector = MetricsCollector(config)

        self.issues: List[SimulationIssue] = []
        self.total_boxes = 0
        self.previous_time_scale = self.sim_config.time_scale
        self.completion_time: Optional[float] = None

        self.clock.add_event_listener(self._on_event_processed)
        self.clock.add_issue_listener(self.issues.append)

        self.logger.info("Simulator initialized")
        self.reset()

    @property
    def current_time(self) -> float:
        return self.clock.current_time

    @property
    def delivered_count(self) -> int:
        return len(self.delivered_boxes)

    @property
    def active_travellers(self) -> Dict[int, Traveller]:
        return self.traveller_manager.travellers

    @property
    def is_running(self) -> bool:
        return self.clock.is_running

    @property
    def is_complete(self) -> bool:
        """True once every configured box is delivered and no traveller is active."""
        return (self.delivered_count == self.total_boxes
                and self.traveller_manager.num_active() == 0)

    def reset(self, config: Optional[Dict] = None) -> None:
        """Restart the simulation, optionally with a new configuration.

        Args:
            config: Replacement configuration dictionary
        """
        if config is not None:
            self.config = config
            self.sim_config = SimulationConfig.from_config(config)
            self.metrics_collector = MetricsCollector(config)

        sim_config = self.sim_config

        self.clock.reset()
        self.clock.max_time_step = sim_config.max_time_step
        self.clock.time_scale = sim_config.time_scale
        self.clock.is_running = True
        self.previous_time_scale = sim_config.time_scale

        self.total_boxes = sim_config.starting_boxes
        self.box_pool = BoxPool.create(self.total_boxes, sim_config.layout.point('pickup'))
        self.delivered_boxes.clear()
        self.traveller_manager.reset(self.box_pool, sim_config)
        self.metrics_collector.reset()
        self.issues.clear()
        self.completion_time = None

        for i in range(sim_config.starting_travellers):
            spawn_time = self.clock.current_time + i * sim_config.spawn_interval
            self.clock.schedule_event(spawn_time, EventType.SPAWN, data={'index': i},
                                      handler=self._handle_spawn)
            self.logger.debug(f"Scheduled traveller {i + 1} to spawn at t={spawn_time:.1f}s")

        self.logger.info(
            f"Simulation reset: {self.total_boxes} boxes, "
            f"{sim_config.starting_travellers} travellers, "
            f"{sim_config.leg_duration:.1f}s per leg, {sim_config.dwell_delay:.1f}s dwell"
        )

    def spawn_traveller(self) -> None:
        """Request a new traveller at the current simulation time."""
        self.clock.schedule_event(self.clock.current_time, EventType.SPAWN,
                                  handler=self._handle_spawn)

    def pause(self) -> None:
        """Stop time from advancing, remembering the current speed."""
        if not self.clock.is_running:
            return
        self.previous_time_scale = self.clock.time_scale
        self.clock.time_scale = 0.0
        self.clock.is_running = False
        self.logger.info(f"Simulation paused at t={self.current_time:.2f}")

    def resume(self) -> None:
        """Resume at the speed in effect before pausing."""
        self.clock.time_scale = self.previous_time_scale
        self.clock.is_running = True
        self.logger.info(f"Simulation resumed at {self.previous_time_scale:g}x")

    def toggle(self) -> bool:
        """Pause if running, resume otherwise.

        Returns:
            New running state
        """
        if self.clock.is_running:
            self.pause()
        else:
            self.resume()
        return self.clock.is_running

    def set_time_scale(self, time_scale: float) -> None:
        """Change speed; while paused the value is kept for the next resume.

        Args:
            time_scale: Simulated seconds per real second
        """
        if time_scale < 0:
            raise ValueError("time_scale cannot be negative")
        self.previous_time_scale = time_scale
        if self.clock.is_running:
            self.clock.time_scale = time_scale

    def max_speed(self) -> None:
        """Run at the maximum speed, resuming if paused."""
        self.previous_time_scale = self.MAX_SPEED
        self.clock.time_scale = self.MAX_SPEED
        self.clock.is_running = True
        self.logger.info("Max speed activated")

    def tick(self, elapsed_wall_time: float) -> float:
        """Advance one frame.

        Args:
            elapsed_wall_time: Real seconds since the previous frame

        Returns:
            Simulated seconds advanced
        """
        delta = self.clock.tick(elapsed_wall_time)
        self._check_complete()
        return delta

    def run_until_complete(self, tick_seconds: float = 1.0 / 60.0,
                           max_ticks: int = 10_000_000,
                           on_tick: Optional[Callable[["Simulator"], None]] = None) -> Dict:
        """Drive fixed-length ticks until the simulation completes.

        Args:
            tick_seconds: Real seconds represented by each tick
            max_ticks: Safety bound on the number of ticks
            on_tick: Optional callback invoked after every tick

        Returns:
            Results dictionary (see get_results)
        """
        if not self.clock.is_running or self.clock.time_scale <= 0:
            raise RuntimeError("Simulation is paused; resume it before running")

        for _ in range(max_ticks):
            if self.is_complete:
                break
            if self.clock.pending_count == 0:
                self.logger.warning(
                    f"No pending events at t={self.current_time:.2f} but simulation "
                    f"is not complete ({self.delivered_count}/{self.total_boxes} delivered)"
                )
                break
            self.tick(tick_seconds)
            if on_tick is not None:
                on_tick(self)
        else:
            self.logger.warning(f"Stopped after {max_ticks} ticks without completing")

        self._check_complete()
        return self.get_results()

    def get_traveller_timelines(self) -> List[Dict]:
        """Timelines of active and finished travellers for display.

        Returns:
            List of traveller info dictionaries ordered by id
        """
        now = self.clock.current_time
        return [t.get_info(now) for t in self.traveller_manager.all_travellers()]

    def get_results(self) -> Dict:
        """Summary of the run.

        Returns:
            Dictionary containing counters and computed metrics
        """
        end_time = self.completion_time if self.completion_time is not None else self.current_time
        metrics = self.metrics_collector.compute_metrics(self.get_traveller_timelines(), end_time)

        return {
            'total_boxes': self.total_boxes,
            'delivered_boxes': self.delivered_count,
            'completion_rate': self.delivered_count / self.total_boxes if self.total_boxes > 0 else 1.0,
            'is_complete': self.is_complete,
            'completion_time': self.completion_time,
            'simulation_time': self.current_time,
            'num_travellers': len(self.traveller_manager.all_travellers()),
            'events_processed': self.clock.events_processed,
            'num_issues': len(self.issues),
            **metrics,
        }

    def _handle_spawn(self, event: Event) -> None:
        """Handle a spawn request."""
        if self.completion_time is not None:
            self.logger.info("Simulation is complete. Reset to spawn more travellers.")
            return
        if self.box_pool.count == 0:
            self.logger.info("No more boxes to deliver!")
            return

        traveller = self.traveller_manager.create_traveller()
        traveller.start()

    def _on_event_processed(self, event: Event) -> None:
        """Observe traveller events: record deliveries and retire finished travellers."""
        if event.event_type == EventType.DELIVERY_COMPLETE:
            self.metrics_collector.record_delivery(self.current_time, event.data['traveller_id'])

        elif event.event_type == EventType.FINISH_JOURNEY:
            traveller_id = event.data['traveller_id']
            traveller = self.traveller_manager.get_traveller(traveller_id)
            if traveller is not None and traveller.is_finished:
                self.traveller_manager.remove_traveller(traveller_id)
                self.logger.info(f"Traveller {traveller_id} ({traveller.name}) retired")
            self._check_complete()

    def _check_complete(self) -> None:
        if self.completion_time is not None or not self.is_complete:
            return

        self.completion_time = self.current_time
        self.clock.is_running = False
        self.logger.info(
            f"Simulation Complete! All {self.total_boxes} boxes delivered "
            f"in {self.completion_time:.1f} seconds."
        )
