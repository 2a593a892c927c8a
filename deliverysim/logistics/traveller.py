"""Traveller delivery workflow driven entirely by scheduled events."""

from typing import Callable, Dict, List, Optional

from .box_pool import Box, BoxPool, Point
from .timeline import TimelineRecorder
from ..core.clock import SimulationClock
from ..core.errors import EmptyPoolError, UnknownTravellerError
from ..core.event_queue import Event, EventType
from ..models.activity import TravellerActivity
from ..models.simulation_config import SimulationConfig
from ..utils.logger import setup_logger

TRAVELLER_NAMES = [
    "Alex", "Blake", "Casey", "Dana", "Ellis", "Finley", "Gray", "Harper",
    "Indie", "Jordan", "Kelly", "Logan", "Morgan", "Noel", "Oakley", "Parker",
    "Quinn", "River", "Sage", "Taylor", "Unity", "Vale", "Wren", "Xander", "Yael", "Zara",
]


class Traveller:
    """A traveller shuttling boxes from the pickup point to the delivery point.

    The traveller has no update loop. Each step of its cycle schedules the
    next one on the clock:

        STARTING -> MOVING_TO_PICKUP -> PICKING_UP -> MOVING_TO_DELIVERY
        -> DELIVERING -> (RETURNING -> MOVING_TO_PICKUP ...) | FINISHED

    Arriving at a waypoint is instantaneous; pickup and delivery handling
    are separate events after ``dwell_delay``, so the timeline shows travel
    and handling as distinct segments.
    """

    def __init__(self, traveller_id: int, clock: SimulationClock, box_pool: BoxPool,
                 delivered_boxes: List[Box], config: SimulationConfig,
                 manager: "TravellerManager", name: Optional[str] = None):
        """Initialize traveller.

        Args:
            traveller_id: Unique traveller identifier
            clock: Simulation clock used for all scheduling
            box_pool: Pool of boxes awaiting pickup
            delivered_boxes: Collection receiving delivered boxes
            config: Simulation configuration
            manager: Manager that decides whether this traveller is active
            name: Display name (picked from TRAVELLER_NAMES if None)
        """
        self.traveller_id = traveller_id
        self.name = name or TRAVELLER_NAMES[traveller_id % len(TRAVELLER_NAMES)]
        self.clock = clock
        self.box_pool = box_pool
        self.delivered_boxes = delivered_boxes
        self.config = config
        self.manager = manager
        self.logger = setup_logger(f"Traveller-{traveller_id}")

        self.pickup_point = config.layout.point('pickup')
        self.delivery_point = config.layout.point('delivery')

        # Workflow state
        self.activity: Optional[TravellerActivity] = None
        self.position: Point = config.layout.point('start')
        self.planned_route: List[Point] = []
        self.current_waypoint_index = 0

        # Box ownership: assigned_box is reserved for the current cycle,
        # _carried_box is in hand between pickup and delivery
        self.assigned_box: Optional[Box] = None
        self._carried_box: Optional[Box] = None
        self.carried_box_id: Optional[int] = None
        self.has_box = False

        self.timeline = TimelineRecorder(traveller_id, self.name)

        # Statistics
        self.boxes_delivered = 0
        self.spawn_time: Optional[float] = None
        self.finish_time: Optional[float] = None

    @property
    def is_finished(self) -> bool:
        return self.activity == TravellerActivity.FINISHED

    def start(self) -> None:
        """Begin the first cycle. Called from the spawn event handler.

        Raises:
            EmptyPoolError: If there is no box to reserve
        """
        now = self.clock.current_time
        self.spawn_time = now
        self._transition(TravellerActivity.STARTING)

        self._reserve_box()
        self._install_route([self.pickup_point])

        self.logger.info(f"{self.name} starting journey at t={now:.2f}")
        self._schedule(self.config.start_delay, EventType.START_MOVE, self._on_start_move)

    def _on_start_move(self, event: Event) -> None:
        self._transition(TravellerActivity.MOVING_TO_PICKUP)
        self._schedule(self.config.leg_duration, EventType.REACH_WAYPOINT, self._on_reach_waypoint)

    def _on_reach_waypoint(self, event: Event) -> None:
        self.position = self.planned_route[self.current_waypoint_index]
        self.current_waypoint_index += 1

        if self.current_waypoint_index < len(self.planned_route):
            # Intermediate waypoint, keep moving
            self._schedule(self.config.leg_duration, EventType.REACH_WAYPOINT, self._on_reach_waypoint)
            return

        if self.activity == TravellerActivity.MOVING_TO_PICKUP:
            self._transition(TravellerActivity.PICKING_UP)
            self._schedule(self.config.dwell_delay, EventType.PICKUP_COMPLETE, self._on_pickup_complete)
        elif self.activity == TravellerActivity.MOVING_TO_DELIVERY:
            self._transition(TravellerActivity.DELIVERING)
            self._schedule(self.config.dwell_delay, EventType.DELIVERY_COMPLETE, self._on_delivery_complete)
        else:
            raise RuntimeError(
                f"Traveller {self.traveller_id} reached a waypoint while {self.activity.value}"
            )

    def _on_pickup_complete(self, event: Event) -> None:
        if self.assigned_box is None:
            self._reserve_box()

        box = self.assigned_box
        box.pick_up(self.traveller_id, self.position)
        self.assigned_box = None
        self._carried_box = box
        self.carried_box_id = box.box_id
        self.has_box = True
        self.logger.debug(f"{self.name} picked up box {box.box_id} at t={self.clock.current_time:.2f}")

        self._install_route([self.delivery_point])
        self._transition(TravellerActivity.MOVING_TO_DELIVERY)
        self._schedule(self.config.leg_duration, EventType.REACH_WAYPOINT, self._on_reach_waypoint)

    def _on_delivery_complete(self, event: Event) -> None:
        box = self._carried_box
        box.deliver(self.position)
        self.delivered_boxes.append(box)
        self._carried_box = None
        self.carried_box_id = None
        self.has_box = False
        self.boxes_delivered += 1
        self.logger.debug(f"{self.name} delivered box {box.box_id} at t={self.clock.current_time:.2f}")

        if self.box_pool.count > 0:
            self._reserve_box()
            self._install_route([self.pickup_point])
            self._transition(TravellerActivity.RETURNING)
            self._schedule(self.config.effective_return_delay, EventType.START_MOVE, self._on_start_move)
        else:
            self._schedule(0.0, EventType.FINISH_JOURNEY, self._on_finish_journey)

    def _on_finish_journey(self, event: Event) -> None:
        now = self.clock.current_time
        self.timeline.close(now)
        self.activity = TravellerActivity.FINISHED
        self.finish_time = now
        self.planned_route = []
        self.current_waypoint_index = 0

        if self.assigned_box is not None:
            self.box_pool.enqueue(self.assigned_box)
            self.assigned_box = None

        self.logger.info(
            f"{self.name} finished at t={now:.2f} after delivering {self.boxes_delivered} box(es)"
        )

    def _reserve_box(self) -> None:
        """Take the head box from the pool for the coming cycle.

        On an empty pool the traveller is sent to finish before the error
        propagates, so it never waits on a box that does not exist.
        """
        try:
            box = self.box_pool.dequeue()
        except EmptyPoolError:
            self.logger.error(
                f"{self.name} could not claim a box at t={self.clock.current_time:.2f}: pool is empty"
            )
            self._schedule(0.0, EventType.FINISH_JOURNEY, self._on_finish_journey)
            raise

        box.assign_to(self.traveller_id)
        self.assigned_box = box

    def _install_route(self, waypoints: List[Point]) -> None:
        self.planned_route = list(waypoints)
        self.current_waypoint_index = 0

    def _transition(self, activity: TravellerActivity) -> None:
        self.timeline.begin(activity, self.clock.current_time)
        self.activity = activity
        self.logger.debug(f"{self.name}: {activity.label} (t={self.clock.current_time:.2f})")

    def _schedule(self, delay: float, event_type: EventType,
                  handler: Callable[[Event], None]) -> None:
        """Schedule one of this traveller's handlers ``delay`` seconds from now."""
        def dispatch(event: Event) -> None:
            if not self.manager.is_active(self):
                raise UnknownTravellerError(
                    f"{event.event_type.value} event for inactive traveller {self.traveller_id}"
                )
            handler(event)

        self.clock.schedule_event(
            self.clock.current_time + delay,
            event_type,
            data={'traveller_id': self.traveller_id},
            handler=dispatch,
        )

    def get_info(self, current_time: float) -> Dict:
        """Traveller data for timeline displays.

        Args:
            current_time: Time substituted for the end of an ongoing segment

        Returns:
            Dictionary with id, name, current activity and timeline
        """
        return {
            'id': self.traveller_id,
            'name': self.name,
            'current_activity': self.activity.value if self.activity else None,
            'timeline': self.timeline.snapshot(current_time),
        }

    def __repr__(self) -> str:
        activity = self.activity.value if self.activity else "new"
        return f"Traveller(id={self.traveller_id}, name={self.name}, activity={activity})"


class TravellerManager:
    """Owns the active travellers and allocates their ids."""

    def __init__(self, clock: SimulationClock, box_pool: BoxPool,
                 delivered_boxes: List[Box], config: SimulationConfig):
        """Initialize traveller manager.

        Args:
            clock: Simulation clock
            box_pool: Pool of boxes awaiting pickup
            delivered_boxes: Collection receiving delivered boxes
            config: Simulation configuration
        """
        self.clock = clock
        self.box_pool = box_pool
        self.delivered_boxes = delivered_boxes
        self.config = config
        self.logger = setup_logger(self.__class__.__name__)

        self.travellers: Dict[int, Traveller] = {}
        self.finished: List[Traveller] = []
        self.next_traveller_id = 0

    def create_traveller(self) -> Traveller:
        """Create a traveller with the next free id and register it as active.

        Returns:
            Created traveller
        """
        traveller_id = self.next_traveller_id
        self.next_traveller_id += 1

        traveller = Traveller(
            traveller_id, self.clock, self.box_pool,
            self.delivered_boxes, self.config, self,
        )
        self.travellers[traveller_id] = traveller

        self.logger.debug(f"Created traveller {traveller_id} ({traveller.name})")
        return traveller

    def get_traveller(self, traveller_id: int) -> Optional[Traveller]:
        return self.travellers.get(traveller_id)

    def is_active(self, traveller: Traveller) -> bool:
        """True if ``traveller`` is the registered instance for its id."""
        return self.travellers.get(traveller.traveller_id) is traveller

    def remove_traveller(self, traveller_id: int) -> None:
        """Move a traveller from the active set to the finished list."""
        traveller = self.travellers.pop(traveller_id, None)
        if traveller is not None:
            self.finished.append(traveller)
            self.logger.debug(f"Removed traveller {traveller_id}")

    def num_active(self) -> int:
        return len(self.travellers)

    def all_travellers(self) -> List[Traveller]:
        """Finished and active travellers, ordered by id."""
        return sorted(self.finished + list(self.travellers.values()),
                      key=lambda t: t.traveller_id)

    def reset(self, box_pool: BoxPool, config: SimulationConfig) -> None:
        """Forget all travellers and restart id allocation."""
        self.travellers.clear()
        self.finished.clear()
        self.next_traveller_id = 0
        self.box_pool = box_pool
        self.config = config
