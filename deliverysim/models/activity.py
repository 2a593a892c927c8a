"""Traveller activity states."""

from enum import Enum


class TravellerActivity(Enum):
    """What a traveller is doing."""
    STARTING = "Starting"
    MOVING_TO_PICKUP = "MovingToPickup"
    PICKING_UP = "PickingUp"
    MOVING_TO_DELIVERY = "MovingToDelivery"
    DELIVERING = "Delivering"
    RETURNING = "Returning"
    WAITING = "Waiting"
    FINISHED = "Finished"

    @property
    def label(self) -> str:
        """Human readable description for status displays."""
        return _LABELS[self]


_LABELS = {
    TravellerActivity.STARTING: "Starting journey",
    TravellerActivity.MOVING_TO_PICKUP: "Moving to pickup",
    TravellerActivity.PICKING_UP: "Picking up box",
    TravellerActivity.MOVING_TO_DELIVERY: "Delivering box",
    TravellerActivity.DELIVERING: "Dropping off box",
    TravellerActivity.RETURNING: "Returning for next",
    TravellerActivity.WAITING: "Waiting",
    TravellerActivity.FINISHED: "Journey complete",
}
