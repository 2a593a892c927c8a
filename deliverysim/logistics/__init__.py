"""Delivery domain: boxes, travellers and their timelines."""

from ..models.activity import TravellerActivity
from .box_pool import Box, BoxPool, BoxState
from .timeline import TimelineRecorder, TravellerSegment
from .traveller import Traveller, TravellerManager

__all__ = [
    "TravellerActivity",
    "Box",
    "BoxPool",
    "BoxState",
    "TimelineRecorder",
    "TravellerSegment",
    "Traveller",
    "TravellerManager",
]
