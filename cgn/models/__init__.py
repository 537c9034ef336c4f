"""Data models for Campus Gaming Network."""

from cgn.models.game import Game
from cgn.models.school import School, SchoolProfile, SchoolRef
from cgn.models.user import User, UserProfile, UserRef
from cgn.models.event import Event, EventRecord, EventResponseRecord

__all__ = [
    "Game",
    "School",
    "SchoolProfile",
    "SchoolRef",
    "User",
    "UserProfile",
    "UserRef",
    "Event",
    "EventRecord",
    "EventResponseRecord",
]
