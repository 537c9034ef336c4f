"""Event and event response data models for Campus Gaming Network."""

from collections.abc import Mapping
from datetime import datetime
from typing import Any, Optional

from pydantic import AliasChoices, Field, computed_field, model_validator
from pydantic.alias_generators import to_snake

from cgn.models.base import RecordModel
from cgn.models.game import Game
from cgn.models.school import SchoolRef
from cgn.models.user import UserRef


def _now_for(value: datetime) -> datetime:
    if value.tzinfo:
        return datetime.now(value.tzinfo)
    return datetime.now()


class Event(RecordModel):
    """Event as stored in the `events` collection."""

    id: str = Field("", description="Event document id")
    name: str = Field("", description="Event name")
    description: str = Field("", description="Event description")
    game: Game = Field(default_factory=Game, description="Game being played")
    school: SchoolRef = Field(default_factory=SchoolRef, description="School hosting the event")
    host: UserRef = Field(
        default_factory=UserRef,
        validation_alias=AliasChoices("host", "creator"),
        description="User hosting the event (stored as `creator`)",
    )
    is_online_event: bool = Field(False, description="Whether the event happens online")
    location: str = Field("", description="Free-text location or address")
    place_id: str = Field("", description="Maps place id for the location")
    start_date_time: Optional[datetime] = Field(None, description="Event start")
    end_date_time: Optional[datetime] = Field(None, description="Event end")
    page_views: int = Field(0, description="Page view counter")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    ref: Optional[Any] = Field(None, exclude=True, description="Opaque document handle")


class EventRecord(Event):
    """Display-ready event."""

    @computed_field
    @property
    def has_started(self) -> bool:
        if self.start_date_time is None:
            return False
        return self.start_date_time <= _now_for(self.start_date_time)

    @computed_field
    @property
    def has_ended(self) -> bool:
        if self.end_date_time is None:
            return False
        return self.end_date_time < _now_for(self.end_date_time)


# Keys of the nested user copy that are lifted into the flat record
_USER_FIELDS = {"id": "user_id", "first_name": "user_first_name", "last_name": "user_last_name", "ref": "user_ref"}


def flatten_event_response(data: Any) -> Any:
    """Lift the nested event and user copies of a response into one level.

    Input that is already flat is returned unchanged.
    """
    if not isinstance(data, Mapping):
        return data
    event = data.get("event")
    user = data.get("user")
    if not isinstance(event, Mapping) and not isinstance(user, Mapping):
        return data

    flat = {}
    if isinstance(event, Mapping):
        for key, value in event.items():
            name = to_snake(str(key))
            flat["event_ref" if name == "ref" else name] = value
    for key, value in data.items():
        name = to_snake(str(key))
        if name in ("event", "user"):
            continue
        if name == "id" and isinstance(event, Mapping):
            flat["response_id"] = value
        else:
            flat[name] = value
    if isinstance(user, Mapping):
        for key, value in user.items():
            name = to_snake(str(key))
            if name in _USER_FIELDS:
                flat[_USER_FIELDS[name]] = value
    return flat


class EventResponseRecord(Event):
    """An event response flattened into one level.

    Stored responses nest copies of the event and the user:
    `{"event": {...}, "user": {...}, "school": {...}, "response": "YES"}`.
    The event's fields move to the top level, the user's to `user_*` fields,
    and the response document's own id to `response_id`.
    """

    response: str = Field("", description="YES, NO or MAYBE")
    response_id: str = Field("", description="Event response document id")
    user_id: str = ""
    user_first_name: str = ""
    user_last_name: str = ""
    user_ref: Optional[Any] = Field(None, exclude=True)
    event_ref: Optional[Any] = Field(None, exclude=True)

    @model_validator(mode="before")
    @classmethod
    def _flatten(cls, data: Any) -> Any:
        return flatten_event_response(data)

    @computed_field
    @property
    def user_full_name(self) -> str:
        return f"{self.user_first_name} {self.user_last_name}".strip()

    @computed_field
    @property
    def school_id(self) -> str:
        return self.school.id

    @computed_field
    @property
    def school_name(self) -> str:
        return self.school.name
