"""Record mapping for Campus Gaming Network.

Turns raw stored records (plus the document handle they were read through)
into display-ready records with derived fields. Mapping is idempotent: a
mapped record can be mapped again and yields the same derived fields, so
cached records can be re-mapped safely.

Malformed optional values fall back to their empty default rather than
failing the whole record.
"""

import logging
from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ValidationError
from pydantic.alias_generators import to_camel, to_snake

from cgn.models.event import EventRecord, EventResponseRecord, flatten_event_response
from cgn.models.school import SchoolProfile
from cgn.models.user import UserProfile

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


def _record_data(raw: Any) -> Dict[str, Any]:
    if isinstance(raw, BaseModel):
        return dict(raw)
    if isinstance(raw, Mapping):
        return dict(raw)
    raise TypeError(f"Cannot map record of type {type(raw).__name__}")


def _build(model_cls: Type[RecordT], data: Dict[str, Any]) -> RecordT:
    """Validate a record, dropping fields that fail until it validates.

    Dropped fields take their default value.
    """
    data = dict(data)
    while True:
        try:
            return model_cls.model_validate(data)
        except ValidationError as e:
            bad_keys = set()
            for error in e.errors():
                if error.get("loc"):
                    key = str(error["loc"][0])
                    bad_keys.update({key, to_snake(key), to_camel(key)})
            dropped = [key for key in data if key in bad_keys]
            if not dropped:
                raise
            logger.warning(f"{model_cls.__name__}: dropping malformed fields {sorted(dropped)}")
            for key in dropped:
                del data[key]


def _with_handle(data: Dict[str, Any], handle: Any) -> Dict[str, Any]:
    if handle is None:
        return data
    data["ref"] = handle
    if not data.get("id"):
        handle_id = getattr(handle, "id", None)
        if handle_id is not None:
            data["id"] = str(handle_id)
    return data


def map_user(raw: Any, handle: Any = None) -> Optional[UserProfile]:
    """Map a stored user to a UserProfile.

    Args:
        raw: Stored user document data (mapping or model)
        handle: Document handle the data was read through, kept as `ref`

    Returns:
        UserProfile with full name, display status, account flags and
        gravatar hash derived, or None when there is no record
    """
    if raw is None:
        return None
    return _build(UserProfile, _with_handle(_record_data(raw), handle))


def map_school(raw: Any, handle: Any = None) -> Optional[SchoolProfile]:
    """Map a stored school to a SchoolProfile with formatted name/address and links."""
    if raw is None:
        return None
    return _build(SchoolProfile, _with_handle(_record_data(raw), handle))


def map_event(raw: Any, handle: Any = None) -> Optional[EventRecord]:
    """Map a stored event, attaching the document handle."""
    if raw is None:
        return None
    return _build(EventRecord, _with_handle(_record_data(raw), handle))


def map_event_response(raw: Any, handle: Any = None) -> Optional[EventResponseRecord]:
    """Map a stored event response to a single-level record.

    The nested event copy supplies the top-level event fields, the nested user
    copy supplies `user_*` fields. The handle (the response document) is kept
    as `ref`; the event's own handle as `event_ref`.
    """
    if raw is None:
        return None
    data = flatten_event_response(_with_handle(_record_data(raw), handle))
    return _build(EventResponseRecord, data)


def map_users(records: Iterable[Tuple[Any, Any]]) -> List[UserProfile]:
    """Map (data, handle) pairs, skipping missing records."""
    users = [map_user(data, handle) for data, handle in records]
    return [user for user in users if user is not None]


def map_events(records: Iterable[Tuple[Any, Any]]) -> List[EventRecord]:
    """Map (data, handle) pairs, skipping missing records."""
    events = [map_event(data, handle) for data, handle in records]
    return [event for event in events if event is not None]
