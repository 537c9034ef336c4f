"""Shared pydantic base for stored records.

Stored documents use camelCase keys; Python code uses snake_case. Records
accept either and fill missing text, list, flag and counter fields with empty
values instead of None.
"""

from collections.abc import Mapping
from datetime import date, datetime, timezone
from typing import Any, Optional, Union, get_args, get_origin

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


def timestamp_to_datetime(value: Any) -> Any:
    """Convert a serialized document-store timestamp to a datetime.

    Accepts `{"seconds": ..., "nanoseconds": ...}` (and the `_seconds`
    variant) as well as objects exposing `to_datetime()`. Anything else is
    returned unchanged.
    """
    if isinstance(value, Mapping):
        seconds = value.get("seconds", value.get("_seconds"))
        nanos = value.get("nanoseconds", value.get("_nanoseconds", 0)) or 0
        if isinstance(seconds, (int, float)) and not isinstance(seconds, bool):
            return datetime.fromtimestamp(seconds + nanos / 1e9, tz=timezone.utc)
        return value
    to_datetime = getattr(value, "to_datetime", None)
    if callable(to_datetime) and not isinstance(value, (date, datetime)):
        return to_datetime()
    return value


def _annotation_types(annotation: Any) -> tuple:
    if get_origin(annotation) is Union:
        return tuple(arg for arg in get_args(annotation) if arg is not type(None))
    return (annotation,)


class RecordModel(BaseModel):
    """Base for every stored record and display record."""

    @field_validator("*", mode="before")
    @classmethod
    def _empty_values(cls, value: Any, info) -> Any:
        field = cls.model_fields.get(info.field_name)
        if field is None:
            return value
        types = _annotation_types(field.annotation)
        if types == (str,):
            if value is None:
                return ""
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                return str(value)
        elif types == (bool,) and value is None:
            return False
        elif types == (int,) and value is None:
            return 0
        elif any(get_origin(t) is list for t in types) and value is None:
            return []
        elif len(types) == 1 and isinstance(types[0], type) and issubclass(types[0], BaseModel) and value is None:
            return {}
        elif datetime in types or date in types:
            return timestamp_to_datetime(value)
        return value

    class Config:
        """Pydantic configuration."""
        alias_generator = to_camel
        populate_by_name = True
        use_enum_values = True
        arbitrary_types_allowed = True


class DocumentRef(RecordModel):
    """Reference to another stored document.

    Built from a plain id, a mapping with an `id`, or an opaque document
    handle exposing `.id`. The handle is carried in `ref` and never
    serialized.
    """

    id: str = ""
    ref: Optional[Any] = Field(None, exclude=True, description="Opaque document handle")

    @model_validator(mode="before")
    @classmethod
    def _from_handle(cls, value: Any) -> Any:
        if value is None or isinstance(value, (Mapping, BaseModel)):
            return value
        if isinstance(value, (str, int)) and not isinstance(value, bool):
            return {"id": str(value)}
        handle_id = getattr(value, "id", None)
        if handle_id is not None:
            return {"id": str(handle_id), "ref": value}
        return value
