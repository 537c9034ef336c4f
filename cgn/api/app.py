"""FastAPI web application for Campus Gaming Network."""

import logging
from typing import Any, Callable, Dict

from fastapi import Body, Depends, FastAPI, HTTPException
from pydantic import BaseModel

from cgn import __version__, config
from cgn.engine.mapping import map_event, map_event_response, map_school, map_user
from cgn.engine.validation import (
    FormInvalidError,
    ValidationResult,
    validate_create_event,
    validate_edit_user,
    validate_forgot_password,
    validate_log_in,
    validate_password_reset,
    validate_sign_up,
)
from cgn.models.event import EventRecord
from cgn.models.event_factory import create_event_document
from cgn.models.school import SchoolProfile
from cgn.models.user import UserProfile
from cgn.models.user_factory import build_profile_update, create_user_document
from cgn.store.record_cache import RecordCache

logging.basicConfig(level=config.get_log_level())
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Campus Gaming Network API",
    description="Form validation and record mapping for Campus Gaming Network",
    version=__version__,
)

VALIDATORS: Dict[str, Callable[[Any], ValidationResult]] = {
    "sign-up": validate_sign_up,
    "log-in": validate_log_in,
    "forgot-password": validate_forgot_password,
    "password-reset": validate_password_reset,
    "create-event": validate_create_event,
    "edit-user": validate_edit_user,
}

# One cache per entity kind; override the getters in tests
user_cache: RecordCache[UserProfile] = RecordCache(config.get_cache_max_entries(), name="users")
school_cache: RecordCache[SchoolProfile] = RecordCache(config.get_cache_max_entries(), name="schools")
event_cache: RecordCache[EventRecord] = RecordCache(config.get_cache_max_entries(), name="events")


def get_user_cache() -> RecordCache[UserProfile]:
    return user_cache


def get_school_cache() -> RecordCache[SchoolProfile]:
    return school_cache


def get_event_cache() -> RecordCache[EventRecord]:
    return event_cache


def _record_json(record: BaseModel) -> Dict[str, Any]:
    return record.model_dump(mode="json", by_alias=True)


def _cached_or_404(cache: RecordCache, record_id: str, kind: str) -> Dict[str, Any]:
    record = cache.get(record_id)
    if record is None:
        raise HTTPException(status_code=404, detail=f"{kind} {record_id} not found")
    return _record_json(record)


def _invalid_form(e: FormInvalidError) -> HTTPException:
    return HTTPException(status_code=422, detail={"operation": e.operation, "errors": e.errors})


def _map_or_400(mapper: Callable[[Any], Any], payload: Dict[str, Any]) -> Any:
    try:
        return mapper(payload)
    except (TypeError, ValueError) as e:
        logger.warning(f"Could not map record: {e}")
        raise HTTPException(status_code=400, detail=f"Could not map record: {str(e)}")


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}


@app.post("/validate/{operation}")
async def validate_form(operation: str, fields: Dict[str, Any] = Body(...)):
    """Validate a form field bag. Invalid forms are a normal 200 response."""
    validator = VALIDATORS.get(operation)
    if validator is None:
        raise HTTPException(status_code=404, detail=f"Unknown form: {operation}")
    return validator(fields).model_dump()


@app.post("/users/map")
async def map_user_record(
    record: Dict[str, Any] = Body(...),
    cache: RecordCache[UserProfile] = Depends(get_user_cache),
):
    """Map a stored user record and cache it under its id."""
    user = _map_or_400(map_user, record)
    if user.id:
        cache.set(user.id, user)
    return _record_json(user)


@app.post("/users/profile-update")
async def profile_update(fields: Dict[str, Any] = Body(...)):
    """Build the update payload for an edited profile."""
    try:
        return build_profile_update(fields)
    except FormInvalidError as e:
        raise _invalid_form(e)


@app.get("/users/{user_id}")
async def get_user(user_id: str, cache: RecordCache[UserProfile] = Depends(get_user_cache)):
    return _cached_or_404(cache, user_id, "User")


@app.post("/users/{uid}")
async def create_user(uid: str, fields: Dict[str, Any] = Body(...)):
    """Build the user document for a successful sign-up."""
    try:
        return create_user_document(fields, uid)
    except FormInvalidError as e:
        raise _invalid_form(e)


@app.post("/schools/map")
async def map_school_record(
    record: Dict[str, Any] = Body(...),
    cache: RecordCache[SchoolProfile] = Depends(get_school_cache),
):
    """Map a stored school record and cache it under its id."""
    school = _map_or_400(map_school, record)
    if school.id:
        cache.set(school.id, school)
    return _record_json(school)


@app.get("/schools/{school_id}")
async def get_school(school_id: str, cache: RecordCache[SchoolProfile] = Depends(get_school_cache)):
    return _cached_or_404(cache, school_id, "School")


@app.post("/events/map")
async def map_event_record(
    record: Dict[str, Any] = Body(...),
    cache: RecordCache[EventRecord] = Depends(get_event_cache),
):
    """Map a stored event record and cache it under its id."""
    event = _map_or_400(map_event, record)
    if event.id:
        cache.set(event.id, event)
    return _record_json(event)


@app.get("/events/{event_id}")
async def get_event(event_id: str, cache: RecordCache[EventRecord] = Depends(get_event_cache)):
    return _cached_or_404(cache, event_id, "Event")


@app.post("/events")
async def create_event(fields: Dict[str, Any] = Body(...)):
    """Build the document for a new event."""
    try:
        return create_event_document(fields)
    except FormInvalidError as e:
        raise _invalid_form(e)


@app.post("/event-responses/map")
async def map_event_response_record(record: Dict[str, Any] = Body(...)):
    """Flatten a stored event response into one display record."""
    return _record_json(_map_or_400(map_event_response, record))
