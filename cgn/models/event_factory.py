"""Event document builder for Campus Gaming Network."""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from cgn.engine.validation import (
    FormInvalidError,
    is_truthy,
    load_form,
    parse_date_time,
    validate_create_event,
)
from cgn.models.forms import CreateEventForm
from cgn.models.user_factory import game_documents, ref_id, trim_text

logger = logging.getLogger(__name__)


def create_event_document(form: Any, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Build the document written to the `events` collection for a new event.

    Online events store an empty location. The host is stored as `creator`
    and the page view counter starts at zero.

    Args:
        form: Create-event field bag or CreateEventForm
        now: Creation timestamp (defaults to the current UTC time)

    Returns:
        Event document ready to be written

    Raises:
        FormInvalidError: If the form does not validate
    """
    result = validate_create_event(form)
    if not result.is_valid:
        logger.info(f"Rejected event document: {sorted(result.errors)}")
        raise FormInvalidError("create_event", result)

    event = load_form(CreateEventForm, form)
    now = now or datetime.now(timezone.utc)
    is_online_event = is_truthy(event.is_online_event)
    games = game_documents([event.game])

    document: Dict[str, Any] = {
        "name": trim_text(event.name),
        "description": trim_text(event.description or ""),
        "game": games[0] if games else None,
        "creator": {"id": ref_id(event.host)},
        "isOnlineEvent": is_online_event,
        "location": "" if is_online_event else trim_text(event.location or ""),
        "placeId": "" if is_online_event else trim_text(event.place_id or ""),
        "startDateTime": parse_date_time(event.start_date_time),
        "endDateTime": parse_date_time(event.end_date_time),
        "pageViews": 0,
        "createdAt": now,
        "updatedAt": now,
    }
    if ref_id(event.school):
        document["school"] = {"id": ref_id(event.school)}
    logger.debug(f"Built event document {document['name']!r}")
    return document
