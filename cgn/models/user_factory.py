"""User document builders for Campus Gaming Network.

This module turns validated sign-up and edit-profile forms into the payloads
written to the `users` collection, so every writer applies the same defaults.
"""

import copy
import logging
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from pydantic import ValidationError

from cgn.engine.validation import (
    FormInvalidError,
    compose_birthdate,
    load_form,
    validate_edit_user,
    validate_sign_up,
)
from cgn.models.constants import ACCOUNTS, BASE_USER
from cgn.models.forms import EditUserForm, SignUpForm
from cgn.models.game import Game, unique_games
from cgn.utilities.formatting import create_gravatar_hash

logger = logging.getLogger(__name__)

# Profile text fields copied (trimmed) into an update payload
_PROFILE_TEXT_FIELDS = ["major", "minor", "bio", "hometown", *ACCOUNTS]


def ref_id(value: Any) -> str:
    """Id carried by a plain id, a mapping or a reference object."""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, Mapping):
        return str(value.get("id") or "")
    return str(getattr(value, "id", "") or "")


def ref_name(value: Any) -> str:
    if isinstance(value, Mapping):
        return str(value.get("name") or "")
    return str(getattr(value, "name", "") or "")


def trim_text(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def game_documents(games: Optional[Iterable[Any]]) -> List[Dict[str, Any]]:
    """Normalize a game selection to stored game dicts, unique by id.

    Entries that cannot be read as a game are skipped.
    """
    parsed: List[Game] = []
    for game in games or []:
        try:
            parsed.append(Game.model_validate(game))
        except ValidationError:
            logger.warning(f"Skipping unreadable game entry of type {type(game).__name__}")
    return [game.model_dump(by_alias=True, exclude_none=True) for game in unique_games(parsed)]


def create_user_document(
    form: Any,
    uid: str,
    school_name: str = "",
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Build the user document written after a successful sign-up.

    Args:
        form: Sign-up field bag or SignUpForm
        uid: Id issued by the authentication provider
        school_name: Display name of the selected school (falls back to the
            name carried by the school reference)
        now: Creation timestamp (defaults to the current UTC time)

    Returns:
        Document with BASE_USER defaults applied

    Raises:
        FormInvalidError: If the form does not validate
    """
    result = validate_sign_up(form)
    if not result.is_valid:
        logger.info(f"Rejected sign-up document for {uid}: {sorted(result.errors)}")
        raise FormInvalidError("sign_up", result)

    sign_up = load_form(SignUpForm, form)
    now = now or datetime.now(timezone.utc)
    document = copy.deepcopy(BASE_USER)
    document.update(
        {
            "id": uid,
            "firstName": trim_text(sign_up.first_name),
            "lastName": trim_text(sign_up.last_name),
            "status": sign_up.status,
            "gravatar": create_gravatar_hash(sign_up.email),
            "school": {
                "id": ref_id(sign_up.school),
                "name": school_name or ref_name(sign_up.school),
            },
            "createdAt": now,
            "updatedAt": now,
        }
    )
    logger.debug(f"Built user document {uid}")
    return document


def build_profile_update(form: Any, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Build the update payload for an edited profile.

    Text fields are trimmed, the birthdate is composed from its parts, game
    lists are de-duplicated by id, and keys whose value is None are left out
    so the stored value is kept.

    Raises:
        FormInvalidError: If the form does not validate
    """
    result = validate_edit_user(form)
    if not result.is_valid:
        logger.info(f"Rejected profile update: {sorted(result.errors)}")
        raise FormInvalidError("edit_user", result)

    edit = load_form(EditUserForm, form)
    data: Dict[str, Any] = {
        "firstName": trim_text(edit.first_name),
        "lastName": trim_text(edit.last_name),
        "status": edit.status,
        "timezone": edit.timezone,
        "birthdate": compose_birthdate(edit.birth_year, edit.birth_month, edit.birth_day),
        "school": {"id": ref_id(edit.school)},
        "updatedAt": now or datetime.now(timezone.utc),
    }
    for field in _PROFILE_TEXT_FIELDS:
        data[field] = trim_text(getattr(edit, field))
    if edit.favorite_games is not None:
        data["favoriteGames"] = game_documents(edit.favorite_games)
    if edit.currently_playing is not None:
        data["currentlyPlaying"] = game_documents(edit.currently_playing)

    return {key: value for key, value in data.items() if value is not None}
