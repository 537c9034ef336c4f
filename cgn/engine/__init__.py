"""Form validation and record mapping engine for Campus Gaming Network."""

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
from cgn.engine.mapping import map_event, map_event_response, map_events, map_school, map_user, map_users

__all__ = [
    "FormInvalidError",
    "ValidationResult",
    "validate_sign_up",
    "validate_log_in",
    "validate_forgot_password",
    "validate_password_reset",
    "validate_create_event",
    "validate_edit_user",
    "map_user",
    "map_users",
    "map_school",
    "map_event",
    "map_events",
    "map_event_response",
]
