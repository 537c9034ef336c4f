"""Form validation for Campus Gaming Network.

Each validator takes a field bag (a mapping with camelCase or snake_case
keys) or the matching form model and returns a ValidationResult. Validators
never raise for malformed input: a value that cannot be read simply fails its
rule. Every field is checked, so callers can show all errors at once. Within a
field, rules run in order (required, then format, then ordering) and the
first failure is reported.
"""

import calendar
import logging
import re
from collections.abc import Mapping, Set
from datetime import date, datetime, time
from typing import Any, Dict, Optional, Type, TypeVar

from pydantic import BaseModel, Field, computed_field
from pydantic.alias_generators import to_snake

from cgn.models.constants import (
    ACCOUNTS,
    DAYS,
    MAX_BIO_LENGTH,
    MAX_CURRENTLY_PLAYING_LIST,
    MAX_DEFAULT_STRING_LENGTH,
    MAX_DESCRIPTION_LENGTH,
    MAX_FAVORITE_GAME_LIST,
    MIN_PASSWORD_LENGTH,
    MONTHS,
    STATUS_VALUES,
    TIMEZONE_VALUES,
    YEARS,
)
from cgn.models.forms import (
    CreateEventForm,
    EditUserForm,
    ForgotPasswordForm,
    LogInForm,
    PasswordResetForm,
    SignUpForm,
)

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# Optional profile text fields bounded by MAX_DEFAULT_STRING_LENGTH (field, label)
PROFILE_TEXT_FIELDS = {
    "major": "Major",
    "minor": "Minor",
    "hometown": "Hometown",
    **ACCOUNTS,
}

FormT = TypeVar("FormT", bound=BaseModel)


class ValidationResult(BaseModel):
    """Outcome of validating one form."""

    errors: Dict[str, str] = Field(default_factory=dict, description="Field name to error message")

    @computed_field
    @property
    def is_valid(self) -> bool:
        return not self.errors


# ---------------------------------------------------------------------------
# Helpers


def is_nil_or_empty(value: Any) -> bool:
    """True for None, blank strings and empty collections.

    Dates and datetimes always count as present, as do numbers and booleans.
    """
    if value is None:
        return True
    if isinstance(value, (date, datetime)):
        return False
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, Mapping, Set)):
        return len(value) == 0
    return False


def is_valid_email(value: Any) -> bool:
    return isinstance(value, str) and EMAIL_PATTERN.match(value) is not None


def is_within(value: Any, options) -> bool:
    try:
        return value in options
    except TypeError:
        return False


def has_id(value: Any) -> bool:
    """True when a value identifies a stored document.

    Accepts a non-blank id string, or a mapping/object with a non-blank `id`.
    A name-only selection does not count.
    """
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, Mapping):
        ref_id = value.get("id")
    else:
        ref_id = getattr(value, "id", None)
    if isinstance(ref_id, bool) or ref_id is None:
        return False
    if isinstance(ref_id, int):
        return True
    return isinstance(ref_id, str) and bool(ref_id.strip())


def _text_length(value: Any) -> int:
    if isinstance(value, str):
        return len(value.strip())
    return len(str(value))


def _is_too_long(value: Any, limit: int) -> bool:
    return not is_nil_or_empty(value) and _text_length(value) > limit


def _too_long_message(label: str, limit: int) -> str:
    return f"{label} is too long (maximum is {limit:,} characters)."


def _too_many_games_message(limit: int) -> str:
    return f"Too many games selected (maximum is {limit:,} games)."


def is_truthy(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "on")
    return bool(value)


def _now() -> datetime:
    """Current local time, timezone-aware."""
    return datetime.now().astimezone()


def parse_date_time(value: Any) -> Optional[datetime]:
    """Read a datetime from a datetime, date or ISO-8601 string.

    The result is timezone-aware; naive values are taken as local time.
    Returns None when the value cannot be read.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time())
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    try:
        return parsed if parsed.tzinfo else parsed.astimezone()
    except (OverflowError, OSError, ValueError):
        return None


def _whole_number(value: Any) -> Optional[int]:
    """Read an int or a digit string; anything else is None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text.isdecimal():
        return None
    return int(text)


def _year_value(value: Any) -> Optional[int]:
    year = _whole_number(value)
    return year if year in YEARS else None


def _month_number(value: Any) -> Optional[int]:
    if isinstance(value, str):
        names = [name.lower() for name in MONTHS]
        if value.strip().lower() in names:
            return names.index(value.strip().lower()) + 1
    month = _whole_number(value)
    if month is None:
        return None
    return month if 1 <= month <= 12 else None


def _day_value(value: Any) -> Optional[int]:
    day = _whole_number(value)
    return day if day in DAYS else None


def compose_birthdate(birth_year: Any, birth_month: Any, birth_day: Any) -> Optional[date]:
    """Build a date from birth parts, or None if any part is unusable."""
    year = _year_value(birth_year)
    month = _month_number(birth_month)
    day = _day_value(birth_day)
    if year is None or month is None or day is None:
        return None
    if day > calendar.monthrange(year, month)[1]:
        return None
    return date(year, month, day)


def load_form(form_cls: Type[FormT], fields: Any) -> FormT:
    """Load a field bag into a form model without coercing values.

    Unknown keys are dropped; camelCase keys map onto snake_case fields.
    Anything that is not a mapping or model loads as an empty form.
    """
    if isinstance(fields, form_cls):
        return fields
    if isinstance(fields, BaseModel):
        fields = dict(fields)
    if not isinstance(fields, Mapping):
        if fields is not None:
            logger.debug(f"{form_cls.__name__}: ignoring non-mapping input {type(fields).__name__}")
        fields = {}

    known = {}
    for key, value in fields.items():
        name = key if key in form_cls.model_fields else to_snake(str(key))
        if name in form_cls.model_fields:
            known[name] = value
    return form_cls.model_construct(**known)


def _result(operation: str, errors: Dict[str, str]) -> ValidationResult:
    if errors:
        logger.debug(f"{operation}: invalid fields {sorted(errors)}")
    return ValidationResult(errors=errors)


# ---------------------------------------------------------------------------
# Shared field rules


def _check_required(errors: Dict[str, str], field: str, value: Any, message: str) -> None:
    if is_nil_or_empty(value):
        errors[field] = message


def _check_email(errors: Dict[str, str], email: Any) -> None:
    if is_nil_or_empty(email):
        errors["email"] = "Email is required."
    elif not is_valid_email(email):
        errors["email"] = f"{email} is not a valid email."


def _check_new_password(errors: Dict[str, str], password: Any) -> None:
    if is_nil_or_empty(password):
        errors["password"] = "Password is required."
    elif _text_length(password) < MIN_PASSWORD_LENGTH:
        errors["password"] = f"Password is too short (minimum is {MIN_PASSWORD_LENGTH:,} characters)."


def _check_school(errors: Dict[str, str], school: Any) -> None:
    if is_nil_or_empty(school) or not has_id(school):
        errors["school"] = "School is required."


def _check_status(errors: Dict[str, str], status: Any) -> None:
    if is_nil_or_empty(status):
        errors["status"] = "Status is required."
    elif not is_within(status, STATUS_VALUES):
        errors["status"] = f"{status} is not a valid status"


def _check_game_list(errors: Dict[str, str], field: str, games: Any, limit: int) -> None:
    if is_nil_or_empty(games):
        return
    try:
        count = len(games)
    except TypeError:
        return
    if count > limit:
        errors[field] = _too_many_games_message(limit)


# ---------------------------------------------------------------------------
# Validators


def validate_sign_up(fields: Any) -> ValidationResult:
    """Validate the sign-up form.

    Password confirmation is not part of this form's rules.
    """
    form = load_form(SignUpForm, fields)
    errors: Dict[str, str] = {}

    _check_required(errors, "first_name", form.first_name, "First name is required.")
    _check_required(errors, "last_name", form.last_name, "Last name is required.")
    _check_email(errors, form.email)
    _check_new_password(errors, form.password)
    _check_school(errors, form.school)
    _check_status(errors, form.status)

    return _result("sign_up", errors)


def validate_log_in(fields: Any) -> ValidationResult:
    """Validate the log-in form. Password length is only enforced at creation."""
    form = load_form(LogInForm, fields)
    errors: Dict[str, str] = {}

    _check_email(errors, form.email)
    _check_required(errors, "password", form.password, "Password is required.")

    return _result("log_in", errors)


def validate_forgot_password(fields: Any) -> ValidationResult:
    form = load_form(ForgotPasswordForm, fields)
    errors: Dict[str, str] = {}

    _check_email(errors, form.email)

    return _result("forgot_password", errors)


def validate_password_reset(fields: Any) -> ValidationResult:
    form = load_form(PasswordResetForm, fields)
    errors: Dict[str, str] = {}

    _check_new_password(errors, form.password)

    return _result("password_reset", errors)


def validate_create_event(fields: Any) -> ValidationResult:
    """Validate the create-event form.

    Start and end must both be present, readable and not in the past. The
    start must be strictly before the end; each side's ordering rule only runs
    once its own earlier rules pass and the other side is present and readable.
    """
    form = load_form(CreateEventForm, fields)
    errors: Dict[str, str] = {}

    _check_required(errors, "host", form.host, "Host is required.")
    if "host" not in errors and not has_id(form.host):
        errors["host"] = "Host is required."
    _check_required(errors, "name", form.name, "Name is required.")
    if _is_too_long(form.description, MAX_DESCRIPTION_LENGTH):
        errors["description"] = _too_long_message("Description", MAX_DESCRIPTION_LENGTH)
    _check_required(errors, "game", form.game, "Game is required.")
    if not is_truthy(form.is_online_event):
        _check_required(errors, "location", form.location, "Location is required.")

    now = _now()
    start = parse_date_time(form.start_date_time)
    end = parse_date_time(form.end_date_time)

    if is_nil_or_empty(form.start_date_time):
        errors["start_date_time"] = "Starting date/time is required."
    elif start is None:
        errors["start_date_time"] = f"{form.start_date_time} is not a valid date/time"
    elif start < now:
        errors["start_date_time"] = "Starting date/time cannot be in the past."
    elif end is not None and start >= end:
        errors["start_date_time"] = "Starting date/time must be before ending date/time."

    if is_nil_or_empty(form.end_date_time):
        errors["end_date_time"] = "Ending date/time is required."
    elif end is None:
        errors["end_date_time"] = f"{form.end_date_time} is not a valid date/time"
    elif end < now:
        errors["end_date_time"] = "Ending date/time cannot be in the past."
    elif start is not None and end <= start:
        errors["end_date_time"] = "Ending date/time must be after starting date/time."

    return _result("create_event", errors)


def validate_edit_user(fields: Any) -> ValidationResult:
    """Validate the edit-profile form.

    Birth year, month and day are each optional and range-checked on their
    own. Only when all three are present and in range is the composed date
    checked against the calendar (reported under `birthdate`).
    """
    form = load_form(EditUserForm, fields)
    errors: Dict[str, str] = {}

    _check_required(errors, "first_name", form.first_name, "First name is required.")
    _check_required(errors, "last_name", form.last_name, "Last name is required.")
    _check_school(errors, form.school)
    _check_status(errors, form.status)

    for field, label in PROFILE_TEXT_FIELDS.items():
        value = getattr(form, field)
        if _is_too_long(value, MAX_DEFAULT_STRING_LENGTH):
            errors[field] = _too_long_message(label, MAX_DEFAULT_STRING_LENGTH)

    if _is_too_long(form.bio, MAX_BIO_LENGTH):
        errors["bio"] = _too_long_message("Bio", MAX_BIO_LENGTH)

    if not is_nil_or_empty(form.timezone) and not is_within(form.timezone, TIMEZONE_VALUES):
        errors["timezone"] = f"{form.timezone} is not a valid timezone"

    birth_parts = (form.birth_year, form.birth_month, form.birth_day)
    if not is_nil_or_empty(form.birth_year) and _year_value(form.birth_year) is None:
        errors["birth_year"] = f"{form.birth_year} is not a valid year"
    if not is_nil_or_empty(form.birth_month) and _month_number(form.birth_month) is None:
        errors["birth_month"] = f"{form.birth_month} is not a valid month"
    if not is_nil_or_empty(form.birth_day) and _day_value(form.birth_day) is None:
        errors["birth_day"] = f"{form.birth_day} is not a valid day"

    if (
        not any(is_nil_or_empty(part) for part in birth_parts)
        and not {"birth_year", "birth_month", "birth_day"} & errors.keys()
        and compose_birthdate(*birth_parts) is None
    ):
        errors["birthdate"] = f"{form.birth_month}-{form.birth_day}-{form.birth_year} is not a valid date"

    _check_game_list(errors, "favorite_games", form.favorite_games, MAX_FAVORITE_GAME_LIST)
    _check_game_list(errors, "currently_playing", form.currently_playing, MAX_CURRENTLY_PLAYING_LIST)

    return _result("edit_user", errors)


class FormInvalidError(ValueError):
    """Raised by document builders when a form does not validate."""

    def __init__(self, operation: str, result: ValidationResult):
        self.operation = operation
        self.result = result
        super().__init__(f"{operation}: invalid fields {sorted(result.errors)}")

    @property
    def errors(self) -> Dict[str, str]:
        return self.result.errors
