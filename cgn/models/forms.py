"""Form input models for Campus Gaming Network.

One model per form. Every field is optional: the validators decide what is
required and report it as a field error instead of raising. Field bags coming
from a front end may be loaded with `model_construct` so that raw values reach
the validators untouched.
"""

from datetime import date, datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from cgn.models.game import Game
from cgn.models.school import SchoolRef
from cgn.models.user import UserRef


class FormModel(BaseModel):
    """Base for form input models."""

    class Config:
        """Pydantic configuration."""
        alias_generator = to_camel
        populate_by_name = True
        arbitrary_types_allowed = True


class SignUpForm(FormModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    school: Optional[Union[str, SchoolRef, Dict[str, Any]]] = Field(
        None, description="Selected school id (or a reference carrying one)"
    )
    status: Optional[str] = None


class LogInForm(FormModel):
    email: Optional[str] = None
    password: Optional[str] = None


class ForgotPasswordForm(FormModel):
    email: Optional[str] = None


class PasswordResetForm(FormModel):
    password: Optional[str] = None


class CreateEventForm(FormModel):
    host: Optional[Union[str, UserRef, Dict[str, Any]]] = Field(None, description="Hosting user id or reference")
    name: Optional[str] = None
    description: Optional[str] = None
    game: Optional[Union[str, Game, Dict[str, Any]]] = None
    school: Optional[Union[str, SchoolRef, Dict[str, Any]]] = None
    is_online_event: Optional[bool] = False
    location: Optional[str] = None
    place_id: Optional[str] = None
    start_date_time: Optional[Union[datetime, date, str]] = None
    end_date_time: Optional[Union[datetime, date, str]] = None


class EditUserForm(FormModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    school: Optional[Union[str, SchoolRef, Dict[str, Any]]] = None
    status: Optional[str] = None
    major: Optional[str] = None
    minor: Optional[str] = None
    bio: Optional[str] = None
    timezone: Optional[str] = None
    hometown: Optional[str] = None
    birth_year: Optional[Union[int, str]] = None
    birth_month: Optional[Union[int, str]] = Field(None, description="Month name or number 1-12")
    birth_day: Optional[Union[int, str]] = None
    website: Optional[str] = None
    twitter: Optional[str] = None
    twitch: Optional[str] = None
    youtube: Optional[str] = None
    skype: Optional[str] = None
    discord: Optional[str] = None
    battlenet: Optional[str] = None
    steam: Optional[str] = None
    xbox: Optional[str] = None
    psn: Optional[str] = None
    favorite_games: Optional[List[Union[Game, Dict[str, Any], str]]] = None
    currently_playing: Optional[List[Union[Game, Dict[str, Any], str]]] = None
