"""User data models for Campus Gaming Network."""

from datetime import date, datetime
from typing import Any, List, Optional

from pydantic import Field, computed_field, field_validator, model_validator

from cgn.models.base import DocumentRef, RecordModel, timestamp_to_datetime
from cgn.models.constants import ACCOUNTS, STATUS_LABELS
from cgn.models.game import Game, unique_games
from cgn.models.school import SchoolRef
from cgn.utilities.formatting import create_gravatar_hash, gravatar_url, start_case


class UserRef(DocumentRef):
    """User reference embedded in event and response documents."""

    first_name: str = ""
    last_name: str = ""


class User(RecordModel):
    """User as stored in the `users` collection."""

    id: str = Field("", description="User id (same as the auth uid)")
    first_name: str = Field("", description="First name")
    last_name: str = Field("", description="Last name")
    email: str = Field("", description="Email address (not always present on embedded copies)")
    status: str = Field("", description="Student status value")
    school: SchoolRef = Field(default_factory=SchoolRef, description="School the user attends")
    birthdate: Optional[date] = Field(None, description="Birthdate")
    major: str = ""
    minor: str = ""
    bio: str = ""
    timezone: str = ""
    hometown: str = ""
    website: str = ""
    twitter: str = ""
    twitch: str = ""
    youtube: str = ""
    skype: str = ""
    discord: str = ""
    battlenet: str = ""
    steam: str = ""
    xbox: str = ""
    psn: str = ""
    favorite_games: List[Game] = Field(default_factory=list, description="Favorite games, in display order")
    currently_playing: List[Game] = Field(default_factory=list, description="Games currently being played, in display order")
    gravatar: str = Field("", description="Gravatar hash of the account email")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    ref: Optional[Any] = Field(None, exclude=True, description="Opaque document handle")

    @field_validator("birthdate", mode="before")
    @classmethod
    def _birthdate_as_date(cls, value: Any) -> Any:
        value = timestamp_to_datetime(value)
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("favorite_games", "currently_playing", mode="after")
    @classmethod
    def _unique_games(cls, value: List[Game]) -> List[Game]:
        return unique_games(value)


class UserProfile(User):
    """Display-ready user with derived fields."""

    @model_validator(mode="after")
    def _hash_email(self) -> "UserProfile":
        # Embedded user copies carry no email; keep whatever hash was stored.
        if self.email:
            self.gravatar = create_gravatar_hash(self.email)
        return self

    @computed_field
    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @computed_field
    @property
    def display_status(self) -> str:
        return STATUS_LABELS.get(self.status, start_case(self.status))

    @computed_field
    @property
    def is_verified_student(self) -> bool:
        domain = self.email.strip().lower().rpartition("@")[2]
        return bool(domain) and domain.endswith(".edu")

    @computed_field
    @property
    def has_accounts(self) -> bool:
        return any(getattr(self, field).strip() for field in ACCOUNTS)

    @computed_field
    @property
    def has_favorite_games(self) -> bool:
        return len(self.favorite_games) > 0

    @computed_field
    @property
    def has_currently_playing(self) -> bool:
        return len(self.currently_playing) > 0

    @computed_field
    @property
    def gravatar_url(self) -> str:
        return gravatar_url(self.gravatar) if self.gravatar else ""
