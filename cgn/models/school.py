"""School data models for Campus Gaming Network."""

from typing import Any, Optional

from pydantic import Field, computed_field

from cgn.models.base import DocumentRef, RecordModel
from cgn.utilities.formatting import (
    get_school_logo_url,
    google_maps_link,
    is_valid_url,
    start_case,
)


class SchoolRef(DocumentRef):
    """School reference embedded in user, event and response documents."""

    name: str = Field("", description="School name at the time the reference was written")


class School(RecordModel):
    """School as stored in the `schools` collection."""

    id: str = Field("", description="School document id")
    name: str = Field("", description="School name (often upper-cased in the source data)")
    address: str = Field("", description="Street address")
    city: str = Field("", description="City")
    state: str = Field("", description="State or province code")
    zip: str = Field("", description="Postal code")
    county: str = Field("", description="County")
    phone: str = Field("", description="Main phone number")
    website: str = Field("", description="School website")
    ref: Optional[Any] = Field(None, exclude=True, description="Opaque document handle")


class SchoolProfile(School):
    """Display-ready school with derived fields."""

    @computed_field
    @property
    def formatted_name(self) -> str:
        return start_case(self.name.lower())

    @computed_field
    @property
    def formatted_address(self) -> str:
        return start_case(self.address.lower())

    @computed_field
    @property
    def is_valid_website_url(self) -> bool:
        return is_valid_url(self.website)

    @computed_field
    @property
    def google_maps_address_link(self) -> str:
        return google_maps_link(f"{self.address} {self.city}, {self.state}")

    @computed_field
    @property
    def logo_url(self) -> str:
        return get_school_logo_url(self.id)
