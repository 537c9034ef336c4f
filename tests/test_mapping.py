"""Tests for record mapping (stored record + handle -> display record)."""

import hashlib
import pytest
from datetime import date

from cgn.engine.mapping import map_event, map_event_response, map_events, map_school, map_user, map_users
from cgn.models.event import flatten_event_response


def _derived_user_fields(user):
    return {
        "full_name": user.full_name,
        "display_status": user.display_status,
        "is_verified_student": user.is_verified_student,
        "has_accounts": user.has_accounts,
        "has_favorite_games": user.has_favorite_games,
        "has_currently_playing": user.has_currently_playing,
        "gravatar": user.gravatar,
    }


class TestMapUser:
    """Test map_user()."""

    def test_derived_fields(self, raw_user):
        user = map_user(raw_user)

        assert user.full_name == "Jane Doe"
        assert user.display_status == "Graduate Student"
        assert user.is_verified_student is True
        assert user.has_accounts is True
        assert user.has_favorite_games is True
        assert user.has_currently_playing is False
        assert user.gravatar == hashlib.md5(b"jane.doe@osu.edu").hexdigest()

    def test_empty_values_filled(self, raw_user):
        user = map_user(raw_user)

        assert user.bio == ""
        assert user.currently_playing == []
        assert user.major == ""

    def test_games_deduplicated_by_id(self, raw_user):
        user = map_user(raw_user)
        assert [game.id for game in user.favorite_games] == ["g1", "g2"]

    def test_nested_and_timestamp_values(self, raw_user):
        user = map_user(raw_user)

        assert user.school.id == "s1"
        assert user.birthdate == date(2000, 2, 29)
        assert user.created_at.year == 2020

    def test_handle_attached(self, raw_user, make_handle):
        handle = make_handle("u1")
        user = map_user(raw_user, handle)

        assert user.ref is handle
        assert "ref" not in user.model_dump()

    def test_id_taken_from_handle(self, raw_user, make_handle):
        del raw_user["id"]
        assert map_user(raw_user, make_handle("abc")).id == "abc"

    def test_mapping_is_idempotent(self, raw_user, make_handle):
        """Re-mapping a mapped user yields the same derived fields and keeps the handle."""
        handle = make_handle("u1")
        once = map_user(raw_user, handle)
        twice = map_user(once)

        assert _derived_user_fields(twice) == _derived_user_fields(once)
        assert twice.ref is handle

    def test_missing_school_is_empty_reference(self, raw_user):
        """Templates never need a null guard for the embedded school."""
        raw_user["school"] = None
        user = map_user(raw_user)

        assert user.school.id == ""
        assert user.school.name == ""

        del raw_user["school"]
        assert map_user(raw_user).model_dump()["school"] == {"id": "", "name": ""}

    def test_unknown_status_start_cased(self, raw_user):
        raw_user["status"] = "exchange_student"
        assert map_user(raw_user).display_status == "Exchange Student"

    def test_non_edu_email_not_verified(self, raw_user):
        raw_user["email"] = "jane@gmail.com"
        assert map_user(raw_user).is_verified_student is False

    def test_stored_gravatar_kept_without_email(self, raw_user):
        del raw_user["email"]
        raw_user["gravatar"] = "abc123"

        user = map_user(raw_user)

        assert user.gravatar == "abc123"
        assert user.gravatar_url.startswith("https://www.gravatar.com/avatar/abc123?")

    def test_no_accounts(self, raw_user):
        raw_user["twitch"] = "  "
        assert map_user(raw_user).has_accounts is False

    def test_malformed_optional_value_dropped(self, raw_user):
        raw_user["birthdate"] = "not a date"
        user = map_user(raw_user)

        assert user.birthdate is None
        assert user.full_name == "Jane Doe"

    def test_none_maps_to_none(self):
        assert map_user(None) is None

    def test_non_mapping_raises(self):
        with pytest.raises(TypeError):
            map_user(["not", "a", "record"])

    def test_dump_uses_camel_case(self, raw_user):
        data = map_user(raw_user).model_dump(by_alias=True)

        assert data["firstName"] == "Jane"
        assert data["fullName"] == "Jane Doe"

    def test_map_users_skips_missing(self, raw_user, make_handle):
        users = map_users([(raw_user, make_handle("u1")), (None, make_handle("u9"))])
        assert [user.id for user in users] == ["u1"]


class TestMapSchool:
    """Test map_school()."""

    def test_formatted_fields(self, raw_school):
        school = map_school(raw_school)

        assert school.formatted_name == "Ohio State University"
        assert school.formatted_address == "281 W Lane Ave"
        assert school.zip == "43210"

    def test_ohio_state_scenario(self):
        school = map_school(
            {"name": "OHIO STATE", "address": "123 main st", "city": "columbus", "state": "OH", "website": "not-a-url"}
        )

        assert school.formatted_name == "Ohio State"
        assert school.formatted_address == "123 Main St"
        assert school.is_valid_website_url is False

    def test_address_with_unit_and_accents(self, raw_school):
        raw_school["address"] = "100 RUE DE L'ÉCOLE APT 4B"
        assert map_school(raw_school).formatted_address == "100 Rue De Lecole Apt 4 B"

    def test_website_check(self, raw_school):
        assert map_school(raw_school).is_valid_website_url is True
        raw_school["website"] = "osu dot edu"
        assert map_school(raw_school).is_valid_website_url is False

    def test_google_maps_link(self, raw_school):
        school = map_school(raw_school)
        assert school.google_maps_address_link == (
            "https://www.google.com/maps/search/?api=1&query=281%20W%20LANE%20AVE%20Columbus%2C%20OH"
        )

    def test_logo_url_needs_bucket(self, raw_school, monkeypatch):
        monkeypatch.delenv("STORAGE_BUCKET", raising=False)
        assert map_school(raw_school).logo_url == ""

        monkeypatch.setenv("STORAGE_BUCKET", "cgn-test.appspot.com")
        assert map_school(raw_school).logo_url == (
            "https://storage.googleapis.com/v0/b/cgn-test.appspot.com/o/"
            "schools%2Fs1%2Fimages%2Flogo.png?alt=media&token=s1"
        )

    def test_missing_fields_default_empty(self):
        school = map_school({"id": "s2"})

        assert school.formatted_name == ""
        assert school.is_valid_website_url is False

    def test_idempotent(self, raw_school):
        once = map_school(raw_school)
        assert map_school(once).formatted_name == once.formatted_name


class TestMapEvent:
    """Test map_event()."""

    def test_host_read_from_creator(self, raw_event):
        event = map_event(raw_event)

        assert event.host.id == "u1"
        assert event.host.first_name == "Jane"
        assert event.page_views == 7

    def test_upcoming_event(self, raw_event):
        event = map_event(raw_event)

        assert event.has_started is False
        assert event.has_ended is False

    def test_handle_attached(self, raw_event, make_handle):
        handle = make_handle("e1")
        event = map_event(raw_event, handle)

        assert event.ref is handle
        assert map_event(event).ref is handle

    def test_missing_references_are_empty(self):
        event = map_event({"id": "e2", "name": "LAN", "game": None, "creator": None})

        assert event.game.id == ""
        assert event.school.name == ""
        assert event.host.first_name == ""
        assert event.host.ref is None

    def test_malformed_reference_falls_back_to_empty(self, raw_event):
        raw_event["school"] = ["not", "a", "school"]
        event = map_event(raw_event)

        assert event.school.id == ""
        assert event.name == "Smash Bros Night"

    def test_map_events(self, raw_event, make_handle):
        events = map_events([(raw_event, make_handle("e1")), (None, None)])
        assert len(events) == 1


class TestMapEventResponse:
    """Test map_event_response()."""

    def test_flattened_record(self, raw_event_response, make_handle):
        handle = make_handle("r1")
        record = map_event_response(raw_event_response, handle)

        assert record.id == "e1"
        assert record.response_id == "r1"
        assert record.name == "Smash Bros Night"
        assert record.response == "YES"
        assert record.user_id == "u2"
        assert record.user_full_name == "Sam Lee"
        assert record.school_id == "s1"
        assert record.school_name == "OHIO STATE UNIVERSITY"
        assert record.ref is handle
        assert record.event_ref.id == "e1"
        assert record.user_ref.id == "u2"

    def test_handles_not_serialized(self, raw_event_response):
        data = map_event_response(raw_event_response).model_dump()

        assert "event_ref" not in data
        assert "user_ref" not in data

    def test_unknown_response_value_kept(self, raw_event_response):
        """Stored response values pass through as strings, like stored statuses."""
        raw_event_response["response"] = "INTERESTED"
        assert map_event_response(raw_event_response).response == "INTERESTED"

    def test_missing_school_gives_empty_school_fields(self, raw_event_response):
        del raw_event_response["school"]
        raw_event_response["event"].pop("school")
        record = map_event_response(raw_event_response)

        assert record.school_id == ""
        assert record.school_name == ""

    def test_flat_input_unchanged(self):
        flat = {"id": "e1", "name": "LAN", "response": "MAYBE", "user_id": "u2"}
        assert flatten_event_response(flat) is flat

    def test_remap_keeps_fields(self, raw_event_response):
        once = map_event_response(raw_event_response)
        twice = map_event_response(once)

        assert twice.response_id == once.response_id
        assert twice.user_full_name == once.user_full_name
        assert twice.event_ref is once.event_ref
