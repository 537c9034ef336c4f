"""Pytest fixtures and configuration for Campus Gaming Network tests."""

import pytest
from datetime import datetime, timedelta
from fastapi.testclient import TestClient

from cgn.store.record_cache import RecordCache


class FakeHandle:
    """Stand-in for a document store handle (only `.id` is read)."""

    def __init__(self, id, path=None):
        self.id = id
        self.path = path or f"docs/{id}"

    def __repr__(self):
        return f"FakeHandle({self.id!r})"


@pytest.fixture
def make_handle():
    """Factory for fake document handles."""
    return FakeHandle


@pytest.fixture
def sign_up_fields():
    """A valid sign-up field bag (camelCase, as a front end sends it)."""
    return {
        "firstName": "Jane",
        "lastName": "Doe",
        "email": "jane@x.com",
        "password": "12345678",
        "school": {"id": "s1", "name": "OHIO STATE UNIVERSITY"},
        "status": "freshman",
    }


@pytest.fixture
def event_fields():
    """A valid create-event field bag starting tomorrow."""
    start = datetime.now().astimezone() + timedelta(days=1)
    return {
        "host": {"id": "u1"},
        "name": "Smash Bros Night",
        "description": "Bring your own controller.",
        "game": {"id": "g1", "name": "Super Smash Bros. Ultimate"},
        "school": {"id": "s1"},
        "isOnlineEvent": False,
        "location": "Student Union, Room 204",
        "placeId": "place-123",
        "startDateTime": start.isoformat(),
        "endDateTime": (start + timedelta(hours=3)).isoformat(),
    }


@pytest.fixture
def edit_user_fields():
    """A valid edit-profile field bag."""
    return {
        "firstName": "Jane",
        "lastName": "Doe",
        "school": {"id": "s1"},
        "status": "junior",
        "major": "Computer Science",
        "minor": "",
        "bio": "Mostly fighting games.",
        "timezone": "America/New_York",
        "hometown": "Columbus",
        "birthYear": 2000,
        "birthMonth": "February",
        "birthDay": 29,
        "twitch": "janeplays",
        "favoriteGames": [{"id": "g1", "name": "Tetris"}],
        "currentlyPlaying": [],
    }


@pytest.fixture
def raw_user():
    """A stored user document as read from the `users` collection."""
    return {
        "id": "u1",
        "firstName": "Jane",
        "lastName": "Doe",
        "email": "Jane.Doe@OSU.edu ",
        "status": "grad",
        "school": {"id": "s1", "name": "OHIO STATE UNIVERSITY"},
        "birthdate": "2000-02-29",
        "bio": None,
        "twitch": "janeplays",
        "favoriteGames": [
            {"id": "g1", "name": "Tetris"},
            {"id": "g2", "name": "Celeste"},
            {"id": "g1", "name": "Tetris"},
        ],
        "currentlyPlaying": None,
        "createdAt": {"seconds": 1577836800, "nanoseconds": 0},
    }


@pytest.fixture
def raw_school():
    """A stored school document (names and addresses are upper-cased in the source data)."""
    return {
        "id": "s1",
        "name": "OHIO STATE UNIVERSITY",
        "address": "281 W LANE AVE",
        "city": "Columbus",
        "state": "OH",
        "zip": 43210,
        "website": "https://www.osu.edu",
    }


@pytest.fixture
def raw_event():
    """A stored event document (host stored as `creator`)."""
    start = datetime.now().astimezone() + timedelta(days=2)
    return {
        "id": "e1",
        "name": "Smash Bros Night",
        "description": "Bring your own controller.",
        "game": {"id": "g1", "name": "Super Smash Bros. Ultimate"},
        "school": {"id": "s1", "name": "OHIO STATE UNIVERSITY"},
        "creator": {"id": "u1", "firstName": "Jane", "lastName": "Doe"},
        "isOnlineEvent": False,
        "location": "Student Union",
        "startDateTime": start,
        "endDateTime": start + timedelta(hours=3),
        "pageViews": 7,
    }


@pytest.fixture
def raw_event_response(raw_event, make_handle):
    """A stored event response nesting copies of the event and the user."""
    return {
        "id": "r1",
        "event": {**raw_event, "ref": make_handle("e1", "events/e1")},
        "user": {"id": "u2", "firstName": "Sam", "lastName": "Lee", "ref": make_handle("u2", "users/u2")},
        "school": {"id": "s1", "name": "OHIO STATE UNIVERSITY"},
        "response": "YES",
    }


@pytest.fixture
def caches():
    """Fresh record caches, one per entity kind."""
    return {
        "users": RecordCache(name="users"),
        "schools": RecordCache(name="schools"),
        "events": RecordCache(name="events"),
    }


@pytest.fixture
def test_client(caches):
    """Create a FastAPI test client with overridden cache dependencies."""
    from cgn.api.app import app, get_event_cache, get_school_cache, get_user_cache

    app.dependency_overrides[get_user_cache] = lambda: caches["users"]
    app.dependency_overrides[get_school_cache] = lambda: caches["schools"]
    app.dependency_overrides[get_event_cache] = lambda: caches["events"]

    with TestClient(app) as client:
        yield client

    # Clean up dependency overrides
    app.dependency_overrides.clear()
