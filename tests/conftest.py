from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from face_attendance.container import build_memory_container
from face_attendance.core.enums import Pose
from face_attendance.identities.memory_identity_repository import InMemoryIdentityRepository
from face_attendance.identities.model import EnrolledDescriptor
from face_attendance.main import create_app


class FakeClock:
    """Settable clock; advance() moves it forward."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 2, 9, 0, 0)


@pytest.fixture
def clock(fixed_now) -> FakeClock:
    return FakeClock(fixed_now)


@pytest.fixture
def identities() -> InMemoryIdentityRepository:
    repo = InMemoryIdentityRepository()
    repo.enroll("u1", EnrolledDescriptor(Pose.FRONT, [0.0] * 128), full_name="Alice")
    repo.enroll(
        "u2",
        EnrolledDescriptor(Pose.FRONT, [0.0] * 128),
        EnrolledDescriptor(Pose.LEFT, [0.1] * 128),
        full_name="Bob",
    )
    repo.enroll("u3", full_name="Not enrolled")
    return repo


@pytest.fixture
def container(identities, clock):
    return build_memory_container(identities_repo=identities, clock=clock)


@pytest.fixture
def app(container):
    app = create_app(container=container, settings_module="config.testing")
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(user_id: str, role: str = "staff") -> None:
        with client.session_transaction() as sess:
            sess["user_id"] = user_id
            sess["role"] = role

    return _login
