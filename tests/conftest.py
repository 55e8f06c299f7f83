from __future__ import annotations

import pytest

from src.volunteer_hub.volunteer_hub.container import build_container
from src.volunteer_hub.volunteer_hub.database.memory_store import InMemoryEntityStore
from src.volunteer_hub.volunteer_hub.users.model import SignupProfile


@pytest.fixture
def store():
    return InMemoryEntityStore()


@pytest.fixture
def container(store):
    return build_container(store=store)


@pytest.fixture
def approved_volunteer(container):
    user = container.user_service.signup(SignupProfile(name="Asha", roll_no="21CS101", password="pw"))
    container.user_service.approve_user(user.user_id)
    return container.user_service.get_user(user.user_id)


@pytest.fixture
def event(container):
    return container.event_service.create_event("Beach clean-up", "2026-11-02", "Bring gloves")
