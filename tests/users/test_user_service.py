from __future__ import annotations

import pytest

from src.volunteer_hub.volunteer_hub.core.enums import Collection, Role
from src.volunteer_hub.volunteer_hub.core.exceptions import ValidationError
from src.volunteer_hub.volunteer_hub.users.model import SignupProfile


def _profile(name="A", roll_no="101", password="p", **extra):
    return SignupProfile(name=name, roll_no=roll_no, password=password, **extra)


def test_signup_then_login_round_trip(container):
    user = container.user_service.signup(_profile(branch="CSE", year_sec="3-A", phone="555"))

    assert user is not None
    assert user.role == Role.VOLUNTEER
    assert user.approved is False
    assert user.branch == "CSE"

    assert container.auth_service.login("101", "p") == user
    assert container.auth_service.login("101", "wrong") is None


def test_login_matches_roll_number_case_insensitively(container):
    user = container.user_service.signup(_profile(roll_no="21cs7"))

    assert container.auth_service.login("21CS7", "p") == user


def test_admin_logs_in_by_name_not_roll_number(container):
    assert container.auth_service.login("ADMIN USER", "admin") is not None
    assert container.auth_service.login("admin", "admin") is None


def test_volunteer_cannot_log_in_by_name(container):
    container.user_service.signup(_profile(name="Ravi", roll_no="7"))

    assert container.auth_service.login("Ravi", "p") is None


def test_password_is_not_stored_in_clear(container, store):
    container.user_service.signup(_profile(password="secret"))

    raw = [u for u in store.read(Collection.USERS) if u["rollNo"] == "101"][0]
    assert "password" not in raw
    assert raw["passwordHash"] != "secret"


def test_duplicate_roll_number_in_any_case_is_rejected(container, store):
    container.user_service.signup(_profile(name="A", roll_no="cs101"))
    before = len(store.read(Collection.USERS))

    assert container.user_service.signup(_profile(name="B", roll_no="CS101")) is None
    assert len(store.read(Collection.USERS)) == before


def test_duplicate_name_in_any_case_is_rejected(container):
    container.user_service.signup(_profile(name="Meera", roll_no="1"))

    assert container.user_service.signup(_profile(name="MEERA", roll_no="2")) is None
    # name clash with the seeded admin
    assert container.user_service.signup(_profile(name="admin user", roll_no="3")) is None


def test_signup_requires_roll_number(container):
    with pytest.raises(ValidationError):
        container.user_service.signup(_profile(roll_no="  "))


def test_unapproved_volunteer_still_authenticates(container):
    user = container.user_service.signup(_profile())

    logged_in = container.auth_service.login("101", "p")

    assert logged_in is not None
    assert logged_in.user_id == user.user_id
    assert logged_in.approved is False


def test_approval_flips_flag_and_is_idempotent(container):
    user = container.user_service.signup(_profile())

    assert container.user_service.approve_user(user.user_id) is True
    assert container.user_service.get_user(user.user_id).approved is True
    assert container.user_service.approve_user(user.user_id) is True
    assert container.user_service.get_user(user.user_id).approved is True


def test_approve_unknown_user_returns_false(container):
    assert container.user_service.approve_user("user_missing") is False


def test_pending_and_approved_volunteer_lists(container):
    a = container.user_service.signup(_profile(name="Asha", roll_no="11"))
    b = container.user_service.signup(_profile(name="Bilal", roll_no="22"))
    container.user_service.approve_user(a.user_id)

    assert [u.user_id for u in container.user_service.list_pending_volunteers()] == [b.user_id]
    assert [u.user_id for u in container.user_service.list_volunteers()] == [a.user_id]
    assert [u.user_id for u in container.user_service.list_volunteers("ash")] == [a.user_id]
    assert [u.user_id for u in container.user_service.list_volunteers("11")] == [a.user_id]
    assert container.user_service.list_volunteers("zzz") == []


def test_generated_ids_are_unique(container):
    ids = {container.user_service.signup(_profile(name=f"N{i}", roll_no=str(i))).user_id for i in range(5)}

    assert len(ids) == 5
