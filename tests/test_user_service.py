# /tests/test_user_service.py

import pytest

from app.models.user_model import UserUpdate
from app.services import user_service


@pytest.fixture
def alice(make_user):
    make_user(name="Bob Jones", email="bob@campus.edu")
    return make_user(name="Alice Smith", email="alice@campus.edu")


def test_profile_update_trims_and_lowercases(alice, db_service):
    profile = UserUpdate(name="  Alice Cooper ", email="Alice.Cooper@Campus.edu",
                         phone=" +1-234-567-8900 ", department=" Mathematics ")

    user = user_service.update_profile(db_service, alice, profile)

    assert (user.name, user.email, user.phone, user.department) == (
        "Alice Cooper", "alice.cooper@campus.edu", "+1-234-567-8900", "Mathematics")


def test_omitted_fields_are_left_alone(alice, db_service):
    user = user_service.update_profile(db_service, alice, UserUpdate(department="Physics"))

    assert user.name == "Alice Smith"
    assert user.email == "alice@campus.edu"
    assert user.department == "Physics"


def test_keeping_your_own_email_is_not_a_conflict(alice, db_service):
    user = user_service.update_profile(db_service, alice, UserUpdate(email="ALICE@campus.edu"))

    assert user.email == "alice@campus.edu"


def test_empty_phone_clears_it(alice, db_service):
    user_service.update_profile(db_service, alice, UserUpdate(phone="9876543210"))
    user = user_service.update_profile(db_service, alice, UserUpdate(phone="  "))

    assert user.phone is None


@pytest.mark.parametrize("profile, message", [
    (UserUpdate(name="A"), "at least 2 characters"),
    (UserUpdate(name="A" * 51), "must not exceed 50"),
    (UserUpdate(name="R2-D2"), "only contain letters and spaces"),
    (UserUpdate(email="bob@campus.edu"), "Email already in use"),
    (UserUpdate(phone="98765abc10"), "cannot contain letters"),
    (UserUpdate(phone="98--76"), "valid phone number"),
    (UserUpdate(phone="12345"), "at least 10 digits"),
    (UserUpdate(department="X"), "at least 2 characters"),
    (UserUpdate(department="X" * 101), "must not exceed 100"),
])
def test_invalid_profile_fields_are_rejected(alice, db_service, profile, message):
    with pytest.raises(ValueError, match=message):
        user_service.update_profile(db_service, alice, profile)

    assert db_service.get_user_by_id(alice.id).name == "Alice Smith"
