"""Application tests for registration and login."""

import pytest
from protean import current_domain

from agrigo.errors import DuplicateAccount, IncorrectPassword, UnknownAccount
from agrigo.identity.login import authenticate
from agrigo.identity.provider import get_identity_provider
from agrigo.identity.registration import RegisterUser
from agrigo.identity.user import User


def _register(email="meera@example.test", role="consumer", **extra):
    return current_domain.process(
        RegisterUser(name="Meera Shah", email=email, password="harvest-123", phone="9800000000", role=role, **extra),
        asynchronous=False,
    )


class TestRegisterUser:
    def test_persists_user_with_hashed_password(self):
        user_id = _register()

        user = current_domain.repository_for(User).get(user_id)
        assert user.email == "meera@example.test"
        assert user.password_hash.startswith("$argon2")
        assert user.role == "consumer"

    def test_farmer_keeps_farm_name(self):
        user_id = _register(email="asha@farm.test", role="farmer", farm_name="Green Acres")
        user = current_domain.repository_for(User).get(user_id)
        assert user.is_farmer
        assert user.farm_name == "Green Acres"

    def test_duplicate_email_refused(self):
        _register()
        with pytest.raises(DuplicateAccount) as exc:
            _register(email="MEERA@example.test")
        assert exc.value.message == "User already registered"

    def test_stores_user_registered_event(self):
        _register()
        messages = current_domain.event_store.store.read("agrigo::user")
        types = [m.metadata.headers.type for m in messages if m.metadata and m.metadata.headers]
        assert "Agrigo.UserRegistered.v1" in types


class TestAuthenticate:
    def test_issues_tokens_for_the_account(self):
        user_id = _register(email="asha@farm.test", role="farmer")

        session = authenticate("asha@farm.test", "harvest-123")

        principal = get_identity_provider().resolve(session.access_token)
        assert principal.user_id == user_id
        assert principal.role == "farmer"
        assert session.refresh_token != session.access_token

    def test_unknown_email(self):
        with pytest.raises(UnknownAccount) as exc:
            authenticate("nobody@example.test", "harvest-123")
        assert exc.value.status_code == 400

    def test_wrong_password(self):
        _register()
        with pytest.raises(IncorrectPassword) as exc:
            authenticate("meera@example.test", "wrong-password")
        assert exc.value.status_code == 401
