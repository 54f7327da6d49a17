"""Application tests for registration, login and profile maintenance."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError

from storefront.account.auth import decode_token, verify_password
from storefront.account.profile import change_password, update_profile
from storefront.account.registration import login, register
from storefront.account.user import Role, User
from storefront.errors import Unauthenticated


class TestRegister:
    def test_register_returns_user_and_token(self):
        user, token = register(name="Riley Reader", email="Riley@Example.com", password="secret1")
        assert user.email == "riley@example.com"
        assert user.role == Role.USER.value
        assert decode_token(token) == str(user.id)
        assert verify_password("secret1", user.password_hash)

    def test_duplicate_email_rejected(self):
        register(name="Riley Reader", email="riley@example.com", password="secret1")
        with pytest.raises(ValidationError) as exc_info:
            register(name="Riley Again", email="RILEY@example.com", password="secret2")
        assert exc_info.value.messages["email"] == ["User already exists with this email"]

    def test_short_password_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            register(name="Riley Reader", email="riley@example.com", password="12345")
        assert "password" in exc_info.value.messages


class TestLogin:
    def test_login_records_last_login(self):
        registered, _ = register(name="Lee Login", email="lee@example.com", password="secret1")
        user, token = login("LEE@example.com", "secret1")
        assert str(user.id) == str(registered.id)
        assert user.last_login_at is not None
        assert decode_token(token) == str(user.id)

    def test_wrong_password(self):
        register(name="Lee Login", email="lee@example.com", password="secret1")
        with pytest.raises(Unauthenticated) as exc_info:
            login("lee@example.com", "wrong-one")
        assert exc_info.value.message == "Invalid credentials"

    def test_unknown_email(self):
        with pytest.raises(Unauthenticated):
            login("nobody@example.com", "secret1")


class TestProfile:
    def test_update_profile(self, customer):
        user = update_profile(customer.id, name="Casey C", avatar="https://img.example.com/c.png")
        assert user.name == "Casey C"
        assert user.avatar == "https://img.example.com/c.png"

    def test_email_taken_by_another_user(self, customer, other_customer):
        with pytest.raises(ValidationError):
            update_profile(customer.id, email=other_customer.email)

    def test_keeping_own_email_is_allowed(self, customer):
        user = update_profile(customer.id, email=customer.email)
        assert user.email == customer.email


class TestChangePassword:
    def test_change_password(self):
        user, _ = register(name="Pat Password", email="pat@example.com", password="secret1")
        change_password(user.id, current_password="secret1", new_password="secret2")

        stored = current_domain.repository_for(User).get(user.id)
        assert verify_password("secret2", stored.password_hash)
        assert not verify_password("secret1", stored.password_hash)

    def test_wrong_current_password(self):
        user, _ = register(name="Pat Password", email="pat@example.com", password="secret1")
        with pytest.raises(ValidationError) as exc_info:
            change_password(user.id, current_password="nope-nope", new_password="secret2")
        assert exc_info.value.messages["current_password"] == ["Current password is incorrect"]
