"""
Service layer tests for accounts app.

Tests cover admin registration and authentication business rules.
"""

import pytest

from apps.accounts.models import User
from apps.accounts.services import (
    register_admin,
    authenticate_admin,
    RegistrationClosedError,
    UserRegistrationError,
    InvalidCredentialsError,
    InactiveAccountError,
)


@pytest.mark.django_db
class TestRegisterAdmin:

    def test_register_creates_staff_account(self):
        user = register_admin(username='cashier', password='SecurePass123!')

        assert user.is_staff is True
        assert user.check_password('SecurePass123!')

    def test_register_duplicate_username(self, user):
        with pytest.raises(UserRegistrationError):
            register_admin(username=user.username, password='SecurePass123!')

        assert User.objects.filter(username=user.username).count() == 1

    def test_register_when_closed(self, settings):
        settings.ALLOW_ADMIN_REGISTRATION = False

        with pytest.raises(RegistrationClosedError):
            register_admin(username='cashier', password='SecurePass123!')


@pytest.mark.django_db
class TestAuthenticateAdmin:

    def test_authenticate_success(self, user):
        authenticated = authenticate_admin(username=user.username, password='TestPass123!')

        assert authenticated == user
        assert authenticated.last_login is not None

    def test_authenticate_wrong_password(self, user):
        with pytest.raises(InvalidCredentialsError):
            authenticate_admin(username=user.username, password='nope')

    def test_authenticate_unknown_user(self):
        with pytest.raises(InvalidCredentialsError):
            authenticate_admin(username='ghost', password='TestPass123!')

    def test_authenticate_inactive(self, user_inactive):
        with pytest.raises(InactiveAccountError):
            authenticate_admin(username=user_inactive.username, password='TestPass123!')
