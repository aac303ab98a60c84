import pytest
from django.urls import reverse
from rest_framework import status
from apps.accounts.models import User


# =============================================================================
# Registration Tests
# =============================================================================

@pytest.mark.django_db
class TestRegistration:
    """Tests for POST /api/auth/register/"""

    def test_register_success(self, api_client):
        """Successfully register a new admin."""
        url = reverse('users:register')
        data = {
            'username': 'cashier',
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        assert 'access' in response.data['tokens']
        assert 'refresh' in response.data['tokens']
        assert response.data['user']['username'] == 'cashier'
        assert User.objects.filter(username='cashier').exists()

    def test_register_password_is_hashed(self, api_client):
        """Stored password is never the plain text."""
        url = reverse('users:register')
        api_client.post(url, {'username': 'cashier', 'password': 'SecurePass123!'})

        user = User.objects.get(username='cashier')
        assert user.password != 'SecurePass123!'
        assert user.check_password('SecurePass123!')

    def test_register_duplicate_username(self, api_client, user):
        """Cannot register with an existing username."""
        url = reverse('users:register')
        data = {
            'username': user.username,
            'password': 'SecurePass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert User.objects.filter(username=user.username).count() == 1

    def test_register_missing_fields(self, api_client):
        """Username and password are both required."""
        url = reverse('users:register')
        response = api_client.post(url, {'username': 'cashier'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'password' in response.data

    def test_register_password_mismatch(self, api_client):
        """Registration fails when passwords don't match."""
        url = reverse('users:register')
        data = {
            'username': 'cashier',
            'password': 'SecurePass123!',
            'password_confirm': 'DifferentPass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'password_confirm' in response.data

    def test_register_weak_password(self, api_client):
        """Registration fails with weak password."""
        url = reverse('users:register')
        response = api_client.post(url, {'username': 'cashier', 'password': '123'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'password' in response.data

    def test_register_closed(self, api_client, settings):
        """Registration is refused when disabled in settings."""
        settings.ALLOW_ADMIN_REGISTRATION = False
        url = reverse('users:register')
        response = api_client.post(url, {'username': 'cashier', 'password': 'SecurePass123!'})

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert not User.objects.filter(username='cashier').exists()


# =============================================================================
# Login Tests
# =============================================================================

@pytest.mark.django_db
class TestLogin:
    """Tests for POST /api/auth/login/"""

    def test_login_success(self, api_client, user):
        """Successfully login with valid credentials."""
        url = reverse('users:login')
        data = {
            'username': user.username,
            'password': 'TestPass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_200_OK
        assert 'access' in response.data['tokens']
        assert 'refresh' in response.data['tokens']
        assert response.data['user']['username'] == user.username

    def test_login_wrong_password(self, api_client, user):
        """Login fails with wrong password."""
        url = reverse('users:login')
        response = api_client.post(url, {'username': user.username, 'password': 'WrongPass!'})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_login_nonexistent_user(self, api_client):
        """Login fails for unknown username with the same message."""
        url = reverse('users:login')
        response = api_client.post(url, {'username': 'ghost', 'password': 'TestPass123!'})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data['error'] == 'Invalid username or password'

    def test_login_inactive_user(self, api_client, user_inactive):
        """Deactivated admins cannot log in."""
        url = reverse('users:login')
        response = api_client.post(url, {'username': user_inactive.username, 'password': 'TestPass123!'})

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_login_updates_last_login(self, api_client, user):
        """Login stamps last_login."""
        assert user.last_login is None
        url = reverse('users:login')
        api_client.post(url, {'username': user.username, 'password': 'TestPass123!'})

        user.refresh_from_db()
        assert user.last_login is not None

    def test_login_missing_fields(self, api_client):
        url = reverse('users:login')
        response = api_client.post(url, {})

        assert response.status_code == status.HTTP_400_BAD_REQUEST


# =============================================================================
# Current User Tests
# =============================================================================

@pytest.mark.django_db
class TestGetCurrentUser:
    """Tests for GET /api/auth/user/"""

    def test_get_current_user(self, authenticated_client, user):
        url = reverse('users:current-user')
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['username'] == user.username
        assert 'password' not in response.data

    def test_get_current_user_unauthenticated(self, api_client):
        url = reverse('users:current-user')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_token_refresh(self, api_client, user):
        """A refresh token from login yields a new access token."""
        login = api_client.post(
            reverse('users:login'),
            {'username': user.username, 'password': 'TestPass123!'}
        )
        response = api_client.post(
            reverse('token_refresh'),
            {'refresh': login.data['tokens']['refresh']}
        )

        assert response.status_code == status.HTTP_200_OK
        assert 'access' in response.data


# =============================================================================
# Model Tests
# =============================================================================

@pytest.mark.django_db
class TestUserModel:
    """Tests for the admin User model."""

    def test_create_user(self):
        user = User.objects.create_user(username='helper', password='TestPass123!')

        assert user.is_active is True
        assert user.is_staff is False
        assert user.check_password('TestPass123!')

    def test_create_user_requires_username(self):
        with pytest.raises(ValueError):
            User.objects.create_user(username='', password='TestPass123!')

    def test_create_superuser(self):
        user = User.objects.create_superuser(username='root', password='TestPass123!')

        assert user.is_staff is True
        assert user.is_superuser is True

    def test_user_str(self, user):
        assert str(user) == 'teacher'
