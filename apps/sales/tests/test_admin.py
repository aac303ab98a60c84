import pytest
from django.db import connection
from django.test.utils import CaptureQueriesContext
from django.urls import reverse
from rest_framework import status

from apps.accounts.models import User


@pytest.fixture
def superuser_client(client, db):
    """Django test client logged in to the admin site as a superuser."""
    superuser = User.objects.create_superuser(
        username='headteacher',
        password='TestPass123!',
    )
    client.force_login(superuser)
    return client


@pytest.mark.django_db
class TestRedemptionTokenAdmin:
    """Tokens are written only by issuance and redemption."""

    def test_change_form_is_view_only(self, superuser_client, used_token):
        url = reverse('admin:sales_redemptiontoken_change', args=[used_token.code])
        response = superuser_client.get(url)

        assert response.status_code == status.HTTP_200_OK

    def test_change_form_cannot_write_usage_count(self, superuser_client, used_token):
        """Saving the change form must not reset usage_count."""
        url = reverse('admin:sales_redemptiontoken_change', args=[used_token.code])

        with CaptureQueriesContext(connection) as ctx:
            response = superuser_client.post(url, {})

        token_updates = [
            query['sql'] for query in ctx.captured_queries
            if query['sql'].startswith('UPDATE "qr_codes"')
        ]
        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert token_updates == []
        used_token.refresh_from_db()
        assert used_token.usage_count == 1

    def test_cannot_add_tokens(self, superuser_client):
        response = superuser_client.get(reverse('admin:sales_redemptiontoken_add'))

        assert response.status_code == status.HTTP_403_FORBIDDEN
