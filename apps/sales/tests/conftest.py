import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.sales.models import RedemptionToken


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def admin_user(db):
    """Create and return a sale administrator."""
    return User.objects.create_user(
        username='cashier',
        password='TestPass123!',
        is_staff=True,
    )


@pytest.fixture
def admin_client(api_client, admin_user):
    """Return an API client authenticated as a sale administrator using JWT."""
    refresh = RefreshToken.for_user(admin_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def non_staff_client(db):
    """Return an API client authenticated as an account without staff rights."""
    user = User.objects.create_user(username='visitor', password='TestPass123!')
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def token(db):
    """An unused token."""
    return RedemptionToken.objects.create(code='ABCD1234')


@pytest.fixture
def used_token(db):
    """A token that already paid for a sale."""
    return RedemptionToken.objects.create(code='USED0001', usage_count=1)


@pytest.fixture
def sale_data():
    """A valid sale submission without the code."""
    return {
        'payer_name': 'Jane Doe',
        'group_label': '5A',
        'total_amount': Decimal('42.50'),
        'line_items': [
            {'name': 'Numbers 5', 'quantity': 1, 'unit_price': '30.00'},
            {'name': 'Squared notebook', 'quantity': 10, 'unit_price': '1.25'},
        ],
    }
