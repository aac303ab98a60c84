import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from apps.catalog.models import Book


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def catalog(db):
    """A small catalog over two classes with books and stationery."""
    return [
        Book.objects.create(class_label='6B', subject='Math', title='Numbers 6', price=Decimal('14.00'), is_book=True),
        Book.objects.create(class_label='5A', subject='Math', title='Numbers 5', price=Decimal('12.50'), is_book=True),
        Book.objects.create(class_label='5A', subject='English', title='Reader 5', price=Decimal('9.90'), is_book=True),
        Book.objects.create(class_label='5A', subject='Math', title='Squared notebook', price=Decimal('1.20'), is_book=False),
    ]
