import pytest
from django.urls import reverse
from rest_framework import status


@pytest.mark.django_db
class TestCatalogList:
    """Tests for GET /api/books/"""

    def test_list_is_public_and_ordered(self, api_client, catalog):
        """Anyone can list the catalog, ordered by class, subject, title."""
        url = reverse('catalog:book-list')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        titles = [item['title'] for item in response.data]
        assert titles == ['Reader 5', 'Numbers 5', 'Squared notebook', 'Numbers 6']

    def test_list_item_shape(self, api_client, catalog):
        url = reverse('catalog:book-list')
        response = api_client.get(url)

        item = response.data[0]
        assert item['class_name'] == '5A'
        assert item['subject'] == 'English'
        assert item['price'] == '9.90'
        assert item['is_book'] is True

    def test_filter_by_class(self, api_client, catalog):
        url = reverse('catalog:book-list')
        response = api_client.get(url, {'class': '6B'})

        assert response.status_code == status.HTTP_200_OK
        assert [item['title'] for item in response.data] == ['Numbers 6']

    def test_filter_stationery(self, api_client, catalog):
        url = reverse('catalog:book-list')
        response = api_client.get(url, {'is_book': 'false'})

        assert [item['title'] for item in response.data] == ['Squared notebook']

    def test_filter_invalid_is_book(self, api_client, catalog):
        url = reverse('catalog:book-list')
        response = api_client.get(url, {'is_book': 'maybe'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_empty_catalog(self, api_client, db):
        url = reverse('catalog:book-list')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data == []

    def test_catalog_is_read_only(self, api_client, catalog):
        url = reverse('catalog:book-list')
        response = api_client.post(url, {'title': 'New'})

        assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED

    def test_retrieve_item(self, api_client, catalog):
        url = reverse('catalog:book-detail', kwargs={'pk': catalog[0].pk})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['title'] == 'Numbers 6'
