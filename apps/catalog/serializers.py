from rest_framework import serializers
from .models import Book


class BookSerializer(serializers.ModelSerializer):
    """Catalog item as shown on the sale portal."""
    
    # Keep the wire name used by the portal
    class_name = serializers.CharField(source='class_label', read_only=True)
    
    class Meta:
        model = Book
        fields = [
            'id',
            'class_name',
            'subject',
            'title',
            'price',
            'is_book',
        ]
        read_only_fields = fields


class CatalogFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for catalog filtering.

    Query Parameters:
        is_book (bool): Books only (true) or stationery only (false)
    """

    is_book = serializers.BooleanField(required=False, allow_null=True)
