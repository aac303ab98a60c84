from rest_framework import viewsets
from rest_framework.permissions import AllowAny
from drf_spectacular.utils import extend_schema, extend_schema_view, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from .serializers import BookSerializer, CatalogFilterSerializer
from .services import list_catalog


@extend_schema_view(
    list=extend_schema(
        parameters=[
            OpenApiParameter('class', OpenApiTypes.STR, description='Filter by class'),
            OpenApiParameter('is_book', OpenApiTypes.BOOL, description='Books (true) or stationery (false)'),
        ],
    ),
)
@extend_schema(tags=['catalog'])
class BookViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Public catalog of books and stationery.
    
    list: All items ordered by class, subject, title
    retrieve: A single item
    """
    
    serializer_class = BookSerializer
    permission_classes = [AllowAny]
    
    def get_queryset(self):
        """
        Filter the catalog based on query parameters.

        Filters:
        - class: Only items for this class
        - is_book: Books (true) or stationery (false)
        """
        if self.action != 'list':
            return list_catalog()

        filter_serializer = CatalogFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)

        return list_catalog(
            class_label=self.request.query_params.get('class'),
            is_book=filter_serializer.validated_data.get('is_book'),
        )
