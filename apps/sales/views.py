from collections.abc import Mapping

from django.http import HttpResponse
from rest_framework import viewsets, status
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from rest_framework.settings import api_settings
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema, OpenApiResponse

from .permissions import IsSaleAdmin
from .serializers import (
    SaleSubmissionSerializer,
    SaleRecordSerializer,
    RedemptionTokenSerializer,
    TokenStatusSerializer,
    IssuedTokenSerializer,
    SalesSummarySerializer,
)

from apps.sales.services import (
    redeem_token,
    get_token_status,
    get_redemption_options,
    issue_token,
    get_portal_url,
    build_portal_url,
    render_token_qr,
    list_sales,
    get_sale,
    list_tokens,
    summarize_sales,
    # Exceptions
    SalesServiceError,
    SaleValidationError,
    TokenNotFoundError,
    TokenAlreadyUsedError,
    RedemptionTimeoutError,
    SalePersistenceError,
    SaleNotFoundError,
)


# HTTP status per service error; anything else is a 500
ERROR_STATUS = [
    (SaleValidationError, status.HTTP_400_BAD_REQUEST),
    (TokenNotFoundError, status.HTTP_404_NOT_FOUND),
    (SaleNotFoundError, status.HTTP_404_NOT_FOUND),
    (TokenAlreadyUsedError, status.HTTP_409_CONFLICT),
    (RedemptionTimeoutError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def error_response(exc: SalesServiceError) -> Response:
    """Convert a sales service error to an API response."""
    body = {'error': str(exc), 'code': exc.code}
    if isinstance(exc, SaleValidationError):
        body['details'] = exc.details
    if isinstance(exc, SalePersistenceError):
        body['outcome_unknown'] = exc.outcome_unknown

    for error_class, http_status in ERROR_STATUS:
        if isinstance(exc, error_class):
            break
    else:
        http_status = status.HTTP_500_INTERNAL_SERVER_ERROR

    response = Response(body, status=http_status)
    if exc.retryable:
        response['Retry-After'] = '1'
    return response


class SalesPagination(PageNumberPagination):
    """Custom pagination for sales reports."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


@extend_schema(
    request=SaleSubmissionSerializer,
    responses={
        201: SaleRecordSerializer,
        400: OpenApiResponse(description='Invalid submission'),
        404: OpenApiResponse(description='Unknown code'),
        409: OpenApiResponse(description='Code already used'),
        503: OpenApiResponse(description='Code busy, retry'),
    },
    tags=['Sales']
)
@api_view(['POST'])
@permission_classes([AllowAny])
def submit_sale(request):
    """
    Submit a sale paid for with a one-time code.
    
    POST /api/sales/submit/
    """
    data = request.data
    if not isinstance(data, Mapping):
        return error_response(SaleValidationError({
            api_settings.NON_FIELD_ERRORS_KEY: ['Expected a JSON object with the sale fields.']
        }))

    try:
        sale = redeem_token(
            code=data.get('code'),
            payer_name=data.get('payer_name'),
            group_label=data.get('group_label'),
            total_amount=data.get('total_amount'),
            line_items=data.get('line_items'),
        )
    except SalesServiceError as e:
        return error_response(e)

    return Response(SaleRecordSerializer(sale).data, status=status.HTTP_201_CREATED)


class SaleRecordViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Sales report for administrators.

    list: All sales, newest first
    retrieve: A single sale
    summary: Totals over all sales and tokens
    """
    
    serializer_class = SaleRecordSerializer
    permission_classes = [IsSaleAdmin]
    pagination_class = SalesPagination
    
    def get_queryset(self):
        return list_sales()
    
    def retrieve(self, request, *args, **kwargs):
        try:
            sale = get_sale(self.kwargs['pk'])
        except SaleNotFoundError as e:
            return error_response(e)
        return Response(self.get_serializer(sale).data)
    
    @extend_schema(responses=SalesSummarySerializer)
    @action(detail=False, methods=['get'])
    def summary(self, request):
        """Totals over all sales and tokens."""
        serializer = SalesSummarySerializer(summarize_sales())
        return Response(serializer.data)


class RedemptionTokenViewSet(viewsets.ReadOnlyModelViewSet):
    """
    One-time codes.

    list: Usage report (admin)
    create: Issue a new code (admin)
    retrieve: Public status of a code
    qr: PNG QR image of a code (admin)
    """
    
    serializer_class = RedemptionTokenSerializer
    pagination_class = SalesPagination
    lookup_field = 'code'
    
    def get_queryset(self):
        return list_tokens()
    
    def get_permissions(self):
        """Code status is public, everything else is admin only."""
        if self.action == 'retrieve':
            return [AllowAny()]
        return [IsSaleAdmin()]
    
    def get_serializer_context(self):
        context = super().get_serializer_context()
        context['redemption_limit'] = get_redemption_options().redemption_limit
        return context
    
    @extend_schema(request=None, responses={201: IssuedTokenSerializer})
    def create(self, request, *args, **kwargs):
        """Issue a new code and return its portal URL."""
        try:
            get_portal_url()
            token = issue_token(issued_by=request.user)
        except SalesServiceError as e:
            return error_response(e)
        
        serializer = IssuedTokenSerializer({
            'message': 'QR code generated successfully',
            'code': token.code,
            'url': build_portal_url(token.code),
        })
        return Response(serializer.data, status=status.HTTP_201_CREATED)
    
    @extend_schema(responses=TokenStatusSerializer)
    def retrieve(self, request, *args, **kwargs):
        try:
            state = get_token_status(self.kwargs['code'])
        except TokenNotFoundError as e:
            return error_response(e)
        return Response(TokenStatusSerializer(state).data)
    
    @extend_schema(responses={(200, 'image/png'): OpenApiTypes.BINARY})
    @action(detail=True, methods=['get'])
    def qr(self, request, code=None):
        """PNG QR image pointing to the sale portal."""
        try:
            png = render_token_qr(code)
        except SalesServiceError as e:
            return error_response(e)
        
        response = HttpResponse(png, content_type='image/png')
        response['Content-Disposition'] = f'inline; filename="{code}.png"'
        return response
