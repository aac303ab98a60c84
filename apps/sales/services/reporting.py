"""Read-only reports over sales and tokens."""

from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db.models import QuerySet, Sum

from apps.sales.models import RedemptionToken, SaleRecord

from .exceptions import SaleNotFoundError
from .redemption import get_redemption_options


def list_sales() -> QuerySet:
    """All sales, newest first."""
    return SaleRecord.objects.select_related('token').order_by('-created_at')


def get_sale(sale_id: UUID) -> SaleRecord:
    """
    Get a single sale.

    Raises:
        SaleNotFoundError: If the sale doesn't exist or the id is malformed
    """
    try:
        return SaleRecord.objects.select_related('token').get(id=sale_id)
    except (SaleRecord.DoesNotExist, ValidationError):
        raise SaleNotFoundError("Sales entry not found")


def list_tokens() -> QuerySet:
    """All tokens with their usage, newest first."""
    return RedemptionToken.objects.select_related('issued_by').order_by('-created_at')


def summarize_sales(*, redemption_limit: Optional[int] = None) -> dict:
    """
    Totals for the sales dashboard.

    Returns:
        dict with sales_count, total_amount, tokens_issued, tokens_used
        and tokens_unused
    """
    if redemption_limit is None:
        redemption_limit = get_redemption_options().redemption_limit

    sales = SaleRecord.objects.aggregate(total=Sum('total_amount'))
    tokens_issued = RedemptionToken.objects.count()
    tokens_used = RedemptionToken.objects.filter(
        usage_count__gte=redemption_limit
    ).count()

    return {
        'sales_count': SaleRecord.objects.count(),
        'total_amount': sales['total'] or Decimal('0.00'),
        'tokens_issued': tokens_issued,
        'tokens_used': tokens_used,
        'tokens_unused': tokens_issued - tokens_used,
    }
