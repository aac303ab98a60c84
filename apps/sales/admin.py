# ==========================================
# apps/sales/admin.py
# ==========================================

from django.contrib import admin
from django.utils.html import format_html

from .models import RedemptionToken, SaleRecord, TokenStatus
from .services import get_redemption_options


@admin.register(RedemptionToken)
class RedemptionTokenAdmin(admin.ModelAdmin):
    """
    Admin interface for one-time codes.

    Codes are issued through the API and consumed only by redemption,
    so every field is read-only here.
    """

    list_display = ['code', 'status_badge', 'usage_count', 'issued_by', 'created_at', 'redeemed_at']
    list_filter = ['created_at', 'redeemed_at']
    search_fields = ['code']
    ordering = ['-created_at']
    readonly_fields = ['code', 'usage_count', 'issued_by', 'created_at', 'redeemed_at']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    def status_badge(self, obj):
        """Display used/unused as colored badge."""
        if obj.status_for(get_redemption_options().redemption_limit) == TokenStatus.USED:
            color, label = '#B85C5C', 'Used'
        else:
            color, label = '#6B8E5E', 'Unused'
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            color, label
        )
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'usage_count'


@admin.register(SaleRecord)
class SaleRecordAdmin(admin.ModelAdmin):
    """Read-only admin for recorded sales."""

    list_display = ['payer_name', 'group_label', 'total_amount', 'token', 'created_at']
    list_filter = ['group_label', 'created_at']
    search_fields = ['payer_name', 'group_label', 'token__code']
    ordering = ['-created_at']
    readonly_fields = ['id', 'token', 'payer_name', 'group_label', 'total_amount', 'line_items', 'created_at']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
