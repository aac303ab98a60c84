import json
from decimal import Decimal

from rest_framework import serializers

from .models import RedemptionToken, SaleRecord, TOKEN_CODE_LENGTH


class LineItemSerializer(serializers.Serializer):
    """One purchased catalog item."""
    name = serializers.CharField(max_length=255)
    quantity = serializers.IntegerField(min_value=1)
    unit_price = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        min_value=Decimal('0.00')
    )


class LineItemsField(serializers.ListField):
    """List of line items; the portal may also send the list JSON-encoded."""

    default_error_messages = {
        'invalid_json': 'Line items must be a list or a JSON-encoded list.',
    }

    def to_internal_value(self, data):
        if isinstance(data, str):
            try:
                data = json.loads(data)
            except ValueError:
                self.fail('invalid_json')
        return super().to_internal_value(data)


class SaleSubmissionSerializer(serializers.Serializer):
    """Validates a sale submitted together with a token code."""
    code = serializers.RegexField(
        rf'^[A-Za-z0-9]{{{TOKEN_CODE_LENGTH}}}$',
        max_length=TOKEN_CODE_LENGTH,
        error_messages={'invalid': f'Code must be {TOKEN_CODE_LENGTH} letters or digits.'}
    )
    payer_name = serializers.CharField(max_length=255)
    group_label = serializers.CharField(max_length=50)
    total_amount = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        min_value=Decimal('0.00')
    )
    line_items = LineItemsField(child=LineItemSerializer(), allow_empty=False)


class SaleRecordSerializer(serializers.ModelSerializer):
    """Serializer for stored sales (read-only)."""
    code = serializers.CharField(source='token_id', read_only=True, allow_null=True)
    
    class Meta:
        model = SaleRecord
        fields = [
            'id', 'code', 'payer_name', 'group_label',
            'total_amount', 'line_items', 'created_at'
        ]
        read_only_fields = fields


class RedemptionTokenSerializer(serializers.ModelSerializer):
    """Serializer for the token usage report."""
    issued_by = serializers.CharField(source='issued_by.username', read_only=True, default=None)
    status = serializers.SerializerMethodField()
    
    class Meta:
        model = RedemptionToken
        fields = [
            'code', 'usage_count', 'status', 'issued_by',
            'created_at', 'redeemed_at'
        ]
        read_only_fields = fields
    
    def get_status(self, obj):
        return obj.status_for(self.context['redemption_limit'])


class TokenStatusSerializer(serializers.Serializer):
    """Public token state, used by the portal and for reconciliation."""
    code = serializers.CharField()
    status = serializers.CharField()
    usage_count = serializers.IntegerField()
    redemption_limit = serializers.IntegerField()
    redeemed_at = serializers.DateTimeField(allow_null=True)


class IssuedTokenSerializer(serializers.Serializer):
    message = serializers.CharField()
    code = serializers.CharField()
    url = serializers.URLField()


class SalesSummarySerializer(serializers.Serializer):
    sales_count = serializers.IntegerField()
    total_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    tokens_issued = serializers.IntegerField()
    tokens_used = serializers.IntegerField()
    tokens_unused = serializers.IntegerField()
