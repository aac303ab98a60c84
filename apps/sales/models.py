from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid


# Issued codes are 8 characters long; redemption accepts any 8 ASCII letters/digits
TOKEN_CODE_LENGTH = 8


class TokenStatus(models.TextChoices):
    UNUSED = 'unused', 'Unused'
    USED = 'used', 'Used'


class RedemptionToken(models.Model):
    """
    One-time-use code printed as a QR code and handed to a buyer.

    ``usage_count`` only ever moves up, one step per successful redemption,
    and only inside the redemption transaction. Tokens are never deleted.
    """
    
    code = models.CharField(primary_key=True, max_length=TOKEN_CODE_LENGTH)
    usage_count = models.PositiveIntegerField(default=0)
    
    issued_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='issued_tokens'
    )
    
    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    redeemed_at = models.DateTimeField(null=True, blank=True)
    
    class Meta:
        db_table = 'qr_codes'
        indexes = [
            models.Index(fields=['created_at'], name='qr_codes_created_at_idx'),
        ]
        ordering = ['-created_at']
    
    def __str__(self):
        return f"{self.code} (used {self.usage_count}x)"
    
    def status_for(self, redemption_limit):
        """Return USED once the token reached the redemption limit."""
        if self.usage_count >= redemption_limit:
            return TokenStatus.USED
        return TokenStatus.UNUSED


class SaleRecord(models.Model):
    """
    A sale recorded by redeeming a token. Immutable once stored.
    """
    
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    
    # Token consumed by this sale
    token = models.ForeignKey(
        RedemptionToken,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='sales'
    )
    
    # Buyer
    payer_name = models.CharField(max_length=255)
    group_label = models.CharField(max_length=50, db_column='class')
    
    # Financial details
    total_amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    
    # Ordered list of {"name", "quantity", "unit_price"}
    line_items = models.JSONField()
    
    created_at = models.DateTimeField(auto_now_add=True)
    
    class Meta:
        db_table = 'sales_entries'
        constraints = [
            models.CheckConstraint(
                condition=models.Q(total_amount__gte=0),
                name='sales_entries_total_non_negative',
            ),
        ]
        indexes = [
            models.Index(fields=['created_at'], name='sales_entries_created_at_idx'),
            models.Index(fields=['group_label'], name='sales_entries_class_idx'),
        ]
        ordering = ['-created_at']
    
    def __str__(self):
        return f"{self.payer_name} ({self.group_label}) - {self.total_amount}"
    
    def save(self, *args, **kwargs):
        """Sale records are written once, by the redemption service."""
        if not self._state.adding:
            raise ValueError("Sale records are immutable")
        super().save(*args, **kwargs)
