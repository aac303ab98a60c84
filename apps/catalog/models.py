# ==========================================
# apps/catalog/models.py
# ==========================================

from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal


class Book(models.Model):
    """Catalog item on sale: a textbook or a stationery article for one class."""
    
    class_label = models.CharField(max_length=50, db_column='class')
    subject = models.CharField(max_length=100)
    title = models.CharField(max_length=255)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    is_book = models.BooleanField()
    
    class Meta:
        db_table = 'books'
        constraints = [
            models.UniqueConstraint(
                fields=['class_label', 'subject', 'title'],
                name='books_class_subject_title_uniq',
            ),
            models.CheckConstraint(
                condition=models.Q(price__gte=0),
                name='books_price_non_negative',
            ),
        ]
        ordering = ['class_label', 'subject', 'title']
    
    def __str__(self):
        kind = 'Book' if self.is_book else 'Stationery'
        return f"[{self.class_label}] {self.subject} - {self.title} ({kind})"
