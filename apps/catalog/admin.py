# ==========================================
# apps/catalog/admin.py
# ==========================================

from django.contrib import admin
from .models import Book


@admin.register(Book)
class BookAdmin(admin.ModelAdmin):
    """Admin interface for the sale catalog."""

    list_display = ['class_label', 'subject', 'title', 'price', 'is_book']
    list_filter = ['class_label', 'is_book']
    search_fields = ['title', 'subject', 'class_label']
    ordering = ['class_label', 'subject', 'title']
    list_editable = ['price']
