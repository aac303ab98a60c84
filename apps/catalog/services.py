"""
Catalog services.

Listing for the public sale portal and bulk import of the items on sale.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional

from django.db import transaction
from django.db.models import QuerySet

from .models import Book

logger = logging.getLogger(__name__)


class CatalogImportError(Exception):
    """Raised when an import entry is malformed."""
    pass


def list_catalog(
    *,
    class_label: Optional[str] = None,
    is_book: Optional[bool] = None
) -> QuerySet[Book]:
    """
    Return catalog items ordered by class, subject and title.

    Args:
        class_label: Only items for this class
        is_book: True for books only, False for stationery only

    Returns:
        Filtered QuerySet of Book
    """
    queryset = Book.objects.all()

    if class_label:
        queryset = queryset.filter(class_label=class_label)

    if is_book is not None:
        queryset = queryset.filter(is_book=is_book)

    return queryset.order_by('class_label', 'subject', 'title')


def _parse_entry(index: int, entry) -> dict:
    if not isinstance(entry, dict):
        raise CatalogImportError(f"Entry {index}: expected an object")

    try:
        class_label = str(entry['class']).strip()
        subject = str(entry['subject']).strip()
        title = str(entry['title']).strip()
        price = Decimal(str(entry['price']))
    except KeyError as e:
        raise CatalogImportError(f"Entry {index}: missing field {e.args[0]!r}")
    except InvalidOperation:
        raise CatalogImportError(f"Entry {index}: invalid price {entry['price']!r}")

    if not (class_label and subject and title):
        raise CatalogImportError(f"Entry {index}: class, subject and title must not be empty")
    if not price.is_finite() or price < 0:
        raise CatalogImportError(f"Entry {index}: price must be a non-negative number")

    return {
        'class_label': class_label,
        'subject': subject,
        'title': title,
        'price': price.quantize(Decimal('0.01')),
        'is_book': bool(entry.get('is_book', True)),
    }


@transaction.atomic
def import_catalog_items(entries: Iterable[dict]) -> tuple[int, int]:
    """
    Create or update catalog items keyed by (class, subject, title).

    The whole import is one transaction: a malformed entry aborts it.

    Args:
        entries: Dicts with ``class``, ``subject``, ``title``, ``price``
            and optional ``is_book`` (defaults to True)

    Returns:
        (created, updated) counts

    Raises:
        CatalogImportError: If any entry is malformed
    """
    created = updated = 0

    for index, entry in enumerate(entries):
        data = _parse_entry(index, entry)
        _, was_created = Book.objects.update_or_create(
            class_label=data['class_label'],
            subject=data['subject'],
            title=data['title'],
            defaults={'price': data['price'], 'is_book': data['is_book']},
        )
        if was_created:
            created += 1
        else:
            updated += 1

    logger.info("Catalog import finished: %d created, %d updated", created, updated)
    return created, updated
