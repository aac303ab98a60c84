"""
Management command to load the sale catalog from a JSON file.

Usage:
    python manage.py import_catalog catalog.json
    python manage.py import_catalog catalog.json --dry-run

The file holds a list of objects::

    [
        {"class": "5A", "subject": "Math", "title": "Numbers 5", "price": "12.50", "is_book": true},
        {"class": "5A", "subject": "Math", "title": "Squared notebook", "price": "1.20", "is_book": false}
    ]

Existing items (same class, subject and title) get their price and kind updated.
"""

import json

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from apps.catalog.services import import_catalog_items, CatalogImportError


class _DryRunRollback(Exception):
    pass


class Command(BaseCommand):
    help = 'Create or update catalog items from a JSON file'

    def add_arguments(self, parser):
        parser.add_argument('path', help='Path to the JSON catalog file')
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be imported without making changes',
        )

    def handle(self, *args, **options):
        try:
            with open(options['path'], encoding='utf-8') as fh:
                entries = json.load(fh)
        except OSError as e:
            raise CommandError(f"Cannot read {options['path']}: {e}")
        except json.JSONDecodeError as e:
            raise CommandError(f"Invalid JSON in {options['path']}: {e}")

        if not isinstance(entries, list):
            raise CommandError('Catalog file must contain a list of items')

        try:
            with transaction.atomic():
                created, updated = import_catalog_items(entries)
                if options['dry_run']:
                    raise _DryRunRollback()
        except CatalogImportError as e:
            raise CommandError(str(e))
        except _DryRunRollback:
            self.stdout.write(
                self.style.WARNING(
                    f'--dry-run mode: would create {created} and update {updated} item(s). No changes made.'
                )
            )
            return

        self.stdout.write(
            self.style.SUCCESS(f'Catalog imported: {created} created, {updated} updated.')
        )
