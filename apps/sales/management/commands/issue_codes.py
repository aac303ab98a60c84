"""
Management command to issue a batch of one-time codes before the sale.

Usage:
    python manage.py issue_codes 50
    python manage.py issue_codes 50 --qr-dir printouts/

Prints one "code<TAB>url" line per issued code. With --qr-dir a PNG QR
image named <code>.png is written for each code.
"""

from pathlib import Path

from django.core.management.base import BaseCommand, CommandError

from apps.sales.services import (
    issue_token,
    build_portal_url,
    get_portal_url,
    render_token_qr,
    SalesServiceError,
)


class Command(BaseCommand):
    help = 'Issue one-time QR codes for the book sale'

    def add_arguments(self, parser):
        parser.add_argument('count', type=int, help='Number of codes to issue')
        parser.add_argument(
            '--qr-dir',
            help='Directory to write a PNG QR image per code',
        )

    def handle(self, *args, **options):
        count = options['count']
        if count < 1:
            raise CommandError('count must be at least 1')

        try:
            get_portal_url()
        except SalesServiceError as e:
            raise CommandError(str(e))

        qr_dir = None
        if options['qr_dir']:
            qr_dir = Path(options['qr_dir'])
            qr_dir.mkdir(parents=True, exist_ok=True)

        for _ in range(count):
            try:
                token = issue_token()
                if qr_dir is not None:
                    (qr_dir / f'{token.code}.png').write_bytes(render_token_qr(token.code))
            except SalesServiceError as e:
                raise CommandError(str(e))

            self.stdout.write(f'{token.code}\t{build_portal_url(token.code)}')

        self.stdout.write(self.style.SUCCESS(f'Issued {count} code(s).'))
