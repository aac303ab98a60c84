"""
Token issuance service.

Generates one-time codes and the QR images printed for buyers. Each QR
code encodes the sale portal URL with the code as a query parameter.
"""

import logging
import secrets
from io import BytesIO
from typing import Optional

import qrcode
from django.conf import settings
from django.db import transaction, router, IntegrityError

from apps.accounts.models import User
from apps.sales.models import RedemptionToken

from .exceptions import (
    TokenNotFoundError,
    TokenIssuanceError,
    PortalNotConfiguredError,
)

logger = logging.getLogger(__name__)


def generate_token_code() -> str:
    """Random 8-character lowercase hex code."""
    return secrets.token_hex(4)


def issue_token(
    *,
    issued_by: Optional[User] = None,
    max_retries: int = 5,
    using: Optional[str] = None
) -> RedemptionToken:
    """
    Create a new unused token.

    A generated code that collides with an existing one is discarded and
    a new one is drawn.

    Args:
        issued_by: Admin issuing the token
        max_retries: Number of codes to try before giving up
        using: Database alias

    Returns:
        Created RedemptionToken with usage_count 0

    Raises:
        TokenIssuanceError: If every generated code was already taken
    """
    alias = using or router.db_for_write(RedemptionToken)

    for _ in range(max_retries):
        code = generate_token_code()
        try:
            # Savepoint per attempt so a collision does not poison an outer transaction
            with transaction.atomic(using=alias):
                token = RedemptionToken.objects.using(alias).create(
                    code=code,
                    issued_by=issued_by,
                )
        except IntegrityError:
            logger.warning("Generated token code %s already exists, retrying", code)
            continue

        logger.info(
            "Issued token %s by %s",
            token.code, issued_by.username if issued_by else 'system'
        )
        return token

    raise TokenIssuanceError(
        f"Could not generate a unique code after {max_retries} attempts"
    )


def get_portal_url() -> str:
    """
    Return the configured sale portal base URL without trailing slash.

    Raises:
        PortalNotConfiguredError: If PORTAL_URL is empty
    """
    portal_url = (getattr(settings, 'PORTAL_URL', '') or '').strip()
    if not portal_url:
        raise PortalNotConfiguredError("PORTAL_URL is not configured")
    return portal_url.rstrip('/')


def build_portal_url(code: str) -> str:
    """URL encoded in the token's QR code."""
    return f"{get_portal_url()}/?code={code}"


def render_token_qr(code: str, *, using: Optional[str] = None) -> bytes:
    """
    Render the QR code of an existing token as PNG bytes.

    The QR code uses error correction level M (15% recovery), which keeps
    printed codes readable when slightly damaged.

    Raises:
        TokenNotFoundError: If no token has this code
        PortalNotConfiguredError: If PORTAL_URL is empty
    """
    alias = using or router.db_for_read(RedemptionToken)
    if not RedemptionToken.objects.using(alias).filter(code=code).exists():
        raise TokenNotFoundError(f"Code {code} not found")

    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=10,
        border=4,
    )
    qr.add_data(build_portal_url(code))
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")

    buffer = BytesIO()
    img.save(buffer)
    return buffer.getvalue()
