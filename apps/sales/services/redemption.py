"""
Token redemption service.

Records a sale and consumes its token in one transaction, so that each
token pays for at most ``REDEMPTION_LIMIT`` sales no matter how many
submissions race for it.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from django.conf import settings
from django.db import transaction, router, DatabaseError
from django.utils import timezone

from apps.sales.models import RedemptionToken, SaleRecord

from .exceptions import (
    TokenNotFoundError,
    TokenAlreadyUsedError,
    RedemptionTimeoutError,
    SalePersistenceError,
)
from .locking import apply_lock_timeout, is_lock_contention
from .validation import validate_sale_submission

logger = logging.getLogger(__name__)


DEFAULT_REDEMPTION_LIMIT = 1
DEFAULT_LOCK_TIMEOUT_MS = 5000

# Where a redemption was when the store failed
PHASE_LOCK = 'lock'
PHASE_WRITE = 'write'
PHASE_COMMIT = 'commit'


@dataclass(frozen=True)
class RedemptionOptions:
    """
    Per-call redemption settings.

    ``lock_timeout_ms`` is applied per transaction on PostgreSQL and MySQL.
    SQLite waits for the connection ``timeout`` option instead, which is
    fixed from SALES_REDEMPTION when the connection opens, so on SQLite a
    ``lock_timeout_ms`` passed here has no effect.
    """
    redemption_limit: int = DEFAULT_REDEMPTION_LIMIT
    lock_timeout_ms: int = DEFAULT_LOCK_TIMEOUT_MS

    def __post_init__(self):
        if self.redemption_limit < 1:
            raise ValueError("redemption_limit must be at least 1")
        if self.lock_timeout_ms < 1:
            raise ValueError("lock_timeout_ms must be positive")


@dataclass(frozen=True)
class TokenState:
    code: str
    status: str
    usage_count: int
    redemption_limit: int
    redeemed_at: Optional[datetime]


def get_redemption_options() -> RedemptionOptions:
    """Read redemption options from the SALES_REDEMPTION setting."""
    configured = getattr(settings, 'SALES_REDEMPTION', {})
    return RedemptionOptions(
        redemption_limit=configured.get('REDEMPTION_LIMIT', DEFAULT_REDEMPTION_LIMIT),
        lock_timeout_ms=configured.get('LOCK_TIMEOUT_MS', DEFAULT_LOCK_TIMEOUT_MS),
    )


def redeem_token(
    *,
    code: str,
    payer_name: str,
    group_label: str,
    total_amount: Decimal,
    line_items: List[dict],
    using: Optional[str] = None,
    options: Optional[RedemptionOptions] = None
) -> SaleRecord:
    """
    Record a sale and consume the token that pays for it.

    The token row is locked for the whole transaction, so concurrent
    redemptions of one code run one after another and only the first
    ``redemption_limit`` of them succeed. The sale insert and the usage
    increment commit together or not at all.

    When called inside an outer ``atomic`` block the final commit belongs
    to the caller.

    Args:
        code: Token code presented by the buyer
        payer_name: Buyer name
        group_label: Buyer's class
        total_amount: Sale total, zero or more
        line_items: Purchased items, a list or a JSON-encoded list
        using: Database alias, defaults to the router's write database
        options: Redemption limit and lock wait, defaults to settings

    Returns:
        The persisted SaleRecord

    Raises:
        SaleValidationError: If the submission is malformed
        TokenNotFoundError: If no token has this code
        TokenAlreadyUsedError: If the token reached its redemption limit
        RedemptionTimeoutError: If the token lock was not granted in time
        SalePersistenceError: If writing or committing the sale failed
    """
    payload = validate_sale_submission({
        'code': code,
        'payer_name': payer_name,
        'group_label': group_label,
        'total_amount': total_amount,
        'line_items': line_items,
    })
    code = payload['code']

    alias = using or router.db_for_write(SaleRecord)
    options = options or get_redemption_options()

    phase = PHASE_LOCK
    try:
        with transaction.atomic(using=alias):
            apply_lock_timeout(alias, options.lock_timeout_ms)
            token = _lock_token(code, alias)

            if token.usage_count >= options.redemption_limit:
                logger.warning("Rejected redemption of used token %s", code)
                raise TokenAlreadyUsedError(f"Code {code} has already been used")

            phase = PHASE_WRITE
            sale = _record_sale(token, payload, alias)
            _consume_token(token, alias)

            phase = PHASE_COMMIT
    except DatabaseError as e:
        raise _translate_store_error(e, phase, code) from e

    logger.info(
        "Redeemed token %s for sale %s (%s, %s)",
        code, sale.id, sale.payer_name, sale.total_amount
    )
    return sale


def get_token_status(code: str, *, using: Optional[str] = None,
                     options: Optional[RedemptionOptions] = None) -> TokenState:
    """
    Read a token's redemption state without locking it.

    Lets a caller that got an ambiguous failure check whether its
    redemption went through before submitting again.

    Raises:
        TokenNotFoundError: If no token has this code
    """
    alias = using or router.db_for_read(RedemptionToken)
    options = options or get_redemption_options()

    try:
        token = RedemptionToken.objects.using(alias).get(code=code)
    except RedemptionToken.DoesNotExist:
        raise TokenNotFoundError(f"Code {code} not found")

    return TokenState(
        code=token.code,
        status=token.status_for(options.redemption_limit),
        usage_count=token.usage_count,
        redemption_limit=options.redemption_limit,
        redeemed_at=token.redeemed_at,
    )


def _lock_token(code: str, alias: str) -> RedemptionToken:
    try:
        return (
            RedemptionToken.objects
            .using(alias)
            .select_for_update()
            .get(code=code)
        )
    except RedemptionToken.DoesNotExist:
        logger.warning("Rejected redemption of unknown code %s", code)
        raise TokenNotFoundError(f"Code {code} not found")


def _record_sale(token: RedemptionToken, payload: dict, alias: str) -> SaleRecord:
    return SaleRecord.objects.using(alias).create(
        token=token,
        payer_name=payload['payer_name'],
        group_label=payload['group_label'],
        total_amount=payload['total_amount'],
        line_items=payload['line_items'],
    )


def _consume_token(token: RedemptionToken, alias: str) -> None:
    # Safe without F(): the row is locked until commit
    token.usage_count += 1
    token.redeemed_at = timezone.now()
    token.save(using=alias, update_fields=['usage_count', 'redeemed_at'])


def _translate_store_error(exc: DatabaseError, phase: str, code: str):
    if phase == PHASE_LOCK and is_lock_contention(exc):
        logger.warning("Timed out waiting for the lock on token %s", code)
        return RedemptionTimeoutError(
            f"Code {code} is being redeemed by another request, try again"
        )

    outcome_unknown = phase == PHASE_COMMIT
    logger.error(
        "Failed to persist sale for token %s during %s: %s",
        code, phase, exc
    )
    if outcome_unknown:
        return SalePersistenceError(
            "The sale could not be confirmed; check the code status before resubmitting",
            outcome_unknown=True
        )
    return SalePersistenceError("The sale could not be saved")
