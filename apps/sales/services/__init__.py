"""
Sales app services layer.

Services contain business logic and orchestrate operations across models.
Redemption runs in a single transaction under a row lock on the token.
"""

from .exceptions import (
    SalesServiceError,
    SaleValidationError,
    TokenNotFoundError,
    TokenAlreadyUsedError,
    RedemptionTimeoutError,
    SalePersistenceError,
    SaleNotFoundError,
    TokenIssuanceError,
    PortalNotConfiguredError,
)

from .redemption import (
    RedemptionOptions,
    TokenState,
    get_redemption_options,
    redeem_token,
    get_token_status,
)

from .issuance import (
    issue_token,
    get_portal_url,
    build_portal_url,
    render_token_qr,
)

from .reporting import (
    list_sales,
    get_sale,
    list_tokens,
    summarize_sales,
)


__all__ = [
    # Exceptions
    'SalesServiceError',
    'SaleValidationError',
    'TokenNotFoundError',
    'TokenAlreadyUsedError',
    'RedemptionTimeoutError',
    'SalePersistenceError',
    'SaleNotFoundError',
    'TokenIssuanceError',
    'PortalNotConfiguredError',

    # Redemption
    'RedemptionOptions',
    'TokenState',
    'get_redemption_options',
    'redeem_token',
    'get_token_status',

    # Issuance
    'issue_token',
    'get_portal_url',
    'build_portal_url',
    'render_token_qr',

    # Reporting
    'list_sales',
    'get_sale',
    'list_tokens',
    'summarize_sales',
]
