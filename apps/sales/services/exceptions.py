"""
Domain-specific exceptions for sales app.

These exceptions represent business rule violations and store faults.
Views catch them and convert them to HTTP responses; ``code`` is the
machine-readable error name put in the response body.
"""


class SalesServiceError(Exception):
    """Base exception for all sales service errors."""
    code = 'sales_error'
    retryable = False


class SaleValidationError(SalesServiceError):
    """Raised when a sale submission is malformed. Nothing was persisted."""
    code = 'validation_error'

    def __init__(self, details):
        self.details = details
        super().__init__("Invalid sale submission")


class TokenNotFoundError(SalesServiceError):
    """Raised when no token exists for the presented code."""
    code = 'token_not_found'


class TokenAlreadyUsedError(SalesServiceError):
    """Raised when the token has reached its redemption limit."""
    code = 'token_already_used'


class RedemptionTimeoutError(SalesServiceError):
    """Raised when the token lock could not be acquired in time."""
    code = 'redemption_timeout'
    retryable = True


class SalePersistenceError(SalesServiceError):
    """
    Raised when the store fails while writing or committing a sale.

    The transaction was rolled back. When ``outcome_unknown`` is set the
    failure happened during commit, so the caller cannot tell whether the
    sale landed and should check the token status before resubmitting.
    """
    code = 'persistence_error'

    def __init__(self, message, *, outcome_unknown=False):
        self.outcome_unknown = outcome_unknown
        super().__init__(message)


class SaleNotFoundError(SalesServiceError):
    """Raised when a sale record does not exist."""
    code = 'sale_not_found'


class TokenIssuanceError(SalesServiceError):
    """Raised when no unique token code could be generated."""
    code = 'issuance_failed'


class PortalNotConfiguredError(SalesServiceError):
    """Raised when PORTAL_URL is not set and a token URL is needed."""
    code = 'portal_not_configured'
