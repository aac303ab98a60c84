"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    RegistrationClosedError,
    UserRegistrationError,
    InvalidCredentialsError,
    InactiveAccountError,
)
from .user_registration import register_admin
from .user_authentication import authenticate_admin

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'RegistrationClosedError',
    'UserRegistrationError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    # Services
    'register_admin',
    'authenticate_admin',
]
