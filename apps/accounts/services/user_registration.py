"""Admin registration service."""

import logging

from django.conf import settings
from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model

from .exceptions import RegistrationClosedError, UserRegistrationError

User = get_user_model()

logger = logging.getLogger(__name__)


@transaction.atomic
def register_admin(*, username: str, password: str) -> User:
    """
    Register a new sale administrator.

    Registration is open by default and can be closed with the
    ``ALLOW_ADMIN_REGISTRATION`` setting once the sale staff is set up.

    Args:
        username: Unique login name
        password: Plain password (will be hashed)

    Returns:
        Created User instance

    Raises:
        RegistrationClosedError: If self-registration is disabled
        UserRegistrationError: If the username is taken
    """
    if not getattr(settings, 'ALLOW_ADMIN_REGISTRATION', True):
        raise RegistrationClosedError("Admin registration is disabled")

    try:
        user = User.objects.create_user(
            username=username,
            password=password,
            is_staff=True,
        )
    except IntegrityError:
        raise UserRegistrationError(f"Username '{username}' is already taken")

    logger.info("Registered admin %s", user.username)
    return user
