"""
Bounded lock waits for the redemption transaction.

Each backend has its own knob for how long a transaction waits on a row
lock held by another one. ``apply_lock_timeout`` sets it for the current
transaction and ``is_lock_contention`` recognises the error the backend
raises when the wait runs out.
"""

import math

from django.db import connections


# lock_not_available, deadlock_detected
POSTGRES_LOCK_SQLSTATES = {'55P03', '40P01'}

# ER_LOCK_WAIT_TIMEOUT, ER_LOCK_DEADLOCK
MYSQL_LOCK_ERRNOS = {1205, 1213}

SQLITE_LOCKED_MESSAGES = ('database is locked', 'database table is locked')


def apply_lock_timeout(alias: str, timeout_ms: int) -> None:
    """
    Limit the lock wait of the open transaction on ``alias``.

    Must be called inside the transaction. PostgreSQL scopes the setting
    to the transaction. MySQL has no transaction-scoped variant, so the
    session value stays on the connection (and on later transactions of a
    persistent connection) until the next redemption sets it again.
    SQLite takes its write lock when the transaction begins
    (``transaction_mode: IMMEDIATE``) and waits for the connection
    ``timeout`` option, so nothing is set here.
    """
    connection = connections[alias]

    if connection.vendor == 'postgresql':
        with connection.cursor() as cursor:
            # Third argument true: local to the current transaction
            cursor.execute(
                "SELECT set_config('lock_timeout', %s, true)",
                [f'{int(timeout_ms)}ms']
            )
    elif connection.vendor == 'mysql':
        with connection.cursor() as cursor:
            cursor.execute(
                'SET SESSION innodb_lock_wait_timeout = %s',
                [max(1, math.ceil(timeout_ms / 1000))]
            )


def is_lock_contention(exc: Exception) -> bool:
    """Return True if a database error means a lock wait ran out."""
    cause = exc.__cause__ or exc

    sqlstate = getattr(cause, 'sqlstate', None) or getattr(cause, 'pgcode', None)
    if sqlstate in POSTGRES_LOCK_SQLSTATES:
        return True

    args = getattr(cause, 'args', ())
    if args and args[0] in MYSQL_LOCK_ERRNOS:
        return True

    message = str(exc).lower()
    return any(text in message for text in SQLITE_LOCKED_MESSAGES)
