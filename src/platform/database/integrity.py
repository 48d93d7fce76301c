from sqlalchemy.exc import IntegrityError


# PostgreSQL SQLSTATE for unique_violation
UNIQUE_VIOLATION = '23505'


def is_unique_violation(exc: IntegrityError, *, constraint: str | None = None) -> bool:
    """
    True when the IntegrityError was raised by a unique constraint
    (optionally a specific one).

    The asyncpg dialect exposes the SQLSTATE on the DBAPI error as `sqlstate`
    (`pgcode` on older SQLAlchemy releases).
    """
    orig = exc.orig
    code = getattr(orig, 'sqlstate', None) or getattr(orig, 'pgcode', None)
    if code is None:
        cause = getattr(orig, '__cause__', None)
        code = getattr(cause, 'sqlstate', None)
    matched = code == UNIQUE_VIOLATION if code else 'duplicate key' in str(exc).lower()
    if not matched or constraint is None:
        return matched
    return constraint in str(exc)
