"""Translate storage unique-constraint violations into DuplicateResourceException.

Postgres (asyncpg) reports the violated constraint name; SQLite reports
"UNIQUE constraint failed: <table>.<column>". Both are mapped to the camelCase
field name used on the wire.
"""

import re

from sqlalchemy.exc import IntegrityError

from nexus_obra.domain.exceptions import DuplicateResourceException

# constraint or "table.column" -> wire field
_UNIQUE_FIELDS: dict[str, str] = {
    "uq_app_user_username": "username",
    "app_user.username": "username",
    "uq_client_client_name": "clientName",
    "client.client_name": "clientName",
    "uq_client_client_email": "clientEmail",
    "client.client_email": "clientEmail",
    "uq_client_client_phone": "clientPhone",
    "client.client_phone": "clientPhone",
}

_DUPLICATE_MESSAGES: dict[str, str] = {
    "username": "Username already exists",
}

_SQLITE_UNIQUE = re.compile(r"UNIQUE constraint failed: ([\w.]+)")
_PG_CONSTRAINT = re.compile(r'constraint "([^"]+)"')


def _camelize(column: str) -> str:
    head, *rest = column.split("_")
    return head + "".join(part.capitalize() for part in rest)


def duplicate_field(error: IntegrityError) -> str | None:
    """Return the wire field name of the violated unique constraint, or None.

    None means the IntegrityError is not a unique violation (e.g. FK or check).
    """
    orig = getattr(error, "orig", None)
    constraint = getattr(getattr(orig, "__cause__", None), "constraint_name", None)
    if constraint is None:
        constraint = getattr(orig, "constraint_name", None)
    text = str(orig if orig is not None else error)
    if constraint is None:
        match = _PG_CONSTRAINT.search(text)
        if match and "unique" in text.lower():
            constraint = match.group(1)
    if constraint:
        return _UNIQUE_FIELDS.get(constraint)
    match = _SQLITE_UNIQUE.search(text)
    if match:
        key = match.group(1)
        return _UNIQUE_FIELDS.get(key, _camelize(key.rsplit(".", 1)[-1]))
    return None


def to_duplicate_exception(error: IntegrityError) -> DuplicateResourceException | None:
    """Build the 409 domain exception for a unique violation, or None for other integrity errors."""
    field = duplicate_field(error)
    if field is None:
        return None
    return DuplicateResourceException(
        field, _DUPLICATE_MESSAGES.get(field, "Duplicate resource")
    )
