"""Record ids: CUID2 generation and the id shape accepted in request bodies."""

import re

from cuid2 import cuid_wrapper

ID_MAX_LENGTH = 64
_ID_PATTERN = re.compile(r"[A-Za-z0-9_-]+")

_next_cuid = cuid_wrapper()


def generate_cuid() -> str:
    """Return a new CUID2 string for use as a primary key."""
    value = _next_cuid()
    if not isinstance(value, str):
        raise TypeError(f"cuid2 returned {type(value).__name__}, expected str")
    return value


def is_valid_id_format(value: str | None) -> bool:
    """True for 1..64 characters of letters, digits, hyphen or underscore."""
    if not value or len(value) > ID_MAX_LENGTH:
        return False
    return _ID_PATTERN.fullmatch(value) is not None
