"""Product identifiers: the store's opaque id format, checked without IO."""

import uuid


def is_valid_id(value: object) -> bool:
    """True when value is a string the store can address (any UUID spelling)."""
    if not isinstance(value, str) or not value:
        return False
    try:
        uuid.UUID(value)
    except ValueError:
        return False
    return True


def parse_id(value: str) -> uuid.UUID:
    """Convert a valid id string to the store's key type. Raises ValueError."""
    return uuid.UUID(value)
