"""Key casing helpers used when matching keys to field names."""

import re

__all__ = ["to_snake_case"]

_WORD_BOUNDARY_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def to_snake_case(key: str) -> str:
    """Convert a camelCase, PascalCase or dashed key into snake_case.

    Example:
        >>> to_snake_case("firstName")
        'first_name'
        >>> to_snake_case("HTTPStatus")
        'http_status'
        >>> to_snake_case("date-of-birth")
        'date_of_birth'
    """
    return _WORD_BOUNDARY_RE.sub("_", key).replace("-", "_").lower()
