"""Splitting of raw ``key:value,key:value`` text into key/value pairs."""

from typing import Optional

from textbind.errors import InvalidArgumentError
from textbind.settings import TextBindSettings

__all__ = ["KeyValuePair", "tokenize"]

KeyValuePair = tuple[str, str]


def tokenize(raw: str, settings: Optional[TextBindSettings] = None) -> list[KeyValuePair]:
    """Split ``raw`` into trimmed ``(key, value_text)`` pairs.

    Segments that do not split into exactly one key and one value are dropped
    without error, so ``"time:12:30"`` and ``"flag"`` both vanish. Duplicate keys
    are kept, in their original order.

    Args:
        raw: The text to split.
        settings: Separators to use; defaults to ``,`` and ``:``.

    Returns:
        The pairs in input order.

    Raises:
        InvalidArgumentError: If ``raw`` is None.

    Example:
        >>> tokenize(" name: John , age:25, junk")
        [('name', 'John'), ('age', '25')]
    """
    if raw is None:
        raise InvalidArgumentError("raw text must not be None")
    settings = settings or TextBindSettings()

    parts = (
        [part.strip() for part in segment.split(settings.key_value_separator)]
        for segment in raw.split(settings.pair_separator)
    )
    return [(part[0], part[1]) for part in parts if len(part) == 2]
