"""Configuration for tokenizing and binding."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from textbind.errors import InvalidArgumentError

__all__ = ["TextBindSettings"]

_TRUE_TOKENS = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True)
class TextBindSettings:
    """Settings shared by the tokenizer and the assembler.

    Attributes:
        pair_separator: Separates one ``key:value`` segment from the next.
        key_value_separator: Separates a key from its value within a segment.
        snake_case_fields: Whether leftover keys may also match a field by their
            snake_case form (``firstName`` -> ``first_name``).
    """

    pair_separator: str = ","
    key_value_separator: str = ":"
    snake_case_fields: bool = True

    def __post_init__(self):
        if not self.pair_separator or not self.key_value_separator:
            raise InvalidArgumentError("Separators must not be empty")
        if self.pair_separator == self.key_value_separator:
            raise InvalidArgumentError(
                f"Pair and key/value separators must differ, both are {self.pair_separator!r}"
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "TextBindSettings":
        """Build settings from ``TEXTBIND_*`` environment variables.

        Unset variables keep their defaults.

        Args:
            environ: Mapping to read instead of ``os.environ``.
        """
        environ = os.environ if environ is None else environ
        defaults = cls()
        snake_case = environ.get("TEXTBIND_SNAKE_CASE_FIELDS")
        return cls(
            pair_separator=environ.get("TEXTBIND_PAIR_SEPARATOR", defaults.pair_separator),
            key_value_separator=environ.get(
                "TEXTBIND_KEY_VALUE_SEPARATOR", defaults.key_value_separator
            ),
            snake_case_fields=(
                defaults.snake_case_fields
                if snake_case is None
                else snake_case.strip().lower() in _TRUE_TOKENS
            ),
        )
