"""Bounded integer shapes.

Python integers are unbounded, so a plain ``int`` shape never overflows. These
``int`` subclasses carry the range of a fixed-width machine integer and raise
:class:`OverflowError` on construction when a value falls outside it, which the
value parser reports as a :class:`~textbind.errors.ParseError`.

Example:
    >>> Int8(127)
    127
    >>> Int8(128)
    Traceback (most recent call last):
    ...
    OverflowError: 128 is out of range for Int8 [-128, 127]
"""

__all__ = [
    "FixedWidthInt",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
]


class FixedWidthInt(int):
    """Base for integers restricted to ``[MIN, MAX]``."""

    MIN: int
    MAX: int

    def __new__(cls, value=0):
        instance = super().__new__(cls, value)
        if not cls.MIN <= instance <= cls.MAX:
            raise OverflowError(
                f"{int(instance)} is out of range for {cls.__name__} [{cls.MIN}, {cls.MAX}]"
            )
        return instance


def _signed(bits: int) -> tuple[int, int]:
    return -(2 ** (bits - 1)), 2 ** (bits - 1) - 1


def _unsigned(bits: int) -> tuple[int, int]:
    return 0, 2**bits - 1


class Int8(FixedWidthInt):
    MIN, MAX = _signed(8)


class Int16(FixedWidthInt):
    MIN, MAX = _signed(16)


class Int32(FixedWidthInt):
    MIN, MAX = _signed(32)


class Int64(FixedWidthInt):
    MIN, MAX = _signed(64)


class UInt8(FixedWidthInt):
    MIN, MAX = _unsigned(8)


class UInt16(FixedWidthInt):
    MIN, MAX = _unsigned(16)


class UInt32(FixedWidthInt):
    MIN, MAX = _unsigned(32)


class UInt64(FixedWidthInt):
    MIN, MAX = _unsigned(64)
