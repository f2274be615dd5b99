"""Conversion of single text values into typed Python values.

A *shape* is anything that describes a value's type: a class such as ``int``
or ``UUID``, an ``Optional[...]`` / ``X | None`` wrapper, a ``Union`` of
several shapes, or an ``Annotated[...]`` form of any of these.

Conversion is chosen up front from an ordered lookup and then performed once:

1. converters registered on the :class:`ValueParser` for the exact shape,
2. the canonical parsers for built-in shapes (``str``, ``bool``, ``int``,
   ``float``, ``Decimal``, ``datetime``, ``date``, ``time``, ``timedelta``,
   ``UUID``),
3. ``Enum`` subclasses, by member name and then by member value,
4. other ``int`` subclasses (see :mod:`textbind.fixed_width`),
5. a ``parse``, ``from_string`` or ``fromisoformat`` class/static method on
   the shape,
6. generic coercion by calling ``shape(text)``; collection classes (``list``,
   ``tuple``, ``set``, ``frozenset``, ``dict`` and their subclasses) are not
   coerced.

Any exception raised by the chosen conversion is reported as :class:`ParseError`.

Every conversion is locale-independent.
"""

import inspect
import math
import re
import types
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from functools import partial
from typing import Annotated, Any, Callable, Optional, Union, get_args, get_origin
from uuid import UUID

from textbind.errors import InvalidArgumentError, ParseError

__all__ = ["ValueParser", "default_parser", "parse", "try_parse"]

Converter = Callable[[str], Any]

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_DECIMAL_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_NON_FINITE_FLOATS = frozenset(
    sign + word
    for sign in ("", "+", "-")
    for word in ("inf", "infinity", "nan")
)
_TIMEDELTA_RE = re.compile(
    r"(?P<sign>-)?(?:(?P<days>[0-9]+)\.)?"
    r"(?P<hours>[0-9]{1,2}):(?P<minutes>[0-9]{1,2})"
    r"(?::(?P<seconds>[0-9]{1,2})(?:\.(?P<fraction>[0-9]{1,7}))?)?"
)
_CAPABILITY_NAMES = ("parse", "from_string", "fromisoformat")
_COLLECTIONS = (list, tuple, set, frozenset, dict)


def _identity(text: str) -> str:
    return text


def _parse_bool(text: str) -> bool:
    token = text.strip().casefold()
    if token == "true":
        return True
    if token == "false":
        return False
    raise ValueError(f"{text!r} is neither 'true' nor 'false'")


def _parse_int(text: str) -> int:
    stripped = text.strip()
    if not _INTEGER_RE.fullmatch(stripped):
        raise ValueError(f"{text!r} is not an integer")
    return int(stripped)


def _parse_float(text: str) -> float:
    stripped = text.strip()
    if stripped.casefold() in _NON_FINITE_FLOATS:
        return float(stripped)
    if not _DECIMAL_RE.fullmatch(stripped):
        raise ValueError(f"{text!r} is not a number")
    value = float(stripped)
    if math.isinf(value):
        raise OverflowError(f"{text!r} is out of range for float")
    return value


def _parse_decimal(text: str) -> Decimal:
    stripped = text.strip()
    if not _DECIMAL_RE.fullmatch(stripped):
        raise ValueError(f"{text!r} is not a decimal number")
    return Decimal(stripped)


def _parse_timedelta(text: str) -> timedelta:
    match = _TIMEDELTA_RE.fullmatch(text.strip())
    if match is None:
        raise ValueError(f"{text!r} is not a duration of the form [-][d.]hh:mm[:ss[.fffffff]]")

    hours = int(match["hours"])
    minutes = int(match["minutes"])
    seconds = int(match["seconds"] or 0)
    if hours > 23 or minutes > 59 or seconds > 59:
        raise OverflowError(f"{text!r} has a time component out of range")

    # Up to seven fractional digits are accepted; anything below a microsecond is dropped.
    microseconds = int((match["fraction"] or "").ljust(6, "0")[:6])
    delta = timedelta(
        days=int(match["days"] or 0),
        hours=hours,
        minutes=minutes,
        seconds=seconds,
        microseconds=microseconds,
    )
    return -delta if match["sign"] else delta


def _stripped(func: Converter) -> Converter:
    return lambda text: func(text.strip())


_CANONICAL: dict[Any, Converter] = {
    str: _identity,
    Any: _identity,
    object: _identity,
    bool: _parse_bool,
    int: _parse_int,
    float: _parse_float,
    Decimal: _parse_decimal,
    datetime: _stripped(datetime.fromisoformat),
    date: _stripped(date.fromisoformat),
    time: _stripped(time.fromisoformat),
    timedelta: _parse_timedelta,
    UUID: _stripped(UUID),
}


def _parse_enum(shape: type[Enum], text: str) -> Enum:
    name = text.strip()
    members = shape.__members__
    if name in members:
        return members[name]

    folded = name.casefold()
    for member_name, member in members.items():
        if member_name.casefold() == folded:
            return member

    for member in shape:
        if str(member.value) == name:
            return member

    raise ValueError(f"{text!r} is not a member of {shape.__name__}")


def _parse_int_subclass(shape: type[int], text: str) -> int:
    return shape(_parse_int(text))


def _strip_annotated(shape: Any) -> Any:
    while get_origin(shape) is Annotated:
        shape = get_args(shape)[0]
    return shape


def _is_union(shape: Any) -> bool:
    return get_origin(shape) in (Union, types.UnionType)


def _unwrap_optional(shape: Any) -> tuple[Any, bool]:
    """Split ``shape`` into its effective shape and whether it admits None.

    Example:
        >>> _unwrap_optional(Optional[int])
        (<class 'int'>, True)
    """
    shape = _strip_annotated(shape)
    if not _is_union(shape):
        return shape, False

    members = get_args(shape)
    present = tuple(member for member in members if member is not types.NoneType)
    optional = len(present) < len(members)
    if len(present) == 1:
        return _strip_annotated(present[0]), optional
    return Union[present], optional


def _shape_name(shape: Any) -> str:
    return getattr(shape, "__name__", None) or repr(shape)


def _capability_of(shape: Any) -> Optional[Converter]:
    for name in _CAPABILITY_NAMES:
        static = inspect.getattr_static(shape, name, None)
        if isinstance(static, (classmethod, staticmethod, types.ClassMethodDescriptorType)):
            return getattr(shape, name)
    return None


class ValueParser:
    """Parse text into values of a requested shape.

    Converters for shapes the built-in lookup does not cover, or covers
    differently than wanted, can be registered per parser::

        parser = ValueParser()

        @parser.converts(Point)
        def parse_point(text: str) -> Point:
            x, y = text.split(";")
            return Point(float(x), float(y))
    """

    def __init__(self, converters: Optional[dict[Any, Converter]] = None):
        self._converters: dict[Any, Converter] = dict(converters or {})

    def register(self, shape: Any, converter: Converter) -> None:
        """Register ``converter`` for exactly ``shape``, taking precedence over built-ins.

        Args:
            shape: The shape the converter produces.
            converter: Callable taking the text and returning the value. It should
                raise ``ValueError`` (or ``ParseError``) when the text is unusable.
        """
        self._converters[shape] = converter

    def converts(self, shape: Any) -> Callable[[Converter], Converter]:
        """Decorator form of :meth:`register`."""

        def decorator(func: Converter) -> Converter:
            self.register(shape, func)
            return func

        return decorator

    def parse(self, shape: Any, text: Optional[str]) -> Any:
        """Parse ``text`` into a value of ``shape``.

        Args:
            shape: The target shape. Must not be None.
            text: The text to convert. May be None or empty only when ``shape``
                is optional, in which case the result is None.

        Returns:
            The converted value, or None for an empty optional.

        Raises:
            InvalidArgumentError: If ``shape`` is None, or ``text`` is None for a
                non-optional shape.
            ParseError: If the text cannot be converted, including range overflow.
        """
        if shape is None:
            raise InvalidArgumentError("shape must not be None")

        effective, optional = _unwrap_optional(shape)
        if optional and not text:
            return None
        if text is None:
            raise InvalidArgumentError(
                f"text must not be None when parsing {_shape_name(shape)}"
            )

        return self._convert(effective, text)

    def try_parse(self, shape: Any, text: Optional[str]) -> tuple[bool, Any]:
        """Parse without raising.

        Returns:
            ``(True, value)`` on success, ``(False, None)`` on any failure.
        """
        try:
            return True, self.parse(shape, text)
        except Exception:
            return False, None

    def _convert(self, shape: Any, text: str) -> Any:
        shape = _strip_annotated(shape)
        if _is_union(shape):
            return self._convert_union(shape, text)

        conversion = self._conversion_for(shape)
        if conversion is None:
            raise ParseError(f"No conversion available for {_shape_name(shape)}")

        try:
            return conversion(text)
        except (InvalidArgumentError, ParseError):
            raise
        except Exception as exc:
            raise ParseError(
                f"Cannot parse {text!r} as {_shape_name(shape)}: {exc}"
            ) from exc

    def _convert_union(self, shape: Any, text: str) -> Any:
        for member in get_args(shape):
            if member is types.NoneType:
                continue
            try:
                return self._convert(member, text)
            except ParseError:
                continue
        raise ParseError(f"Cannot parse {text!r} as any member of {shape!r}")

    def _conversion_for(self, shape: Any) -> Optional[Converter]:
        if shape in self._converters:
            return self._converters[shape]
        if shape in _CANONICAL:
            return _CANONICAL[shape]

        if get_origin(shape) is not None or not inspect.isclass(shape):
            return None
        if issubclass(shape, _COLLECTIONS):
            return None

        if issubclass(shape, Enum):
            return partial(_parse_enum, shape)
        if issubclass(shape, int) and not issubclass(shape, bool):
            return partial(_parse_int_subclass, shape)

        return _capability_of(shape) or shape


default_parser = ValueParser()


def parse(shape: Any, text: Optional[str]) -> Any:
    """Parse ``text`` into ``shape`` using the default parser. See :meth:`ValueParser.parse`."""
    return default_parser.parse(shape, text)


def try_parse(shape: Any, text: Optional[str]) -> tuple[bool, Any]:
    """Parse ``text`` into ``shape`` without raising, using the default parser."""
    return default_parser.try_parse(shape, text)
