"""High level entry points for binding text to objects."""

from typing import Any, Iterable, Mapping, Optional, Union

from textbind.assembler import ObjectAssembler
from textbind.settings import TextBindSettings
from textbind.shapes import ShapeRegistry
from textbind.tokenizer import KeyValuePair, tokenize
from textbind.value_parser import ValueParser

__all__ = ["bind", "bind_pairs"]


def bind_pairs(
    target: type,
    pairs: Union[Mapping[str, str], Iterable[KeyValuePair]],
    settings: Optional[TextBindSettings] = None,
    registry: Optional[ShapeRegistry] = None,
    value_parser: Optional[ValueParser] = None,
) -> Any:
    """Construct an instance of ``target`` from key/value pairs.

    Args:
        target: The class to construct.
        pairs: ``(key, value_text)`` pairs, or a mapping whose items are used in
            iteration order.
        settings: Optional settings; defaults to :class:`TextBindSettings`.
        registry: Optional registry contributing external constructors.
        value_parser: Optional parser with custom converters.

    Returns:
        The instance, or None if no constructor of ``target`` could be satisfied.

    Raises:
        InvalidArgumentError: If ``target`` is not a class or ``pairs`` is None.
    """
    if isinstance(pairs, Mapping):
        pairs = list(pairs.items())
    assembler = ObjectAssembler(value_parser, registry, settings)
    return assembler.assemble(target, pairs)


def bind(
    target: type,
    raw: str,
    settings: Optional[TextBindSettings] = None,
    registry: Optional[ShapeRegistry] = None,
    value_parser: Optional[ValueParser] = None,
) -> Any:
    """Construct an instance of ``target`` from ``key:value,key:value`` text.

    The text is split with :func:`~textbind.tokenizer.tokenize`; malformed
    segments are ignored. See :func:`bind_pairs` for the remaining arguments.

    Example:
        >>> bind(Person, "name: John, age: 25")
        Person(name='John', age=25)
    """
    settings = settings or TextBindSettings()
    return bind_pairs(target, tokenize(raw, settings), settings, registry, value_parser)
