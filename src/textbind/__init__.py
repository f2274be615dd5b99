"""Convention-based binding of key/value text to typed Python objects.

textbind builds instances of ordinary classes from flat ``key:value`` input,
without the class implementing any serialization interface. It looks at the
class's constructors and annotated fields, picks the constructor that the
supplied keys satisfy most completely, parses each argument to its annotated
type and assigns whatever keys are left over to settable fields.

Key Features:
    - Parsing of text into primitives, dates and times, UUIDs, enums, bounded
      integers and any class with a ``parse``-style factory
    - ``Optional`` handling: empty text becomes None
    - Selection among several constructors, preferring the most specific
    - Post-construction assignment of leftover keys to settable fields
    - Soft failure: None when nothing matches, never a parse exception

Basic Usage:
    >>> from textbind import bind
    >>>
    >>> @dataclass
    >>> class Person:
    ...     name: str
    ...     age: int
    >>>
    >>> bind(Person, "name: John, age: 25")
    Person(name='John', age=25)

The package consists of several modules:
    - value_parser: text to value conversion (``parse``, ``try_parse``)
    - shapes: type introspection into constructor and field descriptors
    - assembler: constructor selection and leftover field assignment
    - tokenizer: splitting of raw text into key/value pairs
    - builders: high-level ``bind`` and ``bind_pairs`` entry points
    - settings: separators and field-matching options
    - fixed_width: integer shapes that reject out-of-range values
    - domain: descriptor dataclasses
    - errors: package exceptions
"""

from textbind.assembler import ObjectAssembler, assemble
from textbind.builders import bind, bind_pairs
from textbind.domain import TargetShape
from textbind.errors import InvalidArgumentError, ParseError, TextBindError
from textbind.settings import TextBindSettings
from textbind.shapes import ShapeRegistry, constructor, describe
from textbind.tokenizer import tokenize
from textbind.value_parser import ValueParser, parse, try_parse

__all__ = [
    "InvalidArgumentError",
    "ObjectAssembler",
    "ParseError",
    "ShapeRegistry",
    "TargetShape",
    "TextBindError",
    "TextBindSettings",
    "ValueParser",
    "assemble",
    "bind",
    "bind_pairs",
    "constructor",
    "describe",
    "parse",
    "tokenize",
    "try_parse",
]
