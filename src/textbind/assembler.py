"""Assembly of object instances from key/value pairs.

The assembler tries every public constructor of the target. A constructor is a
candidate only if each of its parameters finds a key (first occurrence,
case-insensitive) whose text parses to a non-None value. The candidate with
the most parameters wins, ties going to the earlier constructor. Pairs the
winner did not consume are then assigned to settable fields of the new
instance, in input order, so a repeated field key ends with its last value.

Failures to match or parse never raise: they remove a candidate or skip a
field. With no candidate at all the result is None.
"""

import logging
from typing import Any, Iterable, Optional, Sequence, Union

from textbind.domain import (
    Candidate,
    ConstructorDescriptor,
    FieldDescriptor,
    ParsedParameter,
    TargetShape,
)
from textbind.errors import InvalidArgumentError
from textbind.naming import to_snake_case
from textbind.settings import TextBindSettings
from textbind.shapes import ShapeRegistry, describe
from textbind.tokenizer import KeyValuePair
from textbind.value_parser import ValueParser, default_parser

__all__ = ["ObjectAssembler", "assemble"]

logger = logging.getLogger(__name__)


class ObjectAssembler:
    """Construct instances of a target type from ``(key, value_text)`` pairs."""

    def __init__(
        self,
        value_parser: Optional[ValueParser] = None,
        registry: Optional[ShapeRegistry] = None,
        settings: Optional[TextBindSettings] = None,
    ):
        self._value_parser = value_parser or default_parser
        self._registry = registry
        self._settings = settings or TextBindSettings()

    def assemble(
        self, target: Union[TargetShape, type], pairs: Iterable[KeyValuePair]
    ) -> Any:
        """Build an instance of ``target`` from ``pairs``.

        Args:
            target: A :class:`TargetShape`, or a class to describe.
            pairs: ``(key, value_text)`` pairs; keys may repeat.

        Returns:
            The constructed instance, or None if no constructor could be satisfied.
            A factory that returns None also yields None, and no leftovers are
            assigned; the two outcomes are told apart only by the debug log.

        Raises:
            InvalidArgumentError: If ``target`` is not a class or shape, or ``pairs`` is None.
        """
        if pairs is None:
            raise InvalidArgumentError("pairs must not be None")
        shape = target if isinstance(target, TargetShape) else describe(target, self._registry)
        pairs = list(pairs)

        candidates = self.find_candidates(shape, pairs)
        if not candidates:
            logger.debug(
                "No constructor of %s is satisfied by keys %s",
                shape.target.__name__,
                [key for key, _ in pairs],
            )
            return None

        best = candidates[0]
        logger.debug(
            "Constructing %s via %s(%s)",
            shape.target.__name__,
            best.constructor.name,
            ", ".join(parameter.name for parameter in best.constructor.parameters),
        )
        instance = best.build()
        if instance is None:
            logger.debug("%s returned None; no instance", best.constructor.name)
            return None

        self._assign_leftovers(instance, shape, best, pairs)
        return instance

    def find_candidates(
        self, shape: TargetShape, pairs: Sequence[KeyValuePair]
    ) -> list[Candidate]:
        """Return every satisfiable constructor of ``shape``, best first.

        Candidates are ordered by parameter count, descending; constructors with
        equal counts keep the order in which ``shape`` lists them.
        """
        matched = (
            self._match(constructor, pairs)
            for constructor in shape.constructors
            if constructor.public
        )
        candidates = [candidate for candidate in matched if candidate is not None]
        return sorted(
            candidates,
            key=lambda candidate: len(candidate.parsed_parameters),
            reverse=True,
        )

    def _match(
        self, constructor: ConstructorDescriptor, pairs: Sequence[KeyValuePair]
    ) -> Optional[Candidate]:
        parsed = []
        for parameter in constructor.parameters:
            pair = _first_pair_for(parameter.name, pairs)
            if pair is None:
                logger.debug(
                    "Rejected %s: no key for parameter %r", constructor.name, parameter.name
                )
                return None

            key, value_text = pair
            can_parse, value = self._value_parser.try_parse(parameter.shape, value_text)
            # An explicitly empty optional does not satisfy a parameter.
            if not can_parse or value is None:
                logger.debug(
                    "Rejected %s: %r is not a usable value for parameter %r",
                    constructor.name,
                    value_text,
                    parameter.name,
                )
                return None
            parsed.append(ParsedParameter(key, value))

        return Candidate(constructor, tuple(parsed))

    def _assign_leftovers(
        self,
        instance: Any,
        shape: TargetShape,
        candidate: Candidate,
        pairs: Sequence[KeyValuePair],
    ):
        consumed = candidate.consumed_keys
        fields = [field for field in shape.fields if field.settable]

        for key, value_text in pairs:
            if key in consumed:
                continue

            field = self._find_field(fields, key)
            if field is None:
                logger.debug("Skipped %r: no settable field on %s", key, shape.target.__name__)
                continue

            can_parse, value = self._value_parser.try_parse(field.shape, value_text)
            if not can_parse or value is None:
                logger.debug("Skipped %r: %r is not a usable value", key, value_text)
                continue

            try:
                field.assign(instance, value)
            except (AttributeError, TypeError, ValueError) as exc:
                logger.debug("Skipped %r: assignment to %s failed: %s", key, field.name, exc)

    def _find_field(
        self, fields: Sequence[FieldDescriptor], key: str
    ) -> Optional[FieldDescriptor]:
        folded = key.casefold()
        field = next((f for f in fields if f.name.casefold() == folded), None)
        if field is None and self._settings.snake_case_fields:
            snake = to_snake_case(key)
            field = next((f for f in fields if f.name.casefold() == snake), None)
        return field


def _first_pair_for(name: str, pairs: Sequence[KeyValuePair]) -> Optional[KeyValuePair]:
    folded = name.casefold()
    return next((pair for pair in pairs if pair[0].casefold() == folded), None)


def assemble(
    target: Union[TargetShape, type],
    pairs: Iterable[KeyValuePair],
    registry: Optional[ShapeRegistry] = None,
) -> Any:
    """Build an instance of ``target`` with a default :class:`ObjectAssembler`."""
    return ObjectAssembler(registry=registry).assemble(target, pairs)
