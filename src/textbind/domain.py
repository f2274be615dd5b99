"""Domain models used throughout the package."""

import inspect
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence


@dataclass(frozen=True)
class Parameter:
    """A single constructor parameter.

    Attributes:
        name: The parameter name, matched case-insensitively against supplied keys.
        shape: The annotated type of the parameter, or None if unannotated.
        kind: The :class:`inspect.Parameter` kind, used when invoking the constructor.
    """

    name: str
    shape: Any
    kind: Any = inspect.Parameter.POSITIONAL_OR_KEYWORD


@dataclass(frozen=True)
class ConstructorDescriptor:
    """A way of constructing an instance of a target type.

    Attributes:
        name: Display name of the constructor (``__init__`` or the factory name).
        func: The callable that produces the instance.
        parameters: The parameters of ``func`` in declaration order.
        public: Whether the constructor may be used for assembly.
    """

    name: str
    func: Callable
    parameters: tuple[Parameter, ...]
    public: bool = True

    def invoke(self, values: Sequence[Any]) -> Any:
        """Call the constructor with one value per parameter, in parameter order."""
        args = []
        kwargs = {}
        for parameter, value in zip(self.parameters, values):
            if parameter.kind is inspect.Parameter.KEYWORD_ONLY:
                kwargs[parameter.name] = value
            else:
                args.append(value)
        return self.func(*args, **kwargs)


@dataclass(frozen=True)
class FieldDescriptor:
    """An externally visible field of a target type.

    Attributes:
        name: The attribute name.
        shape: The annotated type of the field.
        settable: Whether the field may be assigned after construction.
        setter: Callable taking ``(instance, value)`` that performs the assignment.
    """

    name: str
    shape: Any
    settable: bool
    setter: Optional[Callable[[Any, Any], None]] = None

    def assign(self, instance: Any, value: Any) -> None:
        self.setter(instance, value)


@dataclass(frozen=True)
class TargetShape:
    """Description of a type to be assembled: its constructors and its fields."""

    target: type
    constructors: tuple[ConstructorDescriptor, ...]
    fields: tuple[FieldDescriptor, ...]


@dataclass(frozen=True)
class ParsedParameter:
    key: str
    value: Any


@dataclass(frozen=True)
class Candidate:
    """A constructor whose every parameter was matched and parsed.

    Attributes:
        constructor: The satisfiable constructor.
        parsed_parameters: One entry per constructor parameter, in parameter order.
    """

    constructor: ConstructorDescriptor
    parsed_parameters: tuple[ParsedParameter, ...]

    @property
    def consumed_keys(self) -> set[str]:
        return {parsed.key for parsed in self.parsed_parameters}

    def build(self) -> Any:
        return self.constructor.invoke(
            [parsed.value for parsed in self.parsed_parameters]
        )
