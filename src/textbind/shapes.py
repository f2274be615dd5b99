"""Introspection of target types into :class:`~textbind.domain.TargetShape` descriptors.

A type may be constructed in more than one way. Besides its primary
constructor (``__init__``/``__new__``), any class or static method marked with
:func:`constructor` is a candidate, as is any factory registered for the type
on a :class:`ShapeRegistry`::

    class Employee:
        def __init__(self, name: str, age: int, department: str): ...

        @constructor
        @classmethod
        def named(cls, name: str) -> "Employee":
            return cls(name, 0, "Unknown")

    registry = ShapeRegistry()

    @registry.constructs(Employee)
    def employee_with_id(name: str, employee_id: int) -> Employee: ...
"""

import dataclasses
import inspect
import logging
import sys
import types
from collections import defaultdict
from typing import Any, Callable, ClassVar, Optional, get_origin, get_type_hints

from textbind.domain import ConstructorDescriptor, FieldDescriptor, Parameter, TargetShape
from textbind.errors import InvalidArgumentError

__all__ = ["ShapeRegistry", "constructor", "describe"]

logger = logging.getLogger(__name__)

_MARKER = "__textbind_constructor__"
_SKIPPED_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


def constructor(obj: Any) -> Any:
    """Mark a class or static method as an alternative constructor of its class.

    Works above or below ``@classmethod``/``@staticmethod``. Methods whose name
    starts with ``_`` are recorded but never used for assembly.
    """
    setattr(getattr(obj, "__func__", obj), _MARKER, True)
    return obj


class ShapeRegistry:
    """Registry of external factories, keyed by the type they construct."""

    def __init__(self):
        self._factories: dict[type, list[Callable]] = defaultdict(list)

    def register(self, target: type, factory: Callable):
        """Register ``factory`` as a constructor of ``target``.

        Args:
            target: The type the factory produces.
            factory: Callable whose annotated parameters describe its inputs.
        """
        self._factories[target].append(factory)

    def registered_factories(self, target: type) -> list[Callable]:
        return list(self._factories.get(target, []))

    def constructs(self, target: type) -> Callable:
        """Decorator to register a function as a constructor of ``target``.

        Example:
            @registry.constructs(Point)
            def point_from_polar(radius: float, angle: float) -> Point:
                return Point(radius * cos(angle), radius * sin(angle))
        """

        def decorator(func: Callable) -> Callable:
            self.register(target, func)
            return func

        return decorator


def describe(target: type, registry: Optional[ShapeRegistry] = None) -> TargetShape:
    """Build the :class:`TargetShape` of ``target``.

    Constructors are listed in encounter order: the primary constructor, then
    methods marked with :func:`constructor` in class definition order (base
    classes first), then factories from ``registry`` in registration order.

    Args:
        target: The class to describe.
        registry: Optional registry contributing external factories.

    Returns:
        The constructors and fields of ``target``.

    Raises:
        InvalidArgumentError: If ``target`` is not a class.
    """
    if not inspect.isclass(target):
        raise InvalidArgumentError(f"{target!r} is not a class")

    constructors = []
    primary = _primary_constructor(target)
    if primary is not None:
        constructors.append(primary)
    constructors.extend(
        _make_constructor(name, factory, public=not name.startswith("_"))
        for name, factory in _marked_factories(target)
    )
    if registry is not None:
        constructors.extend(
            _make_constructor(getattr(factory, "__name__", repr(factory)), factory)
            for factory in registry.registered_factories(target)
        )

    shape = TargetShape(target, tuple(constructors), tuple(_get_fields(target)))
    logger.debug(
        "Described %s: %d constructor(s), %d field(s)",
        target.__name__,
        len(shape.constructors),
        len(shape.fields),
    )
    return shape


def _primary_constructor(cls: type) -> Optional[ConstructorDescriptor]:
    try:
        sig = inspect.signature(cls)
    except (TypeError, ValueError):
        return None

    hints = {}
    for name in ("__new__", "__init__"):
        member = getattr(cls, name, None)
        if inspect.isfunction(member):
            hints.update(_type_hints(member))

    return ConstructorDescriptor(
        "__init__",
        cls,
        _get_parameters(sig, hints),
        public=not inspect.isabstract(cls),
    )


def _marked_factories(cls: type) -> list[tuple[str, Callable]]:
    names = {}
    for klass in reversed(cls.__mro__):
        for name, member in vars(klass).items():
            if _is_marked(member):
                names[name] = None
    # An override without the marker hides the inherited factory.
    return [
        (name, getattr(cls, name))
        for name in names
        if _is_marked(inspect.getattr_static(cls, name))
    ]


def _is_marked(member: Any) -> bool:
    return getattr(getattr(member, "__func__", member), _MARKER, False)


def _make_constructor(name: str, factory: Callable, public: bool = True) -> ConstructorDescriptor:
    sig = inspect.signature(factory)
    hints = _type_hints(factory)
    return ConstructorDescriptor(name, factory, _get_parameters(sig, hints), public)


def _get_parameters(sig: inspect.Signature, hints: dict[str, Any]) -> tuple[Parameter, ...]:
    """Turn a signature into :class:`Parameter` descriptors.

    ``*args`` and ``**kwargs`` cannot be matched by name and are left out.
    Parameters without an annotation get a shape of None.
    """
    return tuple(
        Parameter(name, hints.get(name), param.kind)
        for name, param in sig.parameters.items()
        if param.kind not in _SKIPPED_KINDS
    )


def _get_fields(cls: type) -> list[FieldDescriptor]:
    fields: dict[str, FieldDescriptor] = {}

    frozen = dataclasses.is_dataclass(cls) and cls.__dataclass_params__.frozen
    attributes_settable = not frozen and not issubclass(cls, tuple)
    for name, hint in _type_hints(cls).items():
        if hint is None:
            logger.debug("Skipped field %s.%s: annotation does not resolve", cls.__name__, name)
            continue
        if name.startswith("_") or get_origin(hint) is ClassVar:
            continue
        fields[name] = FieldDescriptor(
            name, hint, attributes_settable, _attribute_setter(name)
        )

    for klass in reversed(cls.__mro__):
        for name, member in vars(klass).items():
            if isinstance(member, property) and not name.startswith("_"):
                fields[name] = FieldDescriptor(
                    name,
                    _property_shape(member),
                    member.fset is not None,
                    _attribute_setter(name),
                )

    return list(fields.values())


def _property_shape(prop: property) -> Any:
    if prop.fset is not None:
        setter_hints = _type_hints(prop.fset)
        setter_params = list(inspect.signature(prop.fset).parameters)
        if len(setter_params) == 2 and setter_hints.get(setter_params[1]) is not None:
            return setter_hints[setter_params[1]]
    if prop.fget is not None:
        return _type_hints(prop.fget).get("return")
    return None


def _type_hints(obj: Any) -> dict[str, Any]:
    """``get_type_hints`` that tolerates annotations it cannot resolve.

    Such annotations, for example a string naming an undefined type, map to
    None instead of failing the whole object.
    """
    try:
        return get_type_hints(obj, include_extras=True)
    except (NameError, TypeError, AttributeError, SyntaxError) as exc:
        logger.debug("Resolving annotations of %r one at a time: %s", obj, exc)

    if inspect.isclass(obj):
        hints = {}
        for klass in reversed(obj.__mro__):
            module = sys.modules.get(klass.__module__)
            hints.update(
                _resolve_each(
                    inspect.get_annotations(klass),
                    dict(vars(module)) if module is not None else {},
                    dict(vars(klass)),
                )
            )
        return hints

    func = inspect.unwrap(obj)
    return _resolve_each(
        inspect.get_annotations(func), getattr(func, "__globals__", {}), None
    )


def _resolve_each(
    annotations: dict[str, Any], globalns: dict[str, Any], localns: Optional[dict[str, Any]]
) -> dict[str, Any]:
    hints = {}
    for name, annotation in annotations.items():
        holder = types.SimpleNamespace(__annotations__={name: annotation})
        try:
            hints[name] = get_type_hints(holder, globalns, localns, include_extras=True)[name]
        except (NameError, TypeError, AttributeError, SyntaxError):
            hints[name] = None
    return hints


def _attribute_setter(name: str) -> Callable[[Any, Any], None]:
    def set_attribute(instance: Any, value: Any) -> None:
        setattr(instance, name, value)

    return set_attribute
