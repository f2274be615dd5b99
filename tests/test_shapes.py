import inspect
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Annotated, ClassVar, NamedTuple, Optional

import pytest

from textbind.errors import InvalidArgumentError
from textbind.shapes import ShapeRegistry, constructor, describe


@dataclass
class Person:
    name: str
    age: int


@dataclass(frozen=True)
class FrozenPerson:
    name: str


class Pair(NamedTuple):
    key: str
    value: int


class Employee:
    department: str = "Unknown"
    headcount: ClassVar[int] = 0
    _secret: str = ""

    def __init__(self, name: str, age: int):
        self.name = name
        self.age = age

    @constructor
    @classmethod
    def named(cls, name: str):
        return cls(name, 0)

    @classmethod
    @constructor
    def anonymous(cls, age: int):
        return cls("anonymous", age)

    @constructor
    @staticmethod
    def _internal(code: str):
        return Employee(code, 0)

    @classmethod
    def not_a_constructor(cls, name: str):
        return cls(name, 0)


class Manager(Employee):
    @constructor
    @classmethod
    def promoted(cls, name: str, reports: int):
        return cls(name, 40)


class Account:
    def __init__(self, owner: str):
        self.owner = owner
        self._balance = 0

    @property
    def balance(self) -> float:
        return self._balance

    @balance.setter
    def balance(self, value: Optional[float]):
        self._balance = value

    @property
    def label(self) -> str:
        return f"{self.owner}: {self._balance}"


class Base(ABC):
    @abstractmethod
    def area(self) -> float: ...


class Flexible:
    def __init__(self, name: str, *args, scale: Annotated[float, "unit"], **kwargs):
        self.name = name
        self.scale = scale


class Untyped:
    def __init__(self, name):
        self.name = name


class Widget:
    helper: "UndefinedThing" = None  # noqa: F821
    size: "int" = 0

    def __init__(self, name: str):
        self.name = name


class Gadget:
    def __init__(self, name: str, part: "MissingPart"):  # noqa: F821
        self.name = name
        self.part = part


class Contractor(Employee):
    @classmethod
    def named(cls, name: str):
        return cls(name, 1)


def test_primary_constructor_of_dataclass():
    shape = describe(Person)

    primary = shape.constructors[0]
    assert shape.target is Person
    assert primary.name == "__init__"
    assert primary.public
    assert [(p.name, p.shape) for p in primary.parameters] == [("name", str), ("age", int)]
    assert primary.invoke(["John", 25]) == Person("John", 25)


def test_dataclass_fields_are_settable():
    fields = {f.name: f for f in describe(Person).fields}

    assert list(fields) == ["name", "age"]
    assert fields["age"].shape is int
    assert fields["age"].settable

    person = Person("John", 25)
    fields["age"].assign(person, 26)
    assert person.age == 26


def test_frozen_dataclass_and_named_tuple_fields_are_not_settable():
    assert [f.settable for f in describe(FrozenPerson).fields] == [False]
    assert [(f.name, f.settable) for f in describe(Pair).fields] == [
        ("key", False),
        ("value", False),
    ]


def test_named_tuple_constructor():
    primary = describe(Pair).constructors[0]
    assert [(p.name, p.shape) for p in primary.parameters] == [("key", str), ("value", int)]


def test_marked_factories_follow_primary_constructor_in_definition_order():
    shape = describe(Employee)

    assert [(c.name, c.public) for c in shape.constructors] == [
        ("__init__", True),
        ("named", True),
        ("anonymous", True),
        ("_internal", False),
    ]
    named = shape.constructors[1]
    assert [p.name for p in named.parameters] == ["name"]
    assert named.invoke(["Ann"]).name == "Ann"


def test_inherited_factories_come_before_subclass_factories():
    names = [c.name for c in describe(Manager).constructors]
    assert names == ["__init__", "named", "anonymous", "_internal", "promoted"]
    assert isinstance(describe(Manager).constructors[1].invoke(["Bo"]), Manager)


def test_override_without_marker_is_not_a_constructor():
    names = [c.name for c in describe(Contractor).constructors]
    assert names == ["__init__", "anonymous", "_internal"]


def test_class_variables_and_private_annotations_are_not_fields():
    assert [f.name for f in describe(Employee).fields] == ["department"]


def test_properties_are_fields_only_settable_with_a_setter():
    fields = {f.name: f for f in describe(Account).fields}

    assert fields["balance"].settable
    assert fields["balance"].shape == Optional[float]
    assert not fields["label"].settable
    assert fields["label"].shape is str


def test_abstract_class_has_no_public_constructor():
    assert [c.public for c in describe(Base).constructors] == [False]


def test_variadic_parameters_are_skipped_and_kinds_kept():
    parameters = describe(Flexible).constructors[0].parameters

    assert [(p.name, p.kind) for p in parameters] == [
        ("name", inspect.Parameter.POSITIONAL_OR_KEYWORD),
        ("scale", inspect.Parameter.KEYWORD_ONLY),
    ]
    assert parameters[1].shape == Annotated[float, "unit"]

    flexible = describe(Flexible).constructors[0].invoke(["dial", 2.5])
    assert (flexible.name, flexible.scale) == ("dial", 2.5)


def test_unannotated_parameters_have_no_shape():
    assert describe(Untyped).constructors[0].parameters[0].shape is None


def test_registered_factories_are_listed_last():
    registry = ShapeRegistry()

    @registry.constructs(Person)
    def person_from_nickname(nickname: str) -> Person:
        return Person(nickname, 0)

    shape = describe(Person, registry)

    assert [c.name for c in shape.constructors] == ["__init__", "person_from_nickname"]
    assert shape.constructors[1].func is person_from_nickname
    assert registry.registered_factories(Person) == [person_from_nickname]
    assert registry.registered_factories(Pair) == []


def test_non_class_targets_are_rejected():
    with pytest.raises(InvalidArgumentError, match="is not a class"):
        describe(Person("John", 25))
    with pytest.raises(InvalidArgumentError):
        describe(None)


def test_unresolvable_field_annotations_are_left_out():
    assert [(f.name, f.shape) for f in describe(Widget).fields] == [("size", int)]


def test_unresolvable_parameter_annotations_have_no_shape():
    (primary,) = describe(Gadget).constructors
    assert [(p.name, p.shape) for p in primary.parameters] == [("name", str), ("part", None)]
