"""Descriptors for the classes and members of a persistence schema."""

from dataclasses import dataclass, field
from enum import StrEnum, auto
from typing import Any

from dataclasses_json import DataClassJsonMixin

PERSISTENT_ANNOTATIONS = frozenset(["persistent", "persistencecapable"])
NOT_PERSISTENT_ANNOTATIONS = frozenset(["notpersistent"])


@dataclass
class TypeRef(DataClassJsonMixin):
    """Represents a declared member type.

    - name: raw type name as written, without type arguments
    - arguments: textual form of each type argument
    - array_dims: number of trailing ``[]``
    """

    name: str
    arguments: list[str] = field(default_factory=list)
    array_dims: int = 0

    def __str__(self) -> str:
        text = self.name
        if self.arguments:
            text += "<" + ", ".join(self.arguments) + ">"
        return text + "[]" * self.array_dims

    @property
    def raw_name(self) -> str:
        """The erased type name, keeping array dimensions."""
        return self.name + "[]" * self.array_dims


@dataclass
class AnnotationArg(DataClassJsonMixin):
    """Represents an argument to an annotation."""

    name: str | None
    value: Any


@dataclass
class Annotation(DataClassJsonMixin):
    """Represents an annotation on a class or member."""

    name: str
    arguments: list[AnnotationArg] = field(default_factory=list)

    @property
    def simple_name(self) -> str:
        return self.name.rsplit(".", 1)[-1].lower()


class MemberKind(StrEnum):
    """How a member was declared."""

    FIELD = auto()
    ACCESSOR = auto()  # bean-style getter, named after its property
    METHOD = auto()  # any other method, never persistent


@dataclass
class MemberDescriptor(DataClassJsonMixin):
    """Represents a field or method of a class."""

    name: str
    type: TypeRef
    kind: MemberKind = MemberKind.FIELD
    not_persistent: bool = False
    annotations: list[Annotation] = field(default_factory=list)
    method_name: str | None = None

    @property
    def accessor(self) -> bool:
        return self.kind == MemberKind.ACCESSOR


@dataclass
class ClassDescriptor(DataClassJsonMixin):
    """Represents a class of the schema.

    For nested classes ``outer`` holds the qualified name of the enclosing class.
    """

    name: str
    package: str
    members: list[MemberDescriptor] = field(default_factory=list)
    superclass: str | None = None
    persistent: bool = False
    annotations: list[Annotation] = field(default_factory=list)
    outer: str | None = None

    @property
    def qualified_name(self) -> str:
        if self.outer:
            return f"{self.outer}.{self.name}"
        if self.package:
            return f"{self.package}.{self.name}"
        return self.name


def has_annotation(annotations: list[Annotation], names: frozenset[str]) -> bool:
    """Check if any annotation's simple name (case-insensitive) is in ``names``."""
    return any(a.simple_name in names for a in annotations)


class AccessStyle(StrEnum):
    """How generated classes expose their members."""

    FIELD = auto()  # public fields, built eagerly in the constructors
    PROPERTY = auto()  # private slots behind accessors, built on first call


@dataclass(frozen=True)
class GenerationConfig:
    """Options for one generation pass. Never mutated once built."""

    access_style: AccessStyle = AccessStyle.FIELD
    max_depth: int = 5
    runtime_import: str = "qmodel.query"

    def __post_init__(self) -> None:
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {self.max_depth}")
