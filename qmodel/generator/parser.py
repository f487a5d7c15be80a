"""Schema parser using Lark."""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TypeVar

from lark import Lark, Token
from lark.visitors import Transformer

from .members import bean_property_name, is_valid_member_name, persistent_members, reserved_member_names
from .schema import SchemaIndex
from .types import (
    NOT_PERSISTENT_ANNOTATIONS,
    PERSISTENT_ANNOTATIONS,
    Annotation,
    AnnotationArg,
    ClassDescriptor,
    MemberDescriptor,
    MemberKind,
    TypeRef,
    has_annotation,
)

_g_parser: Lark | None = None


class ValidationError(RuntimeError):
    """Raised when schema validation fails."""


@dataclass
class _Name:
    value: str


@dataclass
class _Package:
    value: str


@dataclass
class _Superclass:
    value: str


@dataclass
class _TypeArgs:
    values: list[str]


@dataclass
class _ArrayDims:
    value: int


@dataclass
class _ClassDecl:
    name: str
    superclass: str | None
    annotations: list[Annotation]
    members: list[MemberDescriptor]
    nested: list["_ClassDecl"] = field(default_factory=list)


TFilter = TypeVar("TFilter", bound=object)


def _filter(args: list[Any], class_type: type[TFilter]) -> list[TFilter]:
    return [v for v in args if isinstance(v, class_type)]


def _find_one(args: list[Any], class_type: type[object]) -> Any:
    filtered = _filter(args, class_type)
    if len(filtered) == 0:
        return None
    if len(filtered) > 1:
        raise RuntimeError(f"Found more than one {class_type}")

    if hasattr(filtered[0], "value"):
        return filtered[0].value
    return filtered[0]


TMany = TypeVar("TMany")


def _find_many(args: list[Any], class_type: type[TMany]) -> list[TMany]:
    return _filter(args, class_type)


class TreeTransformer(Transformer):
    """Transform parse tree into class descriptors."""

    def start(self, args: list[Any]) -> list[ClassDescriptor]:
        package = _find_one(args, _Package) or ""
        classes: list[ClassDescriptor] = []
        for decl in _find_many(args, _ClassDecl):
            _flatten(decl, package, None, classes)
        return classes

    def package_decl(self, args: list[Any]) -> _Package:
        return _Package(value=_find_one(args, _Name))

    def class_decl(self, args: list[Any]) -> _ClassDecl:
        return _ClassDecl(
            name=str(_find_many(args, Token)[0]),
            superclass=_find_one(args, _Superclass),
            annotations=_find_many(args, Annotation),
            members=_find_many(args, MemberDescriptor),
            nested=_find_many(args, _ClassDecl),
        )

    def superclass(self, args: list[Any]) -> _Superclass:
        return _Superclass(value=_find_one(args, _Name))

    def field_decl(self, args: list[Any]) -> MemberDescriptor:
        annotations = _find_many(args, Annotation)
        return MemberDescriptor(
            name=str(_find_many(args, Token)[0]),
            type=_find_one(args, TypeRef),
            kind=MemberKind.FIELD,
            not_persistent=has_annotation(annotations, NOT_PERSISTENT_ANNOTATIONS),
            annotations=annotations,
        )

    def method_decl(self, args: list[Any]) -> MemberDescriptor:
        annotations = _find_many(args, Annotation)
        method_name = str(_find_many(args, Token)[0])
        type_ref = _find_one(args, TypeRef)
        prop = bean_property_name(method_name, type_ref)
        return MemberDescriptor(
            name=prop or method_name,
            type=type_ref,
            kind=MemberKind.ACCESSOR if prop else MemberKind.METHOD,
            not_persistent=has_annotation(annotations, NOT_PERSISTENT_ANNOTATIONS),
            annotations=annotations,
            method_name=method_name,
        )

    def type_ref(self, args: list[Any]) -> TypeRef:
        type_args = _find_one(args, _TypeArgs)
        dims = _find_one(args, _ArrayDims)
        return TypeRef(
            name=_find_one(args, _Name),
            arguments=type_args.values if type_args else [],
            array_dims=dims or 0,
        )

    def type_args(self, args: list[Any]) -> _TypeArgs:
        return _TypeArgs(values=[str(t) for t in _find_many(args, TypeRef)])

    def array_dims(self, args: list[Any]) -> _ArrayDims:
        return _ArrayDims(value=len(args))

    def annotation(self, args: list[Any]) -> Annotation:
        arguments = _find_one(args, list) or []
        return Annotation(name=_find_one(args, _Name), arguments=arguments)

    def annotation_args(self, args: list[Any]) -> list[AnnotationArg]:
        return [a for a in args if a is not None]

    def annotation_arg(self, args: list[Any]) -> AnnotationArg:
        value = args[-1]
        if isinstance(value, _Name):
            value = value.value
        if len(args) == 2:
            return AnnotationArg(name=str(args[0]), value=value)
        return AnnotationArg(name=None, value=value)

    def string(self, args: list[Any]) -> str:
        return json.loads(str(args[0]))

    def number(self, args: list[Any]) -> int | float:
        text = str(args[0])
        try:
            return int(text)
        except ValueError:
            return float(text)

    def qualified_name(self, args: list[Any]) -> _Name:
        return _Name(value=".".join(str(a) for a in args))


def _flatten(
    decl: _ClassDecl, package: str, outer: str | None, classes: list[ClassDescriptor]
) -> None:
    cls = ClassDescriptor(
        name=decl.name,
        package=package,
        members=decl.members,
        superclass=decl.superclass,
        persistent=has_annotation(decl.annotations, PERSISTENT_ANNOTATIONS),
        annotations=decl.annotations,
        outer=outer,
    )
    classes.append(cls)
    for nested in decl.nested:
        _flatten(nested, package, cls.qualified_name, classes)


def validate(classes: list[ClassDescriptor]) -> None:
    """Validate parsed class descriptors."""
    seen: set[str] = set()
    for cls in classes:
        if cls.qualified_name in seen:
            raise ValidationError(f"{cls.qualified_name} declared more than once")
        seen.add(cls.qualified_name)

    schema = SchemaIndex(classes)
    reserved = reserved_member_names()

    for cls in classes:
        # Inheritance cycles
        chain = {cls.qualified_name}
        parent = schema.superclass_of(cls)
        while parent is not None:
            if parent.qualified_name in chain:
                raise ValidationError(f"{cls.qualified_name} inherits from itself")
            chain.add(parent.qualified_name)
            parent = schema.superclass_of(parent)

        if not cls.persistent:
            continue
        for member in persistent_members(cls):
            if not is_valid_member_name(member.name):
                raise ValidationError(
                    f"{cls.qualified_name}.{member.name} is not a valid member name"
                )
            if member.name in reserved:
                raise ValidationError(
                    f"{cls.qualified_name}.{member.name} clashes with a query class attribute"
                )


def parse(text: str) -> list[ClassDescriptor]:
    """Parse a schema definition."""
    global _g_parser

    if not _g_parser:
        with open(f"{os.path.dirname(__file__)}/schema.lark", encoding="utf-8") as f:
            grammar = f.read()

        _g_parser = Lark(grammar)

    tree = _g_parser.parse(text)
    classes = TreeTransformer().transform(tree)

    validate(classes)

    return classes


def load_json(text: str) -> list[ClassDescriptor]:
    """Load class descriptors from JSON, either a list or ``{"classes": [...]}``."""
    data = json.loads(text)
    if isinstance(data, dict):
        data = data.get("classes", [])
    classes = [ClassDescriptor.from_dict(item) for item in data]

    validate(classes)

    return classes


def dump_json(classes: list[ClassDescriptor]) -> str:
    """Serialise class descriptors to the JSON form ``load_json`` reads."""
    return json.dumps({"classes": [cls.to_dict() for cls in classes]}, indent=2)


def load_schema(path: str | Path) -> SchemaIndex:
    """Read a schema file (``.json`` or schema language) into an index."""
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    if path.suffix == ".json":
        return SchemaIndex(load_json(text))
    return SchemaIndex(parse(text))
