"""Selection of the persistent members of a class."""

import keyword

from qmodel.query import PersistableExpressionImpl

from .types import ClassDescriptor, MemberDescriptor, MemberKind, TypeRef

BOOLEAN_TYPES = frozenset(["boolean", "java.lang.Boolean", "Boolean", "bool"])

# Names generated classes define besides their members
GENERATED_NAMES = frozenset(["candidate", "parameter", "variable", "jdo_candidate"])


def reserved_member_names() -> frozenset[str]:
    """Names a member of a persistent class cannot use."""
    inherited = {name for name in dir(PersistableExpressionImpl) if not name.startswith("__")}
    return frozenset(inherited) | GENERATED_NAMES


def is_valid_member_name(name: str) -> bool:
    return name.isidentifier() and not keyword.iskeyword(name)


def _decapitalize(name: str) -> str:
    # "URL" stays "URL", "Name" becomes "name"
    if len(name) > 1 and name[0].isupper() and name[1].isupper():
        return name
    return name[0].lower() + name[1:]


def bean_property_name(method_name: str, type_ref: TypeRef) -> str | None:
    """Return the property a bean-style getter exposes, or None if it is not a getter.

    ``getName(): String`` exposes ``name``; ``isActive(): boolean`` exposes ``active``.
    """
    if type_ref.name == "void" and not type_ref.array_dims:
        return None
    if method_name.startswith("get") and len(method_name) > 3 and method_name[3].isupper():
        return _decapitalize(method_name[3:])
    if (
        method_name.startswith("is")
        and len(method_name) > 2
        and method_name[2].isupper()
        and type_ref.name in BOOLEAN_TYPES
        and not type_ref.array_dims
    ):
        return _decapitalize(method_name[2:])
    return None


def persistent_members(cls: ClassDescriptor) -> list[MemberDescriptor]:
    """Return the members of ``cls`` a query class exposes, in declaration order.

    Fields and bean accessors are kept unless a member of the same name is
    marked not persistent. When a field and an accessor share a name the first
    declared one wins.
    """
    excluded = {m.name for m in cls.members if m.not_persistent}
    members: list[MemberDescriptor] = []
    seen: set[str] = set()
    for member in cls.members:
        if member.kind == MemberKind.METHOD or member.name in excluded:
            continue
        if member.name in seen:
            continue
        seen.add(member.name)
        members.append(member)
    return members
