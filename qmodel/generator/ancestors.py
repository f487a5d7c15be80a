"""Resolution of the nearest persistent ancestor of a class."""

from .schema import SchemaIndex
from .types import ClassDescriptor


class ClassResolutionError(RuntimeError):
    """Raised when a class's name or inheritance chain cannot be resolved."""


def resolve_ancestor(cls: ClassDescriptor, schema: SchemaIndex) -> ClassDescriptor | None:
    """Return the nearest persistent superclass of ``cls``, skipping the others.

    The chain ends with None at the root type, at a class without superclass,
    and at a superclass the schema does not declare: an unresolved reference
    is never taken for a persistent one. Nested classes get no query class,
    so a persistent nested superclass is passed over like a non-persistent one.
    """
    seen = {cls.qualified_name}
    current = cls
    while True:
        parent = schema.superclass_of(current)
        if parent is None:
            return None
        if parent.persistent and parent.outer is None:
            return parent
        if parent.qualified_name in seen:
            raise ClassResolutionError(f"Inheritance cycle through {parent.qualified_name}")
        seen.add(parent.qualified_name)
        current = parent
