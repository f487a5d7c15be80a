"""Lookup of schema classes by name."""

from collections.abc import Iterable, Iterator

from .types import ClassDescriptor

QUERY_CLASS_PREFIX = "Q"

# Superclass names that end every inheritance chain
ROOT_TYPES = frozenset(["java.lang.Object", "Object", "object"])


def query_class_name(name: str) -> str:
    """Return the simple name of the query class for a class's simple name."""
    return QUERY_CLASS_PREFIX + name


class SchemaIndex:
    """Read-only view of all classes of one generation pass.

    Names are resolved the way the schema language does: an exact qualified
    name first, then a simple name relative to the referring package.
    """

    def __init__(self, classes: Iterable[ClassDescriptor]) -> None:
        self._classes = list(classes)
        self._by_name: dict[str, ClassDescriptor] = {}
        for cls in self._classes:
            self._by_name.setdefault(cls.qualified_name, cls)

    def __iter__(self) -> Iterator[ClassDescriptor]:
        return iter(self._classes)

    def __len__(self) -> int:
        return len(self._classes)

    def lookup(self, name: str, package: str | None = None) -> ClassDescriptor | None:
        """Find a declared class by qualified name or by name relative to ``package``."""
        found = self._by_name.get(name)
        if found is None and package:
            found = self._by_name.get(f"{package}.{name}")
        return found

    def is_persistent(self, name: str, package: str | None = None) -> bool:
        cls = self.lookup(name, package)
        return cls is not None and cls.persistent

    def superclass_of(self, cls: ClassDescriptor) -> ClassDescriptor | None:
        """Resolve the declared superclass of ``cls``, or None when it is not declared here."""
        if cls.superclass is None or cls.superclass in ROOT_TYPES:
            return None
        return self.lookup(cls.superclass, cls.package)

    def persistent_classes(self) -> list[ClassDescriptor]:
        return [cls for cls in self._classes if cls.persistent]
