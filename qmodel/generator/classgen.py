"""Construction of query class descriptions from schema classes."""

from dataclasses import dataclass

from .ancestors import ClassResolutionError, resolve_ancestor
from .categories import TypeCategory, classify, expression_names, runtime_names
from .members import persistent_members
from .schema import SchemaIndex, query_class_name
from .types import AccessStyle, ClassDescriptor, GenerationConfig

BASE_CLASS = "PersistableExpressionImpl"
BASE_INTERFACE = "PersistableExpression"
CANDIDATE_ALIAS = "this"

# Runtime names every generated class uses
COMMON_RUNTIME_NAMES = frozenset([BASE_INTERFACE, "CandidateAttribute", "ExpressionType"])


@dataclass(frozen=True)
class ClassImport:
    """A generated class imported from another generated module."""

    module: str
    name: str  # local name
    source_name: str  # name defined by the module

    @property
    def statement(self) -> str:
        text = f"from {self.module} import {self.source_name}"
        if self.name != self.source_name:
            text += f" as {self.name}"
        return text


@dataclass(frozen=True)
class GeneratedMember:
    """A member of a query class."""

    name: str
    category: TypeCategory
    public_name: str
    construction_name: str
    accessor: bool = False

    @property
    def persistable(self) -> bool:
        return self.category.is_persistable


@dataclass(frozen=True)
class GeneratedClass:
    """Everything needed to render one query class."""

    name: str
    package: str
    source_name: str
    source_qualified_name: str
    superclass: str
    ancestor: ClassImport | None
    members: tuple[GeneratedMember, ...]
    access_style: AccessStyle
    max_depth: int
    runtime_import: str
    runtime_names: tuple[str, ...]
    lazy_imports: tuple[ClassImport, ...]
    inherited_names: frozenset[str] = frozenset()  # members the ancestor chain exposes
    candidate_alias: str = CANDIDATE_ALIAS

    @property
    def qualified_name(self) -> str:
        return f"{self.package}.{self.name}"

    @property
    def has_ancestor(self) -> bool:
        return self.ancestor is not None

    @property
    def field_style(self) -> bool:
        return self.access_style == AccessStyle.FIELD

    @property
    def query_fields(self) -> tuple[str, ...]:
        """Member names this class adds to its ancestor's ``__query_fields__``."""
        return tuple(m.name for m in self.members if m.name not in self.inherited_names)

    @property
    def persistable_members(self) -> tuple[GeneratedMember, ...]:
        return tuple(m for m in self.members if m.persistable)


def _check_names(cls: ClassDescriptor) -> tuple[str, str]:
    if not cls.name or not cls.name.isidentifier():
        raise ClassResolutionError(f"Cannot determine the name of class {cls.qualified_name!r}")
    if not cls.package or not all(part.isidentifier() for part in cls.package.split(".")):
        raise ClassResolutionError(f"Cannot determine the package of class {cls.qualified_name!r}")
    return cls.package, cls.name


def _inherited_names(ancestor: ClassDescriptor | None, schema: SchemaIndex) -> frozenset[str]:
    names: set[str] = set()
    while ancestor is not None:
        names.update(m.name for m in persistent_members(ancestor))
        ancestor = resolve_ancestor(ancestor, schema)
    return frozenset(names)


def _local_name(name: str, module: str, taken: dict[str, str]) -> str:
    """Pick a module-level name for ``module``'s class ``name`` that no other import uses."""
    local = name
    if taken.get(local, module) != module:
        local = f"{name}_{module.rsplit('.', 1)[0].replace('.', '_')}"
    taken[local] = module
    return local


def generate(cls: ClassDescriptor, schema: SchemaIndex, config: GenerationConfig) -> GeneratedClass:
    """Build the query class description of the persistent class ``cls``.

    Raises ClassResolutionError when the class's own name or package is
    unusable or its inheritance chain is cyclic.
    """
    package, simple_name = _check_names(cls)
    name = query_class_name(simple_name)
    qualified_name = f"{package}.{name}"

    # module-level name -> module defining it
    taken: dict[str, str] = {name: qualified_name}

    ancestor = resolve_ancestor(cls, schema)
    ancestor_import = None
    if ancestor is not None:
        ancestor_name = query_class_name(ancestor.name)
        ancestor_module = f"{ancestor.package}.{ancestor_name}"
        ancestor_import = ClassImport(
            ancestor_module, _local_name(ancestor_name, ancestor_module, taken), ancestor_name
        )

    names = set(COMMON_RUNTIME_NAMES)
    if ancestor_import is None:
        names.add(BASE_CLASS)

    lazy: dict[str, ClassImport] = {}
    members: list[GeneratedMember] = []
    for member in persistent_members(cls):
        category = classify(member.type, schema, package)
        names |= runtime_names(category)
        local = None
        if category.is_persistable and category.module is not None:
            if category.module == qualified_name:
                local = name
            elif ancestor_import is not None and category.module == ancestor_import.module:
                local = ancestor_import.name
            elif category.module in lazy:
                local = lazy[category.module].name
            else:
                local = _local_name(category.argument or "", category.module, taken)
                lazy[category.module] = ClassImport(category.module, local, category.argument or "")
        public, construction = expression_names(category, local)
        members.append(
            GeneratedMember(
                name=member.name,
                category=category,
                public_name=public,
                construction_name=construction,
                accessor=member.accessor,
            )
        )

    if lazy:
        names.add("LazyClass")

    return GeneratedClass(
        name=name,
        package=package,
        source_name=simple_name,
        source_qualified_name=cls.qualified_name,
        superclass=ancestor_import.name if ancestor_import else BASE_CLASS,
        ancestor=ancestor_import,
        members=tuple(members),
        access_style=config.access_style,
        max_depth=config.max_depth,
        runtime_import=config.runtime_import,
        runtime_names=tuple(sorted(names)),
        lazy_imports=tuple(lazy.values()),
        inherited_names=_inherited_names(ancestor, schema),
    )
