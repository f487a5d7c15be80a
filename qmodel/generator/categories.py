"""Classification of member types into query expression categories."""

from dataclasses import dataclass
from enum import Enum, StrEnum, auto

from .schema import SchemaIndex, query_class_name
from .types import TypeRef


class CategoryKind(StrEnum):
    """Expression category of a member type."""

    BOOLEAN = auto()
    BYTE = auto()
    CHARACTER = auto()
    NUMERIC = auto()
    STRING = auto()
    DATE_TIME = auto()
    DATE = auto()
    TIME = auto()
    LOCAL_DATE = auto()
    LOCAL_TIME = auto()
    LOCAL_DATE_TIME = auto()
    MAP = auto()
    LIST = auto()
    COLLECTION = auto()
    PERSISTABLE = auto()
    OBJECT = auto()


class NumericKind(StrEnum):
    """Boxed value type of a numeric expression."""

    DOUBLE = "Double"
    FLOAT = "Float"
    INTEGER = "Integer"
    LONG = "Long"
    SHORT = "Short"
    BIG_INTEGER = "BigInteger"
    BIG_DECIMAL = "BigDecimal"


class Parameter(Enum):
    """How a category's argument appears in its expression names."""

    NONE = auto()  # BooleanExpression
    NAME = auto()  # NumericExpression[Integer]
    QUOTED = auto()  # ObjectExpression["java.util.UUID"]
    REPLACE = auto()  # the argument is the name: QPerson


@dataclass(frozen=True)
class ExpressionNames:
    """Public expression type and construction type of one category."""

    public: str
    construction: str
    parameter: Parameter = Parameter.NONE


# Single source for both names of every category
EXPRESSION_TABLE: dict[CategoryKind, ExpressionNames] = {
    CategoryKind.BOOLEAN: ExpressionNames("BooleanExpression", "BooleanExpressionImpl"),
    CategoryKind.BYTE: ExpressionNames("ByteExpression", "ByteExpressionImpl"),
    CategoryKind.CHARACTER: ExpressionNames("CharacterExpression", "CharacterExpressionImpl"),
    CategoryKind.NUMERIC: ExpressionNames(
        "NumericExpression", "NumericExpressionImpl", Parameter.NAME
    ),
    CategoryKind.STRING: ExpressionNames("StringExpression", "StringExpressionImpl"),
    CategoryKind.DATE_TIME: ExpressionNames("DateTimeExpression", "DateTimeExpressionImpl"),
    CategoryKind.DATE: ExpressionNames("DateExpression", "DateExpressionImpl"),
    CategoryKind.TIME: ExpressionNames("TimeExpression", "TimeExpressionImpl"),
    CategoryKind.LOCAL_DATE: ExpressionNames("LocalDateExpression", "LocalDateExpressionImpl"),
    CategoryKind.LOCAL_TIME: ExpressionNames("LocalTimeExpression", "LocalTimeExpressionImpl"),
    CategoryKind.LOCAL_DATE_TIME: ExpressionNames(
        "LocalDateTimeExpression", "LocalDateTimeExpressionImpl"
    ),
    CategoryKind.MAP: ExpressionNames("MapExpression", "MapExpressionImpl"),
    CategoryKind.LIST: ExpressionNames("ListExpression", "ListExpressionImpl"),
    CategoryKind.COLLECTION: ExpressionNames("CollectionExpression", "CollectionExpressionImpl"),
    CategoryKind.PERSISTABLE: ExpressionNames("", "", Parameter.REPLACE),
    CategoryKind.OBJECT: ExpressionNames("ObjectExpression", "ObjectExpressionImpl", Parameter.QUOTED),
}


@dataclass(frozen=True)
class TypeCategory:
    """Category of a member type.

    - argument: boxed kind (numeric), generated class name (persistable) or
      raw type name (object); None for the other categories
    - module: for persistable categories, the module defining the generated class
    """

    kind: CategoryKind
    argument: str | None = None
    module: str | None = None

    @classmethod
    def numeric(cls, kind: NumericKind) -> "TypeCategory":
        return cls(CategoryKind.NUMERIC, str(kind))

    @classmethod
    def persistable(cls, name: str, module: str | None = None) -> "TypeCategory":
        return cls(CategoryKind.PERSISTABLE, name, module)

    @classmethod
    def generic_object(cls, raw_name: str) -> "TypeCategory":
        return cls(CategoryKind.OBJECT, raw_name)

    @property
    def is_persistable(self) -> bool:
        return self.kind == CategoryKind.PERSISTABLE

    @property
    def public_name(self) -> str:
        return expression_names(self)[0]

    @property
    def construction_name(self) -> str:
        return expression_names(self)[1]


def _parameterise(base: str, argument: str | None, parameter: Parameter) -> str:
    if parameter == Parameter.NAME:
        return f"{base}[{argument}]"
    if parameter == Parameter.QUOTED:
        return f'{base}["{argument}"]'
    if parameter == Parameter.REPLACE:
        return argument or base
    return base


def expression_names(category: TypeCategory, argument: str | None = None) -> tuple[str, str]:
    """Return the (public, construction) names of ``category``.

    ``argument`` overrides the category's own argument, for generated classes
    bound under a different local name.
    """
    row = EXPRESSION_TABLE[category.kind]
    arg = argument if argument is not None else category.argument
    return (
        _parameterise(row.public, arg, row.parameter),
        _parameterise(row.construction, arg, row.parameter),
    )


def runtime_names(category: TypeCategory) -> set[str]:
    """Names the generated code imports from the runtime to use ``category``."""
    row = EXPRESSION_TABLE[category.kind]
    if row.parameter == Parameter.REPLACE:
        return set()
    names = {row.public, row.construction}
    if row.parameter == Parameter.NAME and category.argument:
        names.add(category.argument)
    return names


_BOOLEAN = TypeCategory(CategoryKind.BOOLEAN)
_BYTE = TypeCategory(CategoryKind.BYTE)
_CHARACTER = TypeCategory(CategoryKind.CHARACTER)
_DOUBLE = TypeCategory.numeric(NumericKind.DOUBLE)
_FLOAT = TypeCategory.numeric(NumericKind.FLOAT)
_INTEGER = TypeCategory.numeric(NumericKind.INTEGER)
_LONG = TypeCategory.numeric(NumericKind.LONG)
_SHORT = TypeCategory.numeric(NumericKind.SHORT)
_BIG_INTEGER = TypeCategory.numeric(NumericKind.BIG_INTEGER)
_BIG_DECIMAL = TypeCategory.numeric(NumericKind.BIG_DECIMAL)

# Exact type names, primitive and boxed. Simple names stand for the java.lang,
# java.math and java.time types; Python spellings are accepted as well.
SCALAR_TYPES: dict[str, TypeCategory] = {
    "boolean": _BOOLEAN,
    "Boolean": _BOOLEAN,
    "java.lang.Boolean": _BOOLEAN,
    "bool": _BOOLEAN,
    "byte": _BYTE,
    "Byte": _BYTE,
    "java.lang.Byte": _BYTE,
    "char": _CHARACTER,
    "Character": _CHARACTER,
    "java.lang.Character": _CHARACTER,
    "double": _DOUBLE,
    "Double": _DOUBLE,
    "java.lang.Double": _DOUBLE,
    "float": _FLOAT,
    "Float": _FLOAT,
    "java.lang.Float": _FLOAT,
    "int": _INTEGER,
    "Integer": _INTEGER,
    "java.lang.Integer": _INTEGER,
    "long": _LONG,
    "Long": _LONG,
    "java.lang.Long": _LONG,
    "short": _SHORT,
    "Short": _SHORT,
    "java.lang.Short": _SHORT,
    "BigInteger": _BIG_INTEGER,
    "java.math.BigInteger": _BIG_INTEGER,
    "BigDecimal": _BIG_DECIMAL,
    "java.math.BigDecimal": _BIG_DECIMAL,
    "Decimal": _BIG_DECIMAL,
    "decimal.Decimal": _BIG_DECIMAL,
    "String": TypeCategory(CategoryKind.STRING),
    "java.lang.String": TypeCategory(CategoryKind.STRING),
    "str": TypeCategory(CategoryKind.STRING),
    "DateTime": TypeCategory(CategoryKind.DATE_TIME),
    "java.util.Date": TypeCategory(CategoryKind.DATE_TIME),
    "datetime.datetime": TypeCategory(CategoryKind.DATE_TIME),
    "Date": TypeCategory(CategoryKind.DATE),
    "java.sql.Date": TypeCategory(CategoryKind.DATE),
    "datetime.date": TypeCategory(CategoryKind.DATE),
    "Time": TypeCategory(CategoryKind.TIME),
    "java.sql.Time": TypeCategory(CategoryKind.TIME),
    "datetime.time": TypeCategory(CategoryKind.TIME),
    "LocalDate": TypeCategory(CategoryKind.LOCAL_DATE),
    "java.time.LocalDate": TypeCategory(CategoryKind.LOCAL_DATE),
    "LocalTime": TypeCategory(CategoryKind.LOCAL_TIME),
    "java.time.LocalTime": TypeCategory(CategoryKind.LOCAL_TIME),
    "LocalDateTime": TypeCategory(CategoryKind.LOCAL_DATE_TIME),
    "java.time.LocalDateTime": TypeCategory(CategoryKind.LOCAL_DATE_TIME),
}

# Container shapes, checked in order. Names may carry a "java.util." prefix.
CONTAINER_SHAPES: tuple[tuple[CategoryKind, frozenset[str]], ...] = (
    (
        CategoryKind.MAP,
        frozenset(
            [
                "Map",
                "HashMap",
                "LinkedHashMap",
                "TreeMap",
                "SortedMap",
                "NavigableMap",
                "Hashtable",
                "Properties",
                "dict",
            ]
        ),
    ),
    (
        CategoryKind.LIST,
        frozenset(["List", "ArrayList", "LinkedList", "Vector", "Stack", "list"]),
    ),
    (
        CategoryKind.COLLECTION,
        frozenset(
            [
                "Collection",
                "Set",
                "HashSet",
                "LinkedHashSet",
                "TreeSet",
                "SortedSet",
                "NavigableSet",
                "Queue",
                "Deque",
                "ArrayDeque",
                "PriorityQueue",
                "set",
                "frozenset",
            ]
        ),
    ),
)


def _container_kind(name: str) -> CategoryKind | None:
    simple = name.removeprefix("java.util.")
    for kind, names in CONTAINER_SHAPES:
        if simple in names:
            return kind
    return None


def classify(
    type_ref: TypeRef, schema: SchemaIndex | None = None, package: str | None = None
) -> TypeCategory:
    """Classify a declared member type. Never fails.

    Scalars first (boolean, byte, char, numerics, string, temporal types),
    then container shapes, then persistent classes of ``schema`` looked up
    relative to ``package``; anything else is a generic object.
    """
    if type_ref.array_dims:
        return TypeCategory.generic_object(type_ref.raw_name)

    scalar = SCALAR_TYPES.get(type_ref.name)
    if scalar is not None:
        return scalar

    container = _container_kind(type_ref.name)
    if container is not None:
        return TypeCategory(container)

    if schema is not None:
        target = schema.lookup(type_ref.name, package)
        if target is not None and target.persistent and target.outer is None:
            name = query_class_name(target.name)
            module = f"{target.package}.{name}" if target.package else name
            return TypeCategory.persistable(name, module)

    return TypeCategory.generic_object(type_ref.raw_name)
