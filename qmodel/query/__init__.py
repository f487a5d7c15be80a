"""Runtime support for generated query classes."""

from .expressions import (
    BooleanExpression,
    BooleanExpressionImpl,
    ByteExpression,
    ByteExpressionImpl,
    CharacterExpression,
    CharacterExpressionImpl,
    CollectionExpression,
    CollectionExpressionImpl,
    ComparableExpression,
    DateExpression,
    DateExpressionImpl,
    DateTimeExpression,
    DateTimeExpressionImpl,
    Expression,
    ExpressionImpl,
    ListExpression,
    ListExpressionImpl,
    LocalDateExpression,
    LocalDateExpressionImpl,
    LocalDateTimeExpression,
    LocalDateTimeExpressionImpl,
    LocalTimeExpression,
    LocalTimeExpressionImpl,
    MapExpression,
    MapExpressionImpl,
    NumericExpression,
    NumericExpressionImpl,
    ObjectExpression,
    ObjectExpressionImpl,
    QueryExpressionError,
    StringExpression,
    StringExpressionImpl,
    TimeExpression,
    TimeExpressionImpl,
    literal,
)
from .persistable import (
    CandidateAttribute,
    LazyClass,
    ObjectIdExpression,
    PersistableExpression,
    PersistableExpressionImpl,
    QueryClassType,
)
from .types import (
    BigDecimal,
    BigInteger,
    Double,
    ExpressionType,
    Float,
    Integer,
    Long,
    Short,
)

__all__ = [
    "BigDecimal",
    "BigInteger",
    "BooleanExpression",
    "BooleanExpressionImpl",
    "ByteExpression",
    "ByteExpressionImpl",
    "CandidateAttribute",
    "CharacterExpression",
    "CharacterExpressionImpl",
    "CollectionExpression",
    "CollectionExpressionImpl",
    "ComparableExpression",
    "DateExpression",
    "DateExpressionImpl",
    "DateTimeExpression",
    "DateTimeExpressionImpl",
    "Double",
    "Expression",
    "ExpressionImpl",
    "ExpressionType",
    "Float",
    "Integer",
    "LazyClass",
    "ListExpression",
    "ListExpressionImpl",
    "LocalDateExpression",
    "LocalDateExpressionImpl",
    "LocalDateTimeExpression",
    "LocalDateTimeExpressionImpl",
    "LocalTimeExpression",
    "LocalTimeExpressionImpl",
    "Long",
    "MapExpression",
    "MapExpressionImpl",
    "NumericExpression",
    "NumericExpressionImpl",
    "ObjectExpression",
    "ObjectExpressionImpl",
    "ObjectIdExpression",
    "PersistableExpression",
    "PersistableExpressionImpl",
    "QueryClassType",
    "QueryExpressionError",
    "Short",
    "StringExpression",
    "StringExpressionImpl",
    "TimeExpression",
    "TimeExpressionImpl",
    "literal",
]
