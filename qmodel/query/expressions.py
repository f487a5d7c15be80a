"""Query expression types.

Every public expression type (``StringExpression``, ``NumericExpression``...)
declares the operations a typed query can use on it. The matching ``...Impl``
class is the concrete type generated query classes instantiate for a member.

Expressions only build query text::

    >>> person = QPerson.candidate()
    >>> str(person.name.startswith("Jo") & person.age.gt(18))
    '(this.name.startsWith("Jo") && this.age > 18)'

They are never executed.
"""

from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Generic, Self, TypeVar

T = TypeVar("T")


class QueryExpressionError(TypeError):
    """Raised when a value cannot be used inside a query expression."""


def literal(value: Any) -> str:
    """Render a Python value or an expression as query text."""
    if isinstance(value, Expression):
        return value._query_text()
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float, Decimal)):
        return str(value)
    if isinstance(value, str):
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    if isinstance(value, (datetime, date, time)):
        return f"'{value.isoformat()}'"
    raise QueryExpressionError(f"Unsupported query literal: {value!r}")


def _binary(cls: type["ExpressionImpl"], left: Any, op: str, right: Any) -> Any:
    return cls.fragment(f"{literal(left)} {op} {literal(right)}")


def _call(cls: type["ExpressionImpl"], target: Any, method: str, *args: Any) -> Any:
    arguments = ", ".join(literal(a) for a in args)
    return cls.fragment(f"{literal(target)}.{method}({arguments})")


class Expression:
    """Root of all query expressions."""

    __slots__ = ()

    def _query_text(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self._query_text()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._query_text()}>"

    def eq(self, other: Any) -> "BooleanExpression":
        return _binary(BooleanExpressionImpl, self, "==", other)

    def ne(self, other: Any) -> "BooleanExpression":
        return _binary(BooleanExpressionImpl, self, "!=", other)

    def is_null(self) -> "BooleanExpression":
        return _binary(BooleanExpressionImpl, self, "==", None)

    def is_not_null(self) -> "BooleanExpression":
        return _binary(BooleanExpressionImpl, self, "!=", None)

    def instance_of(self, type_name: str) -> "BooleanExpression":
        return BooleanExpressionImpl.fragment(f"{literal(self)} instanceof {type_name}")


class ComparableExpression(Expression, Generic[T]):
    """Expression whose values are ordered."""

    __slots__ = ()

    def lt(self, other: Any) -> "BooleanExpression":
        return _binary(BooleanExpressionImpl, self, "<", other)

    def le(self, other: Any) -> "BooleanExpression":
        return _binary(BooleanExpressionImpl, self, "<=", other)

    def gt(self, other: Any) -> "BooleanExpression":
        return _binary(BooleanExpressionImpl, self, ">", other)

    def ge(self, other: Any) -> "BooleanExpression":
        return _binary(BooleanExpressionImpl, self, ">=", other)


class BooleanExpression(ComparableExpression[bool]):
    __slots__ = ()

    def __and__(self, other: Any) -> "BooleanExpression":
        return BooleanExpressionImpl.fragment(f"({literal(self)} && {literal(other)})")

    def __or__(self, other: Any) -> "BooleanExpression":
        return BooleanExpressionImpl.fragment(f"({literal(self)} || {literal(other)})")

    def __invert__(self) -> "BooleanExpression":
        return BooleanExpressionImpl.fragment(f"!({literal(self)})")


class ByteExpression(ComparableExpression[int]):
    __slots__ = ()


class CharacterExpression(ComparableExpression[str]):
    __slots__ = ()

    def lower(self) -> "CharacterExpression":
        return _call(CharacterExpressionImpl, self, "toLowerCase")

    def upper(self) -> "CharacterExpression":
        return _call(CharacterExpressionImpl, self, "toUpperCase")


class NumericExpression(ComparableExpression[T]):
    """Numeric expression, parameterised by its boxed value type."""

    __slots__ = ()

    def __add__(self, other: Any) -> "NumericExpression[T]":
        return _binary(NumericExpressionImpl, self, "+", other)

    def __sub__(self, other: Any) -> "NumericExpression[T]":
        return _binary(NumericExpressionImpl, self, "-", other)

    def __mul__(self, other: Any) -> "NumericExpression[T]":
        return _binary(NumericExpressionImpl, self, "*", other)

    def __truediv__(self, other: Any) -> "NumericExpression[T]":
        return _binary(NumericExpressionImpl, self, "/", other)

    def __mod__(self, other: Any) -> "NumericExpression[T]":
        return _binary(NumericExpressionImpl, self, "%", other)

    def __neg__(self) -> "NumericExpression[T]":
        return NumericExpressionImpl.fragment(f"-{literal(self)}")

    def abs(self) -> "NumericExpression[T]":
        return NumericExpressionImpl.fragment(f"Math.abs({literal(self)})")


class StringExpression(ComparableExpression[str]):
    __slots__ = ()

    def __add__(self, other: Any) -> "StringExpression":
        return _binary(StringExpressionImpl, self, "+", other)

    def startswith(self, prefix: Any) -> BooleanExpression:
        return _call(BooleanExpressionImpl, self, "startsWith", prefix)

    def endswith(self, suffix: Any) -> BooleanExpression:
        return _call(BooleanExpressionImpl, self, "endsWith", suffix)

    def matches(self, pattern: Any) -> BooleanExpression:
        return _call(BooleanExpressionImpl, self, "matches", pattern)

    def lower(self) -> "StringExpression":
        return _call(StringExpressionImpl, self, "toLowerCase")

    def upper(self) -> "StringExpression":
        return _call(StringExpressionImpl, self, "toUpperCase")

    def length(self) -> NumericExpression[int]:
        return _call(NumericExpressionImpl, self, "length")


class _DateParts:
    __slots__ = ()

    def year(self) -> NumericExpression[int]:
        return _call(NumericExpressionImpl, self, "getYear")

    def month(self) -> NumericExpression[int]:
        return _call(NumericExpressionImpl, self, "getMonth")

    def day(self) -> NumericExpression[int]:
        return _call(NumericExpressionImpl, self, "getDay")


class _TimeParts:
    __slots__ = ()

    def hour(self) -> NumericExpression[int]:
        return _call(NumericExpressionImpl, self, "getHour")

    def minute(self) -> NumericExpression[int]:
        return _call(NumericExpressionImpl, self, "getMinute")

    def second(self) -> NumericExpression[int]:
        return _call(NumericExpressionImpl, self, "getSecond")


class DateTimeExpression(_DateParts, _TimeParts, ComparableExpression[datetime]):
    __slots__ = ()


class DateExpression(_DateParts, ComparableExpression[date]):
    __slots__ = ()


class TimeExpression(_TimeParts, ComparableExpression[time]):
    __slots__ = ()


class LocalDateTimeExpression(_DateParts, _TimeParts, ComparableExpression[datetime]):
    __slots__ = ()


class LocalDateExpression(_DateParts, ComparableExpression[date]):
    __slots__ = ()


class LocalTimeExpression(_TimeParts, ComparableExpression[time]):
    __slots__ = ()


class CollectionExpression(Expression):
    __slots__ = ()

    def contains(self, element: Any) -> BooleanExpression:
        return _call(BooleanExpressionImpl, self, "contains", element)

    def is_empty(self) -> BooleanExpression:
        return _call(BooleanExpressionImpl, self, "isEmpty")

    def size(self) -> NumericExpression[int]:
        return _call(NumericExpressionImpl, self, "size")


class ListExpression(CollectionExpression):
    __slots__ = ()

    def get(self, index: Any) -> "ObjectExpression[Any]":
        return _call(ObjectExpressionImpl, self, "get", index)


class MapExpression(Expression):
    __slots__ = ()

    def contains_key(self, key: Any) -> BooleanExpression:
        return _call(BooleanExpressionImpl, self, "containsKey", key)

    def contains_value(self, value: Any) -> BooleanExpression:
        return _call(BooleanExpressionImpl, self, "containsValue", value)

    def get(self, key: Any) -> "ObjectExpression[Any]":
        return _call(ObjectExpressionImpl, self, "get", key)

    def is_empty(self) -> BooleanExpression:
        return _call(BooleanExpressionImpl, self, "isEmpty")

    def size(self) -> NumericExpression[int]:
        return _call(NumericExpressionImpl, self, "size")


class ObjectExpression(Expression, Generic[T]):
    """Expression for a type without a dedicated expression type."""

    __slots__ = ()


class ExpressionImpl(Expression):
    """A member named ``name`` below ``parent``, or a fragment of query text."""

    __slots__ = ("_parent", "_name", "_text")

    def __init__(self, parent: Expression | None, name: str) -> None:
        self._parent = parent
        self._name = name
        self._text: str | None = None

    @classmethod
    def fragment(cls, text: str) -> Self:
        expr = cls.__new__(cls)
        ExpressionImpl.__init__(expr, None, "")
        expr._text = text
        return expr

    def _query_text(self) -> str:
        if self._text is not None:
            return self._text
        if self._parent is None:
            return self._name
        return f"{self._parent._query_text()}.{self._name}"

    def jdo_parent(self) -> Expression | None:
        return self._parent

    def jdo_name(self) -> str:
        return self._name


class BooleanExpressionImpl(ExpressionImpl, BooleanExpression):
    __slots__ = ()


class ByteExpressionImpl(ExpressionImpl, ByteExpression):
    __slots__ = ()


class CharacterExpressionImpl(ExpressionImpl, CharacterExpression):
    __slots__ = ()


class NumericExpressionImpl(ExpressionImpl, NumericExpression[T]):
    __slots__ = ()


class StringExpressionImpl(ExpressionImpl, StringExpression):
    __slots__ = ()


class DateTimeExpressionImpl(ExpressionImpl, DateTimeExpression):
    __slots__ = ()


class DateExpressionImpl(ExpressionImpl, DateExpression):
    __slots__ = ()


class TimeExpressionImpl(ExpressionImpl, TimeExpression):
    __slots__ = ()


class LocalDateTimeExpressionImpl(ExpressionImpl, LocalDateTimeExpression):
    __slots__ = ()


class LocalDateExpressionImpl(ExpressionImpl, LocalDateExpression):
    __slots__ = ()


class LocalTimeExpressionImpl(ExpressionImpl, LocalTimeExpression):
    __slots__ = ()


class CollectionExpressionImpl(ExpressionImpl, CollectionExpression):
    __slots__ = ()


class ListExpressionImpl(ExpressionImpl, ListExpression):
    __slots__ = ()


class MapExpressionImpl(ExpressionImpl, MapExpression):
    __slots__ = ()


class ObjectExpressionImpl(ExpressionImpl, ObjectExpression[T]):
    __slots__ = ()
