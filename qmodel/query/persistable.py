"""Base types for generated query classes."""

import importlib
import threading
from typing import Any, ClassVar, Self

from .expressions import Expression, ExpressionImpl
from .types import ExpressionType


class PersistableExpression(Expression):
    """Expression for an instance of a persistent class."""

    __slots__ = ()

    def jdo_object_id(self) -> Expression:
        return ObjectIdExpression(self, "JDOHelper.getObjectId")

    def jdo_version(self) -> Expression:
        return ObjectIdExpression(self, "JDOHelper.getVersion")


class ObjectIdExpression(ExpressionImpl):
    """Identity or version of a persistable expression."""

    __slots__ = ()

    def _query_text(self) -> str:
        return f"{self._name}({self._parent._query_text()})"


class QueryClassType(type):
    """Metaclass of query classes: their canonical candidate cannot be replaced."""

    def _check_candidate(cls, name: str) -> None:
        for klass in cls.__mro__:
            if isinstance(klass.__dict__.get(name), CandidateAttribute):
                raise AttributeError("the candidate of a query class is read-only")

    def __setattr__(cls, name: str, value: Any) -> None:
        cls._check_candidate(name)
        super().__setattr__(name, value)

    def __delattr__(cls, name: str) -> None:
        cls._check_candidate(name)
        super().__delattr__(name)


class PersistableExpressionImpl(ExpressionImpl, PersistableExpression, metaclass=QueryClassType):
    """Base class of every generated query class.

    Generated classes extend this one (directly, or through the query class of
    their nearest persistent ancestor) and provide two constructors:

    - ``__init__(parent, name, depth)`` builds a member below ``parent``;
    - ``from_root(type_name, name, expr_type)`` builds a parameter or variable.

    In field access style the generated members are listed in
    ``__query_fields__``. Constructors bind them with ``_bind_member``, so a
    class redeclaring a member of its ancestor replaces the inherited one;
    assigning a member afterwards raises AttributeError.
    """

    __slots__ = ("_expr_type", "_type_name")

    __query_fields__: ClassVar[tuple[str, ...]] = ()

    def __init__(self, parent: PersistableExpression | None, name: str) -> None:
        super().__init__(parent, name)
        self._expr_type: ExpressionType | None = None
        self._type_name: str | None = None

    @classmethod
    def from_root(cls, type_name: str, name: str, expr_type: ExpressionType) -> Self:
        expr = cls.__new__(cls)
        expr._init_root(type_name, name, expr_type)
        return expr

    def _init_root(self, type_name: str, name: str, expr_type: ExpressionType) -> None:
        ExpressionImpl.__init__(self, None, name)
        self._expr_type = expr_type
        self._type_name = type_name

    def __setattr__(self, name: str, value: Any) -> None:
        if name in type(self).__query_fields__:
            raise AttributeError(f"query member {name!r} is read-only")
        super().__setattr__(name, value)

    def _bind_member(self, name: str, value: Any) -> None:
        object.__setattr__(self, name, value)

    def jdo_expression_type(self) -> ExpressionType | None:
        return self._expr_type

    def jdo_type_name(self) -> str | None:
        return self._type_name

    def jdo_is_parameter(self) -> bool:
        return self._expr_type == ExpressionType.PARAMETER

    def jdo_is_variable(self) -> bool:
        return self._expr_type == ExpressionType.VARIABLE


class CandidateAttribute:
    """Read-only class attribute holding the canonical candidate of a query class.

    The candidate is built on first access with ``owner.candidate(alias)``, so
    query modules referring to each other can be imported in any order.
    """

    def __init__(self, alias: str = "this") -> None:
        self.alias = alias
        self._instances: dict[type, Any] = {}
        self._lock = threading.RLock()

    def __get__(self, obj: Any, owner: type) -> Any:
        try:
            return self._instances[owner]
        except KeyError:
            pass
        with self._lock:
            if owner not in self._instances:
                self._instances[owner] = owner.candidate(self.alias)
            return self._instances[owner]

    def __set__(self, obj: Any, value: Any) -> None:
        raise AttributeError("the candidate of a query class is read-only")


class LazyClass:
    """Query class defined in another generated module, imported on first use."""

    def __init__(self, module: str, name: str) -> None:
        self.module = module
        self.name = name
        self._cls: type | None = None

    def resolve(self) -> type:
        if self._cls is None:
            self._cls = getattr(importlib.import_module(self.module), self.name)
        return self._cls

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self.resolve()(*args, **kwargs)

    def __getattr__(self, attr: str) -> Any:
        if attr.startswith("__"):
            raise AttributeError(attr)
        return getattr(self.resolve(), attr)

    def __repr__(self) -> str:
        return f"LazyClass({self.module}.{self.name})"
