"""Value types used to parameterise query expressions."""

from decimal import Decimal
from enum import StrEnum, auto


class Double(float):
    """Boxed double."""


class Float(float):
    """Boxed float."""


class Integer(int):
    """Boxed int."""


class Long(int):
    """Boxed long."""


class Short(int):
    """Boxed short."""


class BigInteger(int):
    """Arbitrary precision integer."""


class BigDecimal(Decimal):
    """Arbitrary precision decimal."""


class ExpressionType(StrEnum):
    """Kind of a query root that is not the candidate."""

    PARAMETER = auto()
    VARIABLE = auto()
