"""Value types and the comparison rules between them.

Parameter values are dynamically typed. Each one is classified into a
ValueType when an expression is compiled, and the executor compares values
according to the pair of types involved rather than relying on Python's
own operator semantics (which would, for instance, treat True == 1).
"""

from decimal import Decimal
from enum import Enum
from typing import Any


class ValueType(str, Enum):
    """Declared type of a parameter slot or expression node."""

    NULL = "null"
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    DECIMAL = "decimal"
    STRING = "string"
    OBJECT = "object"  # generic; checked at run time

    @property
    def is_numeric(self) -> bool:
        return self in NUMERIC_TYPES


NUMERIC_TYPES = frozenset({ValueType.INT, ValueType.FLOAT, ValueType.DECIMAL})


def classify(value: Any) -> ValueType:
    """Return the runtime type of a value.

    None classifies as NULL. Values outside the primitive set classify as
    OBJECT.
    """
    if value is None:
        return ValueType.NULL
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return ValueType.BOOL
    if isinstance(value, int):
        return ValueType.INT
    if isinstance(value, float):
        return ValueType.FLOAT
    if isinstance(value, Decimal):
        return ValueType.DECIMAL
    if isinstance(value, str):
        return ValueType.STRING
    return ValueType.OBJECT


def infer_type(value: Any) -> ValueType:
    """Return the declared slot type for a representative value.

    None has no useful type at compile time, so it declares the generic
    OBJECT slot.
    """
    value_type = classify(value)
    if value_type == ValueType.NULL:
        return ValueType.OBJECT
    return value_type


def is_assignable(value: Any, declared: ValueType) -> bool:
    """Check whether a runtime value may be bound to a slot of a declared type.

    None is assignable to every slot. INT widens to FLOAT and DECIMAL.
    """
    actual = classify(value)
    if actual == ValueType.NULL or declared == ValueType.OBJECT:
        return True
    if actual == declared:
        return True
    return actual == ValueType.INT and declared in (ValueType.FLOAT, ValueType.DECIMAL)


def _coerce_numbers(left: Any, right: Any) -> tuple[Any, Any]:
    """Bring a numeric pair onto a common footing.

    Python compares int and float exactly already; a Decimal on either side
    pulls the other into Decimal via its shortest repr.
    """
    if isinstance(left, Decimal) or isinstance(right, Decimal):
        return _to_decimal(left), _to_decimal(right)
    return left, right


def _to_decimal(value: int | float | Decimal) -> Decimal:
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def equals(left: Any, right: Any) -> bool:
    """Equality with per-type-pair coercion.

    Numbers compare numerically across INT, FLOAT and DECIMAL. Values of
    incompatible types are unequal; this never raises.
    """
    left_type = classify(left)
    right_type = classify(right)

    if left_type == ValueType.NULL or right_type == ValueType.NULL:
        return left_type == right_type

    if left_type.is_numeric and right_type.is_numeric:
        left, right = _coerce_numbers(left, right)
        return left == right

    if left_type != right_type:
        return False

    return left == right


def compare(left: Any, right: Any) -> int | None:
    """Order two values, returning -1, 0 or 1.

    Returns None when the pair has no ordering: either side is null, the
    types are incompatible, the type is not ordered (booleans), or a
    number is NaN.
    """
    left_type = classify(left)
    right_type = classify(right)

    if left_type.is_numeric and right_type.is_numeric:
        if _is_nan(left) or _is_nan(right):
            return None
        left, right = _coerce_numbers(left, right)
    elif not (left_type == right_type == ValueType.STRING):
        return None

    if left < right:
        return -1
    if left > right:
        return 1
    return 0


def _is_nan(value: int | float | Decimal) -> bool:
    return value != value
