"""Error types raised while scanning, compiling and executing expressions.

Every failure surfaces as a subclass of ExpressionError so callers can
catch the whole family or a single kind.
"""


class ExpressionError(Exception):
    """Base class for all expression errors."""


class MalformedExpression(ExpressionError):
    """The expression text does not parse under the grammar."""

    def __init__(self, message: str, position: int = 0):
        self.position = position
        super().__init__(message)


class UnresolvedIdentifier(ExpressionError):
    """An identifier has no matching parameter slot at compile time."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown identifier '{name}'")


class NonBooleanResult(ExpressionError):
    """The expression, or a logical operand, does not have a boolean type."""

    def __init__(self, message: str, result_type: object = None):
        self.result_type = result_type
        super().__init__(message)


class ArityMismatch(ExpressionError):
    """Supplied values do not match the compiled parameter slots."""

    def __init__(self, expected: int, actual: int, message: str | None = None):
        self.expected = expected
        self.actual = actual
        super().__init__(
            message or f"Expected {expected} parameter value(s), got {actual}"
        )


class TypeMismatch(ExpressionError):
    """A runtime value is incompatible with its slot or operator."""
