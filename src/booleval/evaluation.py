"""Evaluation facade.

Ties the pieces together: scan the expression for identifiers (cached),
narrow the caller's parameters to those names, compile against their
inferred types, and execute.

Usage:
    from booleval import evaluate

    evaluate('status == "active" && count > 0', {"status": "active", "count": 5})
    # True
"""

from typing import Any, Mapping

from booleval.cache import get_identifier_cache
from booleval.expressions.compiler import CompiledExpression, compile_expression
from booleval.expressions.errors import ArityMismatch
from booleval.expressions.executor import execute_compiled
from booleval.expressions.types import infer_type


def detect_identifiers(expression: str) -> tuple[str, ...]:
    """Return the distinct identifiers an expression references, in first-seen order.

    Results are served from the process-wide identifier cache.

    Raises:
        MalformedExpression: If the expression cannot be parsed
    """
    return get_identifier_cache().get_or_compute(expression)


def compile(expression: str, parameters: Mapping[str, Any]) -> CompiledExpression:
    """Compile an expression with one slot per parameter, typed from its value.

    Every entry of parameters becomes a slot in mapping order, referenced or
    not. Use the returned handle with execute() to evaluate repeatedly.
    """
    return compile_expression(
        expression,
        {name: infer_type(value) for name, value in parameters.items()},
    )


def execute(handle: CompiledExpression, parameters: Mapping[str, Any]) -> bool:
    """Execute a compiled expression, binding parameters to slots by name.

    Raises:
        ArityMismatch: If the parameter names differ from the compiled slots
        TypeMismatch: If a value does not fit its slot's declared type
    """
    expected = len(handle.slots)
    if len(parameters) != expected:
        raise ArityMismatch(expected, len(parameters))

    missing = [name for name in handle.parameter_names if name not in parameters]
    if missing:
        raise ArityMismatch(
            expected,
            len(parameters),
            f"Missing value for parameter(s): {', '.join(missing)}",
        )

    return execute_compiled(handle, [parameters[name] for name in handle.parameter_names])


def evaluate(expression: str, parameters: Mapping[str, Any]) -> bool:
    """Compile and evaluate a boolean expression against a parameter set.

    Parameters the expression does not reference are ignored; referenced
    names missing from parameters are bound to None.

    Example:
        evaluate("1 == x", {"x": 1, "y": "irrelevant"})
        # True

    Raises:
        MalformedExpression, UnresolvedIdentifier, NonBooleanResult,
        ArityMismatch, TypeMismatch: propagated unchanged
    """
    filtered = {name: parameters.get(name) for name in detect_identifiers(expression)}
    compiled = compile(expression, filtered)
    return execute_compiled(compiled, list(filtered.values()))
