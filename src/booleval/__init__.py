"""booleval: evaluate boolean expressions stored as data.

Usage:
    from booleval import evaluate, compile, execute, detect_identifiers

    evaluate("1 == x", {"x": 1})                 # True

    handle = compile("age >= limit", {"age": 0, "limit": 18})
    execute(handle, {"age": 21, "limit": 18})    # True

    detect_identifiers("a > 1 && (b || a < 5)")  # ("a", "b")
"""

from booleval.cache import IdentifierCache, configure, get_identifier_cache
from booleval.config import EvaluatorConfig
from booleval.evaluation import compile, detect_identifiers, evaluate, execute
from booleval.expressions import (
    ArityMismatch,
    CompiledExpression,
    ExpressionError,
    MalformedExpression,
    NonBooleanResult,
    ParameterSlot,
    TypeMismatch,
    UnresolvedIdentifier,
    ValueType,
)
from booleval.rules import Rule, RuleIssue, RuleSet, RuleSetError, RuleSetLoader

__all__ = [
    # Facade
    "compile",
    "detect_identifiers",
    "evaluate",
    "execute",
    # Cache and config
    "EvaluatorConfig",
    "IdentifierCache",
    "configure",
    "get_identifier_cache",
    # Types
    "CompiledExpression",
    "ParameterSlot",
    "ValueType",
    # Errors
    "ArityMismatch",
    "ExpressionError",
    "MalformedExpression",
    "NonBooleanResult",
    "TypeMismatch",
    "UnresolvedIdentifier",
    # Rules
    "Rule",
    "RuleIssue",
    "RuleSet",
    "RuleSetError",
    "RuleSetLoader",
]
