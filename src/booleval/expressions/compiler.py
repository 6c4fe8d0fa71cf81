"""Compiler for the booleval expression language.

Turns an expression string plus an ordered set of typed parameter slots into
a CompiledExpression: the parsed tree, checked so that every identifier
resolves to a slot and the whole expression yields a boolean.
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from booleval.expressions.errors import (
    NonBooleanResult,
    TypeMismatch,
    UnresolvedIdentifier,
)
from booleval.expressions.parser import (
    ASTNode,
    BinaryOp,
    Identifier,
    Literal,
    LogicalOp,
    UnaryOp,
    parse,
)
from booleval.expressions.types import ValueType, classify

logger = logging.getLogger(__name__)

_CONDITION_TYPES = (ValueType.BOOL, ValueType.OBJECT)


@dataclass(frozen=True)
class ParameterSlot:
    """A positional input of a compiled expression."""

    name: str
    declared_type: ValueType


@dataclass(frozen=True)
class CompiledExpression:
    """An executable expression bound to a fixed parameter signature.

    Attributes:
        source: The expression text it was compiled from
        slots: Parameter slots, in binding order
        root: The checked AST
        result_type: BOOL, or OBJECT when the result is only known at run time
    """

    source: str
    slots: tuple[ParameterSlot, ...]
    root: ASTNode
    result_type: ValueType
    slot_index: Mapping[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "slot_index",
            MappingProxyType({slot.name: i for i, slot in enumerate(self.slots)}),
        )

    @property
    def parameter_names(self) -> tuple[str, ...]:
        return tuple(slot.name for slot in self.slots)


class TypeChecker:
    """Resolves identifiers against slots and infers node types.

    Usage:
        checker = TypeChecker({"x": ValueType.INT})
        result_type = checker.check(parse("x > 1"))
    """

    def __init__(self, slots: Mapping[str, ValueType]):
        self.slots = slots

    def check(self, node: ASTNode) -> ValueType:
        """Return the static type of a node, raising on binding/type errors."""
        method = getattr(self, f"_check_{type(node).__name__.lower()}")
        return method(node)

    def _check_literal(self, node: Literal) -> ValueType:
        return classify(node.value)

    def _check_identifier(self, node: Identifier) -> ValueType:
        if node.name not in self.slots:
            raise UnresolvedIdentifier(node.name)
        return self.slots[node.name]

    def _check_binaryop(self, node: BinaryOp) -> ValueType:
        # Comparisons accept any operand pair; incompatible pairs are unequal.
        self.check(node.left)
        self.check(node.right)
        return ValueType.BOOL

    def _check_logicalop(self, node: LogicalOp) -> ValueType:
        for operand in node.operands:
            self._require_condition(node.operator, self.check(operand))
        return ValueType.BOOL

    def _check_unaryop(self, node: UnaryOp) -> ValueType:
        operand = self.check(node.operand)

        if node.operator == "!":
            self._require_condition("!", operand)
            return ValueType.BOOL

        if not (operand.is_numeric or operand == ValueType.OBJECT):
            raise TypeMismatch(
                f"Operator '{node.operator}' requires a numeric operand, "
                f"got {operand.value}"
            )
        return operand

    def _require_condition(self, operator: str, operand: ValueType) -> None:
        if operand not in _CONDITION_TYPES:
            raise NonBooleanResult(
                f"Operator '{operator}' requires boolean operands, got {operand.value}",
                operand,
            )


def compile_expression(
    expression: str, typed_parameters: Mapping[str, ValueType]
) -> CompiledExpression:
    """Parse and type-check an expression against typed parameter slots.

    Args:
        expression: The expression string
        typed_parameters: Ordered mapping of parameter name to declared type.
            Every entry becomes a slot, whether or not it is referenced.

    Returns:
        The compiled expression

    Raises:
        MalformedExpression: If the expression does not parse
        UnresolvedIdentifier: If an identifier has no slot
        NonBooleanResult: If the expression does not produce a boolean
    """
    root = parse(expression)
    result_type = TypeChecker(typed_parameters).check(root)

    if result_type not in _CONDITION_TYPES:
        raise NonBooleanResult(
            f"Expression must evaluate to bool, got {result_type.value}",
            result_type,
        )

    slots = tuple(
        ParameterSlot(name, declared_type)
        for name, declared_type in typed_parameters.items()
    )
    logger.debug("Compiled %r with %d slot(s)", expression, len(slots))
    return CompiledExpression(expression, slots, root, result_type)
