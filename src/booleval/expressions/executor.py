"""Executor for compiled booleval expressions.

Binds concrete values to the slots of a CompiledExpression and walks the
checked tree to a boolean. The walk is recursive; the parser bounds tree
depth at MAX_NESTING_DEPTH, and logical chains are flat n-ary nodes.
"""

from typing import Any, Sequence

from booleval.expressions.compiler import CompiledExpression
from booleval.expressions.errors import ArityMismatch, TypeMismatch
from booleval.expressions.parser import (
    ASTNode,
    BinaryOp,
    Identifier,
    Literal,
    LogicalOp,
    UnaryOp,
)
from booleval.expressions.types import classify, compare, equals, is_assignable


class Executor:
    """Evaluates a compiled expression's tree against bound values.

    Usage:
        executor = Executor(compiled, [1, "a"])
        result = executor.run()
    """

    def __init__(self, compiled: CompiledExpression, values: Sequence[Any]):
        if len(values) != len(compiled.slots):
            raise ArityMismatch(len(compiled.slots), len(values))

        for slot, value in zip(compiled.slots, values):
            if not is_assignable(value, slot.declared_type):
                raise TypeMismatch(
                    f"Parameter '{slot.name}' declared {slot.declared_type.value}, "
                    f"got {classify(value).value}"
                )

        self.compiled = compiled
        self.values = tuple(values)

    def run(self) -> bool:
        """Evaluate the whole expression.

        An absent (None) result evaluates to False.
        """
        result = self.evaluate(self.compiled.root)
        if result is None:
            return False
        if isinstance(result, bool):
            return result
        raise TypeMismatch(
            f"Expression produced {classify(result).value}, expected bool"
        )

    def evaluate(self, node: ASTNode) -> Any:
        """Evaluate an AST node and return the result."""
        method = getattr(self, f"_eval_{type(node).__name__.lower()}")
        return method(node)

    # -------------------------------------------------------------------------
    # Node type evaluators
    # -------------------------------------------------------------------------

    def _eval_literal(self, node: Literal) -> Any:
        return node.value

    def _eval_identifier(self, node: Identifier) -> Any:
        return self.values[self.compiled.slot_index[node.name]]

    def _eval_logicalop(self, node: LogicalOp) -> bool:
        # Short-circuit: the first operand equal to `decisive` settles the chain
        decisive = node.operator == "||"
        for operand in node.operands:
            if self._condition(node.operator, self.evaluate(operand)) is decisive:
                return decisive
        return not decisive

    def _eval_binaryop(self, node: BinaryOp) -> bool:
        op = node.operator
        left = self.evaluate(node.left)
        right = self.evaluate(node.right)

        if op == "==":
            return equals(left, right)
        if op == "!=":
            return not equals(left, right)

        order = compare(left, right)
        if order is None:
            return False
        if op == "<":
            return order < 0
        if op == "<=":
            return order <= 0
        if op == ">":
            return order > 0
        return order >= 0

    def _eval_unaryop(self, node: UnaryOp) -> Any:
        operand = self.evaluate(node.operand)

        if node.operator == "!":
            return not self._condition("!", operand)

        if operand is None:
            return None
        if not classify(operand).is_numeric:
            raise TypeMismatch(
                f"Cannot negate non-numeric value of type {classify(operand).value}"
            )
        return -operand

    def _condition(self, operator: str, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        raise TypeMismatch(
            f"Operator '{operator}' requires a boolean operand, "
            f"got {classify(value).value}"
        )


def execute_compiled(compiled: CompiledExpression, values: Sequence[Any]) -> bool:
    """Execute a compiled expression with values bound positionally to its slots.

    Raises:
        ArityMismatch: If the number of values differs from the slot count
        TypeMismatch: If a value does not fit its slot, or an operator
            receives an operand it cannot handle
    """
    return Executor(compiled, values).run()
