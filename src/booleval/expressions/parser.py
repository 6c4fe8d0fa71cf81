"""Parser for the booleval expression language.

Converts a stream of tokens into an Abstract Syntax Tree (AST).
Uses recursive descent parsing with operator precedence.

Operator Precedence (lowest to highest):
1. || (or)
2. && (and)
3. == != < <= > >=
4. ! (not) - (unary)

Runs of the same logical operator become a single n-ary LogicalOp, so
`a || b || c || ...` stays flat however long it is. Genuine nesting
(parentheses, stacked unary operators, chained comparisons) is limited to
MAX_NESTING_DEPTH levels.
"""

from dataclasses import dataclass
from typing import Any, Callable, Iterator

from booleval.expressions.errors import MalformedExpression
from booleval.expressions.lexer import Lexer, Token, TokenType

MAX_NESTING_DEPTH = 50


# -----------------------------------------------------------------------------
# AST Node Types
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class ASTNode:
    """Base class for AST nodes."""
    pass


@dataclass(frozen=True)
class Literal(ASTNode):
    """A literal value (number, string, boolean, null)."""
    value: Any


@dataclass(frozen=True)
class Identifier(ASTNode):
    """A parameter reference."""
    name: str


@dataclass(frozen=True)
class BinaryOp(ASTNode):
    """Comparison (e.g., x == y, a < b)."""
    operator: str
    left: ASTNode
    right: ASTNode


@dataclass(frozen=True)
class LogicalOp(ASTNode):
    """Chain of one logical operator over two or more operands (a && b && c)."""
    operator: str
    operands: tuple[ASTNode, ...]


@dataclass(frozen=True)
class UnaryOp(ASTNode):
    """Unary operation (e.g., !x, -y)."""
    operator: str
    operand: ASTNode


COMPARISON_OPERATORS = {
    TokenType.EQ: "==",
    TokenType.NEQ: "!=",
    TokenType.LT: "<",
    TokenType.LTE: "<=",
    TokenType.GT: ">",
    TokenType.GTE: ">=",
}

UNARY_OPERATORS = {
    TokenType.NOT: "!",
    TokenType.MINUS: "-",
}

LITERAL_TOKENS = frozenset(
    {TokenType.NUMBER, TokenType.STRING, TokenType.BOOLEAN, TokenType.NULL}
)


def iter_children(node: ASTNode) -> Iterator[ASTNode]:
    """Yield the direct children of a node, left to right."""
    if isinstance(node, BinaryOp):
        yield node.left
        yield node.right
    elif isinstance(node, LogicalOp):
        yield from node.operands
    elif isinstance(node, UnaryOp):
        yield node.operand


# -----------------------------------------------------------------------------
# Parser
# -----------------------------------------------------------------------------


class ParseError(MalformedExpression):
    """Error during parsing."""

    def __init__(self, message: str, token: Token):
        self.token = token
        super().__init__(f"{message} at position {token.position}", token.position)


class Parser:
    """Recursive descent parser for the expression language.

    Usage:
        parser = Parser('status == "active" && count > 0')
        ast = parser.parse()
    """

    def __init__(self, source: str):
        self.source = source
        self.tokens = Lexer(source).tokenize()
        self.position = 0
        self.depth = 0

    def parse(self) -> ASTNode:
        """Parse the expression and return the AST root."""
        if self.tokens[0].type == TokenType.EOF:
            raise ParseError("Empty expression", self.tokens[0])

        ast = self._parse_or()

        if self._current().type != TokenType.EOF:
            raise ParseError(
                f"Unexpected token '{self._current().value}'",
                self._current(),
            )

        self._check_depth(ast)
        return ast

    # -------------------------------------------------------------------------
    # Helper methods
    # -------------------------------------------------------------------------

    def _current(self) -> Token:
        """Get current token."""
        return self.tokens[min(self.position, len(self.tokens) - 1)]

    def _advance(self) -> Token:
        """Consume and return current token."""
        token = self._current()
        self.position += 1
        return token

    def _expect(self, token_type: TokenType, message: str) -> Token:
        """Consume a token of the expected type, or raise error."""
        if self._current().type != token_type:
            raise ParseError(message, self._current())
        return self._advance()

    def _nested(self, parse_inner: Callable[[], ASTNode]) -> ASTNode:
        """Run a recursive parse step one nesting level deeper."""
        if self.depth >= MAX_NESTING_DEPTH:
            raise ParseError("Expression nested too deeply", self._current())
        self.depth += 1
        node = parse_inner()
        self.depth -= 1
        return node

    def _check_depth(self, root: ASTNode) -> None:
        """Reject trees deeper than MAX_NESTING_DEPTH.

        Comparison chains nest without parser recursion, so the finished
        tree is measured as well.
        """
        stack = [(root, 1)]
        while stack:
            node, depth = stack.pop()
            if depth > MAX_NESTING_DEPTH:
                raise ParseError("Expression nested too deeply", self.tokens[0])
            stack.extend((child, depth + 1) for child in iter_children(node))

    # -------------------------------------------------------------------------
    # Parsing methods (in order of precedence, lowest to highest)
    # -------------------------------------------------------------------------

    def _parse_or(self) -> ASTNode:
        """Parse OR chain (lowest precedence)."""
        return self._parse_chain(TokenType.OR, "||", self._parse_and)

    def _parse_and(self) -> ASTNode:
        """Parse AND chain."""
        return self._parse_chain(TokenType.AND, "&&", self._parse_comparison)

    def _parse_chain(
        self,
        token_type: TokenType,
        operator: str,
        parse_operand: Callable[[], ASTNode],
    ) -> ASTNode:
        operands = [parse_operand()]
        while self._current().type == token_type:
            self._advance()
            operands.append(parse_operand())

        if len(operands) == 1:
            return operands[0]
        return LogicalOp(operator, tuple(operands))

    def _parse_comparison(self) -> ASTNode:
        """Parse comparison expression (==, !=, <, <=, >, >=)."""
        left = self._parse_unary()

        while self._current().type in COMPARISON_OPERATORS:
            op = COMPARISON_OPERATORS[self._advance().type]
            left = BinaryOp(op, left, self._parse_unary())

        return left

    def _parse_unary(self) -> ASTNode:
        """Parse unary expression (!, not, -)."""
        op = UNARY_OPERATORS.get(self._current().type)
        if op is None:
            return self._parse_primary()

        self._advance()
        return UnaryOp(op, self._nested(self._parse_unary))

    def _parse_primary(self) -> ASTNode:
        """Parse primary expression (literals, identifiers, grouped expressions)."""
        token = self._current()

        if token.type in LITERAL_TOKENS:
            self._advance()
            return Literal(token.value)

        if token.type == TokenType.IDENTIFIER:
            self._advance()
            return Identifier(str(token.value))

        if token.type == TokenType.LPAREN:
            self._advance()
            expr = self._nested(self._parse_or)
            self._expect(TokenType.RPAREN, "Expected ')' after expression")
            return expr

        if token.type == TokenType.EOF:
            raise ParseError("Unexpected end of expression", token)

        raise ParseError(f"Unexpected token '{token.value}'", token)


def parse(source: str) -> ASTNode:
    """Convenience function to parse an expression string.

    Args:
        source: The expression string

    Returns:
        The AST root node

    Raises:
        MalformedExpression: If the source does not tokenize or parse, or
            nests deeper than MAX_NESTING_DEPTH
    """
    return Parser(source).parse()
