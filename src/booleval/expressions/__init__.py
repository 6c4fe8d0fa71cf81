"""Expression language for booleval.

This module provides:
- Lexer: Tokenizes expression strings
- Parser: Produces AST from tokens
- detect_identifiers: Lists the free identifiers of an expression
- compile_expression: Type-checks an AST against typed parameter slots
- execute_compiled: Evaluates a compiled expression with bound values
"""

from booleval.expressions.compiler import (
    CompiledExpression,
    ParameterSlot,
    TypeChecker,
    compile_expression,
)
from booleval.expressions.errors import (
    ArityMismatch,
    ExpressionError,
    MalformedExpression,
    NonBooleanResult,
    TypeMismatch,
    UnresolvedIdentifier,
)
from booleval.expressions.executor import Executor, execute_compiled
from booleval.expressions.lexer import Lexer, LexerError, Token, TokenType
from booleval.expressions.parser import (
    ASTNode,
    BinaryOp,
    Identifier,
    MAX_NESTING_DEPTH,
    Literal,
    LogicalOp,
    ParseError,
    Parser,
    UnaryOp,
    parse,
)
from booleval.expressions.scanner import detect_identifiers
from booleval.expressions.types import ValueType, classify, infer_type

__all__ = [
    # Compiler
    "CompiledExpression",
    "ParameterSlot",
    "TypeChecker",
    "compile_expression",
    # Errors
    "ArityMismatch",
    "ExpressionError",
    "MalformedExpression",
    "NonBooleanResult",
    "TypeMismatch",
    "UnresolvedIdentifier",
    # Executor
    "Executor",
    "execute_compiled",
    # Lexer
    "Lexer",
    "LexerError",
    "Token",
    "TokenType",
    # Parser
    "ASTNode",
    "BinaryOp",
    "Identifier",
    "Literal",
    "LogicalOp",
    "MAX_NESTING_DEPTH",
    "ParseError",
    "Parser",
    "UnaryOp",
    "parse",
    # Scanner
    "detect_identifiers",
    # Types
    "ValueType",
    "classify",
    "infer_type",
]
