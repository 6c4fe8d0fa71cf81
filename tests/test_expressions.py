"""Tests for the booleval expression language front end.

Tests cover:
- Lexer: Tokenization of expression strings
- Parser: AST generation from tokens
- Scanner: Free identifier detection
"""

import pytest

from booleval.expressions import (
    BinaryOp,
    Identifier,
    Lexer,
    LexerError,
    Literal,
    LogicalOp,
    MAX_NESTING_DEPTH,
    MalformedExpression,
    ParseError,
    Token,
    TokenType,
    UnaryOp,
    detect_identifiers,
    parse,
)


# =============================================================================
# Lexer Tests
# =============================================================================


class TestLexer:
    """Tests for the expression lexer."""

    def test_tokenize_numbers(self):
        lexer = Lexer("42 3.14 0 100")
        tokens = lexer.tokenize()

        assert tokens[0] == Token(TokenType.NUMBER, 42, 0, 1, 1)
        assert tokens[1] == Token(TokenType.NUMBER, 3.14, 3, 1, 4)
        assert tokens[2] == Token(TokenType.NUMBER, 0, 8, 1, 9)
        assert tokens[3] == Token(TokenType.NUMBER, 100, 10, 1, 11)

    def test_tokenize_strings(self):
        lexer = Lexer('"hello" \'world\'')
        tokens = lexer.tokenize()

        assert tokens[0].type == TokenType.STRING
        assert tokens[0].value == "hello"
        assert tokens[1].type == TokenType.STRING
        assert tokens[1].value == "world"

    def test_tokenize_string_escapes(self):
        lexer = Lexer(r'"hello\nworld" "tab\there" "say \"hi\""')
        tokens = lexer.tokenize()

        assert tokens[0].value == "hello\nworld"
        assert tokens[1].value == "tab\there"
        assert tokens[2].value == 'say "hi"'

    def test_tokenize_booleans(self):
        lexer = Lexer("true false TRUE False")
        tokens = lexer.tokenize()

        assert tokens[0] == Token(TokenType.BOOLEAN, True, 0, 1, 1)
        assert tokens[1] == Token(TokenType.BOOLEAN, False, 5, 1, 6)
        assert tokens[2] == Token(TokenType.BOOLEAN, True, 11, 1, 12)
        assert tokens[3] == Token(TokenType.BOOLEAN, False, 16, 1, 17)

    def test_tokenize_null(self):
        lexer = Lexer("null NULL")
        tokens = lexer.tokenize()

        assert tokens[0].type == TokenType.NULL
        assert tokens[0].value is None
        assert tokens[1].type == TokenType.NULL

    def test_tokenize_identifiers(self):
        lexer = Lexer("status firstName _private var123")
        tokens = lexer.tokenize()

        assert tokens[0] == Token(TokenType.IDENTIFIER, "status", 0, 1, 1)
        assert tokens[1] == Token(TokenType.IDENTIFIER, "firstName", 7, 1, 8)
        assert tokens[2] == Token(TokenType.IDENTIFIER, "_private", 17, 1, 18)
        assert tokens[3] == Token(TokenType.IDENTIFIER, "var123", 26, 1, 27)

    def test_tokenize_comparison_operators(self):
        lexer = Lexer("== != < <= > >=")
        tokens = lexer.tokenize()

        types = [t.type for t in tokens[:-1]]  # Exclude EOF
        assert types == [
            TokenType.EQ,
            TokenType.NEQ,
            TokenType.LT,
            TokenType.LTE,
            TokenType.GT,
            TokenType.GTE,
        ]

    def test_tokenize_logical_operators(self):
        lexer = Lexer("&& || ! and or not")
        tokens = lexer.tokenize()

        types = [t.type for t in tokens[:-1]]
        assert types == [
            TokenType.AND,
            TokenType.OR,
            TokenType.NOT,
            TokenType.AND,
            TokenType.OR,
            TokenType.NOT,
        ]

    def test_tokenize_complex_expression(self):
        lexer = Lexer('status == "active" && count > 0')
        tokens = lexer.tokenize()

        types = [t.type for t in tokens[:-1]]
        assert types == [
            TokenType.IDENTIFIER,  # status
            TokenType.EQ,          # ==
            TokenType.STRING,      # "active"
            TokenType.AND,         # &&
            TokenType.IDENTIFIER,  # count
            TokenType.GT,          # >
            TokenType.NUMBER,      # 0
        ]

    def test_tracks_lines_and_columns(self):
        tokens = Lexer("a ==\n  b").tokenize()

        assert tokens[2] == Token(TokenType.IDENTIFIER, "b", 7, 2, 3)

    def test_ends_with_eof(self):
        tokens = Lexer("").tokenize()

        assert [t.type for t in tokens] == [TokenType.EOF]

    @pytest.mark.parametrize("source", ["status @ value", "a = b", "x + 1", "[1]"])
    def test_lexer_error_on_invalid_character(self, source):
        with pytest.raises(LexerError):
            Lexer(source).tokenize()

    def test_lexer_error_is_malformed_expression(self):
        with pytest.raises(MalformedExpression) as exc_info:
            Lexer("status @ value").tokenize()
        assert "@" in str(exc_info.value)
        assert exc_info.value.position == 7


# =============================================================================
# Parser Tests
# =============================================================================


class TestParser:
    """Tests for the expression parser."""

    def test_parse_literal_number(self):
        ast = parse("42")
        assert ast == Literal(42)

    def test_parse_literal_decimal(self):
        ast = parse("2.5")
        assert ast == Literal(2.5)

    def test_parse_literal_string(self):
        ast = parse('"hello"')
        assert ast == Literal("hello")

    def test_parse_literal_boolean(self):
        ast = parse("true")
        assert isinstance(ast, Literal)
        assert ast.value is True

    def test_parse_literal_null(self):
        ast = parse("null")
        assert isinstance(ast, Literal)
        assert ast.value is None

    def test_parse_identifier(self):
        ast = parse("status")
        assert ast == Identifier("status")

    def test_parse_comparison(self):
        ast = parse("x == 5")
        assert isinstance(ast, BinaryOp)
        assert ast.operator == "=="
        assert ast.left == Identifier("x")
        assert ast.right == Literal(5)

    @pytest.mark.parametrize("op", ["==", "!=", "<", "<=", ">", ">="])
    def test_parse_all_comparison_operators(self, op):
        ast = parse(f"a {op} b")
        assert ast == BinaryOp(op, Identifier("a"), Identifier("b"))

    def test_parse_logical_and(self):
        ast = parse("a && b")
        assert ast == LogicalOp("&&", (Identifier("a"), Identifier("b")))

    def test_parse_logical_or(self):
        ast = parse("a || b")
        assert isinstance(ast, LogicalOp)
        assert ast.operator == "||"

    def test_parse_same_operator_chain_is_flat(self):
        ast = parse("a || b || c || d")
        assert ast == LogicalOp(
            "||", tuple(Identifier(name) for name in ("a", "b", "c", "d"))
        )

    def test_parse_keyword_forms(self):
        assert parse("a and not b or c") == parse("a && !b || c")

    def test_parse_unary_not(self):
        ast = parse("!active")
        assert isinstance(ast, UnaryOp)
        assert ast.operator == "!"
        assert isinstance(ast.operand, Identifier)

    def test_parse_unary_negative(self):
        ast = parse("-5")
        assert ast == UnaryOp("-", Literal(5))

    def test_parse_and_binds_tighter_than_or(self):
        ast = parse("a || b && c")
        assert ast.operator == "||"
        assert isinstance(ast.operands[1], LogicalOp)
        assert ast.operands[1].operator == "&&"

    def test_parse_comparison_binds_tighter_than_and(self):
        ast = parse("a == 1 && b > 2")
        assert ast.operator == "&&"
        assert [operand.operator for operand in ast.operands] == ["==", ">"]

    def test_parse_grouped_expression(self):
        ast = parse("(a || b) && c")
        assert isinstance(ast, LogicalOp)
        assert ast.operator == "&&"
        assert ast.operands[0] == LogicalOp("||", (Identifier("a"), Identifier("b")))

    def test_parse_complex_expression(self):
        ast = parse('status == "active" && (count > 0 || priority == "high")')
        assert isinstance(ast, LogicalOp)
        assert ast.operator == "&&"
        assert len(ast.operands) == 2

    def test_parse_long_or_chain(self):
        source = " || ".join(f"id == {i}" for i in range(2000))
        ast = parse(source)

        assert isinstance(ast, LogicalOp)
        assert len(ast.operands) == 2000

    def test_nesting_within_limit(self):
        depth = MAX_NESTING_DEPTH - 1
        ast = parse("(" * depth + "x == 1" + ")" * depth)
        assert ast == BinaryOp("==", Identifier("x"), Literal(1))

    @pytest.mark.parametrize(
        "source",
        [
            "!" * 1500 + "true",
            "(" * 1500 + "x" + ")" * 1500,
            "-" * 1500 + "1 < 0",
            " == ".join(["true"] * (MAX_NESTING_DEPTH + 2)),
        ],
    )
    def test_nested_too_deeply(self, source):
        with pytest.raises(MalformedExpression) as exc_info:
            parse(source)
        assert "nested too deeply" in str(exc_info.value)

    def test_ast_is_immutable(self):
        ast = parse("x")
        with pytest.raises(AttributeError):
            ast.name = "y"

    @pytest.mark.parametrize(
        "source",
        ["status ==", "(a == b", "a == b)", "a b", "&& a", "()"],
    )
    def test_parse_error_on_invalid_syntax(self, source):
        with pytest.raises(ParseError):
            parse(source)

    def test_parse_error_on_empty_expression(self):
        with pytest.raises(ParseError):
            parse("")

    def test_parse_error_on_whitespace_only(self):
        with pytest.raises(ParseError):
            parse("   ")

    def test_triple_equals_is_malformed(self):
        with pytest.raises(MalformedExpression):
            parse("1 ===")


# =============================================================================
# Scanner Tests
# =============================================================================


class TestDetectIdentifiers:
    """Tests for free identifier detection."""

    def test_no_identifiers(self):
        assert detect_identifiers("1 == 1") == ()

    def test_single_identifier(self):
        assert detect_identifiers("1 == x") == ("x",)

    def test_first_seen_order(self):
        assert detect_identifiers("b > 1 && a < 2 || c") == ("b", "a", "c")

    def test_duplicates_removed(self):
        assert detect_identifiers("x > 1 && x < 5 && (y || x == 3)") == ("x", "y")

    def test_keywords_are_not_identifiers(self):
        assert detect_identifiers("flag == true and not other or x == null") == (
            "flag",
            "other",
            "x",
        )

    def test_identifiers_are_case_sensitive(self):
        assert detect_identifiers("X == x") == ("X", "x")

    def test_string_contents_are_not_identifiers(self):
        assert detect_identifiers('name == "x"') == ("name",)

    def test_identifier_under_unary(self):
        assert detect_identifiers("!enabled && -n < 0") == ("enabled", "n")

    def test_deterministic(self):
        expression = "c == 1 || b == 2 || a == 3"
        assert detect_identifiers(expression) == detect_identifiers(expression)

    def test_malformed_expression_raises(self):
        with pytest.raises(MalformedExpression):
            detect_identifiers("1 ===")

    def test_long_or_chain(self):
        expression = " || ".join(f"v{i % 10} == {i}" for i in range(2000))

        assert detect_identifiers(expression) == tuple(f"v{i}" for i in range(10))
