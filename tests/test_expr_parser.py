import io

import pytest

from watsc.diagnostics import CompilerContext
from watsc.expr_parser import ExpressionParser
from watsc.expressions import (
    BinaryExpression,
    FunctionCallExpression,
    Identifier,
    Number,
    Range,
)
from watsc.lexer import Lexer
from watsc.parser_base import ParseError


def make(source):
    context = CompilerContext(source)
    tokens = Lexer(context).tokenize()
    out = io.StringIO()
    return ExpressionParser(context, tokens, out), out


def test_simple_binary_expression():
    parser, _ = make("1 + 2")
    expr = parser.parse_expression()
    assert isinstance(expr, BinaryExpression)
    assert expr.operator_symbol == "+"
    assert isinstance(expr.lhs, Number) and expr.lhs.text == "1"
    assert isinstance(expr.rhs, Number) and expr.rhs.text == "2"
    assert parser.has_errors() is False


def test_binary_expressions_nest_to_the_right():
    parser, _ = make("1 - 2 - 3")
    expr = parser.parse_expression()
    assert expr.lhs.text == "1"
    assert isinstance(expr.rhs, BinaryExpression)
    assert expr.rhs.lhs.text == "2"
    assert expr.rhs.rhs.text == "3"


def test_identifier_alone():
    parser, _ = make("count")
    expr = parser.parse_expression()
    assert isinstance(expr, Identifier)
    assert expr.name == "count"


def test_binary_locations_hold_operands_and_operator():
    parser, _ = make("a + b")
    expr = parser.parse_expression()
    assert len(expr.locations) == 3
    assert expr.locations[0] == expr.lhs.location
    assert expr.locations[1] == expr.operator.location
    assert expr.locations[2] == expr.rhs.location


@pytest.mark.parametrize("op", ["+", "-", "*", "/", "%", "<", ">=", "<=", "==", "!="])
def test_every_operator_symbol(op):
    parser, _ = make(f"x {op} y")
    expr = parser.parse_expression()
    assert expr.operator_symbol == op
    assert expr.rhs.name == "y"


def test_function_call_with_parameters():
    parser, _ = make("f(1, y)")
    expr = parser.parse_expression()
    assert isinstance(expr, FunctionCallExpression)
    assert expr.name == "f"
    params = expr.arguments.parameters
    assert [type(p) for p in params] == [Number, Identifier]


def test_function_call_without_parameters_cannot_parse():
    parser, _ = make("f()")
    with pytest.raises(ParseError):
        parser.parse_expression()


def test_unclosed_call_reports_error():
    parser, out = make("f(1")
    assert parser.parse_expression() is None
    assert parser.has_errors() is True
    assert "Expected a closing pair ')'" in out.getvalue()


def test_braced_expression():
    parser, _ = make("(a * b)")
    expr = parser.parse_expression()
    assert isinstance(expr, BinaryExpression)
    assert expr.operator_symbol == "*"


def test_braced_expression_stops_at_closing_parenthesis():
    parser, _ = make("(1) + 2")
    expr = parser.parse_expression()
    assert isinstance(expr, Number)
    assert expr.text == "1"


def test_unclosed_brace_suggests_fix():
    parser, out = make("(1 + 2")
    assert parser.parse_expression() is None
    assert parser.has_errors() is True
    assert "Did You Mean?" in out.getvalue()
    assert "(1 + 2 )" in out.getvalue()


def test_decimal_number():
    parser, _ = make("1.5")
    expr = parser.parse_expression()
    assert expr.has_decimal is True
    assert expr.text == "1.5"


def test_too_many_decimal_points():
    parser, out = make("1.2.3")
    assert parser.parse_expression() is None
    assert parser.has_errors() is True
    assert "Too many decimal points in a numerical value" in out.getvalue()


def test_missing_right_operand_raises():
    parser, _ = make("1 +")
    with pytest.raises(ParseError):
        parser.parse_expression()


def test_empty_input_gives_nothing():
    parser, _ = make("")
    assert parser.parse_expression() is None
    assert parser.has_errors() is False


def test_range():
    parser, _ = make("1 to 10")
    rng = parser.parse_range()
    assert isinstance(rng, Range)
    assert rng.start.text == "1"
    assert rng.end.text == "10"
    assert rng.locations == [rng.start.location, rng.end.location]
    assert parser.has_errors() is False


def test_range_without_to_reports_and_continues():
    parser, out = make("1 10")
    rng = parser.parse_range()
    assert rng.end.text == "10"
    assert parser.has_errors() is True
    assert "Expected the 'to' keyword." in out.getvalue()
    assert "1 to 10" in out.getvalue()


def test_range_without_start_raises():
    parser, _ = make("to 5")
    with pytest.raises(ParseError):
        parser.parse_range()


def test_range_without_end_raises():
    parser, _ = make("1 to")
    with pytest.raises(ParseError):
        parser.parse_range()