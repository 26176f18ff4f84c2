import io

import pytest

from watsc.decl_parser import DeclarationParser
from watsc.diagnostics import CompilerContext, SourceLocation
from watsc.expressions import BinaryExpression, Number
from watsc.lexer import Lexer
from watsc.parser_base import ParseError
from watsc.statements import (
    VariableAssignment,
    VariableDeclaration,
    VariableDeclareAndAssign,
)


def make(source):
    context = CompilerContext(source)
    tokens = Lexer(context).tokenize()
    out = io.StringIO()
    return DeclarationParser(context, tokens, out), out


def test_declaration_without_type():
    parser, _ = make("let x;")
    result = parser.parse_variable_declaration()
    assert isinstance(result, VariableDeclaration)
    assert result.name == "x"
    assert result.type_name == ""
    assert result.locations[1] == SourceLocation(0, 0)
    assert not parser.has_errors()


@pytest.mark.parametrize("type_name", ["i32", "i64", "f32", "f64"])
def test_declaration_with_type(type_name):
    parser, _ = make(f"let x: {type_name};")
    result = parser.parse_variable_declaration()
    assert result.name == "x"
    assert result.type_name == type_name
    assert result.type_location == parser.tokens[3].location
    assert result.var_location == parser.tokens[1].location
    assert not parser.has_errors()


def test_declaration_missing_type_reports():
    parser, out = make("let x: ;")
    assert parser.parse_variable_declaration() is None
    assert parser.has_errors()
    assert "Consider mentioning the type of the variable" in out.getvalue()


def test_declaration_missing_semicolon_suggests_fix():
    parser, out = make("let x\n")
    assert parser.parse_variable_declaration() is None
    assert parser.has_errors()
    assert "Did You Mean?" in out.getvalue()
    assert "Expected a ';' here." in out.getvalue()


def test_declaration_keyword_as_name():
    parser, out = make("let if;")
    assert parser.parse_variable_declaration() is None
    assert "is a keyword, it cannot be used as a variable name." in out.getvalue()


def test_declaration_needs_let():
    parser, _ = make("x;")
    assert parser.parse_variable_declaration() is None
    assert not parser.has_errors()


def test_assignment_of_number():
    parser, _ = make("x = 5;")
    result = parser.parse_variable_assignment()
    assert isinstance(result, VariableAssignment)
    assert result.name == "x"
    assert isinstance(result.expr, Number)
    assert result.expr.text == "5"
    assert result.location == parser.tokens[0].location


def test_assignment_of_binary_expression():
    parser, _ = make("x = 1 + y;")
    result = parser.parse_variable_assignment()
    assert isinstance(result.expr, BinaryExpression)
    assert result.expr.operator_symbol == "+"
    assert not parser.has_errors()


def test_assignment_without_value_raises():
    parser, _ = make("x = ;")
    with pytest.raises(ParseError):
        parser.parse_variable_assignment()


def test_assignment_without_assign_is_not_assignment():
    parser, _ = make("x 5;")
    assert parser.parse_variable_assignment() is None
    assert not parser.has_errors()


def test_assignment_missing_semicolon():
    parser, out = make("x = 5\n")
    assert parser.parse_variable_assignment() is None
    assert "Expected a ';' here." in out.getvalue()


def test_init_with_let():
    parser, _ = make("let a = 3;")
    result = parser.parse_variable_init_with_let()
    assert isinstance(result, VariableDeclareAndAssign)
    assert result.name == "a"
    assert result.type_name == ""
    assert result.locations[0] == result.locations[1]
    assert result.expr.text == "3"


def test_init_with_let_missing_value():
    parser, out = make("let a = ;")
    assert parser.parse_variable_init_with_let() is None
    assert parser.has_errors()
    assert "Expected an value or expression for the assignment" in out.getvalue()


def test_init_with_let_missing_semicolon():
    parser, _ = make("let a = 3\n")
    assert parser.parse_variable_init_with_let() is None
    assert parser.has_errors()


def test_init_with_let_without_assign_is_silent():
    parser, _ = make("let a;")
    assert parser.parse_variable_init_with_let() is None
    assert not parser.has_errors()


def test_init_with_type():
    parser, _ = make("let a: i64 = 3;")
    result = parser.parse_variable_init_with_type()
    assert result.name == "a"
    assert result.type_name == "i64"
    assert result.locations == [parser.tokens[1].location, parser.tokens[3].location]


def test_init_with_type_without_assign_is_silent():
    parser, _ = make("let a: i64;")
    assert parser.parse_variable_init_with_type() is None
    assert not parser.has_errors()


def test_init_with_type_keyword_name():
    parser, out = make("let while: i64 = 3;")
    assert parser.parse_variable_init_with_type() is None
    assert "'while' is a keyword" in out.getvalue()