import io

from watsc.diagnostics import CompilerContext
from watsc.expressions import BinaryExpression, Identifier, Number
from watsc.lexer import Lexer
from watsc.parser import Parser
from watsc.statements import (
    BreakStatement,
    ForLoop,
    FunctionDefinition,
    IfStatement,
    Loop,
    MatchStatement,
    VariableAssignment,
    VariableDeclareAndAssign,
    WhileLoop,
)


def make_parser(source):
    context = CompilerContext(source)
    tokens = Lexer(context).tokenize()
    out = io.StringIO()
    return Parser(context, tokens, out), out


def parse(source):
    parser, out = make_parser(source)
    return parser.parse(), parser, out


def test_empty_source_parses_to_nothing():
    statements, parser, _ = parse("")
    assert statements == []
    assert not parser.has_errors()


def test_top_level_let_with_type():
    statements, parser, _ = parse("let x: i64 = 3;")
    assert len(statements) == 1
    stmt = statements[0]
    assert isinstance(stmt, VariableDeclareAndAssign)
    assert stmt.name == "x"
    assert stmt.type_name == "i64"
    assert not parser.has_errors()


def test_for_loop_inside_function():
    source = "function main() {\n for i in 1 to 10 {\n let x = i;\n }\n}"
    statements, parser, _ = parse(source)
    assert not parser.has_errors()
    assert len(statements) == 1
    fn = statements[0]
    assert isinstance(fn, FunctionDefinition)
    assert fn.function_name == "main"
    loop = fn.body[0]
    assert isinstance(loop, ForLoop)
    assert loop.iteration_variable_name == "i"
    assert isinstance(loop.range.start, Number)
    assert loop.range.start.text == "1"
    assert loop.range.end.text == "10"
    assert isinstance(loop.body[0], VariableDeclareAndAssign)


def test_while_loop_with_break():
    source = "function f() {\n while x < 3 {\n break;\n }\n}"
    statements, parser, _ = parse(source)
    assert not parser.has_errors()
    loop = statements[0].body[0]
    assert isinstance(loop, WhileLoop)
    assert isinstance(loop.condition, BinaryExpression)
    assert loop.condition.operator_symbol == "<"
    assert isinstance(loop.body[0], BreakStatement)


def test_loop_with_break():
    statements, parser, _ = parse("function f() {\n loop {\n break;\n }\n}")
    assert not parser.has_errors()
    loop = statements[0].body[0]
    assert isinstance(loop, Loop)
    assert len(loop.body) == 1
    assert isinstance(loop.body[0], BreakStatement)


def test_break_nested_in_if_inside_loop():
    source = "function f() {\n loop {\n if a {\n break;\n }\n }\n}"
    statements, parser, _ = parse(source)
    assert not parser.has_errors()
    if_stmt = statements[0].body[0].body[0]
    assert isinstance(if_stmt, IfStatement)
    assert isinstance(if_stmt.condition, Identifier)
    assert isinstance(if_stmt.body[0], BreakStatement)


def test_if_else_if_else_chain():
    source = (
        "function f() {\n if a == 1 {\n b = 2;\n } else if a == 2 {\n b = 3;\n }"
        " else {\n b = 4;\n }\n}"
    )
    statements, parser, _ = parse(source)
    assert not parser.has_errors()
    if_stmt = statements[0].body[0]
    assert isinstance(if_stmt, IfStatement)
    assert if_stmt.has_else_if()
    assert if_stmt.has_else()
    assert len(if_stmt.else_ifs) == 1
    assert isinstance(if_stmt.body[0], VariableAssignment)
    assert if_stmt.else_ifs[0].body[0].expr.text == "3"
    assert if_stmt.else_statement.body[0].expr.text == "4"


def test_if_without_else():
    statements, parser, _ = parse("function f() {\n if a {\n b = 1;\n }\n}")
    assert not parser.has_errors()
    if_stmt = statements[0].body[0]
    assert not if_stmt.has_else()
    assert not if_stmt.has_else_if()


def test_match_statement_arms():
    source = (
        "function f() {\n match x {\n 1 => {\n y = 1;\n }\n 2 => {\n y = 2;\n }\n }\n}"
    )
    statements, parser, _ = parse(source)
    assert not parser.has_errors()
    match = statements[0].body[0]
    assert isinstance(match, MatchStatement)
    assert isinstance(match.condition, Identifier)
    assert [arm.condition.text for arm in match.arms] == ["1", "2"]
    assert all(len(arm.body) == 1 for arm in match.arms)


def test_loop_outside_function_is_an_error():
    statements, parser, out = parse("loop {\n}")
    assert parser.has_errors()
    assert statements == []
    assert "A 'loop' must be inside a function definition" in out.getvalue()


def test_break_outside_loop_is_an_error():
    _, parser, out = parse("function f() {\n break;\n}")
    assert parser.has_errors()
    assert "'break' not within a loop body" in out.getvalue()


def test_nested_function_is_an_error():
    _, parser, out = parse("function f() {\n function g() {\n }\n}")
    assert parser.has_errors()
    assert "You cannot define a function inside another function" in out.getvalue()


def test_parse_statement_returns_none_on_closing_brace():
    parser, _ = make_parser("}")
    assert parser.parse_statement() is None
    assert not parser.has_errors()


def test_parse_statements_stops_at_unknown():
    parser, _ = make_parser("let a = 1;\nlet b = 2;\n}")
    statements = parser.parse_statements()
    assert [stmt.name for stmt in statements] == ["a", "b"]