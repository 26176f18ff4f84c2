import io

import pytest

from watsc.diagnostics import CompilerContext, SourceLocation, colorize
from watsc.lexer import Lexer
from watsc.parser_base import ParseError, ParserBase, ParserStatus


def make(source):
    context = CompilerContext(source)
    tokens = Lexer(context).tokenize()
    out = io.StringIO()
    return ParserBase(context, tokens, out), out


def test_fresh_parser_has_no_errors():
    parser, _ = make("let x = 5;")
    assert parser.has_errors() is False


def test_has_errors_after_error_count_rises():
    parser, _ = make("let x = 5;")
    parser.error_count += 1
    assert parser.has_errors() is True


def test_did_you_mean_without_space_before():
    parser, out = make("let x = 5")
    parser.did_you_mean(";", 1, 10, False)
    lines = out.getvalue().split("\n")
    assert lines[0] == colorize("blue", "Did You Mean?")
    assert lines[1] == "let x = 5; "
    assert lines[2] == colorize("green", " " * 9 + "+")


def test_did_you_mean_with_space_before():
    parser, out = make("function f{")
    parser.did_you_mean("(", 1, 11)
    lines = out.getvalue().split("\n")
    assert lines[1] == "function f ({"
    assert lines[2] == colorize("green", " " * 11 + "+")


def test_did_you_mean_keeps_original_text_around_insertion():
    source = "for i 1 to 3"
    parser, out = make(source)
    parser.did_you_mean("in", 1, 6)
    corrected = out.getvalue().split("\n")[1]
    assert corrected.replace(" in", "", 1) == source


def test_current_token_before_start_raises():
    parser, _ = make("x")
    with pytest.raises(ParseError):
        parser._current()


def test_parse_error_carries_location():
    error = ParseError("boom", SourceLocation(2, 7))
    assert (error.line, error.column) == (2, 7)
    assert str(error).startswith("[ 2:7 ]")


def test_parse_error_without_location():
    error = ParseError("boom")
    assert error.line is None
    assert str(error) == "boom"


def test_inside_function_depends_on_first_status():
    parser, _ = make("x")
    assert parser._check_inside_function() is False
    parser.status.append(ParserStatus.PARSING_FN_DEFINITION)
    parser.status.append(ParserStatus.PARSING_LOOP)
    assert parser._check_inside_function() is True