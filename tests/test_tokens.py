import pytest

from watsc.diagnostics import SourceLocation
from watsc.tokens import Token, TokenName


@pytest.mark.parametrize(
    "kind,text",
    [
        (TokenName.PLUS, "+"),
        (TokenName.MOD, "%"),
        (TokenName.WHILE, "WHILE"),
        (TokenName.OPEN_CURLY, "OPEN_CURLY"),
        (TokenName.SEMI_COLON, "Unknown"),
        (TokenName.BREAK, "Unknown"),
    ],
)
def test_token_name_display(kind, text):
    assert str(kind) == text


def test_token_str():
    tok = Token(TokenName.ID, SourceLocation(3, 4), "x")
    assert str(tok) == "line: 3 col: 4 x ID"


def test_token_position_properties():
    tok = Token(TokenName.NUMBER, SourceLocation(7, 12), "42")
    assert (tok.line, tok.column) == (7, 12)
    assert tok.value == "42"


def test_is_identifier():
    assert Token(TokenName.ID, SourceLocation(1, 1), "a").is_identifier()
    assert not Token(TokenName.LET, SourceLocation(1, 3), "let").is_identifier()