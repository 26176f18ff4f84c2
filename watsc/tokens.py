"""Token kinds and tokens produced by the lexer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from .diagnostics import SourceLocation


class TokenName(Enum):
    """Every kind of token the lexer produces."""

    PLUS = auto()
    MINUS = auto()
    MUL = auto()
    DIV = auto()
    MOD = auto()
    EQ = auto()
    NOT = auto()
    NEQ = auto()
    LT = auto()
    GT = auto()
    LTE = auto()
    GTE = auto()
    ID = auto()
    NUM = auto()
    SEMI_COLON = auto()
    OPEN_PARENTHESIS = auto()
    CLOSE_PARENTHESIS = auto()
    OPEN_SQUARE = auto()
    CLOSE_SQUARE = auto()
    OPEN_CURLY = auto()
    CLOSE_CURLY = auto()
    COMMA = auto()
    ARROW = auto()
    ASSIGN = auto()
    COLON = auto()
    NUMBER = auto()
    EXPORT = auto()
    IMPORT = auto()
    I32 = auto()
    I64 = auto()
    F32 = auto()
    F64 = auto()
    LOOP = auto()
    FOR = auto()
    WHILE = auto()
    FUNCTION = auto()
    LET = auto()
    CONST = auto()
    WHERE = auto()
    FROM = auto()
    TO = auto()
    IN = auto()
    MATCH = auto()
    IF = auto()
    ELSE = auto()
    BREAK = auto()

    def __str__(self) -> str:
        return _DISPLAY.get(self, "Unknown")


_SYMBOLS = {
    TokenName.PLUS: "+",
    TokenName.MINUS: "-",
    TokenName.MUL: "*",
    TokenName.DIV: "/",
    TokenName.MOD: "%",
}
_NAMED = (
    "EQ NOT NEQ LT GT LTE GTE ID NUM OPEN_PARENTHESIS CLOSE_PARENTHESIS "
    "OPEN_SQUARE CLOSE_SQUARE OPEN_CURLY CLOSE_CURLY COMMA ASSIGN NUMBER "
    "EXPORT IMPORT I32 I64 F32 F64 LOOP FUNCTION CONST WHERE FROM TO FOR IN "
    "LET WHILE"
).split()
_DISPLAY = {**_SYMBOLS, **{TokenName[name]: name for name in _NAMED}}


@dataclass(frozen=True)
class Token:
    """A lexed token: its kind, where it was found, and its text."""

    kind: TokenName
    location: SourceLocation
    value: str

    @property
    def line(self) -> int:
        return self.location.line

    @property
    def column(self) -> int:
        return self.location.column

    def is_identifier(self) -> bool:
        return self.kind is TokenName.ID

    def __str__(self) -> str:
        return f"line: {self.line} col: {self.column} {self.value} {self.kind}"