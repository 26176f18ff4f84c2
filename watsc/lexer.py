"""Turns source text into a list of tokens."""

from __future__ import annotations

from collections.abc import Callable

from .diagnostics import CompilerContext, SourceLocation, colorize, set_arrow
from .tokens import Token, TokenName

KEYWORDS: dict[str, TokenName] = {
    "export": TokenName.EXPORT,
    "function": TokenName.FUNCTION,
    "where": TokenName.WHERE,
    "from": TokenName.FROM,
    "import": TokenName.IMPORT,
    "i32": TokenName.I32,
    "i64": TokenName.I64,
    "f32": TokenName.F32,
    "f64": TokenName.F64,
    "let": TokenName.LET,
    "const": TokenName.CONST,
    "to": TokenName.TO,
    "in": TokenName.IN,
    "for": TokenName.FOR,
    "while": TokenName.WHILE,
    "loop": TokenName.LOOP,
    "match": TokenName.MATCH,
    "if": TokenName.IF,
    "else": TokenName.ELSE,
    "break": TokenName.BREAK,
}

_SINGLE: dict[str, TokenName] = {
    ":": TokenName.COLON,
    ";": TokenName.SEMI_COLON,
    "+": TokenName.PLUS,
    "-": TokenName.MINUS,
    "*": TokenName.MUL,
    "/": TokenName.DIV,
    "%": TokenName.MOD,
    "(": TokenName.OPEN_PARENTHESIS,
    ")": TokenName.CLOSE_PARENTHESIS,
    "{": TokenName.OPEN_CURLY,
    "}": TokenName.CLOSE_CURLY,
    "[": TokenName.OPEN_SQUARE,
    "]": TokenName.CLOSE_SQUARE,
    ",": TokenName.COMMA,
}


def _is_digit(char: str) -> bool:
    return char.isascii() and char.isdigit()


def _is_alnum(char: str) -> bool:
    return char.isascii() and char.isalnum()


class LexerError(Exception):
    """Raised on a character the lexer does not recognise."""

    def __init__(self, message: str, line: int, column: int, report: str) -> None:
        super().__init__(f"[ {line}:{column} ] Error: {message}")
        self.message = message
        self.line = line
        self.column = column
        self.report = report


class Lexer:
    """Scans the source held by a compiler context."""

    def __init__(self, context: CompilerContext) -> None:
        self.context = context
        self.tokens: list[Token] = []
        self._line = 1
        self._column = 1
        self._pos = 0

    def tokenize(self) -> list[Token]:
        """Scan the whole source and return the tokens found."""
        source = self.context.source_code
        while self._pos < len(source):
            self._scan(source[self._pos])
            self._pos += 1
        return self.tokens

    def _peek(self) -> str:
        source = self.context.source_code
        if self._pos + 1 < len(source):
            return source[self._pos + 1]
        return "\0"

    def _add(self, kind: TokenName, value: str, column: int | None = None) -> None:
        col = self._column if column is None else column
        self.tokens.append(Token(kind, SourceLocation(self._line, col), value))

    def _take_while(self, accept: Callable[[str], bool]) -> str:
        taken = []
        while accept(self._peek()):
            taken.append(self._peek())
            self._pos += 1
            self._column += 1
        return "".join(taken)

    def _pair(self, second: str, double: TokenName, single: TokenName, char: str) -> bool:
        if self._peek() == second:
            self._add(double, char + second)
            self._pos += 1
            self._column += 2
            return True
        self._add(single, char)
        return False

    def _scan(self, char: str) -> None:
        if char == "\n":
            self._line += 1
            self._column = 1
        elif char == " ":
            self._column += 1
        elif char in _SINGLE:
            self._add(_SINGLE[char], char)
            self._column += 1
        elif char == "#":
            newline = self.context.source_code.find("\n", self._pos + 1)
            if newline == -1:
                newline = len(self.context.source_code)
            self._pos = newline - 1
            self._column += 1
        elif char == "=":
            if self._peek() == "=":
                self._add(TokenName.EQ, "==")
                self._pos += 1
                self._column += 2
            elif self._peek() == ">":
                self._add(TokenName.ARROW, "=>", self._column + 1)
                self._pos += 1
                self._column += 2
            else:
                self._add(TokenName.ASSIGN, char)
                self._column += 1
        elif char == "<":
            if not self._pair("=", TokenName.LTE, TokenName.LT, char):
                self._column += 1
        elif char == ">":
            if not self._pair("=", TokenName.GTE, TokenName.GT, char):
                # A lone '>' also swallows the character after it.
                self._pos += 1
                self._column += 1
        elif char == "!":
            if not self._pair("=", TokenName.NEQ, TokenName.NOT, char):
                self._column += 1
        elif _is_digit(char):
            number = char + self._take_while(lambda c: _is_digit(c) or c == ".")
            self._add(TokenName.NUMBER, number)
            self._column += 1
        elif _is_alnum(char):
            word = char + self._take_while(lambda c: _is_alnum(c) or c == "_")
            self._add(KEYWORDS.get(word, TokenName.ID), word)
            self._column += 1
        else:
            self._error(f"Unkown Token: '{char}'")

    def _error(self, message: str) -> None:
        line, column = self._line, self._column
        report = (
            f"{self.context.line_text(line)}\n"
            f"{colorize('green', set_arrow(column, 1))}\n"
            f"[ {line}:{column} ] "
            f"{colorize('red', 'Error: ')}{colorize('blue', message)}"
        )
        raise LexerError(message, line, column, report)