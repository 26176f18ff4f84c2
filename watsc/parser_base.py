"""Token cursor, parser state and diagnostics shared by the parsers."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from enum import Enum, auto
from typing import TextIO

from .diagnostics import (
    CompilerContext,
    SourceLocation,
    colorize,
    multi_part_arrow,
    set_arrow,
    set_plus,
)
from .lexer import KEYWORDS
from .tokens import Token, TokenName


class ParserStatus(Enum):
    """What the parser is in the middle of, kept as a stack."""

    PARSING_FN_DEFINITION = auto()
    PARSING_FN_DEFINITION_FAILED = auto()
    PARSED_FN_DEFINTION = auto()

    PARSING_VARIABLE_DECLARATION = auto()
    PARSING_VARIABLE_DECLARATION_FAILED = auto()
    PARSED_VARIABLE_DECLARATION = auto()

    PARSING_VARIABLE_ASSIGNMENT = auto()
    PARSING_VARIABLE_ASSIGNMENT_FAILED = auto()
    PARSED_VARIABLE_ASSIGNMENT = auto()

    PARSING_FN_CALL = auto()
    PARSING_FN_CALL_FAILED = auto()
    PARSED_FN_CALL = auto()

    PARSING_IF_STATEMENT = auto()
    PARSING_IF_STATEMENT_FAILED = auto()
    PARSED_IF_STATEMENT = auto()

    PARSING_ELSEIF_STATEMENT = auto()
    PARSING_ELSEIF_STATEMENT_FAILED = auto()
    PARSED_ELSEIF_STATEMENT = auto()

    PARSING_ELSE_STATEMENT = auto()
    PARSING_ELSE_STATEMENT_FAILED = auto()
    PARSED_ELSE_STATEMENT = auto()

    PARSING_MATCH_STATEMENT = auto()
    PARSING_MATCH_STATEMENT_FAILED = auto()
    PARSED_MATCH_STATEMENT = auto()

    PARSING_MATCH_ARM = auto()
    PARSING_MATCH_ARM_FAILED = auto()
    PARSED_MATCH_ARM = auto()

    PARSING_EXPRESSION = auto()
    PARSING_EXPRESSION_FAILED = auto()
    PARSED_EXPRESSION = auto()

    PARSING_VARIABLE_DECL_ASSIGN = auto()
    PARSING_VARIABLE_DECL_ASSIGN_FAILED = auto()
    PARSED_VARIABLE_DECL_ASSIGN = auto()

    PARSING_FOR_LOOP = auto()
    PARSING_FOR_LOOP_FAILED = auto()
    PARSED_FOR_LOOP = auto()

    PARSING_WHILE_LOOP = auto()
    PARSING_WHILE_LOOP_FAILED = auto()
    PARSED_WHILE_LOOP = auto()

    PARSING_LOOP = auto()
    PARSING_LOOP_FAILED = auto()
    PARSED_LOOP = auto()

    PARSING_FN_ARGUMENTS = auto()
    PARSING_FN_ARGUMENTS_FAILED = auto()
    PARSED_FN_ARGUMENTS = auto()

    PARSING_FN_PARAMETERS = auto()
    PARSING_FN_PARAMETERS_FAILED = auto()
    PARSED_FN_PARAMETERS = auto()

    PARSING_WHILE_CONDITION = auto()
    PARSING_WHILE_CONDITION_FAILED = auto()
    PARSED_WHILE_CONDITION = auto()

    PARSING_IF_CONDITION = auto()
    PARSING_IF_CONDITION_FAILED = auto()
    PARSED_IF_CONDITION = auto()

    PARSING_ELSEIF_CONDITION = auto()
    PARSING_ELSEIF_CONDITION_FAILED = auto()
    PARSED_ELSEIF_CONDITION = auto()


class ParseError(Exception):
    """Raised where parsing cannot go on at all."""

    def __init__(self, message: str, location: SourceLocation | None = None) -> None:
        prefix = f"[ {location.line}:{location.column} ] " if location else ""
        super().__init__(prefix + message)
        self.message = message
        self.location = location

    @property
    def line(self) -> int | None:
        return self.location.line if self.location else None

    @property
    def column(self) -> int | None:
        return self.location.column if self.location else None


class ParserBase:
    """Walks a token list with one saved backtrack position."""

    def __init__(
        self,
        context: CompilerContext,
        tokens: Sequence[Token],
        out: TextIO | None = None,
    ) -> None:
        self.context = context
        self.tokens: list[Token] = list(tokens)
        self.out: TextIO = out if out is not None else sys.stdout
        self.status: list[ParserStatus] = []
        self.error_count = 0
        self._pos = -1
        self._saved = -1

    def has_errors(self) -> bool:
        return self.error_count > 0

    # Token cursor

    def _peek(self, kind: TokenName) -> bool:
        index = self._pos + 1
        return 0 <= index < len(self.tokens) and self.tokens[index].kind is kind

    def _consume(self) -> None:
        self._pos += 1

    def _store(self) -> None:
        self._saved = self._pos

    def _backtrack(self) -> None:
        self._pos = self._saved

    def _at_end(self) -> bool:
        return self._pos >= len(self.tokens)

    def _current(self) -> Token:
        if 0 <= self._pos < len(self.tokens):
            return self.tokens[self._pos]
        raise ParseError("unexpected end of input")

    def _here(self) -> tuple[int, int]:
        token = self._current()
        return token.line, token.column

    def _past(self) -> tuple[int, int]:
        token = self._current()
        return token.line, token.column + 1

    def _check_inside_function(self) -> bool:
        return bool(self.status) and self.status[0] is ParserStatus.PARSING_FN_DEFINITION

    @staticmethod
    def _is_keyword(value: str) -> bool:
        return value in KEYWORDS

    def _fail(self) -> None:
        self.error_count += 1

    # Diagnostics

    def _header(self, message: str, line: int, column: int) -> None:
        self.out.write(f"[ {line}:{column} ] ")
        self.out.write(colorize("red", "Error: "))
        self.out.write(colorize("blue", message) + "\n")
        self.out.write(self.context.line_text(line) + "\n")

    def _expected(self, message: str, line: int, column: int) -> None:
        self._header(message, line, column)
        self.out.write(colorize("green", multi_part_arrow(column, 1)) + "\n")

    def _unexpected(self, message: str, line: int, column: int, times: int = 0) -> None:
        self._header(message, line, column)
        if times:
            arrow = set_arrow(column - times + 1, times)
        else:
            width = len(self._current().value)
            arrow = set_arrow(column - width + 1, width)
        self.out.write(colorize("red", arrow) + "\n")

    def did_you_mean(
        self, to_add: str, line: int, column: int, space_before: bool = True
    ) -> None:
        """Show the offending line with to_add inserted at column."""
        text = self.context.line_text(line)
        before, after = text[: column - 1], text[column - 1 :]
        if space_before:
            corrected = f"{before} {to_add}{after}"
            marker = set_plus(column + 1, len(to_add))
        else:
            corrected = f"{before}{to_add} {after}"
            marker = set_plus(column, len(to_add))
        self.out.write(colorize("blue", "Did You Mean?") + "\n")
        self.out.write(corrected + "\n")
        self.out.write(colorize("green", marker) + "\n")