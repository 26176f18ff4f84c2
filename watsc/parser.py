"""The full statement parser: declarations, functions and control flow."""

from __future__ import annotations

from collections.abc import Callable

from .func_parser import FunctionParser
from .expressions import Identifier
from .parser_base import ParserStatus
from .statements import (
    BreakStatement,
    ElseIfStatement,
    ElseStatement,
    ForLoop,
    IfStatement,
    Loop,
    MatchArm,
    MatchStatement,
    Statement,
    WhileLoop,
)
from .tokens import TokenName

_LOOP_STATES = frozenset(
    {
        ParserStatus.PARSING_FOR_LOOP,
        ParserStatus.PARSING_WHILE_LOOP,
        ParserStatus.PARSING_LOOP,
    }
)
_AFTER_IF_STATES = frozenset(
    {ParserStatus.PARSED_IF_STATEMENT, ParserStatus.PARSED_ELSEIF_STATEMENT}
)


class Parser(FunctionParser):
    """Parses a whole token list into a list of statements."""

    def parse(self) -> list[Statement]:
        """Parse every statement that can be recognised from the start."""
        return self.parse_statements()

    def parse_statement(self) -> Statement | None:
        """Parse one statement, or return None if none matches."""
        return self._parse_statement()

    def parse_statements(self) -> list[Statement]:
        """Parse statements until one cannot be recognised."""
        return self._parse_statements()

    def _statement_alternatives(self) -> list[Callable[[], Statement | None]]:
        return [
            self.parse_for_loop,
            self.parse_while_loop,
            self.parse_loop,
            self.parse_variable_init_with_type,
            self.parse_break_statement,
            self.parse_variable_init_with_let,
            self.parse_variable_declaration,
            self.parse_variable_assignment,
            self.parse_match_statement,
            self.parse_if_statement,
            self.parse_function,
            self.parse_function_call_statement,
        ]

    # Loops

    def parse_loop(self) -> Loop | None:
        """Parse `loop { ... }`."""
        self._store()
        if not self._peek(TokenName.LOOP):
            return None
        self._consume()
        if not self._check_inside_function():
            self._unexpected(
                "A 'loop' must be inside a function definition", *self._here()
            )
            self._fail()
            return None
        self.status.append(ParserStatus.PARSING_LOOP)

        body = self.parse_curly_brace_and_body()
        if body is None:
            return None
        self.status.pop()
        return Loop(body)

    def parse_for_loop(self) -> ForLoop | None:
        """Parse `for i in start to end { ... }`."""
        self._store()
        if not self._peek(TokenName.FOR):
            return None
        self._consume()
        if not self._check_inside_function():
            self._unexpected(
                "A 'for loop' must be inside a function definition", *self._here()
            )
            self._fail()
            return None
        self.status.append(ParserStatus.PARSING_FOR_LOOP)
        location = self._current().location

        if self._peek(TokenName.ID):
            self._consume()
            token = self._current()
            iter_var = Identifier(token.value, token.location)
        else:
            self._store()
            self._consume()
            if self._is_keyword(self._current().value):
                self.status.append(ParserStatus.PARSING_FN_DEFINITION_FAILED)
                self._unexpected(
                    f"'{self._current().value}' is a keyword, it cannot be used as "
                    "an iteration variable.",
                    *self._here(),
                )
                self._fail()
                return None
            self._backtrack()
            self._unexpected(
                "Expected an iteration variable name after the 'for' keyword",
                *self._here(),
            )
            self._fail()
            return None

        if self._peek(TokenName.IN):
            self._consume()
        else:
            self._expected("You missed the 'in' keyword in the for loop", *self._past())
            self.did_you_mean("in", *self._past())
            self._fail()
            return None

        range_expr = self.parse_range()

        body = self.parse_curly_brace_and_body()
        if body is None:
            return None
        self.status.pop()
        return ForLoop(iter_var, range_expr, body, location)

    def parse_while_loop(self) -> WhileLoop | None:
        """Parse `while cond { ... }`."""
        self._store()
        if not self._peek(TokenName.WHILE):
            return None
        self._consume()
        if not self._check_inside_function():
            self._unexpected(
                "A 'while loop' must be inside a function definition", *self._here()
            )
            self._fail()
            return None
        self.status.append(ParserStatus.PARSING_WHILE_LOOP)

        condition = self.parse_expression()
        if condition is None:
            self._expected(
                "Expected an expression after the 'while' keyword", *self._past()
            )
            self._fail()
            return None

        body = self.parse_curly_brace_and_body()
        if body is None:
            return None
        self.status.pop()
        return WhileLoop(condition, body)

    def parse_break_statement(self) -> BreakStatement | None:
        """Parse `break;`, which must sit somewhere inside a loop."""
        if not self._peek(TokenName.BREAK):
            return None
        self._consume()

        if not self.status or self.status[-1] not in _LOOP_STATES:
            popped: list[ParserStatus] = []
            while self.status:
                popped.append(self.status.pop())
                if self.status and self.status[-1] in _LOOP_STATES:
                    self.status.extend(popped)
                    break
            if not self.status:
                self._unexpected("'break' not within a loop body", *self._here(), 5)
                self._fail()
                return None

        location = self._current().location
        if self._peek(TokenName.SEMI_COLON):
            self._consume()
            return BreakStatement(location)
        self._expected("Expected semicolon after 'break'", *self._past())
        self._fail()
        return None

    # Match

    def parse_match_statement(self) -> MatchStatement | None:
        """Parse `match expr { pattern => { ... } ... }`."""
        self._store()
        if not self._peek(TokenName.MATCH):
            return None
        self._consume()
        if not self._check_inside_function():
            self._unexpected(
                "A 'match statement' must be inside a function definition",
                *self._here(),
            )
            self._fail()
            return None

        condition = self.parse_expression()
        if condition is None:
            self._expected(
                "Expected an expression after the 'match' keyword", *self._past()
            )
            self._fail()
            return None

        if not self._peek(TokenName.OPEN_CURLY):
            self._expected("Expected an '{' after the expression in match", *self._past())
            self._fail()
            return None
        brace_index = self._pos + 1
        self._consume()

        arms = self._parse_match_arms()
        if arms is None:
            return None

        if self._peek(TokenName.CLOSE_CURLY):
            self._consume()
            return MatchStatement(condition, arms)
        brace = self.tokens[brace_index]
        self._expected("Expected a closing pair for '{'", brace.line, brace.column)
        self._fail()
        return None

    def _parse_match_arms(self) -> list[MatchArm] | None:
        self._store()
        first = self._parse_match_arm()
        if first is None:
            return None
        arms = [first]
        while True:
            self._store()
            arm = self._parse_match_arm()
            if arm is None:
                return arms
            arms.append(arm)

    def _parse_match_arm(self) -> MatchArm | None:
        self._store()
        condition = self.parse_expression()
        if condition is None:
            return None

        if self._peek(TokenName.ARROW):
            self._consume()
        else:
            self._expected(
                "Expected an '=>' after the expression in 'match' body", *self._past()
            )
            self.did_you_mean("=>", *self._past())
            self._fail()
            return None

        body = self.parse_curly_brace_and_body()
        if body is None:
            return None
        return MatchArm(condition, body)

    # Branches

    def parse_if_statement(self) -> IfStatement | None:
        """Parse an `if` with its `else if` chain and optional `else`."""
        self._store()
        if not self._peek(TokenName.IF):
            return None
        self._consume()
        if not self._check_inside_function():
            self._unexpected(
                "'if statement' must be inside a function definition", *self._here()
            )
            self._fail()
            return None
        location = self._current().location
        self.status.append(ParserStatus.PARSING_IF_STATEMENT)

        condition = self.parse_expression()
        if condition is None:
            self._expected("Expected an condition after the 'if' keyword", *self._past())
            self._fail()
            return None

        body = self.parse_curly_brace_and_body()
        if body is None:
            self.status.append(ParserStatus.PARSING_IF_STATEMENT_FAILED)
            return None
        self.status.append(ParserStatus.PARSED_IF_STATEMENT)

        else_ifs: list[ElseIfStatement] = []
        while (else_if := self._parse_else_if_statement()) is not None:
            else_ifs.append(else_if)
        self._backtrack()
        else_statement = self._parse_else_statement()
        return IfStatement(condition, body, else_ifs, else_statement, location)

    def _follows_if(self) -> bool:
        return bool(self.status) and self.status[-1] in _AFTER_IF_STATES

    def _parse_else_if_statement(self) -> ElseIfStatement | None:
        self._store()
        if not self._peek(TokenName.ELSE):
            return None
        self._consume()
        location = self._current().location

        if not self._peek(TokenName.IF):
            return None
        self._consume()
        if not self._check_inside_function():
            self._unexpected(
                "'else if' must be inside a function definition", *self._here(), 7
            )
            self._fail()
            return None
        if not self._follows_if():
            self._unexpected("'else if' without an previous 'if' found", *self._here(), 7)
            self._fail()
            return None
        self.status.append(ParserStatus.PARSING_ELSEIF_STATEMENT)

        condition = self.parse_expression()
        if condition is None:
            self._expected("Expected an condition after 'else-if'", *self._past())
            self._fail()
            return None

        body = self.parse_curly_brace_and_body()
        if body is None:
            return None
        self.status.append(ParserStatus.PARSED_ELSEIF_STATEMENT)
        return ElseIfStatement(condition, body, location)

    def _parse_else_statement(self) -> ElseStatement | None:
        self._store()
        if not self._peek(TokenName.ELSE):
            return None
        self._consume()
        if not self._check_inside_function():
            self._unexpected("else' must be inside a function definition", *self._here())
            self._fail()
            return None
        if not self._follows_if():
            self._unexpected("else without an previous 'if' found", *self._here())
            self._fail()
            return None
        location = self._current().location

        body = self.parse_curly_brace_and_body()
        if body is None:
            return None
        return ElseStatement(body, location)