"""Parsing of variable declarations, initialisations and assignments."""

from __future__ import annotations

from .diagnostics import SourceLocation
from .expr_parser import ExpressionParser
from .expressions import Identifier
from .parser_base import ParseError, ParserStatus
from .statements import (
    VariableAssignment,
    VariableDeclaration,
    VariableDeclareAndAssign,
)
from .tokens import TokenName

_TYPE_TOKENS = (TokenName.I32, TokenName.I64, TokenName.F32, TokenName.F64)


class DeclarationParser(ExpressionParser):
    """Parses `let` statements and plain assignments."""

    def parse_variable_declaration(self) -> VariableDeclaration | None:
        """Parse `let x: type;`, falling back to `let x;`."""
        result = self._parse_declaration_with_type()
        if result is not None:
            return result
        self._backtrack()
        return self._parse_declaration_with_let()

    def parse_variable_assignment(self) -> VariableAssignment | None:
        """Parse `x = expr;`."""
        self._store()
        if not self._peek(TokenName.ID):
            return None
        self._consume()
        token = self._current()
        target = Identifier(token.value, token.location)

        if not self._peek(TokenName.ASSIGN):
            return None
        self._consume()

        expr = self.parse_expression()
        if expr is None:
            raise ParseError(
                "Expected an value or expression for the assignment",
                SourceLocation(*self._past()),
            )

        if self._peek(TokenName.SEMI_COLON):
            self._consume()
            return VariableAssignment(target, expr, token.location)
        self._missing_semicolon()
        return None

    def parse_variable_init_with_let(self) -> VariableDeclareAndAssign | None:
        """Parse `let x = expr;`."""
        self._store()
        if not self._peek(TokenName.LET):
            return None
        self._consume()

        if self._peek(TokenName.ID):
            self._consume()
            token = self._current()
            name = token.value
            locations = [token.location]
        else:
            self._store()
            self._consume()
            if self._is_keyword(self._current().value):
                self._keyword_as_variable()
                return None
            self._backtrack()
            self._expected(
                "A Variable name after a let expression is required", *self._past()
            )
            self._fail()
            return None

        if not self._peek(TokenName.ASSIGN):
            return None
        self._consume()

        # Without a type, the type shares the name's location.
        locations.append(locations[0])
        expr = self.parse_expression()
        if expr is None:
            self._expected(
                "Expected an value or expression for the assignment", *self._past()
            )
            self._fail()
            return None
        locations.extend(expr.locations)

        if not self._peek(TokenName.SEMI_COLON):
            self._missing_semicolon()
            return None
        self._consume()
        return VariableDeclareAndAssign(name, "", expr, locations)

    def parse_variable_init_with_type(self) -> VariableDeclareAndAssign | None:
        """Parse `let x: type = expr;`."""
        self._store()
        if not self._peek(TokenName.LET):
            return None
        self._consume()

        if self._peek(TokenName.ID):
            self._consume()
            token = self._current()
            name = token.value
            locations = [token.location]
        else:
            self._store()
            self._consume()
            if self._is_keyword(self._current().value):
                self._keyword_as_variable()
                return None
            self._expected(
                "A Variable name after a let expression is required", *self._past()
            )
            self._fail()
            return None

        if not self._peek(TokenName.COLON):
            return None
        self._consume()

        type_name = self._parse_type(locations)
        if type_name is None:
            return None

        if not self._peek(TokenName.ASSIGN):
            return None
        self._consume()

        expr = self.parse_expression()
        if expr is None:
            self._expected(
                "Expected an value or expression for the assignment", *self._past()
            )
            self._fail()
            return None

        if not self._peek(TokenName.SEMI_COLON):
            self._missing_semicolon()
            return None
        self._consume()
        return VariableDeclareAndAssign(name, type_name, expr, locations)

    def _parse_declaration_with_let(self) -> VariableDeclaration | None:
        self._store()
        if not self._peek(TokenName.LET):
            return None
        self._consume()

        name_and_location = self._parse_declared_name()
        if name_and_location is None:
            return None
        name, location = name_and_location
        # (0, 0) stands for "no type given".
        locations = [location, SourceLocation(0, 0)]

        if not self._peek(TokenName.SEMI_COLON):
            self._missing_semicolon()
            return None
        self._consume()
        return VariableDeclaration(name, "", locations)

    def _parse_declaration_with_type(self) -> VariableDeclaration | None:
        self._store()
        if not self._peek(TokenName.LET):
            return None
        self._consume()

        name_and_location = self._parse_declared_name()
        if name_and_location is None:
            return None
        name, location = name_and_location
        locations = [location]

        if not self._peek(TokenName.COLON):
            return None
        self._consume()

        type_name = self._parse_type(locations)
        if type_name is None:
            return None

        if not self._peek(TokenName.SEMI_COLON):
            self._missing_semicolon()
            return None
        self._consume()
        return VariableDeclaration(name, type_name, locations)

    def _parse_declared_name(self) -> tuple[str, SourceLocation] | None:
        if self._peek(TokenName.ID):
            self._consume()
            token = self._current()
            return token.value, token.location
        self._consume()
        if self._is_keyword(self._current().value):
            self._keyword_as_variable()
            return None
        self._expected(
            "A Variable name after a let expression is required", *self._past()
        )
        self._fail()
        return None

    def _parse_type(self, locations: list[SourceLocation]) -> str | None:
        if any(self._peek(kind) for kind in _TYPE_TOKENS):
            self._consume()
            token = self._current()
            locations.append(token.location)
            return token.value
        self._expected("Consider mentioning the type of the variable", *self._past())
        self._fail()
        return None

    def _keyword_as_variable(self) -> None:
        self.status.append(ParserStatus.PARSING_FN_DEFINITION_FAILED)
        self._unexpected(
            f"'{self._current().value}' is a keyword, it cannot be used as a "
            "variable name.",
            *self._here(),
        )
        self._fail()

    def _missing_semicolon(self) -> None:
        self._expected("Expected a ';' here.", *self._past())
        self.did_you_mean(";", *self._past(), False)
        self._fail()