"""Parsing of function definitions, their arguments, calls and bodies."""

from __future__ import annotations

from collections.abc import Callable

from .decl_parser import DeclarationParser
from .expressions import Identifier
from .parser_base import ParserStatus
from .statements import FunctionArguments, FunctionCall, FunctionDefinition, Statement
from .tokens import TokenName


class FunctionParser(DeclarationParser):
    """Parses functions and the braced statement blocks they contain.

    `_parse_statement` is the hook for statements inside a block; a full
    parser overrides it to add control flow.
    """

    def parse_function(self) -> FunctionDefinition | None:
        """Parse `function name(args) { body }`."""
        self._store()
        result = self._parse_function_attempt()
        if result is not None:
            return result
        self._backtrack()
        # The definition is tried a second time, as a form with a return type
        # and one without are both accepted.
        return self._parse_function_attempt()

    def parse_function_arguments(self) -> FunctionArguments | None:
        """Parse a comma separated list of parameter names."""
        first = self._parse_function_argument()
        if first is None:
            return None
        identifiers = [first]

        if not self._peek(TokenName.COMMA):
            return FunctionArguments(identifiers)
        self._consume()

        rest = self.parse_function_arguments()
        if rest is None:
            self._expected("Unexpected ',' found", *self._past())
            self._fail()
            return None
        identifiers.extend(rest.identifiers)
        return FunctionArguments(identifiers)

    def parse_function_call_statement(self) -> FunctionCall | None:
        """Parse `name();`."""
        if not self._peek(TokenName.ID):
            return None
        self._consume()
        token = self._current()
        name = Identifier(token.value, token.location)

        if not self._peek(TokenName.OPEN_PARENTHESIS):
            return None
        self._consume()

        if not self._peek(TokenName.CLOSE_PARENTHESIS):
            self._expected("Expected closing pair for '('", *self._past())
            self._fail()
            return None
        self._consume()

        if not self._peek(TokenName.SEMI_COLON):
            self._expected("Expected a semi colon : ';'", *self._past())
            self._fail()
            return None
        self._consume()
        return FunctionCall(name, [])

    def parse_curly_brace_and_body(self) -> list[Statement] | None:
        """Parse `{ statements }` and return the statements."""
        if self._peek(TokenName.OPEN_CURLY):
            brace_index = self._pos + 1
            self._consume()
        else:
            self._consume()
            self._unexpected("Expected a '{' here", *self._here())
            self._fail()
            return None

        body = self._parse_statements()

        if self._peek(TokenName.CLOSE_CURLY):
            self._consume()
            return body
        brace = self.tokens[brace_index]
        self._expected("Expected a closing pair for '{'", brace.line, brace.column)
        self._fail()
        return None

    def _parse_function_attempt(self) -> FunctionDefinition | None:
        self._store()
        if not self._peek(TokenName.FUNCTION):
            return None
        self._consume()
        if self._check_inside_function():
            self._unexpected(
                "You cannot define a function inside another function", *self._here()
            )
            self._fail()
            return None
        self.status.append(ParserStatus.PARSING_FN_DEFINITION)
        location = self._current().location

        if self._peek(TokenName.ID):
            self._consume()
            token = self._current()
            name = Identifier(token.value, token.location)
        else:
            self._consume()
            self.status.append(ParserStatus.PARSING_FN_DEFINITION_FAILED)
            if self._is_keyword(self._current().value):
                self._unexpected(
                    f"'{self._current().value}' is a keyword, it cannot be used as "
                    "a function name.",
                    *self._here(),
                )
            else:
                self._expected(
                    "Expected an Identifier (Function Name) after the 'function' "
                    "keyword",
                    *self._past(),
                )
            self._fail()
            return None

        if not self._expect_parenthesis(TokenName.OPEN_PARENTHESIS, "("):
            return None
        arguments = self.parse_function_arguments()
        if not self._expect_parenthesis(TokenName.CLOSE_PARENTHESIS, ")"):
            return None

        body = self.parse_curly_brace_and_body()
        if body is None:
            return None
        self.status.clear()
        return FunctionDefinition(name, arguments, body, "", location)

    def _expect_parenthesis(self, kind: TokenName, symbol: str) -> bool:
        if self._peek(kind):
            self._consume()
            return True
        self.status.append(ParserStatus.PARSING_FN_DEFINITION_FAILED)
        self._expected(f"Expected a '{symbol}'", *self._past())
        self.did_you_mean(symbol, *self._past())
        self._fail()
        return False

    def _parse_function_argument(self) -> Identifier | None:
        if not self._peek(TokenName.ID):
            return None
        self._consume()
        token = self._current()
        return Identifier(token.value, token.location)

    def _statement_alternatives(self) -> list[Callable[[], Statement | None]]:
        return [
            self.parse_variable_init_with_type,
            self.parse_variable_init_with_let,
            self.parse_variable_declaration,
            self.parse_variable_assignment,
            self.parse_function,
            self.parse_function_call_statement,
        ]

    def _parse_statement(self) -> Statement | None:
        self._store()
        for index, alternative in enumerate(self._statement_alternatives()):
            if index:
                self._backtrack()
            result = alternative()
            if result is not None:
                return result
        return None

    def _parse_statements(self) -> list[Statement]:
        statements: list[Statement] = []
        while True:
            self._store()
            statement = self._parse_statement()
            if statement is None:
                return statements
            statements.append(statement)