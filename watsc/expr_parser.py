"""Parsing of expressions and ranges."""

from __future__ import annotations

from .expressions import (
    BinaryExpression,
    Expression,
    FunctionCallExpression,
    FunctionParameters,
    Identifier,
    Number,
    OperatorNode,
    Range,
)
from .parser_base import ParseError, ParserBase
from .tokens import TokenName

_OPERATORS: tuple[tuple[TokenName, str], ...] = (
    (TokenName.PLUS, "+"),
    (TokenName.MINUS, "-"),
    (TokenName.MUL, "*"),
    (TokenName.DIV, "/"),
    (TokenName.MOD, "%"),
    (TokenName.GT, ">"),
    (TokenName.LT, "<"),
    (TokenName.GTE, ">="),
    (TokenName.LTE, "<="),
    (TokenName.EQ, "=="),
    (TokenName.NEQ, "!="),
)


class ExpressionParser(ParserBase):
    """Parses right-associative binary expressions over simple operands."""

    def parse_expression(self) -> Expression | None:
        """Parse one expression starting after the cursor, or return None."""
        self._store()
        alternatives = (
            self._parse_id_expression,
            self._parse_number_expression,
            self._parse_braced_expression,
        )
        for index, alternative in enumerate(alternatives):
            if index:
                self._backtrack()
            expr = alternative()
            if expr is not None:
                return expr
        return None

    def parse_range(self) -> Range:
        """Parse `start to end`; a missing operand cannot be recovered from."""
        self._store()
        start = self.parse_expression()
        if start is None:
            raise ParseError("Expected an expression here", self._safe_location())
        locations = list(start.locations)

        if self._peek(TokenName.TO):
            self._consume()
        else:
            self._expected("Expected the 'to' keyword.", *self._past())
            self.did_you_mean("to", *self._past())
            self._fail()

        end = self.parse_expression()
        if end is None:
            raise ParseError("Expected an expression here", self._safe_location())
        locations.extend(end.locations)
        return Range(start, end, locations)

    def _safe_location(self):
        try:
            return self._current().location
        except ParseError:
            return None

    def _parse_id_expression(self) -> Expression | None:
        self._store()
        if not self._peek(TokenName.ID):
            return None
        self._consume()
        token = self._current()
        ident = Identifier(token.value, token.location)

        if self._peek(TokenName.OPEN_PARENTHESIS):
            self._consume()
            params = self._parse_function_parameters()
            if self._peek(TokenName.CLOSE_PARENTHESIS):
                self._consume()
                return FunctionCallExpression(token.value, params, token.location)
            self._expected("Expected a closing pair ')'", *self._past())
            self._fail()
            return None

        sub = self._parse_sub_expression()
        if sub is None:
            return ident
        operator, rhs = sub
        locations = [token.location, operator.location, *rhs.locations]
        return BinaryExpression(ident, rhs, operator, locations)

    def _parse_number_expression(self) -> Expression | None:
        self._store()
        if not self._peek(TokenName.NUMBER):
            return None
        self._consume()
        token = self._current()
        decimals = token.value.count(".")
        if decimals > 1:
            self._unexpected("Too many decimal points in a numerical value", *self._here())
            self._fail()
            return None

        number = Number(token.value, bool(decimals), token.location)
        sub = self._parse_sub_expression()
        if sub is None:
            return number
        operator, rhs = sub
        locations = [token.location, operator.location, *rhs.locations]
        return BinaryExpression(number, rhs, operator, locations)

    def _parse_braced_expression(self) -> Expression | None:
        self._store()
        if not self._peek(TokenName.OPEN_PARENTHESIS):
            return None
        self._consume()

        expr = self.parse_expression()
        if expr is None:
            return None
        if self._peek(TokenName.CLOSE_PARENTHESIS):
            self._consume()
            return expr
        self._expected("Expected a closing pair for '('", *self._past())
        self.did_you_mean(")", *self._past())
        self._fail()
        return None

    def _parse_sub_expression(self) -> tuple[OperatorNode, Expression] | None:
        self._store()
        for index, (kind, symbol) in enumerate(_OPERATORS):
            if index:
                self._backtrack()
            result = self._parse_operator_expression(kind, symbol)
            if result is not None:
                return result
        return None

    def _parse_operator_expression(
        self, kind: TokenName, symbol: str
    ) -> tuple[OperatorNode, Expression] | None:
        self._store()
        if not self._peek(kind):
            return None
        self._consume()
        operator = OperatorNode(symbol, self._current().location)
        rhs = self.parse_expression()
        if rhs is None:
            raise ParseError(
                f"Expected an expression after the '{symbol}'", operator.location
            )
        return operator, rhs

    def _parse_function_parameter(self) -> Expression:
        self._store()
        expr = self.parse_expression()
        if expr is None:
            raise ParseError("Expected a function parameter", self._safe_location())
        return expr

    def _parse_function_parameters(self) -> FunctionParameters:
        params = [self._parse_function_parameter()]
        while self._peek(TokenName.COMMA):
            self._consume()
            params.append(self._parse_function_parameter())
        return FunctionParameters(params)