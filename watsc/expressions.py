"""Expression nodes of the syntax tree."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from .diagnostics import SourceLocation


class Expression(ABC):
    """Base of every expression node."""

    @abstractmethod
    def length(self) -> int:
        """Approximate number of source characters the expression spans."""


@dataclass
class OperatorNode:
    """A binary operator symbol and where it appeared."""

    symbol: str
    location: SourceLocation = SourceLocation()


@dataclass
class Identifier(Expression):
    """A reference to a named variable or function."""

    name: str
    location: SourceLocation = SourceLocation()
    type: str = ""

    @property
    def locations(self) -> tuple[SourceLocation, ...]:
        return (self.location,)

    def length(self) -> int:
        return len(self.name)


@dataclass
class Number(Expression):
    """A numeric literal, kept as its source text."""

    text: str
    has_decimal: bool = False
    location: SourceLocation = SourceLocation()
    type: str = ""
    value: int | float | None = None

    @property
    def locations(self) -> tuple[SourceLocation, ...]:
        return (self.location,)

    def length(self) -> int:
        return len(self.text)


@dataclass
class BinaryExpression(Expression):
    """Two operands joined by an operator."""

    lhs: Expression
    rhs: Expression
    operator: OperatorNode
    locations: list[SourceLocation] = field(default_factory=list)
    type: str = ""

    @property
    def operator_symbol(self) -> str:
        return self.operator.symbol

    def length(self) -> int:
        return self.lhs.length() + self.rhs.length() + len(self.operator.symbol)


@dataclass
class FunctionParameters:
    """The expressions passed to a function call."""

    parameters: list[Expression] = field(default_factory=list)

    def length(self) -> int:
        return sum(p.length() for p in self.parameters) + len(self.parameters) - 2


@dataclass
class FunctionCallExpression(Expression):
    """A call whose result is used as a value."""

    name: str
    arguments: FunctionParameters | None = None
    location: SourceLocation = SourceLocation()

    @property
    def type(self) -> str:
        return "call"

    @property
    def locations(self) -> tuple[SourceLocation, ...]:
        return (self.location,)

    def length(self) -> int:
        args = self.arguments.length() if self.arguments is not None else 0
        return len(self.name) + args + 2


@dataclass
class Range(Expression):
    """An inclusive range such as `1 to 200`."""

    start: Expression
    end: Expression
    locations: list[SourceLocation] = field(default_factory=list)

    @property
    def type(self) -> str:
        return "range"

    def length(self) -> int:
        return self.start.length() + self.end.length() + 2