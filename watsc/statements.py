"""Statement nodes of the syntax tree."""

from __future__ import annotations

from dataclasses import dataclass, field

from .diagnostics import SourceLocation
from .expressions import Expression, Identifier, Range


class Statement:
    """Base of every statement node; each one exposes a `location`."""

    location: SourceLocation


@dataclass
class VariableDeclaration(Statement):
    """`let x;` or `let x: i32;`."""

    name: str
    type_name: str = ""
    locations: list[SourceLocation] = field(default_factory=list)

    @property
    def var_location(self) -> SourceLocation:
        return self.locations[0] if self.locations else SourceLocation()

    @property
    def type_location(self) -> SourceLocation:
        return self.locations[1] if len(self.locations) > 1 else SourceLocation()

    @property
    def location(self) -> SourceLocation:
        return self.var_location


@dataclass
class VariableAssignment(Statement):
    """`x = expr;`."""

    target: Identifier
    expr: Expression
    location: SourceLocation = SourceLocation()

    @property
    def name(self) -> str:
        return self.target.name


@dataclass
class VariableDeclareAndAssign(Statement):
    """`let x = expr;` or `let x: i64 = expr;`."""

    name: str
    type_name: str
    expr: Expression
    locations: list[SourceLocation] = field(default_factory=list)

    @property
    def location(self) -> SourceLocation:
        return self.locations[0] if self.locations else SourceLocation()


@dataclass
class BreakStatement(Statement):
    """`break;`."""

    location: SourceLocation = SourceLocation()


@dataclass
class ElseIfStatement(Statement):
    """An `else if cond { ... }` branch."""

    condition: Expression
    body: list[Statement] = field(default_factory=list)
    location: SourceLocation = SourceLocation()


@dataclass
class ElseStatement(Statement):
    """An `else { ... }` branch."""

    body: list[Statement] = field(default_factory=list)
    location: SourceLocation = SourceLocation()


@dataclass
class IfStatement(Statement):
    """An `if` with its optional `else if` chain and `else` branch."""

    condition: Expression
    body: list[Statement] = field(default_factory=list)
    else_ifs: list[ElseIfStatement] = field(default_factory=list)
    else_statement: ElseStatement | None = None
    location: SourceLocation = SourceLocation()

    def has_else(self) -> bool:
        return self.else_statement is not None

    def has_else_if(self) -> bool:
        return bool(self.else_ifs)


@dataclass
class ForLoop(Statement):
    """`for i in start to end { ... }`."""

    iter_var: Identifier
    range: Range
    body: list[Statement] = field(default_factory=list)
    location: SourceLocation = SourceLocation()

    @property
    def iteration_variable_name(self) -> str:
        return self.iter_var.name


@dataclass
class WhileLoop(Statement):
    """`while cond { ... }`."""

    condition: Expression
    body: list[Statement] = field(default_factory=list)
    location: SourceLocation = SourceLocation()


@dataclass
class Loop(Statement):
    """`loop { ... }`, left only through `break`."""

    body: list[Statement] = field(default_factory=list)
    location: SourceLocation = SourceLocation()


@dataclass
class MatchArm(Statement):
    """One `pattern => { ... }` arm of a match."""

    condition: Expression
    body: list[Statement] = field(default_factory=list)
    location: SourceLocation = SourceLocation()


@dataclass
class MatchStatement(Statement):
    """`match expr { arms }`."""

    condition: Expression
    arms: list[MatchArm] = field(default_factory=list)
    location: SourceLocation = SourceLocation()


@dataclass
class FunctionArguments(Statement):
    """The parameter names of a function definition."""

    identifiers: list[Identifier] = field(default_factory=list)

    def names(self) -> list[str]:
        return [ident.name for ident in self.identifiers]

    def first_name(self) -> str:
        return self.identifiers[0].name if self.identifiers else ""

    @property
    def location(self) -> SourceLocation:
        """Location of the first argument."""
        if not self.identifiers:
            raise ValueError("function arguments are empty")
        return self.identifiers[0].location


@dataclass
class FunctionCall(Statement):
    """A call used as a statement: `name();`."""

    name: Identifier
    args: list[Statement] = field(default_factory=list)

    @property
    def location(self) -> SourceLocation:
        return self.name.location


@dataclass
class FunctionDefinition(Statement):
    """`function name(a, b) { ... }`."""

    name: Identifier
    arguments: FunctionArguments | None = None
    body: list[Statement] = field(default_factory=list)
    return_type: str = ""
    location: SourceLocation = SourceLocation()

    @property
    def function_name(self) -> str:
        return self.name.name