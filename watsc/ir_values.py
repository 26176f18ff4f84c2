"""IR generation for expressions and variable statements."""

from __future__ import annotations

import itertools
from collections.abc import Callable, Iterator
from typing import Any

from .expressions import (
    BinaryExpression,
    FunctionCallExpression,
    Identifier,
    Number,
    Range,
)
from .statements import (
    VariableAssignment,
    VariableDeclaration,
    VariableDeclareAndAssign,
)

JSON = Any

_ARITHMETIC_OPS = {
    "+": "add",
    "-": "sub",
    "*": "mul",
    "/": "div",
    ">": "gt",
    "<": "lt",
    "==": "eq",
    ">=": "ge",
    "<=": "le",
}

_LONG_MAX = 2**63 - 1

# Temporary names are unique across every generator in a process.
_SHARED_COUNTER: Iterator[int] = itertools.count()


def arithmetic_instruction(
    node: BinaryExpression, destination: str, lhs_name: str, rhs_name: str
) -> JSON:
    """Build the instruction for a binary operator, or None if it has none."""
    op = _ARITHMETIC_OPS.get(node.operator_symbol)
    if op is None:
        return None
    return {
        "op": op,
        "dest": destination,
        "type": node.type,
        "args": [lhs_name, rhs_name],
    }


class ValueIRGenerator:
    """Produces instructions, as JSON-like values, for value-carrying nodes."""

    def __init__(self, counter: Iterator[int] | None = None) -> None:
        self._counter = counter if counter is not None else _SHARED_COUNTER

    def _handlers(self) -> dict[type, Callable[[Any], JSON]]:
        return {
            Number: self._number,
            Identifier: self._identifier,
            BinaryExpression: self._binary,
            Range: self._empty,
            FunctionCallExpression: self._empty,
            VariableDeclaration: self._declaration,
            VariableAssignment: self._assignment,
            VariableDeclareAndAssign: self._assignment,
        }

    def generate(self, node: Any) -> JSON:
        """Generate the IR for a node: an instruction, a list of them, or None."""
        handlers = self._handlers()
        for cls in type(node).__mro__:
            handler = handlers.get(cls)
            if handler is not None:
                return handler(node)
        raise TypeError(f"cannot generate IR for {type(node).__name__}")

    def new_temp_var(self) -> str:
        """Return a fresh temporary variable name."""
        return f"tempVar_{next(self._counter)}"

    def extract_ir_result(self, result: JSON, instructions: list[JSON]) -> str:
        """Append what result needs to instructions and return the name holding it."""
        if isinstance(result, list):
            if not result:
                raise ValueError("no instructions to take a result from")
            instructions.extend(result)
            last = result[-1]
            if not isinstance(last, dict) or not isinstance(last.get("dest"), str):
                raise ValueError("last instruction has no destination")
            return last["dest"]
        if not isinstance(result, dict):
            raise ValueError("no result to extract")
        op = result.get("op")
        if op == "id":
            return result["args"][0]
        if op == "const":
            temp_var = self.new_temp_var()
            result["dest"] = temp_var
            instructions.append(result)
            return temp_var
        raise ValueError(f"cannot take a result from a '{op}' instruction")

    def _empty(self, node: Any) -> JSON:
        return None

    def _number(self, node: Number) -> JSON:
        value = int(node.text.partition(".")[0])
        if value > _LONG_MAX:
            raise OverflowError(f"{node.text} does not fit in a 64-bit integer")
        return {"op": "const", "type": node.type, "val": value}

    def _identifier(self, node: Identifier) -> JSON:
        return {"op": "id", "type": node.type, "args": [node.name]}

    def _binary(self, node: BinaryExpression) -> JSON:
        instructions: list[JSON] = []
        lhs_name = self.extract_ir_result(self.generate(node.lhs), instructions)
        rhs_name = self.extract_ir_result(self.generate(node.rhs), instructions)
        destination = self.new_temp_var()
        instructions.append(arithmetic_instruction(node, destination, lhs_name, rhs_name))
        return instructions

    def _declaration(self, node: VariableDeclaration) -> JSON:
        return {"op": "const", "dest": node.name, "type": "", "value": "undef"}

    def _assignment(self, node: VariableAssignment | VariableDeclareAndAssign) -> JSON:
        destination = node.name
        result = self.generate(node.expr)
        if isinstance(result, list):
            *leading, last = result
            last = dict(last) if isinstance(last, dict) else {}
            last["dest"] = destination
            return [*leading, last]
        result = result if isinstance(result, dict) else {}
        if result.get("op") == "const" and "val" in result:
            return {
                "op": "const",
                "dest": destination,
                "type": result.get("type"),
                "value": result["val"],
            }
        return {
            "op": result.get("op"),
            "dest": destination,
            "type": result.get("type"),
            "args": result.get("args"),
        }