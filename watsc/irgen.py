"""IR generation for whole statements: control flow and function definitions."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from .ir_values import JSON, ValueIRGenerator
from .statements import (
    BreakStatement,
    ElseIfStatement,
    ElseStatement,
    ForLoop,
    FunctionArguments,
    FunctionCall,
    FunctionDefinition,
    IfStatement,
    Loop,
    MatchArm,
    MatchStatement,
    WhileLoop,
)

_LOOP_LABEL = "test"
_LOOP_EXIT_LABEL = "test_out"


def _append(instructions: list[JSON], value: JSON) -> None:
    if isinstance(value, list):
        instructions.extend(value)
    else:
        instructions.append(value)


def _is_jump(instr: JSON) -> bool:
    return isinstance(instr, dict) and instr.get("op") == "jmp"


def _push_label(instr: dict, label: str) -> None:
    instr["labels"] = [*(instr.get("labels") or []), label]


class IRGenerator(ValueIRGenerator):
    """Produces instructions for every node of the syntax tree."""

    def generate(self, node: Any) -> JSON:
        """Generate the IR for a node: an instruction, a list of them, or None."""
        return super().generate(node)

    def _handlers(self) -> dict[type, Callable[[Any], JSON]]:
        handlers = super()._handlers()
        handlers.update(
            {
                BreakStatement: self._break,
                ElseIfStatement: self._else_if,
                ElseStatement: self._else,
                ForLoop: self._for_loop,
                WhileLoop: self._while_loop,
                Loop: self._loop,
                IfStatement: self._if,
                FunctionDefinition: self._function_definition,
                MatchArm: self._empty,
                MatchStatement: self._empty,
                FunctionCall: self._empty,
                FunctionArguments: self._empty,
            }
        )
        return handlers

    def _break(self, node: BreakStatement) -> JSON:
        # The enclosing loop fills in the target.
        return {"op": "jmp", "labels": None}

    def _body(self, statements: list) -> list[JSON]:
        instructions: list[JSON] = []
        for statement in statements:
            _append(instructions, self.generate(statement))
        return instructions

    def _else_if(self, node: ElseIfStatement) -> JSON:
        instructions: list[JSON] = []
        body_label = self.new_temp_var() + "_elseif_body"
        # Placeholder; the enclosing if statement retargets it.
        exit_label = self.new_temp_var() + "_temp_exit_jmp"

        cond_name = self.extract_ir_result(self.generate(node.condition), instructions)
        instructions.append(
            {"op": "br", "labels": [body_label, exit_label], "args": [cond_name]}
        )
        instructions.append({"label": body_label})
        instructions.extend(self._body(node.body))
        instructions.append({"op": "jmp", "labels": [exit_label]})
        return instructions

    def _else(self, node: ElseStatement) -> JSON:
        return self._body(node.body)

    def _for_loop(self, node: ForLoop) -> JSON:
        instructions: list[JSON] = []
        iter_var = node.iteration_variable_name
        test_label = self.new_temp_var() + "_for_test"
        body_label = self.new_temp_var() + "_for_body"
        exit_label = self.new_temp_var() + "_for_exit"

        start_name = self.extract_ir_result(
            self.generate(node.range.start), instructions
        )
        instructions.append(
            {"op": "id", "dest": iter_var, "type": "i64", "args": [start_name]}
        )

        instructions.append({"label": test_label})
        end_name = self.extract_ir_result(self.generate(node.range.end), instructions)
        cond_name = self.new_temp_var()
        instructions.append(
            {"op": "le", "dest": cond_name, "type": "bool", "args": [iter_var, end_name]}
        )
        instructions.append(
            {"op": "br", "labels": [body_label, exit_label], "args": [cond_name]}
        )

        instructions.append({"label": body_label})
        for statement in node.body:
            value = self.generate(statement)
            targets = value if isinstance(value, list) else [value]
            for instr in targets:
                if _is_jump(instr) and not instr.get("labels"):
                    _push_label(instr, exit_label)
            _append(instructions, value)

        one = self.new_temp_var()
        instructions.append({"op": "const", "dest": one, "type": "i64", "value": 1})
        total = self.new_temp_var()
        instructions.append(
            {"op": "add", "dest": total, "type": "i64", "args": [iter_var, one]}
        )
        instructions.append(
            {"op": "id", "dest": iter_var, "type": "i64", "args": [total]}
        )
        instructions.append({"op": "jmp", "labels": [test_label]})
        instructions.append({"label": exit_label})
        return instructions

    def _while_loop(self, node: WhileLoop) -> JSON:
        instructions: list[JSON] = []
        test_label = self.new_temp_var() + "_while_test"
        body_label = self.new_temp_var() + "_while_body"
        exit_label = self.new_temp_var() + "_while_exit"

        instructions.append({"label": test_label})
        condition = self.generate(node.condition)
        if isinstance(condition, list):
            instructions.extend(condition)
            condition = condition[-1] if condition else None
        cond_name = condition.get("dest") if isinstance(condition, dict) else None
        if not isinstance(cond_name, str):
            raise ValueError("while condition does not produce a named result")

        instructions.append(
            {"op": "br", "labels": [body_label, exit_label], "args": [cond_name]}
        )
        instructions.append({"label": body_label})
        for statement in node.body:
            value = self.generate(statement)
            if isinstance(value, list):
                for instr in value:
                    if _is_jump(instr) and instr.get("labels") is None:
                        _push_label(instr, exit_label)
            elif _is_jump(value):
                _push_label(value, exit_label)
            _append(instructions, value)

        instructions.append({"op": "jmp", "labels": [test_label]})
        instructions.append({"label": exit_label})
        return instructions

    def _loop(self, node: Loop) -> JSON:
        instructions: list[JSON] = [{"label": _LOOP_LABEL}]
        for statement in node.body:
            value = self.generate(statement)
            if isinstance(value, list):
                for instr in value:
                    if _is_jump(instr) and instr.get("labels") is None:
                        _push_label(instr, _LOOP_EXIT_LABEL)
                instructions.extend(value)
            else:
                if _is_jump(value):
                    _push_label(value, _LOOP_EXIT_LABEL)
                instructions.append(value)
        instructions.append({"op": "jmp", "labels": [_LOOP_LABEL]})
        instructions.append({"label": _LOOP_EXIT_LABEL})
        return instructions

    def _if(self, node: IfStatement) -> JSON:
        instructions: list[JSON] = []
        body_label = self.new_temp_var() + "_if_body"
        exit_label = self.new_temp_var() + "_if_exit"
        next_label = self.new_temp_var() + "_next_check"

        cond_name = self.extract_ir_result(self.generate(node.condition), instructions)
        instructions.append(
            {"op": "br", "labels": [body_label, next_label], "args": [cond_name]}
        )
        instructions.append({"label": body_label})
        instructions.extend(self._body(node.body))
        instructions.append({"op": "jmp", "labels": [exit_label]})

        current_label = next_label
        for index, else_if in enumerate(node.else_ifs, start=1):
            instructions.append({"label": current_label})
            else_if_ir = self.generate(else_if)
            chain_label = f"{self.new_temp_var()}_chain_{index}"

            for instr in else_if_ir:
                if isinstance(instr, dict) and instr.get("op") == "br":
                    instr["labels"][1] = chain_label
                    break
            if else_if_ir and _is_jump(else_if_ir[-1]):
                else_if_ir[-1]["labels"][0] = exit_label

            instructions.extend(else_if_ir)
            current_label = chain_label

        instructions.append({"label": current_label})
        if node.else_statement is not None:
            _append(instructions, self.generate(node.else_statement))
        instructions.append({"label": exit_label})
        return instructions

    def _function_definition(self, node: FunctionDefinition) -> JSON:
        args = []
        if node.arguments is not None:
            args = [
                {"name": ident.name, "type": ident.type}
                for ident in node.arguments.identifiers
            ]
        instrs: list[JSON] = []
        for statement in node.body:
            value = self.generate(statement)
            if isinstance(value, list):
                instrs.extend(value)
            elif isinstance(value, dict) and value:
                instrs.append(value)
        return {"name": node.function_name, "args": args, "instrs": instrs}