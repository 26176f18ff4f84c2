"""Command line entry: compile a source file to JSON IR on standard output."""

from __future__ import annotations

import json
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any, TextIO

from .diagnostics import CompilerContext, read_file
from .irgen import IRGenerator
from .lexer import Lexer, LexerError
from .parser import Parser
from .parser_base import ParseError
from .statements import FunctionDefinition


def verify_args(argv: Sequence[str]) -> bool:
    """Check that exactly one existing file was named."""
    if len(argv) != 1:
        print("Error: Invalid Command Usage", file=sys.stderr)
        print("Usage: ./app <file_name>", file=sys.stderr)
        return False
    path = Path(argv[0])
    if not path.exists():
        print(f'Error: "{path}" Not Found', file=sys.stderr)
        return False
    return True


def _function_ir(generator: IRGenerator, function: FunctionDefinition) -> dict[str, Any]:
    instrs: list[Any] = []
    for statement in function.body:
        value = generator.generate(statement)
        if isinstance(value, list):
            instrs.extend(value)
        else:
            instrs.append(value)
    names = function.arguments.names() if function.arguments is not None else []
    args = [{"name": name, "type": "i64"} for name in sorted(set(names))]
    return {"name": function.function_name, "instrs": instrs, "args": args}


def compile_program(source_code: str, out: TextIO | None = None) -> dict[str, Any] | None:
    """Compile source text, write the program as JSON to out and return it.

    Diagnostics go to out as well; on any error nothing else is written and
    None is returned.
    """
    out = out if out is not None else sys.stdout
    context = CompilerContext(source_code)
    try:
        tokens = Lexer(context).tokenize()
    except LexerError as error:
        out.write(error.report)
        return None

    parser = Parser(context, tokens, out)
    try:
        statements = parser.parse()
    except ParseError as error:
        out.write(f"{error}\n")
        return None
    if parser.has_errors():
        return None

    generator = IRGenerator()
    program = {
        "functions": [
            _function_ir(generator, statement)
            for statement in statements
            if isinstance(statement, FunctionDefinition)
        ]
    }
    out.write(json.dumps(program, indent=4, sort_keys=True) + "\n")
    return program


def main(argv: Sequence[str] | None = None) -> int:
    """Compile the file named on the command line."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not verify_args(args):
        return 0
    try:
        source = read_file(args[0])
    except OSError as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1
    compile_program(source, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())