# watsc

`watsc` compiles programs written in the small *wats* language into the
JSON form of the Bril intermediate representation.

It reads a source file and turns it into tokens. It parses the tokens into a
syntax tree, generates instructions for every top-level `function`, and prints
a single program object. Each function becomes one entry in `"functions"`,
with the keys `name`, `args` and `instrs`.

## Installing

```
pip install .
```

## Usage

```
watsc program.wats
```

The program goes to standard output as JSON, indented by four spaces, with its
keys sorted. Function arguments are listed once each, in sorted order, all with
type `i64`.

When the lexer or the parser finds an error, `watsc` prints a diagnostic to
standard output and prints no program. The diagnostic gives the line and
column, the offending source line, and a marker under the problem. Some parse
errors also add a "Did You Mean?" suggestion.

A wrong number of arguments, or a file that does not exist, prints a usage
message to standard error. The exit status is 0 in every case except a file
that cannot be read, which gives 1.

## The language

```
function main(a, b) {
    let x = 4 + 5;
    let y: i64 = x * 2;
    for i in 1 to 10 {
        y = y + i;
    }
    while y > 100 {
        y = y - 1;
    }
    if y == 0 {
        x = 1;
    } else if y < 10 {
        x = 2;
    } else {
        x = 3;
    }
    loop {
        break;
    }
}
```

* Variables: `let x;`, `let x: i32;`, `let x = expr;`, `let x: f64 = expr;`, `x = expr;`
* Type names: `i32`, `i64`, `f32`, `f64`
* Operators: `+ - * / % > < >= <= == !=`, with parentheses. Binary
  expressions group to the right and have no precedence, so `a * b + c` is
  read as `a * (b + c)`.
* Control flow: `if` / `else if` / `else`, `for i in a to b` (inclusive),
  `while cond`, `loop`, `break`, and `match expr { pattern => { ... } }`
* Calls as statements: `name();`
* Comments start with `#` and run to the end of the line

The parser rejects these forms:

* loops, `if` and `match` outside a function
* a function defined inside another function
* `break` outside a loop
* a keyword used as a name

A lone `>` also consumes the character that follows it, so write a space
after it (`y > 100`).

## Using it from Python

```python
from watsc.cli import compile_program

program = compile_program("function f() { let x = 1; }")
```

`compile_program(source_code, out=None)` writes the JSON, or the
diagnostics, to `out`, which defaults to standard output. It returns the
program as a dictionary, or `None` if an error was found.

The stages can also be used one at a time:

* `watsc.diagnostics.CompilerContext` holds the source.
* `watsc.lexer.Lexer(context).tokenize()` returns the tokens. It raises
  `LexerError` on an unknown character.
* `watsc.parser.Parser(context, tokens, out).parse()` returns the statements.
  After parsing, `has_errors()` reports whether any error was found. Where
  parsing cannot go on at all, it raises `ParseError`.
* `watsc.irgen.IRGenerator().generate(node)` returns the instructions for a
  node.

## What it does not do

`watsc` does no semantic checking. It does not report:

* undeclared variables
* redeclared variables
* type mismatches
* calls to undefined functions

Types are not inferred. The `type` fields of instructions built from
expressions are left empty. Only the bookkeeping of `for` loops carries `i64`
and `bool`.

A number literal becomes an integer constant of its integer part.

Some constructs are parsed but produce no instructions. `match` statements and
function calls each appear as `null` in `instrs`. Operations with `%` and `!=`
also produce `null` in place of an instruction.

Every `loop` uses the fixed labels `test` and `test_out`.

## Running the tests

```
pip install .[test]
pytest
```