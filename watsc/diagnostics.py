"""Source text helpers and terminal diagnostic formatting."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

_COLORS = {
    "blue": "\033[0;34m",
    "green": "\033[0;32m",
    "red": "\033[0;31m",
}
_RESET = "\033[0m"


@dataclass(frozen=True)
class SourceLocation:
    """A 1-based line and column in the source text."""

    line: int = 0
    column: int = 0


def split_str(text: str, delim: str = "\n") -> list[str]:
    """Split text on delim; a trailing empty piece is dropped."""
    parts: list[str] = []
    if not text:
        return parts
    pos = 0
    found = text.find(delim)
    while found != -1:
        parts.append(text[pos:found])
        pos = found + 1
        found = text.find(delim, pos)
    if pos < len(text):
        parts.append(text[pos:])
    return parts


@dataclass
class CompilerContext:
    """The source being compiled, kept whole and split into lines."""

    source_code: str
    lines: list[str] = field(init=False)

    def __post_init__(self) -> None:
        self.lines = split_str(self.source_code)

    def line_text(self, line: int) -> str:
        """Return the text of a 1-based line, or an empty string."""
        if 1 <= line <= len(self.lines):
            return self.lines[line - 1]
        return ""


def read_file(path: str | os.PathLike[str]) -> str:
    """Read a whole file as text, keeping its bytes unchanged."""
    return Path(path).read_bytes().decode("utf-8", errors="surrogateescape")


def colorize(color: str, text: str) -> str:
    """Wrap text in the terminal escape codes for a colour name."""
    return f"{_COLORS.get(color, _RESET)}{text}{_RESET}"


def set_arrow(pos: int, times: int = 1) -> str:
    """Carets starting at 1-based column pos."""
    return " " * max(pos - 1, 0) + "^" * times


def set_arrow_left(pos: int, times: int = 1) -> str:
    """Carets after pos spaces."""
    return " " * max(pos, 0) + "^" * times


def combine_arrows(base: str, overlay: str) -> str:
    """Lay the carets of overlay over base."""
    chars = list(base.ljust(len(overlay)))
    for index, char in enumerate(overlay):
        if char == "^":
            chars[index] = "^"
    return "".join(chars)


def multi_part_arrow(*args: int) -> str:
    """Combine caret segments given as (start, length) pairs."""
    if len(args) % 2:
        raise ValueError("multi_part_arrow takes (start, length) pairs")
    pairs = list(zip(args[::2], args[1::2]))
    result = ""
    for start, length in reversed(pairs):
        result = combine_arrows(set_arrow_left(start, length), result)
    return result


def set_plus(pos: int, times: int = 1) -> str:
    """Plus signs starting at 1-based column pos."""
    return " " * max(pos - 1, 0) + "+" * times