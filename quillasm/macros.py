"""Macro expansion run on the source before assembling."""

from __future__ import annotations

import io
import re
from dataclasses import dataclass
from typing import Iterator

_MAX_CHUNK = 80  # longest piece a single line read returns
_WORD_PATTERN = re.compile(r"[^ \t\n\v\f\r]+")

_RESERVED = frozenset(
    {
        "mov", "cmp", "add", "sub", "not", "clr", "lea", "inc",
        "dec", "jmp", "bne", "red", "prn", "jsr", "rts", "stop",
    }
    | {f"r{i}" for i in range(8)}
)


@dataclass(frozen=True)
class Macro:
    """A named block of source lines."""

    name: str
    body: str


@dataclass(frozen=True)
class ExpansionResult:
    """The expanded source, the macros found, and any error messages."""

    text: str
    macros: tuple[Macro, ...]
    errors: tuple[str, ...]


def is_valid_macro_name(name: str) -> bool:
    """A macro may not be named after an instruction or a register."""
    return name not in _RESERVED


def _physical_lines(text: str) -> Iterator[str]:
    for line in io.StringIO(text):
        while len(line) > _MAX_CHUNK:
            yield line[:_MAX_CHUNK]
            line = line[_MAX_CHUNK:]
        yield line


def _first_word(text: str) -> str | None:
    match = _WORD_PATTERN.search(text)
    return match.group() if match else None


def _leading_blanks(text: str) -> int:
    return len(text) - len(text.lstrip(" \t\n"))


def _read_body(lines: Iterator[str]) -> tuple[str, bool]:
    """Collect lines up to 'endmcr'; the flag is True when the file ended first."""
    parts = []
    for line in lines:
        if "endmcr" in line:
            return "".join(parts), False
        parts.append(line)
    return "".join(parts), True


def _lookup(macros: list[Macro], name: str) -> Macro | None:
    return next((macro for macro in macros if macro.name == name), None)


def _expand_line(line: str, macros: list[Macro], out: list[str], last: bool) -> bool:
    pos = 0
    while pos < len(line):
        word = _first_word(line[pos:])
        if word is None:
            break
        macro = _lookup(macros, word)
        if macro is not None:
            out.append(macro.body)
            pos += 1 + len(word)
            last = True
        else:
            out.append(word + " ")
            pos += 1 + len(word) + _leading_blanks(line[pos:])
            last = False
    return last


def expand_macros(text: str) -> ExpansionResult:
    """Record 'mcr ... endmcr' blocks and replace their names with their bodies."""
    macros: list[Macro] = []
    errors: list[str] = []
    out: list[str] = []
    lines = _physical_lines(text)
    unterminated = False
    last = False

    for line_num, line in enumerate(lines, start=1):
        start = line.find("mcr")
        if start != -1:
            name = _first_word(line[start + 3:]) or ""
            if not is_valid_macro_name(name):
                errors.append(f"Error line {line_num}: name of macro not valid.")
                continue
            body, unterminated = _read_body(lines)
            macros.append(Macro(name, body))
            continue
        if not last and line_num > 1:
            out.append("\n")
        last = _expand_line(line, macros, out, last)

    if unterminated:
        out.append(macros[-1].body)

    return ExpansionResult("".join(out), tuple(macros), tuple(errors))