"""First pass: collect labels and data, and size every instruction."""

from __future__ import annotations

import io
import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Iterator

from quillasm.errors import ErrorKind, LineError, describe
from quillasm.labels import (
    DATA,
    ENTRY,
    EXTERN,
    LABEL_SIZE,
    STRING,
    DataBlock,
    DataKind,
    Label,
    SymbolTable,
)

START_ADDRESS = 100
NUMBER_BIT = 14
_MAX_CHUNK = 80  # longest piece a single line read returns

_BLANKS = " \t\n"
_SPACES = " \t"
_C_SPACE = " \t\n\v\f\r"
_WORD_RE = re.compile(r"[^ \t\n\v\f\r]+")
_DIGITS = re.compile(r"[0-9]*")
_JUMP_PARAMS = re.compile(r"([^,]+)(?:,([^)]+))?")

_MNEMONICS = (
    "mov", "cmp", "add", "sub", "not", "clr", "lea", "inc",
    "dec", "jmp", "bne", "red", "prn", "jsr", "rts", "stop",
)
_TWO_OPERANDS = frozenset({"mov", "cmp", "add", "sub", "lea"})
_ONE_OPERAND = frozenset({"prn", "red", "dec", "not", "clr", "inc"})
_NO_OPERANDS = frozenset({"rts", "stop"})
_JUMPS = frozenset({"jsr", "bne", "jmp"})

_RESERVED_LABELS = frozenset(
    set(_MNEMONICS) | {ENTRY, EXTERN, STRING, DATA} | {f"r{i}" for i in range(8)}
)


class _OperandError(ValueError):
    """A directive operand that cannot be parsed."""

    def __init__(self, kind: ErrorKind) -> None:
        super().__init__(describe(kind))
        self.kind = kind


class _Check(Enum):
    VALID = auto()
    RESERVED = auto()
    BAD_FORM = auto()
    BAD_FIRST = auto()
    BAD_CHAR = auto()


@dataclass(frozen=True)
class FirstPassResult:
    """What the first pass learned about a source file."""

    errors: tuple[LineError, ...]
    symbols: SymbolTable
    data: tuple[DataBlock, ...]
    instruction_count: int
    data_count: int

    @property
    def ok(self) -> bool:
        return not self.errors


def _only(text: str, chars: str) -> bool:
    return all(c in chars for c in text)


def _first_word(text: str) -> str | None:
    match = _WORD_RE.search(text)
    return match.group() if match else None


def _leading(text: str, chars: str) -> int:
    return len(text) - len(text.lstrip(chars))


def _physical_lines(lines: str | Iterable[str]) -> Iterator[str]:
    source = io.StringIO(lines) if isinstance(lines, str) else lines
    for line in source:
        while len(line) > _MAX_CHUNK:
            yield line[:_MAX_CHUNK]
            line = line[_MAX_CHUNK:]
        yield line


def _is_comment_or_empty(line: str) -> bool:
    return line.startswith(";") or _only(line, _BLANKS)


def _parse_int(text: str) -> int | None:
    """Optional blanks, optional sign, digits, optional blanks; None otherwise."""
    pos = _leading(text, _SPACES)
    sign = 1
    if text[pos:pos + 1] == "+":
        pos += 1
    if text[pos:pos + 1] == "-":
        sign = -1
        pos += 1
    digits = _DIGITS.match(text, pos).group()
    if not _only(text[pos + len(digits):], _BLANKS):
        return None
    return sign * int(digits) if digits else 0


def _is_in_range(num: int) -> bool:
    if num >= 0:
        return num <= 2 ** (NUMBER_BIT - 3) - 1
    return -num <= 2 ** (NUMBER_BIT - 2) - 1


def _is_ascii_alpha(c: str) -> bool:
    return c.isascii() and c.isalpha()


def _is_ascii_alnum(c: str) -> bool:
    return c.isascii() and c.isalnum()


def _check_label(name: str, after: str) -> _Check:
    if not (len(name) + 1 <= LABEL_SIZE and name and after == " "):
        return _Check.BAD_FORM
    if name in _RESERVED_LABELS:
        return _Check.RESERVED
    if not _is_ascii_alpha(name[0]):
        return _Check.BAD_FIRST
    if not all(_is_ascii_alnum(c) for c in name[1:]):
        return _Check.BAD_CHAR
    return _Check.VALID


def _label_prefix(line: str) -> tuple[str, str] | None:
    """Split 'name:c...' into the text before the first colon and the char after it."""
    colon = line.find(":")
    if colon <= 0 or colon + 1 >= len(line):
        return None
    return line[:colon], line[colon + 1]


def _directive_label_error(check: _Check, after: str) -> ErrorKind | None:
    if check is _Check.RESERVED:
        return ErrorKind.LABEL_CANT_BE_SAVED_WORD
    if check is _Check.BAD_FORM:
        if after != " ":
            return ErrorKind.EXPECTED_SPACE_AFTER_LABEL
        return ErrorKind.LABEL_TOO_LONG_MISSING
    if check is _Check.BAD_FIRST:
        return ErrorKind.LABEL_INVALID_FIRST_CHAR
    if check is _Check.BAD_CHAR:
        return ErrorKind.LABEL_ONLY_ALPHANUMERIC_DIGIT
    return None


def _opcode_label_error(check: _Check, after: str) -> ErrorKind:
    if check is _Check.RESERVED:
        return ErrorKind.LABEL_CANT_BE_SAVED_WORD
    if check is _Check.BAD_FORM:
        if after == " ":
            return ErrorKind.EXPECTED_SPACE_AFTER_LABEL
        return ErrorKind.LABEL_TOO_LONG_MISSING
    if check is _Check.BAD_FIRST:
        return ErrorKind.LABEL_INVALID_FIRST_CHAR
    return ErrorKind.LABEL_ONLY_ALPHANUMERIC_DIGIT


def _find_mnemonic(line: str) -> str | None:
    for mnemonic in _MNEMONICS:
        at = line.find(mnemonic)
        following = line[at + len(mnemonic):at + len(mnemonic) + 1]
        if at != -1 and following and following in _C_SPACE:
            return mnemonic
    return None


def _mnemonic(opcode: object) -> str:
    return opcode if isinstance(opcode, str) else opcode.name.lower()


def _nothing_before(text: str, mnemonic: str) -> bool:
    at = text.find(mnemonic)
    return at != -1 and at == _leading(text, _SPACES)


def _looks_like_register(text: str) -> bool:
    return len(text) > 1 and text[0] == "r" and "0" <= text[1] <= "7"


def _is_register(text: str) -> bool:
    return _looks_like_register(text) and _only(text[2:], _BLANKS)


def _first_operand_register(line: str, mnemonic: str) -> bool:
    start = line.find(mnemonic) + len(mnemonic) + 1
    match = re.match(r"[^,]+", line[start:])
    reg = match.group() if match else ""
    return _looks_like_register(reg) and _only(reg[2:], _SPACES)


def _second_operand_register(line: str, mnemonic: str) -> bool:
    comma = line.find(",", line.find(mnemonic))
    if comma == -1:
        return False
    reg = _first_word(line[comma + 1:]) or ""
    if not _looks_like_register(reg):
        return False
    rest = line[line.find(reg, comma) + 2:]
    return bool(rest) and _only(rest, _BLANKS)


def parse_string_operand(text: str) -> DataBlock:
    """Parse the quoted text after .string; the block ends with a zero word."""
    first = text.find('"')
    if first == -1:
        if _only(text, _BLANKS):
            raise _OperandError(ErrorKind.STRING_TOO_MISSING_OPERANDS)
        raise _OperandError(ErrorKind.STRING_OPERAND_NOT_VALID)
    last = text.rfind('"')
    if first == last or not _only(text[last + 1:], _BLANKS):
        raise _OperandError(ErrorKind.STRING_OPERAND_NOT_VALID)
    values = tuple(ord(c) for c in text[first + 1:last]) + (0,)
    return DataBlock(DataKind.STRING, values)


def parse_data_operand(text: str) -> DataBlock:
    """Parse the comma separated integers after .data."""
    if ",," in text:
        raise _OperandError(ErrorKind.DATA_DOUBLE_COMMAS_ROW)
    if text[_leading(text, _SPACES):].startswith(","):
        raise _OperandError(ErrorKind.DATA_START_COMMA)
    values = []
    for piece in filter(None, text.split(",")):
        if _only(piece, _SPACES):
            raise _OperandError(ErrorKind.DATA_UNEXPECTED_COMMA)
        if "." in piece:
            raise _OperandError(ErrorKind.DATA_UNEXPECTED_DECIMAL_POINT)
        num = _parse_int(piece)
        if num is None:
            raise _OperandError(ErrorKind.DATA_EXPECTED_NUM)
        if not _is_in_range(num):
            raise _OperandError(ErrorKind.DATA_OUT_RANGE)
        values.append(num)
    if not values:
        raise _OperandError(ErrorKind.DATA_OUT_RANGE)
    return DataBlock(DataKind.DATA, tuple(values))


class FirstPass:
    """Walks the expanded source once, filling the symbol table and data image."""

    def __init__(self) -> None:
        self.symbols = SymbolTable()
        self.errors: list[LineError] = []
        self.data: list[DataBlock] = []
        self.instruction_counter = START_ADDRESS
        self.data_counter = 0
        self.line_number = 1

    def run(self, lines: str | Iterable[str]) -> FirstPassResult:
        """Process every line and return what was collected."""
        self.line_number = 1
        for line in _physical_lines(lines):
            if not _is_comment_or_empty(line):
                self._dispatch(line)
            self.line_number += 1
        for label in self.symbols:
            if label.is_data:
                label.line += self.instruction_counter
        return FirstPassResult(
            errors=tuple(self.errors),
            symbols=self.symbols,
            data=tuple(self.data),
            instruction_count=self.instruction_counter,
            data_count=self.data_counter,
        )

    def _dispatch(self, line: str) -> None:
        if STRING in line:
            self.handle_string(line)
        elif DATA in line:
            self.handle_data(line)
        elif EXTERN in line:
            self.handle_extern(line)
        else:
            mnemonic = _find_mnemonic(line)
            if mnemonic is not None:
                words = self.handle_instruction(line, mnemonic)
                if words is not None:
                    self.instruction_counter += words + 1

    def _report(self, kind: ErrorKind) -> None:
        self.errors.append(LineError(self.line_number, kind))

    def _directive_label(
        self, line: str, directive: str, misplaced: ErrorKind
    ) -> tuple[bool, Label | None]:
        prefix = _label_prefix(line)
        if prefix is None:
            if not line.lstrip(_SPACES).startswith(directive):
                self._report(misplaced)
                return False, None
            return True, None
        name, after = prefix
        kind = _directive_label_error(_check_label(name, after), after)
        if kind is not None:
            self._report(kind)
            return False, None
        return True, Label(name)

    def _insert(self, label: Label | None) -> None:
        if label is None:
            return
        if label.name in self.symbols:
            self._report(ErrorKind.LABEL_ALREADY_EXISTS)
            return
        self.symbols.add(label)

    def _add_data(self, parse, text: str) -> None:
        try:
            block = parse(text)
        except _OperandError as err:
            self._report(err.kind)
            return
        self.data.append(block)
        self.data_counter += block.size

    def handle_string(self, line: str) -> None:
        """Record a .string line and the label declared on it."""
        ok, label = self._directive_label(line, STRING, ErrorKind.EXTRA_STRING_B4_STRING)
        if not ok:
            return
        if label is not None:
            label.is_data = True
            label.line = self.data_counter
        self._add_data(parse_string_operand, line[line.find(STRING) + len(STRING):])
        self._insert(label)

    def handle_data(self, line: str) -> None:
        """Record a .data line and the label declared on it."""
        ok, label = self._directive_label(line, DATA, ErrorKind.EXTRA_STRING_B4_DATA)
        if not ok:
            return
        if label is not None:
            label.is_data = True
            label.line = self.data_counter
        operands = line[line.find(DATA) + len(DATA):]
        if _only(operands, _BLANKS):
            self._report(ErrorKind.DATA_EXPECTED_NUM)
            return
        self._add_data(parse_data_operand, operands)
        self._insert(label)

    def handle_extern(self, line: str) -> None:
        """Declare the label named after .extern as external."""
        ok, _ = self._directive_label(line, EXTERN, ErrorKind.EXTRA_STRING_B4_EXTERN)
        if ok:
            self._declare_extern(line[line.find(EXTERN) + len(EXTERN):])

    def _declare_extern(self, text: str) -> None:
        name = _first_word(text) or ""
        if _check_label(name, " ") is not _Check.VALID:
            self._report(ErrorKind.EXTERN_NO_LABEL if not name else ErrorKind.EXTERN_INVALID_LABEL)
            return
        if not _only(text[text.find(name) + len(name):], _BLANKS):
            self._report(ErrorKind.EXTERN_TOO_MANY_OPERANDS)
            return
        existing = self.symbols.find(name)
        if existing is None:
            self.symbols.add(Label(name, external=True))
        elif not existing.external:
            self._report(ErrorKind.LABEL_CANT_BE_EXTERN)

    def _label_before_opcode(self, line: str) -> str | None:
        prefix = _label_prefix(line)
        if prefix is None:
            return None
        name, after = prefix
        check = _check_label(name, after)
        if check is not _Check.VALID:
            self._report(_opcode_label_error(check, after))
            return None
        return name

    def handle_instruction(self, line: str, opcode: object) -> int | None:
        """Return how many extra words the instruction takes; None if the line is wrong.

        The opcode is a mnemonic string or an enum member named after one.
        """
        mnemonic = _mnemonic(opcode)
        name = self._label_before_opcode(line)
        if name is not None:
            if not _nothing_before(line[len(name) + 1:], mnemonic):
                self._report(ErrorKind.EXTRA_STRING_OPCODE)
                return None
            if name in self.symbols:
                self._report(ErrorKind.LABEL_ALREADY_EXISTS)
                return None
            self.symbols.add(Label(name, line=self.instruction_counter))
        elif not _nothing_before(line, mnemonic):
            self._report(ErrorKind.EXTRA_STRING_OPCODE)
            return None
        return self._extra_words(line, mnemonic)

    def _extra_words(self, line: str, mnemonic: str) -> int | None:
        if mnemonic in _TWO_OPERANDS:
            both = _first_operand_register(line, mnemonic) and _second_operand_register(
                line, mnemonic
            )
            return 1 if both else 2
        if mnemonic in _ONE_OPERAND:
            return 1
        if mnemonic in _NO_OPERANDS:
            return 0
        if mnemonic in _JUMPS:
            if "(" not in line[line.find(mnemonic) + 3:]:
                return 1
            match = _JUMP_PARAMS.match(line, line.find("(") + 1)
            first = match.group(1) if match else ""
            second = (match.group(2) if match else None) or ""
            return 2 if _is_register(first) and _is_register(second) else 3
        self._report(ErrorKind.COMMAND_NOT_FOUND)
        return None


def first_pass(lines: str | Iterable[str]) -> FirstPassResult:
    """Run the first pass over source text or an iterable of lines."""
    return FirstPass().run(lines)