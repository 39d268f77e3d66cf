"""Lexical checks on source lines: comments, labels, numbers, opcodes, registers."""

from __future__ import annotations

from enum import Enum

from quillasm.labels import LABEL_SIZE

DATA = ".data"
STRING = ".string"
EXTERN = ".extern"
ENTRY = ".entry"

NUMBER_BIT = 14
_SPACE = " \t\n\v\f\r"


class Opcode(Enum):
    """Machine instructions, valued by their opcode number."""

    MOV = 0
    CMP = 1
    ADD = 2
    SUB = 3
    NOT = 4
    CLR = 5
    LEA = 6
    INC = 7
    DEC = 8
    JMP = 9
    BNE = 10
    RED = 11
    PRN = 12
    JSR = 13
    RTS = 14
    STOP = 15

    @property
    def mnemonic(self) -> str:
        return self.name.lower()


class LabelCheck(Enum):
    """Outcome of checking a label name."""

    VALID = 1
    BAD_LENGTH = 0
    RESERVED = -1
    BAD_FIRST_CHAR = -2
    NOT_ALNUM = -3


_RESERVED_WORDS = frozenset(op.mnemonic for op in Opcode) | {ENTRY, EXTERN, STRING, DATA}
_REGISTERS = frozenset(f"r{i}" for i in range(8))


def _span(text: str, chars: str) -> int:
    """Length of the leading run of text made of chars."""
    return len(text) - len(text.lstrip(chars))


def _starts_register(text: str) -> bool:
    return len(text) > 1 and text[0] == "r" and "0" <= text[1] <= "7"


def is_comment_or_empty(line: str) -> bool:
    """True when the line is a comment or holds only white space."""
    if line.startswith(";"):
        return True
    return _span(line, " \t\n") == len(line)


def check_label_name(name: str, char_after: str) -> LabelCheck:
    """Classify a label name and the character following its colon."""
    if not (name and len(name) + 1 <= LABEL_SIZE and char_after == " "):
        return LabelCheck.BAD_LENGTH
    if name in _RESERVED_WORDS or name in _REGISTERS:
        return LabelCheck.RESERVED
    if not (name[0].isascii() and name[0].isalpha()):
        return LabelCheck.BAD_FIRST_CHAR
    if not all(c.isascii() and c.isalnum() for c in name[1:]):
        return LabelCheck.NOT_ALNUM
    return LabelCheck.VALID


def parse_int(text: str) -> int | None:
    """Parse an optionally signed decimal surrounded by blanks; None if malformed."""
    pos = _span(text, " \t")
    sign = 1
    if text[pos:pos + 1] == "+":
        pos += 1
    if text[pos:pos + 1] == "-":
        sign = -1
        pos += 1
    digits = _span(text[pos:], "0123456789")
    number = text[pos:pos + digits]
    trailing = _span(text[pos + digits:], " \t\n")
    if pos + digits + trailing != len(text):
        return None
    return sign * int(number) if number else 0


def is_in_range(num: int) -> bool:
    """True when the number fits the operand field of a machine word."""
    if num >= 0:
        return num <= 2 ** (NUMBER_BIT - 3) - 1
    return -num <= 2 ** (NUMBER_BIT - 2) - 1


def find_opcode(line: str) -> Opcode | None:
    """The first opcode whose mnemonic appears followed by white space."""
    for op in Opcode:
        mnemonic = op.mnemonic
        pos = line.find(mnemonic)
        if pos != -1:
            after = line[pos + len(mnemonic):pos + len(mnemonic) + 1]
            if after and after in _SPACE:
                return op
    return None


def is_register(text: str) -> bool:
    """True for r0..r7, optionally followed by white space."""
    return (
        len(text) == 2 + _span(text[2:], " \t\n")
        and _starts_register(text)
    )


def first_operand_is_register(line: str, mnemonic: str) -> bool:
    """True when the operand right after the mnemonic and one separator is a register."""
    pos = line.find(mnemonic)
    if pos == -1:
        return False
    rest = line[pos + len(mnemonic) + 1:]
    operand = rest.split(",", 1)[0]
    if not _starts_register(operand):
        return False
    return 2 + _span(operand[2:], " \t") == len(operand)


def second_operand_is_register(line: str, mnemonic: str) -> bool:
    """True when the operand after the comma is a register followed only by white space."""
    pos = line.find(mnemonic)
    if pos == -1:
        return False
    comma = line.find(",", pos)
    if comma == -1:
        return False
    after_comma = line[comma + 1:]
    words = after_comma.split()
    if not words or not _starts_register(words[0]):
        return False
    operand = words[0]
    rest = after_comma[after_comma.find(operand) + 2:]
    return bool(rest) and _span(rest, " \t\n") == len(rest)


def no_text_before_opcode(line: str, opcode: Opcode) -> bool:
    """True when only blanks precede the opcode's mnemonic in the line."""
    pos = line.find(opcode.mnemonic)
    if pos == -1:
        return False
    return pos == _span(line, " \t")