"""Machine-word encoding: operand kinds, addressing modes and 14-bit words."""

from __future__ import annotations

from enum import Enum, IntEnum

WORD_BITS = 14
WORD_MASK = (1 << WORD_BITS) - 1
ONE = "/"
ZERO = "."

_MNEMONICS = (
    "mov", "cmp", "add", "sub", "not", "clr", "lea", "inc",
    "dec", "jmp", "bne", "red", "prn", "jsr", "rts", "stop",
)
_REGISTER_BLANKS = " \t\n"

EXTERNAL_MARK = 1  # A,R,E bits of a word that refers to an external label
RELOCATABLE_MARK = 2  # A,R,E bits of a word that refers to a local label


class OperandType(Enum):
    """What an operand written in the source is."""

    NUMBER = "number"
    REGISTER = "register"
    LABEL = "label"


class Addressing(IntEnum):
    """Addressing modes as they are stored in an instruction word."""

    INSTANT = 0
    DIRECT = 1
    JUMPING = 2
    DIRECT_REGISTER = 3


def _is_register(text: str) -> bool:
    return (
        len(text) >= 2
        and text[0] == "r"
        and "0" <= text[1] <= "7"
        and all(c in _REGISTER_BLANKS for c in text[2:])
    )


def operand_type(text: str) -> OperandType:
    """Classify an operand: '#...' is a number, 'r0'..'r7' a register, else a label."""
    if text.startswith("#"):
        return OperandType.NUMBER
    if _is_register(text):
        return OperandType.REGISTER
    return OperandType.LABEL


def addressing_for(kind: OperandType) -> Addressing:
    """Return the addressing mode used for an operand of the given kind."""
    if kind is OperandType.NUMBER:
        return Addressing.INSTANT
    if kind is OperandType.LABEL:
        return Addressing.DIRECT
    return Addressing.DIRECT_REGISTER


def register_number(text: str) -> int:
    """Return the register a valid register operand names; 7 when none of r0-r6 appear."""
    return next((n for n in range(7) if f"r{n}" in text), 7)


def _opcode_number(opcode: object) -> int:
    if isinstance(opcode, str):
        name = opcode
    elif isinstance(opcode, int):
        number = int(opcode)
        if 0 <= number < len(_MNEMONICS):
            return number
        raise ValueError(f"unknown opcode {opcode!r}")
    else:
        name = str(getattr(opcode, "name", "")).lower()
    try:
        return _MNEMONICS.index(name)
    except ValueError:
        raise ValueError(f"unknown opcode {opcode!r}") from None


def command_word(source_mode: int, dest_mode: int, opcode: object) -> int:
    """Encode the first word of an instruction.

    The opcode is a number, a mnemonic or an enum member named after one.
    """
    number = _opcode_number(opcode)
    word = number << 6 | (int(source_mode) & 3) << 4 | (int(dest_mode) & 3) << 2
    return word & WORD_MASK


def with_parameter_addressing(word: int, first: int, second: int) -> int:
    """Add the addressing modes of a jump's two parameters to its first word."""
    return (word | (int(first) & 3) << 12 | (int(second) & 3) << 10) & WORD_MASK


def register_word(first: int, second: int) -> int:
    """Encode a word holding a source register and a destination register."""
    return ((int(first) & 0x3F) << 8 | (int(second) & 0x3F) << 2) & WORD_MASK


def number_word(num: int) -> int:
    """Encode an immediate operand; negative values are stored in two's complement.

    Only the low six bits and bits eight to eleven of the magnitude are kept,
    the low six shifted past the A,R,E field.
    """
    magnitude = abs(num)
    word = (magnitude & 0x3F) << 2 | (magnitude & 0xF00)
    if num < 0:
        word = -word
    return word & WORD_MASK


def data_word(num: int) -> int:
    """Encode one word of .data or .string in 14-bit two's complement."""
    word = abs(num) & WORD_MASK
    if num < 0:
        word = -word
    return word & WORD_MASK


def label_word(address: int, external: bool) -> int:
    """Encode a reference to a label: external ones hold only the E bit."""
    if external:
        return EXTERNAL_MARK
    return ((int(address) & 0xFFF) << 2 | RELOCATABLE_MARK) & WORD_MASK


def render_word(word: int) -> str:
    """Render a word most significant bit first, '/' for one and '.' for zero."""
    return "".join(
        ONE if word >> bit & 1 else ZERO for bit in range(WORD_BITS - 1, -1, -1)
    )