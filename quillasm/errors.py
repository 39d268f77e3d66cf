"""Error kinds reported while assembling, and their messages."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class ErrorKind(Enum):
    """Every problem the assembler can report for a source line."""

    LABEL_CANT_BE_SAVED_WORD = auto()
    EXPECTED_SPACE_AFTER_LABEL = auto()
    LABEL_TOO_LONG_MISSING = auto()
    EXTRA_STRING_B4_STRING = auto()
    LABEL_ALREADY_EXISTS = auto()
    EXTRA_STRING_B4_DATA = auto()
    EXTRA_STRING_B4_EXTERN = auto()
    EXTERN_INVALID_LABEL = auto()
    EXTERN_TOO_MANY_OPERANDS = auto()
    STRING_OPERAND_NOT_VALID = auto()
    DATA_UNEXPECTED_COMMA = auto()
    DATA_UNEXPECTED_DECIMAL_POINT = auto()
    DATA_DOUBLE_COMMAS_ROW = auto()
    DATA_EXPECTED_NUM = auto()
    DATA_OUT_RANGE = auto()
    EXTRA_STRING_OPCODE_LABEL = auto()
    EXTRA_STRING_OPCODE = auto()
    COMMAND_NOT_FOUND = auto()
    STRING_B4_ENTRY = auto()
    ENTRY_NO_LABEL = auto()
    EXTERN_NO_LABEL = auto()
    ENTRY_TOO_MANY_OPERANDS = auto()
    EXPECTED_COMMA_BETWEEN_OPERANDS = auto()
    COMMAND_INVALID_OPERANDS_METHODS = auto()
    COMMAND_INVALID_NUMBER_OF_OPERANDS = auto()
    OPERANDS_UNEXPECTED_DECIMAL_POINT = auto()
    OPERANDS_INVALID_NUM = auto()
    OPERANDS_NUMBER_OUT_RANGE = auto()
    LABEL_NAME_DOSENT_EXISTS_ENTRY = auto()
    LABEL_OPERANDS_DOSENT_EXISTS = auto()
    DIRECTIVE_NO_PARAMS = auto()
    OPERAND_CANT_B_NUMBER = auto()
    EXPECTED_LABEL_AFTER_OPCODE = auto()
    EXTRA_STRING_AFTER_OPERAND = auto()
    JMP_EXPECTED_PARENTHESIS = auto()
    COMMAND_INVALID_NUMBER_OF_PARAMTERS = auto()
    CANT_BE_WHITE_SPACE_IN_PARAMTERS = auto()
    DATA_START_COMMA = auto()
    EXTRA_STRING_AFTER_COMMAND = auto()
    LABEL_INVALID_FIRST_CHAR = auto()
    LABEL_ONLY_ALPHANUMERIC_DIGIT = auto()
    STRING_TOO_MISSING_OPERANDS = auto()
    LABEL_CANT_BE_EXTERN = auto()
    NO_ERROR = auto()


_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.JMP_EXPECTED_PARENTHESIS: "first character after the label must be parenthesis'(' .",
    ErrorKind.EXPECTED_SPACE_AFTER_LABEL: 'After the label ":" there is no space ',
    ErrorKind.EXPECTED_LABEL_AFTER_OPCODE: "After the opcode label is expected ",
    ErrorKind.LABEL_ALREADY_EXISTS: "label already exists.",
    ErrorKind.LABEL_NAME_DOSENT_EXISTS_ENTRY: ".entry directive must be followed by an existing label",
    ErrorKind.LABEL_OPERANDS_DOSENT_EXISTS: "the label operand dosen't exist ",
    ErrorKind.EXTRA_STRING_B4_STRING: 'There is extra string before ".string" and it is not a label.',
    ErrorKind.EXTRA_STRING_B4_DATA: 'There is extra string before ".data" and it is not a label.',
    ErrorKind.EXTRA_STRING_B4_EXTERN: 'There is extra string before ".extern" and it is not a label.',
    ErrorKind.EXTRA_STRING_AFTER_OPERAND: "There is extra string after the operand, it must only be white-space.",
    ErrorKind.EXTRA_STRING_AFTER_COMMAND: "There is extra string after the comand, it must only be white-space.",
    ErrorKind.LABEL_TOO_LONG_MISSING: "label is too long or label is missing",
    ErrorKind.LABEL_CANT_BE_SAVED_WORD: "label can't have the same name as a assmbly saved word.",
    ErrorKind.DATA_DOUBLE_COMMAS_ROW: "After .data too many commas in a row.",
    ErrorKind.DATA_EXPECTED_NUM: ".data expected a numeric parameter.",
    ErrorKind.DATA_UNEXPECTED_DECIMAL_POINT: " .data unexpected a decimal point.",
    ErrorKind.OPERANDS_UNEXPECTED_DECIMAL_POINT: " operand unexpected a decimal point.",
    ErrorKind.OPERANDS_INVALID_NUM: " operand illegal number detected .",
    ErrorKind.DATA_OUT_RANGE: "The integer .data is out of range.",
    ErrorKind.OPERANDS_NUMBER_OUT_RANGE: "The integer operand  is out of range.",
    ErrorKind.DATA_UNEXPECTED_COMMA: ".data  expected an intiger after the comma (instated of the white-space) .",
    ErrorKind.DATA_START_COMMA: ".data  expected an intiger at first instesd started with comma.",
    ErrorKind.STRING_OPERAND_NOT_VALID: ".string operand is invalid.",
    ErrorKind.EXTERN_INVALID_LABEL: ".extern directive received an invalid label.",
    ErrorKind.EXTERN_TOO_MANY_OPERANDS: ".extern must only have one operand that is a label.",
    ErrorKind.COMMAND_NOT_FOUND: "invalid command or directive.",
    ErrorKind.EXTRA_STRING_OPCODE: "There is extra string before  the opcode.",
    ErrorKind.EXTRA_STRING_OPCODE_LABEL: "There is extra string between the label and the opcode.",
    ErrorKind.STRING_B4_ENTRY: "There is extra string before(not label) .entry can have only white-space or label.",
    ErrorKind.ENTRY_NO_LABEL: ".entry directive must be followed by a label.",
    ErrorKind.EXTERN_NO_LABEL: ".extern directive must be followed by a label.",
    ErrorKind.ENTRY_TOO_MANY_OPERANDS: ".entry must only have one operand that is a label.",
    ErrorKind.EXPECTED_COMMA_BETWEEN_OPERANDS: "command must have 2 operands with a comma between them.",
    ErrorKind.COMMAND_INVALID_OPERANDS_METHODS: "operands' addressing methods do not match command requirements.",
    ErrorKind.COMMAND_INVALID_NUMBER_OF_OPERANDS: "number of operands does not match command requirements.",
    ErrorKind.DIRECTIVE_NO_PARAMS: "directive must have operands.",
    ErrorKind.OPERAND_CANT_B_NUMBER: " operand can't be a number .",
    ErrorKind.COMMAND_INVALID_NUMBER_OF_PARAMTERS: "number of paramters does not match command requirements.",
    ErrorKind.CANT_BE_WHITE_SPACE_IN_PARAMTERS: "between the parenthesis must be only the paramters no white-space.",
    ErrorKind.LABEL_INVALID_FIRST_CHAR: "label must start with an alphanumeric character.",
    ErrorKind.LABEL_ONLY_ALPHANUMERIC_DIGIT: "label must only contain alphanumeric characters ane digits.",
    ErrorKind.STRING_TOO_MISSING_OPERANDS: ".string missing operand.",
    ErrorKind.LABEL_CANT_BE_EXTERN: "label already declared, can't apply  extern to a declare label .",
}


def describe(kind: ErrorKind) -> str:
    """Return the message for an error kind; empty for NO_ERROR."""
    return _MESSAGES.get(kind, "")


def format_error(line: int, kind: ErrorKind) -> str:
    """Return the full report for an error on a source line."""
    return f"ERROR: line {line} : {describe(kind)}"


@dataclass(frozen=True)
class LineError:
    """An error found on one line of the source."""

    line: int
    kind: ErrorKind

    def __str__(self) -> str:
        return format_error(self.line, self.kind)