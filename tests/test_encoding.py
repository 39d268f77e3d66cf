import pytest

from quillasm.encoding import (
    Addressing,
    OperandType,
    addressing_for,
    command_word,
    data_word,
    label_word,
    number_word,
    operand_type,
    register_number,
    register_word,
    render_word,
    with_parameter_addressing,
)

MNEMONICS = (
    "mov", "cmp", "add", "sub", "not", "clr", "lea", "inc",
    "dec", "jmp", "bne", "red", "prn", "jsr", "rts", "stop",
)


def _decode(text):
    return int(text.replace("/", "1").replace(".", "0"), 2)


def _signed(word):
    return word - (1 << 14) if word & (1 << 13) else word


@pytest.mark.parametrize(
    "text, kind",
    [
        ("#5", OperandType.NUMBER),
        ("#-3", OperandType.NUMBER),
        ("r3", OperandType.REGISTER),
        ("r7 \n", OperandType.REGISTER),
        ("r8", OperandType.LABEL),
        ("r", OperandType.LABEL),
        ("r1x", OperandType.LABEL),
        ("LOOP", OperandType.LABEL),
    ],
)
def test_operand_type(text, kind):
    assert operand_type(text) is kind


def test_addressing_for_each_kind():
    assert addressing_for(OperandType.NUMBER) is Addressing.INSTANT
    assert addressing_for(OperandType.LABEL) is Addressing.DIRECT
    assert addressing_for(OperandType.REGISTER) is Addressing.DIRECT_REGISTER


@pytest.mark.parametrize("n", range(8))
def test_register_number(n):
    assert register_number(f"r{n}") == n


def test_register_number_defaults_to_seven():
    assert register_number("xyz") == 7


@pytest.mark.parametrize("number, mnemonic", list(enumerate(MNEMONICS)))
def test_command_word_fields(number, mnemonic):
    word = command_word(Addressing.DIRECT, Addressing.DIRECT_REGISTER, mnemonic)
    assert (word >> 6) & 0xF == number
    assert (word >> 4) & 3 == Addressing.DIRECT
    assert (word >> 2) & 3 == Addressing.DIRECT_REGISTER
    assert word & 3 == 0
    assert word == command_word(1, 3, number)


def test_command_word_rejects_unknown_opcode():
    with pytest.raises(ValueError):
        command_word(0, 0, "halt")
    with pytest.raises(ValueError):
        command_word(0, 0, 16)


def test_parameter_addressing_keeps_command_bits():
    base = command_word(0, Addressing.JUMPING, "jmp")
    word = with_parameter_addressing(base, Addressing.DIRECT_REGISTER, Addressing.INSTANT)
    assert word & 0x3FF == base
    assert word >> 12 == Addressing.DIRECT_REGISTER
    assert (word >> 10) & 3 == Addressing.INSTANT


def test_register_word_fields():
    word = register_word(3, 5)
    assert word >> 8 == 3
    assert (word >> 2) & 0x3F == 5
    assert word & 3 == 0


@pytest.mark.parametrize("n", [0, 1, 5, 63])
def test_number_word_small_values(n):
    word = number_word(n)
    assert word >> 2 == n
    assert word & 3 == 0


@pytest.mark.parametrize("n", [1, 7, 40, 300, 2047])
def test_number_word_negative_is_complement(n):
    assert (number_word(n) + number_word(-n)) & 0x3FFF == 0
    assert number_word(-n) & 3 == 0


@pytest.mark.parametrize("n", [0, 1, -1, 97, -4095, 2047, -2048])
def test_data_word_round_trip(n):
    assert _signed(data_word(n)) == n


@pytest.mark.parametrize("address", [100, 117, 4095])
def test_label_word_local(address):
    word = label_word(address, False)
    assert word & 3 == 2
    assert word >> 2 == address


def test_label_word_external():
    assert render_word(label_word(150, True)) == "." * 13 + "/"


def test_render_zero():
    assert render_word(0) == "." * 14


@pytest.mark.parametrize("word", [0, 1, 2, 0x3FFF, 0x1234, data_word(-1)])
def test_render_round_trip(word):
    text = render_word(word)
    assert len(text) == 14
    assert set(text) <= {"/", "."}
    assert _decode(text) == word


def test_render_all_ones():
    assert render_word(data_word(-1)) == "/" * 14