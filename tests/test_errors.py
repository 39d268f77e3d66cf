import pytest

from quillasm.errors import ErrorKind, LineError, describe, format_error


def test_describe_known_message():
    assert describe(ErrorKind.LABEL_ALREADY_EXISTS) == "label already exists."


def test_describe_no_error_is_empty():
    assert describe(ErrorKind.NO_ERROR) == ""


@pytest.mark.parametrize(
    "kind", [k for k in ErrorKind if k is not ErrorKind.NO_ERROR]
)
def test_every_real_error_has_a_message(kind):
    message = describe(kind)
    assert message.strip()
    assert "\n" not in message


def test_format_error_prefix_and_message():
    text = format_error(7, ErrorKind.COMMAND_NOT_FOUND)
    assert text == "ERROR: line 7 : invalid command or directive."


def test_format_error_keeps_message_verbatim():
    kind = ErrorKind.DATA_UNEXPECTED_DECIMAL_POINT
    assert format_error(3, kind).endswith(describe(kind))
    assert format_error(3, kind).startswith("ERROR: line 3 : ")


def test_line_error_str_matches_format():
    err = LineError(12, ErrorKind.ENTRY_NO_LABEL)
    assert str(err) == format_error(12, ErrorKind.ENTRY_NO_LABEL)
    assert err.line == 12
    assert err.kind is ErrorKind.ENTRY_NO_LABEL


def test_line_error_is_immutable():
    err = LineError(1, ErrorKind.DATA_OUT_RANGE)
    with pytest.raises(AttributeError):
        err.line = 2
    assert err.line == 1


def test_line_errors_compare_by_value():
    assert LineError(4, ErrorKind.DATA_OUT_RANGE) == LineError(4, ErrorKind.DATA_OUT_RANGE)
    assert LineError(4, ErrorKind.DATA_OUT_RANGE) != LineError(5, ErrorKind.DATA_OUT_RANGE)