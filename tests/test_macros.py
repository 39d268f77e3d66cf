import pytest

from quillasm.macros import ExpansionResult, Macro, expand_macros, is_valid_macro_name


@pytest.mark.parametrize("name", ["mov", "stop", "jsr", "r0", "r7"])
def test_reserved_names_rejected(name):
    assert is_valid_macro_name(name) is False


@pytest.mark.parametrize("name", ["m1", "loop", "r8", "rr", "movx"])
def test_other_names_accepted(name):
    assert is_valid_macro_name(name) is True


def test_plain_source_is_tokenised():
    result = expand_macros("mov r1, r2\nstop\n")
    assert result.text == "mov r1, r2 \nstop "
    assert result.macros == ()
    assert result.errors == ()


def test_macro_is_recorded_and_expanded():
    body = "inc r1\nmov r2, r3\n"
    source = "mcr m1\n" + body + "endmcr\nm1\nstop\n"
    result = expand_macros(source)
    assert result.macros == (Macro("m1", body),)
    assert result.text == "\n" + body + "stop "
    assert result.errors == ()


def test_definition_lines_do_not_appear():
    source = "mcr m1\ninc r1\nendmcr\nm1\n"
    result = expand_macros(source)
    assert "mcr" not in result.text
    assert "inc r1" in result.text


def test_invalid_macro_name_reported():
    result = expand_macros("mcr mov\ninc r1\nendmcr\n")
    assert result.errors == ("Error line 1: name of macro not valid.",)
    assert all(macro.name != "mov" for macro in result.macros)
    assert "inc r1" in result.text


def test_unterminated_macro_body_is_appended():
    result = expand_macros("stop\nmcr m2\ninc r1\n")
    assert result.macros == (Macro("m2", "inc r1\n"),)
    assert result.text.endswith("inc r1\n")
    assert result.text.startswith("stop")


def test_first_definition_wins():
    source = "mcr m\ninc r1\nendmcr\nmcr m\ndec r2\nendmcr\nm\n"
    result = expand_macros(source)
    assert len(result.macros) == 2
    assert "inc r1" in result.text
    assert "dec r2" not in result.text


def test_long_line_is_split_into_chunks():
    result = expand_macros("a" * 100 + "\n")
    assert result.text.split() == ["a" * 80, "a" * 20]


def test_result_is_expansion_result():
    result = expand_macros("")
    assert result == ExpansionResult("", (), ())