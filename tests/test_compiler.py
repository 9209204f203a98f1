import pytest

from ibancheck.errors import FormatCompileError
from ibancheck.rules.compiler import (
    CHARACTER_CLASSES,
    compile_format,
    compile_layout,
    layout_length,
    parse_format,
)


def test_parse_format_pairs():
    assert parse_format("U04F10") == (("U", 4), ("F", 10))
    assert parse_format("F08F05F10U01A01") == (
        ("F", 8), ("F", 5), ("F", 10), ("U", 1), ("A", 1),
    )


def test_layout_length():
    assert layout_length(parse_format("U04F02F02F12F03U03")) == 26


@pytest.mark.parametrize(
    "descriptor",
    ["", "U4F10", "X04", "U04F1", "U04 F10", "u04f10", "U04F10Z", "F٠٤", "U04F١٠"],
)
def test_parse_format_rejects_garbage(descriptor):
    with pytest.raises(FormatCompileError):
        parse_format(descriptor)


def test_zero_repeat_count_is_an_error():
    with pytest.raises(FormatCompileError):
        parse_format("U00F10")


def test_compile_layout_rejects_unknown_class():
    with pytest.raises(FormatCompileError):
        compile_layout([("Q", 3)])


def test_compiled_pattern_is_a_full_match():
    pat = compile_format("U04F10")
    assert pat.fullmatch("ABNA0417164300")
    assert not pat.fullmatch("ABNA041716430")      # too short
    assert not pat.fullmatch("ABNA04171643000")    # trailing extra
    assert not pat.fullmatch("ABNA05175522AB")     # letters where digits go
    assert not pat.fullmatch("abna0417164300")     # U is uppercase only


class TestCharacterClasses:
    """Each class code accepts exactly its character set."""

    @pytest.mark.parametrize(
        "cls,accepted,rejected",
        [
            ("F", "0189", "aZ"),
            ("L", "az", "A0"),
            ("U", "AZ", "a0"),
            ("A", "0aZ", "-_"),
            ("B", "0Z", "a"),
            ("C", "aZ", "0"),
            ("W", "0a", "Z"),
        ],
    )
    def test_class(self, cls, accepted, rejected):
        pat = compile_layout([(cls, 1)])
        for ch in accepted:
            assert pat.fullmatch(ch), (cls, ch)
        for ch in rejected:
            assert not pat.fullmatch(ch), (cls, ch)

    def test_seven_classes(self):
        assert sorted(CHARACTER_CLASSES) == ["A", "B", "C", "F", "L", "U", "W"]
