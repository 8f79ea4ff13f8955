from __future__ import annotations

import pytest

from optscan.parser.errors import OptionError
from optscan.parser.errors import OptionValueError
from optscan.parser.option import Option


def test_option_strings_are_split_into_short_and_long() -> None:
    option = Option("-f", "--file", "--path")

    assert option._short_opts == ["-f"]
    assert option._long_opts == ["--file", "--path"]
    assert option.key == "-f"
    assert option.get_opt_string() == "--file"
    assert str(option) == "-f/--file/--path"


def test_key_of_long_only_option() -> None:
    assert Option("--dry-run").key == "--dry-run"


def test_at_least_one_option_string_is_required() -> None:
    with pytest.raises(TypeError):
        Option()


@pytest.mark.parametrize("opt", ["-", "f", "--", "-ab", "---x", "file", "--a=b"])
def test_invalid_option_strings(opt: str) -> None:
    with pytest.raises(OptionError):
        Option(opt)


def test_unknown_keyword_argument() -> None:
    with pytest.raises(OptionError, match="invalid keyword arguments: dest"):
        Option("-f", dest="file")


def test_flag_by_default() -> None:
    option = Option("-v")

    assert option.arity == "none"
    assert not option.takes_value()
    assert not option.required


def test_type_implies_required_arity() -> None:
    option = Option("-n", type=int)

    assert option.type == "int"
    assert option.arity == "required"
    assert option.takes_value()


def test_choices_imply_choice_type() -> None:
    option = Option("-m", choices=["fast", "slow"])

    assert option.type == "choice"
    assert option.arity == "required"


@pytest.mark.parametrize(
    "attrs",
    [
        {"arity": "many"},
        {"type": "date"},
        {"type": int, "arity": "none"},
        {"type": "choice"},
        {"choices": "abc"},
        {"type": int, "choices": ["1"]},
        {"max_args": 2},
        {"arity": "required", "max_args": 0},
        {"value_separator": "="},
        {"arity": "required", "value_separator": "=="},
    ],
)
def test_invalid_attributes(attrs: dict) -> None:
    with pytest.raises(OptionError):
        Option("-o", **attrs)


def test_matches_bare_and_dashed_names() -> None:
    option = Option("-f", "--file")

    assert option.matches("f")
    assert option.matches("-f")
    assert option.matches("file")
    assert option.matches("--file")
    assert not option.matches("fi")


def test_value_separator_splits_values() -> None:
    option = Option("-D", arity="required", value_separator="=")
    option.add_value("key=value")

    assert option.values == ["key", "value"]


def test_max_args_limits_values() -> None:
    option = Option("-D", arity="required", max_args=2, value_separator="=")

    assert option.can_accept("key=value")
    assert not option.can_accept("a=b=c")

    option.add_value("key=value")

    assert option.is_full()
    with pytest.raises(OptionValueError):
        option.add_value("other")


def test_clear_values() -> None:
    option = Option("-o", arity="required")
    option.add_value("a")
    option.clear_values()

    assert option.values == []


@pytest.mark.parametrize(
    ("type_", "value", "expected"),
    [
        ("int", "10", 10),
        ("int", "0x1f", 31),
        ("int", "0b101", 5),
        ("int", "017", 17),
        ("int", "010", 10),
        ("int", "08", 8),
        ("int", "-0x10", -16),
        ("long", "+42", 42),
        ("float", "1.5", 1.5),
        ("complex", "1+2j", 1 + 2j),
        ("string", "abc", "abc"),
    ],
)
def test_check_value(type_: str, value: str, expected: object) -> None:
    assert Option("-n", type=type_).check_value("-n", value) == expected


def test_check_value_invalid_number() -> None:
    with pytest.raises(OptionValueError, match="option -n: invalid integer value: 'ten'"):
        Option("-n", type=int).check_value("-n", "ten")


def test_check_value_invalid_choice() -> None:
    option = Option("-m", choices=["fast", "slow"])

    assert option.check_value("-m", "fast") == "fast"
    with pytest.raises(OptionValueError, match="invalid choice: 'medium'"):
        option.check_value("-m", "medium")
