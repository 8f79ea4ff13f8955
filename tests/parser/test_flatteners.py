from __future__ import annotations

import pytest

from optscan.parser.flatteners import BasicFlattener
from optscan.parser.flatteners import GnuFlattener
from optscan.parser.flatteners import PosixFlattener
from optscan.parser.flatteners import get_flattener
from optscan.parser.options import Options


@pytest.fixture()
def options(options: Options) -> Options:
    options.add_option("-D", arity="required", value_separator="=")
    return options


def test_get_flattener() -> None:
    assert isinstance(get_flattener("basic"), BasicFlattener)
    assert isinstance(get_flattener("gnu"), GnuFlattener)
    assert isinstance(get_flattener("posix"), PosixFlattener)

    with pytest.raises(ValueError, match="unknown flattener 'bsd'"):
        get_flattener("bsd")


def test_basic_leaves_arguments_alone(options: Options) -> None:
    arguments = ["-ab", "--build=x", "foo"]
    tokens = BasicFlattener().flatten(options, arguments, False)

    assert tokens == arguments
    assert tokens is not arguments


@pytest.mark.parametrize(
    ("arguments", "expected"),
    [
        (["--build=x", "foo"], ["--build", "x", "foo"]),
        (["--build", "x"], ["--build", "x"]),
        (["-bx"], ["-b", "x"]),
        (["-Dkey=value"], ["-D", "key=value"]),
        (["-b=x"], ["-b", "x"]),
        (["-ab"], ["-a", "b"]),
        (["--unknown=x"], ["--unknown=x"]),
        (["-", "--", "--build=x"], ["-", "--", "--build=x"]),
        (['--build="a b"'], ["--build", '"a b"']),
    ],
)
def test_gnu(options: Options, arguments: list[str], expected: list[str]) -> None:
    assert GnuFlattener().flatten(options, arguments, False) == expected


@pytest.mark.parametrize(
    ("arguments", "expected"),
    [
        (["foo", "--build=x"], ["foo", "--build=x"]),
        (["--unknown", "--build=x"], ["--unknown", "--build=x"]),
        (["-a", "--build=x", "foo", "-bx"], ["-a", "--build", "x", "foo", "-bx"]),
    ],
)
def test_gnu_stop_at_non_option(
    options: Options, arguments: list[str], expected: list[str]
) -> None:
    assert GnuFlattener().flatten(options, arguments, True) == expected


@pytest.mark.parametrize(
    ("arguments", "expected"),
    [
        (["--build=x=y"], ["--build", "x=y"]),
        (["--unknown=x"], ["--unknown=x"]),
        (["-ax"], ["-a", "-x"]),
        (["-abfoo"], ["-a", "-b", "foo"]),
        (["-ab", "foo"], ["-a", "-b", "foo"]),
        (["-azx"], ["-a", "-zx"]),
        (["-DJAVA_HOME=/opt"], ["-D", "JAVA_HOME=/opt"]),
        (["-b"], ["-b"]),
        (["-", "--", "-ax"], ["-", "--", "-ax"]),
    ],
)
def test_posix(options: Options, arguments: list[str], expected: list[str]) -> None:
    assert PosixFlattener().flatten(options, arguments, False) == expected


@pytest.mark.parametrize(
    ("arguments", "expected"),
    [
        (["foo", "-ax"], ["foo", "-ax"]),
        (["-azx", "-ax"], ["-a", "-zx", "-ax"]),
        (["-z", "-ax"], ["-z", "-ax"]),
        (["--unknown=1", "-ax"], ["--unknown=1", "-ax"]),
        (["-", "-ax"], ["-", "-ax"]),
        (["-ax", "foo"], ["-a", "-x", "foo"]),
    ],
)
def test_posix_stop_at_non_option(
    options: Options, arguments: list[str], expected: list[str]
) -> None:
    assert PosixFlattener().flatten(options, arguments, True) == expected


def test_flatteners_do_not_touch_the_arguments(options: Options) -> None:
    arguments = ["-abfoo", "--build=x"]

    for flattener in (BasicFlattener(), GnuFlattener(), PosixFlattener()):
        flattener.flatten(options, arguments, False)

    assert arguments == ["-abfoo", "--build=x"]
