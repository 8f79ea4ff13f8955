from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from optscan.parser.option import Option
    from optscan.parser.options import OptionGroup


class OptParseError(Exception):
    def __init__(self, msg: str) -> None:
        self.msg = msg

    def __str__(self) -> str:
        return self.msg


class OptionError(OptParseError):
    """
    Raised if an Option instance is created with invalid or
    inconsistent arguments.
    """

    def __init__(self, msg: str, option: Option) -> None:
        self.msg = msg
        self.option_id = str(option)

    def __str__(self) -> str:
        if self.option_id:
            return f"option {self.option_id}: {self.msg}"
        return self.msg


class OptionConflictError(OptionError):
    """
    Raised if conflicting options are added to an Options schema.
    """


class OptionValueError(OptParseError):
    """
    Raised if a collected option value cannot be converted to the
    option's type.
    """


class ParseError(OptParseError):
    """
    Base class of the errors that abort Parser.parse().
    """


class UnrecognizedOptionError(ParseError):
    """
    Raised if a dash-prefixed token (or a property key) does not name
    any option of the schema.
    """

    def __init__(self, opt_str: str, suggestions: list[str] | None = None) -> None:
        self.opt_str = opt_str
        self.suggestions = suggestions or []
        self.msg = f"no such option: {opt_str}"

    def __str__(self) -> str:
        if self.suggestions:
            return f"{self.msg} (did you mean {', '.join(self.suggestions)}?)"
        return self.msg


class MissingArgumentError(ParseError):
    def __init__(self, option: Option) -> None:
        self.option = option
        self.msg = f"missing argument for option: {option.key}"


class AlreadySelectedError(ParseError):
    """
    Raised if a second, distinct member of a mutually exclusive
    group is seen on the command line.
    """

    def __init__(self, group: OptionGroup, selected: str, option: Option) -> None:
        self.group = group
        self.selected = selected
        self.option = option
        self.msg = (
            f"option {option.key} cannot be used: "
            f"option {selected} of group {group} was already selected"
        )


class MissingRequiredOptionsError(ParseError):
    def __init__(self, missing: list[str | OptionGroup]) -> None:
        self.missing = missing
        noun = "option" if len(missing) == 1 else "options"
        self.msg = f"missing required {noun}: {', '.join(map(str, missing))}"
