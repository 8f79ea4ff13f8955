from __future__ import annotations

from typing import TYPE_CHECKING
from typing import Any
from typing import Callable
from typing import Iterable

from optscan.parser.errors import OptionError
from optscan.parser.errors import OptionValueError
from optscan.parser.util import _repr
from optscan.parser.util import option_name_candidates


if TYPE_CHECKING:
    from optscan.parser.options import OptionContainer


def _parse_int(val: str) -> int:
    """
    Decimal unless prefixed with "0x" or "0b": "010" is ten.
    """
    sign = ""
    if val[:1] in ("+", "-"):
        sign, val = val[:1], val[1:]
    prefix = val[:2].lower()
    if prefix == "0x":
        return int(sign + val[2:], 16)
    if prefix == "0b":
        return int(sign + val[2:], 2)
    return int(sign + val, 10)


_builtin_cvt = {
    "int": (_parse_int, "integer"),
    "long": (_parse_int, "integer"),
    "float": (float, "floating-point"),
    "complex": (complex, "complex"),
}


def check_builtin(option: Option, opt: str, value: str) -> Any:
    (cvt, what) = _builtin_cvt[option.type]
    try:
        return cvt(value)
    except ValueError:
        raise OptionValueError(f"option {opt}: invalid {what} value: {value!r}")


def check_choice(option: Option, opt: str, value: str) -> str:
    if value in option.choices:
        return value
    choices = ", ".join(map(repr, option.choices))
    raise OptionValueError(
        f"option {opt}: invalid choice: {value!r} (choose from {choices})"
    )


class Option:
    """
    A single entry of an option schema.

    Instance attributes:
      _short_opts : [string]
      _long_opts : [string]

      arity : string
        "none" (a flag), "required" (one or more values) or
        "optional" (zero or more values)
      required : bool
      max_args : int | None
        upper bound on the number of collected values, None for no bound
      value_separator : string | None
        single character each collected value is split on
      type : string | None
      choices : [string]
      help : string
      values : [string]
        the values collected by the current parse
    """

    # The list of instance attributes that may be set through
    # keyword args to the constructor.
    ATTRS: list[str] = [
        "arity",
        "required",
        "max_args",
        "value_separator",
        "type",
        "choices",
        "help",
    ]

    ARITIES: tuple[str, ...] = ("none", "required", "optional")

    TYPES: tuple[str, ...] = ("string", "int", "long", "float", "complex", "choice")

    # Signature of checking functions is:
    #   check(option : Option, opt : string, value : string) -> any
    # If no checker is defined for a type, values remain strings.
    TYPE_CHECKER: dict[str, Callable[[Option, str, str], Any]] = {
        "int": check_builtin,
        "long": check_builtin,
        "float": check_builtin,
        "complex": check_builtin,
        "choice": check_choice,
    }

    CHECK_METHODS: list[Callable[..., Any]]

    arity: str | None
    required: bool | None
    max_args: int | None
    value_separator: str | None
    type: Any
    choices: Iterable[str] | None
    help: str | None
    container: OptionContainer | None

    def __init__(self, *opts: str | None, **attrs: Any) -> None:
        self._short_opts: list[str] = []
        self._long_opts: list[str] = []
        opts = self._check_opt_strings(opts)
        self._set_opt_strings(opts)

        for attr in self.ATTRS:
            if attr in attrs:
                setattr(self, attr, attrs.pop(attr))
            else:
                setattr(self, attr, None)
        if attrs:
            raise OptionError(
                f"invalid keyword arguments: {', '.join(sorted(attrs))}", self
            )

        self.container = None
        self.values: list[str] = []

        for checker in self.CHECK_METHODS:
            checker(self)

    def _check_opt_strings(self, opts: Iterable[str | None]) -> list[str]:
        opts = [opt for opt in opts if opt]
        if not opts:
            raise TypeError("at least one option string must be supplied")
        return opts

    def _set_opt_strings(self, opts: list[str]) -> None:
        for opt in opts:
            if len(opt) < 2:
                raise OptionError(
                    f"invalid option string {opt!r}: "
                    "must be at least two characters long",
                    self,
                )
            if len(opt) == 2:
                if not (opt[0] == "-" and opt[1] != "-"):
                    raise OptionError(
                        f"invalid short option string {opt!r}: "
                        "must be of the form -x, (x any non-dash char)",
                        self,
                    )
                self._short_opts.append(opt)
            else:
                if not (opt[0:2] == "--" and opt[2] != "-"):
                    raise OptionError(
                        f"invalid long option string {opt!r}: "
                        "must start with --, followed by non-dash",
                        self,
                    )
                if "=" in opt:
                    raise OptionError(
                        f"invalid long option string {opt!r}: must not contain '='",
                        self,
                    )
                self._long_opts.append(opt)

    def _check_type(self) -> None:
        if self.type is None:
            if self.choices is not None:
                # The "choices" attribute implies "choice" type.
                self.type = "choice"
            return

        # Allow type objects or builtin type conversion functions
        # (int, str, etc.) as an alternative to their names.
        if isinstance(self.type, type):
            self.type = self.type.__name__

        if self.type == "str":
            self.type = "string"

        if self.type not in self.TYPES:
            raise OptionError(f"invalid option type: {self.type!r}", self)

    def _check_arity(self) -> None:
        if self.arity is None:
            # A typed option without an explicit arity takes a value.
            self.arity = "none" if self.type is None else "required"
        elif self.arity not in self.ARITIES:
            raise OptionError(f"invalid arity: {self.arity!r}", self)
        if self.type is not None and self.arity == "none":
            raise OptionError("must not supply a type for a flag option", self)

    def _check_choice(self) -> None:
        if self.type == "choice":
            if self.choices is None:
                raise OptionError(
                    "must supply a list of choices for type 'choice'", self
                )
            if not isinstance(self.choices, (tuple, list)):
                raise OptionError(
                    "choices must be a list of strings ('{}' supplied)".format(
                        str(type(self.choices)).split("'")[1]
                    ),
                    self,
                )
        elif self.choices is not None:
            raise OptionError(f"must not supply choices for type {self.type!r}", self)

    def _check_max_args(self) -> None:
        if self.max_args is None:
            return
        if self.arity == "none":
            raise OptionError("'max_args' must not be supplied for a flag option", self)
        if not isinstance(self.max_args, int) or self.max_args < 1:
            raise OptionError(
                f"'max_args' must be a positive integer, not {self.max_args!r}", self
            )

    def _check_value_separator(self) -> None:
        if self.value_separator is None:
            return
        if self.arity == "none":
            raise OptionError(
                "'value_separator' must not be supplied for a flag option", self
            )
        if len(self.value_separator) != 1:
            raise OptionError(
                f"invalid value separator {self.value_separator!r}: "
                "must be a single character",
                self,
            )

    def _check_required(self) -> None:
        self.required = bool(self.required)

    CHECK_METHODS = [
        _check_type,
        _check_arity,
        _check_choice,
        _check_max_args,
        _check_value_separator,
        _check_required,
    ]

    # -- Miscellaneous methods -----------------------------------------

    def __str__(self) -> str:
        return "/".join(self._short_opts + self._long_opts)

    __repr__ = _repr

    @property
    def key(self) -> str:
        """
        The identity of the option: its first short option string,
        or its first long one if it has no short option strings.
        """
        if self._short_opts:
            return self._short_opts[0]
        return self._long_opts[0]

    @property
    def opt_strings(self) -> list[str]:
        return self._short_opts + self._long_opts

    def matches(self, name: str) -> bool:
        return any(opt in self.opt_strings for opt in option_name_candidates(name))

    def takes_value(self) -> bool:
        return self.arity != "none"

    def has_optional_arg(self) -> bool:
        return self.arity == "optional"

    def get_opt_string(self) -> str:
        if self._long_opts:
            return self._long_opts[0]
        return self._short_opts[0]

    # -- Value collection methods --------------------------------------

    def _split_value(self, value: str) -> list[str]:
        if self.value_separator is None:
            return [value]
        return value.split(self.value_separator)

    def is_full(self) -> bool:
        return self.max_args is not None and len(self.values) >= self.max_args

    def can_accept(self, value: str) -> bool:
        """
        Whether all the pieces of 'value' fit in the remaining capacity.
        """
        if self.max_args is None:
            return True
        return len(self.values) + len(self._split_value(value)) <= self.max_args

    def add_value(self, value: str) -> None:
        if not self.can_accept(value):
            raise OptionValueError(
                f"option {self.key}: cannot add {value!r}, "
                f"at most {self.max_args} value(s) allowed"
            )
        self.values.extend(self._split_value(value))

    def clear_values(self) -> None:
        self.values = []

    # -- Conversion methods --------------------------------------------

    def check_value(self, opt: str, value: str) -> Any:
        checker = self.TYPE_CHECKER.get(self.type)
        if checker is None:
            return value
        return checker(self, opt, value)
