from __future__ import annotations

from typing import Any
from typing import Iterator

from optscan.parser.option import Option
from optscan.parser.util import _repr


class CommandLine:
    """
    The result of a parse: the options seen, their values and the
    positional arguments left over.

    Values are copied when an option is added, so a CommandLine stays
    the same when its schema is parsed against again.
    """

    def __init__(self) -> None:
        self._seen: list[Option] = []
        self._values: dict[str, list[str]] = {}
        self._args: list[str] = []

    def __str__(self) -> str:
        return f"options={self.options!r} values={self._values!r} args={self._args!r}"

    __repr__ = _repr

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CommandLine):
            return (self.options, self._values, self._args) == (
                other.options,
                other._values,
                other._args,
            )
        return NotImplemented

    def __iter__(self) -> Iterator[Option]:
        """
        Iterate over the distinct options seen, in first-seen order.
        """
        yielded = set()
        for option in self._seen:
            if option.key not in yielded:
                yielded.add(option.key)
                yield option

    # -- Accumulation methods (used by Parser) -------------------------

    def add_option(self, option: Option) -> None:
        self._seen.append(option)
        # option.values holds every value of this parse so far
        self._values[option.key] = list(option.values)

    def add_arg(self, arg: str) -> None:
        self._args.append(arg)

    # -- Query methods -------------------------------------------------

    @property
    def options(self) -> tuple[str, ...]:
        """
        Keys of the options seen, in order, once per occurrence.
        """
        return tuple(option.key for option in self._seen)

    @property
    def args(self) -> list[str]:
        return self._args[:]

    def _resolve(self, name: str) -> Option | None:
        for option in self._seen:
            if option.matches(name):
                return option
        return None

    def has_option(self, name: str) -> bool:
        return self._resolve(name) is not None

    def get_option_values(self, name: str) -> list[str] | None:
        option = self._resolve(name)
        if option is None:
            return None
        return self._values[option.key][:]

    def get_option_value(self, name: str, default: str | None = None) -> str | None:
        values = self.get_option_values(name)
        if not values:
            return default
        return values[0]

    def get_parsed_option_value(self, name: str, default: Any = None) -> Any:
        """
        The first value of the option converted according to its type.

        Raises OptionValueError if the value cannot be converted.
        """
        option = self._resolve(name)
        if option is None:
            return default
        values = self._values[option.key]
        if not values:
            return default
        return option.check_value(option.key, values[0])

    def get_option_properties(self, name: str) -> dict[str, str]:
        """
        The values of a "-Dkey=value" style option paired up as a
        dictionary.  A key without a value maps to "true".
        """
        properties: dict[str, str] = {}
        values = self.get_option_values(name) or []
        for i in range(0, len(values), 2):
            if i + 1 < len(values):
                properties[values[i]] = values[i + 1]
            else:
                properties[values[i]] = "true"
        return properties
