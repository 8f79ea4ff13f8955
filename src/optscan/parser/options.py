from __future__ import annotations

import difflib

from abc import ABC
from abc import abstractmethod
from typing import Any
from typing import Literal

from optscan.parser.errors import AlreadySelectedError
from optscan.parser.errors import OptionConflictError
from optscan.parser.option import Option
from optscan.parser.util import _repr
from optscan.parser.util import option_name_candidates


class OptionContainer(ABC):
    """
    Abstract base class.

    Instance attributes:
      option_list : [Option]
        the list of Option objects contained by this OptionContainer
      _short_opt : { string : Option }
        dictionary mapping short option strings, eg. "-f" or "-X",
        to the Option instances that implement them.  If an Option
        has multiple short option strings, it will appear in this
        dictionary multiple times. [1]
      _long_opt : { string : Option }
        dictionary mapping long option strings, eg. "--file" or
        "--exclude", to the Option instances that implement them.
        Again, a given Option can occur multiple times in this
        dictionary. [1]

    [1] These mappings are common to (shared by) all components of the
        controlling Options schema, where they are initially created.
    """

    option_list: list[Option]
    _short_opt: dict[str, Option]
    _long_opt: dict[str, Option]

    def __init__(
        self,
        option_class: type[Option],
        conflict_handler: Literal["error", "resolve"],
    ) -> None:
        self._create_option_list()

        self.option_class: type[Option] = option_class
        self.set_conflict_handler(conflict_handler)

    @abstractmethod
    def _create_option_list(self) -> None:
        ...

    def _create_option_mappings(self) -> None:
        self._short_opt = {}
        self._long_opt = {}

    def _share_option_mappings(self, options: Options) -> None:
        self._short_opt = options._short_opt
        self._long_opt = options._long_opt

    def set_conflict_handler(self, handler: Literal["error", "resolve"]) -> None:
        if handler not in ("error", "resolve"):
            raise ValueError(f"invalid conflict_resolution value {handler!r}")
        self.conflict_handler = handler

    # -- Option-adding methods -----------------------------------------

    def _release(self, opt_str: str) -> None:
        """
        Take 'opt_str' away from the option currently registered under it.
        An option left without any option string leaves the schema.
        """
        owner = self.get_option(opt_str)
        if opt_str.startswith("--"):
            owner._long_opts.remove(opt_str)
            del self._long_opt[opt_str]
        else:
            owner._short_opts.remove(opt_str)
            del self._short_opt[opt_str]

        if not owner.opt_strings:
            owner.container.option_list.remove(owner)

    def _check_conflict(self, option: Option) -> None:
        taken = [opt for opt in option.opt_strings if self.has_option(opt)]
        if not taken:
            return

        if self.conflict_handler == "error":
            owners = {str(self.get_option(opt)) for opt in taken}
            raise OptionConflictError(
                f"{', '.join(taken)} already registered by {', '.join(sorted(owners))}",
                option,
            )
        for opt in taken:
            self._release(opt)

    def _make_option(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Option:
        if args and isinstance(args[0], str):
            return self.option_class(*args, **kwargs)
        if len(args) == 1 and not kwargs and isinstance(args[0], Option):
            return args[0]
        if len(args) == 1 and not kwargs:
            raise TypeError(f"not an Option instance: {args[0]!r}")
        raise TypeError("invalid arguments")

    def add_option(self, *args: Any, **kwargs: Any) -> Option:
        """add_option(Option)
        add_option(opt_str, ..., kwarg=val, ...)

        Members added through an OptionGroup are registered in the
        schema's lookup tables as well.
        """
        option = self._make_option(args, kwargs)
        self._check_conflict(option)

        option.container = self
        self.option_list.append(option)
        self._short_opt.update(dict.fromkeys(option._short_opts, option))
        self._long_opt.update(dict.fromkeys(option._long_opts, option))
        return option

    def add_options(self, option_list: list[Option]) -> None:
        for option in option_list:
            self.add_option(option)

    # -- Option query/removal methods ----------------------------------

    def get_option(self, opt_str: str) -> Option | None:
        return self._short_opt.get(opt_str) or self._long_opt.get(opt_str)

    def has_option(self, opt_str: str) -> bool:
        return opt_str in self._short_opt or opt_str in self._long_opt

    def lookup(self, name: str) -> Option | None:
        """
        Resolve a bare ("f", "file") or dashed ("-f", "--file") name.
        """
        for opt_str in option_name_candidates(name):
            option = self.get_option(opt_str)
            if option is not None:
                return option
        return None

    def remove_option(self, opt_str: str) -> None:
        option = self._short_opt.get(opt_str)
        if option is None:
            option = self._long_opt.get(opt_str)
        if option is None:
            raise ValueError(f"no such option {opt_str!r}")

        for opt in option._short_opts:
            del self._short_opt[opt]
        for opt in option._long_opts:
            del self._long_opt[opt]
        option.container.option_list.remove(option)

    def suggest(self, opt_str: str) -> list[str]:
        known = [*self._short_opt, *self._long_opt]
        return difflib.get_close_matches(opt_str, known, n=3)


class OptionGroup(OptionContainer):
    """
    A set of mutually exclusive options.

    At most one member may be seen per parse; the member seen first
    becomes the group's selection.  A required group is satisfied by
    any of its members.
    """

    def __init__(
        self,
        options: Options,
        title: str | None = None,
        required: bool = False,
    ) -> None:
        self.options: Options = options
        super().__init__(options.option_class, options.conflict_handler)
        self.title = title
        self.required = required
        self.selected: str | None = None

    def _create_option_list(self) -> None:
        self.option_list = []
        self._share_option_mappings(self.options)

    def __str__(self) -> str:
        return "[{}]".format(", ".join(str(option) for option in self.option_list))

    __repr__ = _repr

    def set_selected(self, option: Option | None) -> None:
        if option is None:
            self.selected = None
            return

        if self.selected is None or self.selected == option.key:
            self.selected = option.key
        else:
            raise AlreadySelectedError(self, self.selected, option)


class Options(OptionContainer):
    """
    The option schema consulted by Parser.

    Instance attributes:
      option_list : [Option]
        options added directly to the schema
      option_groups : [OptionGroup]
        the mutually exclusive groups of the schema; their members are
        reachable through the schema's mappings like any other option

    Options own per-parse state (collected values, group selections)
    that Parser clears at the start of each parse.  Parsing against the
    same instance from several threads at once is not supported.
    """

    option_groups: list[OptionGroup]

    def __init__(
        self,
        option_list: list[Option] | None = None,
        option_class: type[Option] = Option,
        conflict_handler: Literal["error", "resolve"] = "error",
    ) -> None:
        super().__init__(option_class, conflict_handler)
        if option_list:
            self.add_options(option_list)

    def _create_option_list(self) -> None:
        self.option_list = []
        self.option_groups = []
        self._create_option_mappings()

    def __str__(self) -> str:
        return " ".join(str(option) for option in self.all_options())

    __repr__ = _repr

    # -- OptionGroup methods -------------------------------------------

    def add_option_group(self, *args: Any, **kwargs: Any) -> OptionGroup:
        if not args or isinstance(args[0], str):
            group = OptionGroup(self, *args, **kwargs)
        elif len(args) == 1 and not kwargs:
            group = args[0]
            if not isinstance(group, OptionGroup):
                raise TypeError(f"not an OptionGroup instance: {group!r}")
            if group.options is not self:
                raise ValueError("invalid OptionGroup (wrong schema)")
            if group in self.option_groups:
                raise ValueError(f"OptionGroup {group} is already registered")
        else:
            raise TypeError("invalid arguments")

        self.option_groups.append(group)
        return group

    def get_option_group(self, option: Option) -> OptionGroup | None:
        if isinstance(option.container, OptionGroup):
            return option.container
        return None

    # -- Parse support -------------------------------------------------

    def all_options(self) -> list[Option]:
        options = self.option_list[:]
        for group in self.option_groups:
            options.extend(group.option_list)
        return options

    def get_required_options(self) -> list[str | OptionGroup]:
        """
        A fresh list of the keys of the required options followed by
        the required groups.  Callers are free to mutate it.
        """
        required: list[str | OptionGroup] = [
            option.key for option in self.option_list if option.required
        ]
        for group in self.option_groups:
            required.extend(
                option.key for option in group.option_list if option.required
            )
            if group.required:
                required.append(group)
        return required

    def reset(self) -> None:
        """
        Forget the values and group selections of a previous parse.
        """
        for option in self.all_options():
            option.clear_values()
        for group in self.option_groups:
            group.set_selected(None)
