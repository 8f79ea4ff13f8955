from __future__ import annotations

import logging

from typing import TYPE_CHECKING
from typing import Any
from typing import Mapping
from typing import Sequence

from optscan.parser.command_line import CommandLine
from optscan.parser.errors import MissingArgumentError
from optscan.parser.errors import MissingRequiredOptionsError
from optscan.parser.errors import UnrecognizedOptionError
from optscan.parser.flatteners import get_flattener
from optscan.parser.util import strip_leading_and_trailing_quotes


if TYPE_CHECKING:
    from optscan.parser.flatteners import Flattener
    from optscan.parser.options import OptionGroup
    from optscan.parser.options import Options


logger = logging.getLogger(__name__)

TRUTHY: tuple[str, ...] = ("yes", "true", "1")


class Parser:
    """
    Resolves command-line tokens against an Options schema.

    Instance attributes:
      flattener : Flattener
        the dialect used to split raw tokens into atomic ones
      stop_at_non_option : bool = false
        if true, the first non-option token (and everything after it)
        is taken as positional arguments.  With "-a" a flag,
          -a foo -a bar
        yields options [-a] and arguments [foo, -a, bar].  If false,
        options and positional arguments may be interspersed and the
        same command line yields options [-a, -a] and arguments
        [foo, bar].
      stop_on_false_property : bool = true
        if true, default injection from the property table stops
        altogether at the first flag property whose value is not one of
        "yes", "true" or "1".  If false, only that entry is skipped.

    Parsing clears the values collected by a previous parse from the
    schema, so a Parser can be reused freely, but the same Options must
    not be parsed against from several threads at once.
    """

    flattener: Flattener

    def __init__(
        self,
        flattener: Flattener | str = "basic",
        stop_at_non_option: bool = False,
        stop_on_false_property: bool = True,
    ) -> None:
        self.set_flattener(flattener)
        self.stop_at_non_option = stop_at_non_option
        self.stop_on_false_property = stop_on_false_property

    # -- Simple modifier methods ---------------------------------------

    def set_flattener(self, flattener: Flattener | str) -> None:
        if isinstance(flattener, str):
            flattener = get_flattener(flattener)
        self.flattener = flattener

    def enable_interspersed_args(self) -> None:
        """Set parsing to not stop on the first non-option, allowing
        interspersing switches with command arguments. This is the
        default behavior."""
        self.stop_at_non_option = False

    def disable_interspersed_args(self) -> None:
        """Set parsing to stop on the first non-option. Use this if
        you have a command processor which runs another command that
        has options of its own and you want to make sure these options
        don't get confused.
        """
        self.stop_at_non_option = True

    def set_stop_on_false_property(self, stop: bool) -> None:
        self.stop_on_false_property = stop

    # -- Option-parsing methods ----------------------------------------

    def parse(
        self,
        options: Options,
        arguments: Sequence[str] | None = None,
        properties: Mapping[str, Any] | None = None,
        stop_at_non_option: bool | None = None,
    ) -> CommandLine:
        """
        Parse 'arguments' against 'options'.

        Options left unset by the command line take their value from
        'properties', keyed by bare ("file") or dashed ("--file") option
        names.  Raises a ParseError subclass on the first problem found;
        no partial result is returned.
        """
        if stop_at_non_option is None:
            stop_at_non_option = self.stop_at_non_option

        options.reset()
        required = options.get_required_options()
        cmd = CommandLine()

        tokens = self.flattener.flatten(
            options, list(arguments or []), stop_at_non_option
        )
        logger.debug(
            "Parsing %d token(s) with the %s flattener", len(tokens), self.flattener.name
        )

        pos = self._process_args(options, tokens, cmd, required, stop_at_non_option)

        if pos < len(tokens):
            logger.debug("Taking %d remaining token(s) as arguments", len(tokens) - pos)
        for token in tokens[pos:]:
            # only the first "--" is ever kept out of the arguments
            if token != "--":
                cmd.add_arg(token)

        if properties:
            self._process_properties(options, properties, cmd, required)

        if required:
            raise MissingRequiredOptionsError(required)

        return cmd

    def _process_args(
        self,
        options: Options,
        tokens: list[str],
        cmd: CommandLine,
        required: list[str | OptionGroup],
        stop_at_non_option: bool,
    ) -> int:
        """
        Consume options and interspersed arguments from 'tokens'.
        Returns the position of the first token left for draining.
        """
        pos = 0
        while pos < len(tokens):
            token = tokens[pos]
            pos += 1

            if token == "--":
                break

            if token == "-":
                if stop_at_non_option:
                    return pos - 1
                cmd.add_arg(token)
                continue

            if token.startswith("-"):
                if not options.has_option(token):
                    if stop_at_non_option:
                        cmd.add_arg(token)
                        break
                    raise UnrecognizedOptionError(token, options.suggest(token))
                pos = self._process_option(options, token, tokens, pos, cmd, required)
                continue

            cmd.add_arg(token)
            if stop_at_non_option:
                break

        return pos

    def _process_option(
        self,
        options: Options,
        opt: str,
        tokens: list[str],
        pos: int,
        cmd: CommandLine,
        required: list[str | OptionGroup],
    ) -> int:
        option = options.get_option(opt)

        if option.required and option.key in required:
            required.remove(option.key)

        group = options.get_option_group(option)
        if group is not None:
            if group.required and group in required:
                required.remove(group)
            group.set_selected(option)

        if option.takes_value():
            while pos < len(tokens):
                token = tokens[pos]
                if token.startswith("-") and options.has_option(token):
                    break
                value = strip_leading_and_trailing_quotes(token)
                if not option.can_accept(value):
                    break
                option.add_value(value)
                pos += 1

            if not option.values and not option.has_optional_arg():
                raise MissingArgumentError(option)

        cmd.add_option(option)
        return pos

    def _process_properties(
        self,
        options: Options,
        properties: Mapping[str, Any],
        cmd: CommandLine,
        required: list[str | OptionGroup],
    ) -> None:
        for name, value in properties.items():
            if cmd.has_option(name):
                continue

            option = options.lookup(name)
            if option is None:
                raise UnrecognizedOptionError(name, options.suggest(name))

            value = str(value)
            if option.takes_value():
                if not option.values and option.can_accept(value):
                    option.add_value(value)
            elif value.lower() not in TRUTHY:
                if self.stop_on_false_property:
                    logger.debug(
                        "Property %s=%r is not true, ignoring the remaining properties",
                        name,
                        value,
                    )
                    break
                logger.debug("Property %s=%r is not true, skipping it", name, value)
                continue

            group = options.get_option_group(option)
            if group is not None:
                if group.selected not in (None, option.key):
                    logger.debug(
                        "Property %s skipped: %s already selected in %s",
                        name,
                        group.selected,
                        group,
                    )
                    continue
                group.set_selected(option)
                if group in required:
                    required.remove(group)
            if option.key in required:
                required.remove(option.key)

            logger.debug("Option %s set from property %s", option.key, name)
            cmd.add_option(option)
