from __future__ import annotations

from typing import TYPE_CHECKING
from typing import Protocol


if TYPE_CHECKING:
    from optscan.parser.options import Options


class Flattener(Protocol):
    """
    Expands raw command-line tokens into atomic ones.

    A flattener never consults or changes per-parse state and never
    drops tokens; stopping at the first non-option is the parser's job.
    When 'stop_at_non_option' is true, a flattener only guarantees that
    the tokens following the first non-option come out verbatim.
    """

    name: str

    def flatten(
        self, options: Options, arguments: list[str], stop_at_non_option: bool
    ) -> list[str]:
        ...


class BasicFlattener:
    """
    Leaves the arguments as they are.
    """

    name = "basic"

    def flatten(
        self, options: Options, arguments: list[str], stop_at_non_option: bool
    ) -> list[str]:
        return list(arguments)


class GnuFlattener:
    """
    GNU style: "--file=out" and "-Dkey=value" become an option token
    followed by a value token.  Clusters of short options are not split.
    """

    name = "gnu"

    def flatten(
        self, options: Options, arguments: list[str], stop_at_non_option: bool
    ) -> list[str]:
        tokens: list[str] = []

        for i, arg in enumerate(arguments):
            eat_the_rest = False

            if arg == "--":
                eat_the_rest = True
                tokens.append(arg)
            elif arg == "-" or not arg.startswith("-"):
                eat_the_rest = stop_at_non_option
                tokens.append(arg)
            elif options.has_option(arg):
                tokens.append(arg)
            elif "=" in arg and options.has_option(arg.split("=", 1)[0]):
                opt, value = arg.split("=", 1)
                tokens.extend((opt, value))
            elif arg[1] != "-" and options.has_option(arg[:2]):
                # -Dproperty=value, -ofile
                tokens.extend((arg[:2], arg[2:]))
            else:
                eat_the_rest = stop_at_non_option
                tokens.append(arg)

            if eat_the_rest:
                tokens.extend(arguments[i + 1 :])
                break

        return tokens


class PosixFlattener:
    """
    POSIX style: "--file=out" is split at the first "=" when "--file"
    is a known option, and clusters
    of short options such as "-abc" are burst into "-a", "-b", "-c".
    The rest of a cluster following an option that takes a value is
    that option's value: "-ofile" becomes "-o", "file".
    """

    name = "posix"

    def flatten(
        self, options: Options, arguments: list[str], stop_at_non_option: bool
    ) -> list[str]:
        tokens: list[str] = []

        for i, arg in enumerate(arguments):
            eat_the_rest = False

            if arg == "--":
                eat_the_rest = True
                tokens.append(arg)
            elif arg.startswith("--"):
                if options.has_option(arg.split("=", 1)[0]):
                    tokens.extend(arg.split("=", 1))
                else:
                    eat_the_rest = stop_at_non_option
                    tokens.append(arg)
            elif arg == "-":
                eat_the_rest = stop_at_non_option
                tokens.append(arg)
            elif arg.startswith("-"):
                if len(arg) == 2 or options.has_option(arg):
                    eat_the_rest = stop_at_non_option and not options.has_option(arg)
                    tokens.append(arg)
                else:
                    eat_the_rest = self._burst(options, arg, tokens, stop_at_non_option)
            else:
                eat_the_rest = stop_at_non_option
                tokens.append(arg)

            if eat_the_rest:
                tokens.extend(arguments[i + 1 :])
                break

        return tokens

    def _burst(
        self,
        options: Options,
        arg: str,
        tokens: list[str],
        stop_at_non_option: bool,
    ) -> bool:
        """
        Split a cluster of short options into 'tokens'.  Returns whether
        an unrecognized character ended the cluster while
        'stop_at_non_option' is set.
        """
        for i in range(1, len(arg)):
            opt = f"-{arg[i]}"
            option = options.get_option(opt)

            if option is None:
                tokens.append(f"-{arg[i:]}")
                return stop_at_non_option

            tokens.append(opt)
            if option.takes_value() and i + 1 < len(arg):
                tokens.append(arg[i + 1 :])
                break

        return False


FLATTENERS: dict[str, type[Flattener]] = {
    BasicFlattener.name: BasicFlattener,
    GnuFlattener.name: GnuFlattener,
    PosixFlattener.name: PosixFlattener,
}


def get_flattener(name: str) -> Flattener:
    try:
        return FLATTENERS[name]()
    except KeyError:
        raise ValueError(
            f"unknown flattener {name!r} (choose from {', '.join(FLATTENERS)})"
        ) from None
