from __future__ import annotations


QUOTES: tuple[str, ...] = ('"', "'")


def _repr(self) -> str:
    return f"<{self.__class__.__name__} at 0x{id(self):x}: {self}>"


def strip_leading_and_trailing_quotes(s: str) -> str:
    """
    Remove one pair of matching quote characters enclosing 's'.

    '"hello world"' -> 'hello world'.  Unbalanced or mismatched quotes
    are left untouched.
    """
    if len(s) >= 2 and s[0] in QUOTES and s[-1] == s[0]:
        return s[1:-1]
    return s


def option_name_candidates(name: str) -> list[str]:
    """
    The option strings a bare or dashed option name may stand for,
    most likely first.

    "f" -> ["-f", "--f"], "file" -> ["--file"], "-f" and "--file"
    stand for themselves.
    """
    if name.startswith("-"):
        return [name]
    if len(name) == 1:
        return [f"-{name}", f"--{name}"]
    return [f"--{name}"]
