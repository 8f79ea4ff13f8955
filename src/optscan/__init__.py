from __future__ import annotations

from optscan.parser.command_line import CommandLine
from optscan.parser.option import Option
from optscan.parser.options import OptionGroup
from optscan.parser.options import Options
from optscan.parser.parser import Parser


__all__ = ["CommandLine", "Option", "OptionGroup", "Options", "Parser"]
