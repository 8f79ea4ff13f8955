from __future__ import annotations

import pytest

from optscan.parser.options import Options


@pytest.fixture()
def options() -> Options:
    options = Options()
    options.add_option("-a", "--all")
    options.add_option("-b", "--build", arity="required")
    options.add_option("-c", "--color", arity="optional")
    options.add_option("-x")
    options.add_option("--dry-run")
    return options
