import io

import pytest
from rich.console import Console

from oxr.config import Settings


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=200, color_system=None)


@pytest.fixture
def output(console):
    def _read() -> str:
        return console.file.getvalue()

    return _read


@pytest.fixture
def settings():
    return Settings(check_updates=False)
