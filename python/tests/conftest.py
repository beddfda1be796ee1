from __future__ import annotations

from collections.abc import Iterator

import pytest

from scopespec.cli import Colors


@pytest.fixture(autouse=True)
def restore_cli_colors() -> Iterator[None]:
    """``--no-color`` blanks ``Colors`` globally; put the codes back."""
    saved = {name: value for name, value in vars(Colors).items() if name.isupper()}
    yield
    for name, value in saved.items():
        setattr(Colors, name, value)
