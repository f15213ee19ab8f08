from __future__ import annotations

import pytest

import tomlvar


@pytest.fixture(autouse=True)
def fresh_default_set():
    """Give every test an empty default set that raises instead of exiting."""
    tomlvar.reset_for_testing()
    yield
    tomlvar.reset_for_testing()
