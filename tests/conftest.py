"""Shared pytest fixtures for climbcalc tests."""

import pytest

from climbcalc.core.settings import LOG_LEVEL_ENV_VAR, SHOW_TREE_ENV_VAR, TREE_INDENT_ENV_VAR


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep CLIMBCALC_* variables from the outer shell out of every test."""
    for name in (SHOW_TREE_ENV_VAR, TREE_INDENT_ENV_VAR, LOG_LEVEL_ENV_VAR):
        monkeypatch.delenv(name, raising=False)
