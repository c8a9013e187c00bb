"""Tests configurations and fixtures."""

import os
from typing import TYPE_CHECKING

import pytest

from clispec.settings import get_settings
from clispec.spec import CommandLineSpec

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

if TYPE_CHECKING:
    from pytest_mock import MockerFixture


@pytest.fixture(autouse=True)
def fresh_settings() -> 'Iterator[None]':
    """Drop cached settings around every test.

    Settings are resolved once per process; clearing the cache keeps
    environment patches made by one test from leaking into others.
    """
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def spec() -> CommandLineSpec:
    """Provide an empty command line specification."""
    return CommandLineSpec()


@pytest.fixture
def patch_environment(mocker: 'MockerFixture') -> 'Callable[..., None]':
    """Provide a factory for patching settings environment variables.

    The returned callable patches `os.environ` for the duration of the
    test and resets the settings cache so the new values are picked up.
    """
    def patch(**variables: str) -> None:
        """Patch environment variables.

        Args:
            variables: Variable names without the `CLISPEC_` prefix
                mapped to their values.
        """
        mocker.patch.dict(os.environ, {
            f'CLISPEC_{name.upper()}': value
            for name, value in variables.items()
        })
        get_settings.cache_clear()

    return patch
