"""Tests for runtime settings."""

from typing import TYPE_CHECKING
from warnings import catch_warnings, simplefilter

import pytest

from clispec.errors import DuplicateName, SpecWarning
from clispec.settings import SpecSettings, get_settings

if TYPE_CHECKING:
    from collections.abc import Callable

if TYPE_CHECKING:
    from pytest_mock import MockerFixture

    from clispec.spec import CommandLineSpec


@pytest.mark.parametrize('value, expected', (
    pytest.param(None, False, id='unset'),
    pytest.param('true', True, id='enabled'),
    pytest.param('0', False, id='disabled'),
))
def test_legacy_flag_check_setting(patch_environment: 'Callable[..., None]',
                                   value: str | None, expected: bool) -> None:
    """Resolve the legacy flag check from the environment."""
    if value is not None:
        patch_environment(legacy_flag_check=value)

    assert get_settings().legacy_flag_check is expected


def test_settings_are_cached() -> None:
    """Resolve settings once."""
    assert get_settings() is get_settings()


def test_legacy_flag_check_against_options(spec: 'CommandLineSpec',
                                           patch_environment: 'Callable[..., None]') -> None:
    """Check flag names against options in legacy mode."""
    patch_environment(legacy_flag_check='true')
    spec.add_option('verbose', long='verbose')

    with pytest.raises(DuplicateName, match=r'Flag "verbose" is already declared'):
        spec.add_flag('verbose', short='v')

    assert spec.flags == {}


def test_legacy_flag_check_replaces_flag(spec: 'CommandLineSpec',
                                         mocker: 'MockerFixture') -> None:
    """Replace a redeclared flag with a warning in legacy mode."""
    mocker.patch('clispec.spec.get_settings', return_value=SpecSettings(legacy_flag_check=True))
    spec.add_flag('verbose', long='verbose')

    with pytest.warns(SpecWarning, match=r'Flag "verbose" replaces a previous declaration'):
        spec.add_flag('verbose', short='v')

    assert spec.flags['verbose'].long is None
    assert spec.flags['verbose'].short == 'v'


def test_flag_check_without_legacy_mode(spec: 'CommandLineSpec') -> None:
    """Check flag names against flags by default."""
    spec.add_option('verbose', long='verbose')

    with catch_warnings():
        simplefilter('error')
        spec.add_flag('verbose', short='v')

    with pytest.raises(DuplicateName):
        spec.add_flag('verbose', long='verbose')
