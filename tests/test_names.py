"""Tests for identifier and occurrence rules."""

from typing import TYPE_CHECKING

import pytest

from clispec.errors import InvalidDeclaration
from clispec.names import (
    MAX_OCCURRENCE,
    normalize_occurrence,
    validate_name,
    validate_occurrence,
    validate_optional_identifiers,
    validate_short_identifier,
)

if TYPE_CHECKING:
    from re import Pattern


@pytest.mark.parametrize('requested, expected', (
    pytest.param(None, 1, id='missing'),
    pytest.param(0, 1, id='zero'),
    pytest.param(1, 1, id='one'),
    pytest.param(5, 5, id='several'),
    pytest.param(MAX_OCCURRENCE, MAX_OCCURRENCE, id='maximum'),
    pytest.param(False, False, id='false is left for type checks'),
    pytest.param(0.0, 0.0, id='float zero is left for type checks'),
))
def test_normalize_occurrence(requested: int | None, expected: int) -> None:
    """Collapse missing and zero counts to one."""
    assert normalize_occurrence(requested) == expected


@pytest.mark.parametrize('long, short, except_message', (
    pytest.param('input', 'i', None, id='both identifiers'),
    pytest.param('input', None, None, id='long only'),
    pytest.param(None, 'i', None, id='short only'),
    pytest.param(None, None, r'cannot be undefined simultaneously', id='no identifiers'),
    pytest.param('', None, r'cannot be an empty string', id='empty long'),
    pytest.param('', 'i', r'cannot be an empty string', id='empty long with short'),
))
def test_validate_optional_identifiers(long: str | None, short: str | None,
                                       except_message: 'Pattern | None') -> None:
    """Validate combinations of long and short identifiers."""
    if except_message is not None:
        with pytest.raises(InvalidDeclaration, match=except_message):
            validate_optional_identifiers(long, short)
        return

    validate_optional_identifiers(long, short)


@pytest.mark.parametrize('short, valid', (
    pytest.param('i', True, id='letter'),
    pytest.param('?', True, id='punctuation'),
    pytest.param(None, True, id='missing'),
    pytest.param('', False, id='empty'),
    pytest.param('in', False, id='two characters'),
    pytest.param(5, False, id='not a string'),
))
def test_validate_short_identifier(short: object, valid: bool) -> None:
    """Accept only single characters as short identifiers."""
    if not valid:
        with pytest.raises(InvalidDeclaration, match=r'must be a single character'):
            validate_short_identifier(short)
        return

    assert validate_short_identifier(short) == short


@pytest.mark.parametrize('value, except_message', (
    pytest.param(None, None, id='missing'),
    pytest.param(0, None, id='zero'),
    pytest.param(1, None, id='one'),
    pytest.param(MAX_OCCURRENCE, None, id='maximum'),
    pytest.param(-1, r'between 0 and 255', id='negative'),
    pytest.param(MAX_OCCURRENCE + 1, r'between 0 and 255', id='above maximum'),
    pytest.param('3', r'must be an integer', id='string'),
    pytest.param(1.5, r'must be an integer', id='float'),
    pytest.param(True, r'must be an integer', id='bool'),
))
def test_validate_occurrence(value: object, except_message: 'Pattern | None') -> None:
    """Accept integers fitting a single byte."""
    if except_message is not None:
        with pytest.raises(InvalidDeclaration, match=except_message):
            validate_occurrence(value)
        return

    assert validate_occurrence(value) == value


@pytest.mark.parametrize('name, valid', (
    pytest.param('verbose', True, id='word'),
    pytest.param('dry-run', True, id='kebab case'),
    pytest.param('', False, id='empty'),
    pytest.param(None, False, id='missing'),
    pytest.param(42, False, id='not a string'),
))
def test_validate_name(name: object, valid: bool) -> None:
    """Accept only non-empty strings as declared names."""
    if not valid:
        with pytest.raises(InvalidDeclaration, match=r'non-empty string'):
            validate_name(name)
        return

    assert validate_name(name) == name
