"""Identifier and occurrence rules for command-line declarations.

This module defines the primitive rules every declaration must obey:
declared names, long and short identifiers of optional parameters, and
maximum occurrence counts.

The functions are pure. They either return a normalized value or raise
`InvalidDeclaration`. The annotated types mirror the same constraints for
schema-level validation by Pydantic models.
"""

from typing import Annotated, Any

from pydantic import Field

from clispec.errors import ErrorContext, InvalidDeclaration

#: Largest occurrence count a parameter may declare.
#: Also the implicit cap of an unbounded mandatory parameter.
MAX_OCCURRENCE = 255

#: Occurrence count used when none is requested.
DEFAULT_OCCURRENCE = 1


LongIdentifier = Annotated[
    str, Field(
        min_length=1,
        title='Long identifier',
        description=(
            'Identifier used with a double dash on the command line. '
            'For example, `input` for `--input`.'
        ),
        examples=['input', 'verbose'],
    ),
]

ShortIdentifier = Annotated[
    str, Field(
        min_length=1,
        max_length=1,
        title='Short identifier',
        description=(
            'Single character used with a single dash on the command line. '
            'For example, `i` for `-i`.'
        ),
        examples=['i', 'v'],
    ),
]

Occurrence = Annotated[
    int, Field(
        strict=True,
        ge=1,
        le=MAX_OCCURRENCE,
        title='Maximum occurrence',
        description='Maximum number of times a parameter may appear.',
    ),
]


def validate_name(name: Any) -> str:  # noqa: ANN401
    """Check a declared name.

    Args:
        name: Candidate name.

    Returns:
        The name unchanged.

    Raises:
        InvalidDeclaration: If the name is not a non-empty string.
    """
    if not isinstance(name, str) or not name:
        raise InvalidDeclaration(
            f'A declared name must be a non-empty string, got {name!r}',
            context=ErrorContext(element={'name': name}),
        )

    return name


def validate_occurrence(value: Any) -> int | None:  # noqa: ANN401
    """Check a requested occurrence count without normalizing it.

    Zero is accepted here: its meaning depends on the kind of parameter.

    Args:
        value: Requested count or `None`.

    Returns:
        The value unchanged.

    Raises:
        InvalidDeclaration: If the value is not an integer in `0..255`.
    """
    if value is None:
        return None

    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidDeclaration(
            f'A maximum occurrence must be an integer, got {value!r}',
            context=ErrorContext(element={'max_occurrence': value}),
        )

    if not 0 <= value <= MAX_OCCURRENCE:
        raise InvalidDeclaration(
            f'A maximum occurrence must be between 0 and {MAX_OCCURRENCE}, got {value}',
            context=ErrorContext(element={'max_occurrence': value}),
        )

    return value


def normalize_occurrence(requested: int | None) -> int:
    """Collapse a missing or zero occurrence count to the default.

    Only `None` and the integer `0` are collapsed. Any other value, such
    as `False` or `0.0`, is returned unchanged for later type checks.

    Args:
        requested: Requested count; `None` and `0` both mean "no explicit limit".

    Returns:
        `1` for `None` or `0`, otherwise the requested value.
    """
    if requested is None:
        return DEFAULT_OCCURRENCE

    if isinstance(requested, int) and not isinstance(requested, bool) and requested == 0:
        return DEFAULT_OCCURRENCE

    return requested


def validate_short_identifier(short: Any) -> str | None:  # noqa: ANN401
    """Check a short identifier.

    Args:
        short: Candidate short identifier or `None`.

    Returns:
        The identifier unchanged.

    Raises:
        InvalidDeclaration: If present and not a single character.
    """
    if short is None:
        return None

    if not isinstance(short, str) or len(short) != 1:
        raise InvalidDeclaration(
            f'A short parameter identifier must be a single character, got {short!r}',
            context=ErrorContext(element={'short': short}),
        )

    return short


def validate_optional_identifiers(long: str | None, short: str | None) -> None:
    """Check the long and short identifiers of an optional parameter.

    Args:
        long: Long identifier or `None`.
        short: Short identifier or `None`.

    Raises:
        InvalidDeclaration: If both identifiers are missing or the long
            identifier is an empty string.
    """
    if long is None and short is None:
        raise InvalidDeclaration(
            'Long and short optional parameter identifiers cannot be undefined simultaneously',
            context=ErrorContext(element={'long': long, 'short': short}),
        )

    if long is not None and not long:
        raise InvalidDeclaration(
            'A long parameter identifier cannot be an empty string',
            context=ErrorContext(element={'long': long, 'short': short}),
        )
