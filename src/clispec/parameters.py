"""Declarations of optional and mandatory parameters.

An optional parameter with an explicit value is an "option", for example
`--input=<value>` or `-i=<value>`. An optional parameter without explicit
value is a "flag": its implicit boolean value tells whether it appears on
the command line, for example `--verbose` or `-v`. Both kinds share the
`OptionalParameterSpec` model.

Mandatory parameters are positional: they are identified by their place
among the trailing tokens of a command line, and are described by
`MandatoryParameterSpec`.
"""

from typing import Any, Self

from pydantic import Field, ValidationError, model_validator

from clispec.errors import ErrorContext, InvalidDeclaration
from clispec.models import SchemaModel
from clispec.names import (
    DEFAULT_OCCURRENCE,
    MAX_OCCURRENCE,
    LongIdentifier,
    Occurrence,
    ShortIdentifier,
    normalize_occurrence,
    validate_occurrence,
    validate_optional_identifiers,
    validate_short_identifier,
)


class OptionalParameterSpec(SchemaModel):
    """Declaration of an option or a flag.

    At least one of the long and short identifiers is defined. The
    maximum occurrence is always explicit once the model is built.
    """

    long: LongIdentifier | None = Field(
        default=None,
        title='Long identifier',
        description=(
            'Identifier matched as `--<long>`. '
            'Must not be empty when defined.'
        ),
    )
    short: ShortIdentifier | None = Field(
        default=None,
        title='Short identifier',
        description='Single character matched as `-<short>`.',
    )

    max_occurrence: Occurrence = Field(
        default=DEFAULT_OCCURRENCE,
        title='Maximum occurrence',
        description=(
            'Maximum number of times the parameter may appear. '
            'A missing or zero value means exactly one occurrence.'
        ),
    )

    @model_validator(mode='before')
    @classmethod
    def normalize_declaration(cls, data: Any) -> Any:  # noqa: ANN401
        """Check identifiers and normalize the occurrence count.

        Args:
            data: Raw declaration data.

        Returns:
            Declaration data with a normalized `max_occurrence`.

        Raises:
            ValueError: If both identifiers are missing or the long
                identifier is empty.
        """
        if not isinstance(data, dict):
            return data

        try:
            validate_optional_identifiers(data.get('long'), data.get('short'))
        except InvalidDeclaration as error:
            raise ValueError(error.message) from error

        return {
            **data,
            'max_occurrence': normalize_occurrence(data.get('max_occurrence')),
        }

    @classmethod
    def create(cls, long: str | None = None, short: str | None = None,
               max_occurrence: int | None = None) -> Self:
        """Build a validated optional parameter declaration.

        Args:
            long: Long identifier, for example `input` for `--input`.
            short: Short identifier, for example `i` for `-i`.
            max_occurrence: Maximum number of occurrences. `None` and `0`
                both mean exactly one occurrence.

        Returns:
            The immutable declaration.

        Raises:
            InvalidDeclaration: If any identifier or occurrence rule is broken.
        """
        validate_optional_identifiers(long, short)
        validate_short_identifier(short)
        validate_occurrence(max_occurrence)

        data = {
            'long': long,
            'short': short,
            'max_occurrence': normalize_occurrence(max_occurrence),
        }
        try:
            return cls.model_validate(data)
        except ValidationError as error:
            raise InvalidDeclaration.from_pydantic_error(error, data=data) from error


class MandatoryParameterSpec(SchemaModel):
    """Declaration of a positional parameter.

    A missing maximum occurrence means "unbounded", capped at
    `MAX_OCCURRENCE`. Whether a parameter may repeat at all depends on its
    position and is enforced by the owning `CommandLineSpec`.
    """

    max_occurrence: Occurrence | None = Field(
        default=None,
        title='Maximum occurrence',
        description=(
            'Maximum number of times the parameter may appear. '
            'Unbounded when missing; only the last parameter may repeat.'
        ),
    )

    @property
    def effective_max_occurrence(self) -> int:
        """Maximum occurrence with the unbounded case resolved."""
        if self.max_occurrence is None:
            return MAX_OCCURRENCE

        return self.max_occurrence

    @property
    def repeatable(self) -> bool:
        """Whether the parameter may appear more than once."""
        return self.effective_max_occurrence > 1

    @classmethod
    def create(cls, max_occurrence: int | None = None) -> Self:
        """Build a validated mandatory parameter declaration.

        Args:
            max_occurrence: Maximum number of occurrences, or `None`
                for an unbounded parameter.

        Returns:
            The immutable declaration.

        Raises:
            InvalidDeclaration: If `max_occurrence` is zero or malformed.
        """
        validate_occurrence(max_occurrence)
        if max_occurrence == 0:
            raise InvalidDeclaration(
                'The maximum occurrence of a mandatory parameter cannot be 0',
                context=ErrorContext(element={'max_occurrence': max_occurrence}),
            )

        data = {'max_occurrence': max_occurrence}
        try:
            return cls.model_validate(data)
        except ValidationError as error:
            raise InvalidDeclaration.from_pydantic_error(error, data=data) from error
