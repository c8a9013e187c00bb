"""Declarative schema model for command-line interfaces.

The `clispec` package describes the shape of a command line: nested
sub-commands ("actions"), options with explicit values, boolean flags,
and ordered positional parameters.

Key features:
- immutable, strictly validated Pydantic declarations;
- consistency rules checked on every declaration (unique names,
  well-formed identifiers, occurrence limits, positional ordering);
- typed construction errors that never leave a half-built specification.

The primary public entry point is `CommandLineSpec`.
"""

from .errors import DuplicateName, InvalidDeclaration, SpecError, SpecWarning
from .names import MAX_OCCURRENCE
from .parameters import MandatoryParameterSpec, OptionalParameterSpec
from .spec import CommandLineSpec

__all__ = (
    'MAX_OCCURRENCE',
    'CommandLineSpec',
    'DuplicateName',
    'InvalidDeclaration',
    'MandatoryParameterSpec',
    'OptionalParameterSpec',
    'SpecError',
    'SpecWarning',
)
