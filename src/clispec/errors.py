"""Core exception hierarchy.

This module defines the error and warning types raised while declaring a
command line specification. Every failure is a construction-time error:
it points at a mistake in the declaration itself and is reported to the
caller of the failing operation immediately.
"""

from os import linesep
from typing import TYPE_CHECKING, Any, TypedDict

from yaml import dump

if TYPE_CHECKING:
    from typing import Self

if TYPE_CHECKING:
    from pydantic_core import ValidationError

SNIPPET_ELLIPSIS = f' ...{linesep}'
SNIPPET_INDENT = 2

FORMAT_REPLACER = '<runtime object>'
FORMAT_INDENT = 4

MAPPINGS = (dict,)
SCALARS = (str, bytes, int, float, bool)
SEQUENCES = (list, tuple, set)


class ErrorContext(TypedDict, total=False):
    """Container describing contextual information for error formatting.

    All fields are optional; the formatter adapts output based on
    provided values.
    """

    #: Kind of the collection targeted by the failing operation.
    #: One of `action`, `option`, `flag` or `parameter`.
    collection: str | None
    #: Declared name targeted by the failing operation.
    name: str | None

    #: Dotted location of the failing value inside a validated declaration.
    location: str | None

    #: Underlying exception that triggered formatting.
    error: Exception | None
    #: Declaration data associated with the error.
    element: Any


class ErrorFormatter:
    """Utility class for formatting declaration errors.

    Produces human-readable messages with an optional location line
    and a YAML snippet of the offending declaration.
    """

    @classmethod
    def format(cls, message: str, context: ErrorContext | None = None) -> str:
        """Format an error message using contextual information.

        Args:
            message: Base human-readable error message.
            context: Optional error context with location and data.

        Returns:
            A fully formatted error message suitable for display.
        """
        if not context:
            return message

        location = cls.get_location_string(context, indent=FORMAT_INDENT)
        snippet = cls.get_snippet_string(context, indent=FORMAT_INDENT * 2)
        if not location and not snippet:
            return message

        return f'{message}{linesep}{location}{snippet}'

    @classmethod
    def get_location_string(cls, context: ErrorContext, *,
                            indent: str | int | None = None) -> str:
        """Format the declaration location.

        Args:
            context: Error context containing location metadata.
            indent: Optional indentation (string or number of spaces).

        Returns:
            A formatted location string, or an empty string if the
            context holds no location.
        """
        indent = cls._ensure_indent(indent)

        message = ''
        if collection := context.get('collection'):
            message += f'{indent}on {collection}'
            if (name := context.get('name')) is not None:
                message += f' "{name}"'
            message += linesep

        if location := context.get('location'):
            message += f'{indent}at {location}{linesep}'

        return message

    @classmethod
    def get_snippet_string(cls, context: ErrorContext, *,
                           indent: str | int | None = None) -> str:
        """Generate a YAML snippet of the offending declaration.

        Args:
            context: Error context containing declaration data.
            indent: Optional indentation (string or number of spaces).

        Returns:
            A formatted multi-line snippet string, or an empty string
            if no snippet data is available.
        """
        indent = cls._ensure_indent(indent)

        if element := context.get('element'):
            snippet = f'{indent}{SNIPPET_ELLIPSIS}'
            snippet += cls._make_yaml(element, indent)
            snippet += linesep
            return snippet

        return ''

    @classmethod
    def _filter_unsafe(cls, value: Any) -> Any:  # noqa: ANN401
        """Recursively sanitize values for safe YAML serialization.

        Args:
            value: Arbitrary value to sanitize.

        Returns:
            A YAML-safe representation of the value.
        """
        if value is None or isinstance(value, SCALARS):
            return value

        if isinstance(value, MAPPINGS):
            return {
                key: cls._filter_unsafe(item)
                for key, item in value.items()
            }

        if isinstance(value, SEQUENCES):
            return [
                cls._filter_unsafe(item)
                for item in value
            ]

        return FORMAT_REPLACER

    @classmethod
    def _make_yaml(cls, value: Any, indent: str = '') -> str:  # noqa: ANN401
        """Serialize a value to a YAML-formatted string.

        Args:
            value: Arbitrary value to serialize.
            indent: Optional indentation prefix.

        Returns:
            A YAML-formatted string representation of the value.
        """
        data = dump(
            cls._filter_unsafe(value),
            indent=SNIPPET_INDENT,
            sort_keys=False,
        )

        return cls._make_indent(data, indent)

    @staticmethod
    def _make_indent(value: str, indent: str) -> str:
        """Apply indentation to a multi-line string.

        Empty or whitespace-only lines are omitted.

        Args:
            value: Original multi-line string.
            indent: Indentation prefix.

        Returns:
            Indented string.
        """
        if not indent:
            return value

        return linesep.join(
            f'{indent}{line}'
            for line in value.splitlines()
            if line.strip()
        )

    @staticmethod
    def _ensure_indent(indent: str | int | None = None) -> str:
        """Normalize indentation input.

        Args:
            indent: Indentation as string or number of spaces.

        Returns:
            A string consisting of spaces or the provided string.
        """
        if isinstance(indent, int) and indent > 0:
            return ' ' * indent

        if isinstance(indent, str):
            return indent

        return ''


class SpecWarning(UserWarning):
    """Warning emitted for non-fatal declaration issues.

    Used when a declaration is accepted but may not behave as the caller
    expects (for example, when a legacy compatibility mode is active).
    """


class SpecError(Exception, ErrorFormatter):
    """Base exception for all clispec errors.

    All custom exceptions raised by the library inherit from this
    class to allow unified error handling by callers.
    """

    def __init__(self, message: str, *,
                 context: ErrorContext | None = None) -> None:
        """Initialize an error.

        Args:
            message: Human-readable error description.
            context: Error context containing optional declaration data.
        """
        self.message = message
        self.context = context

        super().__init__(message)

    def __str__(self) -> str:
        """String represenatation."""
        return self.format(self.message, self.context)


class InvalidDeclaration(SpecError):
    """Error raised when a single declaration breaks one of its own rules.

    Covers missing identifiers, empty long identifiers, malformed
    occurrence counts, and a non-final repeating positional parameter.
    """

    @classmethod
    def from_pydantic_error(cls, error: 'ValidationError', *,
                            data: Any = None) -> 'Self':  # noqa: ANN401
        """Create a declaration error from a Pydantic validation failure.

        The first reported issue becomes the error message; its location
        inside the validated data is kept in the context.

        Args:
            error: ValidationError raised by Pydantic.
            data: Declaration data that failed validation.

        Returns:
            InvalidDeclaration representing the validation failure.
        """
        error_context = ErrorContext(error=error, element=data)

        for item in error.errors(include_url=False, include_input=False):
            message = (item.get('msg') or '').removeprefix('Value error, ').strip()
            if not message:
                continue
            if location := '.'.join(str(key) for key in item['loc']):
                error_context['location'] = location
            return cls(message, context=error_context)

        return cls('Invalid declaration', context=error_context)


class DuplicateName(SpecError):
    """Error raised when a declared name is already taken.

    Uniqueness is checked within the targeted collection only: the same
    name may be used by an option and by a flag of one specification.
    """

    def __init__(self, message: str, *, collection: str, name: str,
                 context: ErrorContext | None = None) -> None:
        """Initialize a duplicate name error.

        Args:
            message: Human-readable error description.
            collection: Kind of the collection that already holds the name.
            name: The duplicated name.
            context: Error context containing optional declaration data.
        """
        self.collection = collection
        self.name = name

        if context is None:
            context = ErrorContext(collection=collection, name=name)

        super().__init__(message, context=context)
