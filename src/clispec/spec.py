"""Command line specification aggregate.

A `CommandLineSpec` describes the shape of a command line: nested actions
(sub-commands such as `add` in `git add`), options, flags, and an ordered
sequence of mandatory positional parameters.

Specifications are built by repeatedly calling the `add_*` operations.
Each operation validates the new declaration and the cross-entity rules
before touching the aggregate, so a failed call leaves it unchanged.
Collections are exposed as read-only mappings.
"""

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Self, TypeVar
from warnings import warn

from pydantic import PrivateAttr

from clispec.errors import DuplicateName, ErrorContext, InvalidDeclaration, SpecWarning
from clispec.models import SchemaModel
from clispec.names import DEFAULT_OCCURRENCE, validate_name
from clispec.parameters import MandatoryParameterSpec, OptionalParameterSpec
from clispec.settings import get_settings

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

T = TypeVar('T')

ACTION = 'action'
OPTION = 'option'
FLAG = 'flag'
PARAMETER = 'parameter'

#: Keys accepted by `CommandLineSpec.from_mapping`, in the order they are applied.
COLLECTIONS = ('options', 'flags', 'parameters', 'actions')

OPTIONAL_ARGUMENTS = ('long', 'short', 'max_occurrence')
MANDATORY_ARGUMENTS = ('max_occurrence',)

logger = logging.getLogger(__name__)


class CommandLineSpec(SchemaModel):
    """Declarative specification of a command line.

    Names are unique within each collection independently. Collections
    only grow through the `add_*` operations; the mappings returned by
    `actions`, `options`, `flags` and `parameters` are read-only views.
    """

    # Collections grow after construction.
    __hash__ = None  # type: ignore[assignment]

    _actions: dict[str, 'CommandLineSpec'] = PrivateAttr(default_factory=dict)
    _options: dict[str, OptionalParameterSpec] = PrivateAttr(default_factory=dict)
    _flags: dict[str, OptionalParameterSpec] = PrivateAttr(default_factory=dict)
    _parameters: dict[str, MandatoryParameterSpec] = PrivateAttr(default_factory=dict)

    @property
    def actions(self) -> Mapping[str, 'CommandLineSpec']:
        """Nested specifications of sub-commands.

        An action must follow the program name or another action.
        """
        return MappingProxyType(self._actions)

    @property
    def options(self) -> Mapping[str, OptionalParameterSpec]:
        """Optional parameters with an explicit value, like `--input=<value>`."""
        return MappingProxyType(self._options)

    @property
    def flags(self) -> Mapping[str, OptionalParameterSpec]:
        """Optional parameters with an implicit boolean value, like `--verbose`."""
        return MappingProxyType(self._flags)

    @property
    def parameters(self) -> Mapping[str, MandatoryParameterSpec]:
        """Positional parameters in matching order."""
        return MappingProxyType(self._parameters)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Self:
        """Build a specification from nested declaration data.

        The data maps collection names (`options`, `flags`, `parameters`,
        `actions`) to declarations keyed by declared name. Declarations are
        applied through the `add_*` operations, so the same rules hold.
        Parameters are added in mapping order.

        Args:
            data: Nested declaration data.

        Returns:
            The built specification.

        Raises:
            DuplicateName: If a declared name is repeated.
            InvalidDeclaration: If the data is malformed or any declaration
                breaks a rule.
        """
        if not isinstance(data, Mapping):
            raise InvalidDeclaration(
                f'A command line specification must be a mapping, got {data!r}',
            )

        if unknown := sorted(set(data) - set(COLLECTIONS), key=str):
            raise InvalidDeclaration(
                f'Unknown collections: {", ".join(map(str, unknown))}',
                context=ErrorContext(element=dict(data)),
            )

        spec = cls()
        for name, declaration in cls._declarations(data, 'options'):
            spec.add_option(name, **cls._arguments(OPTION, name, declaration, OPTIONAL_ARGUMENTS))
        for name, declaration in cls._declarations(data, 'flags'):
            spec.add_flag(name, **cls._arguments(FLAG, name, declaration, OPTIONAL_ARGUMENTS))
        for name, declaration in cls._declarations(data, 'parameters'):
            spec.add_parameter(name, **cls._arguments(PARAMETER, name, declaration, MANDATORY_ARGUMENTS))
        for name, declaration in cls._declarations(data, 'actions'):
            spec.add_action(name, cls.from_mapping(declaration or {}))

        return spec

    def add_option(self, name: str, long: str | None = None, short: str | None = None,
                   max_occurrence: int | None = None) -> OptionalParameterSpec:
        """Declare an option.

        Args:
            name: Name of the option within this specification.
            long: Long identifier, for example `input` for `--input`.
            short: Short identifier, for example `i` for `-i`.
            max_occurrence: Maximum number of occurrences; `None` or `0`
                mean exactly one.

        Returns:
            The stored option declaration.

        Raises:
            DuplicateName: If an option with this name already exists.
            InvalidDeclaration: If the declaration breaks an identifier
                or occurrence rule.
        """
        self._ensure_unique(self._options, OPTION, name)

        option = self._build(OPTION, name, OptionalParameterSpec.create,
                             long, short, max_occurrence)
        self._options[name] = option
        logger.debug(f'Declared option "{name}": {option!r}')

        return option

    def add_flag(self, name: str, long: str | None = None, short: str | None = None,
                 max_occurrence: int | None = None) -> OptionalParameterSpec:
        """Declare a flag.

        When the `legacy_flag_check` setting is enabled the name is checked
        against declared options, and a flag declared twice replaces the
        previous one with a `SpecWarning`.

        Args:
            name: Name of the flag within this specification.
            long: Long identifier, for example `verbose` for `--verbose`.
            short: Short identifier, for example `v` for `-v`.
            max_occurrence: Maximum number of occurrences; `None` or `0`
                mean exactly one.

        Returns:
            The stored flag declaration.

        Raises:
            DuplicateName: If a flag with this name already exists.
            InvalidDeclaration: If the declaration breaks an identifier
                or occurrence rule.
        """
        registry = self._options if get_settings().legacy_flag_check else self._flags
        self._ensure_unique(registry, FLAG, name)

        flag = self._build(FLAG, name, OptionalParameterSpec.create,
                           long, short, max_occurrence)
        if name in self._flags:
            warn(f'Flag "{name}" replaces a previous declaration',
                 category=SpecWarning, stacklevel=2)

        self._flags[name] = flag
        logger.debug(f'Declared flag "{name}": {flag!r}')

        return flag

    def add_parameter(self, name: str,
                      max_occurrence: int | None = DEFAULT_OCCURRENCE) -> MandatoryParameterSpec:
        """Declare the next mandatory positional parameter.

        Args:
            name: Name of the parameter within this specification.
            max_occurrence: Maximum number of occurrences. Defaults to one;
                `None` declares an unbounded parameter.

        Returns:
            The stored parameter declaration.

        Raises:
            DuplicateName: If a parameter with this name already exists.
            InvalidDeclaration: If `max_occurrence` is zero or malformed, or
                if the previously declared parameter may repeat.
        """
        self._ensure_unique(self._parameters, PARAMETER, name)

        if self._parameters:
            last_name, last = next(reversed(self._parameters.items()))
            if last.repeatable:
                raise InvalidDeclaration(
                    f'Cannot add the parameter "{name}". The previously declared '
                    f'parameter "{last_name}" may appear {last.effective_max_occurrence} '
                    'times. Only the last parameter may appear more than once',
                    context=ErrorContext(
                        collection=PARAMETER,
                        name=name,
                        element={last_name: last.model_dump()},
                    ),
                )

        parameter = self._build(PARAMETER, name, MandatoryParameterSpec.create, max_occurrence)
        self._parameters[name] = parameter
        logger.debug(f'Declared parameter "{name}": {parameter!r}')

        return parameter

    def add_action(self, name: str, spec: 'CommandLineSpec | None' = None) -> 'CommandLineSpec':
        """Declare an action.

        The stored action is a deep copy of `spec`: later changes to the
        caller's object do not reach this specification, and a
        specification attached to itself is attached as a snapshot.

        The returned object is the stored action itself, shared with this
        specification rather than detached from it. Declarations added
        through it after attachment belong to this specification. Callers
        that must not keep such a handle should attach fully built
        specifications and discard the return value.

        Args:
            name: Name of the action, as it appears on the command line.
            spec: A fully built specification of the action. An empty one
                is created when omitted.

        Returns:
            The stored action specification, shared with this specification.

        Raises:
            DuplicateName: If an action with this name already exists.
            InvalidDeclaration: If `spec` is not a `CommandLineSpec`.
        """
        self._ensure_unique(self._actions, ACTION, name)

        if spec is None:
            action = CommandLineSpec()
        elif isinstance(spec, CommandLineSpec):
            action = spec.model_copy(deep=True)
        else:
            raise InvalidDeclaration(
                f'An action must be described by a command line specification, got {spec!r}',
                context=ErrorContext(collection=ACTION, name=name),
            )

        self._actions[name] = action
        logger.debug(f'Declared action "{name}"')

        return action

    def walk(self, path: tuple[str, ...] = ()) -> 'Iterator[tuple[tuple[str, ...], CommandLineSpec]]':
        """Iterate over this specification and all nested actions.

        Traversal is depth-first in declaration order.

        Args:
            path: Action path of this specification.

        Yields:
            Pairs of action path and specification, starting with `(path, self)`.
        """
        yield path, self
        for name, action in self._actions.items():
            yield from action.walk((*path, name))

    @staticmethod
    def _ensure_unique(registry: dict[str, Any], kind: str, name: str) -> None:
        """Check that a name is well-formed and not taken yet.

        Args:
            registry: The collection to check against.
            kind: Kind of the declared entity.
            name: Declared name.

        Raises:
            InvalidDeclaration: If the name is malformed.
            DuplicateName: If the name is already present in `registry`.
        """
        try:
            validate_name(name)
        except InvalidDeclaration as error:
            raise InvalidDeclaration(
                error.message,
                context=ErrorContext(collection=kind),
            ) from error

        if name in registry:
            raise DuplicateName(
                f'{kind.capitalize()} "{name}" is already declared',
                collection=kind,
                name=name,
            )

    @staticmethod
    def _build(kind: str, name: str, factory: 'Callable[..., T]', *args: object) -> T:
        """Build a declaration and attach the target name to its errors.

        Args:
            kind: Kind of the declared entity.
            name: Declared name.
            factory: Validated constructor of the declaration.
            args: Constructor arguments.

        Returns:
            The built declaration.

        Raises:
            InvalidDeclaration: If the factory rejects the arguments.
        """
        try:
            return factory(*args)
        except InvalidDeclaration as error:
            raise InvalidDeclaration(
                error.message,
                context=ErrorContext({
                    **(error.context or {}),
                    'collection': kind,
                    'name': name,
                }),
            ) from error

    @staticmethod
    def _declarations(data: Mapping[str, Any], collection: str) -> 'Iterator[tuple[str, Any]]':
        """Iterate over the declarations of one collection.

        Args:
            data: Nested declaration data.
            collection: Collection key.

        Yields:
            Pairs of declared name and declaration.

        Raises:
            InvalidDeclaration: If the collection is not a mapping.
        """
        declarations = data.get(collection) or {}
        if not isinstance(declarations, Mapping):
            raise InvalidDeclaration(
                f'Collection "{collection}" must be a mapping, got {declarations!r}',
            )

        yield from declarations.items()

    @staticmethod
    def _arguments(kind: str, name: str, declaration: Any,  # noqa: ANN401
                   allowed: tuple[str, ...]) -> dict[str, Any]:
        """Extract `add_*` arguments from a single declaration.

        Args:
            kind: Kind of the declared entity.
            name: Declared name.
            declaration: Declaration data; `None` means no arguments.
            allowed: Accepted argument names.

        Returns:
            Keyword arguments for the matching `add_*` operation.

        Raises:
            InvalidDeclaration: If the declaration is not a mapping or has
                unknown keys.
        """
        if declaration is None:
            return {}

        context = ErrorContext(collection=kind, name=name, element={name: declaration})
        if not isinstance(declaration, Mapping):
            raise InvalidDeclaration(
                f'A {kind} declaration must be a mapping, got {declaration!r}',
                context=context,
            )

        if unknown := sorted(set(declaration) - set(allowed), key=str):
            raise InvalidDeclaration(
                f'Unknown declaration keys: {", ".join(map(str, unknown))}',
                context=context,
            )

        return dict(declaration)
