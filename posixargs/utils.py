"""
Posixargs utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the argument, specification and engine layers.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/""/[].

- rename(callable, name) / @rename("name")
  • Assign stable __name__/__qualname__ to generated accessors for clean tracebacks.

- mirror("attr")
  • Read-only property factory exposing a private backing field (self._attr) as an
    immutable view (tuple/frozenset/mappingproxy).

- normalize(name, /, *, fold=True)
  • Canonical spelling of option, argument and command names.

- binname(argv0)
  • Program display name derived from the first raw argument.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> normalize("--dry_run")
    '--dry-run'
    >>> binname("/usr/bin/git")
    'git'
"""
import builtins
import functools
import os
from collections.abc import Sequence, Mapping, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    This is used when None is a legitimate user value, but the API needs a way
    to distinguish “not provided” from “provided as None”. A single instance,
    Unset, is exposed for use as the default in internal parameters.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in annotations (e.g., str | UnsetType).
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


Unset = UnsetType()


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Falsey values like None, 0, "" or [] are preserved as-is; only Unset is
    replaced.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    - Function form: rename(callable, name) -> callable
    - Decorator form: rename(name) -> decorator
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def _freeze(object):
    """
    Return an immutable view of a container (other objects pass through).
    """
    if isinstance(object, Sequence) and not isinstance(object, str):
        return tuple(object)
    elif isinstance(object, Mapping):
        return MappingProxyType(object)
    elif isinstance(object, Set):
        return frozenset(object)
    return object


def mirror(name, /):
    """
    Define a read-only property that mirrors a private backing attribute.

    The generated property reads "_{name}" from the instance and returns a
    read-only view for container types, so slot metadata cannot be mutated
    once a specification has been validated.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _freeze(getattr(self, "_" + name))

    return property(getter)


def normalize(name, /, *, fold=True):
    """
    Return the canonical spelling of an option, argument or command name.

    Rules
    - leading dashes are kept aside and re-attached unchanged.
    - leading/trailing underscores are stripped, inner underscores become '-'.
    - the body is lowercased unless fold=False (short option names keep case).

    Examples
    - normalize("--_dry_run_") -> "--dry-run"
    - normalize("-V", fold=False) -> "-V"
    - normalize("Remove") -> "remove"
    """
    body = name.lstrip("-")
    dashes = name[:len(name) - len(body)]
    body = body.strip("_").replace("_", "-")
    return dashes + (body.lower() if fold else body)


def binname(argv0=Unset, /):
    """
    Derive the program display name from the first raw argument.

    The basename of argv0 is used; a missing or empty argv0 yields "<program>".
    """
    if not isinstance(argv0, str):
        return "<program>"
    return os.path.basename(argv0) or "<program>"


__all__ = (
    "UnsetType",
    "Unset",
    "coalesce",
    "rename",
    "mirror",
    "normalize",
    "binname",
)
