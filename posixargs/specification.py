"""
Specification model and validator.

Overview
- Specification(*arguments, prog=Unset, version=Unset) assembles an ordered list of
  slots (options first, then positionals) into an immutable, validated description
  of one program (or one sub-command).
- verify(arguments, version=Unset) runs every cross-slot rule; it is pure, so
  validating the same slots twice always yields the same outcome.

Rules (violations raise SpecificationError at definition time)
- names:     no short option, long option or result field may repeat.
- ordering:  options cannot follow non-options.
- arity:     at most one variadic positional; the Subcommand cannot follow a
             variadic positional and no positional may follow the Subcommand.
- conflicts: a tag used by a single slot has no effect; a tag may be carried by
             at most one positional (two positionals cannot conflict).
- help:      help text on any slot or command is rejected when no Help option exists.
- version:   a Version option requires the specification 'version'.

The ergonomics rule "a single conflict tag in the whole specification does not
need an explicit identifier" only emits a SpecificationWarning.
"""
import warnings

from .arguments import Named, Positional, Subcommand, Help, Version
from .faults import SpecificationError, SpecificationWarning
from .formatting import helptext, usage
from .utils import Unset, mirror


def _verify_names(arguments, /):
    shorts, longs, fields = set(), set(), set()
    positional = False

    for argument in arguments:
        if isinstance(argument, Positional):
            positional = True
        elif positional:
            raise SpecificationError(f"option {argument.name!r} cannot follow non-option arguments")
        else:
            for name in argument.names:
                if name.startswith("--"):
                    if name in longs:
                        raise SpecificationError(f"long option {name!r} conflicts with previously defined long option")
                    longs.add(name)
                else:
                    if name in shorts:
                        raise SpecificationError(f"short option {name!r} conflicts with previously defined short option")
                    shorts.add(name)

        if (field := argument.field) is None:
            continue
        if field in fields:
            raise SpecificationError(f"argument {argument.name!r} conflicts with previously defined argument {field!r}")
        fields.add(field)


def _verify_positionals(arguments, /):
    variadic = subcommand = None

    for argument in arguments:
        if not isinstance(argument, Positional):
            continue
        if subcommand is not None:
            raise SpecificationError(f"argument {argument.name!r}: arguments cannot follow command argument")
        if isinstance(argument, Subcommand):
            if variadic is not None:
                raise SpecificationError(f"argument {argument.name!r}: command argument cannot follow variadic argument")
            subcommand = argument
        elif argument.variadic:
            if variadic is not None:
                raise SpecificationError(f"argument {argument.name!r}: cannot have multiple variadic arguments")
            variadic = argument


def _verify_conflicts(arguments, /):
    groups = {}
    for argument in arguments:
        for tag in argument.conflicts:
            groups.setdefault(tag, []).append(argument)

    if len(groups) == 1 and len(tag := next(iter(groups))) != 1:
        warnings.warn(SpecificationWarning(f"conflict {tag!r}: explicit conflict-id not needed"), stacklevel=4)

    for tag, members in groups.items():
        if len(members) == 1:
            raise SpecificationError(f"argument {members[0].name!r}: conflict {tag!r} has no effect")
        if sum(isinstance(member, Positional) for member in members) > 1:
            raise SpecificationError(f"conflict {tag!r}: non-options cannot conflict with each other")


def _verify_help(arguments, /, version):
    helper = any(isinstance(argument, Help) for argument in arguments)
    versioner = any(isinstance(argument, Version) for argument in arguments)

    if not helper:
        for argument in arguments:
            commands = argument.commands if isinstance(argument, Subcommand) else ()
            if argument.descr is not None or any(command.descr is not None for command in commands):
                raise SpecificationError(f"argument {argument.name!r}: help message without --help option has no effect")

    if versioner and version is Unset:
        raise SpecificationError("version option requires the specification 'version'")


def verify(arguments, /, version=Unset):
    """
    Validate an ordered sequence of slots; raise SpecificationError on the first
    violated rule (see module docstring). Returns None.
    """
    for argument in arguments:
        if not isinstance(argument, Named | Positional):
            raise TypeError(f"specification arguments must be argument slots, not {type(argument).__name__!r}")

    _verify_names(arguments)
    _verify_positionals(arguments)
    _verify_conflicts(arguments)
    _verify_help(arguments, version)


class Specification:
    """
    Validated, read-only description of the arguments of one program.

    Parameters
    - *arguments: Flag | Option | Help | Version | Cardinal | Subcommand slots,
      options first, in the order they should be bound and reported.
    - prog: Unset | str
      Display name used in help and version text; defaults to the binary name
      derived from the raw argument stream.
    - version: Unset | str
      Version string reported by a Version option ("{prog} {version}").

    A specification holds no per-parse state and may be shared freely; every
    parse builds its own accumulators.
    """
    arguments = mirror("arguments")
    prog = mirror("prog")
    version = mirror("version")

    def __init__(self, *arguments, prog=Unset, version=Unset):
        if not isinstance(prog, str | Unset):
            raise TypeError("specification 'prog' must be a string")
        if not isinstance(version, str | Unset):
            raise TypeError("specification 'version' must be a string")

        verify(arguments, version)

        self._arguments = arguments
        self._prog = prog
        self._version = version

    @property
    def options(self):
        return tuple(argument for argument in self._arguments if isinstance(argument, Named))

    @property
    def positionals(self):
        return tuple(argument for argument in self._arguments if isinstance(argument, Positional))

    @property
    def fields(self):
        """result field names in declaration order."""
        return tuple(argument.field for argument in self._arguments if argument.field is not None)

    @property
    def helper(self):
        return next((argument for argument in self._arguments if isinstance(argument, Help)), None)

    @property
    def subcommand(self):
        return next((argument for argument in self._arguments if isinstance(argument, Subcommand)), None)

    def help(self, prog, /):
        """return the help text for this specification, shown for `prog`."""
        return helptext(self, prog)

    def usage(self, prog, /):
        return usage(self, prog)

    def parse(self, source=Unset, /):
        """shortcut for posixargs.parse(self, source)."""
        from .commands import parse
        return parse(self, source)

    def __repr__(self):
        return f"specification({", ".join(map(repr, self._arguments))})"

    def __rich_repr__(self):
        yield from self._arguments
        yield "prog", self._prog, Unset
        yield "version", self._version, Unset


__all__ = (
    "Specification",
    "verify",
)
