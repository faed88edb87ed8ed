r"""
Posixargs argument slots.

Overview
- Named slots (options)
  • Flag: valueless option; result is a bool, or an occurrence count when variadic.
  • Option: valued option; result is the last decoded value (or None), or the list
    of every decoded value when variadic.
  • Help / Version: reserved special options; binding one short-circuits the parse
    with the help or version text. They take no value and produce no field.
- Positional slots (non-options)
  • Cardinal: positional argument with argparse-like arity via 'nargs':
      Unset → "<n>"      (required, one token)
      "?"   → "[<n>]"    (optional, one token)
      "+"   → "<n>..."   (required, one or more tokens)
      "*"   → "[<n>...]" (optional, any number of tokens)
  • Subcommand: the command selector; absorbs every trailing token, its first token
    selects one of the declared Command entries (canonical name or alias).
- Command: one (canonical-name, aliases) row of a Subcommand table, optionally
  carrying the child specification used to parse the residual tokens.

Metadata (sanitized on construction)
- names: "-x" (short, exactly one alphanumeric character) or "--xyz" (long, at
  least two characters once normalized: underscores trimmed and turned into '-',
  lowercased). Declaration order is kept for help output.
- conflicts: a tag string or an iterable of tags. "!" marks an exclusion group,
  "?" a choice group; an optional identifier follows ("!", "?mode").
- descr: Unset | str | Text (short help), non-empty when provided.
- field: result field name; derived from the first long name, else the first
  short name, else the metavar ('-' becomes '_').
- type: callable decoding one raw token (ValueError/TypeError mean "rejected").

Cross-slot rules (unique names/fields, ordering, conflict groups) are checked by
posixargs.specification when slots are assembled.
"""
import functools
import operator
import re
from collections.abc import Iterable

from rich.text import Text

from .faults import SpecificationError
from .utils import Unset, coalesce, mirror, normalize, rename


class ArgumentType(type):
    """
    Metaclass giving slot classes a stable typename, read-only metadata and reprs.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in messages.
    - every name listed in __introspectable__ is exposed through mirror() as a
      read-only property over the private "_<name>" backing field.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_metadata(cls, metadata, /):
    r"""
    Internal: normalize and validate metadata shared by every slot kind.

    - descr: Unset | str | Text; trimmed, must be non-empty; Unset becomes None.
    - conflicts (when present): a tag or an iterable of tags, each matching
      r"[!?]([^\W\d]\w*)?"; duplicates are rejected; normalized to a tuple.
    - field (when present): Unset | str; must be non-empty after trimming.

    The dict is mutated in place.
    """
    if not isinstance(descr := metadata["descr"], str | Text | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    metadata["descr"] = coalesce(descr)

    if "conflicts" in metadata:
        if isinstance(conflicts := metadata["conflicts"], str):
            conflicts = (conflicts,)
        elif not isinstance(conflicts, Iterable):
            raise TypeError(f"{cls.__typename__} 'conflicts' must be a string or an iterable of strings")
        tags = []
        for tag in conflicts:
            if not isinstance(tag, str):
                raise TypeError(f"{cls.__typename__} 'conflicts' must be a string or an iterable of strings")
            elif not re.fullmatch(r"[!?]([^\W\d]\w*)?", tag := tag.strip()):
                raise SpecificationError(f"{cls.__typename__} conflict {tag!r} must be '!' or '?' optionally followed by an identifier")
            elif tag in tags:
                raise SpecificationError(f"{cls.__typename__} conflict {tag!r} is used more than once")
            tags.append(tag)
        metadata["conflicts"] = tuple(tags)

    if "field" in metadata:
        if not isinstance(field := metadata["field"], str | Unset):
            raise TypeError(f"{cls.__typename__} 'field' must be a string")
        elif isinstance(field, str) and not (field := field.strip()):
            raise ValueError(f"{cls.__typename__} 'field' cannot be empty")
        metadata["field"] = field


def _sanitize_named_metadata(cls, metadata, /):
    """
    Internal: validate and normalize option names.

    - at least one name is required.
    - "-x": short option; after normalization the body must be exactly one
      alphanumeric character (case is kept).
    - "--xyz": long option; after normalization (underscores trimmed and turned
      into '-', lowercased) the body must have at least two characters.
    - anything else is rejected.

    The names keep their declaration order. Uniqueness across the whole
    specification is checked by the specification validator.
    """
    if not metadata["names"]:
        raise TypeError(f"{cls.__typename__} must specify at least one name")

    names = []
    for name in metadata["names"]:
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} names must be strings")
        elif name.startswith("--"):
            if len(body := (name := normalize(name))[2:]) < 2:
                raise SpecificationError(f"{cls.__typename__} {name!r}: normalized long option must be at least 2 characters")
        elif name.startswith("-"):
            if len(body := (name := normalize(name, fold=False))[1:]) != 1 or not body.isalnum():
                raise SpecificationError(f"{cls.__typename__} {name!r}: expected single alphanumeric character")
        else:
            raise SpecificationError(f"{cls.__typename__} {name!r}: option names must start with '-' or '--'")
        names.append(name)

    metadata["names"] = tuple(names)


def _sanitize_parametric_metadata(cls, metadata, /):
    """
    Internal: validate metadata of value-bearing slots (Option, Cardinal).

    - metavar: non-empty string after trimming.
    - type: must be callable (decoder). Only callability is enforced.
    - nargs (positional slots only): Unset | "?" | "+" | "*".
    """
    if not isinstance(metavar := metadata["metavar"], str):
        raise TypeError(f"{cls.__typename__} 'metavar' must be a string")
    elif not (metavar := metavar.strip()):
        raise ValueError(f"{cls.__typename__} 'metavar' cannot be empty")
    metadata["metavar"] = metavar

    if "type" in metadata and not callable(metadata["type"]):
        raise TypeError(f"{cls.__typename__} 'type' must be callable")

    if "nargs" in metadata:
        if not isinstance(nargs := metadata["nargs"], str | Unset):
            raise TypeError(f"{cls.__typename__} 'nargs' must be a string")
        if isinstance(nargs, str) and nargs not in cls.__arities__:
            raise ValueError(f"{cls.__typename__} 'nargs' must be one of {", ".join(map(repr, cls.__arities__))}")


def _fieldname(name, /):
    return name.lstrip("-").replace("-", "_")


class Named(metaclass=ArgumentType):
    """
    Base of every option slot (Flag, Option, Help, Version).
    """
    __introspectable__ = (
        "names",
        "descr",
    )

    @property
    def shorts(self):
        return tuple(name for name in self._names if not name.startswith("--"))

    @property
    def longs(self):
        return tuple(name for name in self._names if name.startswith("--"))

    @property
    def name(self):
        """primary display name: the first long name, else the first name."""
        return next(iter(self.longs), self._names[0])

    @property
    def usage(self):
        return ", ".join(self._names)

    @property
    def takes_value(self):
        return False


class Flag(Named):
    """
    Valueless option, e.g. -v/--verbose.

    When variadic, every occurrence is counted (-vvv → 3); otherwise the result
    only tells whether the flag appeared.
    """
    __introspectable__ = (
        "names",
        "variadic",
        "conflicts",
        "descr",
        "field",
    )

    def __new__(cls, *names, variadic=False, conflicts=(), descr=Unset, field=Unset):
        metadata = {
            "names": names,
            "variadic": bool(variadic),
            "conflicts": conflicts,
            "descr": descr,
            "field": field,
        }
        _sanitize_metadata(cls, metadata)
        _sanitize_named_metadata(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        self._field = coalesce(self._field, _fieldname(self.name))
        return self


class Option(Named):
    """
    Valued option, e.g. -o/--output <value>.

    The value is taken from the same token ("-ox", "-o=x", "--output=x") or from
    the next token, and decoded with 'type'. When variadic, every decoded value is
    kept in order; otherwise the last one wins.
    """
    __introspectable__ = (
        "names",
        "metavar",
        "type",
        "variadic",
        "conflicts",
        "descr",
        "field",
    )

    def __new__(cls, *names, metavar="value", type=str, variadic=False, conflicts=(), descr=Unset, field=Unset):
        metadata = {
            "names": names,
            "metavar": metavar,
            "type": type,
            "variadic": bool(variadic),
            "conflicts": conflicts,
            "descr": descr,
            "field": field,
        }
        _sanitize_metadata(cls, metadata)
        _sanitize_named_metadata(cls, metadata)
        _sanitize_parametric_metadata(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        self._field = coalesce(self._field, _fieldname(self.name))
        return self

    @property
    def usage(self):
        return f"{super().usage} <{self._metavar}>"

    @property
    def takes_value(self):
        return True


class Special(Named):
    """
    Base of the reserved options (Help, Version): names and help text only.
    """

    def __new__(cls, *names, descr=Unset):
        metadata = {
            "names": names,
            "descr": descr,
        }
        _sanitize_metadata(cls, metadata)
        _sanitize_named_metadata(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    variadic = False
    conflicts = ()
    field = None


class Help(Special):
    """
    Reserved "print help" option, e.g. -h/--help.
    """


class Version(Special):
    """
    Reserved "print version" option, e.g. --version.
    """


class Positional(metaclass=ArgumentType):
    """
    Base of every non-option slot (Cardinal, Subcommand).
    """
    __arities__ = ()

    @property
    def name(self):
        """display name used in diagnostics, e.g. "<file>"."""
        return f"<{self._metavar}>"

    @property
    def required(self):
        return self._nargs in (Unset, "+")

    @property
    def variadic(self):
        return self._nargs in ("+", "*")

    @property
    def usage(self):
        usage = self.name + ("..." if self.variadic else "")
        return usage if self.required else f"[{usage}]"


class Cardinal(Positional):
    """
    Positional argument slot.

    Arity follows 'nargs' (see module docstring); the metavar is normalized like
    long option names and rendered as "<metavar>".
    """
    __arities__ = ("?", "+", "*")
    __introspectable__ = (
        "metavar",
        "type",
        "nargs",
        "conflicts",
        "descr",
        "field",
    )

    def __new__(cls, metavar, /, type=str, nargs=Unset, conflicts=(), descr=Unset, field=Unset):
        metadata = {
            "metavar": metavar,
            "type": type,
            "nargs": nargs,
            "conflicts": conflicts,
            "descr": descr,
            "field": field,
        }
        _sanitize_metadata(cls, metadata)
        _sanitize_parametric_metadata(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        self._metavar = normalize(self._metavar)
        self._field = coalesce(self._field, _fieldname(self._metavar))
        if not self._metavar:
            raise SpecificationError(f"{cls.__typename__} {metavar!r}: name cannot be empty once normalized")
        return self


class Command(metaclass=ArgumentType):
    """
    One row of a Subcommand table: a canonical name followed by its aliases.

    'specification' (optional) is the child specification used by
    Invocation.parse() to process the residual tokens.
    """
    __introspectable__ = (
        "name",
        "aliases",
        "descr",
        "specification",
    )

    def __new__(cls, name, /, *aliases, descr=Unset, specification=Unset):
        from .specification import Specification

        metadata = {
            "descr": descr,
        }
        _sanitize_metadata(cls, metadata)

        if not isinstance(specification, Specification | Unset):
            raise TypeError(f"{cls.__typename__} 'specification' must be a specification")

        names = []
        for each in (name, *aliases):
            if not isinstance(each, str):
                raise TypeError(f"{cls.__typename__} names must be strings")
            elif not (each := normalize(each)) or each.startswith("-"):
                raise SpecificationError(f"{cls.__typename__} {each!r}: command names cannot be empty or start with '-'")
            elif each in names:
                raise SpecificationError(f"{cls.__typename__} {each!r} is used more than once")
            names.append(each)

        self = super().__new__(cls)
        self._name, *self._aliases = names
        self._descr = metadata["descr"]
        self._specification = specification
        return self

    @property
    def names(self):
        return (self._name, *self._aliases)

    @property
    def usage(self):
        return ", ".join(self.names)


class Subcommand(Positional):
    """
    Command selector slot; always the last positional slot.

    Every token from its position onwards belongs to it: the first one selects a
    Command (exact match on canonical names and aliases) and the rest is handed
    to the nested parse. nargs="?" makes the selector optional.
    """
    __arities__ = ("?",)
    __introspectable__ = (
        "metavar",
        "commands",
        "nargs",
        "conflicts",
        "descr",
        "field",
    )

    def __new__(cls, metavar, /, *commands, nargs=Unset, conflicts=(), descr=Unset, field=Unset):
        metadata = {
            "metavar": metavar,
            "nargs": nargs,
            "conflicts": conflicts,
            "descr": descr,
            "field": field,
        }
        _sanitize_metadata(cls, metadata)
        _sanitize_parametric_metadata(cls, metadata)

        if not commands:
            raise TypeError(f"{cls.__typename__} must specify at least one command")

        names = set()
        for command in commands:
            if not isinstance(command, Command):
                raise TypeError(f"{cls.__typename__} commands must be command entries")
            for name in command.names:
                if name in names:
                    raise SpecificationError(f"{cls.__typename__} command {name!r} conflicts with previously defined command")
                names.add(name)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        self._commands = commands
        self._metavar = normalize(self._metavar)
        self._field = coalesce(self._field, _fieldname(self._metavar))
        if not self._metavar:
            raise SpecificationError(f"{cls.__typename__} {metavar!r}: name cannot be empty once normalized")
        return self

    def lookup(self, name, /):
        """return the Command whose canonical name or alias is exactly `name`, or None."""
        for command in self._commands:
            if name in command.names:
                return command
        return None


__all__ = (
    "Flag",
    "Option",
    "Help",
    "Version",
    "Cardinal",
    "Subcommand",
    "Command",
)
