"""
Parse state and option binder.

Capture
- One accumulator per slot, created fresh for every parse: decoded values,
  occurrence count, the name the user actually typed (options) and the number
  of trailing tokens granted by the redistributor (positionals).
- Capture.result() materializes the slot's field value:
    Flag              → bool, or int count when variadic
    Option            → last value or None, or list when variadic
    Cardinal          → value / value-or-None / list, following nargs
    Subcommand        → Invocation or None (set by the dispatcher)

bind(specification, lexer, captures, prog)
- Pulls option tokens from the lexer, matches each against the option slots
  (first slot holding the name wins), fetches and decodes values, and
  short-circuits with HelpRequested/VersionRequested as soon as a special
  option is bound.
"""
import difflib

from .arguments import Flag, Option, Help, Version, Cardinal, Subcommand
from .faults import InvalidOptionError, UndecodableValueError, HelpRequested, VersionRequested
from .formatting import helptext, versiontext


class Capture:
    """
    Per-parse accumulator of one slot.
    """
    __slots__ = ("argument", "values", "count", "used", "grant")

    def __init__(self, argument, /):
        self.argument = argument
        self.values = []
        self.count = 0
        self.used = None
        self.grant = 0

    @property
    def set(self):
        """True once the slot occurred at least once or received at least one token."""
        return self.count > 0

    @property
    def name(self):
        """name to report in diagnostics: the spelling used, else the display name."""
        return self.used or self.argument.name

    def record(self, used, /):
        self.used = used
        self.count += 1

    def decode(self, value, /):
        """decode a raw token with the slot's type and keep it."""
        try:
            decoded = self.argument.type(value)
        except (ValueError, TypeError) as error:
            raise UndecodableValueError(
                f"cannot parse argument '{value}': {error}",
                value=value,
                error=error,
                argument=self.name,
            ) from error
        self.values.append(decoded)

    def result(self):
        match self.argument:
            case Flag(variadic=True):
                return self.count
            case Flag():
                return self.count > 0
            case Option(variadic=True) | Cardinal(nargs="+" | "*"):
                return list(self.values)
            case Option() | Cardinal() | Subcommand():
                return self.values[-1] if self.values else None

    def __repr__(self):
        return f"capture({self.argument.name!r}, values={self.values!r}, count={self.count!r})"


def _suggest(option, options, /):
    names = [name for each in options for name in each.names]
    if suggestions := difflib.get_close_matches(option, names, 3):
        return "did you mean %s?" % " or ".join(map(repr, suggestions))
    return None


def bind(specification, lexer, captures, prog, /):
    """
    Bind every lexed option token to its slot capture.

    Parameters
    - specification: the validated Specification.
    - lexer: a fresh Lexer over the raw tokens (program name removed).
    - captures: mapping slot -> Capture for this parse.
    - prog: display name, used to render help/version text.

    Raises InvalidOptionError, MissingValueError/UnexpectedValueError (from the
    lexer), UndecodableValueError, HelpRequested or VersionRequested.
    """
    options = specification.options

    while (option := lexer.next_option()) is not None:
        for argument in options:
            if option in argument.names:
                break
        else:
            raise InvalidOptionError(
                f"invalid option '{option}'",
                option=option,
                hint=_suggest(option, options),
            )

        match argument:
            case Help():
                raise HelpRequested(helptext(specification, prog), option=option)
            case Version():
                raise VersionRequested(versiontext(specification, prog), option=option)
            case Option():
                capture = captures[argument]
                capture.record(option)
                capture.decode(lexer.next_value())
            case Flag():
                captures[argument].record(option)


__all__ = (
    "Capture",
    "bind",
)
