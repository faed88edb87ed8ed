"""
Entry points: parse a raw argument stream against a specification.

Flow
    raw stream ─► Lexer ─► bind (options) ─► distribute (non-options, dispatch)
               ─► resolve (conflicts/choices) ─► Namespace

- parse(specification, source): returns a Namespace or raises a ParseError.
  Element 0 of the stream is the program path; its basename is the binary name
  shown in help text and prefixed to a dispatched command stream.
- invoke(specification, source, **options): same, but exits on diagnostics
  (help/version text on stdout with status 0, errors on stderr with status 1).
- Invocation.parse() re-enters parse() for a selected sub-command.

Sources
- Unset: sys.argv.
- str: shell-like command line, split with shlex.split (program name first).
- Iterable[str]: used verbatim; tokens are not trimmed and empty strings are
  legitimate values.
"""
import shlex
import sys
from collections.abc import Iterable

from .binder import Capture, bind
from .distributor import distribute
from .faults import ParseError, trigger
from .lexer import Lexer
from .resolver import resolve
from .specification import Specification
from .utils import Unset, binname, coalesce


class Namespace:
    """
    Parse result: one attribute per result field, in declaration order.
    """

    def __init__(self, /, **fields):
        self.__dict__.update(fields)

    def asdict(self):
        return dict(self.__dict__)

    def __getitem__(self, field):
        return self.__dict__[field]

    def __contains__(self, field):
        return field in self.__dict__

    def __eq__(self, other):
        if not isinstance(other, Namespace):
            return NotImplemented
        return self.__dict__ == other.__dict__

    def __repr__(self):
        return f"namespace({", ".join(f"{field}={value!r}" for field, value in self.__dict__.items())})"

    def __rich_repr__(self):
        yield from self.__dict__.items()


def _tokenize(source, /):
    """
    Normalize an entry-point source into a list of raw tokens.
    """
    if source is Unset:
        return list(sys.argv)
    elif isinstance(source, str):
        return shlex.split(source)
    elif isinstance(source, Iterable):
        tokens = list(source)
        for token in tokens:
            if not isinstance(token, str):
                raise TypeError("parse() source must be a string or an iterable of strings")
        return tokens
    raise TypeError("parse() source must be a string or an iterable of strings")


def parse(specification, source=Unset, /):
    """
    Parse `source` against `specification`.

    Returns
    - Namespace with one field per result-producing slot.

    Raises
    - a ParseError subclass (see posixargs.faults) on invalid input, or
      HelpRequested/VersionRequested when a special option was used.
    - TypeError on a malformed specification or source.
    """
    if not isinstance(specification, Specification):
        raise TypeError("parse() first argument must be a specification")

    argv0, *args = _tokenize(source) or [Unset]
    prog = coalesce(specification.prog, binname(argv0))

    captures = {
        argument: Capture(argument)
        for argument in specification.arguments
        if argument.field is not None
    }

    lexer = Lexer(args)
    bind(specification, lexer, captures, prog)
    distribute([captures[argument] for argument in specification.positionals], lexer.non_options(), prog)
    resolve(list(captures.values()))

    return Namespace(**{capture.argument.field: capture.result() for capture in captures.values()})


def invoke(specification, source=Unset, /, **options):
    """
    Convenience runner: parse, or render the diagnostic and exit.

    Options (forwarded to the fault renderer)
    - colorful: bool, style the output (default True).
    - fancy: bool, wrap errors in a panel with program name and fault code.
    - shell: bool, render and exit (default True); False re-raises instead.
    """
    tokens = _tokenize(source)
    try:
        return parse(specification, tokens)
    except ParseError as fault:
        prog = coalesce(specification.prog, binname(next(iter(tokens), Unset)))
        trigger(fault, **{"prog": prog} | options)


__all__ = (
    "Namespace",
    "parse",
    "invoke",
)
