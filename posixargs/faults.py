"""
Posixargs faults (parse diagnostics, authoring errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing
  diagnostic. Codes are grouped by the engine stage that raises them.
- ParseError: base type for run-time diagnostics; carries the exact message
  plus a read-only payload mapping (offending tokens, slot names, hint).
- EarlyExit: ParseError branch for the help/version short-circuits; they are
  not failures, the host renders their message and stops successfully.
- SpecificationError / SpecificationWarning: programmer mistakes detected when
  slots or specifications are built, never while reading user input.
- trigger(): central entry point to surface a diagnostic (raise or render+exit).

Rendering
- Diagnostics render through rich on stderr as "error: <message>" followed by
  an optional "→ <hint>" line. With fancy=True the body is wrapped in a panel
  titled "[ <prog> — <code> | <title> ]".
- Host hooks read from __main__: __styles__ (style overrides), __codes__
  (fault-code relabeling) and __prog__ (program display name).
"""
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)
stdout = Console(soft_wrap=True, highlight=False)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the engine (stable identifiers).

    grouping (by engine stage)
    - lexer (2110x)
      • MISSING_VALUE, UNEXPECTED_VALUE
    - option binder (2111x)
      • INVALID_OPTION, UNDECODABLE_VALUE
    - redistributor/dispatcher (2112x)
      • INVALID_ARGUMENT, MISSING_ARGUMENT, INVALID_COMMAND
    - resolver (2113x)
      • CONFLICTING_ARGUMENTS, MISSING_CHOICE
    - short-circuits (2120x)
      • HELP_REQUESTED, VERSION_REQUESTED
    """
    # --- lexer (21xxx) ---
    MISSING_VALUE               = 21101
    UNEXPECTED_VALUE            = 21102

    # --- option binder (21xxx) ---
    INVALID_OPTION              = 21111
    UNDECODABLE_VALUE           = 21112

    # --- redistributor/dispatcher (21xxx) ---
    INVALID_ARGUMENT            = 21121
    MISSING_ARGUMENT            = 21122
    INVALID_COMMAND             = 21123

    # --- resolver (21xxx) ---
    CONFLICTING_ARGUMENTS       = 21131
    MISSING_CHOICE              = 21132

    # --- short-circuits (21xxx) ---
    HELP_REQUESTED              = 21201
    VERSION_REQUESTED           = 21202

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ParseError(Exception):
    """
    base type of every run-time parse diagnostic.

    the message is the exact, user-facing sentence; everything else (the
    offending token, slot names, hint, rendering switches) lives in the
    read-only `options` mapping.
    """
    code = Unset
    title = "error"

    def __init__(self, message, /, **options):
        assert isinstance(message, str)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",
            "error-label": "bold red",
            "error-message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", True)

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            return Text(str(fragment), styles[style] if colorful else "")

        message = Text.assemble(text(self.title, "error-label"), ": ", text(self.message, "error-message"))
        renders = [message]
        if hint := self.options.get("hint"):
            renders.append(Text.assemble(text("→ ", "hint-arrow"), text(hint, "hint")))

        if self.options.get("fancy", False):
            prog = getattr(main, "__prog__", self.options.get("prog", "<program>"))
            code = self.code.normalize() if isinstance(self.code, FaultCode) else "-"
            header = Text.assemble(
                "[ ",
                text(prog, "prog-name"),
                " — ",
                text(code, "code"),
                " | ",
                text(type(self).__name__, "error-title"),
                " ]"
            )
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(*renders)

    def __trigger__(self):
        if not self.options.get("shell", True):
            raise self
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class InvalidOptionError(ParseError):
    code = FaultCode.INVALID_OPTION


class InvalidArgumentError(ParseError):
    code = FaultCode.INVALID_ARGUMENT


class InvalidCommandError(ParseError):
    code = FaultCode.INVALID_COMMAND


class MissingArgumentError(ParseError):
    code = FaultCode.MISSING_ARGUMENT


class MissingChoiceError(ParseError):
    code = FaultCode.MISSING_CHOICE


class MissingValueError(ParseError):
    code = FaultCode.MISSING_VALUE


class UnexpectedValueError(ParseError):
    code = FaultCode.UNEXPECTED_VALUE


class ConflictingArgumentsError(ParseError):
    code = FaultCode.CONFLICTING_ARGUMENTS


class UndecodableValueError(ParseError):
    code = FaultCode.UNDECODABLE_VALUE


class EarlyExit(ParseError):
    """
    short-circuit raised when a help or version option is bound.

    not a failure: the message is the text to show, on stdout, with a
    successful exit status.
    """

    def __rich__(self):
        return Text(self.message)

    def __trigger__(self):
        if not self.options.get("shell", True):
            raise self
        stdout.print(self, end="")
        sys.exit(0)


class HelpRequested(EarlyExit):
    code = FaultCode.HELP_REQUESTED


class VersionRequested(EarlyExit):
    code = FaultCode.VERSION_REQUESTED

    def __rich__(self):
        return Text(self.message + "\n")


class SpecificationError(ValueError):
    """
    a specification or slot was authored incorrectly.

    raised at definition time (program startup), never while parsing input.
    """


class SpecificationWarning(UserWarning):
    """
    a specification is valid but carries something with no effect.
    """


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ParseError).
    - options are merged into the fault via __replace__(**options) before triggering.
    - with shell=False the fault is raised; otherwise it is rendered via rich and
      the process exits (status 0 for EarlyExit, 1 for everything else).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


__all__ = (
    "FaultCode",
    "ParseError",
    "InvalidOptionError",
    "InvalidArgumentError",
    "InvalidCommandError",
    "MissingArgumentError",
    "MissingChoiceError",
    "MissingValueError",
    "UnexpectedValueError",
    "ConflictingArgumentsError",
    "UndecodableValueError",
    "EarlyExit",
    "HelpRequested",
    "VersionRequested",
    "SpecificationError",
    "SpecificationWarning",
    "trigger",
)
