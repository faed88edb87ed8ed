"""
Token lexer for POSIX/GNU argument syntax.

Overview
- Lexer(args) walks a raw argument stream (program name already removed) and
  hands out, on demand, option tokens, the value owed to the last option, and
  finally the block of non-option tokens.
- It knows nothing about the specification: whether an option takes a value
  is decided by the caller, who then asks for it with next_value().

States
- ANY:   ready to classify the next raw token.
- SHORT: in the middle of a short cluster, e.g. "-bc" left after "-a" of "-abc".
- VALUE: a value was attached with '=' ("-o=x", "--out=x") and is owed.
- NONE:  terminal, every remaining token is a non-option.

Token rules
- "--"          → discarded, switches to NONE (later tokens stay verbatim).
- "--name[=v]"  → long option "--name", "v" becomes an attached value.
- "-abc"        → short options "-a", "-b", "-c"; "-o=v" and "-ov" both owe "v".
- "-" or a token without a leading dash → switches to NONE (kept as non-option).
"""
from collections import deque
from enum import Enum

from .faults import MissingValueError, UnexpectedValueError


class State(Enum):
    ANY = "any"
    SHORT = "short"
    VALUE = "value"
    NONE = "none"


class Lexer:
    """
    State machine over a raw argument stream.

    Typical use
        lexer = Lexer(["-v", "--out=x", "a", "b"])
        while (option := lexer.next_option()) is not None:
            ...                      # lexer.next_value() when the option takes one
        lexer.non_options()          # ["a", "b"]
    """

    def __init__(self, args, /):
        self._args = deque(args)
        self._state = State.ANY
        self._pending = ""
        self._option = ""

    @property
    def state(self):
        return self._state

    @property
    def option(self):
        """the option token most recently handed out ("" when none is owed)."""
        return self._option

    def _short(self, short):
        if len(short) > 2:
            remaining = short[2:]
            if remaining.startswith("="):
                self._state, self._pending = State.VALUE, remaining[1:]
            else:
                self._state, self._pending = State.SHORT, "-" + remaining
        self._option = short[:2]
        return self._option

    def _long(self, long):
        option, equals, value = long.partition("=")
        if equals:
            self._state, self._pending = State.VALUE, value
        self._option = option
        return self._option

    def _none(self):
        self._option = ""
        self._state = State.NONE
        return None

    def next_option(self):
        """
        Return the next option token, or None once non-option mode begins.

        Raises UnexpectedValueError when an attached value is still owed (the
        previous option took no value), and RuntimeError when called again after
        returning None.
        """
        state, pending = self._state, self._pending
        self._state, self._pending = State.ANY, ""

        match state:
            case State.ANY:
                if self._args:
                    arg = self._args[0]
                    if arg.startswith("--"):
                        self._args.popleft()
                        if len(arg) > 2:
                            return self._long(arg)
                    elif arg.startswith("-") and len(arg) > 1:
                        self._args.popleft()
                        return self._short(arg)
                return self._none()
            case State.SHORT:
                return self._short(pending)
            case State.VALUE:
                raise UnexpectedValueError(
                    f"unexpected value for option '{self._option}': {pending}",
                    option=self._option,
                    value=pending,
                    hint=f"{self._option!r} does not take a value; remove '={pending}'",
                )
            case State.NONE:
                self._state = State.NONE
                raise RuntimeError("next_option() called after the last option")

    def next_value(self):
        """
        Return the value owed to the option just returned by next_option().

        An attached value ("-ox", "-o=x", "--out=x") is consumed first; otherwise the
        next raw token is taken verbatim, whatever it looks like. Raises
        MissingValueError when the stream is exhausted.
        """
        state, pending = self._state, self._pending
        self._state, self._pending = State.ANY, ""

        match state:
            case State.ANY:
                if not self._args:
                    raise MissingValueError(
                        f"missing value for option '{self._option}'",
                        option=self._option,
                        hint=f"pass a value after {self._option!r}",
                    )
                self._option = ""
                return self._args.popleft()
            case State.SHORT:
                return pending[1:]
            case State.VALUE:
                return pending
            case State.NONE:
                self._state = State.NONE
                raise RuntimeError("next_value() called after the last option")

    def non_options(self):
        """
        Return the remaining raw tokens once every option has been handed out.

        Calling it while in ANY state first finishes option lexing; it is a
        programming error if an option token is still left to be read.
        """
        if self._state is State.ANY and self.next_option() is not None:
            raise RuntimeError("non_options() called before all options were read")
        if self._state is not State.NONE:
            raise RuntimeError("non_options() called before all options were read")
        return list(self._args)


__all__ = (
    "State",
    "Lexer",
)
