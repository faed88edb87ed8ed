"""
Non-option redistributor and command dispatcher.

Allocation (one deterministic pass over the positional slots)
1. every required slot (variadic or not, the selector included) is granted
   one token, in declaration order, while tokens remain;
2. every optional slot is granted one token, in declaration order;
3. whatever is left goes to the variadic slot or the command selector;
4. tokens are drained in declaration order, decoded, or dispatched to the
   selector;
5. a required slot left without a token raises MissingArgumentError, and a
   token nobody absorbed raises InvalidArgumentError.

Required slots are saturated before optional ones and the variadic slot only
takes the excess, so "<a>... <b> <c>" with 4 tokens gives a=[0, 1], b=2, c=3.

Dispatch
- The selector's tokens form a nested argument stream. Its first token must be
  a declared command name or alias (InvalidCommandError otherwise); the stream's
  first element is then rewritten to "<prog> <canonical>" and wrapped in an
  Invocation that re-enters the parser with the command's own specification.
"""
import difflib
from collections import deque

from .arguments import Subcommand
from .faults import InvalidArgumentError, InvalidCommandError, MissingArgumentError
from .utils import Unset


class Invocation:
    """
    Selected sub-command with its residual argument stream.

    - name: canonical command name (aliases are resolved).
    - args: raw stream for the nested parse; args[0] is "<prog> <name>".
    - command: the matched Command entry.
    """

    def __init__(self, command, args, /):
        self.command = command
        self.name = command.name
        self.args = list(args)

    @property
    def specification(self):
        return self.command.specification

    def parse(self, specification=Unset, /):
        """
        Parse the residual stream with `specification`, or with the one attached
        to the matched Command entry.
        """
        from .commands import parse

        if specification is Unset and (specification := self.specification) is Unset:
            raise TypeError(f"command {self.name!r} has no specification to parse with")
        return parse(specification, self.args)

    def __eq__(self, other):
        if not isinstance(other, Invocation):
            return NotImplemented
        return (self.name, self.args) == (other.name, other.args)

    def __repr__(self):
        return f"invocation({self.name!r}, {self.args!r})"

    def __rich_repr__(self):
        yield self.name
        yield self.args


def allocate(captures, count, /):
    """
    Grant `count` tokens to the positional captures (steps 1-3); return the
    number of tokens left ungranted.
    """
    remaining = count

    for required in (True, False):
        for capture in captures:
            if remaining and capture.argument.required is required:
                capture.grant += 1
                remaining -= 1

    if remaining:
        for capture in captures:
            if capture.argument.variadic or isinstance(capture.argument, Subcommand):
                capture.grant += remaining
                remaining = 0
                break

    return remaining


def dispatch(subcommand, tokens, prog, /):
    """
    Resolve the selector's first token and build the nested Invocation.
    """
    arg, *rest = tokens
    if (command := subcommand.lookup(arg)) is None:
        names = [name for each in subcommand.commands for name in each.names]
        suggestions = difflib.get_close_matches(arg, names, 3)
        raise InvalidCommandError(
            f"invalid command '{arg}'",
            arg=arg,
            hint=("did you mean %s?" % " or ".join(map(repr, suggestions))) if suggestions else None,
        )
    return Invocation(command, [f"{prog} {command.name}", *rest])


def distribute(captures, tokens, prog, /):
    """
    Allocate, drain and check the non-option `tokens` over the positional
    `captures` (declaration order). `prog` prefixes a dispatched command stream.
    """
    remaining = allocate(captures, len(tokens))
    tokens = deque(tokens)

    for capture in captures:
        if not capture.grant:
            continue
        granted = [tokens.popleft() for _ in range(capture.grant)]
        capture.count = len(granted)
        if isinstance(capture.argument, Subcommand):
            capture.values.append(dispatch(capture.argument, granted, prog))
        else:
            for token in granted:
                capture.decode(token)

    for capture in captures:
        if capture.argument.required and not capture.grant:
            raise MissingArgumentError(
                f"missing argument '{capture.argument.name}'",
                arg=capture.argument.name,
            )

    if remaining:
        raise InvalidArgumentError(
            f"invalid argument '{tokens[0]}'",
            arg=tokens[0],
            arguments=list(tokens),
        )


__all__ = (
    "Invocation",
    "allocate",
    "dispatch",
    "distribute",
)
