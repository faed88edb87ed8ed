"""
Usage, help and version text.

Layout (help)
    usage: <prog> [options] <a> [<b>...] <command> [...]
    <blank>
    options:
       -a, --aaa <value>     help
       --bbb
    <blank>
    arguments:
       <a>                   help
    <blank>
    commands:
       remove, rm            help
    <blank>

- " [options]" only appears when the specification has options; " [...]"
  follows the command selector.
- "arguments" lists only positionals carrying help text; "commands" lists the
  selector's table. Empty sections are omitted.
- The first column is padded to the widest entry across all sections and
  separated from the help text by five spaces.
"""
from .arguments import Subcommand


def usage(specification, prog, /):
    """return the usage line (without trailing newline)."""
    line = "usage: " + prog
    if specification.options:
        line += " [options]"
    for positional in specification.positionals:
        line += " " + positional.usage
        if isinstance(positional, Subcommand):
            line += " [...]"
    return line


def _section(title, width, rows):
    if not rows:
        return ""
    lines = [title + ":\n"]
    for first, second in rows:
        if second is None:
            lines.append(f"   {first}\n")
        else:
            lines.append(f"   {first:<{width}}     {second}\n")
    return "".join(lines) + "\n"


def helptext(specification, prog, /):
    """
    Return the full help text for `specification`, displayed for `prog`.

    The text ends with a blank line, so it is written out verbatim.
    """
    options = [(option.usage, option.descr) for option in specification.options]
    positionals = [(positional.usage, positional.descr) for positional in specification.positionals
                   if positional.descr is not None]
    commands = []
    if (subcommand := specification.subcommand) is not None:
        commands = [(command.usage, command.descr) for command in subcommand.commands]

    width = max((len(first) for first, _ in options + positionals + commands), default=0)

    return "".join((
        usage(specification, prog) + "\n\n",
        _section("options", width, options),
        _section("arguments", width, positionals),
        _section("commands", width, commands),
    ))


def versiontext(specification, prog, /):
    """return "<prog> <version>", preferring the specification's own prog."""
    return f"{specification.prog or prog} {specification.version}"


__all__ = (
    "usage",
    "helptext",
    "versiontext",
)
