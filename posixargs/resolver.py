"""
Conflict and choice resolver.

Runs after binding and redistribution, over the captures of options then
positionals, in declaration order.

- claim pass: every tag carried by a slot that was set is claimed by that slot.
  A second claim on the same tag raises ConflictingArgumentsError naming the
  earlier claimant first. Options are reported with the spelling the user typed,
  positionals with their display name ("<file>").
- choice pass: every "?" tag declared anywhere must have been claimed, otherwise
  MissingChoiceError lists the primary names of all its members.
"""
from .faults import ConflictingArgumentsError, MissingChoiceError


def claim(captures, /):
    """return the mapping tag -> name of the set slot that claimed it."""
    claims = {}
    for capture in captures:
        if not capture.set:
            continue
        for tag in capture.argument.conflicts:
            if tag in claims:
                raise ConflictingArgumentsError(
                    f"conflicting arguments '{claims[tag]}' and '{capture.name}'",
                    arguments=(claims[tag], capture.name),
                    tag=tag,
                )
            claims[tag] = capture.name
    return claims


def resolve(captures, /):
    """
    Check exclusion and choice groups over `captures` (options first, then
    positionals). Returns None; raises on the first violation.
    """
    claims = claim(captures)

    choices = {}
    for capture in captures:
        for tag in capture.argument.conflicts:
            if tag.startswith("?"):
                choices.setdefault(tag, []).append(capture.argument.name)

    for tag, alternatives in choices.items():
        if tag not in claims:
            raise MissingChoiceError(
                "missing argument %s" % " or ".join(f"'{name}'" for name in alternatives),
                alternatives=tuple(alternatives),
                tag=tag,
            )


__all__ = (
    "claim",
    "resolve",
)
