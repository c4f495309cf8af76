"""
Arbor verb layer: interior nodes of the command tree.

A Verb groups child verbs and commands under one name and carries a Manual.
Resolution walks one whitespace-delimited segment at a time:

    table column add --name id      # Verb 'table' → Verb 'column' → Command 'add'

Resolution order (per level)
1. child verbs
2. child commands
3. otherwise Incorrect(segment, self): the verb where resolution stalled is
   carried so callers can list its children without re-parsing.

Registration
- Child names are unique per level across verbs *and* commands; a collision is
  a ValueError at construction. Lookup keeps checking verbs first, but with
  collisions rejected that precedence can no longer shadow a command.
"""
from collections.abc import Iterable

from .actions import Incorrect
from .commands import Command
from .manuals import Manual
from .utils import *


def _register(cls, owner, field, nodes, kind, taken):
    """
    Index `nodes` by name, rejecting duplicates against everything in `taken`.

    `taken` is shared between the verb and command passes of one level, so a
    verb and a command cannot claim the same name either.
    """
    if isinstance(nodes, str) or not isinstance(nodes, Iterable):
        raise TypeError(f"{cls.__typename__} {field!r} must be an iterable of {field}")
    registry = {}
    for node in nodes:
        if not isinstance(node, kind):
            raise TypeError(f"{cls.__typename__} {field!r} must be an iterable of {field}")
        if (name := node.name) in taken:
            raise ValueError(
                f"{cls.__typename__} {owner!r} child name {name!r} is already in use by a {taken[name]}"
            )
        taken[name] = kind.__typename__
        registry[name] = node
    return registry


class Verb(metaclass=IntrospectableType):
    """
    Interior node of the command tree (help-bearing).

    Responsibilities
    - Hold child verbs and commands in read-only mappings.
    - Recursive dispatch: parse() resolves the next path segment.
    - Expose its Manual through get_help() (Informational capability).

    Lifecycle
    - Built bottom-up by the tree builder; every child is owned by exactly one
      parent, so the structure is a finite tree without cycles.
    """
    __introspectable__ = (
        "name",
        "verbs",
        "commands",
        "manual",
    )

    def __init__(self, name, /, verbs=(), commands=(), manual=Unset):
        cls = type(self)
        identifier(cls, "name", name)
        manual = coalesce(manual, Manual())
        if not isinstance(manual, Manual):
            raise TypeError(f"{cls.__typename__} 'manual' must be a manual")

        taken = {}
        self._name = name
        self._verbs = _register(cls, name, "verbs", verbs, Verb, taken)
        self._commands = _register(cls, name, "commands", commands, Command, taken)
        self._manual = manual

    def get_help(self):
        return self._manual

    def parse(self, remaining, /):
        """
        Resolve the next segment of `remaining` below this verb.

        Returns
        - the child verb's parse(rest) when the segment names a child verb;
        - the child command's parse(rest) when it names a child command;
        - Incorrect(segment, self) otherwise ("" when nothing is left).
        """
        head, rest = split(remaining)

        if (verb := self._verbs.get(head)) is not None:
            return verb.parse(rest)
        if (command := self._commands.get(head)) is not None:
            return command.parse(rest)
        return Incorrect(head, self)


__all__ = (
    "Verb",
)
