"""
Arbor manuals: static help text attached to help-bearing nodes.

- Manual: a short description plus ordered lines of detailed help, both fixed at
  construction. It has no behavior; renderers decide how to lay it out.
- Informational: the narrow capability of exposing a Manual through get_help().
  It is a protocol rather than a base class, so any node type can become
  help-bearing without joining a hierarchy (Verb is the only one today).
"""
from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from .utils import *


class Manual(metaclass=IntrospectableType):
    __slots__ = ("_short_description", "_detailed_help")

    __introspectable__ = (
        "short_description",
        "detailed_help",
    )

    def __init__(self, short_description="", detailed_help=(), /):
        cls = type(self)
        if not isinstance(short_description, str):
            raise TypeError(f"{cls.__typename__} 'short_description' must be a string")
        if isinstance(detailed_help, str) or not isinstance(detailed_help, Iterable):
            raise TypeError(f"{cls.__typename__} 'detailed_help' must be an iterable of strings")
        detailed_help = tuple(detailed_help)
        if not all(isinstance(line, str) for line in detailed_help):
            raise TypeError(f"{cls.__typename__} 'detailed_help' must be an iterable of strings")

        self._short_description = short_description.strip()
        self._detailed_help = detailed_help

    def __eq__(self, other):
        if not isinstance(other, Manual):
            return NotImplemented
        return (
            self._short_description == other._short_description and
            self._detailed_help == other._detailed_help
        )

    def __hash__(self):
        return hash((Manual, self._short_description, self._detailed_help))


@runtime_checkable
class Informational(Protocol):
    """
    Anything that can hand out a Manual for help rendering.
    """

    def get_help(self) -> Manual: ...


__all__ = (
    "Manual",
    "Informational",
)
