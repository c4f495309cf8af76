"""
Arbor utilities shared by the tree nodes, the actions and the runtime.

Overview
- UnsetType / Unset
  • Shared falsy marker for omitted keywords, distinct from None.

- coalesce(value, default=None)
  • Swap Unset for a default; every other value passes through.

- rename(callable, name) / @rename("name")
  • Name the methods the metaclass generates.

- mirror("attr")
  • Read-only property factory exposing a private backing field (self._attr) as an
    immutable view (tuple / MappingProxyType / frozenset).

- split(text)
  • Break a line on its first whitespace run into (head, rest).

- IntrospectableType
  • Metaclass giving tree nodes and actions a stable __repr__/__rich_repr__ and
    read-only properties for every name listed in __introspectable__.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> split("table list -i users")
    ('table', 'list -i users')
    >>> split("exit")
    ('exit', '')
"""
import builtins
import functools
import operator
import re
from collections.abc import Sequence, Mapping, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Type of the Unset sentinel: a tree field the caller left out.

    Verb manuals and runtime consoles accept None as a real value, so omission
    needs its own marker. UnsetType() always returns the one shared instance,
    the instance is falsy, and the type cannot be subclassed.
    """

    def __or__(self, other, /):
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


Unset = UnsetType()
"""
Marker for an omitted keyword (Verb manual, Runtime console, run() lines).
"""


def coalesce(object, default=None, /):
    """
    Return default when object is Unset, else object (None and "" included).
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Give a generated callable a readable __name__ and __qualname__.

    rename(callable, name) updates and returns callable; rename(name) returns a
    decorator. The metaclass uses it so generated __repr__/__rich_repr__ and
    mirror() getters show up under their attribute names in tracebacks.
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def mirror(name, /):
    """
    Define a read-only property that mirrors a private backing attribute.

    The generated property reads "_{name}" on the instance and returns an
    immutable view for container types:
    - Sequence (non-str) → tuple
    - Mapping           → MappingProxyType
    - Set               → frozenset
    - other types       → returned as-is

    Nodes are built once and shared between parse calls, so nothing reachable
    from a public attribute may be mutable.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        value = getattr(self, "_" + name)
        if isinstance(value, Sequence) and not isinstance(value, str):
            return tuple(value)
        if isinstance(value, Mapping):
            return MappingProxyType(value)
        if isinstance(value, Set):
            return frozenset(value)
        return value

    return property(getter)


def split(text, /):
    """
    Split off the first whitespace-delimited token of a line.

    Returns
    - (head, rest): head is the first token, rest everything after the
      whitespace run that follows it. Leading whitespace is skipped.
    - ("", "") for an empty or blank line.

    Examples
    - split("table list -i x") -> ("table", "list -i x")
    - split("table")           -> ("table", "")
    """
    if not isinstance(text, str):
        raise TypeError("split() argument must be a string")
    match text.split(None, 1):
        case []:
            return "", ""
        case [head]:
            return head, ""
        case [head, rest]:
            return head, rest
    raise RuntimeError("unreachable")


def identifier(cls, field, value, /):
    """
    Validate a whitespace-free, non-empty name used as a lookup key.

    Errors
    - TypeError: value is not a string.
    - ValueError: value is empty or contains whitespace (it could never be
      produced by split(), so the node would be unreachable).
    """
    if not isinstance(value, str):
        raise TypeError(f"{cls.__typename__} {field!r} must be a string")
    if not value:
        raise ValueError(f"{cls.__typename__} {field!r} must be a non-empty string")
    if re.search(r"\s", value):
        raise ValueError(f"{cls.__typename__} {field!r} must not contain whitespace")
    return value


class IntrospectableType(type):
    """
    Metaclass that gives tree nodes and actions a uniform, read-only surface.

    Responsibilities
    - Expose every name listed in __introspectable__ as a read-only property
      mirroring the private "_{name}" field (see mirror()).
    - Provide stable, readable __repr__/__rich_repr__ for diagnostics and rich UI.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      for consistent, human-friendly labels in messages.
    - __displayable__ (if set) narrows which properties are shown by __rich_repr__;
      otherwise __introspectable__ is used.
    """
    __introspectable__ = ()
    __displayable__ = Unset

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

        if "__repr__" not in namespace:
            @rename("__repr__")
            def __repr__(self):
                """
                Return a concise, stable representation with key metadata.

                Example
                - parameter(short_name='i', long_name='name')
                """
                return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"
            self.__repr__ = __repr__

        if "__rich_repr__" not in namespace:
            @rename("__rich_repr__")
            def __rich_repr__(self):
                """
                Yield (name, object) pairs for pretty printers.
                """
                for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                    yield name, getattr(self, name)
            self.__rich_repr__ = __rich_repr__

        return self


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",
    "split",
    "identifier",

    # Types
    "UnsetType",
    "IntrospectableType",

    # Constants
    "Unset",
)
