"""
Arbor actions: the closed set of outcomes produced by resolving one line.

Variants
- Unknown(token)                     first path segment matched no top-level verb.
- Incorrect(token, verb)             a later segment matched neither a child verb
                                     nor a child command of `verb`.
- BadParameter(token, command)       a single-dash token carried more than one
                                     character after its dash.
- Run(parameter_values, command)     full match; values are bound and ready.
- Help(parameter_values, subject)    help request (emitted by dispatchers, never
                                     by the resolver itself).
- Exit()                             terminal request (emitted by dispatchers).

Semantics
- Actions are immutable values. Equality is structural within a variant; tree
  nodes carried as context (verb, command, subject) compare by identity, which
  is what a node's default equality already provides.
- Every variant declares __match_args__, so dispatchers can do:

      match action:
          case Run(values, command): ...
          case Incorrect(token, verb): ...

- Action itself is abstract and cannot be instantiated.
"""
from .parameters import ParameterValue
from .utils import *


class Action(metaclass=IntrospectableType):
    """
    Base of all resolution outcomes (abstract).
    """
    __slots__ = ()

    def __new__(cls, *args, **kwargs):
        if cls is Action:
            raise TypeError("type 'action' cannot be instantiated directly")
        return super().__new__(cls)

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return all(
            getattr(self, name) == getattr(other, name) for name in type(self).__introspectable__
        )

    def __hash__(self):
        return hash((type(self), *(getattr(self, name) for name in type(self).__introspectable__)))


def _token(cls, token):
    if not isinstance(token, str):
        raise TypeError(f"{cls.__typename__} 'token' must be a string")
    return token


def _parameter_values(cls, parameter_values):
    parameter_values = tuple(parameter_values)
    if not all(isinstance(value, ParameterValue) for value in parameter_values):
        raise TypeError(f"{cls.__typename__} 'parameter_values' must be an iterable of parameter values")
    return parameter_values


class Unknown(Action):
    __slots__ = ("_token",)
    __introspectable__ = ("token",)
    __match_args__ = ("token",)

    def __init__(self, token, /):
        self._token = _token(type(self), token)


class Incorrect(Action):
    """
    Resolution stalled inside `verb`: `token` is neither a child verb nor a
    child command. An empty token means the line ended at the verb.
    """
    __slots__ = ("_token", "_verb")
    __introspectable__ = ("token", "verb")
    __match_args__ = ("token", "verb")

    def __init__(self, token, verb, /):
        self._token = _token(type(self), token)
        self._verb = verb


class BadParameter(Action):
    __slots__ = ("_token", "_command")
    __introspectable__ = ("token", "command")
    __match_args__ = ("token", "command")

    def __init__(self, token, command, /):
        self._token = _token(type(self), token)
        self._command = command


class Run(Action):
    """
    Fully resolved command line.

    `parameter_values` keeps input order, including repeated flags. `command`
    is the resolved leaf (None when built by hand without one).
    """
    __slots__ = ("_parameter_values", "_command")
    __introspectable__ = ("parameter_values", "command")
    __match_args__ = ("parameter_values", "command")

    def __init__(self, parameter_values=(), command=None, /):
        self._parameter_values = _parameter_values(type(self), parameter_values)
        self._command = command


class Help(Action):
    __slots__ = ("_parameter_values", "_subject")
    __introspectable__ = ("parameter_values", "subject")
    __match_args__ = ("parameter_values", "subject")

    def __init__(self, parameter_values=(), subject=None, /):
        self._parameter_values = _parameter_values(type(self), parameter_values)
        self._subject = subject


class Exit(Action):
    __slots__ = ()
    __introspectable__ = ()
    __match_args__ = ()


__all__ = (
    "Action",
    "Unknown",
    "Incorrect",
    "BadParameter",
    "Run",
    "Help",
    "Exit",
)
