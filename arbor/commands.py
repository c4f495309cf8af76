"""
Arbor command layer: leaf nodes and the flag tokenizer.

What this module provides
- Command: a named leaf of the verb tree that declares its Parameters and turns
  the trailing text of a line into ParameterValues.

Tokenizer grammar (Command.parse)
- tokens are whitespace runs; there is no quoting or escaping.
- '--name'  → long flag. Known names open a new value group; unknown ones are
              dropped silently and the current group stays open.
- '-x'      → short flag, exactly one character after the dash. Known names open a
              new value group; unknown ones are dropped silently.
- '-xyz'    → malformed: more than one character after a single dash. Parsing
              stops at once with BadParameter('xyz', command); groups collected
              so far are discarded (this is not a cluster of short flags).
- anything else is a value: appended to the open group, or dropped when no flag
  has been seen yet (there are no positional parameters).

Examples
    >>> table = Command("list", [Parameter("i", "name"), Parameter("n", "count")])
    >>> table.parse("-i users -n 10")
    run(parameter_values=(parameter-value(...), parameter-value(...)), command=command(name='list', ...))
    >>> table.parse("-in 10")
    bad-parameter(token='in', command=command(name='list', ...))

Notes
- A Command never executes anything. The optional `callback` is carried for the
  dispatcher that receives the Run action (see arbor.runtime).
- Indices are built once in the constructor; duplicate short or long names are
  rejected there so lookups are unambiguous.
"""
import builtins
from collections.abc import Iterable

from .actions import Run, BadParameter
from .parameters import Parameter, ParameterValue
from .utils import *


class Command(metaclass=IntrospectableType):
    """
    Leaf node of the verb tree.

    Responsibilities
    - Introspection: name, description, parameters and both lookup indices are
      exposed as read-only views.
    - Tokenization: parse() maps argument text to Run or BadParameter.

    Lifecycle
    - Built once by the tree builder, immutable afterwards, owned by one Verb.
    """
    __introspectable__ = (
        "name",
        "parameters",
        "parameters_by_short_name",
        "parameters_by_long_name",
        "description",
        "callback",
    )

    __displayable__ = (
        "name",
        "parameters",
        "description",
    )

    def __init__(self, name, parameters=(), /, description="", callback=None):
        cls = type(self)
        identifier(cls, "name", name)
        if isinstance(parameters, str) or not isinstance(parameters, Iterable):
            raise TypeError(f"{cls.__typename__} 'parameters' must be an iterable of parameters")
        if not isinstance(description, str):
            raise TypeError(f"{cls.__typename__} 'description' must be a string")
        if callback is not None and not builtins.callable(callback):
            raise TypeError(f"{cls.__typename__} 'callback' must be callable")

        parameters = tuple(parameters)
        shorts = {}
        longs = {}

        for position, parameter in enumerate(parameters):
            if not isinstance(parameter, Parameter):
                raise TypeError(f"{cls.__typename__} 'parameters' must be an iterable of parameters")
            if shorts.setdefault(parameter.short_name, position) != position:
                raise ValueError(
                    f"{cls.__typename__} {name!r} short name {parameter.short_name!r} is already in use"
                )
            if longs.setdefault(parameter.long_name, position) != position:
                raise ValueError(
                    f"{cls.__typename__} {name!r} long name {parameter.long_name!r} is already in use"
                )

        self._name = name
        self._parameters = parameters
        self._parameters_by_short_name = shorts
        self._parameters_by_long_name = longs
        self._description = description.strip()
        self._callback = callback

    def _lookup(self, index, name):
        """
        Resolve a flag name through one of the indices; None when undeclared.
        """
        try:
            position = index[name]
        except KeyError:
            return None
        # an index pointing past the declarations is a construction bug, not bad input
        assert 0 <= position < len(self._parameters), "parameter index out of range"
        return self._parameters[position]

    def parse(self, argument_text, /):
        """
        Tokenize the text that follows this command on a line.

        Parameters
        - argument_text: str
          everything after the command name (may be empty).

        Returns
        - Run(parameter_values, self): values grouped per recognized flag, in
          input order. Empty text yields Run((), self).
        - BadParameter(stripped, self): first single-dash token with more than
          one character after the dash; earlier groups are discarded.
        """
        if not isinstance(argument_text, str):
            raise TypeError("parse() argument must be a string")

        results = []
        current = None  # (parameter, values) of the open group

        for token in argument_text.split():
            if token.startswith("--"):
                parameter = self._lookup(self._parameters_by_long_name, token[2:])
            elif token.startswith("-"):
                if len(stripped := token[1:]) > 1:
                    return BadParameter(stripped, self)
                parameter = self._lookup(self._parameters_by_short_name, stripped)
            else:
                if current is not None:
                    current[1].append(token)
                continue

            if parameter is None:
                continue
            if current is not None:
                results.append(ParameterValue(*current))
            current = (parameter, [])

        if current is not None:
            results.append(ParameterValue(*current))

        return Run(results, self)


__all__ = (
    "Command",
)
