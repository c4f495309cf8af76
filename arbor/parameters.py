r"""
Arbor parameter declarations and their per-parse bindings.

Overview
- Parameter: immutable declaration of one flag, reachable as "-x" (short name)
  and "--name" (long name). Owned by the Command that declares it.
- ParameterValue: transient binding produced by Command.parse(); associates a
  matched Parameter with the raw value tokens that followed it.

Validation highlights
- short_name is exactly one character; it cannot be '-' or whitespace.
- long_name is a non-empty string without whitespace and must not start with '-'
  (the dashes belong to the flag form, not to the name).
- Values are never coerced: they stay raw text in input order.

Quick example:
    >>> name = Parameter("i", "name")
    >>> name
    parameter(short_name='i', long_name='name')
    >>> ParameterValue(name, ["users"]).values
    ('users',)
"""
from collections.abc import Iterable

from .utils import *


class Parameter(metaclass=IntrospectableType):
    """
    Declaration of a single flag with a short and a long form.

    Equality
    - Two parameters are equal when both names match; they hash accordingly so
      they can be used as mapping keys by dispatchers.
    """
    __slots__ = ("_short_name", "_long_name")

    __introspectable__ = (
        "short_name",
        "long_name",
    )

    def __init__(self, short_name, long_name, /):
        cls = type(self)
        if not isinstance(short_name, str):
            raise TypeError(f"{cls.__typename__} 'short_name' must be a string")
        if len(short_name) != 1:
            raise ValueError(f"{cls.__typename__} 'short_name' must be a single character")
        if short_name == "-" or short_name.isspace():
            raise ValueError(f"{cls.__typename__} 'short_name' must not be a dash or whitespace")
        identifier(cls, "long_name", long_name)
        if long_name.startswith("-"):
            raise ValueError(f"{cls.__typename__} 'long_name' must not start with a dash")

        self._short_name = short_name
        self._long_name = long_name

    @property
    def flags(self):
        """
        Both spellings accepted on the command line, short form first.
        """
        return "-" + self._short_name, "--" + self._long_name

    def __eq__(self, other):
        if not isinstance(other, Parameter):
            return NotImplemented
        return (self._short_name, self._long_name) == (other._short_name, other._long_name)

    def __hash__(self):
        return hash((Parameter, self._short_name, self._long_name))


class ParameterValue(metaclass=IntrospectableType):
    """
    One matched flag and the bare tokens collected after it.

    Lifecycle
    - Created by Command.parse() when a flag is recognized and closed when the
      next recognized flag (or the end of input) is reached.
    - A flag given twice yields two ParameterValue objects; they are never merged.
    """
    __slots__ = ("_parameter_type", "_values")

    __introspectable__ = (
        "parameter_type",
        "values",
    )

    def __init__(self, parameter_type, values=(), /):
        if not isinstance(parameter_type, Parameter):
            raise TypeError(f"{type(self).__typename__} 'parameter_type' must be a parameter")
        if isinstance(values, str) or not isinstance(values, Iterable):
            raise TypeError(f"{type(self).__typename__} 'values' must be an iterable of strings")
        values = tuple(values)
        if not all(isinstance(value, str) for value in values):
            raise TypeError(f"{type(self).__typename__} 'values' must be an iterable of strings")

        self._parameter_type = parameter_type
        self._values = values

    def __eq__(self, other):
        if not isinstance(other, ParameterValue):
            return NotImplemented
        return self._parameter_type == other._parameter_type and self._values == other._values

    def __hash__(self):
        return hash((ParameterValue, self._parameter_type, self._values))


__all__ = (
    "Parameter",
    "ParameterValue",
)
