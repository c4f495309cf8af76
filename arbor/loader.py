"""
Arbor loader: build a verb tree from static data.

Schema (mapping, TOML table or JSON object)

    [verbs.table]
    description = "manage tables"
    help = ["create, list and drop tables", "see 'help table column' for columns"]

    [verbs.table.commands.list]
    description = "list tables"
    callback = "inventory.handlers:list_tables"
    parameters = [
        { short = "i", long = "name" },
        { short = "n", long = "count" },
    ]

    [verbs.table.verbs.column]
    description = "manage table columns"

Rules
- every key is optional except the verb/command names themselves.
- 'callback' is a "module:attribute" reference imported at build time.
- unknown keys are rejected so typos surface at startup instead of silently
  producing a different tree.
- errors name the offending location, e.g. "verbs.table.commands.list.parameters[0]".
"""
import builtins
import functools
import importlib
import json
import os
import tomllib
from collections.abc import Mapping, Sequence

from .commands import Command
from .manuals import Manual
from .parameters import Parameter
from .parser import Parser
from .verbs import Verb


_VERB_KEYS = frozenset({"description", "help", "verbs", "commands"})
_COMMAND_KEYS = frozenset({"description", "callback", "parameters"})
_PARAMETER_KEYS = frozenset({"short", "long"})


def resolve(reference, /):
    """
    import a callable from a "module:attribute" reference.

    the attribute part may be dotted ("pkg.mod:Class.method"). raises ValueError
    for a malformed reference, ImportError/AttributeError when it cannot be found
    and TypeError when the target is not callable.
    """
    if not isinstance(reference, str):
        raise TypeError("resolve() argument must be a string")
    module, separator, attribute = reference.partition(":")
    if not separator or not module.strip() or not attribute.strip():
        raise ValueError("resolve() argument must look like 'module:attribute'")
    target = functools.reduce(getattr, attribute.strip().split("."), importlib.import_module(module.strip()))
    if not builtins.callable(target):
        raise TypeError(f"resolve() target {reference!r} is not callable")
    return target


def _expect(where, value, kind, label):
    if not isinstance(value, kind) or isinstance(value, str) and kind is not str:
        raise TypeError(f"{where} must be {label}")
    return value


def _check_keys(where, data, allowed):
    if unknown := set(data) - allowed:
        raise ValueError(f"{where} has unknown keys: {', '.join(sorted(map(str, unknown)))}")


def _build_parameter(where, data):
    _expect(where, data, Mapping, "a table")
    _check_keys(where, data, _PARAMETER_KEYS)
    try:
        return Parameter(data["short"], data["long"])
    except KeyError as error:
        raise ValueError(f"{where} is missing key {error.args[0]!r}") from None
    except (TypeError, ValueError) as error:
        raise type(error)(f"{where}: {error}") from None


def _build_command(where, name, data):
    _expect(where, data, Mapping, "a table")
    _check_keys(where, data, _COMMAND_KEYS)

    parameters = _expect(where + ".parameters", data.get("parameters", []), Sequence, "an array")
    parameters = [
        _build_parameter(f"{where}.parameters[{index}]", parameter)
        for index, parameter in enumerate(parameters)
    ]

    callback = data.get("callback")
    if callback is not None:
        try:
            callback = resolve(_expect(where + ".callback", callback, str, "a string"))
        except (ImportError, AttributeError) as error:
            raise ValueError(f"{where}.callback cannot be resolved: {error}") from None

    try:
        return Command(
            name,
            parameters,
            description=_expect(where + ".description", data.get("description", ""), str, "a string"),
            callback=callback,
        )
    except (TypeError, ValueError) as error:
        raise type(error)(f"{where}: {error}") from None


def _build_verb(where, name, data):
    _expect(where, data, Mapping, "a table")
    _check_keys(where, data, _VERB_KEYS)

    description = _expect(where + ".description", data.get("description", ""), str, "a string")
    help = _expect(where + ".help", data.get("help", []), Sequence, "an array of strings")
    try:
        manual = Manual(description, help)
    except TypeError:
        raise TypeError(f"{where}.help must be an array of strings") from None

    verbs = [
        _build_verb(f"{where}.verbs.{child}", child, value)
        for child, value in _expect(where + ".verbs", data.get("verbs", {}), Mapping, "a table").items()
    ]
    commands = [
        _build_command(f"{where}.commands.{child}", child, value)
        for child, value in _expect(where + ".commands", data.get("commands", {}), Mapping, "a table").items()
    ]

    try:
        return Verb(name, verbs=verbs, commands=commands, manual=manual)
    except (TypeError, ValueError) as error:
        raise type(error)(f"{where}: {error}") from None


def build(data, /):
    """
    build a Parser from an already-decoded mapping (see module docstring).
    """
    _expect("document", data, Mapping, "a table")
    _check_keys("document", data, {"verbs"})
    verbs = _expect("verbs", data.get("verbs", {}), Mapping, "a table")
    return Parser([_build_verb(f"verbs.{name}", name, value) for name, value in verbs.items()])


def load(source, /):
    """
    build a Parser from a mapping or from a .toml/.json file.

    parameters
    - source: Mapping | str | os.PathLike
      a decoded document, or the path of a file to decode (suffix decides the
      format; anything else is a ValueError).
    """
    if isinstance(source, Mapping):
        return build(source)
    if not isinstance(source, str | os.PathLike):
        raise TypeError("load() argument must be a mapping or a path")

    path = os.fspath(source)
    match os.path.splitext(path)[1].lower():
        case ".toml":
            with open(path, "rb") as file:
                return build(tomllib.load(file))
        case ".json":
            with open(path, encoding="utf-8") as file:
                return build(json.load(file))
        case suffix:
            raise ValueError(f"load() cannot read {suffix or 'suffix-less'!r} files, use .toml or .json")


__all__ = (
    "resolve",
    "build",
    "load",
)
