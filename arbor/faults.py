"""
Arbor faults (renderable errors) for input-error actions.

Scope
- FaultCode: canonical, stable numeric identifiers for user-facing issues.
  Codes are grouped by domain to keep copy consistent and make logs/searches
  predictable.
- CommandException: base type that carries message + options and knows how to
  render itself in a friendly, lowercased and actionable way.
- fault(action): build the matching exception for Unknown/Incorrect/BadParameter.
- trigger(): central entry point to surface a fault (respecting shell/deferred/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

Why this sits outside the resolver
- Parser/Verb/Command never raise on bad input; they return actions. A dispatcher
  that wants to *show* those actions turns them into faults here, and decides
  whether they are printed (shell mode) or raised (library mode).

Integration
- Runtime.dispatch() calls trigger(fault(action), **runtime_options).
- Host applications may define __prog__, __styles__, __codes__ and __docs__ in
  __main__ to customize the header, palette, code labels and docs.
"""
import difflib
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .actions import Unknown, Incorrect, BadParameter
from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the dispatcher (stable identifiers).

    grouping (by high-level domain)
    - routing (1110x)
      • UNKNOWN_VERB, INCORRECT_VERB, MISSING_COMMAND
    - flags (1111x)
      • BAD_PARAMETER
    - delegated errors (1113x)
      • DELEGATED_ERROR

    spacing leaves room for future additions without reshuffling existing codes;
    normalize() allows host remapping to custom labels while keeping them stable.
    """
    # --- routing errors (11xxx) ---
    UNKNOWN_VERB                = 11101
    INCORRECT_VERB              = 11102
    MISSING_COMMAND             = 11103

    # --- flag errors (11xxx) ---
    BAD_PARAMETER               = 11111

    # --- delegated errors (11xxx) ---
    DELEGATED_ERROR             = 11131

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class CommandException(Exception):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        prog = text(getattr(main, "__prog__", self.options.get("prog", "arbor")), styler("prog-name"))

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(self.options["code"].normalize(), styler("code")),
            " | ",
            text(self.options["title"].title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))
        hint = Text.assemble(text(" → ", styler("hint-arrow")), text(self.options.get("hint"), styler("hint")))

        if fancy:
            return Panel(Group(message, hint), title=header, title_align="left")

        return Group(header, message, hint)

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        self.options.get("console", console).print(self)
        if self.options.get("deferred", False):
            return
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownVerbError(CommandException): ...
class IncorrectVerbError(CommandException): ...
class MissingCommandError(CommandException): ...
class BadParameterError(CommandException): ...
class DelegatedCommandError(CommandException): ...


def _suggest(input, candidates):
    """
    near matches for a hint; first entry (if any) drives the "did you mean" copy.
    """
    return difflib.get_close_matches(input, sorted(candidates), 5)


def fault(action, /, *, route="", candidates=()):
    """
    build the exception describing an input-error action.

    parameters
    - action: Unknown | Incorrect | BadParameter
    - route: str
      the path of verbs that resolved before the offending token
      (e.g. 'table column'); used to phrase hints like "run 'help table column'".
    - candidates: Iterable[str]
      top-level verb names for "did you mean" hints on Unknown (the action
      itself does not know the root).

    returns
    - UnknownVerbError, IncorrectVerbError, MissingCommandError or BadParameterError
      with title/code/hint/suggestions options filled in.

    errors
    - TypeError for any other action (Run/Help/Exit are not faults).
    """
    match action:
        case Unknown(token):
            suggestions = _suggest(token, candidates)
            try:
                hint = "did you mean %r? you can also run 'help' to see available verbs" % suggestions[0]
            except IndexError:
                hint = "run 'help' to see available verbs"
            return UnknownVerbError(
                "unknown verb %r" % token,
                title="unknown verb",
                code=FaultCode.UNKNOWN_VERB,
                input=token,
                suggestions=suggestions,
                hint=hint,
                docs=getdoc(FaultCode.UNKNOWN_VERB),
            )
        case Incorrect("", verb):
            where = route or verb.name
            return MissingCommandError(
                "verb %r needs a sub-verb or a command" % verb.name,
                title="missing command",
                code=FaultCode.MISSING_COMMAND,
                input="",
                verb=verb,
                suggestions=[],
                hint="run 'help %s' to see what %r accepts" % (where, verb.name),
                docs=getdoc(FaultCode.MISSING_COMMAND),
            )
        case Incorrect(token, verb):
            where = route or verb.name
            suggestions = _suggest(token, verb.verbs.keys() | verb.commands.keys())
            try:
                hint = "did you mean %r? you can also run 'help %s' to see its verbs and commands" % (
                    suggestions[0], where
                )
            except IndexError:
                hint = "run 'help %s' to see its verbs and commands" % where
            return IncorrectVerbError(
                "%r is neither a verb nor a command of %r" % (token, verb.name),
                title="incorrect verb",
                code=FaultCode.INCORRECT_VERB,
                input=token,
                verb=verb,
                suggestions=suggestions,
                hint=hint,
                docs=getdoc(FaultCode.INCORRECT_VERB),
            )
        case BadParameter(token, command):
            flags = [parameter.long_name for parameter in command.parameters]
            suggestions = ["--" + name for name in _suggest(token, flags)]
            try:
                hint = "short flags take a single character; did you mean %r?" % suggestions[0]
            except IndexError:
                hint = "short flags take a single character; use '--%s' for a long flag" % token
            return BadParameterError(
                "bad flag '-%s' for command %r" % (token, command.name),
                title="bad parameter",
                code=FaultCode.BAD_PARAMETER,
                input=token,
                command=command,
                suggestions=suggestions,
                hint=hint,
                docs=getdoc(FaultCode.BAD_PARAMETER),
            )
    raise TypeError("fault() argument must be an unknown, incorrect or bad-parameter action")


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see CommandException).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via the rich console; otherwise the fault is raised.

    typical options
    - shell, fancy, colorful, deferred, console, prog, plus any context the
      reporter may want to show.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    when not found, returns None (renderers treat docs as optional).
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "CommandException",
    "UnknownVerbError",
    "IncorrectVerbError",
    "MissingCommandError",
    "BadParameterError",
    "DelegatedCommandError",
    "FaultCode",
    "fault",
    "trigger",
    "getdoc",
)
