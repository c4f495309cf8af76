"""
Arbor runtime: the dispatcher and line loop around the resolver.

The resolver (Parser/Verb/Command) only *describes* what a line means. Runtime
is the collaborator that acts on it:

- resolve(line)     reserved words first ('exit'/'quit', 'help [path]'), then
                    Parser.parse(line).
- dispatch(action)  Run → call the command's callback with its parameter values;
                    Help → render a manual; Unknown/Incorrect/BadParameter →
                    render (shell) or raise (library) a fault; Exit → stop.
- run(lines)        feed lines (or an interactive prompt) until Exit or EOF.

Quick start
    from arbor import Parser, Verb, Command, Parameter, Manual
    from arbor.runtime import Runtime

    def list_tables(values):
        print([(value.parameter_type.long_name, value.values) for value in values])

    parser = Parser([
        Verb("table", commands=[
            Command("list", [Parameter("i", "name")], callback=list_tables),
        ], manual=Manual("manage tables")),
    ])
    Runtime(parser, fancy=True).run()

Presentation options (constructor keywords)
- shell: print faults instead of raising them (default True).
- deferred: keep going after a printed fault instead of exiting (default True).
- fancy: wrap faults in panels.
- colorful: enable the palette (override entries through __main__.__styles__).
"""
from collections.abc import Iterable

from rich.box import ROUNDED
from rich.console import Console, Group
from rich.table import Table
from rich.text import Text

from . import faults
from .actions import Action, Unknown, Incorrect, BadParameter, Run, Help, Exit
from .faults import DelegatedCommandError, FaultCode, fault, trigger, getdoc
from .manuals import Informational
from .parser import Parser
from .utils import *


class Runtime(metaclass=IntrospectableType):
    """
    Process-level dispatcher bound to one Parser.

    Notes
    - The parser is shared read-only; a Runtime holds only presentation
      settings, so several runtimes may serve the same tree.
    - Exceptions raised by callbacks are reported as DelegatedCommandError.
    """
    __introspectable__ = (
        "parser",
        "name",
        "prompt",
        "exits",
        "helps",
        "shell",
        "deferred",
        "fancy",
        "colorful",
    )

    __displayable__ = (
        "name",
        "prompt",
        "shell",
        "fancy",
        "colorful",
    )

    def __init__(
            self,
            parser,
            /,
            *,
            name="arbor",
            prompt="> ",
            exits=("exit", "quit"),
            helps=("help",),
            console=Unset,
            shell=True,
            deferred=True,
            fancy=False,
            colorful=True,
    ):
        cls = type(self)
        if not isinstance(parser, Parser):
            raise TypeError(f"{cls.__typename__} 'parser' must be a parser")
        identifier(cls, "name", name)
        if not isinstance(prompt, str):
            raise TypeError(f"{cls.__typename__} 'prompt' must be a string")
        for field, words in (("exits", exits), ("helps", helps)):
            if isinstance(words, str) or not isinstance(words, Iterable):
                raise TypeError(f"{cls.__typename__} {field!r} must be an iterable of strings")
        if not isinstance(console, Console | UnsetType):
            raise TypeError(f"{cls.__typename__} 'console' must be a rich console")

        self._parser = parser
        self._name = name
        self._prompt = prompt
        # top-level verbs keep their names; a clashing reserved word is dropped
        self._exits = frozenset(identifier(cls, "exits", word) for word in exits).difference(parser.verbs)
        self._helps = frozenset(identifier(cls, "helps", word) for word in helps).difference(parser.verbs)
        self._console = coalesce(console, Console())
        self._stderr = coalesce(console, faults.console)
        self._shell = bool(shell)
        self._deferred = bool(deferred)
        self._fancy = bool(fancy)
        self._colorful = bool(colorful)

    def resolve(self, line, /):
        """
        Turn one input line into an Action.

        - blank line               → Help((), None)
        - '<exit word> ...'        → Exit()
        - '<help word>'            → Help((), None)
        - '<help word> <path>'     → Help((), verb) for the deepest verb on the
                                     path (a trailing command name selects its
                                     verb); Unknown/Incorrect when the path breaks
        - anything else            → Parser.parse(line)
        """
        head, rest = split(line)
        if not head:
            return Help((), None)
        if head in self._exits:
            return Exit()
        if head in self._helps:
            return self._locate(rest)
        return self._parser.parse(line)

    def _locate(self, path):
        verbs, verb = self._parser.verbs, None
        for segment in path.split():
            if (child := verbs.get(segment)) is not None:
                verbs, verb = child.verbs, child
            elif verb is None:
                return Unknown(segment)
            elif segment in verb.commands:
                break
            else:
                return Incorrect(segment, verb)
        return Help((), verb)

    def _route(self, line, verb):
        """
        Words of `line` that lead from the root to `verb` (for hints).
        """
        head, rest = split(line)
        if head in self._helps:
            line = rest
        words = line.split()
        for index in range(1, len(words) + 1):
            if self._parser.get(" ".join(words[:index])) is verb:
                return " ".join(words[:index])
        return verb.name

    def dispatch(self, action, /, *, line=""):
        """
        Act on a resolved Action.

        Returns False for Exit (the loop should stop), True otherwise. In
        library mode (shell=False) input faults are raised instead of printed.
        """
        if not isinstance(action, Action):
            raise TypeError("dispatch() argument must be an action")

        match action:
            case Exit():
                return False
            case Run(parameter_values, command):
                self._run(parameter_values, command)
            case Help(_, subject):
                self._helper(subject)
            case Incorrect("", verb):
                self._helper(verb)
                self._report(action, line)
            case Unknown() | Incorrect() | BadParameter():
                self._report(action, line)
            case _:
                raise TypeError(f"dispatch() cannot handle {type(action).__typename__!r} actions")
        return True

    def _options(self):
        return dict(
            shell=self._shell,
            deferred=self._deferred,
            fancy=self._fancy,
            colorful=self._colorful,
            console=self._stderr,
            prog=self._name,
        )

    def _report(self, action, line):
        route = ""
        if isinstance(action, Incorrect):
            route = self._route(line, action.verb)
        trigger(fault(action, route=route, candidates=self._parser.verbs.keys()), **self._options())

    def _run(self, parameter_values, command):
        if command is None or command.callback is None:
            name = getattr(command, "name", "<anonymous>")
            self._console.print(Text(
                "command %r has no handler bound" % name, style="dim" if self._colorful else ""
            ))
            return
        try:
            command.callback(parameter_values)
        except Exception as error:
            trigger(DelegatedCommandError(
                "command %r failed: %s" % (command.name, error),
                title="command failed",
                code=FaultCode.DELEGATED_ERROR,
                command=command,
                error=error,
                hint="check the values given to %r" % command.name,
                docs=getdoc(FaultCode.DELEGATED_ERROR),
            ), **self._options())

    def _helper(self, subject):
        """
        Render a manual (or the top-level listing when subject is None).

        Palette keys
        - title, description, detail, table-title, table, child, child-description
        - override any of them through __main__.__styles__
        """
        styles = {
            "title": "bold #FF4D94",  # MAGENTA-PINK → brand pop
            "description": "italic #A3A3A3",  # Neutral gray
            "detail": "#D1D5DB",
            "table-title": "bold #FFFFFF",
            "table": "#4B5563",  # Slate border
            "child": "bold #36C5F0",  # Sky-blue children
            "child-description": "#9CA3AF",
        } | getattr(__import__("__main__"), "__styles__", {})

        def styler(style):
            return styles.get(style, "") if self._colorful else ""

        renders = []

        if subject is None:
            renders.append(Text(getattr(__import__("__main__"), "__prog__", self._name), styler("title")))
            sections = (("verbs", {name: verb.get_help().short_description for name, verb in self._parser.verbs.items()}),)
        elif isinstance(subject, Informational):
            manual = subject.get_help()
            renders.append(Text.assemble(
                Text(getattr(subject, "name", ""), styler("title")),
                *((" — ", Text(manual.short_description, styler("description"))) if manual.short_description else ()),
            ))
            renders.extend(Text("  " + line, styler("detail")) for line in manual.detailed_help)
            sections = (
                ("verbs", {name: verb.get_help().short_description for name, verb in getattr(subject, "verbs", {}).items()}),
                ("commands", {name: command.description for name, command in getattr(subject, "commands", {}).items()}),
            )
        else:
            raise TypeError("help subject must be informational")

        for title, children in sections:
            if not children:
                continue
            table = Table(
                "name", "help",
                title=Text(title, styler("table-title")),
                box=ROUNDED,
                style=styler("table"),
                header_style=styler("table-title"),
            )
            for name, description in sorted(children.items()):
                table.add_row(
                    Text(name, styler("child")),
                    Text(description or "no description", styler("child-description")),
                )
            renders.append(table)

        self._console.print(Group(*renders))

    def _lines(self):
        while True:
            try:
                yield self._console.input(self._prompt)
            except (EOFError, KeyboardInterrupt):
                self._console.print()
                return

    def run(self, lines=Unset, /):
        """
        Resolve and dispatch lines until an Exit action or the end of input.

        Parameters
        - lines: Unset | Iterable[str]
          • Unset: prompt interactively on the console.
          • Iterable[str]: pre-recorded lines (scripts, tests).
        """
        if lines is Unset:
            lines = self._lines()
        elif isinstance(lines, str) or not isinstance(lines, Iterable):
            raise TypeError("run() argument must be an iterable of strings")
        for line in lines:
            if not isinstance(line, str):
                raise TypeError("run() argument must be an iterable of strings")
            if not self.dispatch(self.resolve(line), line=line):
                break


def invoke(parser, line, /, **options):
    """
    Convenience one-shot: resolve and dispatch a single line.

    Options are forwarded to Runtime; by default faults are raised (shell=False)
    so callers can catch them. Returns dispatch()'s result.
    """
    if not isinstance(line, str):
        raise TypeError("invoke() second argument must be a string")
    runtime = Runtime(parser, **{"shell": False, "deferred": False} | options)
    return runtime.dispatch(runtime.resolve(line), line=line)


__all__ = (
    "Runtime",
    "invoke",
)
