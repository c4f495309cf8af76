"""
Arbor parser: entry point from a raw line to an Action.

    >>> parser = Parser([table, exit])
    >>> parser.parse("table list -i users")     # delegated to table.parse("list -i users")
    >>> parser.parse("tabel list")              # unknown('tabel')

The parser owns the top-level verbs only; everything below the first segment is
resolved by Verb.parse(). It keeps no state between calls, so one instance can
serve any number of callers at once.
"""
from .actions import Unknown
from .utils import *
from .verbs import Verb, _register


class Parser(metaclass=IntrospectableType):
    __introspectable__ = (
        "verbs",
    )

    def __init__(self, verbs=(), /):
        self._verbs = _register(type(self), "<root>", "verbs", verbs, Verb, {})

    def parse(self, line, /):
        """
        Resolve one input line.

        Returns
        - the matched top-level verb's parse(rest), unchanged;
        - Unknown(head) when the first segment names no top-level verb
          (Unknown("") for a blank line).
        """
        head, rest = split(line)
        if (verb := self._verbs.get(head)) is not None:
            return verb.parse(rest)
        return Unknown(head)

    def get(self, path, /):
        """
        Walk a whitespace-separated path of verb names.

        Returns the Verb at the end of the path, or None when any segment is not
        a verb (commands are leaves and carry no manual). An empty path also
        yields None: the root itself is not a Verb.
        """
        if not isinstance(path, str):
            raise TypeError("get() argument must be a string")
        verbs, verb = self._verbs, None
        for segment in path.split():
            if (verb := verbs.get(segment)) is None:
                return None
            verbs = verb.verbs
        return verb


__all__ = (
    "Parser",
)
