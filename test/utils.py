"""
Utils module behavioral tests (sentinel, split and read-only mirrors).

Scope
- Validate the Unset singleton and coalesce() semantics.
- Validate split() on the first whitespace run, including blank input.
- Validate mirror() immutable views and rename().

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from types import MappingProxyType
from unittest import TestCase

from arbor.utils import IntrospectableType, Unset, UnsetType, coalesce, mirror, rename, split


class TestUnset(TestCase):
    """Behavioral tests for the Unset sentinel."""

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalsy(self):
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testFinal(self):
        with self.assertRaises(TypeError):
            class Other(UnsetType):
                pass

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce("", "fallback"), "")


class TestSplit(TestCase):
    """Behavioral tests for split()."""

    def testHeadAndRest(self):
        self.assertEqual(split("table list -i a"), ("table", "list -i a"))

    def testNoWhitespace(self):
        self.assertEqual(split("table"), ("table", ""))

    def testWhitespaceRun(self):
        self.assertEqual(split("table \t  list"), ("table", "list"))

    def testLeadingWhitespace(self):
        self.assertEqual(split("   table list"), ("table", "list"))

    def testBlank(self):
        self.assertEqual(split(""), ("", ""))
        self.assertEqual(split("   "), ("", ""))

    def testRejectsNonString(self):
        with self.assertRaises(TypeError):
            split(None)


class TestMirror(TestCase):
    """Behavioral tests for mirror() and rename()."""

    def testImmutableViews(self):
        class Holder:
            items = mirror("items")
            table = mirror("table")
            tags = mirror("tags")
            label = mirror("label")

            def __init__(self):
                self._items = [1, 2]
                self._table = {"a": 1}
                self._tags = {"x"}
                self._label = "text"

        holder = Holder()
        self.assertEqual(holder.items, (1, 2))
        self.assertIsInstance(holder.table, MappingProxyType)
        self.assertEqual(holder.tags, frozenset({"x"}))
        self.assertEqual(holder.label, "text")

    def testRename(self):
        @rename("do_work")
        def work():
            pass

        self.assertEqual(work.__name__, "do_work")
        self.assertEqual(work.__qualname__, "do_work")


class TestIntrospectableType(TestCase):
    """Behavioral tests for the IntrospectableType metaclass."""

    def testDisplaysIntrospectableByDefault(self):
        class TableEntry(metaclass=IntrospectableType):
            __introspectable__ = ("name", "rows")

            def __init__(self, name, rows):
                self._name = name
                self._rows = rows

        self.assertIs(IntrospectableType.__displayable__, Unset)
        entry = TableEntry("users", [1, 2])
        self.assertEqual(TableEntry.__typename__, "table-entry")
        self.assertEqual(repr(entry), "table-entry(name='users', rows=(1, 2))")
        self.assertEqual(list(entry.__rich_repr__()), [("name", "users"), ("rows", (1, 2))])


if __name__ == "__main__":
    unittest.main()
