"""
Verbs module behavioral tests (recursive dispatch and registration).

Scope
- Validate segment-by-segment resolution into child verbs and commands.
- Validate Incorrect results carry the verb where resolution stalled.
- Validate name collisions are rejected at construction.
- Validate the Informational capability (get_help()).

Conventions
- Test method names follow CamelCase per project convention.
- Tests use the public API (Verb, Command, Parameter, Manual, Incorrect, Informational).
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from arbor import Verb, Command, Parameter, Manual, Incorrect, Informational, Run


class TestVerbParsing(TestCase):
    """Behavioral tests for Verb.parse()."""

    def setUp(self):
        self.list = Command("list", [Parameter("i", "name"), Parameter("n", "count")])
        self.drop = Command("drop", [Parameter("i", "name")])
        self.add = Command("add", [Parameter("n", "name"), Parameter("t", "type")])
        self.column = Verb("column", commands=[self.add], manual=Manual("manage columns"))
        self.table = Verb(
            "table",
            verbs=[self.column],
            commands=[self.list, self.drop],
            manual=Manual("manage tables", ["create, list and drop tables"]),
        )

    def testDelegatesToCommand(self):
        self.assertEqual(self.table.parse("list -i users"), self.list.parse("-i users"))

    def testRecursesIntoChildVerb(self):
        self.assertEqual(
            self.table.parse("column add --name id --type int"),
            self.add.parse("--name id --type int"),
        )

    def testCommandWithoutArguments(self):
        self.assertEqual(self.table.parse("drop"), Run((), self.drop))

    def testUnmatchedSegmentIsIncorrect(self):
        result = self.table.parse("lst -i users")
        self.assertEqual(result, Incorrect("lst", self.table))
        self.assertIs(result.verb, self.table)

    def testEmptyRemainderIsIncorrect(self):
        self.assertEqual(self.table.parse(""), Incorrect("", self.table))

    def testIncorrectCarriesNestedVerb(self):
        result = self.table.parse("column rename x")
        self.assertEqual(result, Incorrect("rename", self.column))
        self.assertIs(result.verb, self.column)

    def testNestedVerbWithoutRemainder(self):
        self.assertEqual(self.table.parse("column"), Incorrect("", self.column))

    def testParameterTextIsNotAVerb(self):
        # flags before a command are just an unmatched segment
        self.assertEqual(self.table.parse("-i list"), Incorrect("-i", self.table))


class TestVerbConstruction(TestCase):
    """Behavioral tests for Verb registration."""

    def testChildrenMappings(self):
        add = Command("add")
        column = Verb("column", commands=[add])
        table = Verb("table", verbs=[column])
        self.assertIs(table.verbs["column"], column)
        self.assertIs(column.commands["add"], add)

    def testChildrenAreReadOnly(self):
        table = Verb("table")
        with self.assertRaises(TypeError):
            table.verbs["column"] = Verb("column")

    def testDuplicateVerbRejected(self):
        with self.assertRaises(ValueError):
            Verb("table", verbs=[Verb("column"), Verb("column")])

    def testDuplicateCommandRejected(self):
        with self.assertRaises(ValueError):
            Verb("table", commands=[Command("list"), Command("list")])

    def testVerbCommandCollisionRejected(self):
        with self.assertRaises(ValueError):
            Verb("table", verbs=[Verb("list")], commands=[Command("list")])

    def testSameNameAtDifferentLevelsAllowed(self):
        table = Verb("table", verbs=[Verb("list", commands=[Command("list")])])
        self.assertIn("list", table.verbs)

    def testChildTypesChecked(self):
        with self.assertRaises(TypeError):
            Verb("table", verbs=[Command("list")])
        with self.assertRaises(TypeError):
            Verb("table", commands=[Verb("list")])

    def testNameValidation(self):
        with self.assertRaises(ValueError):
            Verb("two words")
        with self.assertRaises(TypeError):
            Verb(None)

    def testManualMustBeManual(self):
        with self.assertRaises(TypeError):
            Verb("table", manual="manage tables")


class TestVerbHelp(TestCase):
    """Behavioral tests for the Informational capability."""

    def testGetHelpReturnsManual(self):
        manual = Manual("manage tables", ["first line", "second line"])
        self.assertIs(Verb("table", manual=manual).get_help(), manual)

    def testDefaultManualIsEmpty(self):
        self.assertEqual(Verb("table").get_help(), Manual())

    def testVerbIsInformational(self):
        self.assertIsInstance(Verb("table"), Informational)
        self.assertNotIsInstance(Command("list"), Informational)

    def testManualFields(self):
        manual = Manual("  manage tables  ", ["a", "b"])
        self.assertEqual(manual.short_description, "manage tables")
        self.assertEqual(manual.detailed_help, ("a", "b"))

    def testManualRejectsStringHelp(self):
        with self.assertRaises(TypeError):
            Manual("manage tables", "one line")


if __name__ == "__main__":
    unittest.main()
