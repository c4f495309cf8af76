"""
Loader module behavioral tests (tree building from static data).

Scope
- Validate build() from nested mappings, including nested verbs and callbacks.
- Validate load() from TOML and JSON files and suffix checks.
- Validate resolve() for "module:attribute" references.
- Validate located errors for malformed documents.

Conventions
- Test method names follow CamelCase per project convention.
- Files are written into a TemporaryDirectory per test.
"""

from __future__ import annotations

import contextlib
import io
import json
import os.path
import tempfile
import textwrap
import unittest
import unittest.mock
from unittest import TestCase

from arbor import Parser, Parameter, ParameterValue, Run, Manual
from arbor.__main__ import main
from arbor.loader import build, load, resolve


DOCUMENT = {
    "verbs": {
        "table": {
            "description": "manage tables",
            "help": ["create, list and drop tables"],
            "commands": {
                "list": {
                    "description": "list tables",
                    "callback": "os.path:join",
                    "parameters": [
                        {"short": "i", "long": "name"},
                        {"short": "n", "long": "count"},
                    ],
                },
            },
            "verbs": {
                "column": {
                    "commands": {"add": {"parameters": [{"short": "n", "long": "name"}]}},
                },
            },
        },
        "exit": {"description": "exits the tool", "help": ["exits the tool"]},
    },
}


class TestBuild(TestCase):
    """Behavioral tests for build()."""

    def testBuildsTree(self):
        parser = build(DOCUMENT)
        self.assertIsInstance(parser, Parser)
        self.assertEqual(set(parser.verbs), {"table", "exit"})
        table = parser.verbs["table"]
        self.assertEqual(table.get_help(), Manual("manage tables", ["create, list and drop tables"]))
        self.assertIn("column", table.verbs)
        self.assertIn("add", table.verbs["column"].commands)

    def testParametersAndCallback(self):
        command = build(DOCUMENT).verbs["table"].commands["list"]
        self.assertEqual(command.parameters, (Parameter("i", "name"), Parameter("n", "count")))
        self.assertIs(command.callback, os.path.join)
        self.assertEqual(command.description, "list tables")

    def testBuiltTreeParses(self):
        parser = build(DOCUMENT)
        command = parser.verbs["table"].commands["list"]
        self.assertEqual(
            parser.parse("table list -i users"),
            Run([ParameterValue(Parameter("i", "name"), ["users"])], command),
        )

    def testEmptyDocument(self):
        self.assertEqual(dict(build({}).verbs), {})

    def testUnknownKeyRejected(self):
        with self.assertRaises(ValueError) as context:
            build({"verbs": {"table": {"descripton": "typo"}}})
        self.assertIn("verbs.table", str(context.exception))

    def testMissingParameterKeyLocated(self):
        with self.assertRaises(ValueError) as context:
            build({"verbs": {"table": {"commands": {"list": {"parameters": [{"short": "i"}]}}}}})
        self.assertIn("verbs.table.commands.list.parameters[0]", str(context.exception))

    def testInvalidParameterLocated(self):
        with self.assertRaises(ValueError) as context:
            build({"verbs": {"table": {"commands": {"list": {"parameters": [{"short": "ix", "long": "x"}]}}}}})
        self.assertIn("parameters[0]", str(context.exception))

    def testWrongTypesRejected(self):
        with self.assertRaises(TypeError):
            build([])
        with self.assertRaises(TypeError):
            build({"verbs": {"table": {"help": "one line"}}})
        with self.assertRaises(TypeError):
            build({"verbs": {"table": {"commands": {"list": {"parameters": "i"}}}}})

    def testNameCollisionRejected(self):
        with self.assertRaises(ValueError):
            build({"verbs": {"table": {"verbs": {"list": {}}, "commands": {"list": {}}}}})

    def testUnresolvableCallback(self):
        with self.assertRaises(ValueError):
            build({"verbs": {"table": {"commands": {"list": {"callback": "os.path:nope"}}}}})


class TestLoad(TestCase):
    """Behavioral tests for load() from files."""

    def setUp(self):
        self.directory = tempfile.TemporaryDirectory()
        self.addCleanup(self.directory.cleanup)

    def _write(self, name, content):
        path = os.path.join(self.directory.name, name)
        with open(path, "w", encoding="utf-8") as file:
            file.write(content)
        return path

    def testLoadMapping(self):
        self.assertEqual(set(load(DOCUMENT).verbs), {"table", "exit"})

    def testLoadJson(self):
        parser = load(self._write("tree.json", json.dumps(DOCUMENT)))
        self.assertIn("column", parser.verbs["table"].verbs)

    def testLoadToml(self):
        parser = load(self._write("tree.toml", textwrap.dedent("""
            [verbs.table]
            description = "manage tables"
            help = ["create, list and drop tables"]

            [verbs.table.commands.list]
            parameters = [
                { short = "i", long = "name" },
                { short = "n", long = "count" },
            ]
        """)))
        command = parser.verbs["table"].commands["list"]
        self.assertEqual(dict(command.parameters_by_long_name), {"name": 0, "count": 1})
        self.assertEqual(parser.verbs["table"].get_help().short_description, "manage tables")

    def testUnsupportedSuffix(self):
        with self.assertRaises(ValueError):
            load(self._write("tree.yaml", "verbs: {}"))

    def testRejectsOtherSources(self):
        with self.assertRaises(TypeError):
            load(42)

    def testMainRunsTreeFile(self):
        path = self._write("tree.json", json.dumps(DOCUMENT))
        stream = io.StringIO()
        with unittest.mock.patch("arbor.runtime.Console.input", side_effect=EOFError):
            with contextlib.redirect_stdout(stream):
                self.assertEqual(main([path]), 0)

    def testMainUsage(self):
        stream = io.StringIO()
        with contextlib.redirect_stderr(stream):
            self.assertEqual(main([]), 2)
        self.assertIn("usage", stream.getvalue())
        self.assertIn("error", stream.getvalue())

    def testMainRejectsExtraArguments(self):
        stream = io.StringIO()
        with contextlib.redirect_stderr(stream):
            self.assertEqual(main(["tree.toml", "demo", "extra"]), 2)
        self.assertIn("unrecognized arguments", stream.getvalue())


class TestResolve(TestCase):
    """Behavioral tests for resolve()."""

    def testResolvesDottedAttribute(self):
        self.assertIs(resolve("os:path.join"), os.path.join)
        self.assertIs(resolve("os.path:join"), os.path.join)

    def testMalformedReference(self):
        with self.assertRaises(ValueError):
            resolve("os.path.join")
        with self.assertRaises(ValueError):
            resolve(":join")

    def testMissingAttribute(self):
        with self.assertRaises(AttributeError):
            resolve("os.path:nope")

    def testNotCallable(self):
        with self.assertRaises(TypeError):
            resolve("os:sep")


if __name__ == "__main__":
    unittest.main()
