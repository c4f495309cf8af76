"""
Interactive shell over a tree file: python -m arbor TREE.toml [NAME]
"""
import argparse
import sys

from rich.text import Text

from .faults import console
from .loader import load
from .runtime import Runtime


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        console.print(Text(self.format_usage().rstrip()))
        console.print(Text(f"{self.prog}: error: {message}", style="bold red"))
        raise SystemExit(2)


def _arguments():
    parser = _ArgumentParser(
        prog="python -m arbor",
        description="Run an interactive shell over a verb tree document.",
    )
    parser.add_argument("tree", help="path to a .toml or .json tree document")
    parser.add_argument("name", nargs="?", default="arbor", help="program name shown in faults and help")
    return parser


def main(argv=None):
    try:
        arguments = _arguments().parse_args(argv)
    except SystemExit as exit:
        return exit.code
    Runtime(load(arguments.tree), name=arguments.name, fancy=True).run()
    return 0


if __name__ == '__main__':
    sys.exit(main())
