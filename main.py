from rich.pretty import pprint

from arbor import *
from arbor.runtime import Runtime


def create(values):
    pprint(values)


parser = Parser([
    Verb(
        "table",
        verbs=[
            Verb("column", commands=[
                Command("add", [Parameter("n", "name"), Parameter("t", "type")], callback=create),
            ], manual=Manual("manage table columns")),
        ],
        commands=[
            Command("list", [Parameter("i", "name"), Parameter("n", "count")], description="list tables", callback=create),
        ],
        manual=Manual("manage tables", ["create, list and drop tables"]),
    ),
])


if __name__ == '__main__':
    pprint(parser)
    Runtime(parser, name="demo", fancy=True).run()
