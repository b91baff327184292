from rich.pretty import pprint

from argot import *

options = [
    flag("verbose", "v", type=Boolean, multiple=True),
    flag("jobs", "j", type=Number),
    flag("config", optional_value=True),
    positional("command"),
    positional("script", when=lambda parsed: parsed.get("command") == "run", stop=True),
    positional("targets", multiple=True, optional_value=True),
]


if __name__ == '__main__':
    pprint(parse(Unset, options, shell=True, fancy=True))
