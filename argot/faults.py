"""
Argot faults (parse errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing parse
  error. Hosts can remap them to friendlier labels through __codes__ in __main__.
- ParseError: base type that carries message + options and knows how to render
  itself in a friendly, lowercased, and actionable way.
- UnknownFlagError / UnknownPositionalError / MissingValueError /
  MissingPositionalError: the four terminal error kinds of a parse.
- trigger(): central entry point to surface a fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

Propagation
- Parsing is fail-fast: the first fault wins and no partial result is returned.
- In non-shell mode faults are raised; in shell mode they are rendered via rich
  on stderr and the process exits with status 1.

Host configuration (read from __main__, all optional)
- __prog__: program name shown in the header (defaults to the "prog" option).
- __styles__: mapping of style names to rich styles, merged over the defaults.
- __codes__: mapping of FaultCode to display labels.
- __docs__: mapping of FaultCode to short documentation strings.
"""
import copy
import os.path
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used by the parser (stable identifiers).

    grouping
    - flags (1120x)
      • UNKNOWN_FLAG, MISSING_VALUE
    - positionals (1120x)
      • UNKNOWN_POSITIONAL, MISSING_POSITIONAL
    """
    UNKNOWN_FLAG                = 11201
    UNKNOWN_POSITIONAL          = 11202
    MISSING_VALUE               = 11203
    MISSING_POSITIONAL          = 11204

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ParseError(Exception):
    """
    base class of every parse failure.

    attributes
    - message: one-sentence description (e.g. "unknown flag: --foo").
    - options: read-only mapping with rendering and context data
      (title, code, hint, docs, token/name, index, prog, shell, fancy, colorful).
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",

            # body
            "error-message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
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

        prog = getattr(main, "__prog__", Unset)
        if prog is Unset:
            prog = self.options.get("prog") or os.path.basename(sys.argv[0]) or "argot"

        code = self.options.get("code")
        header = Text.assemble(
            "[ ",
            text(prog, styler("prog-name")),
            " — ",
            text(code.normalize() if code else "", styler("code")),
            " | ",
            text(self.options.get("title", "parse error").title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))
        renders = [message]
        if hint := self.options.get("hint"):
            renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))
        if docs := self.options.get("docs"):
            renders.append(text(docs, styler("hint")))

        if fancy:
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownFlagError(ParseError): ...
class UnknownPositionalError(ParseError): ...
class MissingValueError(ParseError): ...
class MissingPositionalError(ParseError): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ParseError).
    - options are merged into the fault via copy.replace(fault, **options).
    - in shell mode, rendering happens via the rich console; otherwise the fault is raised.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    when not found, returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "ParseError",
    "UnknownFlagError",
    "UnknownPositionalError",
    "MissingValueError",
    "MissingPositionalError",
    "FaultCode",
    "trigger",
    "getdoc",
)
