"""
Argot coercions: turning raw token strings into typed values.

Overview
- Coercion: a named, single-argument transform (str -> value).
- Built-ins
  • String: identity, the raw token is kept as-is.
  • Number: numeric parse (int when the token is integral, float otherwise, NaN when unparsable).
  • Boolean: presence-only; a spec using it never consumes a value token.
- coercion(object): resolve a user-supplied `type` into a Coercion.
  • Coercion instances are returned unchanged.
  • builtins.str / builtins.bool resolve to String / Boolean.
  • any other callable becomes a custom coercion.

Custom coercions are called synchronously with the raw token; their exceptions
propagate to the caller of parse() untouched.
"""
import builtins
import math
import re
from typing import final

from rich.text import Text


@final
class Coercion:
    """
    Single-argument transform applied to raw tokens.

    Attributes
    - function: the underlying callable (str -> value).
    - name: label used in reprs.
    - presence: when True, the owning spec is satisfied by its mere presence
      and the transform is never fed a following token.
    """
    __slots__ = ("_function", "_name", "_presence")

    def __init__(self, function, /, name=None, *, presence=False):
        if not builtins.callable(function):
            raise TypeError("coercion function must be callable")
        if name is None:
            name = getattr(function, "__name__", type(function).__name__)
        if not isinstance(name, str):
            raise TypeError("coercion name must be a string")
        self._function = function
        self._name = name
        self._presence = bool(presence)

    @property
    def function(self):
        return self._function

    @property
    def name(self):
        return self._name

    @property
    def presence(self):
        return self._presence

    def __call__(self, value, /):
        return self._function(value)

    def __repr__(self):
        return "coercion(%s)" % self._name

    def __rich__(self):
        return Text.assemble(("coercion", "dim"), "(", (self._name, "cyan"), ")")


def _number(value, /):
    text = value.strip()
    if not text:
        return 0
    # plain ASCII forms only
    if re.fullmatch(r"[+-]?[0-9]+", text):
        return int(text, 10)
    if re.fullmatch(r"0([xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)", text):
        return int(text, 0)
    if re.fullmatch(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?", text):
        return float(text)
    return math.nan


String = Coercion(lambda value: value, "string")
Number = Coercion(_number, "number")
Boolean = Coercion(lambda value: True, "boolean", presence=True)


def coercion(object, /):
    """
    Resolve a spec's `type` into a Coercion.

    Raises
    - TypeError: when the object is neither a Coercion nor a callable.
    """
    if isinstance(object, Coercion):
        return object
    if object is builtins.str:
        return String
    if object is builtins.bool:
        return Boolean
    if builtins.callable(object):
        return Coercion(object)
    raise TypeError("coercion() argument must be callable")


__all__ = (
    "Coercion",
    "String",
    "Number",
    "Boolean",
    "coercion",
)
