r"""
Argot option specifications.

Overview
- OptionSpec: one declarative descriptor per recognized flag or positional argument.
- Multiplicity: how often a spec may capture values.
  • NONE: a single value (the last occurrence of a flag overwrites earlier ones).
  • REPEATABLE: flags append each occurrence to a list; positionals greedily
    capture following non-dash tokens.
  • INCLUDE_FLAGS: positionals only, like REPEATABLE but dash tokens are
    captured too.
- Factories
  • flag(name, *aliases, **fields): non-positional spec.
  • positional(name, **fields): positional spec.

Introspection & representation
- SpecType metaclass exposes the fields listed in __introspectable__ as
  read-only properties and provides stable __repr__/__rich_repr__.

Metadata (sanitized on construction)
- name: non-empty string, used as the result key and the default flag text.
- aliases: iterable of non-empty strings (flag texts without leading dashes).
- type: Coercion or callable (see argot.coercions.coercion).
- multiple: False | True | "include-flags" | Multiplicity.
- positional / stop / optional_value: booleans.
- when: callable receiving a read-only snapshot of the partial result.
- meta: arbitrary caller data, carried untouched.

Only type-level checks are performed; a spec list is never cross-validated
(duplicate names, conflicting aliases, etc. are the caller's business).
"""
import builtins
import enum
import functools
import operator
import re
from collections.abc import Iterable

from .coercions import String, coercion
from .utils import Unset, coalesce, mirror, rename


class Multiplicity(enum.Enum):
    NONE = "none"
    REPEATABLE = "repeatable"
    INCLUDE_FLAGS = "include-flags"

    @classmethod
    def resolve(cls, object, /):
        """
        Normalize the user-facing `multiple` forms into a member.

        - False -> NONE, True -> REPEATABLE, "include-flags" -> INCLUDE_FLAGS
        - members (and their string values) are accepted as-is
        """
        if isinstance(object, cls):
            return object
        if object is False:
            return cls.NONE
        if object is True:
            return cls.REPEATABLE
        if isinstance(object, str):
            try:
                return cls(object)
            except ValueError:
                raise ValueError("'multiple' must be one of 'none', 'repeatable' or 'include-flags'") from None
        raise TypeError("'multiple' must be a boolean, a string, or a Multiplicity")


class SpecType(type):
    """
    Metaclass that turns spec classes into introspectable, sealed descriptors.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in messages and reprs.
    - every name in __introspectable__ becomes a read-only property mirroring
      the private "_{name}" field.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        @rename("__init_subclass__")
        def __init_subclass__(cls, **options):  # NOQA: F-841
            raise TypeError(f"type {self.__name__!r} is not an acceptable base type")
        self.__init_subclass__ = classmethod(__init_subclass__)

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: validate and normalize spec metadata in place.

    Raises
    - TypeError: wrong field types (non-string name/aliases, non-callable type/when).
    - ValueError: empty name or alias, unknown multiplicity label.
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not name:
        raise ValueError(f"{cls.__typename__} 'name' cannot be empty")

    if isinstance(aliases := metadata["aliases"], str) or not isinstance(aliases, Iterable):
        raise TypeError(f"{cls.__typename__} 'aliases' must be an iterable of strings")
    for alias in (aliases := tuple(aliases)):
        if not isinstance(alias, str):
            raise TypeError(f"{cls.__typename__} 'aliases' must be an iterable of strings")
        elif not alias:
            raise ValueError(f"{cls.__typename__} 'aliases' cannot contain empty strings")
    metadata["aliases"] = frozenset(aliases)

    try:
        metadata["type"] = coercion(metadata["type"])
    except TypeError:
        raise TypeError(f"{cls.__typename__} 'type' must be callable") from None

    metadata["multiple"] = Multiplicity.resolve(metadata["multiple"])

    if (when := metadata["when"]) is not Unset and not builtins.callable(when):
        raise TypeError(f"{cls.__typename__} 'when' must be callable")
    metadata["when"] = coalesce(when)


class OptionSpec(metaclass=SpecType):
    """
    Declarative descriptor for one flag or positional argument.

    Properties
    - The names listed in __introspectable__ are exposed as read-only attributes
      mirroring the sanitized metadata values.

    Matching helpers
    - matches(text): flag text comparison against name and aliases.
    - eligible(parsed): evaluates `when` (True when absent).
    """

    __introspectable__ = (
        "name",
        "aliases",
        "type",
        "multiple",
        "positional",
        "stop",
        "optional_value",
        "when",
        "meta",
    )

    def __new__(
            cls,
            name,
            /,
            aliases=(),
            type=String,
            multiple=False,
            *,
            positional=False,
            stop=False,
            optional_value=False,
            when=Unset,
            meta=None,
    ):
        """
        Construct a spec with the provided metadata.

        Parameters
        - name: str
          Result key; for flags also the default matching text ("--name" / "-n").
        - aliases: Iterable[str]
          Additional flag texts without leading dashes. Ignored for positionals.
        - type: Coercion | Callable[[str], Any]
          Transform applied to raw tokens; Boolean (or bool) means presence-only.
        - multiple: bool | "include-flags" | Multiplicity
        - positional: bool
          Match by position instead of by flag text.
        - stop: bool
          After this spec matches, every remaining token goes to the overflow bucket.
        - optional_value: bool
          Flags may appear without a value (recorded as True); positionals may be absent.
        - when: Callable[[Mapping], bool]
          Eligibility predicate over the partial result.
        - meta: Any
          Caller data, never inspected.
        """
        metadata = {
            "name": name,
            "aliases": aliases,
            "type": type,
            "multiple": multiple,
            "positional": bool(positional),
            "stop": bool(stop),
            "optional_value": bool(optional_value),
            "when": when,
            "meta": meta,
        }
        _sanitize_metadata(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    @property
    def repeatable(self):
        return self._multiple is not Multiplicity.NONE

    @property
    def presence(self):
        return self._type.presence

    def matches(self, text, /):
        return text == self._name or text in self._aliases

    def eligible(self, parsed, /):
        return self._when is None or bool(self._when(parsed))

    def coerce(self, value, /):
        return self._type(value)


def flag(name, /, *aliases, **fields):
    """
    Build a non-positional OptionSpec.

        flag("verbose", "v", type=bool)
    """
    if fields.get("positional"):
        raise TypeError("flag() cannot build a positional spec")
    return OptionSpec(name, aliases, **fields)


def positional(name, /, **fields):
    """
    Build a positional OptionSpec.

        positional("files", multiple=True)
    """
    if "aliases" in fields:
        raise TypeError("positional() does not accept aliases")
    return OptionSpec(name, **(fields | {"positional": True}))


__all__ = (
    "Multiplicity",
    "OptionSpec",
    "flag",
    "positional",
)
