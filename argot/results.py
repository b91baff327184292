"""
Argot parse results.

ParsedResult is a plain dict keyed by spec name. Values are scalars (bool,
str, number, or whatever a custom coercion returns) or lists of those for
repeatable specs. The reserved "_" key (OVERFLOW) always exists and collects
every token met after a `stop` match.

Because it is a dict, results compare equal to literal mappings:

    >>> ParsedResult() == {"_": []}
    True
"""
from types import MappingProxyType

from .utils import immortalize

OVERFLOW = "_"


class ParsedResult(dict):
    """
    Mutable accumulator during a parse, returned to the caller afterwards.

    - overflow: the list stored under OVERFLOW.
    - record(name, value, repeatable): set a value, or append it to the list
      kept for a repeatable spec.
    - snapshot(): read-only, copy-on-read view used for `when` predicates.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.setdefault(OVERFLOW, [])

    @property
    def overflow(self):
        return self[OVERFLOW]

    def record(self, name, value, /, repeatable=False):
        if not repeatable:
            self[name] = value
            return
        if not isinstance(self.get(name), list):
            self[name] = []
        self[name].append(value)

    def snapshot(self):
        return MappingProxyType(immortalize(self))

    def __repr__(self):
        return "%s(%s)" % (type(self).__name__, super().__repr__())


__all__ = (
    "OVERFLOW",
    "ParsedResult",
)
