"""
Argot tokenizer: normalize raw argv-like tokens before dispatch.

Rules
- "-abc" (a dash, an ASCII letter, then more characters) expands to one token per
  character after the dash: "-a", "-b", "-c"; "-n5" gives "-n", "-5".
- "--name=value" / "-n=value" split at the first "=" into the flag part and the
  value part; short-flag expansion applies to the flag part only, and the value
  part (possibly empty) follows as its own token.
- "--long", "-x", "-1" and non-dash tokens pass through unchanged.

    >>> normalize(["-abC=1", "--out=a=b", "file"])
    ['-a', '-b', '-C', '1', '--out', 'a=b', 'file']
"""
import re


def split_short_flags(token, /):
    """
    Expand a combined short-flag token, or return it alone in a list.
    """
    if len(token) > 2 and re.match(r"-[A-Za-z]", token):
        return ["-" + character for character in token[1:]]
    return [token]


def normalize(tokens, /):
    """
    Return a new list of normalized tokens; the input is left untouched.
    """
    normalized = []
    for token in tokens:
        if not token.startswith("-"):
            normalized.append(token)
            continue
        flag, separator, value = token.partition("=")
        normalized.extend(split_short_flags(flag))
        if separator:
            normalized.append(value)
    return normalized


__all__ = (
    "split_short_flags",
    "normalize",
)
