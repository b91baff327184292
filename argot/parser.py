"""
Argot parser: turn argv-like tokens into a ParsedResult, driven by OptionSpecs.

Phases (one synchronous pass)
- tokenize: argot.tokens.normalize splits "-abc" and "--name=value".
- dispatch: tokens are visited left to right; each one goes to
  • the overflow bucket, once a `stop` spec matched,
  • the flag consumer, when it starts with "-",
  • the positional consumer, otherwise.
- validate: required positionals that never received a value are reported.

Matching policy
- Flags: first non-positional spec (in list order) whose name or aliases equal
  the token without its leading dash(es) and whose `when` accepts the partial result.
- Positionals: first positional spec (in declaration order) that has no value
  yet, was not skipped, and whose `when` accepts the partial result.
- Skip set: a positional whose `when` rejects the partial result during a
  matching attempt is excluded for the rest of the parse, even if a later
  token would have satisfied it. Skipped positionals are never reported as
  missing either.

Faults are fail-fast (see argot.faults): the first one wins, nothing partial
is returned.

Quick start
    from argot import flag, positional, parse, Boolean, Number

    result = parse(["-v", "--jobs=4", "build", "--", "x"], [
        flag("verbose", "v", type=Boolean),
        flag("jobs", "j", type=Number),
        positional("target", stop=True),
    ])
    # {'verbose': True, 'jobs': 4, 'target': 'build', '_': ['--', 'x']}
"""
import difflib
import logging
import re
import shlex
import sys
from collections.abc import Iterable, Mapping

from .faults import *
from .options import Multiplicity, OptionSpec
from .results import ParsedResult
from .tokens import normalize
from .utils import Unset, mirror, ordinal

logger = logging.getLogger(__name__)


def _spell(text, /):
    return ("-" if len(text) == 1 else "--") + text


class Parser:
    """
    Reusable parser bound to an ordered list of OptionSpecs.

    Runtime options
    - shell: render faults with rich on stderr and exit(1) instead of raising.
    - fancy: render faults inside a rich Panel.
    - colorful: style fault output.
    - prog: program name shown in fault headers (__prog__ in __main__ wins).

    Every call to parse() starts from fresh per-run state; a single instance
    must not be shared by concurrent callers.
    """

    options = mirror("options")
    shell = mirror("shell")
    fancy = mirror("fancy")
    colorful = mirror("colorful")
    prog = mirror("prog")

    def __init__(self, options=(), /, *, shell=False, fancy=False, colorful=True, prog=Unset):
        if isinstance(options, str | Mapping) or not isinstance(options, Iterable):
            raise TypeError("Parser() argument must be an iterable of option specs")

        specs = []
        for spec in options:
            if isinstance(spec, Mapping):
                fields = dict(spec)
                try:
                    name = fields.pop("name")
                except KeyError:
                    raise TypeError("option mapping must provide a 'name'") from None
                spec = OptionSpec(name, **fields)
            elif not isinstance(spec, OptionSpec):
                raise TypeError("Parser() options must be OptionSpec instances or mappings")
            specs.append(spec)

        if prog is not Unset and not isinstance(prog, str):
            raise TypeError("Parser() 'prog' must be a string")

        self._options = tuple(specs)
        self._flags = tuple(spec for spec in specs if not spec.positional)
        self._positionals = tuple(spec for spec in specs if spec.positional)
        self._shell = bool(shell)
        self._fancy = bool(fancy)
        self._colorful = bool(colorful)
        self._prog = prog

    def trigger(self, fault, /, **options):
        """
        surface a fault with this parser's runtime options merged in.
        """
        if self._prog is not Unset:
            options.setdefault("prog", self._prog)
        trigger(fault, **options, shell=self._shell, fancy=self._fancy, colorful=self._colorful)

    def _parse_flag(self, token):
        """
        match a dash token against the flag specs and record its value.

        - presence-only specs record True and consume nothing.
        - other specs consume the next token whatever it looks like; at the end
          of input they record True when optional_value is set, fail otherwise.
        """
        text = re.sub(r"^-{1,2}", "", token)

        for spec in self._flags:
            if spec.matches(text) and spec.eligible(self._namespace.snapshot()):
                break
        else:
            suggestions = difflib.get_close_matches(
                text,
                [name for spec in self._flags for name in (spec.name, *sorted(spec.aliases))],
                5
            )
            try:
                hint = "did you mean %r?" % _spell(suggestions[0])
            except IndexError:
                hint = "check the spelling, or whether this flag is available here"
            return self.trigger(UnknownFlagError(
                "unknown flag: %s at %s position" % (token, ordinal(self._index + 1)),
                title="unknown flag",
                code=FaultCode.UNKNOWN_FLAG,
                token=token,
                index=self._index + 1,
                suggestions=suggestions,
                hint=hint,
                docs=getdoc(FaultCode.UNKNOWN_FLAG),
            ))

        logger.debug("flag %r matched option %r", token, spec.name)

        if spec.presence:
            value = True
        elif self._index + 1 < len(self._tokens):
            self._index += 1
            value = spec.coerce(self._tokens[self._index])
        elif spec.optional_value:
            value = True
        else:
            return self.trigger(MissingValueError(
                "missing value for %s at %s position" % (token, ordinal(self._index + 1)),
                title="missing value",
                code=FaultCode.MISSING_VALUE,
                token=token,
                index=self._index + 1,
                argument=spec,
                hint="pass a value after it (for example: %s <value>)" % token,
                docs=getdoc(FaultCode.MISSING_VALUE),
            ))

        self._namespace.record(spec.name, value, spec.repeatable)
        return spec

    def _parse_positional(self, token):
        """
        assign a non-dash token to the first eligible positional spec.

        repeatable specs keep consuming the following tokens until a dash token
        (unless they include flags) or the end of input.
        """
        for spec in self._positionals:
            if spec.name in self._namespace or spec.name in self._skipped:
                continue
            if spec.eligible(self._namespace.snapshot()):
                break
            # never reconsidered, not even by the final validation
            self._skipped.add(spec.name)
            logger.debug("positional option %r skipped permanently", spec.name)
        else:
            return self.trigger(UnknownPositionalError(
                "unknown positional argument: %s at %s position" % (token, ordinal(self._index + 1)),
                title="unknown positional argument",
                code=FaultCode.UNKNOWN_POSITIONAL,
                token=token,
                index=self._index + 1,
                hint="remove this extra value, or pass it to a flag",
                docs=getdoc(FaultCode.UNKNOWN_POSITIONAL),
            ))

        logger.debug("token %r matched positional option %r", token, spec.name)

        value = spec.coerce(token)
        if spec.repeatable:
            value = [value]
            while self._index + 1 < len(self._tokens):
                following = self._tokens[self._index + 1]
                if following.startswith("-") and spec.multiple is not Multiplicity.INCLUDE_FLAGS:
                    break
                value.append(spec.coerce(following))
                self._index += 1

        self._namespace[spec.name] = value
        return spec

    def _finalize(self):
        """
        report the first required positional that never received a value.

        optional, skipped, and `when`-rejected (against the final result)
        positionals are not required.
        """
        for spec in self._positionals:
            if (
                    spec.name in self._namespace or
                    spec.optional_value or
                    spec.name in self._skipped or
                    not spec.eligible(self._namespace.snapshot())
            ):
                continue
            self.trigger(MissingPositionalError(
                "missing positional argument: %s" % spec.name,
                title="missing positional argument",
                code=FaultCode.MISSING_POSITIONAL,
                name=spec.name,
                argument=spec,
                hint="add a value for %r" % spec.name,
                docs=getdoc(FaultCode.MISSING_POSITIONAL),
            ))

    def _parseargs(self, tokens):
        """
        run the dispatch loop over already-split tokens and validate the result.
        """
        self._namespace = ParsedResult()
        self._skipped = set()
        self._stopped = False
        self._tokens = normalize(tokens)
        self._index = 0

        while self._index < len(self._tokens):
            token = self._tokens[self._index]
            if self._stopped:
                self._namespace.overflow.append(token)
            else:
                if token.startswith("-"):
                    spec = self._parse_flag(token)
                else:
                    spec = self._parse_positional(token)
                if spec.stop:
                    self._stopped = True
                    logger.debug("option %r stops parsing after %s position", spec.name, ordinal(self._index + 1))
            self._index += 1

        self._finalize()
        return self._namespace

    def parse(self, tokens=Unset, /):
        """
        Parse a token stream into a ParsedResult.

        Parameters
        - tokens:
          • Unset: read tokens from sys.argv[1:].
          • str: shell-like string; will be split via shlex.split.
          • Iterable[str]: pre-tokenized sequence, used verbatim (program
            name excluded by the caller).

        Raises
        - TypeError: when tokens is not Unset/str/Iterable[str].
        - ParseError subclasses (non-shell mode) on the first fault.
        """
        if tokens is Unset:
            tokens = sys.argv[1:]
        elif isinstance(tokens, str):
            tokens = shlex.split(tokens)
        elif isinstance(tokens, Iterable):
            tokens = list(tokens)
            if not all(isinstance(token, str) for token in tokens):
                raise TypeError("parse() tokens must be strings")
        else:
            raise TypeError("parse() argument must be a string or an iterable of strings")

        return self._parseargs(tokens)


def parse(tokens, options, /, **config):
    """
    Parse tokens with a one-shot Parser built from options and config.

        parse(["--foo=bar"], [flag("foo")])  # {'foo': 'bar', '_': []}

    Pass Unset as tokens to read sys.argv[1:]. Keyword arguments are the
    Parser runtime options (shell, fancy, colorful, prog).
    """
    return Parser(options, **config).parse(tokens)


__all__ = (
    "Parser",
    "parse",
)
