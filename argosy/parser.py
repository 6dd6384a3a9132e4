"""
Argosy parser (entry point).

Scope
- parse(options, args): resolve a flat sequence of raw tokens against a schema of
  options into a ParseOutcome (typed results, leftover tokens, collected faults).
- Parser(converter): the same operation bound to a reusable ValueConverter.

Guarantees
- parse() never raises for bad user input: every fault is collected in discovery
  order and parsing continues to the end of the stream.
- Programmer errors (malformed options, conflicting schema, non-string tokens, a
  converter that does not implement ValueConverter) raise TypeError/ValueError
  immediately.
- No state is shared between calls: each call builds its own Schema and Collector.

Quick example
    >>> verbose = Option("--verbose", "-v", type=bool)
    >>> count = Option("--count", "-n", type=int, default="1")
    >>> outcome = parse([verbose, count], ["-v", "--count", "3", "file.txt"])
    >>> outcome.get("verbose"), outcome.get("count"), outcome.positional
    (True, 3, ('file.txt',))
"""
import logging

from .arity import convert, resolve_group
from .converters import DefaultConverter, ValueConverter
from .descriptors import is_collection
from .options import Schema
from .outcome import Collector
from .positional import bind
from .tokens import TokenKind, classify, literals
from .utils import Unset, mirror

logger = logging.getLogger(__name__)


class Parser:
    """
    Reusable parse entry point bound to one ValueConverter.

    A Parser holds no per-call state, so one instance may serve any number of
    (possibly concurrent) parse calls.
    """

    __slots__ = ("_converter",)

    converter = mirror("converter")

    def __init__(self, converter=Unset, /):
        if converter is Unset:
            converter = DefaultConverter()
        elif not isinstance(converter, ValueConverter):
            raise TypeError("Parser() argument must implement convert(tokens, target)")
        self._converter = converter

    def parse(self, options, args, /):
        """
        resolve args against options and return a ParseOutcome.

        phases
        - setup
          • build a Schema (validates the options) and a fresh Collector.
        - loop (flag matching)
          • classify each token as long flag, short group, unrecognised flag or literal.
          • literals not claimed by a flag become leftovers.
          • unrecognised flags record a fault; the tokens after them stay unclaimed.
          • matched flags drop repeated options, then resolve against the run of
            literals that follows (short groups may broadcast a boolean literal).
          • overflowing options keep their TooManyArgumentsError pending.
        - post-loop
          • bind positional options against the leftovers.
          • withdraw pending overflows whose surplus was bound positionally; otherwise
            the option resolves to None.
          • apply defaults (schema order), then sweep required options never matched.
        - freeze the collector into a ParseOutcome.
        """
        schema = options if isinstance(options, Schema) else Schema(options)
        tokens = tuple(args)
        for token in tokens:
            if not isinstance(token, str):
                raise TypeError("parse() tokens must be strings, not %r" % type(token).__name__)

        converter = self._converter
        collector = Collector(schema)
        pending = []

        index = 0
        while index < len(tokens):
            token = classify(schema, tokens, index)
            index += 1

            match token.kind:
                case TokenKind.LITERAL:
                    collector.leftover(token)
                    continue
                case TokenKind.UNRECOGNISED:
                    collector.unrecognised(token)
                    continue

            fresh = []
            for option in token.options:
                if collector.matched(option) or option in fresh:
                    logger.debug("ignoring repeated %s at %s", option.label, token.text)
                    continue
                fresh.append(option)
            if not fresh:
                continue

            run = literals(schema, tokens, index)
            resolutions = resolve_group(fresh, token, run, converter, collector)
            for resolution in resolutions:
                collector.match(resolution.option, resolution.value)
                if resolution.pending is not None:
                    pending.append(resolution)
            # every member's taken tokens are a prefix of the same run
            index += max(len(resolution.taken) for resolution in resolutions)

        claimed = {
            leftover.token.index
            for leftover in bind(schema, collector, converter)
            if leftover.option is not None
        }
        for resolution in pending:
            if all(token.index in claimed for token in resolution.surplus):
                collector.withdraw(resolution.pending)
            else:
                collector.nullify(resolution.option)

        for option in schema:
            if collector.matched(option) or option.default is Unset:
                continue
            raw = option.default.split(",") if is_collection(option.type) else [option.default]
            logger.debug("applying default %r to %s", option.default, option.label)
            collector.match(option, convert(option, raw, converter, collector, Unset))

        for option in schema:
            if option.required and not collector.matched(option):
                collector.missing(option)

        return collector.freeze()


def parse(options, args, /, converter=Unset):
    """
    Resolve raw tokens against a sequence of options.

    parameters
    - options: Iterable[Option] | Schema
    - args: Iterable[str]
    - converter: ValueConverter (defaults to DefaultConverter)

    returns
    - ParseOutcome
    """
    return Parser(converter).parse(options, args)


__all__ = (
    "Parser",
    "parse",
)
