"""
Argosy error collection and result assembly.

What this module provides
- OptionResult: (option, value) pair; value is None when the option was matched but
  could not be resolved.
- ParseOutcome: the frozen result of one parse call
  • results:    OptionResult tuple (flag matches, then positional, then defaults)
  • positional: raw leftover tokens in original order
  • errors:     faults in discovery order
- Collector: the working state owned by a single parse call. It records matches,
  leftovers and faults, builds every fault with position-first copy, and is frozen
  into a ParseOutcome at the end. Nothing in a Collector outlives its call.
"""
import difflib
import logging
from dataclasses import dataclass
from typing import NamedTuple

from .faults import *
from .utils import Unset, ordinal

logger = logging.getLogger(__name__)


class OptionResult(NamedTuple):
    option: object
    value: object


@dataclass(frozen=True)
class ParseOutcome:
    """
    Immutable result of parse().

    Equality is structural: two outcomes built from the same schema and tokens
    compare equal.
    """
    results: tuple = ()
    positional: tuple = ()
    errors: tuple = ()

    @property
    def ok(self):
        """True when no fault was collected."""
        return not self.errors

    def get(self, key, default=None, /):
        """
        Return the value resolved for an option.

        key may be the Option itself, a long name ("name" or "--name") or a short
        name ("c" or "-c"). Returns default when the option has no result.
        """
        for result in self.results:
            option = result.option
            if key is option:
                return result.value
            if isinstance(key, str):
                name = key.lstrip("-")
                if name in option.names or name in option.short_names:
                    return result.value
        return default

    def check(self):
        """
        Raise ParseExit with every collected fault, or return self when there is none.
        """
        if self.errors:
            raise ParseExit(self.errors)
        return self

    def __rich_repr__(self):
        yield "results", self.results
        yield "positional", self.positional
        yield "errors", self.errors


def _route(option):
    """How a user would spell the option (for hints)."""
    if option.names or option.short_names:
        return option.label
    return "a value at positional slot %d" % option.position


def _what(option):
    if option.names or option.short_names:
        return "option %r" % option.label
    return "positional option at slot %d" % option.position


class Collector:
    """
    Accumulates matches, leftovers and faults for one parse call.

    Invariants
    - an option is matched at most once (match() refuses a second entry).
    - faults keep discovery order; withdraw() removes a fault without reordering
      the others.
    - freeze() copies everything into immutable tuples; the collector may be
      discarded afterwards.
    """

    def __init__(self, schema, /):
        self._schema = schema
        self._entries = {}
        self._leftovers = []
        self._faults = []

    # -- matches -------------------------------------------------------------

    def matched(self, option, /):
        return option in self._entries

    def match(self, option, value, /):
        if option in self._entries:
            raise RuntimeError("option %s matched twice" % option.label)
        self._entries[option] = value
        logger.debug("matched %s -> %r", option.label, value)

    def nullify(self, option, /):
        self._entries[option] = None

    # -- leftovers -----------------------------------------------------------

    def leftover(self, token, /):
        self._leftovers.append(token)

    @property
    def leftovers(self):
        return tuple(self._leftovers)

    # -- faults --------------------------------------------------------------

    def record(self, fault, /):
        logger.debug("recorded %s: %s", type(fault).__name__, fault.message)
        self._faults.append(fault)
        return fault

    def withdraw(self, fault, /):
        logger.debug("withdrew %s: %s", type(fault).__name__, fault.message)
        self._faults[:] = [recorded for recorded in self._faults if recorded is not fault]

    def unrecognised(self, token, /):
        spellings = ["--" + name for option in self._schema for name in option.names]
        suggestions = difflib.get_close_matches(token.text, spellings, 5)
        try:
            hint = "did you mean %r? otherwise remove it or declare the option" % suggestions[0]
        except IndexError:
            hint = "remove it or declare the option in the command schema"
        return self.record(UnrecognisedOptionError(
            "unknown option %r at %s position" % (token.text, ordinal(token.index + 1)),
            title="unknown option",
            code=FaultCode.UNRECOGNISED_OPTION,
            token=token.text,
            index=token.index + 1,
            suggestions=tuple(suggestions),
            hint=hint,
            docs=getdoc(FaultCode.UNRECOGNISED_OPTION),
        ))

    def missing(self, option, /):
        return self.record(MissingOptionError(
            "required %s was not provided" % _what(option),
            title="missing option",
            code=FaultCode.MISSING_OPTION,
            option=option,
            hint="provide %s" % _route(option),
            docs=getdoc(FaultCode.MISSING_OPTION),
        ))

    def not_enough(self, option, anchor, taken, minimum, /, *, positional=False):
        where = "from" if positional else "at"
        return self.record(NotEnoughArgumentsError(
            "%s %s %s position needs at least %d value%s but got %d" % (
                _what(option), where, ordinal(anchor.index + 1), minimum, "" if minimum == 1 else "s", len(taken)
            ),
            title="not enough arguments",
            code=FaultCode.NOT_ENOUGH_ARGUMENTS,
            option=option,
            token=anchor.text,
            index=anchor.index + 1,
            tokens=tuple(token.text for token in taken),
            hint="add the missing value%s" % ("" if minimum - len(taken) == 1 else "s"),
            docs=getdoc(FaultCode.NOT_ENOUGH_ARGUMENTS),
        ))

    def too_many(self, option, anchor, taken, surplus, maximum, /):
        return self.record(TooManyArgumentsError(
            "%s at %s position accepts at most %d value%s but %d were given" % (
                _what(option), ordinal(anchor.index + 1), maximum, "" if maximum == 1 else "s",
                len(taken) + len(surplus)
            ),
            title="too many arguments",
            code=FaultCode.TOO_MANY_ARGUMENTS,
            option=option,
            token=anchor.text,
            index=anchor.index + 1,
            tokens=tuple(token.text for token in (*taken, *surplus)),
            hint="remove the extra value%s after %s" % ("" if len(surplus) == 1 else "s", option.label),
            docs=getdoc(FaultCode.TOO_MANY_ARGUMENTS),
        ))

    def conversion(self, option, anchor, raw, exception, /):
        if anchor is Unset:
            message = "default value %r of %s cannot be converted to %s" % (
                ",".join(raw), _what(option), option.type
            )
            where = {}
        else:
            message = "value %r for %s at %s position cannot be converted to %s" % (
                ",".join(raw), _what(option), ordinal(anchor.index + 1), option.type
            )
            where = {"token": anchor.text, "index": anchor.index + 1}
        return self.record(ConversionError(
            message,
            title="conversion error",
            code=FaultCode.CONVERSION_ERROR,
            option=option,
            tokens=tuple(raw),
            exception=exception,
            hint="use a valid %s for %s" % (option.type, option.label),
            docs=getdoc(FaultCode.CONVERSION_ERROR),
            **where,
        ))

    # -- assembly ------------------------------------------------------------

    def freeze(self):
        return ParseOutcome(
            results=tuple(OptionResult(option, value) for option, value in self._entries.items()),
            positional=tuple(token.text for token in self._leftovers),
            errors=tuple(self._faults),
        )


__all__ = (
    "OptionResult",
    "ParseOutcome",
    "Collector",
)
