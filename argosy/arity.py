"""
Argosy arity resolver.

Purpose
- Decide how many of the literal tokens following a matched option belong to it,
  enforce the option's (min, max) window, and hand the taken tokens to the value
  converter.

Windows
- explicit arity (min, max): used as declared; max None means unbounded.
- otherwise: ArrayOf/ListOf take 0..unbounded, everything else 0..1.

Rules
- Boolean scalars only ever take boolean literals ("true"/"false"); with nothing to
  take they resolve from the raw literal "true".
- Other options that take zero tokens resolve to None without a fault.
- Fewer tokens than min: NotEnoughArgumentsError, value None.
- More eligible tokens than an explicit max (flag matches only): the option takes max
  tokens, the rest stay unclaimed and a TooManyArgumentsError is recorded as pending.
  The parser confirms or withdraws it once positional binding is done.
- Short groups: when two or more boolean options share one token ('-abc') and the
  first trailing literal is a boolean literal, that literal is broadcast to all of
  them. Otherwise each member but the last resolves with no literals and the last
  member resolves against the trailing run.
"""
import itertools
import logging
from typing import NamedTuple

from .converters import is_boolean_literal
from .descriptors import is_boolean, is_collection
from .utils import Unset

logger = logging.getLogger(__name__)


class Window(NamedTuple):
    minimum: int
    maximum: int | None
    explicit: bool


class Resolution(NamedTuple):
    """
    Outcome of resolving one option against a run of literal tokens.

    - option: the resolved Option
    - taken: tokens claimed by the option (prefix of the run)
    - value: converted value, or None
    - surplus: eligible tokens beyond an explicit max (left unclaimed)
    - pending: the TooManyArgumentsError recorded for the surplus, or None
    """
    option: object
    taken: tuple
    value: object
    surplus: tuple = ()
    pending: object = None


def window(option, /):
    """
    Return the (min, max, explicit) token window of an option.
    """
    if option.arity is not Unset:
        return Window(*option.arity, True)
    if is_collection(option.type):
        return Window(0, None, False)
    return Window(0, 1, False)


def eligible(option, run, /):
    """
    Return the prefix of run the option may take (booleans stop at the first
    non-boolean literal).
    """
    if is_boolean(option.type):
        return tuple(itertools.takewhile(lambda token: is_boolean_literal(token.text), run))
    return tuple(run)


def convert(option, raw, converter, collector, anchor, /):
    """
    Convert raw strings for an option, recording a ConversionError on failure.

    Returns the converted value, or None when the converter raised.
    """
    try:
        return converter.convert(tuple(raw), option.type)
    except Exception as exception:
        collector.conversion(option, anchor, tuple(raw), exception)
        return None


def resolve(option, anchor, run, converter, collector, /, *, positional=False):
    """
    Resolve one option against the literal run that follows its anchor.

    parameters
    - option: the matched Option
    - anchor: the Token that matched it (flag token, or first leftover when positional)
    - run: literal Tokens available to the option, in stream order
    - positional: True when binding from leftovers (no overflow check; messages read
      "from <ordinal> position")

    returns
    - Resolution
    """
    limit = window(option)
    candidates = eligible(option, run)
    taken = candidates if limit.maximum is None else candidates[:limit.maximum]

    if len(taken) < limit.minimum:
        collector.not_enough(option, anchor, taken, limit.minimum, positional=positional)
        return Resolution(option, taken, None)

    surplus = candidates[len(taken):] if limit.explicit and not positional else ()

    if taken:
        value = convert(option, [token.text for token in taken], converter, collector, anchor)
    elif is_boolean(option.type):
        value = convert(option, ["true"], converter, collector, anchor)
    else:
        value = None

    pending = None
    if surplus:
        pending = collector.too_many(option, anchor, taken, surplus, limit.maximum)
        logger.debug("%s overflows by %d token(s); pending positional binding", option.label, len(surplus))

    return Resolution(option, taken, value, surplus, pending)


def resolve_group(options, anchor, run, converter, collector, /):
    """
    Resolve the options of one flag token (a long flag is a group of one).

    returns
    - list[Resolution] in the order the options appear in the token.
    """
    if (
        len(options) > 1
        and all(is_boolean(option.type) for option in options)
        and run
        and is_boolean_literal(run[0].text)
    ):
        logger.debug("broadcasting %r to %s", run[0].text, anchor.text)
        return [
            Resolution(option, run[:1], convert(option, [run[0].text], converter, collector, anchor))
            for option in options
        ]

    *heads, last = options
    return [
        *(resolve(option, anchor, (), converter, collector) for option in heads),
        resolve(last, anchor, run, converter, collector),
    ]


__all__ = (
    "Window",
    "Resolution",
    "window",
    "eligible",
    "convert",
    "resolve",
    "resolve_group",
)
