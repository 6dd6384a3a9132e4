"""
Argosy positional binder.

After flag matching, every token no matched option claimed is a leftover. Options
declaring a position (and not already matched by a flag) are bound against the
leftovers in ascending position order: each one takes up to its window max tokens
starting where the previous one stopped.

Bound leftovers stay visible in ParseOutcome.positional; binding only records which
option claimed them.
"""
import logging
from typing import NamedTuple

from .arity import eligible, resolve

logger = logging.getLogger(__name__)


class Leftover(NamedTuple):
    """
    One unclaimed token after flag matching.

    - token: the LITERAL Token (its index is the 0-based stream position)
    - option: the positional Option that claimed it, or None
    """
    token: object
    option: object = None


def bind(schema, collector, converter, /):
    """
    Bind positional options against the collector's leftovers.

    Rules
    - options matched earlier by a flag are skipped (a flag always wins).
    - an option that finds no eligible token is left unmatched (the missing-option
      sweep and defaults handle it later).
    - an option that finds fewer tokens than its window min is matched with None and
      a NotEnoughArgumentsError anchored on the first token it saw.

    returns
    - tuple[Leftover] covering every leftover in stream order.
    """
    leftovers = collector.leftovers
    claims = {}
    cursor = 0

    for option in schema.positionals:
        if collector.matched(option):
            logger.debug("%s already matched by flag; skipping positional slot %d", option.label, option.position)
            continue

        run = leftovers[cursor:]
        if not eligible(option, run):
            logger.debug("no leftover for positional slot %d", option.position)
            continue

        resolution = resolve(option, run[0], run, converter, collector, positional=True)
        collector.match(option, resolution.value)
        for token in resolution.taken:
            claims[token.index] = option
        cursor += len(resolution.taken)

    return tuple(Leftover(token, claims.get(token.index)) for token in leftovers)


__all__ = (
    "Leftover",
    "bind",
)
