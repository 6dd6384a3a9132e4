"""
Argosy value conversion (collaborator boundary).

Scope
- ValueConverter: the protocol the resolver calls with the raw tokens taken for an
  option and its target descriptor. Implementations return the typed value or raise
  (ValueError/TypeError for malformed input); the resolver turns any raised exception
  into a ConversionError fault and keeps going.
- DefaultConverter: a synchronous, side-effect-free implementation covering the
  built-in kinds (string, boolean, integer, float).

Dispatch (DefaultConverter.convert)
- Unspecified, one token        → the token untouched.
- Unspecified, several tokens   → list of the tokens.
- Scalar(kind)                  → tokens joined with "," then coerced once.
- ArrayOf(kind)                 → tuple of coerced tokens.
- ListOf(kind | None)           → list of coerced (or raw) tokens.

Coercion rules
- string: unchanged.
- boolean: "true"/"false" (case-insensitive); anything else is a ValueError.
- integer: decimal, or 0x/0o/0b prefixed literals (with optional sign).
- float: Python float() syntax.
"""
from typing import Protocol, runtime_checkable

from .descriptors import *


@runtime_checkable
class ValueConverter(Protocol):
    """
    Synchronous conversion collaborator.

    convert(tokens, target) receives a non-empty tuple of raw strings and a
    descriptor. Raising signals a conversion failure; nothing else is expected.
    """

    def convert(self, tokens, target, /): ...


def is_boolean_literal(token, /):
    """
    Return True when the token spells a boolean ("true"/"false", any casing).
    """
    return isinstance(token, str) and token.lower() in ("true", "false")


def _boolean(value):
    if not is_boolean_literal(value):
        raise ValueError("invalid boolean value: %r (expected 'true' or 'false')" % value)
    return value.lower() == "true"


def _integer(value):
    try:
        return int(value, 10)
    except ValueError:
        pass
    try:
        # prefixed literals only; int(value, 0) rejects "010" style octals
        return int(value, 0)
    except ValueError:
        raise ValueError("invalid integer value: %r" % value) from None


def _float(value):
    try:
        return float(value)
    except ValueError:
        raise ValueError("invalid floating-point value: %r" % value) from None


class DefaultConverter:
    """
    Default ValueConverter for the built-in kinds.

    Subclasses may extend COERCERS to support more kinds; the mapping is looked
    up per call so no state is shared between conversions.
    """

    COERCERS = {
        Kind.STRING: str,
        Kind.BOOLEAN: _boolean,
        Kind.INTEGER: _integer,
        Kind.FLOAT: _float,
    }

    def coerce(self, value, kind, /):
        """
        Coerce one raw string to the given kind (None keeps it raw).
        """
        if kind is None:
            return value
        try:
            coercer = self.COERCERS[kind]
        except KeyError:
            raise TypeError("no coercion registered for kind %r" % kind) from None
        return coercer(value)

    def convert(self, tokens, target, /):
        tokens = tuple(tokens)
        if not tokens:
            raise ValueError("nothing to convert")

        match target:
            case Unspecified():
                return tokens[0] if len(tokens) == 1 else list(tokens)
            case Scalar(kind=kind):
                return self.coerce(",".join(tokens), kind)
            case ArrayOf(kind=kind):
                return tuple(self.coerce(token, kind) for token in tokens)
            case ListOf(kind=kind):
                return [self.coerce(token, kind) for token in tokens]
            case _:
                raise TypeError("unsupported target descriptor: %r" % (target,))


__all__ = (
    "ValueConverter",
    "DefaultConverter",
    "is_boolean_literal",
)
