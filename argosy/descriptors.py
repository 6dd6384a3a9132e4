"""
Argosy type descriptors.

Overview
- Kind: the scalar kinds the default converter understands (string, boolean,
  integer, float).
- Unspecified / Scalar / ArrayOf / ListOf: a closed family of frozen tags that
  tell the converter how raw tokens are turned into a value.
  • Unspecified()     → raw token, or list of raw tokens when several were taken.
  • Scalar(kind)      → tokens joined with "," and coerced once.
  • ArrayOf(kind)     → each token coerced; assembled into a tuple.
  • ListOf(kind|None) → each token coerced (or kept raw); assembled into a list.
- describe(x): map a Python annotation (int, bool, list[str], tuple[int, ...], …)
  or an existing descriptor onto its tag.

Quick example
    >>> describe(int)
    Scalar(kind=<Kind.INTEGER: 'integer'>)
    >>> describe(list[str])
    ListOf(kind=<Kind.STRING: 'string'>)
"""
import types
import typing
from dataclasses import dataclass
from enum import StrEnum

from .utils import Unset


class Kind(StrEnum):
    """
    scalar kinds understood by the default converter.
    """
    STRING = "string"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"


@dataclass(frozen=True, slots=True)
class Unspecified:
    """No coercion: raw token(s) are returned untouched."""

    def __str__(self):
        return "value"


@dataclass(frozen=True, slots=True)
class Scalar:
    """A single value of the given kind."""
    kind: Kind

    def __str__(self):
        return str(self.kind)


@dataclass(frozen=True, slots=True)
class ArrayOf:
    """A fixed tuple of values of the given kind."""
    kind: Kind

    def __str__(self):
        return "array of %s" % self.kind


@dataclass(frozen=True, slots=True)
class ListOf:
    """An ordered list of values; kind None keeps raw strings."""
    kind: Kind | None = None

    def __str__(self):
        return "list of %s" % (self.kind or "values")


Descriptor = Unspecified | Scalar | ArrayOf | ListOf

# python annotations → kinds
_KINDS = {
    str: Kind.STRING,
    bool: Kind.BOOLEAN,
    int: Kind.INTEGER,
    float: Kind.FLOAT,
}


def _kind(object, /):
    if isinstance(object, Kind):
        return object
    try:
        return _KINDS[object]
    except (KeyError, TypeError):
        raise TypeError("describe() cannot map %r to a scalar kind" % (object,)) from None


def describe(object, /):
    """
    Turn a Python annotation or a descriptor into a descriptor.

    Accepted forms
    - Unspecified/Scalar/ArrayOf/ListOf instances: returned unchanged.
    - None or Unset: Unspecified().
    - Kind, str, bool, int, float: Scalar(kind).
    - list, list[T]: ListOf(None) / ListOf(kind(T)).
    - tuple[T, ...]: ArrayOf(kind(T)).

    Raises
    - TypeError: for any other object (including fixed-shape tuples like tuple[int, str]).
    """
    if isinstance(object, Unspecified | Scalar | ArrayOf | ListOf):
        return object
    if object is None or object is Unset:
        return Unspecified()
    if object is list:
        return ListOf()

    origin = typing.get_origin(object)
    arguments = typing.get_args(object)

    if origin is list:
        if len(arguments) != 1:
            raise TypeError("describe() list annotations take exactly one item type")
        return ListOf(_kind(arguments[0]))
    if origin is tuple:
        if len(arguments) != 2 or arguments[1] is not Ellipsis:
            raise TypeError("describe() tuple annotations must be variadic (tuple[T, ...])")
        return ArrayOf(_kind(arguments[0]))
    if isinstance(object, types.GenericAlias):
        raise TypeError("describe() cannot map %r to a descriptor" % (object,))

    return Scalar(_kind(object))


def is_boolean(descriptor, /):
    """True when the descriptor is a boolean scalar (the only flag-like type)."""
    return isinstance(descriptor, Scalar) and descriptor.kind is Kind.BOOLEAN


def is_collection(descriptor, /):
    """True for ArrayOf/ListOf descriptors (element-wise conversion)."""
    return isinstance(descriptor, ArrayOf | ListOf)


__all__ = (
    "Kind",
    "Unspecified",
    "Scalar",
    "ArrayOf",
    "ListOf",
    "Descriptor",
    "describe",
    "is_boolean",
    "is_collection",
)
