"""
Argosy shared helpers.

Scope
- The few building blocks every layer leans on: the "not provided" sentinel,
  read-only field exposure and the ordinal wording of fault messages.

Overview
- Unset / UnsetType
  • Sentinel for "no value given", distinct from None (None is a legal default).
  • Falsy, printed as "Unset", sealed, and kept as one instance through copy/pickle.

- coalesce(value, default=None)
  • Swap Unset for a default; every other value (None, 0, "") passes through.

- @rename("name")
  • Give generated functions a readable __name__/__qualname__ for tracebacks.

- mirror("attr")
  • Property reading self._attr; backing fields hold immutable values only.

- ordinal(number)
  • "first" … "tenth", then "11th", "21st", "22nd", "23rd", …

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> coalesce(None, "fallback") is None
    True
    >>> ordinal(3)
    'third'
"""
import functools
from typing import final


@final
class UnsetType:
    """
    Type of the Unset sentinel (one instance per process, not subclassable).
    """

    def __or__(self, other, /):
        """
        Allow 'Unset | str' in isinstance checks.
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        """
        Allow 'str | Unset' in isinstance checks.
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self

    def __reduce__(self):
        # pickled by reference to the module-level instance
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Return default when object is Unset, object otherwise.

    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return default if object is Unset else object


def rename(name, /):
    """
    Decorator setting __name__ and __qualname__ of a generated function.

    Raises
    - TypeError: when name is not a string or the target is not callable.
    """
    if not isinstance(name, str):
        raise TypeError("@rename() argument must be a string")

    def decorator(function):
        if not callable(function):
            raise TypeError("@rename() must be applied to a callable")
        function.__name__ = function.__qualname__ = name
        return function

    return decorator


def mirror(name, /):
    """
    Read-only property over the private attribute "_{name}".

    No copy is made on access, so the backing value must be immutable (tuple,
    frozen dataclass, scalar, ...).
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return getattr(self, "_" + name)

    return property(getter)


_WORDS = ("first", "second", "third", "fourth", "fifth", "sixth", "seventh", "eighth", "ninth", "tenth")


@functools.cache
def ordinal(number, /):
    """
    Return the ordinal label of a 1-based position ("first", "12th", "23rd").
    """
    if 1 <= number <= len(_WORDS):
        return _WORDS[number - 1]
    if 10 < number % 100 < 20:
        return "%dth" % number
    return "%d%s" % (number, {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th"))


Unset = UnsetType()
"""
The "not provided" sentinel; pair with coalesce() to materialize a default.
"""


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",
    "ordinal",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
