r"""
Argosy option schema.

Overview
- Option: immutable declaration of one flag/positional parameter a command accepts.
  • names: long spellings ("--output") and one-character short spellings ("-o").
  • type: a descriptor (see argosy.descriptors) or a Python annotation mapped by describe().
  • required / default: missing-option policy; default is a raw string converted like input.
  • position: index into the stream of unclaimed tokens (flagless invocation).
  • arity: (min, max) literal-token window; max may be None for unbounded.
- Schema: read-only lookup over a sequence of options (long names, short names,
  positions), validated for conflicts.

Introspection & representation
- OptionType metaclass exposes every field listed in __introspectable__ as a
  read-only property (via mirror()) and provides __repr__/__rich_repr__.

Validation highlights
- Long names must match r"--[^\W\d_](-?[^\W_]+)*", short names r"-[^\W\d_]".
- Duplicated names inside one option are rejected.
- An option without names must declare a position.
- Arity bounds are non-negative integers (max may be None) and min <= max.
- default must be a string.

Quick example
    >>> verbose = Option("--verbose", "-v", type=bool)
    >>> files = Option("--file", type=list[str], position=0, arity=(1, None))
    >>> verbose.short_names
    ('v',)
"""
import functools
import operator
import re
from collections.abc import Iterable, Set

from rich.text import Text

from .descriptors import describe
from .utils import *


class OptionType(type):
    """
    Metaclass for schema entries.

    - every field named in __introspectable__ becomes a mirror() property.
    - __typename__ ("option") is the lowercased, hyphenated class name used in
      construction errors and in __repr__.
    - __repr__/__rich_repr__ list the fields of __displayable__, falling back to
      __introspectable__.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - option(names=('verbose',), short_names=('v',), ...)
            """
            return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield (name, object) pairs for pretty printers.
            """
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_names(cls, metadata, /):
    """
    Internal: split shell spellings into long and short names.

    "--name" becomes a long name "name"; "-c" becomes a short name "c". Order is
    preserved (first spelling is the canonical one used in messages).

    Raises
    - TypeError: when a name is not a string.
    - ValueError: when a name is empty, malformed or duplicated.
    """
    longs = []
    shorts = []
    for name in metadata["names"]:
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} names must be strings")
        elif not (name := name.strip()):
            raise ValueError(f"{cls.__typename__} names cannot be empty-strings")
        elif re.fullmatch(r"--[^\W\d_](-?[^\W_]+)*", name):
            target = longs
        elif re.fullmatch(r"-[^\W\d_]", name):
            target = shorts
        else:
            raise ValueError(
                f"{cls.__typename__} name {name!r} must be a long (--name) or short (-c) option spelling"
            )
        if (name := name.lstrip("-")) in target:
            raise ValueError(f"{cls.__typename__} names cannot contain duplicates")
        target.append(name)

    metadata["names"] = tuple(longs)
    metadata["short_names"] = tuple(shorts)


def _sanitize_parametric(cls, metadata, /):
    """
    Internal: validate type/default/position/arity/description.

    Side effects
    - Mutates the provided metadata dict in place; Unset values stay Unset except
      for 'type' (always a descriptor) and 'description' (None when Unset).
    """
    metadata["type"] = describe(metadata["type"])

    if not isinstance(metadata["required"], bool):
        raise TypeError(f"{cls.__typename__} 'required' must be a boolean")

    if not isinstance(metadata["default"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'default' must be a raw string")

    position = metadata["position"]
    if position is not Unset:
        if isinstance(position, bool) or not isinstance(position, int):
            raise TypeError(f"{cls.__typename__} 'position' must be an integer")
        if position < 0:
            raise ValueError(f"{cls.__typename__} 'position' must be a non-negative integer")

    if (arity := metadata["arity"]) is not Unset:
        if not isinstance(arity, Iterable) or isinstance(arity, str | Set):
            raise TypeError(f"{cls.__typename__} 'arity' must be a (min, max) pair")
        try:
            minimum, maximum = arity
        except ValueError:
            raise TypeError(f"{cls.__typename__} 'arity' must be a (min, max) pair") from None
        for bound in (minimum, maximum) if maximum is not None else (minimum,):
            if isinstance(bound, bool) or not isinstance(bound, int):
                raise TypeError(f"{cls.__typename__} 'arity' bounds must be integers")
            if bound < 0:
                raise ValueError(f"{cls.__typename__} 'arity' bounds must be non-negative")
        if maximum is not None and minimum > maximum:
            raise ValueError(f"{cls.__typename__} 'arity' minimum cannot exceed its maximum")
        metadata["arity"] = (minimum, maximum)

    if not isinstance(description := metadata["description"], str | Text | Unset):
        raise TypeError(f"{cls.__typename__} 'description' must be a string")
    elif isinstance(description, str) and not (description := description.strip()):
        raise ValueError(f"{cls.__typename__} 'description' cannot be empty")
    metadata["description"] = coalesce(description)


class Option(metaclass=OptionType):
    """
    Declaration of one option a command accepts.

    Options are immutable once built and compare by identity: the same object is
    handed back inside every OptionResult that matched it.

    Properties
    - The names listed in __introspectable__ are exposed as read-only attributes.
    """

    __introspectable__ = (
        "names",
        "short_names",
        "type",
        "required",
        "default",
        "position",
        "arity",
        "description",
    )

    __slots__ = tuple("_" + name for name in __introspectable__)

    def __new__(
            cls,
            *names,
            type=Unset,
            required=False,
            default=Unset,
            position=Unset,
            arity=Unset,
            description=Unset,
    ):
        """
        Declare an option.

        Parameters
        - names: zero or more str
          "--long" and "-c" spellings. Zero names are allowed only for positional options.
        - type: descriptor | annotation | Unset
          Target type; Unset means raw tokens (Unspecified).
        - required: bool
          Report a missing-option fault when never matched and no default exists.
        - default: str | Unset
          Raw value converted and used when the option is never matched.
        - position: int | Unset
          Index of the option among positional options (sorted ascending).
        - arity: (int, int | None) | Unset
          Explicit token window; Unset selects the type-driven default.
        - description: str | Unset
          Documentation only; never used while parsing.
        """
        metadata = {
            "names": names,
            "type": type,
            "required": required,
            "default": default,
            "position": position,
            "arity": arity,
            "description": description,
        }
        _sanitize_names(cls, metadata)
        _sanitize_parametric(cls, metadata)

        if not (metadata["names"] or metadata["short_names"]) and metadata["position"] is Unset:
            raise TypeError(f"{cls.__typename__} without names must declare a position")

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    def __setattr__(self, name, value, /):
        if hasattr(self, name):
            raise AttributeError(f"{type(self).__typename__} attribute {name!r} is read-only")
        super().__setattr__(name, value)

    def __delattr__(self, name, /):
        raise AttributeError(f"{type(self).__typename__} attribute {name!r} is read-only")

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self

    @property
    def label(self):
        """
        Canonical user-facing spelling: first long name, then first short name,
        then a positional placeholder.
        """
        if self._names:
            return "--" + self._names[0]
        if self._short_names:
            return "-" + self._short_names[0]
        return "<positional %d>" % self._position


class Schema:
    """
    Read-only lookup over the options of one command.

    Responsibilities
    - Map long names and short names to their Option.
    - Keep declaration order (used for the missing-option sweep and defaults).
    - Reject conflicting declarations (shared names or positions) with ValueError.
    """

    __slots__ = ("_options", "_longs", "_shorts", "_positionals")

    options = mirror("options")

    def __init__(self, options=(), /):
        longs = {}
        shorts = {}
        positions = {}
        declared = []

        for option in options:
            if not isinstance(option, Option):
                raise TypeError("schema entries must be options, not %r" % type(option).__name__)
            if option in declared:
                raise ValueError("option %s is declared twice" % option.label)
            for name in option.names:
                if longs.setdefault(name, option) is not option:
                    raise ValueError("long name '--%s' is declared by more than one option" % name)
            for name in option.short_names:
                if shorts.setdefault(name, option) is not option:
                    raise ValueError("short name '-%s' is declared by more than one option" % name)
            if option.position is not Unset and positions.setdefault(option.position, option) is not option:
                raise ValueError("position %d is declared by more than one option" % option.position)
            declared.append(option)

        self._options = tuple(declared)
        self._longs = longs
        self._shorts = shorts
        self._positionals = tuple(positions[key] for key in sorted(positions))

    def long(self, name, /):
        """Return the option declaring '--name', or None."""
        return self._longs.get(name)

    def short(self, name, /):
        """Return the option declaring '-name', or None."""
        return self._shorts.get(name)

    def shorts(self, names, /):
        """
        Return the options for every character of a short group in order, or None
        when at least one character is not declared.
        """
        try:
            return tuple(self._shorts[name] for name in names)
        except KeyError:
            return None

    @property
    def positionals(self):
        """Options declaring a position, sorted by position."""
        return self._positionals

    def __iter__(self):
        return iter(self._options)

    def __len__(self):
        return len(self._options)

    def __repr__(self):
        return "schema(%s)" % ", ".join(option.label for option in self._options)


__all__ = (
    "Option",
    "Schema",
)
