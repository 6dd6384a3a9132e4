"""
Argosy faults and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every parse fault. Codes are
  grouped by domain to keep copy consistent and make logs/searches predictable.
- ParseFault and its five concrete kinds: structured, immutable records of what went
  wrong and where. They subclass Exception so they can be grouped and raised on
  demand, but parse() never raises them: it collects them in discovery order.
- ParseExit: an ExceptionGroup bundling all faults of one outcome (see
  ParseOutcome.check()).
- report(): render every collected fault together with rich.
- getdoc(): optional description lookup for a code from the host application.

UX goals
- Position-first messages: token-anchored faults include the ordinal position of
  the token so users can learn by trying (“at third position”, etc.).
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.
- Lowercased tone with readable styling (configurable via __styles__ in __main__).

Host configuration (all optional attributes of __main__)
- __prog__:   program name shown in headers.
- __styles__: style overrides for the rich renderers.
- __codes__:  FaultCode → label mapping used by FaultCode.normalize().
- __docs__:   FaultCode → documentation string returned by getdoc().
"""
import os
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

stderr = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    grouping (by high-level domain)
    - matching (211xx)
      • UNRECOGNISED_OPTION, MISSING_OPTION
    - arity (212xx)
      • NOT_ENOUGH_ARGUMENTS, TOO_MANY_ARGUMENTS
    - delegated conversion (213xx)
      • CONVERSION_ERROR

    spacing leaves room for future additions without reshuffling existing codes.
    """
    # --- matching errors (211xx) ---
    UNRECOGNISED_OPTION  = 21101
    MISSING_OPTION       = 21102

    # --- arity errors (212xx) ---
    NOT_ENOUGH_ARGUMENTS = 21201
    TOO_MANY_ARGUMENTS   = 21202

    # --- delegated errors (213xx) ---
    CONVERSION_ERROR     = 21301

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _prog():
    return getattr(__import__("__main__"), "__prog__", os.path.basename(sys.argv[0]) or "argosy")


def _styler(styles, colorful):
    def styler(style):
        return styles[style] if colorful else ""
    return styler


def _text(colorful):
    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)
    return text


class ParseFault(Exception):
    """
    Base of every parse fault.

    Data (read from the immutable options mapping)
    - code: FaultCode
    - title: short lowercase headline
    - hint: one actionable sentence
    - option: the Option involved (Unset when the fault is about a raw token)
    - token: the raw token involved (Unset when not token-anchored)
    - index: 1-based position of the token in the input stream (Unset when not anchored)
    - tokens: raw tokens handed to the resolver/converter (empty when none)

    Rendering options (merged via __replace__)
    - colorful (default True), fancy (default False), ratio (panel width ratio).

    Equality is structural over the class, message and data (a conversion fault's
    original exception is compared by type and text), so repeated parses of the same
    input yield equal faults.
    """

    def __init__(self, message, /, **options):
        assert isinstance(message, str)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options["code"]

    @property
    def title(self):
        return self.options.get("title", "")

    @property
    def hint(self):
        return self.options.get("hint", "")

    @property
    def option(self):
        return self.options.get("option", Unset)

    @property
    def token(self):
        return self.options.get("token", Unset)

    @property
    def index(self):
        return self.options.get("index", Unset)

    @property
    def tokens(self):
        return self.options.get("tokens", ())

    def _identity(self):
        exception = self.options.get("exception")
        return (
            type(self),
            self.message,
            self.options.get("code"),
            id(self.option),
            self.token,
            self.index,
            tuple(self.tokens),
            (type(exception), str(exception)) if exception is not None else None,
        )

    def __eq__(self, other):
        if not isinstance(other, ParseFault):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self):
        return hash((type(self), self.message))

    def __str__(self):
        return self.message

    def __repr__(self):
        return "%s(%r)" % (type(self).__name__, self.message)

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        styler = _styler(styles, colorful)
        text = _text(colorful)

        header = Text.assemble(
            "[ ",
            text(_prog(), styler("prog-name")),
            " — ",
            text(self.code.normalize(), styler("code")),
            " | ",
            text(self.title.title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))
        hint = Text.assemble(text(" → ", styler("hint-arrow")), text(self.hint, styler("hint")))

        if fancy:
            try:
                width = int((stderr.width - 4) * self.options["ratio"])
            except KeyError:
                width = None
            return Panel(Group(message, hint), title=header, title_align="left", width=width)

        return Group(header, message, hint)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnrecognisedOptionError(ParseFault): ...
class MissingOptionError(ParseFault): ...
class NotEnoughArgumentsError(ParseFault): ...
class TooManyArgumentsError(ParseFault): ...
class ConversionError(ParseFault): ...


class ParseExit(ExceptionGroup):
    """
    All faults of one parse, raised together by ParseOutcome.check().
    """

    def __new__(cls, exceptions, **options):
        return super().__new__(cls, "bad parse", tuple(exceptions))

    def __init__(self, exceptions, **options):
        super().__init__("bad parse", tuple(exceptions))
        self.options = MappingProxyType(options)

    def derive(self, exceptions):
        return type(self)(exceptions, **self.options)

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        styles = defaultdict(str, {
            # header
            "prog-name": "bold #E6E6F0",  # near-white program name
            "title": "bold #FF4DA6",  # friendly pinky group title
        } | getattr(main, "__styles__", {}))

        styler = _styler(styles, colorful)
        text = _text(colorful)

        header = Text.assemble(
            "[ ",
            text(_prog(), styler("prog-name")),
            " — ",
            text(self.message.title(), styler("title")),
            " ]"
        )

        renders = [
            exception.__replace__(colorful=colorful, fancy=fancy, ratio=2/3)
            for exception in self.exceptions
        ]

        if fancy:
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)


def report(source, /, *, console=Unset, fancy=False, colorful=True):
    """
    print every fault of an outcome (or an iterable of faults) together.

    parameters
    - source: ParseOutcome | Iterable[ParseFault]
    - console: rich Console to print to (defaults to a stderr console)
    - fancy: render panels instead of plain lines
    - colorful: apply styles

    returns
    - the number of faults printed (0 prints nothing).
    """
    faults = tuple(getattr(source, "errors", source))
    if not faults:
        return 0
    target = stderr if console is Unset else console
    target.print(ParseExit(faults, fancy=fancy, colorful=colorful))
    return len(faults)


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    lookup
    - the host application may expose a __docs__ mapping in __main__ where keys
      are FaultCode instances and values are short documentation strings.
    - when not found, returns None (renderers treat docs as optional).
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "ParseFault",
    "UnrecognisedOptionError",
    "MissingOptionError",
    "NotEnoughArgumentsError",
    "TooManyArgumentsError",
    "ConversionError",
    "ParseExit",
    "report",
    "getdoc",
)
