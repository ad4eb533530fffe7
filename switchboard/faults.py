"""
Switchboard faults and rendering.

Scope
- FaultCode: stable numeric identifiers for every failure the package raises.
- SwitchException: base type carrying a message plus options (code, title,
  hint, name, token, index, ...) that knows how to render itself with rich.
- ParsingError: the single type callers catch around ArgumentParser.parse().
- report(): print a fault on the stderr console (the library never exits).
- getdoc(): optional description lookup for a code from the host application.

UX goals
- Position-first messages: parse faults name the switch and the ordinal
  position of the offending token (“at third position”).
- Short titles, one-sentence bodies, a single clear hint.
- Lowercased tone with readable styling (configurable via __styles__ in __main__).
"""
import copy
import sys
from collections import defaultdict
from enum import IntEnum
from pathlib import Path
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - declaration (1110x)
      • INVALID_DECLARATION
    - switch tokens (1111x)
      • UNDEFINED_SWITCH, SWITCH_ALREADY_PARSED, SWITCH_MISSING_ARGUMENT
    - presence (1112x)
      • REQUIRED_SWITCH_MISSING

    normalize() lets the host remap codes to its own labels.
    """
    # --- declaration errors ---
    INVALID_DECLARATION         = 11101

    # --- switch token errors ---
    UNDEFINED_SWITCH            = 11111
    SWITCH_ALREADY_PARSED       = 11112
    SWITCH_MISSING_ARGUMENT     = 11113

    # --- presence errors ---
    REQUIRED_SWITCH_MISSING     = 11121

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class SwitchException(Exception):
    """
    base fault of the package.

    options are free-form and read-only; the well-known ones are exposed as
    properties falling back to the class defaults (__faultcode__, __faulttitle__).
    rendering options: colorful, fancy, prog.
    """
    __faultcode__ = Unset
    __faulttitle__ = "switch error"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = coalesce(message, "")
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code", coalesce(type(self).__faultcode__))

    @property
    def title(self):
        return self.options.get("title", type(self).__faulttitle__)

    @property
    def hint(self):
        return self.options.get("hint")

    @property
    def name(self):
        return self.options.get("name")

    @property
    def index(self):
        return self.options.get("index")

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", False)
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

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        prog = text(getattr(main, "__prog__", self.options.get("prog") or Path(sys.argv[0]).name), styler("prog-name"))

        header = Text.assemble("[ ", prog)
        if self.code is not None:
            header.append(" — ").append(text(self.code.normalize(), styler("code")))
        header.append(" | ").append(text(self.title.title(), styler("error-title"))).append(" ]")

        message = text(self.message, styler("error-message"))
        renders = [message]
        if self.hint:
            renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(self.hint, styler("hint"))))

        if fancy:
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class InvalidDeclarationError(SwitchException, ValueError):
    __faultcode__ = FaultCode.INVALID_DECLARATION
    __faulttitle__ = "invalid declaration"


class ParsingError(SwitchException):
    __faulttitle__ = "parsing error"


class UndefinedSwitchError(ParsingError):
    __faultcode__ = FaultCode.UNDEFINED_SWITCH
    __faulttitle__ = "undefined switch"


class SwitchAlreadyParsedError(ParsingError):
    __faultcode__ = FaultCode.SWITCH_ALREADY_PARSED
    __faulttitle__ = "switch already parsed"


class SwitchMissingArgumentError(ParsingError):
    __faultcode__ = FaultCode.SWITCH_MISSING_ARGUMENT
    __faulttitle__ = "missing switch argument"


class RequiredSwitchMissingError(ParsingError):
    __faultcode__ = FaultCode.REQUIRED_SWITCH_MISSING
    __faulttitle__ = "required switch missing"


def report(fault, /, *, console=console, **options):
    """
    render a fault on the console (stderr by default) with the given options.

    contract
    - fault must provide a __rich__ and a __replace__ method (see SwitchException).
    - options are merged into the fault via copy.replace(...) before rendering;
      typical ones are colorful, fancy and prog.
    - nothing is raised and the process is not exited: the caller decides.
    """
    if (
        not hasattr(fault, "__rich__") or
        not callable(fault.__rich__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("report() argument must have a __rich__ and __replace__ methods")
    console.print(copy.replace(fault, **options))


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    returns None when nothing is registered.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "SwitchException",
    "InvalidDeclarationError",
    "ParsingError",
    "UndefinedSwitchError",
    "SwitchAlreadyParsedError",
    "SwitchMissingArgumentError",
    "RequiredSwitchMissingError",
    "report",
    "getdoc",
)
