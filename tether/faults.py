"""
Tether faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue
  (errors and warnings). Codes are grouped by phase so logs stay searchable.
- ParserFault / ParserWarning: base types that carry a message plus options and
  know how to render themselves (plain lines or a rich panel).
- trigger(): central entry point to surface any fault.
- getdoc(): optional description lookup for a code from the host application.

How faults flow
- The parser raises a ParserFault at the point of failure, catches it at the
  top of parse()/validate(), records it and triggers it: the fault is rendered
  to the error sink and the call returns False. Faults never escape parse().
- Declaration-time oddities (a name declared twice) are ParserWarnings and go
  through the warnings module.

Message contract
- Messages are stable lowercase text naming the option as -x/--long so that
  scripts and log greps keep working; they are not a versioned machine format.
- Plain rendering:   "<prog>: error: <message>" then "hint: <hint>".
- Fancy rendering:   a rich Panel titled " [ <PROG> ERROR ] ".

Host hooks (read from __main__ when present)
- __prog__:   program name shown in diagnostics.
- __codes__:  mapping FaultCode -> label, see FaultCode.normalize().
- __styles__: mapping of style names used by the renderers.
- __docs__:   mapping FaultCode -> documentation string, see getdoc().
"""
import copy
import sys
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used by the parser (stable identifiers).

    grouping
    - parsing errors (112xx)
      • UNKNOWN_OPTION, UNKNOWN_SHORT_OPTION, MID_CLUSTER_PARAMETER,
        MISSING_PARAMETER, DUPLICATE_OPTION, INVALID_NUMERIC_LITERAL,
        MISSING_REQUIRED_OPTION
    - validation errors (113xx)
      • PATH_NOT_READABLE
    - warnings (12xxx)
      • DUPLICATE_NAME
    """
    # --- parsing errors (112xx) ---
    UNKNOWN_OPTION              = 11201
    UNKNOWN_SHORT_OPTION        = 11202
    MID_CLUSTER_PARAMETER       = 11203
    MISSING_PARAMETER           = 11204
    DUPLICATE_OPTION            = 11205
    INVALID_NUMERIC_LITERAL     = 11206
    MISSING_REQUIRED_OPTION     = 11207

    # --- validation errors (113xx) ---
    PATH_NOT_READABLE           = 11301

    # --- warnings (12xxx) ---
    DUPLICATE_NAME              = 12101

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(sys.modules["__main__"], "__codes__", {}).get(self, self.value))


def _styles(defaults):
    return defaultdict(str, defaults | getattr(sys.modules["__main__"], "__styles__", {}))


class ParserFault(Exception):
    """
    base class of every parse/validation error.

    options (all optional except where a renderer needs them)
    - code: FaultCode.
    - title: short lowercase title (fancy header).
    - hint: one actionable sentence.
    - option: the OptionSpec involved, when there is one.
    - token: the raw argument token involved, when there is one.
    - console/prog/colorful/fancy: rendering context merged in by trigger().
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    @property
    def option(self):
        return self.options.get("option")

    def __rich__(self):
        styles = _styles({
            "prog-name": "bold",
            "error-label": "bold red",
            "error-message": "red",
            "hint": "cyan",
            "panel-border": "red",
        })
        colorful = self.options.get("colorful", False)

        def text(fragment, style=""):
            return Text(str(fragment), styles[style] if colorful else "")

        prog = getattr(sys.modules["__main__"], "__prog__", self.options.get("prog") or "tether")
        hint = self.options.get("hint")

        if self.options.get("fancy", False):
            title = Text.assemble(
                " [ ",
                text(str(prog).upper(), "prog-name"),
                " ERROR ",
                text(self.code.normalize() if self.code else "", "error-label"),
                " ] ",
            )
            body = [text(self.message, "error-message")]
            if hint:
                body.append(text("hint: %s" % hint, "hint"))
            return Panel.fit(
                Group(*body),
                title=title,
                title_align="left",
                border_style=styles["panel-border"] if colorful else "",
            )

        lines = [Text.assemble(text(prog, "prog-name"), ": ", text("error", "error-label"), ": ", text(self.message, "error-message"))]
        if hint:
            lines.append(text("hint: %s" % hint, "hint"))
        return Group(*lines)

    def __trigger__(self) -> None:
        self.options.get("console", console).print(self, soft_wrap=True)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownOptionError(ParserFault): ...
class UnknownShortOptionError(ParserFault): ...
class MidClusterParameterError(ParserFault): ...
class MissingParameterError(ParserFault): ...
class DuplicateOptionError(ParserFault): ...
class InvalidNumericLiteralError(ParserFault): ...
class MissingRequiredOptionError(ParserFault): ...
class PathNotReadableError(ParserFault): ...


class ParserWarning(Warning):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    def __trigger__(self) -> None:
        warnings.warn(self, stacklevel=self.options.get("stacklevel", 2))

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class DuplicateNameWarning(ParserWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - errors are rendered to the console found in options (module console otherwise);
      warnings are emitted through the warnings module.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    when not found, returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    return getattr(sys.modules["__main__"], "__docs__", {}).get(code)


__all__ = (
    "ParserFault",
    "UnknownOptionError",
    "UnknownShortOptionError",
    "MidClusterParameterError",
    "MissingParameterError",
    "DuplicateOptionError",
    "InvalidNumericLiteralError",
    "MissingRequiredOptionError",
    "PathNotReadableError",
    "ParserWarning",
    "DuplicateNameWarning",
    "FaultCode",
    "trigger",
    "getdoc",
)
