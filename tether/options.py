r"""
Tether option declarations and builders.

Overview
- OptionKind: closed set of value kinds (flag, counted flag, integer, float,
  string, path, existing path). A kind decides whether a value token must
  follow the option and how that token is coerced.
- OptionSpec: one declared option. Names, description, kind, the required
  marker, the mutable `isset` state and the target (caller storage) it binds into.
- Builders: flag, counter, integer, floating, string, path, existing.
  Each returns a ready OptionSpec for the Parser constructor.

Binding
- Every builder takes a target: a tether.targets.Target (usually a Cell) or
  anything tether.targets.bind() accepts when wrapped by the caller.
- The target's current value is checked against the kind on construction, so a
  counter bound to a string, or an integer bound to a bool, fails immediately
  with TypeError instead of misbehaving during parsing.
- The current value is also the default: options that never appear leave it untouched.

Quick example:
    >>> from tether import Cell, Parser, counter, string
    >>> verbosity, source = Cell(0), Cell()
    >>> parser = Parser(
    ...     string("i", "input-file", "input file", True, source),
    ...     counter("v", "verbose", "verbose logging", verbosity),
    ... )
    >>> parser.parse(["tool", "-vv", "-i", "data.csv"])
    True
    >>> verbosity.value, source.value
    (2, 'data.csv')

Validation highlights
- short must be exactly one character, neither '-' nor whitespace.
- long must be a non-empty string without leading '-' and without whitespace.
- required must be a real bool; flags and counters are never required.
"""
import enum
import functools
import operator

from .targets import Target, bind


class OptionKind(enum.Enum):
    """
    closed enumeration of option value kinds.

    properties
    - parametric: True when the option consumes the next whole token as its value.
    - label: display label used in usage lines ("flag", "integer", ...).
    """
    FLAG = "flag"
    FLAGCOUNT = "flag-count"
    INT = "int"
    FLOAT = "float"
    STRING = "string"
    PATH = "path"
    PATHEXISTING = "path-existing"

    @property
    def parametric(self):
        return self not in (OptionKind.FLAG, OptionKind.FLAGCOUNT)

    @property
    def label(self):
        return _LABELS[self]

    def admits(self, value, /):
        """
        tell whether a slot value fits this kind.

        bool is an int subclass in python; it is only admitted by FLAG.
        """
        match self:
            case OptionKind.FLAG:
                return isinstance(value, bool)
            case OptionKind.FLAGCOUNT | OptionKind.INT:
                return isinstance(value, int) and not isinstance(value, bool)
            case OptionKind.FLOAT:
                return isinstance(value, int | float) and not isinstance(value, bool)
            case _:
                return value is None or isinstance(value, str)


_LABELS = {
    OptionKind.FLAG: "flag",
    OptionKind.FLAGCOUNT: "flag",
    OptionKind.INT: "integer",
    OptionKind.FLOAT: "float",
    OptionKind.STRING: "string",
    OptionKind.PATH: "path",
    OptionKind.PATHEXISTING: "path",
}

_EXPECTED = {
    OptionKind.FLAG: "a bool",
    OptionKind.FLAGCOUNT: "an int",
    OptionKind.INT: "an int",
    OptionKind.FLOAT: "a float",
    OptionKind.STRING: "a string or None",
    OptionKind.PATH: "a string or None",
    OptionKind.PATHEXISTING: "a string or None",
}


class OptionSpec:
    """
    one declared option.

    attributes
    - short: single-character name matched inside '-abc' clusters.
    - long: name matched exactly after '--'.
    - descr: description shown in usage lines.
    - kind: OptionKind.
    - required: the parse fails when a required option never appears.
    - isset: flips to True the first time the option is applied.
    - target: tether.targets.Target the value is written into.

    only `isset` (and the storage behind `target`) changes once the spec is built.
    """
    __slots__ = ("short", "long", "descr", "kind", "required", "isset", "target")
    __displayable__ = ("short", "long", "kind", "required", "isset", "target")

    def __init__(self, kind, short, long, descr, required, target, /):
        if not isinstance(kind, OptionKind):
            raise TypeError("option kind must be an OptionKind")
        if not isinstance(short, str):
            raise TypeError("option short name must be a string")
        elif len(short) != 1 or short == "-" or short.isspace():
            raise ValueError("option short name must be a single character other than '-' (got %r)" % short)
        if not isinstance(long, str):
            raise TypeError("option long name must be a string")
        elif not long or long.startswith("-") or any(char.isspace() for char in long):
            raise ValueError("option long name must be a non-empty word without leading '-' (got %r)" % long)
        if not isinstance(descr, str):
            raise TypeError("option description must be a string")
        if not isinstance(required, bool):
            raise TypeError("option 'required' must be a bool")
        if not isinstance(target, Target):
            raise TypeError("option target must be a Target (see tether.targets.bind)")
        if not kind.admits(value := target.get()):
            raise TypeError("option -%s/--%s (%s) must bind %s, not %s" % (
                short, long, kind.value, _EXPECTED[kind], type(value).__name__
            ))

        self.kind = kind
        self.short = short
        self.long = long
        self.descr = descr
        self.required = required
        self.isset = False
        self.target = target

    @property
    def parametric(self):
        return self.kind.parametric

    @property
    def names(self):
        return "-%s/--%s" % (self.short, self.long)

    @property
    def value(self):
        return self.target.get()

    def __rich_repr__(self):
        for name in type(self).__displayable__:
            yield name, getattr(self, name)

    def __repr__(self):
        return "option(%s)" % ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))


def _declare(kind, short, long, descr, required, target):
    return OptionSpec(kind, short, long, descr, required, bind(target))


def flag(short, long, descr, target, /):
    """boolean switch: set to True when present. never required."""
    return _declare(OptionKind.FLAG, short, long, descr, False, target)


def counter(short, long, descr, target, /):
    """
    counted switch: incremented once per occurrence ('-vvv' counts three).
    never required, and the only kind allowed to repeat.
    """
    return _declare(OptionKind.FLAGCOUNT, short, long, descr, False, target)


def integer(short, long, descr, required, target, /):
    return _declare(OptionKind.INT, short, long, descr, required, target)


def floating(short, long, descr, required, target, /):
    return _declare(OptionKind.FLOAT, short, long, descr, required, target)


def string(short, long, descr, required, target, /):
    return _declare(OptionKind.STRING, short, long, descr, required, target)


def path(short, long, descr, required, target, /):
    """path option: bound verbatim, never checked against the filesystem."""
    return _declare(OptionKind.PATH, short, long, descr, required, target)


def existing(short, long, descr, required, target, /):
    """
    path option that must name a readable file.

    the value is bound verbatim during parsing; Parser.validate() performs the
    actual readability check afterwards.
    """
    return _declare(OptionKind.PATHEXISTING, short, long, descr, required, target)


__all__ = (
    "OptionKind",
    "OptionSpec",
    "flag",
    "counter",
    "integer",
    "floating",
    "string",
    "path",
    "existing",
)
