r"""
Numeric literal grammar for integer and float option values.

Accepted forms
- integer: [+-]?[0-9]+
    "23", "-5", "+7", "007"
- float:   [+-]?(digits[.digits?] | .digits)([eE][+-]?digits)?
    "0.5", "5.", ".5", "-2.5E-3", "1e5"

Rejected
- empty strings, whitespace, non-ASCII digits ("٣"), words ("nan", "inf"),
  a second decimal point or exponent marker ("1.2.3", "1e2e3"), trailing text ("3.14abc"),
  and an exponent marker without digits ("5e", "5e+").

The grammar is checked before conversion so that Python's own, more permissive
int()/float() parsing (underscores, surrounding whitespace, "inf") never leaks
into the command-line surface.
"""
import math
import re

_INTEGER = re.compile(r"[+-]?[0-9]+")
_FLOAT = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def isinteger(text, /):
    if not isinstance(text, str):
        raise TypeError("isinteger() argument must be a string")
    return _INTEGER.fullmatch(text) is not None


def isfloat(text, /):
    if not isinstance(text, str):
        raise TypeError("isfloat() argument must be a string")
    return _FLOAT.fullmatch(text) is not None


def tointeger(text, /):
    """
    convert a checked integer literal; ValueError when the grammar rejects it.

    python integers are unbounded, so any literal the grammar accepts converts.
    """
    if not isinteger(text):
        raise ValueError("invalid integer literal %r" % text)
    return int(text)


def tofloat(text, /):
    """
    convert a checked float literal; ValueError when the grammar rejects it.

    literals whose magnitude overflows a double ("1e999") are rejected rather
    than silently becoming infinity.
    """
    if not isfloat(text):
        raise ValueError("invalid float literal %r" % text)
    if not math.isfinite(value := float(text)):
        raise ValueError("float literal %r is out of range" % text)
    return value


__all__ = (
    "isinteger",
    "isfloat",
    "tointeger",
    "tofloat",
)
