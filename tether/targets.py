"""
Tether targets: non-owning handles to caller storage.

Options write their parsed values into storage the caller owns. A target is the
handle an option keeps to that storage; the parser reads and writes through it
but never creates, copies or frees what sits behind it.

Kinds
- Cell(value): a tiny box the caller creates up front and reads after parsing.
- Attribute(object, name): writes through to object.name (namespaces, dataclasses, config objects).
- Item(mapping, key): writes through to mapping[key].

bind(object, name=Unset) picks the right handle:
    >>> verbosity = Cell(0)
    >>> bind(verbosity) is verbosity
    True
    >>> bind(settings, "threads")      # Attribute(settings, "threads")
    >>> bind(environ, "OUTPUT")        # Item(environ, "OUTPUT")

Notes
- Handles are single-threaded by contract; nothing here locks.
- Attribute/Item targets must already hold a value when an option is declared,
  so the declaring builder can check it against the option kind.
"""
from abc import ABC, abstractmethod
from collections.abc import MutableMapping

from .utils import Unset


class Target(ABC):
    """
    abstract slot the parser binds option values into.
    """
    __slots__ = ()

    @abstractmethod
    def get(self):
        """return the value currently held by the caller storage."""

    @abstractmethod
    def set(self, value, /):
        """replace the value held by the caller storage."""


class Cell(Target):
    """
    caller-owned box holding a single value.

    the initial value doubles as the option default: it is left untouched when
    the option never appears on the command line.
    """
    __slots__ = ("value",)

    def __init__(self, value=None, /):
        self.value = value

    def get(self):
        return self.value

    def set(self, value, /):
        self.value = value

    def __repr__(self):
        return "cell(%r)" % (self.value,)

    def __rich_repr__(self):
        yield self.value


class Attribute(Target):
    __slots__ = ("object", "name")

    def __init__(self, object, name, /):
        if not isinstance(name, str):
            raise TypeError("attribute target name must be a string")
        if not hasattr(object, name):
            raise AttributeError("%r has no attribute %r to bind to" % (object, name))
        self.object = object
        self.name = name

    def get(self):
        return getattr(self.object, self.name)

    def set(self, value, /):
        setattr(self.object, self.name, value)

    def __repr__(self):
        return "attribute(%r, %r)" % (self.object, self.name)


class Item(Target):
    __slots__ = ("mapping", "key")

    def __init__(self, mapping, key, /):
        if not isinstance(mapping, MutableMapping):
            raise TypeError("item target must wrap a mutable mapping")
        if key not in mapping:
            raise KeyError(key)
        self.mapping = mapping
        self.key = key

    def get(self):
        return self.mapping[self.key]

    def set(self, value, /):
        self.mapping[self.key] = value

    def __repr__(self):
        return "item(%r, %r)" % (type(self.mapping).__name__, self.key)


def bind(object, name=Unset, /):
    """
    normalize a caller binding into a Target.

    rules
    - a Target is returned unchanged (name must be omitted).
    - a mutable mapping plus a key yields Item(mapping, key).
    - any other object plus an attribute name yields Attribute(object, name).
    """
    if isinstance(object, Target):
        if name is not Unset:
            raise TypeError("bind() takes no name when given a target")
        return object
    if name is Unset:
        raise TypeError("bind() requires a name unless given a target")
    if isinstance(object, MutableMapping):
        return Item(object, name)
    return Attribute(object, name)


__all__ = (
    "Target",
    "Cell",
    "Attribute",
    "Item",
    "bind",
)
