"""
Tether parser: walk an argument vector once and bind options into caller storage.

What this module provides
- Parser: built from an ordered collection of OptionSpec declarations.
  • parse(argv): classify every token, bind option values, collect positionals,
    enforce single occurrence and required options. Returns True/False.
  • validate(): check every existing-path option for readability.
  • usage()/printusage(): the auto-generated options listing.
  • remaining/executable/options/faults: read-only views of the parser state.

Token grammar (one left-to-right pass over argv[1:])
- "file", "-"       → positional, kept in order (duplicates kept).
- "--name"          → long option, exact match on OptionSpec.long.
- "-abc"            → short cluster; each character is an OptionSpec.short.
                      an option taking a value may only close the cluster,
                      the next whole token then becomes its value.
- value tokens are taken verbatim, even when they start with '-' ("-I -5").

Failure model
- The first fault stops the scan; it is rendered to the error sink, recorded in
  Parser.faults and parse() returns False. State already written (isset,
  bound values, positionals) is left as is; nothing is rolled back.
- Required options are checked after the scan in declaration order.

Threading
- A parser is meant to be used once, from one thread, at program startup.
  Calling parse() twice on the same instance keeps accumulating state.

Example
    >>> from tether import Cell, Parser, counter, string
    >>> source, verbosity = Cell(), Cell(0)
    >>> parser = Parser(
    ...     string("i", "input-file", "input file", True, source),
    ...     counter("v", "verbose", "verbose logging", verbosity),
    ... )
    >>> if not parser.parse(sys.argv):
    ...     parser.printusage()
    ...     sys.exit(1)
"""
import difflib
import os
from collections.abc import Iterable

from .faults import *
from .faults import console as stderr
from .literals import isinteger, tofloat, tointeger
from .options import OptionKind, OptionSpec
from .utils import Unset, coalesce, view


def _lookup(options, field, name):
    # first declaration wins when a name was declared twice
    for option in options:
        if getattr(option, field) == name:
            return option
    return None


class Parser:
    """
    option parser over a fixed, ordered list of declarations.

    parameters
    - *options: OptionSpec instances, or a single iterable of them.
    - console: rich Console receiving diagnostics (stderr console by default).
    - colorful: style diagnostics (rich still drops colors on non-terminals).
    - fancy: render diagnostics inside a panel instead of plain lines.
    """
    options = view("options")
    remaining = view("remaining")
    faults = view("faults")

    def __init__(self, *options, console=Unset, colorful=True, fancy=False):
        if len(options) == 1 and not isinstance(options[0], OptionSpec) and isinstance(options[0], Iterable):
            options = tuple(options[0])
        for option in options:
            if not isinstance(option, OptionSpec):
                raise TypeError("Parser() arguments must be option declarations, not %s" % type(option).__name__)

        self._options = tuple(options)
        self._remaining = []
        self._faults = []
        self._executable = None
        self._console = coalesce(console, stderr)
        self.colorful = bool(colorful)
        self.fancy = bool(fancy)

        shorts, longs = {}, {}
        for option in self._options:
            for field, seen, spelling in (("short", shorts, "-%s"), ("long", longs, "--%s")):
                name = getattr(option, field)
                if name in seen:
                    trigger(DuplicateNameWarning(
                        "option name %s is declared more than once" % (spelling % name),
                        code=FaultCode.DUPLICATE_NAME,
                        hint="only the first declaration (%s) will ever match" % seen[name].names,
                        stacklevel=4,
                    ))
                else:
                    seen[name] = option

    @property
    def executable(self):
        """argv[0] of the last parse() call (None before parsing)."""
        return self._executable

    @property
    def prog(self):
        return os.path.basename(self._executable) if self._executable else "tether"

    def parse(self, arguments, /):
        """
        parse a full argument vector (program name at index 0).

        returns True when every token was bound or collected and every
        required option is set; False after reporting the first fault.
        """
        if isinstance(arguments, str):
            raise TypeError("parse() expects a sequence of argument strings, not a single string")
        arguments = tuple(arguments)
        if not all(isinstance(argument, str) for argument in arguments):
            raise TypeError("parse() arguments must be strings")
        self._executable = arguments[0] if arguments else None

        try:
            index = 1
            while index < len(arguments):
                index += 1 + self._dispatch(arguments, index)

            for option in self._options:
                if option.required and not option.isset:
                    raise MissingRequiredOptionError(
                        "option %s is required" % option.names,
                        title="missing required option",
                        code=FaultCode.MISSING_REQUIRED_OPTION,
                        hint="pass %s on the command line" % option.names,
                        option=option,
                        docs=getdoc(FaultCode.MISSING_REQUIRED_OPTION),
                    )
        except ParserFault as fault:
            self._report(fault)
            return False
        return True

    def validate(self):
        """
        check that every existing-path option names a readable file.

        every failing option is reported (not only the first); the result is
        True only when all checks pass. options still bound to None name no
        file and are skipped.
        """
        valid = True
        for option in self._options:
            if option.kind is not OptionKind.PATHEXISTING or (path := option.value) is None:
                continue
            try:
                with open(path, "rb"):
                    pass
            except OSError as error:
                valid = False
                self._report(PathNotReadableError(
                    "option %s requires a readable file" % option.names,
                    title="path not readable",
                    code=FaultCode.PATH_NOT_READABLE,
                    hint="cannot open %r: %s" % (path, (error.strerror or str(error)).lower()),
                    option=option,
                    token=path,
                    docs=getdoc(FaultCode.PATH_NOT_READABLE),
                ))
        return valid

    def usage(self):
        """
        render the options listing, one line per option in declaration order:

            Options:
              -v, --verbose\tverbose logging
              -i, --input-file <string>\tinput file (required)
        """
        lines = ["Options:"]
        for option in self._options:
            line = "  -%s, --%s" % (option.short, option.long)
            if option.parametric:
                line += " <%s>" % option.kind.label
            line += "\t" + option.descr
            if option.required:
                line += " (required)"
            lines.append(line)
        return "\n".join(lines) + "\n"

    def printusage(self):
        # written raw: rich rendering would expand the tab separators
        self._console.file.write(self.usage())

    def _report(self, fault):
        self._faults.append(fault)
        trigger(fault, console=self._console, prog=self.prog, colorful=self.colorful, fancy=self.fancy)

    def _dispatch(self, arguments, index):
        """
        classify arguments[index]; return how many following tokens were consumed.
        """
        token = arguments[index]

        if len(token) < 2 or not token.startswith("-"):
            self._remaining.append(token)
            return 0

        if token.startswith("--"):
            if (option := _lookup(self._options, "long", token[2:])) is None:
                suggestions = difflib.get_close_matches(token[2:], [candidate.long for candidate in self._options], 1)
                raise UnknownOptionError(
                    "unknown option %s" % token,
                    title="unknown option",
                    code=FaultCode.UNKNOWN_OPTION,
                    hint=("did you mean '--%s'?" % suggestions[0]) if suggestions else "see the options listing for valid names",
                    token=token,
                    docs=getdoc(FaultCode.UNKNOWN_OPTION),
                )
            return self._apply(option, arguments, index)

        consumed = 0
        last = len(token) - 1
        for position, char in enumerate(token[1:], 1):
            if (option := _lookup(self._options, "short", char)) is None:
                raise UnknownShortOptionError(
                    "unknown short option -%s" % char,
                    title="unknown short option",
                    code=FaultCode.UNKNOWN_SHORT_OPTION,
                    hint="short options are single characters; '%s' is not one of them" % char,
                    token=token,
                    docs=getdoc(FaultCode.UNKNOWN_SHORT_OPTION),
                )
            if option.parametric and position < last:
                raise MidClusterParameterError(
                    "short option -%s cannot be used in the middle of a flag list, it requires a value" % char,
                    title="value option inside a flag list",
                    code=FaultCode.MID_CLUSTER_PARAMETER,
                    hint="move -%s to the end of %r or pass it on its own" % (char, token),
                    option=option,
                    token=token,
                    docs=getdoc(FaultCode.MID_CLUSTER_PARAMETER),
                )
            consumed = self._apply(option, arguments, index)
        return consumed

    def _apply(self, option, arguments, index):
        """
        bind one occurrence of `option` found at arguments[index].

        returns 1 when the following token was taken as the value, 0 otherwise.
        """
        kind = option.kind
        if option.isset and kind is not OptionKind.FLAGCOUNT:
            raise DuplicateOptionError(
                "option %s shouldn't be specified more than once" % option.names,
                title="duplicate option",
                code=FaultCode.DUPLICATE_OPTION,
                hint="keep a single %s" % option.names,
                option=option,
                token=arguments[index],
                docs=getdoc(FaultCode.DUPLICATE_OPTION),
            )
        option.isset = True

        match kind:
            case OptionKind.FLAG:
                option.target.set(True)
                return 0
            case OptionKind.FLAGCOUNT:
                option.target.set(option.target.get() + 1)
                return 0

        if index + 1 >= len(arguments):
            raise MissingParameterError(
                "option %s requires a parameter" % option.names,
                title="missing parameter",
                code=FaultCode.MISSING_PARAMETER,
                hint="pass a value after %s, e.g. %s <%s>" % (arguments[index], arguments[index], kind.label),
                option=option,
                token=arguments[index],
                docs=getdoc(FaultCode.MISSING_PARAMETER),
            )
        value = arguments[index + 1]

        match kind:
            case OptionKind.INT:
                if not isinteger(value):
                    raise self._invalid(option, value, "integer", "a whole number such as 23 or -5")
                option.target.set(tointeger(value))
            case OptionKind.FLOAT:
                try:
                    number = tofloat(value)
                except ValueError:
                    raise self._invalid(option, value, "float", "a finite number such as 0.5, -2 or 1e-3") from None
                option.target.set(number)
            case _:
                option.target.set(value)
        return 1

    @staticmethod
    def _invalid(option, value, label, example):
        return InvalidNumericLiteralError(
            "invalid %s value \"%s\" specified for option %s" % (label, value, option.names),
            title="invalid %s value" % label,
            code=FaultCode.INVALID_NUMERIC_LITERAL,
            hint="%s expects %s" % (option.names, example),
            option=option,
            token=value,
            docs=getdoc(FaultCode.INVALID_NUMERIC_LITERAL),
        )

    def __rich_repr__(self):
        yield "options", self._options
        yield "remaining", tuple(self._remaining)

    def __repr__(self):
        return "parser(%s)" % ", ".join(repr(option) for option in self._options)


__all__ = (
    "Parser",
)
