"""
Argscan faults (parse errors and warnings) and reporting.

Scope
- FaultCode: canonical, stable numeric identifiers for every parse error kind
  and registration warning. Codes are grouped by domain so logs and searches
  stay predictable.
- ParseError and its subclasses: structured errors accumulated by the scanner.
  Handlers raise (or return) ParseError to signal validation failures; the
  scanner never lets them escape the parse call.
- ParseExit: an exception group bundling the errors of one failed parse, raised
  by invoke() in library mode.
- ShadowedOptionWarning: emitted at registration when a name is already taken.
- report(): print errors to stderr through rich, one line per error.

Rendering
- every error renders as "Error parsing <source>: <message>", or
  "Error parsing command line: <message>" when it carries no source.
- styles are configurable via __styles__ in __main__, codes via __codes__.
"""
import copy
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.text import Text

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    grouping (by high-level domain)
    - named options (1111x)
      • UNRECOGNIZED_OPTION, MISSING_VALUE, UNNECESSARY_VALUE
    - positionals (1112x)
      • UNEXPECTED_ARGUMENT, MISSING_POSITIONAL
    - delegated to handlers (1113x)
      • HANDLER_VALIDATION
    - registration warnings (12xxx)
      • SHADOWED_OPTION
    """
    # --- named option errors (1111x) ---
    UNRECOGNIZED_OPTION = 11111
    MISSING_VALUE       = 11112
    UNNECESSARY_VALUE   = 11113

    # --- positional errors (1112x) ---
    UNEXPECTED_ARGUMENT = 11121
    MISSING_POSITIONAL  = 11122

    # --- handler errors (1113x) ---
    HANDLER_VALIDATION  = 11131

    # --- warnings (12xxx) ---
    SHADOWED_OPTION     = 12111

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _styler(colorful):
    styles = defaultdict(str, {
        "code": "bold #00E5FF",  # neon cyan fault code
        "prefix": "#C8C8D0",  # soft light gray lead-in
        "source": "bold #FF4DA6",  # pinky option form
        "message": "#E6E6F0",  # near-white message
        "fatal": "bold red",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    return styler


class ParseError(Exception):
    """
    one structured parse error.

    fields
    - message: human readable description ("Missing value", "invalid number", ...).
    - fatal: when true, the scanner stops right after recording this error.
    - source: the option form (--num, -n) or positional name the error is about;
      empty for scanner-level errors.
    - options: extra read-only context (token, exception, colorful, ...).

    handlers signal validation failures by raising or returning an instance:

        def number(text):
            if not text.isdigit():
                raise ParseError("invalid number")
    """
    code = FaultCode.HANDLER_VALIDATION

    def __init__(self, message, /, *, fatal=False, source="", **options):
        if not isinstance(message, str):
            raise TypeError("ParseError() message must be a string")
        if not isinstance(source, str):
            raise TypeError("ParseError() source must be a string")
        super().__init__(message)
        self.message = message
        self.fatal = bool(fatal)
        self.source = source
        self.options = MappingProxyType(options)

    def __str__(self):
        return "Error parsing %s: %s" % (self.source or "command line", self.message)

    def __repr__(self):
        return "%s(%r, fatal=%r, source=%r)" % (type(self).__name__, self.message, self.fatal, self.source)

    def __rich__(self):
        styler = _styler(self.options.get("colorful", True))
        return Text.assemble(
            ("[%s] " % self.code.normalize(), styler("code")),
            ("Error parsing ", styler("prefix")),
            (self.source or "command line", styler("source")),
            (": ", styler("prefix")),
            (self.message, styler("message")),
            (" (fatal)" if self.fatal else "", styler("fatal")),
        )

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        # subclasses may define their own __init__, so the copy bypasses it
        clone = copy.copy(self)
        for field in ("message", "fatal", "source"):
            if field in overrides:
                setattr(clone, field, overrides.pop(field))
        clone.options = MappingProxyType(dict(self.options) | overrides)
        return clone

    def __reduce__(self):
        return _restore, (type(self), self.args, self.__dict__)


def _restore(cls, args, state):
    # rebuild without calling __init__, whatever its signature
    error = cls.__new__(cls, *args)
    error.args = args
    error.__dict__.update(state)
    return error


class UnrecognizedOptionError(ParseError):
    code = FaultCode.UNRECOGNIZED_OPTION
class MissingValueError(ParseError):
    code = FaultCode.MISSING_VALUE
class UnnecessaryValueError(ParseError):
    code = FaultCode.UNNECESSARY_VALUE
class UnexpectedArgumentError(ParseError):
    code = FaultCode.UNEXPECTED_ARGUMENT
class MissingPositionalError(ParseError):
    code = FaultCode.MISSING_POSITIONAL
class HandlerValidationError(ParseError):
    code = FaultCode.HANDLER_VALIDATION


class ParseExit(ExceptionGroup):
    """
    all errors of one failed parse, raised by invoke() outside of shell mode.
    """

    def __new__(cls, errors, **options):
        return super().__new__(cls, "bad arguments", tuple(errors))

    def __init__(self, errors, **options):
        super().__init__("bad arguments", tuple(errors))
        self.options = MappingProxyType(options)

    def derive(self, errors):
        return type(self)(errors, **self.options)

    def __rich__(self):
        colorful = self.options.get("colorful", True)
        return Group(*(error.__replace__(colorful=colorful) for error in self.exceptions))


class ParseWarning(Warning):
    code = None

    def __init__(self, message, /, **options):
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)


class ShadowedOptionWarning(ParseWarning):
    code = FaultCode.SHADOWED_OPTION


def warn(warning, /):
    """
    surface a registration warning through the stdlib warnings machinery.
    """
    if not isinstance(warning, ParseWarning):
        raise TypeError("warn() argument must be a parse warning")
    warnings.warn(warning, stacklevel=3)


def report(errors, /, *, colorful=True, stream=None):
    """
    print errors in order, one line each.

    parameters
    - errors: iterable of ParseError (as returned by Scanner.parse).
    - colorful: bool (keyword-only), disable styles for plain terminals/logs.
    - stream: rich Console (keyword-only), defaults to the stderr console.
    """
    target = stream if stream is not None else console
    for error in errors:
        if not isinstance(error, ParseError):
            raise TypeError("report() expects parse errors, got %r" % type(error).__name__)
        target.print(error.__replace__(colorful=colorful))


__all__ = (
    "FaultCode",
    "ParseError",
    "UnrecognizedOptionError",
    "MissingValueError",
    "UnnecessaryValueError",
    "UnexpectedArgumentError",
    "MissingPositionalError",
    "HandlerValidationError",
    "ParseExit",
    "ParseWarning",
    "ShadowedOptionWarning",
    "warn",
    "report",
)
