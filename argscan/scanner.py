"""
Argscan scanner: classify argv tokens and dispatch them to registered handlers.

Phases (per parse call)
- loop
  • classify each token: '--name[=value]' (long), '-x[value]' (short) or positional.
  • resolve named tokens against the registry in registration order; the first
    structural match wins.
  • invoke the bound handler synchronously, in token order.
  • record at most one ParseError per token; a fatal one ends the scan.
- post-scan
  • report the first required positional slot that received nothing.

Handler contract
- flags are called without arguments, value options and positional slots with
  the string value.
- a handler signals a validation failure by raising a ParseError or returning
  one; any other Exception is wrapped into a HandlerValidationError. Errors from
  named option handlers are stamped with the matched option form ('--num', '-n').

The scanner keeps no state between calls: cursor, token queue and errors are
locals of parse(), so a Scanner can be reused for several argument vectors.
"""
import logging
import sys
from collections import deque
from enum import Enum

from .faults import (
    ParseError,
    UnrecognizedOptionError,
    MissingValueError,
    UnnecessaryValueError,
    UnexpectedArgumentError,
    MissingPositionalError,
    HandlerValidationError,
    ParseExit,
    report,
)
from .registry import Registry
from .utils import Unset, coalesce

logger = logging.getLogger(__name__)


class TokenKind(Enum):
    LONG = "long"
    SHORT = "short"
    POSITIONAL = "positional"


def classify(token, /):
    """
    classify one raw token.

    - '--...' (including a bare '--')  → TokenKind.LONG
    - '-x...'                          → TokenKind.SHORT
    - '-' or anything without a dash   → TokenKind.POSITIONAL
    """
    if not isinstance(token, str):
        raise TypeError("classify() argument must be a string")
    if token.startswith("--"):
        return TokenKind.LONG
    if token.startswith("-") and len(token) > 1:
        return TokenKind.SHORT
    return TokenKind.POSITIONAL


def match_long(body, name, /):
    """
    match a long option name against a token body (text after '--').

    returns
    - None when name does not match (or is empty).
    - Unset for an exact match ('--num'): the value, if any, comes later.
    - the inline value for 'name=value' bodies ('--num=5' → '5', '--num=' → '').
    """
    if not name or not body.startswith(name):
        return None
    rest = body[len(name):]
    if not rest:
        return Unset
    if rest[0] == "=":
        return rest[1:]
    return None


def _call(target, value, source):
    """
    invoke a handler and turn its failure, if any, into a ParseError.

    source is stamped on the error when given (named options); positional
    handlers keep the source they chose.
    """
    try:
        result = target.invoke(value) if value is not Unset else target.invoke()
    except ParseError as error:
        result = error
    except Exception as exception:
        return HandlerValidationError(
            str(exception) or type(exception).__name__,
            source=source or getattr(target, "name", ""),
            exception=exception,
        )
    if not isinstance(result, ParseError):
        return None
    return result.__replace__(source=source) if source else result


class Scanner:
    """
    walk an argument vector against a populated Registry.

    usage
        errors = Scanner(registry).parse(sys.argv[1:])
        for error in errors:
            print(error)
    """

    def __init__(self, registry, /):
        if not isinstance(registry, Registry):
            raise TypeError("Scanner() argument must be a registry")
        self.registry = registry

    def parse(self, args, /):
        """
        parse an argument vector (program name excluded).

        returns
        - list[ParseError] in token encounter order, possibly empty. when a
          fatal error is recorded the scan stops and that error is the last one.

        errors
        - TypeError when args contains something other than strings; handler
          failures never escape (they are recorded instead).
        """
        tokens = deque(args)
        for token in tokens:
            if not isinstance(token, str):
                raise TypeError("parse() arguments must be strings, not %s" % type(token).__name__)

        errors = []
        slots = self.registry.positionals
        cursor = 0
        filled = 0
        index = 0

        while tokens:
            token = tokens.popleft()
            index += 1
            kind = classify(token)
            logger.debug("token %d %r classified as %s", index, token, kind.value)

            match kind:
                case TokenKind.LONG:
                    error = self._parse_long(token, tokens)
                case TokenKind.SHORT:
                    error = self._parse_short(token, tokens)
                case TokenKind.POSITIONAL:
                    if cursor < len(slots):
                        error = self._parse_positional(slots[cursor], token)
                        filled = max(filled, cursor + 1)
                        # the last slot is repeatable: it takes every remaining token
                        if cursor + 1 < len(slots):
                            cursor += 1
                    else:
                        error = UnexpectedArgumentError("Unexpected argument: " + token, token=token)

            if error is None:
                continue
            logger.debug("token %d %r recorded %r", index, token, error)
            errors.append(error)
            if error.fatal:
                logger.debug("fatal error, %d token(s) left unparsed", len(tokens))
                return errors

        if filled < self.registry.required:
            errors.append(MissingPositionalError("Missing positional argument", source=slots[filled].name))
            logger.debug("recorded %r", errors[-1])
        return errors

    def _parse_long(self, token, tokens):
        body = token[2:]
        for option in self.registry.options:
            value = match_long(body, option.long)
            if value is None:
                continue
            source = "--" + option.long
            logger.debug("%r matched %r", token, option)
            if value is Unset:
                if not option.takes_value:
                    return _call(option, Unset, source)
                if not tokens:
                    return MissingValueError("Missing value", source=source)
                return _call(option, tokens.popleft(), source)
            if not option.takes_value:
                return UnnecessaryValueError("Unnecessary value", source=source, token=token)
            return _call(option, value, source)
        return UnrecognizedOptionError("Unrecognized option", source=token, token=token)

    def _parse_short(self, token, tokens):
        name, rest = token[1], token[2:]
        for option in self.registry.options:
            if option.short != name:
                continue
            source = "-" + option.short
            logger.debug("%r matched %r", token, option)
            if rest:
                if not option.takes_value:
                    return UnnecessaryValueError("Extraneous value", source=source, token=token)
                return _call(option, rest, source)
            if not option.takes_value:
                return _call(option, Unset, source)
            if not tokens:
                return MissingValueError("Missing value", source=source)
            return _call(option, tokens.popleft(), source)
        return UnrecognizedOptionError("Unrecognized option", source=token, token=token)

    def _parse_positional(self, slot, token):
        logger.debug("%r assigned to %r", token, slot)
        return _call(slot, token, "")


def parse(registry, args, /):
    """
    shortcut for Scanner(registry).parse(args).
    """
    return Scanner(registry).parse(args)


def invoke(registry, args=Unset, /, *, shell=False, colorful=True):
    """
    parse a process argument vector and surface the errors.

    parameters
    - registry: Registry, fully populated.
    - args: iterable of str, defaults to sys.argv[1:].
    - shell: bool (keyword-only)
      • True  → print every error to stderr (rich) and exit with status 1.
      • False → raise ParseExit grouping the errors.
    - colorful: bool (keyword-only), styling of the printed errors.

    returns
    - an empty list when parsing succeeded.
    """
    errors = parse(registry, coalesce(args, sys.argv[1:]))
    if not errors:
        return errors
    if shell:
        report(errors, colorful=colorful)
        sys.exit(1)
    raise ParseExit(errors, colorful=colorful)


__all__ = (
    "TokenKind",
    "classify",
    "match_long",
    "Scanner",
    "parse",
    "invoke",
)
