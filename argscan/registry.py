r"""
Argscan registry: named options and positional slots.

Overview
- Value types
  • NamedOption: a flag identified by a short character and/or a long word,
    bound to a handler that takes either no argument (HandlerKind.FLAG) or
    exactly one string (HandlerKind.VALUE).
  • PositionalSlot: an argument matched by order rather than name; required
    unless registered after Registry.optional().
  Both are immutable once built (StorageGuard + read-only views).

- Registry
  • option(short, long, descr, handler): append a named option.
  • positional(name, descr, handler): append a positional slot.
  • optional(): every slot registered afterwards is optional (one-shot, idempotent).
  Each method returns the registry, so registrations chain:

        registry = (
            Registry()
            .option("v", "verbose", "talk more", lambda: ...)
            .option(None, "num", "a number", lambda text: ...)
            .positional("FILE", "input file", lambda text: ...)
            .optional()
            .positional("MORE", "extra files", lambda text: ...)
        )

  Omitting the handler turns option()/positional() into decorators:

        @registry.option("n", "", "a number")
        def number(text): ...

Matching priority
- registration order is matching priority: the first option whose name matches
  a token wins. Registering a name twice is allowed but the later option becomes
  unreachable through that name; a ShadowedOptionWarning is emitted.
- the last positional slot is repeatable: it receives every remaining
  positional token once the earlier slots are filled.
"""
import logging
from enum import Enum

from .faults import ShadowedOptionWarning, warn
from .internals import StorageGuard, view
from .utils import Unset, arity

logger = logging.getLogger(__name__)


class HandlerKind(Enum):
    """
    shape of a named option handler, decided once at registration time.
    """
    FLAG = 0   # handler()
    VALUE = 1  # handler(value)


class NamedOption(StorageGuard):
    """
    a registered named option (immutable).

    fields
    - short: str | None, single character matched by '-x' tokens.
    - long: str, matched by '--word' and '--word=value' tokens; empty means no long form.
    - descr: str, empty hides the option from the description table.
    - kind: HandlerKind, FLAG or VALUE.
    - handler: the bound callable.
    """
    __fields__ = ("short", "long", "descr", "kind", "handler")

    short = view("short")
    long = view("long")
    descr = view("descr")
    kind = view("kind")
    handler = view("handler")

    def __new__(cls, short, long, descr, handler, kind, /):
        if short is not None and not (isinstance(short, str) and len(short) == 1):
            raise TypeError("option short name must be a single character or None")
        if short == "-":
            raise ValueError("option short name cannot be '-'")
        if not isinstance(long, str):
            raise TypeError("option long name must be a string")
        if short is None and not long:
            raise TypeError("option must have a short or a long name")
        if not isinstance(descr, str):
            raise TypeError("option description must be a string")
        if not callable(handler):
            raise TypeError("option handler must be callable")
        if not isinstance(kind, HandlerKind):
            raise TypeError("option kind must be a HandlerKind")

        with super().__new__(cls) as self:
            for field, value in zip(cls.__fields__, (short, long, descr, kind, handler)):
                setattr(self, "-" + field, value)
        return self

    @property
    def takes_value(self):
        return self.kind is HandlerKind.VALUE

    @property
    def labels(self):
        """display forms, short first ('-n', '--num')."""
        labels = []
        if self.short is not None:
            labels.append("-" + self.short)
        if self.long:
            labels.append("--" + self.long)
        return tuple(labels)

    def invoke(self, value=Unset, /):
        """
        call the handler with the shape it was registered with.

        flags are called without arguments; value options receive the string.
        """
        if self.kind is HandlerKind.FLAG:
            return self.handler()
        if value is Unset:
            raise TypeError("option %s requires a value" % "/".join(self.labels))
        return self.handler(value)

    def __repr__(self):
        return "NamedOption(%s, kind=%s)" % ("/".join(self.labels), self.kind.name)


class PositionalSlot(StorageGuard):
    """
    a registered positional slot (immutable).

    fields
    - name: str, display label and error source.
    - descr: str, empty hides the slot from the description table.
    - handler: one-argument callable receiving the token.
    - required: bool, fixed at registration.
    """
    __fields__ = ("name", "descr", "handler", "required")

    name = view("name")
    descr = view("descr")
    handler = view("handler")
    required = view("required")

    def __new__(cls, name, descr, handler, required, /):
        if not isinstance(name, str):
            raise TypeError("positional name must be a string")
        if not name:
            raise ValueError("positional name must be a non-empty string")
        if not isinstance(descr, str):
            raise TypeError("positional description must be a string")
        if not callable(handler):
            raise TypeError("positional handler must be callable")

        with super().__new__(cls) as self:
            for field, value in zip(cls.__fields__, (name, descr, handler, bool(required))):
                setattr(self, "-" + field, value)
        return self

    def invoke(self, value, /):
        return self.handler(value)

    def __repr__(self):
        return "PositionalSlot(%r, required=%r)" % (self.name, self.required)


class Registry:
    """
    ordered, append-only set of named options and positional slots.

    state
    - options: tuple[NamedOption, ...] in registration order.
    - positionals: tuple[PositionalSlot, ...] in registration order.
    - required: number of slots registered before optional() was called.
    - optional_marked: whether optional() has been called.

    the registry must be fully populated before parsing; it is read-only
    while a Scanner walks it.
    """

    def __init__(self):
        self._options = []
        self._positionals = []
        self._required = 0
        self._optional_marked = False

    @property
    def options(self):
        return tuple(self._options)

    @property
    def positionals(self):
        return tuple(self._positionals)

    @property
    def required(self):
        return self._required

    @property
    def optional_marked(self):
        return self._optional_marked

    def option(self, short, long, descr, handler=Unset, /, *, takes_value=Unset):
        """
        register a named option.

        parameters
        - short: str | None, single character ('n' for -n) or None.
        - long: str, long name without dashes ('num' for --num) or "".
        - descr: str, help text; "" hides the option from the description table.
        - handler: callable, omitted to get a decorator instead.
        - takes_value: bool (keyword-only), overrides arity inspection of handler.
          by default a handler requiring no positional argument is a flag and one
          requiring exactly one argument takes a value.

        returns
        - the registry (chainable), or a decorator when handler is omitted.

        errors
        - TypeError for malformed names, missing names, or a handler whose arity
          is neither zero nor one.
        """
        if handler is Unset:
            def decorator(callback):
                self.option(short, long, descr, callback, takes_value=takes_value)
                return callback
            return decorator

        if takes_value is Unset:
            match arity(handler):
                case 0:
                    kind = HandlerKind.FLAG
                case 1:
                    kind = HandlerKind.VALUE
                case count:
                    raise TypeError("option handler must take zero or one argument, not %d" % count)
        else:
            kind = HandlerKind.VALUE if takes_value else HandlerKind.FLAG

        option = NamedOption(short, long, descr, handler, kind)

        for other in self._options:
            shadowed = []
            if option.short is not None and option.short == other.short:
                shadowed.append("-" + option.short)
            if option.long and option.long == other.long:
                shadowed.append("--" + option.long)
            if shadowed:
                warn(ShadowedOptionWarning(
                    "%s already registered, the earlier option takes precedence" % " and ".join(shadowed),
                    option=option,
                    shadowed=other,
                ))
                break

        self._options.append(option)
        logger.debug("registered %r", option)
        return self

    def positional(self, name, descr, handler=Unset, /):
        """
        register a positional slot.

        the slot is required unless optional() was called before. the last
        registered slot receives every remaining positional token.

        returns
        - the registry (chainable), or a decorator when handler is omitted.
        """
        if handler is Unset:
            def decorator(callback):
                self.positional(name, descr, callback)
                return callback
            return decorator

        slot = PositionalSlot(name, descr, handler, not self._optional_marked)
        self._positionals.append(slot)
        if slot.required:
            self._required += 1
        logger.debug("registered %r", slot)
        return self

    def optional(self):
        """
        make every positional slot registered from now on optional (idempotent).
        """
        self._optional_marked = True
        return self

    def __repr__(self):
        return "Registry(options=%d, positionals=%d, required=%d)" % (
            len(self._options), len(self._positionals), self._required
        )


__all__ = (
    "HandlerKind",
    "NamedOption",
    "PositionalSlot",
    "Registry",
)
