"""
Argscan utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the registry, the scanner and the renderers.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.
  • The scanner passes Unset as the payload of flag-only matches.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/"".

- arity(callable)
  • Count the positional arguments a handler requires; used once at registration
    time to decide whether a named option is a flag or takes a value.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> coalesce("", "fallback")
    ''
    >>> arity(lambda: None), arity(lambda value: None)
    (0, 1)
"""
import builtins
import functools
import inspect
from inspect import Parameter
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and "".
    - Printable: repr(Unset) -> "Unset" for friendly diagnostics.
    - Non-subclassable: this type is sealed; do not subclass.
    - Singleton per process: UnsetType() always yields the same instance.
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Falsey values like None, 0 or "" are preserved as-is; only Unset is replaced.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


def arity(callable, /):
    """
    count the positional arguments a handler cannot be called without.

    rules
    - positional-only and positional-or-keyword parameters without a default count.
    - *args, keyword-only parameters with defaults and **kwargs do not count.
    - a required keyword-only parameter makes the handler unusable (TypeError).

    errors
    - TypeError when callable is not callable, its signature cannot be inspected,
      or it requires keyword-only arguments.
    """
    if not builtins.callable(callable):
        raise TypeError("arity() argument must be callable")
    try:
        signature = inspect.signature(callable)
    except (TypeError, ValueError):
        raise TypeError("unable to inspect the signature of %r, pass takes_value explicitly" % (callable,)) from None

    count = 0
    for parameter in signature.parameters.values():
        match parameter.kind:
            case Parameter.POSITIONAL_ONLY | Parameter.POSITIONAL_OR_KEYWORD:
                if parameter.default is Parameter.empty:
                    count += 1
            case Parameter.KEYWORD_ONLY:
                if parameter.default is Parameter.empty:
                    raise TypeError("handler %r requires keyword-only argument %r" % (callable, parameter.name))
    return count


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Notes
- Singleton: there is only one Unset instance.
- Distinct from None: equality and identity checks must not treat it as None.
- Typical pattern: value = coalesce(user_value, default).
"""


__all__ = (
    # Functions
    "coalesce",
    "arity",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
