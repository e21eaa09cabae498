"""
Argscan help rendering: usage line and description table.

Both renderers only read the registry; they never parse anything.

- usage(registry)
  • " [options...]" when any named option exists, then every positional slot:
    required ones bare, optional ones opened with '[' and all closed at the end.
        " [options...] FIRST SECOND [NEXT [MORE]]"
  • the "Usage: PROG" prefix is left to the caller (see helper()).

- describe(registry)
  • one line per documented named option, then a blank line, then one line per
    documented positional slot. the blank line only appears when both blocks
    have entries. undocumented entries (empty descr) are skipped.
  • multi-line descriptions are re-indented under the description column.
        " -h --help  print this message"
        "    --num   another number"
        "            second line of the description"
        ""
        "  FIRST  required argument"

- helper(registry, prog)
  • a ready-made flag handler printing both through rich and exiting with 0.
"""
import os.path
import sys
from collections import defaultdict

from rich.console import Console
from rich.text import Text

from .registry import Registry
from .utils import Unset, coalesce

console = Console()


def _indented(text, indent):
    # continuation lines line up under the first one
    return text.replace("\n", "\n" + " " * indent)


def usage(registry, /):
    """
    render the usage suffix of a registry (no "Usage: PROG" prefix).
    """
    if not isinstance(registry, Registry):
        raise TypeError("usage() argument must be a registry")
    slots = registry.positionals
    required = registry.required

    parts = []
    if registry.options:
        parts.append(" [options...]")
    for slot in slots[:required]:
        parts.append(" " + slot.name)
    for slot in slots[required:]:
        parts.append(" [" + slot.name)
    parts.append("]" * (len(slots) - required))
    return "".join(parts)


def describe(registry, /):
    """
    render the description table of every documented option and positional slot.
    """
    if not isinstance(registry, Registry):
        raise TypeError("describe() argument must be a registry")
    lines = []

    options = [option for option in registry.options if option.descr]
    width = max((len(option.long) for option in options), default=0)
    for option in options:
        head = (" -" + option.short if option.short is not None else "   ")
        head += (" --" if option.long else "   ") + option.long.ljust(width) + "  "
        lines.append(head + _indented(option.descr, len(head)) + "\n")

    slots = [slot for slot in registry.positionals if slot.descr]
    width = max((len(slot.name) for slot in slots), default=0)
    if options and slots:
        lines.append("\n")
    for slot in slots:
        head = "  " + slot.name.ljust(width) + "  "
        lines.append(head + _indented(slot.descr, len(head)) + "\n")

    return "".join(lines)


def helper(registry, prog=Unset, /, *, stream=Unset, colorful=True):
    """
    build a flag handler that prints the usage line and the description table.

    parameters
    - registry: Registry, read when the handler runs (so it may be registered
      on the same registry it describes).
    - prog: str, program name; defaults to __prog__ in __main__, then to the
      basename of sys.argv[0].
    - stream: rich Console (keyword-only), defaults to stdout.
    - colorful: bool (keyword-only), style the program name.

    the returned handler raises SystemExit(0) after printing; the scanner does
    not intercept it.
    """
    if not isinstance(registry, Registry):
        raise TypeError("helper() argument must be a registry")

    def help():
        main = __import__("__main__")
        styles = defaultdict(str, {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "usage": "bold #00E5FF",  # neon cyan usage label
        } | getattr(main, "__styles__", {}))

        name = coalesce(prog, getattr(main, "__prog__", os.path.basename(sys.argv[0])))
        target = coalesce(stream, console)
        target.print(Text.assemble(
            ("Usage: ", styles["usage"] if colorful else ""),
            (name, styles["prog-name"] if colorful else ""),
            usage(registry),
        ))
        target.print(Text(describe(registry)))
        sys.exit(0)

    return help


__all__ = (
    "usage",
    "describe",
    "helper",
)
