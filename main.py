import re

from rich import print

from argscan import *

registry = Registry()


def number(text):
    print("-n: %s" % text)
    # leading integer, like scanf's %ld
    if not re.match(r"\s*[+-]?\d", text):
        raise ParseError("invalid number")


(
    registry
    .option("h", "help", "print this useless message", helper(registry))
    .option("n", "", "a number", number)
    .option(None, "num", "another number\nthis line is supposed to explain what it does",
            lambda text: print("--num: %s" % text))
    .option("v", "", "print more useless messages than usual", lambda: print("-v set"))
    .option(None, "undocumented", "", lambda: print("--undocumented set"))
    .positional("First-arg", "required argument", lambda text: print("First argument: %s" % text))
    .positional("Second-arg", "mandatory argument", lambda text: print("Second argument: %s" % text))
    .optional()
    .positional("Next-args", "optional arguments", lambda text: print("Next argument: %s" % text))
)


if __name__ == '__main__':
    invoke(registry, shell=True)
