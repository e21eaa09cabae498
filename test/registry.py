"""
Registry behavioral tests (registration, handler kinds, positional split).

Scope
- Validate NamedOption/PositionalSlot construction, validation and immutability.
- Validate handler kind detection by arity and the explicit takes_value override.
- Validate chaining and decorator forms of option()/positional().
- Validate the required/optional positional split and the optional() marker.
- Validate the shadowed-name warning (registration still succeeds).

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
import warnings
from unittest import TestCase

from argscan import (
    Registry,
    NamedOption,
    PositionalSlot,
    HandlerKind,
    ShadowedOptionWarning,
    FaultCode,
)
from argscan.utils import arity


class TestArity(TestCase):

    def testCountsRequiredPositionals(self):
        self.assertEqual(arity(lambda: None), 0)
        self.assertEqual(arity(lambda value: None), 1)
        self.assertEqual(arity(lambda value, /: None), 1)
        self.assertEqual(arity(lambda a, b: None), 2)

    def testDefaultsAndVariadicsDoNotCount(self):
        self.assertEqual(arity(lambda value=None: None), 0)
        self.assertEqual(arity(lambda *values, **options: None), 0)
        self.assertEqual(arity(lambda value, *, strict=False: None), 1)

    def testBoundMethods(self):
        self.assertEqual(arity([].append), 1)
        self.assertEqual(arity([].clear), 0)

    def testRequiredKeywordOnlyRejected(self):
        with self.assertRaises(TypeError):
            arity(lambda *, value: None)

    def testNotCallableRejected(self):
        with self.assertRaises(TypeError):
            arity("nope")


class TestNamedOption(TestCase):

    def testFields(self):
        handler = lambda: None
        option = NamedOption("v", "verbose", "talk more", handler, HandlerKind.FLAG)
        self.assertEqual(option.short, "v")
        self.assertEqual(option.long, "verbose")
        self.assertEqual(option.descr, "talk more")
        self.assertIs(option.handler, handler)
        self.assertIs(option.kind, HandlerKind.FLAG)
        self.assertFalse(option.takes_value)
        self.assertEqual(option.labels, ("-v", "--verbose"))

    def testLabelsWithSingleForm(self):
        self.assertEqual(NamedOption(None, "num", "", print, HandlerKind.VALUE).labels, ("--num",))
        self.assertEqual(NamedOption("n", "", "", print, HandlerKind.VALUE).labels, ("-n",))

    def testNameRequired(self):
        with self.assertRaises(TypeError):
            NamedOption(None, "", "nameless", print, HandlerKind.FLAG)

    def testShortMustBeSingleCharacter(self):
        with self.assertRaises(TypeError):
            NamedOption("vv", "", "", print, HandlerKind.FLAG)
        with self.assertRaises(TypeError):
            NamedOption("", "verbose", "", print, HandlerKind.FLAG)
        with self.assertRaises(ValueError):
            NamedOption("-", "", "", print, HandlerKind.FLAG)

    def testHandlerMustBeCallable(self):
        with self.assertRaises(TypeError):
            NamedOption("v", "", "", "print", HandlerKind.FLAG)

    def testImmutable(self):
        option = NamedOption("v", "verbose", "", print, HandlerKind.FLAG)
        with self.assertRaises(AttributeError):
            option.short = "x"
        with self.assertRaises(AttributeError):
            getattr(option, "-short")
        with self.assertRaises(AttributeError):
            setattr(option, "-short", "x")

    def testInvokeByKind(self):
        received = []
        NamedOption("v", "", "", lambda: received.append("flag"), HandlerKind.FLAG).invoke()
        NamedOption("n", "", "", received.append, HandlerKind.VALUE).invoke("5")
        self.assertEqual(received, ["flag", "5"])

    def testValueOptionWithoutValueRejected(self):
        with self.assertRaises(TypeError):
            NamedOption("n", "", "", print, HandlerKind.VALUE).invoke()


class TestPositionalSlot(TestCase):

    def testFields(self):
        slot = PositionalSlot("FILE", "input file", print, True)
        self.assertEqual(slot.name, "FILE")
        self.assertEqual(slot.descr, "input file")
        self.assertTrue(slot.required)

    def testNameMustBeNonEmpty(self):
        with self.assertRaises(ValueError):
            PositionalSlot("", "", print, True)
        with self.assertRaises(TypeError):
            PositionalSlot(None, "", print, True)


class TestRegistry(TestCase):

    def testChainingReturnsRegistry(self):
        registry = Registry()
        self.assertIs(registry.option("v", "", "", lambda: None), registry)
        self.assertIs(registry.positional("FILE", "", print), registry)
        self.assertIs(registry.optional(), registry)

    def testKindFromArity(self):
        registry = Registry().option("v", "", "", lambda: None).option("n", "", "", lambda value: None)
        self.assertEqual([option.kind for option in registry.options], [HandlerKind.FLAG, HandlerKind.VALUE])

    def testExplicitTakesValue(self):
        registry = Registry().option("n", "", "", lambda *values: None, takes_value=True)
        self.assertTrue(registry.options[0].takes_value)

    def testTooManyArgumentsRejected(self):
        with self.assertRaises(TypeError):
            Registry().option("p", "point", "", lambda x, y: None)

    def testRegistrationOrderPreserved(self):
        registry = (
            Registry()
            .option("b", "", "", lambda: None)
            .option("a", "", "", lambda: None)
            .option(None, "c", "", lambda: None)
        )
        self.assertEqual([option.labels[0] for option in registry.options], ["-b", "-a", "--c"])

    def testOptionDecorator(self):
        registry = Registry()

        @registry.option("n", "num", "a number")
        def number(value):
            return value

        self.assertEqual(number("5"), "5")
        self.assertIs(registry.options[0].handler, number)
        self.assertTrue(registry.options[0].takes_value)

    def testPositionalDecorator(self):
        registry = Registry()

        @registry.positional("FILE", "input")
        def file(value):
            pass

        self.assertIs(registry.positionals[0].handler, file)
        self.assertEqual(registry.required, 1)

    def testRequiredCountStopsAtMarker(self):
        registry = (
            Registry()
            .positional("A", "", print)
            .positional("B", "", print)
            .optional()
            .positional("C", "", print)
            .positional("D", "", print)
        )
        self.assertEqual(registry.required, 2)
        self.assertTrue(registry.optional_marked)
        self.assertEqual([slot.required for slot in registry.positionals], [True, True, False, False])

    def testOptionalMarkerIdempotent(self):
        registry = Registry().positional("A", "", print).optional().optional().positional("B", "", print)
        self.assertEqual(registry.required, 1)

    def testMarkerWithoutPositionals(self):
        registry = Registry().optional()
        self.assertEqual(registry.required, 0)
        self.assertEqual(registry.positionals, ())

    def testViewsAreSnapshots(self):
        registry = Registry()
        options = registry.options
        registry.option("v", "", "", lambda: None)
        self.assertEqual(options, ())
        self.assertEqual(len(registry.options), 1)

    def testShadowedNameWarns(self):
        registry = Registry().option("v", "verbose", "", lambda: None)
        with self.assertWarns(ShadowedOptionWarning) as context:
            registry.option(None, "verbose", "", lambda: None)
        self.assertIn("--verbose", context.warning.message)
        self.assertIs(context.warning.code, FaultCode.SHADOWED_OPTION)
        self.assertEqual(len(registry.options), 2)

    def testDistinctNamesDoNotWarn(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            Registry().option("v", "verbose", "", lambda: None).option("V", "version", "", lambda: None)


if __name__ == "__main__":
    unittest.main()
