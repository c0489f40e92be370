# python
"""
Option declaration tests.

Scope
- Validate builder → kind mapping and the flags/counters-never-required rule.
- Validate name/description/required shape checks.
- Validate slot type checks against the option kind.
- Validate introspection helpers (names, parametric, label, repr).

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from types import SimpleNamespace
from unittest import TestCase

from tether import (
    Cell,
    OptionKind,
    OptionSpec,
    bind,
    counter,
    existing,
    flag,
    floating,
    integer,
    path,
    string,
)


class TestOptionKind(TestCase):

    def testParametric(self):
        self.assertFalse(OptionKind.FLAG.parametric)
        self.assertFalse(OptionKind.FLAGCOUNT.parametric)
        for kind in (OptionKind.INT, OptionKind.FLOAT, OptionKind.STRING, OptionKind.PATH, OptionKind.PATHEXISTING):
            with self.subTest(kind=kind):
                self.assertTrue(kind.parametric)

    def testLabels(self):
        self.assertEqual(
            [kind.label for kind in OptionKind],
            ["flag", "flag", "integer", "float", "string", "path", "path"],
        )

    def testBoolOnlyAdmittedByFlag(self):
        self.assertTrue(OptionKind.FLAG.admits(False))
        self.assertFalse(OptionKind.FLAGCOUNT.admits(True))
        self.assertFalse(OptionKind.INT.admits(True))
        self.assertFalse(OptionKind.FLOAT.admits(True))


class TestBuilders(TestCase):

    def testBuilderKinds(self):
        built = {
            OptionKind.FLAG: flag("a", "alpha", "a", Cell(False)),
            OptionKind.FLAGCOUNT: counter("b", "beta", "b", Cell(0)),
            OptionKind.INT: integer("c", "gamma", "c", False, Cell(0)),
            OptionKind.FLOAT: floating("d", "delta", "d", False, Cell(0.0)),
            OptionKind.STRING: string("e", "epsilon", "e", False, Cell()),
            OptionKind.PATH: path("f", "zeta", "f", False, Cell()),
            OptionKind.PATHEXISTING: existing("g", "eta", "g", True, Cell()),
        }
        for kind, option in built.items():
            with self.subTest(kind=kind):
                self.assertIs(option.kind, kind)
                self.assertFalse(option.isset)

    def testFlagsAreNeverRequired(self):
        self.assertFalse(flag("a", "alpha", "a", Cell(False)).required)
        self.assertFalse(counter("b", "beta", "b", Cell(0)).required)

    def testRequiredMarker(self):
        self.assertTrue(string("s", "string", "s", True, Cell()).required)

    def testBoundTargetFromObject(self):
        settings = SimpleNamespace(threads=4)
        option = integer("t", "threads", "threads", False, bind(settings, "threads"))
        self.assertEqual(option.value, 4)

    def testUnwrappedStorageRejected(self):
        with self.assertRaises(TypeError):
            integer("t", "threads", "threads", False, 4)


class TestValidation(TestCase):

    def testShortNameMustBeOneCharacter(self):
        for short in ("", "ab", "-", " "):
            with self.subTest(short=short):
                with self.assertRaises(ValueError):
                    flag(short, "long", "descr", Cell(False))

    def testShortNameMustBeString(self):
        with self.assertRaises(TypeError):
            flag(1, "long", "descr", Cell(False))

    def testLongNameShape(self):
        for long in ("", "-long", "--long", "two words"):
            with self.subTest(long=long):
                with self.assertRaises(ValueError):
                    flag("x", long, "descr", Cell(False))

    def testDescriptionMustBeString(self):
        with self.assertRaises(TypeError):
            flag("x", "long", None, Cell(False))

    def testRequiredMustBeBool(self):
        with self.assertRaises(TypeError):
            string("x", "long", "descr", 1, Cell())

    def testSlotTypeMismatches(self):
        cases = (
            (flag, ("x", "long", "descr", Cell(0))),
            (flag, ("x", "long", "descr", Cell())),
            (counter, ("x", "long", "descr", Cell("0"))),
            (counter, ("x", "long", "descr", Cell(False))),
            (integer, ("x", "long", "descr", False, Cell(1.5))),
            (floating, ("x", "long", "descr", False, Cell("0.5"))),
            (string, ("x", "long", "descr", False, Cell(3))),
            (path, ("x", "long", "descr", False, Cell(b"bytes"))),
        )
        for builder, arguments in cases:
            with self.subTest(builder=builder.__name__, value=arguments[-1].value):
                with self.assertRaises(TypeError):
                    builder(*arguments)

    def testFloatAcceptsIntegerSlot(self):
        self.assertIs(floating("x", "long", "descr", False, Cell(0)).kind, OptionKind.FLOAT)

    def testDirectConstructionRejectsUnknownKind(self):
        with self.assertRaises(TypeError):
            OptionSpec("flag", "x", "long", "descr", False, Cell(False))


class TestIntrospection(TestCase):

    def testNames(self):
        self.assertEqual(string("i", "input-file", "input", False, Cell()).names, "-i/--input-file")

    def testParametricFollowsKind(self):
        self.assertTrue(string("i", "input-file", "input", False, Cell()).parametric)
        self.assertFalse(flag("D", "debug", "debug", Cell(False)).parametric)

    def testRepr(self):
        text = repr(counter("v", "verbose", "verbosity", Cell(0)))
        self.assertTrue(text.startswith("option("))
        self.assertIn("short='v'", text)
        self.assertIn("long='verbose'", text)
        self.assertIn("isset=False", text)


if __name__ == "__main__":
    unittest.main()
