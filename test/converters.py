"""
Converters and descriptors behavioral tests.

Scope
- Validate describe() over Python annotations and descriptors.
- Validate DefaultConverter dispatch per descriptor and per kind.
- Validate the ValueConverter protocol check.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argosy import (
    ArrayOf,
    DefaultConverter,
    Kind,
    ListOf,
    Scalar,
    Unset,
    Unspecified,
    ValueConverter,
    describe,
    is_boolean_literal,
)


class TestDescribe(TestCase):
    """Behavioral tests for describe()."""

    def testScalars(self):
        self.assertEqual(describe(str), Scalar(Kind.STRING))
        self.assertEqual(describe(bool), Scalar(Kind.BOOLEAN))
        self.assertEqual(describe(int), Scalar(Kind.INTEGER))
        self.assertEqual(describe(float), Scalar(Kind.FLOAT))
        self.assertEqual(describe(Kind.FLOAT), Scalar(Kind.FLOAT))

    def testUnspecified(self):
        self.assertEqual(describe(None), Unspecified())
        self.assertEqual(describe(Unset), Unspecified())

    def testCollections(self):
        self.assertEqual(describe(list), ListOf())
        self.assertEqual(describe(list[int]), ListOf(Kind.INTEGER))
        self.assertEqual(describe(tuple[str, ...]), ArrayOf(Kind.STRING))

    def testDescriptorPassthrough(self):
        descriptor = ArrayOf(Kind.BOOLEAN)
        self.assertIs(describe(descriptor), descriptor)

    def testRejected(self):
        for annotation in (dict, tuple[int, str], dict[str, int], list[dict], "int"):
            with self.subTest(annotation=annotation), self.assertRaises(TypeError):
                describe(annotation)

    def testReadableNames(self):
        self.assertEqual(str(Scalar(Kind.INTEGER)), "integer")
        self.assertEqual(str(ArrayOf(Kind.FLOAT)), "array of float")
        self.assertEqual(str(ListOf()), "list of values")
        self.assertEqual(str(Unspecified()), "value")


class TestDefaultConverter(TestCase):
    """Behavioral tests for DefaultConverter."""

    def setUp(self):
        self.converter = DefaultConverter()

    def testImplementsProtocol(self):
        self.assertIsInstance(self.converter, ValueConverter)

    def testUnspecified(self):
        self.assertEqual(self.converter.convert(("a",), Unspecified()), "a")
        self.assertEqual(self.converter.convert(("a", "b"), Unspecified()), ["a", "b"])

    def testScalarJoinsTokens(self):
        self.assertEqual(self.converter.convert(("a", "b"), Scalar(Kind.STRING)), "a,b")
        with self.assertRaises(ValueError):
            self.converter.convert(("1", "2"), Scalar(Kind.INTEGER))

    def testBooleans(self):
        self.assertIs(self.converter.convert(("TRUE",), Scalar(Kind.BOOLEAN)), True)
        self.assertIs(self.converter.convert(("false",), Scalar(Kind.BOOLEAN)), False)
        with self.assertRaises(ValueError):
            self.converter.convert(("yes",), Scalar(Kind.BOOLEAN))

    def testIntegers(self):
        kind = Scalar(Kind.INTEGER)
        self.assertEqual(self.converter.convert(("-3",), kind), -3)
        self.assertEqual(self.converter.convert(("010",), kind), 10)
        self.assertEqual(self.converter.convert(("0x1f",), kind), 31)
        with self.assertRaises(ValueError):
            self.converter.convert(("1.5",), kind)

    def testFloats(self):
        self.assertEqual(self.converter.convert(("1e3",), Scalar(Kind.FLOAT)), 1000.0)
        with self.assertRaises(ValueError):
            self.converter.convert(("one",), Scalar(Kind.FLOAT))

    def testArrayAndList(self):
        self.assertEqual(self.converter.convert(("1", "2"), ArrayOf(Kind.INTEGER)), (1, 2))
        self.assertEqual(self.converter.convert(("1", "2"), ListOf(Kind.FLOAT)), [1.0, 2.0])
        self.assertEqual(self.converter.convert(("x", "y"), ListOf()), ["x", "y"])

    def testEmptyTokensRejected(self):
        with self.assertRaises(ValueError):
            self.converter.convert((), Unspecified())

    def testUnknownTargetRejected(self):
        with self.assertRaises(TypeError):
            self.converter.convert(("a",), int)

    def testBooleanLiterals(self):
        self.assertTrue(is_boolean_literal("True"))
        self.assertTrue(is_boolean_literal("false"))
        self.assertFalse(is_boolean_literal("1"))
        self.assertFalse(is_boolean_literal(None))


if __name__ == "__main__":
    unittest.main()
