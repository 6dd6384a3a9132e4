"""
Tests for the shared helpers.

This module verifies:
- The Unset sentinel: singleton identity, falsy semantics, representation,
  copying and pickling, PEP 604 unions and finality.
- coalesce(), rename() and mirror().
- ordinal() wording used by position-first fault messages.
"""
import copy
import pickle
import unittest
from unittest import TestCase

from argosy.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `Unset` sentinel.
    """

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)
        self.assertIs(UnsetType(), UnsetType())

    def testFalsyButDistinct(self):
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)
        self.assertNotEqual(Unset, 0)

    def testRepr(self):
        self.assertEqual(repr(Unset), "Unset")

    def testCopyAndPickleKeepIdentity(self):
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testUnionInIsinstance(self):
        self.assertTrue(isinstance(Unset, str | Unset))
        self.assertTrue(isinstance("x", Unset | str))
        self.assertFalse(isinstance(1, str | Unset))

    def testFinal(self):
        with self.assertRaises(TypeError):
            class Derived(UnsetType):  # NOQA: F-811
                pass


class HelpersTest(TestCase):
    """
    Test suite for coalesce(), rename(), mirror() and ordinal().
    """

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)

    def testRename(self):
        @rename("renamed")
        def function():
            pass

        self.assertEqual(function.__name__, "renamed")
        self.assertEqual(function.__qualname__, "renamed")

    def testRenameRejectsBadArguments(self):
        with self.assertRaises(TypeError):
            rename(1)
        with self.assertRaises(TypeError):
            rename("name")(1)

    def testMirror(self):
        class Holder:
            value = mirror("value")

            def __init__(self):
                self._value = 42

        holder = Holder()
        self.assertEqual(holder.value, 42)
        with self.assertRaises(AttributeError):
            holder.value = 0
        with self.assertRaises(TypeError):
            mirror(1)

    def testOrdinalWords(self):
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(3), "third")
        self.assertEqual(ordinal(10), "tenth")

    def testOrdinalSuffixes(self):
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(12), "12th")
        self.assertEqual(ordinal(21), "21st")
        self.assertEqual(ordinal(22), "22nd")
        self.assertEqual(ordinal(23), "23rd")
        self.assertEqual(ordinal(111), "111th")
        self.assertEqual(ordinal(104), "104th")


if __name__ == '__main__':
    unittest.main()
