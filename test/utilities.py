"""
Tests for the internal utilities.

This module verifies:
- Unset: singleton identity, falsy semantics, representation, finality.
- coalesce(): only the sentinel is replaced.
- rename(): function and decorator forms.
- immortalize()/mirror(): copies never alias the source.
- ordinal(): word and numeric forms.

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from argot.utils import Unset, UnsetType, coalesce, immortalize, mirror, ordinal, rename


class UnsetTest(TestCase):
    """Test suite for the Unset sentinel."""

    def testSingleton(self):
        self.assertIs(Unset, UnsetType())

    def testFalsy(self):
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)

    def testRepr(self):
        self.assertEqual(repr(Unset), "Unset")

    def testFinal(self):
        with self.assertRaises(TypeError):
            class Derived(UnsetType):
                pass

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)


class HelpersTest(TestCase):
    """Test suite for rename, immortalize, mirror and ordinal."""

    def testRenameFunctionForm(self):
        def f():
            pass
        self.assertIs(rename(f, "g"), f)
        self.assertEqual((f.__name__, f.__qualname__), ("g", "g"))

    def testRenameDecoratorForm(self):
        @rename("h")
        def f():
            pass
        self.assertEqual(f.__name__, "h")

    def testRenameArity(self):
        with self.assertRaises(TypeError):
            rename()

    def testImmortalizeCopiesNestedContainers(self):
        source = {"a": [1, [2]], "b": {3}}
        copied = immortalize(source)
        self.assertEqual(copied, source)
        copied["a"][1].append(4)
        self.assertEqual(source["a"][1], [2])

    def testImmortalizeKeepsStrings(self):
        self.assertEqual(immortalize("abc"), "abc")

    def testMirror(self):
        class Holder:
            items = mirror("items")

            def __init__(self):
                self._items = [1, 2]

        holder = Holder()
        holder.items.append(3)
        self.assertEqual(holder.items, [1, 2])

    def testOrdinal(self):
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(10), "tenth")
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(21), "21st")
        self.assertEqual(ordinal(112), "112th")
        self.assertEqual(ordinal(23), "23rd")


if __name__ == "__main__":
    unittest.main()
