"""
Tests for the internal helpers (Unset sentinel, coalesce, mirror, strip).
"""
import unittest
from unittest import TestCase

from signpost.utils import *


class UnsetTest(TestCase):

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalsy(self):
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)

    def testRepr(self):
        self.assertEqual(repr(Unset), "Unset")

    def testFinal(self):
        with self.assertRaises(TypeError):
            class Subclass(UnsetType):  # NOQA: F-841
                pass


class CoalesceTest(TestCase):

    def testUnsetUsesDefault(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")

    def testFalseyValuesArePreserved(self):
        for value in (None, 0, "", []):
            with self.subTest(value=value):
                self.assertIs(coalesce(value, "fallback"), value)


class MirrorTest(TestCase):

    def testReturnsCopies(self):
        class Holder:
            items = mirror("items")

            def __init__(self):
                self._items = [1, [2, 3]]

        holder = Holder()
        holder.items[1].append(4)
        self.assertEqual(holder.items, [1, [2, 3]])

    def testPassesNonSequencesThrough(self):
        stream = object()

        class Holder:
            output = mirror("output")
            name = mirror("name")

            def __init__(self):
                self._output = stream
                self._name = "signpost"

        holder = Holder()
        self.assertIs(holder.output, stream)
        self.assertEqual(holder.name, "signpost")

    def testReadOnly(self):
        class Holder:
            value = mirror("value")
            _value = "x"

        with self.assertRaises(AttributeError):
            Holder().value = "y"

    def testRejectsNonString(self):
        with self.assertRaises(TypeError):
            mirror(1)


class StripTest(TestCase):

    def testRemovesNewlinesWithoutSpacing(self):
        self.assertEqual(strip("short\n help"), "short help")
        self.assertEqual(strip("a\nb\n"), "ab")

    def testKeepsOtherWhitespace(self):
        self.assertEqual(strip("\ta  b\r"), "\ta  b\r")

    def testRejectsNonString(self):
        with self.assertRaises(TypeError):
            strip(None)


if __name__ == "__main__":
    unittest.main()
