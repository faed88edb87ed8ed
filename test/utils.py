"""
Tests for the internal helpers.

This module verifies:
- The Unset sentinel: singleton identity, falsy semantics, finality.
- coalesce(): only Unset is replaced.
- mirror(): read-only, immutable views over private backing fields.
- normalize() and binname(): canonical names and program display names.
- Package sources: compile cleanly and ship their type stubs.
"""
import copy
import unittest
import warnings
from importlib import resources
from unittest import TestCase

from posixargs.utils import Unset, UnsetType, coalesce, rename, mirror, normalize, binname


class TestUnset(TestCase):
    """
    Test suite for the Unset sentinel.
    """

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)
        self.assertIs(copy.copy(Unset), Unset)

    def testFalsy(self):
        self.assertFalse(Unset)
        self.assertNotEqual(Unset, None)
        self.assertEqual(repr(Unset), "Unset")

    def testFinal(self):
        with self.assertRaises(TypeError):
            type("Derived", (UnsetType,), {})

    def testUnionSupport(self):
        self.assertTrue(isinstance("x", str | Unset))
        self.assertTrue(isinstance(Unset, str | Unset))


class TestHelpers(TestCase):
    """
    Test suite for coalesce, rename and mirror.
    """

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertEqual(coalesce(0, "fallback"), 0)
        self.assertIsNone(coalesce(None, "fallback"))

    def testRename(self):
        @rename("renamed")
        def function():
            pass

        self.assertEqual(function.__name__, "renamed")
        with self.assertRaises(TypeError):
            rename(1, "name")

    def testMirrorFreezesContainers(self):
        class Holder:
            items = mirror("items")
            table = mirror("table")

            def __init__(self):
                self._items = ["a"]
                self._table = {"k": 1}

        holder = Holder()
        self.assertEqual(holder.items, ("a",))
        with self.assertRaises(TypeError):
            holder.table["k"] = 2
        with self.assertRaises(AttributeError):
            holder.items = ()


class TestNames(TestCase):
    """
    Test suite for normalize and binname.
    """

    def testNormalize(self):
        self.assertEqual(normalize("--_Dry_Run_"), "--dry-run")
        self.assertEqual(normalize("Remove"), "remove")
        self.assertEqual(normalize("-V", fold=False), "-V")
        self.assertEqual(normalize("move_"), "move")

    def testBinname(self):
        self.assertEqual(binname("/usr/bin/git"), "git")
        self.assertEqual(binname("git"), "git")
        self.assertEqual(binname("git add"), "git add")
        self.assertEqual(binname(""), "<program>")
        self.assertEqual(binname(), "<program>")


class TestPackage(TestCase):
    """
    Test suite for the shipped package files.
    """

    def testSourcesCompileWithoutWarnings(self):
        for source in resources.files("posixargs").iterdir():
            if source.name.endswith(".py"):
                with self.subTest(module=source.name), warnings.catch_warnings():
                    warnings.simplefilter("error")
                    compile(source.read_text(encoding="utf-8"), source.name, "exec")

    def testPublicModulesHaveStubs(self):
        package = resources.files("posixargs")
        for name in ("__init__", "arguments", "specification", "distributor", "commands"):
            with self.subTest(module=name):
                self.assertTrue(package.joinpath(name + ".pyi").is_file())


if __name__ == "__main__":
    unittest.main()
