# python
"""
Arguments module behavioral tests (slot construction and metadata sanitizing).

Scope
- Validate named slots (Flag, Option, Help, Version): names normalization, order,
  short/long rules, derived fields and display strings.
- Validate positional slots (Cardinal, Subcommand): arity vocabulary, usage strings,
  command tables and lookups.
- Validate shared metadata: descr, conflicts and field rules.

Conventions
- Test method names follow CamelCase per project convention.
- Never pass explicit None for any parameter; omit instead.
"""
import unittest
from unittest import TestCase

from posixargs import Flag, Option, Help, Version, Cardinal, Subcommand, Command, SpecificationError


class TestNamed(TestCase):
    """Behavioral tests for option slots."""

    def testNamesKeepDeclarationOrder(self):
        f = Flag("-x", "-y", "-z", "--ccc")
        self.assertEqual(f.names, ("-x", "-y", "-z", "--ccc"))
        self.assertEqual(f.shorts, ("-x", "-y", "-z"))
        self.assertEqual(f.longs, ("--ccc",))

    def testLongNamesAreNormalized(self):
        f = Flag("-n", "--No_Checkout_")
        self.assertEqual(f.longs, ("--no-checkout",))
        self.assertEqual(f.field, "no_checkout")

    def testShortNamesKeepCase(self):
        f = Flag("-V")
        self.assertEqual(f.names, ("-V",))
        self.assertEqual(f.field, "V")

    def testShortNameMustBeSingleCharacter(self):
        with self.assertRaises(SpecificationError):
            Flag("-ab")

    def testShortNameMustBeAlphanumeric(self):
        with self.assertRaises(SpecificationError):
            Flag("-=")

    def testLongNameTooShortOnceNormalized(self):
        with self.assertRaises(SpecificationError):
            Flag("--_a_")

    def testNameWithoutDashRejected(self):
        with self.assertRaises(SpecificationError):
            Flag("verbose")

    def testAtLeastOneNameRequired(self):
        with self.assertRaises(TypeError):
            Flag()

    def testNonStringNameRejected(self):
        with self.assertRaises(TypeError):
            Flag(1)

    def testPrimaryNamePrefersLongName(self):
        self.assertEqual(Flag("-v", "--verbose").name, "--verbose")
        self.assertEqual(Flag("-v").name, "-v")

    def testFieldDerivedFromFirstLongName(self):
        o = Option("-l", "--log-level", "--level")
        self.assertEqual(o.field, "log_level")

    def testExplicitField(self):
        o = Option("-l", field="level")
        self.assertEqual(o.field, "level")

    def testOptionUsageAppendsMetavar(self):
        self.assertEqual(Option("-e", "--eee").usage, "-e, --eee <value>")
        self.assertEqual(Option("--log", metavar="level").usage, "--log <level>")

    def testOptionTypeMustBeCallable(self):
        with self.assertRaises(TypeError):
            Option("--count", type=3)

    def testOptionEmptyMetavarRejected(self):
        with self.assertRaises(ValueError):
            Option("--count", metavar="  ")

    def testTakesValue(self):
        self.assertTrue(Option("--out").takes_value)
        self.assertFalse(Flag("--force").takes_value)
        self.assertFalse(Help("--help").takes_value)

    def testSpecialOptionsProduceNoField(self):
        self.assertIsNone(Help("-h", "--help").field)
        self.assertIsNone(Version("--version").field)
        self.assertEqual(Help("--help").conflicts, ())
        self.assertFalse(Version("--version").variadic)

    def testSpecialOptionsRejectValueKeywords(self):
        with self.assertRaises(TypeError):
            Help("--help", variadic=True)
        with self.assertRaises(TypeError):
            Version("--version", conflicts="!")

    def testReprMentionsTypename(self):
        self.assertTrue(repr(Flag("--force")).startswith("flag("))


class TestMetadata(TestCase):
    """Shared metadata rules."""

    def testDescrIsTrimmed(self):
        self.assertEqual(Flag("--force", descr="  overwrite  ").descr, "overwrite")

    def testDescrDefaultsToNone(self):
        self.assertIsNone(Flag("--force").descr)

    def testEmptyDescrRejected(self):
        with self.assertRaises(ValueError):
            Flag("--force", descr=" ")

    def testSingleConflictTag(self):
        self.assertEqual(Flag("--force", conflicts="!").conflicts, ("!",))

    def testConflictTagsIterable(self):
        self.assertEqual(Flag("--force", conflicts=("!", "?mode")).conflicts, ("!", "?mode"))

    def testConflictTagMustHaveKind(self):
        with self.assertRaises(SpecificationError):
            Flag("--force", conflicts="mode")

    def testConflictTagDuplicatesRejected(self):
        with self.assertRaises(SpecificationError):
            Flag("--force", conflicts=("!a", "!a"))

    def testConflictsMustBeStrings(self):
        with self.assertRaises(TypeError):
            Flag("--force", conflicts=(1,))

    def testEmptyFieldRejected(self):
        with self.assertRaises(ValueError):
            Flag("--force", field=" ")


class TestCardinal(TestCase):
    """Behavioral tests for positional slots."""

    def testUsageFollowsArity(self):
        self.assertEqual(Cardinal("aaa").usage, "<aaa>")
        self.assertEqual(Cardinal("aaa", nargs="?").usage, "[<aaa>]")
        self.assertEqual(Cardinal("aaa", nargs="+").usage, "<aaa>...")
        self.assertEqual(Cardinal("aaa", nargs="*").usage, "[<aaa>...]")

    def testRequiredAndVariadic(self):
        self.assertTrue(Cardinal("a").required)
        self.assertFalse(Cardinal("a").variadic)
        self.assertTrue(Cardinal("a", nargs="+").required)
        self.assertTrue(Cardinal("a", nargs="+").variadic)
        self.assertFalse(Cardinal("a", nargs="?").required)
        self.assertFalse(Cardinal("a", nargs="*").required)

    def testInvalidArityRejected(self):
        with self.assertRaises(ValueError):
            Cardinal("a", nargs="2")
        with self.assertRaises(TypeError):
            Cardinal("a", nargs=2)

    def testMetavarNormalizedIntoField(self):
        c = Cardinal("Dest_Dir")
        self.assertEqual(c.name, "<dest-dir>")
        self.assertEqual(c.field, "dest_dir")

    def testMetavarEmptyOnceNormalized(self):
        with self.assertRaises(SpecificationError):
            Cardinal("__")


class TestSubcommand(TestCase):
    """Behavioral tests for the command selector and its table."""

    def testCommandNamesNormalized(self):
        c = Command("move_", "MV")
        self.assertEqual(c.name, "move")
        self.assertEqual(c.aliases, ("mv",))
        self.assertEqual(c.usage, "move, mv")

    def testCommandDuplicateAliasRejected(self):
        with self.assertRaises(SpecificationError):
            Command("list", "ls", "ls")

    def testCommandNameCannotLookLikeOption(self):
        with self.assertRaises(SpecificationError):
            Command("--list")

    def testCommandSpecificationTypeChecked(self):
        with self.assertRaises(TypeError):
            Command("list", specification="nope")

    def testLookupMatchesCanonicalAndAliases(self):
        s = Subcommand("command", Command("add"), Command("list", "ls", "l"))
        self.assertEqual(s.lookup("l").name, "list")
        self.assertEqual(s.lookup("list").name, "list")
        self.assertIsNone(s.lookup("lst"))

    def testNamesUniqueAcrossTable(self):
        with self.assertRaises(SpecificationError):
            Subcommand("command", Command("remove", "rm"), Command("rm"))

    def testAtLeastOneCommand(self):
        with self.assertRaises(TypeError):
            Subcommand("command")

    def testSelectorIsNeverVariadic(self):
        s = Subcommand("command", Command("add"))
        self.assertFalse(s.variadic)
        self.assertEqual(s.usage, "<command>")
        self.assertEqual(Subcommand("command", Command("add"), nargs="?").usage, "[<command>]")

    def testSelectorRejectsVariadicArity(self):
        with self.assertRaises(ValueError):
            Subcommand("command", Command("add"), nargs="*")


if __name__ == "__main__":
    unittest.main()
