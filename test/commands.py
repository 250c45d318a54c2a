"""
Commands module tests (capability contract, ready-made variants, factories).

Scope
- Command: abstract members, default subcommands.
- Default: field storage, callback delegation, docstring-derived fields, child factory.
- Root: unnamed, never executes, lists its children.
- children(): normalization of absent/None subcommands.

Conventions
- Test method names follow CamelCase per project convention.
"""
from __future__ import annotations

import io
import unittest
from unittest import TestCase

from signpost import Command, Default, Driver, Root, children, command


class Leaf(Command):
    name = "leaf"
    short_help = "a leaf"
    long_help = "a leaf command"

    def execute(self, args, stdin, /):
        return True


class TestCommand(TestCase):
    """The abstract capability."""

    def testAbstractMembersRequired(self):
        class Partial(Command):
            name = "partial"

        with self.assertRaises(TypeError):
            Partial()

    def testSubcommandsDefaultToEmpty(self):
        self.assertEqual(Leaf().subcommands, ())
        self.assertEqual(children(Leaf()), ())

    def testRepr(self):
        self.assertEqual(repr(Leaf()), "<Leaf name='leaf'>")


class TestChildren(TestCase):
    """Normalization of subcommand collections."""

    def testNoneIsEmpty(self):
        self.assertEqual(children(Default(name="x", subcommands=None)), ())

    def testNoneEntriesAreSkipped(self):
        leaf = Leaf()
        self.assertEqual(children(Default(subcommands=[None, leaf, None])), (leaf,))

    def testOrderIsPreserved(self):
        first, second, third = Default(name="c"), Default(name="a"), Default(name="b")
        self.assertEqual(children(Default(subcommands=[first, second, third])), (first, second, third))


class TestDefault(TestCase):
    """Field-backed commands."""

    def testFields(self):
        cmd = Default(name="punch", short_help="punch it", long_help="Punch it.\n\nUsage: punch")
        self.assertEqual(cmd.name, "punch")
        self.assertEqual(cmd.short_help, "punch it")
        self.assertEqual(cmd.long_help, "Punch it.\n\nUsage: punch")
        self.assertIsNone(cmd.callback)
        self.assertEqual(cmd.subcommands, [])

    def testWithoutCallbackAsksForHelp(self):
        self.assertFalse(Default(name="group").execute([], None))

    def testCallbackReceivesArgsAndStdin(self):
        received = []

        def callback(args, stdin):
            received.append((args, stdin))
            return "truthy"

        stdin = io.StringIO()
        self.assertIs(Default(callback).execute(["a"], stdin), True)
        self.assertEqual(received, [(["a"], stdin)])

    def testFieldsDerivedFromCallback(self):
        def show_servers(args, stdin):
            """List every server.

            Usage: show-servers
            """

        cmd = Default(show_servers)
        self.assertEqual(cmd.name, "show-servers")
        self.assertEqual(cmd.short_help, "List every server.")
        self.assertEqual(cmd.long_help, "List every server.\n\nUsage: show-servers")

    def testExplicitFieldsWinOverCallback(self):
        def callback(args, stdin):
            """Doc line."""

        cmd = Default(callback, name="other", short_help="", long_help="long")
        self.assertEqual((cmd.name, cmd.short_help, cmd.long_help), ("other", "", "long"))

    def testSubcommandsAreReadOnly(self):
        cmd = Default(subcommands=[Leaf()])
        cmd.subcommands.append(Leaf())
        self.assertEqual(len(cmd.subcommands), 1)

    def testRejectsNonCallable(self):
        with self.assertRaises(TypeError):
            Default("not callable")

    def testRejectsNonStringName(self):
        with self.assertRaises(TypeError):
            Default(name=42)

    def testChildDecorator(self):
        parent = Default(name="parent")

        @parent.command
        def run(args, stdin):
            """Run it."""
            return True

        @parent.command(name="stop", short_help="stop it")
        def _(args, stdin):
            return True

        self.assertIsInstance(run, Default)
        self.assertEqual([child.name for child in parent.subcommands], ["run", "stop"])
        self.assertEqual(parent.subcommands[1].short_help, "stop it")

    def testChildGroupWithoutCallback(self):
        parent = Default(name="parent")
        group = parent.command(None, name="group", long_help="grouping")
        self.assertEqual(parent.subcommands, [group])
        self.assertFalse(group.execute([], None))

    def testMountExistingCommand(self):
        parent = Default(name="parent")
        leaf = Leaf()
        self.assertIs(parent.command(leaf), leaf)
        self.assertEqual(parent.subcommands, [leaf])

    def testMountExistingCommandRejectsFields(self):
        with self.assertRaises(TypeError):
            Default(name="parent").command(Leaf(), name="renamed")


class TestRoot(TestCase):
    """The unnamed top of a tree."""

    def testIdentity(self):
        root = Root("Usage: ninja COMMAND [args]")
        self.assertEqual(root.name, "")
        self.assertEqual(root.short_help, "")
        self.assertEqual(root.long_help, "Usage: ninja COMMAND [args]")

    def testNeverExecutes(self):
        self.assertFalse(Root().execute(["anything"], None))

    def testPrintsUsageAndCommands(self):
        root = Root("Usage: ninja COMMAND [args]\n\nA madeup CLI")

        @root.command(short_help="punch your shell")
        def punch(args, stdin):
            return args == ["--execute"]

        root.command(Leaf())

        stdout = io.StringIO()
        driver = Driver(["ninja"], io.StringIO(), stdout)
        driver.register_root(root)
        driver.parse_input()
        self.assertEqual(
            stdout.getvalue(),
            "Usage: ninja COMMAND [args]\n"
            "\n"
            "A madeup CLI\n"
            "\n"
            "Commands:\n"
            "    punch - punch your shell\n"
            "    leaf  - a leaf\n"
        )

    def testSubcommandHandlesInput(self):
        root = Root("usage")
        hits = []

        @root.command
        def punch(args, stdin):
            hits.append(args)
            return True

        stdout = io.StringIO()
        driver = Driver(["ninja", "punch", "--execute"], io.StringIO(), stdout)
        driver.register_root(root)
        driver.parse_input()
        self.assertEqual(hits, [["--execute"]])
        self.assertEqual(stdout.getvalue(), "")


class TestCommandFactory(TestCase):
    """The module-level command() factory."""

    def testBareDecorator(self):
        @command
        def deploy(args, stdin):
            """Ship it."""
            return True

        self.assertIsInstance(deploy, Default)
        self.assertEqual(deploy.name, "deploy")
        self.assertEqual(deploy.short_help, "Ship it.")

    def testDecoratorWithFields(self):
        @command(name="ship", subcommands=[Leaf()])
        def deploy(args, stdin):
            return True

        self.assertEqual(deploy.name, "ship")
        self.assertEqual([child.name for child in deploy.subcommands], ["leaf"])

    def testFunctionForm(self):
        cmd = command(lambda args, stdin: True, name="inline")
        self.assertTrue(cmd.execute([], None))


if __name__ == "__main__":
    unittest.main()
