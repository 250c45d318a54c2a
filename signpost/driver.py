"""
Signpost driver: register a command tree once, then route an argument vector through it.

What this module provides
- Driver: owns one command tree.
  • register_root(root): validates and indexes the whole tree (once per driver).
  • parse_input(): resolves the argument vector to the deepest matching command,
    executes it with the unconsumed tokens, and prints its help when it declines.
  • render_help(path): prints the help of any registered command without executing it.
- invoke(root, args): convenience runner that applies a shell-friendly fault policy.

Resolution
- args[0] is the program name and is never a command token.
- Tokens are consumed while they name a direct subcommand of the current node;
  the first token that does not stops the walk. That token and everything after
  it become the resolved command's arguments. This is a greedy, contiguous,
  longest-prefix match.

Help layout
    <long help>
    <blank line>                      ┐
    Commands:                         │ only when the command
        <name padded> - <short help>  ┘ has subcommands

Names are padded to the longest name among the command's direct children, so
every listing is aligned on its own. Newlines in short help are deleted.

State
- A driver is NEW until register_root() is called, READY after a successful
  registration and BROKEN after a failed one. Only READY drivers resolve input.
  register_root() can be called exactly once, whatever its outcome.
"""
import os.path
import sys

from rich.console import Console
from rich.text import Text

from .commands import Command, children
from .faults import *
from .utils import Unset, coalesce, mirror, strip


class _Node:
    """
    Registered view of one command.

    children maps a direct subcommand name to its node; longest is the length
    of the longest direct subcommand name (0 for leaves).
    """
    __slots__ = ("command", "path", "children", "longest")

    def __init__(self, command, path):
        self.command = command
        self.path = path
        self.children = {}
        self.longest = 0

    def __repr__(self):
        return f"<_Node path={self.path!r} children={len(self.children)}>"


class Driver:
    """
    Command tree dispatcher.

    Construction
    - args: argument vector, defaults to sys.argv.
    - stdin: input handle handed to commands, defaults to sys.stdin.
    - stdout: sink for help text (anything with write(str)), defaults to sys.stdout.
    - colorful: render help through Rich with the package palette. When False the
      plain text is written as-is.

    Errors
    - Every misuse raises a DriverException subclass to the caller. The driver never
      prints faults and never exits the process; see invoke()/trigger() for that.
    """

    args = mirror("args")
    stdin = mirror("stdin")
    stdout = mirror("stdout")
    colorful = mirror("colorful")

    def __init__(self, args=Unset, stdin=Unset, stdout=Unset, /, *, colorful=False):
        if isinstance(args, str):
            raise TypeError("driver arguments must be a sequence of strings, not a string")
        self._args = list(coalesce(args, sys.argv))
        self._stdin = coalesce(stdin, sys.stdin)
        self._stdout = coalesce(stdout, sys.stdout)
        self._colorful = bool(colorful)
        self._registered = False
        self._broken = False
        self._tree = None

        if not all(isinstance(arg, str) for arg in self._args):
            raise TypeError("driver arguments must be strings")
        if not callable(getattr(self._stdout, "write", None)):
            raise TypeError("driver output must provide a write() method")

    @property
    def prog(self):
        """Program name derived from args[0] (used when rendering faults)."""
        if self._args and self._args[0]:
            return os.path.basename(self._args[0])
        return "signpost"

    @property
    def ready(self):
        """True once a root was registered successfully."""
        return self._tree is not None

    def register_root(self, root, /):
        """
        Validate and index the tree below root.

        Preconditions (configuration faults)
        - first call on this driver (RootRegisteredError otherwise, even after a failure);
        - root is not None (NullRootError) and is a Command (TypeError);
        - root.name is "" (NamedRootError).

        Structure (structural faults)
        - sibling names are unique (DuplicateCommandError);
        - no command is its own descendant (CyclicTreeError).

        The tree is installed only when the whole walk succeeds. After any failure
        the driver stays unusable for resolution.
        """
        if self._registered:
            raise RootRegisteredError("register_root() was already called on this driver")
        self._registered = True

        if root is None:
            raise NullRootError("root command is None")
        if not isinstance(root, Command):
            raise TypeError("register_root() argument must be a Command")
        try:
            name = root.name
        except BaseException:
            self._broken = True
            raise
        if name != "":
            raise NamedRootError(f'root command name must be "" (got {name!r})')

        try:
            tree = self._register(root, "", ())
        except BaseException:
            self._broken = True
            raise
        self._tree = tree

    def _register(self, command, path, ancestors):
        node = _Node(command, path)
        ancestors += (id(command),)

        # accumulator for this sibling group only
        longest = 0
        for child in children(command):
            if not isinstance(child, Command):
                raise TypeError(f"subcommand of {path or '<root>'} must be a Command (got {child!r})")
            if id(child) in ancestors:
                raise CyclicTreeError(f"command {child.name!r} under {path or '<root>'} is its own ancestor")

            name = child.name
            if name in node.children:
                raise DuplicateCommandError(f"command path {path}/{name} already exists")

            node.children[name] = self._register(child, f"{path}/{name}", ancestors)
            longest = max(longest, len(name))

        node.longest = longest
        return node

    def _root(self):
        if self._tree is None:
            if self._broken:
                raise BrokenTreeError("registration failed; the command tree is unusable")
            raise RootMissingError("root command doesn't exist; call register_root() first")
        if not isinstance(self._tree, _Node):
            raise CorruptTreeError("tree exists without a root node")
        return self._tree

    def _resolve(self, tokens):
        # -> (node, number of tokens consumed)
        node = self._root()
        index = 0
        for token in tokens:
            child = node.children.get(token)
            if child is None:
                break
            if not isinstance(child, _Node):
                raise CorruptTreeError(f"node at path [{node.path}/{token}] is not a command node")
            node = child
            index += 1
        return node, index

    def parse_input(self):
        """
        Resolve the argument vector and dispatch to the deepest matching command.

        The resolved command receives the unconsumed tokens and stdin. When it
        returns a falsy value its help is written to stdout; that is a normal
        outcome and nothing is raised.
        """
        tokens = self._args[1:]
        node, consumed = self._resolve(tokens)

        if not node.command.execute(tokens[consumed:], self._stdin):
            self._helper(node)

    def render_help(self, path=(), /):
        """
        Write the help of the command at path (a sequence of names below the root).

        Unlike parse_input() the walk is exact: every name must exist.
        """
        if isinstance(path, str):
            raise TypeError("render_help() argument must be a sequence of names, not a string")
        path = list(path)
        node, consumed = self._resolve(path)
        if consumed != len(path):
            missing = "/".join(path[:consumed + 1])
            raise UnknownCommandError(f"no command registered at path /{missing}")
        self._helper(node)

    def _helper(self, node):
        """
        Render a command's help to stdout.

        Palette keys
        - long-help, commands-label, command-name, separator, short-help

        Customization
        - Define a mapping named __styles__ in __main__ to override any palette entry.
        - Styles only apply when the driver is colorful.
        """
        command = node.command
        lines = [[(command.long_help, "long-help")]]

        # registered children only; the listing matches what parse_input can reach
        subcommands = [child.command for child in node.children.values()]
        if subcommands:
            lines.append([])
            lines.append([("Commands:", "commands-label")])
            for subcommand in subcommands:
                lines.append([
                    ("    ", ""),
                    (subcommand.name.ljust(node.longest), "command-name"),
                    (" - ", "separator"),
                    (strip(subcommand.short_help), "short-help"),
                ])

        if not self._colorful:
            self._stdout.write("".join("".join(fragment for fragment, _ in line) + "\n" for line in lines))
            return

        styles = {
            "long-help": "",
            "commands-label": "bold #FFFFFF",  # white section header
            "command-name": "bold #36C5F0",  # sky-blue subcommands
            "separator": "#4B5563",  # slate dash
            "short-help": "#9CA3AF",  # muted gray
        } | getattr(__import__("__main__"), "__styles__", {})

        console = Console(file=self._stdout, highlight=False, markup=False, emoji=False)
        console.print(
            Text("\n").join(
                Text.assemble(*((fragment, styles.get(style, "")) for fragment, style in line)) for line in lines
            ),
            soft_wrap=True,
        )


def invoke(root, args=Unset, /, *, stdin=Unset, stdout=Unset, shell=True, colorful=False, fancy=False):
    """
    Register root on a fresh driver and parse args (sys.argv by default).

    Fault policy
    - shell=True: faults are rendered with Rich on standard error and the process
      exits with status 1 (what a console script wants).
    - shell=False: faults are raised to the caller.

    Returns
    - The driver, once the command finished (or asked for help).
    """
    driver = Driver(args, stdin, stdout, colorful=colorful)
    try:
        driver.register_root(root)
        driver.parse_input()
    except DriverException as fault:
        trigger(fault, shell=shell, colorful=colorful, fancy=fancy, prog=driver.prog)
    return driver


__all__ = (
    "Driver",
    "invoke",
)
