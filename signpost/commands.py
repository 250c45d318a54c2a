"""
Signpost command layer: the capability every node of a command tree provides.

What this module provides
- Command: abstract base describing one node of a command tree:
  • name: the token that selects the node under its parent ("" for the root).
  • short_help: one-line description shown in the parent's command listing.
  • long_help: multi-line description shown when the node asks for help.
  • execute(args, stdin): runs the node; returning False asks for the help text.
  • subcommands: ordered children (absent means none).

- Ready-made variants:
  • Default: field-backed command; execution is delegated to an optional callback.
  • Root: the unnamed top of a tree whose only job is to describe the program.

- Factories and helpers:
  • command(...): create a Default or a decorator that produces one.
  • children(command): normalized subcommand tuple (absent/None entries removed).

Quick start
    from signpost import Root, command, invoke

    root = Root("Usage: ninja COMMAND [args]")

    @root.command(short_help="punch your shell")
    def punch(args, stdin):
        '''Punch your shell with the power of 1000 hurricanes.'''
        if args != ["--execute"]:
            return False
        print("POW!")
        return True

    if __name__ == "__main__":
        invoke(root)

Design notes
- The driver never branches on concrete classes; anything implementing Command works.
- Side effects of execute() belong to the command. The driver only looks at the
  truthiness of the result.

See also
- signpost.driver for registration, resolution and help rendering.
"""
import inspect
from abc import ABC, abstractmethod

from .utils import Unset, coalesce, mirror


class Command(ABC):
    """
    One node of a command tree.

    Implementations provide the four abstract members; subcommands defaults to
    an empty tuple so leaf commands only describe themselves.

    Contract
    - name is compared exactly (case-sensitive) against invocation tokens and
      must be unique among siblings. The root of a tree is named "".
    - short_help may span lines; newlines are removed when it is listed.
    - long_help is printed unmodified.
    - execute(args, stdin) receives the unconsumed invocation tokens and the
      driver's input handle. Return True when handled, False to show long_help
      and the command listing instead.
    """

    @property
    @abstractmethod
    def name(self):
        """Token selecting this command under its parent."""

    @property
    @abstractmethod
    def short_help(self):
        """One-line description of this command."""

    @property
    @abstractmethod
    def long_help(self):
        """Multi-line description of this command."""

    @abstractmethod
    def execute(self, args, stdin, /):
        """Run with the remaining arguments; return False to request help."""

    @property
    def subcommands(self):
        """Ordered direct children of this command."""
        return ()

    def __repr__(self):
        return f"<{type(self).__name__} name={self.name!r}>"


def children(command, /):
    """
    Return the direct subcommands of command as a tuple.

    An absent collection (None) and an empty one are the same thing; None
    entries inside the collection are skipped.
    """
    return tuple(child for child in command.subcommands or () if child is not None)


def _describe(callback):
    # (long_help, short_help) derived from the callback docstring
    doc = inspect.getdoc(callback) or ""
    return doc, doc.partition("\n")[0]


class Default(Command):
    """
    Field-backed command.

    Every member of the Command contract is a plain field supplied at
    construction. Execution is delegated to callback(args, stdin); without a
    callback the command always asks for help, which is the natural behavior
    for grouping nodes that only hold subcommands.

    When a callback is given, omitted fields are derived from it:
    - name: the callback's __name__ with underscores turned into hyphens.
    - long_help: the callback's docstring (cleaned).
    - short_help: the first line of that docstring.
    """

    name = mirror("name")
    short_help = mirror("short_help")
    long_help = mirror("long_help")
    callback = mirror("callback")
    subcommands = mirror("subcommands")

    def __init__(
            self,
            callback=None,
            /,
            *,
            name=Unset,
            short_help=Unset,
            long_help=Unset,
            subcommands=(),
    ):
        if callback is not None and not callable(callback):
            raise TypeError("command callback must be callable")
        if callback is not None:
            long, short = _describe(callback)
            name = coalesce(name, callback.__name__.replace("_", "-"))
        else:
            long = short = ""
        self._name = coalesce(name, "")
        self._short_help = coalesce(short_help, short)
        self._long_help = coalesce(long_help, long)
        self._callback = callback
        self._subcommands = list(subcommands or ())

        for field in ("name", "short_help", "long_help"):
            if not isinstance(getattr(self, "_" + field), str):
                raise TypeError(f"command {field} must be a string")

    def execute(self, args, stdin, /):
        if self._callback is None:
            return False
        return bool(self._callback(args, stdin))

    def command(self, source=Unset, /, **kwargs):
        """
        Create a Default child of this command and append it to subcommands.

        Usage
        - As a decorator: @parent.command or @parent.command(name=..., short_help=...).
        - As a function: parent.command(callback, name=...), or
          parent.command(None, name=...) for a callback-less grouping node.
        - To mount an existing command: parent.command(instance) appends it unchanged.

        Returns
        - The new child command (or a decorator producing it).
        """
        def wrapper(source, /):
            if isinstance(source, Command):
                if kwargs:
                    raise TypeError("command fields cannot be overridden when mounting a Command")
                child = source
            else:
                child = Default(source, **kwargs)
            self._subcommands.append(child)
            return child

        if source is Unset:
            return wrapper
        return wrapper(source)


class Root(Default):
    """
    The unnamed top of a command tree.

    Its long help is the program description (usage line, synopsis). A root
    never handles input itself: running the program without a recognised
    subcommand prints that description followed by the command listing.
    """

    def __init__(self, help="", /, *, subcommands=()):
        super().__init__(name="", short_help="", long_help=help, subcommands=subcommands)

    def execute(self, args, stdin, /):
        return False


def command(source=Unset, /, **kwargs):
    """
    Build a Default command from a callback.

    Forms
    - @command
      def deploy(args, stdin): ...
    - @command(name="deploy", short_help="ship it")
      def _(args, stdin): ...
    - command(callback, **fields)

    Keyword fields are the ones accepted by Default (name, short_help,
    long_help, subcommands).
    """
    def wrapper(source, /):
        return Default(source, **kwargs)

    if source is Unset:
        return wrapper
    return wrapper(source)


__all__ = (
    "Command",
    "Default",
    "Root",
    "command",
    "children",
)
