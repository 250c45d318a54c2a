"""
Signpost faults (driver errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every driver-level issue.
  Codes are grouped by domain to keep copy consistent and make logs/searches predictable.
- DriverException: base type that carries message + options and knows how to
  render itself in a short, lowercased, actionable way.
- trigger(): policy entry point used by embedding programs (see invoke()) to
  surface a fault, either by raising it or by rendering it and exiting.
- getdoc(): optional description lookup for a code from the host application.

What is not a fault
- a command whose execute() returns False. That is a request for help text and
  never reaches this module.

Integration
- The driver only ever raises these exceptions; it never prints them and never
  exits. Rendering and exit codes belong to whoever calls trigger().
"""
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, UnsetType, coalesce

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used by the driver (stable identifiers).

    grouping (by high-level domain)
    - configuration (211xx)
      • ROOT_MISSING, ROOT_REGISTERED, NULL_ROOT, NAMED_ROOT, UNKNOWN_COMMAND
    - structure (221xx)
      • DUPLICATE_COMMAND, BROKEN_TREE, CORRUPT_TREE, CYCLIC_TREE

    spacing leaves room for future additions without reshuffling existing codes.
    """
    # --- configuration errors (21xxx) ---
    ROOT_MISSING                = 21101
    ROOT_REGISTERED             = 21102
    NULL_ROOT                   = 21103
    NAMED_ROOT                  = 21104
    UNKNOWN_COMMAND             = 21111

    # --- structural errors (22xxx) ---
    DUPLICATE_COMMAND           = 22101
    BROKEN_TREE                 = 22102
    CORRUPT_TREE                = 22103
    CYCLIC_TREE                 = 22104

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class DriverException(Exception):
    """
    base class of every fault raised by the driver.

    subclasses pin a default code, title and hint; any of them can be
    overridden per instance through options (code=..., title=..., hint=...).
    rendering options understood by __rich__: prog, colorful, fancy, ratio.
    """
    __fault__ = Unset
    __title__ = "driver fault"
    __hint__ = ""

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | UnsetType)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code", self.__fault__)

    @property
    def title(self):
        return self.options.get("title", self.__title__)

    @property
    def hint(self):
        return self.options.get("hint", self.__hint__)

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if isinstance(fragment, Text):
                return fragment if colorful else Text(fragment.plain)
            return Text(str(fragment), style)

        prog = text(getattr(main, "__prog__", self.options.get("prog", "signpost")), styler("prog-name"))
        code = self.code.normalize() if isinstance(self.code, FaultCode) else "?"

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code, styler("code")),
            " | ",
            text(self.title.title(), styler("error-title")),
            " ]"
        )
        message = text(coalesce(self.message, ""), styler("error-message"))
        hint = Text.assemble(text(" → ", styler("hint-arrow")), text(self.hint, styler("hint")))

        if fancy:
            try:
                width = int((console.width - 4) * self.options["ratio"])
            except KeyError:
                width = None
            return Panel(Group(message, hint), title=header, title_align="left", width=width)

        return Group(header, message, hint)

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class RootMissingError(DriverException):
    __fault__ = FaultCode.ROOT_MISSING
    __title__ = "root missing"
    __hint__ = "call register_root() before parse_input()"


class RootRegisteredError(DriverException):
    __fault__ = FaultCode.ROOT_REGISTERED
    __title__ = "root already registered"
    __hint__ = "create a new driver to register another tree"


class NullRootError(DriverException):
    __fault__ = FaultCode.NULL_ROOT
    __title__ = "null root"
    __hint__ = "pass a command instance to register_root()"


class NamedRootError(DriverException):
    __fault__ = FaultCode.NAMED_ROOT
    __title__ = "named root"
    __hint__ = 'the root command name must be ""'


class UnknownCommandError(DriverException):
    __fault__ = FaultCode.UNKNOWN_COMMAND
    __title__ = "unknown command"
    __hint__ = "check the command path against the registered tree"


class DuplicateCommandError(DriverException):
    __fault__ = FaultCode.DUPLICATE_COMMAND
    __title__ = "duplicate command"
    __hint__ = "rename one of the sibling commands"


class BrokenTreeError(DriverException):
    __fault__ = FaultCode.BROKEN_TREE
    __title__ = "broken tree"
    __hint__ = "registration failed earlier; fix the tree and use a new driver"


class CorruptTreeError(DriverException):
    __fault__ = FaultCode.CORRUPT_TREE
    __title__ = "corrupt tree"
    __hint__ = "the registered tree was modified outside the driver"


class CyclicTreeError(DriverException):
    __fault__ = FaultCode.CYCLIC_TREE
    __title__ = "cyclic tree"
    __hint__ = "a command cannot be its own subcommand"


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see DriverException).
    - options are merged into the fault via __replace__(**options) before triggering.
    - with shell=True the fault is rendered to standard error and the process
      exits with status 1; otherwise the fault is raised.

    typical options
    - shell, fancy, colorful, prog, title, code, hint.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    lookup
    - the host application may expose a __docs__ mapping in __main__ where keys
      are FaultCode instances and values are short documentation strings.
    - when not found, returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "DriverException",
    "RootMissingError",
    "RootRegisteredError",
    "NullRootError",
    "NamedRootError",
    "UnknownCommandError",
    "DuplicateCommandError",
    "BrokenTreeError",
    "CorruptTreeError",
    "CyclicTreeError",
    "FaultCode",
    "trigger",
    "getdoc",
)
