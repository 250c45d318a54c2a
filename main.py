"""
ninja: a made-up CLI built on signpost.

Run `python main.py`, `python main.py punch`, `python main.py kick --execute`, etc.
"""
from signpost import Command, Root, invoke

root = Root("""Usage: ninja COMMAND [args]

A madeup CLI to demonstrate this framework""")


@root.command(short_help="punch your shell", long_help="""Punch your shell with the power of 1000 hurricanes.

Usage: punch [OPTIONS]

Options:
  --execute""")
def punch(args, stdin):
    if args == ["--execute"]:
        print("POW!")
        return True
    return False


class Kick(Command):
    name = "kick"
    short_help = "kick your shell"
    long_help = """kick your shell with the power of one supernova

Usage: kick [OPTIONS]

Options:
  --execute"""

    # returning False prints long_help
    def execute(self, args, stdin, /):
        if args == ["--execute"]:
            print("BOOM!")
            return True
        return False


root.command(Kick())


if __name__ == '__main__':
    invoke(root)
