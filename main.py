import sys

from rich.pretty import pprint

from switchboard import *

__prog__ = "copytool"

switches = SwitchRegistry()
switches.declare("h", "help", "Show this help and exit.")
switches.declare("v", "verbose", "Print every copied file.")
switches.declare("s", "source", "Files to copy.", required=True, nargs="+", metavars=["file"])
switches.declare("d", "destination", "Target directory.", required=True, metavars=["dir"])

printer = HelpPrinter(__prog__, switches, "Copy files around.", "Report bugs to the issue tracker.")


if __name__ == '__main__':
    parser = ArgumentParser(sys.argv[1:], switches)
    try:
        parser.parse()
    except ParsingError as fault:
        # Help wins over whatever else went wrong after it.
        if not parser.isparsed("help"):
            report(fault)
            sys.exit(1)
    if parser.isparsed("help"):
        printer.print()
        sys.exit(0)
    pprint({name: parser.getvalues(name) for name in ("source", "destination", "verbose")})
