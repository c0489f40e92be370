import sys

from rich.pretty import pprint

from tether import *


if __name__ == '__main__':
    source = Cell()
    verbosity = Cell(0)

    parser = Parser(
        string("i", "input-file", "input file", True, source),
        counter("v", "verbose", "verbose logging", verbosity),
    )

    if not parser.parse(sys.argv):
        print("\nUsage: main.py [-v] -i INPUT\n", file=sys.stderr)
        parser.printusage()
        sys.exit(1)

    print("Input file = %s" % source.value)
    print("Verbosity = %d" % verbosity.value)
    if verbosity.value > 1:
        pprint(parser)
