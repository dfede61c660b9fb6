# Copyright 2019 by Frank Buermann.  All rights reserved.
#
# This code is part of the gbjson distribution and governed by its
# license.  Please see the LICENSE file that should have been included
# as part of this package.
"""Command line programs gb2json and json2gb.

USAGE: gb2json [options] in.gb [out.json]
       json2gb [options] in.json [out.gb]

Without an output file the result is written to stdout.  Also available
as ``python -m GbJson gb2json ...`` and ``python -m GbJson json2gb ...``.
"""
import argparse
import logging
import sys

from GbJson import ENCODING, GbJsonError, __version__, gb2json, json2gb, read_file

PROGRAMS = {
    "gb2json": (gb2json, "GenBank to JSON converter", "in.gb", "out.json"),
    "json2gb": (json2gb, "JSON to GenBank converter", "in.json", "out.gb"),
}


def _build_parser(prog):
    _, description, infile, outfile = PROGRAMS[prog]
    parser = argparse.ArgumentParser(prog=prog, description=description)
    parser.add_argument("infile", metavar=infile, help="input file")
    parser.add_argument(
        "outfile",
        metavar=outfile,
        nargs="?",
        default=None,
        help="output file, if omitted the result is written to stdout",
    )
    parser.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="input and output filenames can be the same",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version="%s v%s" % (prog, __version__),
        help="print program version",
    )
    parser.add_argument("--debug", action="store_true", help="log debug messages")
    return parser


def run(prog, argv=None):
    """Run one of the converters, returning the exit status."""
    convert = PROGRAMS[prog][0]
    args = _build_parser(prog).parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING)

    if args.infile == args.outfile and not args.force:
        print("Input and output filenames must be different.")
        return 1

    try:
        text = read_file(args.infile)
    except (OSError, UnicodeError):
        print("Failed to open %s" % args.infile)
        return 1

    try:
        result = convert(text)
    except GbJsonError as err:
        print(err.msg)
        return 1

    if args.outfile is None:
        sys.stdout.write(result)
        return 0
    try:
        with open(args.outfile, "w", encoding=ENCODING) as handle:
            handle.write(result)
    except (OSError, UnicodeError):
        print("Failed to write %s" % args.outfile)
        return 1
    print(args.outfile)
    return 0


def gb2json_main():
    sys.exit(run("gb2json"))


def json2gb_main():
    sys.exit(run("json2gb"))


def main(argv=None):
    """Dispatch ``python -m GbJson <program> ...`` to the named program."""
    if argv is None:
        argv = sys.argv[1:]
    if not argv or argv[0] not in PROGRAMS:
        print(
            "USAGE: python -m GbJson {%s} [options] infile [outfile]"
            % ",".join(PROGRAMS)
        )
        return 1
    return run(argv[0], argv[1:])


if __name__ == "__main__":
    sys.exit(main())
