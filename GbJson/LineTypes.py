# Copyright 2019 by Frank Buermann.  All rights reserved.
#
# This code is part of the gbjson distribution and governed by its
# license.  Please see the LICENSE file that should have been included
# as part of this package.

"""Classify the lines of a GenBank flat file.

Each predicate looks at a single line (without its line ending) and
decides its role from fixed column positions.  None of them keep any
state; the order in which they are consulted is up to the scanner.
"""

# Constants used to parse GenBank header lines
GENBANK_INDENT = 12
GENBANK_SPACER = " " * GENBANK_INDENT
SUBKEYWORD_INDENT = 2
SUBSUBKEYWORD_INDENT = 3

# A continuation line starts with this many spaces
CONTINUATION_INDENT = 11
CONTINUATION_SPACER = " " * CONTINUATION_INDENT

# Constants for parsing GenBank feature lines
FEATURE_KEY_INDENT = 5
FEATURE_QUALIFIER_INDENT = 21
FEATURE_KEY_SPACER = " " * FEATURE_KEY_INDENT
FEATURE_QUALIFIER_SPACER = " " * FEATURE_QUALIFIER_INDENT

# Constants for the sequence block after ORIGIN
SEQUENCE_INDENT = 9
SEQUENCE_DATA_START = SEQUENCE_INDENT + 1
LETTERS_PER_LINE = 60
LETTERS_PER_BLOCK = 10

MAX_WIDTH = 79


def is_locus(line):
    """Check for the LOCUS line opening a record."""
    return len(line) >= 13 and line.startswith("LOCUS") and not line[12].isspace()


def is_keyword(line):
    """Check for a top level keyword such as DEFINITION or REFERENCE."""
    return len(line) >= 13 and line[0].isalpha()


def is_subkeyword(line):
    """Check for a keyword indented by two spaces, e.g. ORGANISM."""
    return (
        len(line) >= 3
        and line[:SUBKEYWORD_INDENT] == "  "
        and not line[SUBKEYWORD_INDENT].isspace()
    )


def is_subsubkeyword(line):
    """Check for a keyword indented by three spaces, e.g. PUBMED."""
    return (
        len(line) >= 4
        and line[:SUBSUBKEYWORD_INDENT] == "   "
        and not line[SUBSUBKEYWORD_INDENT].isspace()
    )


def is_continuation(line):
    """Check for a line continuing the value of the previous one."""
    return line[:CONTINUATION_INDENT] == CONTINUATION_SPACER


def is_feature_header(line):
    return line.startswith("FEATURES")


def is_feature(line):
    """Check for the first line of a feature table entry."""
    return (
        len(line) >= 6
        and line[:FEATURE_KEY_INDENT] == FEATURE_KEY_SPACER
        and not line[FEATURE_KEY_INDENT].isspace()
    )


def is_qualifier(back):
    """Check if the text after the qualifier column starts a /qualifier.

    Note this takes the feature body (the line from column 21), not the
    full line.
    """
    return back[:1] == "/"


def is_origin(line):
    return line.startswith("ORIGIN")


def is_contig(line):
    return line.startswith("CONTIG")


def is_sequence(line):
    """Check for a numbered line of sequence data.

    >>> is_sequence("        1 gatcctccat atacaacggt")
    True
    >>> is_sequence("        1  ")
    False
    """
    if len(line) < 11:
        return False
    number = line[3:SEQUENCE_INDENT].lstrip()
    return (
        number.isdigit()
        and line[SEQUENCE_INDENT].isspace()
        and not line[SEQUENCE_DATA_START].isspace()
    )


def is_end(line):
    """Check for the // line closing a record."""
    return line.startswith("//")


# Keyword nesting, indexed by level (keyword, subkeyword, subsubkeyword)
KEYWORD_LEVELS = (is_keyword, is_subkeyword, is_subsubkeyword)
MAX_KEYWORD_LEVEL = len(KEYWORD_LEVELS) - 1
