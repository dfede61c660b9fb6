# Copyright 2019 by Frank Buermann.  All rights reserved.
#
# This code is part of the gbjson distribution and governed by its
# license.  Please see the LICENSE file that should have been included
# as part of this package.

"""Lay out values as fixed width GenBank lines."""

from GbJson.LineTypes import (
    LETTERS_PER_BLOCK,
    LETTERS_PER_LINE,
    MAX_WIDTH,
    SEQUENCE_INDENT,
)


def _chunks(text, size):
    return [text[start : start + size] for start in range(0, len(text), size)]


def block_pad(text, indent, width=MAX_WIDTH, offset=0):
    r"""Split a value into lines left padded with white space.

    Arguments:
     - text - The value, new lines in it are kept as line breaks.
     - indent - Column the value starts at; all but the first line are
       padded with this many spaces.
     - width - Total line width.
     - offset - Number of characters of the value column already used on
       the first line, e.g. by a /qualifier= prefix.

    Lines are broken at the width without looking for white space, so
    a value folded by the parser comes back out as the original lines:

    >>> print(block_pad("Homo sapiens\nchromosome 11", 12), end="")
    Homo sapiens
                chromosome 11

    The first line carries no padding since the caller has already
    written the key in front of it.  Every line ends in a new line.
    """
    line_len = width - indent
    if line_len <= 0:
        raise ValueError("Indent %i leaves no room in %i columns" % (indent, width))
    spacer = " " * indent

    pieces = text.split("\n")
    first = pieces[0]
    # Always place something on the first line, even if the key ran long
    first_len = max(line_len - offset, 1)
    lines = [first[:first_len]]
    lines.extend(spacer + chunk for chunk in _chunks(first[first_len:], line_len))
    for piece in pieces[1:]:
        if not piece:
            lines.append(spacer)
        else:
            lines.extend(spacer + chunk for chunk in _chunks(piece, line_len))
    return "".join(line + "\n" for line in lines)


def format_sequence(sequence):
    """Return sequence data as numbered GenBank lines of 60 letters.

    >>> print(format_sequence("gatcctccatatacaacggtatc"), end="")
            1 gatcctccat atacaacggt atc
    """
    answer = []
    for line_number in range(0, len(sequence), LETTERS_PER_LINE):
        blocks = _chunks(
            sequence[line_number : line_number + LETTERS_PER_LINE], LETTERS_PER_BLOCK
        )
        answer.append(
            "%s %s\n" % (str(line_number + 1).rjust(SEQUENCE_INDENT), " ".join(blocks))
        )
    return "".join(answer)
