# Copyright 2019 by Frank Buermann.  All rights reserved.
#
# This code is part of the gbjson distribution and governed by its
# license.  Please see the LICENSE file that should have been included
# as part of this package.
"""Read and write GenBank flat files as a stream of structural events.

Both classes here talk to the outside world through the same small set
of events, mirroring a generic JSON document:

 - start_array() / end_array()
 - start_object() / end_object()
 - key(name)
 - string(text)
 - null()

GenBankScanner produces these events from GenBank text and feeds them to
a consumer (see GbJson.JsonIO.TreeBuilder).  GenBankWriter is such a
consumer, turning the events back into GenBank text.

See Also:
GenBank flat file release notes
ftp://ftp.ncbi.nih.gov/genbank/gbrel.txt

"""
import logging
import warnings

from GbJson import GbJsonParserWarning
from GbJson.LineTypes import (
    FEATURE_KEY_INDENT,
    FEATURE_QUALIFIER_INDENT,
    GENBANK_INDENT,
    KEYWORD_LEVELS,
    MAX_KEYWORD_LEVEL,
    MAX_WIDTH,
    SEQUENCE_DATA_START,
    SUBKEYWORD_INDENT,
    SUBSUBKEYWORD_INDENT,
    is_contig,
    is_continuation,
    is_end,
    is_feature,
    is_feature_header,
    is_keyword,
    is_locus,
    is_origin,
    is_qualifier,
    is_sequence,
)
from GbJson.Wrap import block_pad, format_sequence


def _keep_word_break(back):
    """Right strip a value, keeping one space if there was any (PRIVATE).

    A trailing space marks a line broken between two words, so a single
    one survives to let the writer put the break back in the same place.
    """
    if back[-1:].isspace():
        return back.rstrip() + " "
    return back


class GenBankScanner:
    """Break up GenBank files into structural events.

    Every record from its LOCUS line to the terminating // becomes an
    array of items, and all the records of a file are collected in one
    outer array.  Values are always strings (or null), as GenBank has no
    type system.
    """

    ORIGIN_HEADER = "ORIGIN"

    def __init__(self):
        """Initialize."""
        self.handle = None
        self.line = None
        self.eof = False
        self.open_records = 0

    def set_handle(self, handle):
        """Set the handle attribute."""
        self.handle = handle
        self.line = ""
        self.eof = False
        self.open_records = 0

    def _next_line(self):
        """Advance to the next line, stripped of its line ending (PRIVATE).

        At the end of the input the line becomes an empty string, which
        none of the line classifiers accept.
        """
        line = self.handle.readline()
        if line:
            self.line = line.rstrip("\r\n")
        else:
            self.line = ""
            self.eof = True
        return self.line

    def _fold_continuations(self, text, indent, stop=None):
        """Append any continuation lines to text, joined by new lines (PRIVATE).

        Starts by reading the line after the current one.  The value part of
        each continuation line starts at column indent.  If given, stop is
        called on that value part and ends the fold when true (used to
        spot the next /qualifier line).
        """
        self._next_line()
        while is_continuation(self.line):
            back = self.line[indent:]
            if stop is not None and stop(back):
                break
            text += "\n" + _keep_word_break(back)
            self._next_line()
        return text

    @staticmethod
    def _feed_envelope(consumer, key, value):
        """Pass an item with no sub items to the consumer (PRIVATE).

        The empty list keeps the item the same shape as a keyword item.
        """
        consumer.start_object()
        consumer.key(key)
        consumer.start_array()
        if value is None:
            consumer.null()
        else:
            consumer.string(value)
        consumer.start_array()
        consumer.end_array()
        consumer.end_array()
        consumer.end_object()

    def _feed_locus(self, consumer):
        logging.debug("Found the start of a record:\n" + self.line)
        consumer.start_array()
        self.open_records += 1
        self._feed_envelope(consumer, "LOCUS", self.line[GENBANK_INDENT:])
        self._next_line()

    def _feed_keyword(self, consumer, level):
        """Pass a keyword and its nested sub keywords to the consumer (PRIVATE).

        Level 0 is a keyword (e.g. REFERENCE), 1 a subkeyword (AUTHORS) and
        2 a subsubkeyword (PUBMED).  GenBank allows no deeper nesting.
        """
        key = self.line[:GENBANK_INDENT].strip()
        value = self._fold_continuations(
            _keep_word_break(self.line[GENBANK_INDENT:]), GENBANK_INDENT
        )
        consumer.start_object()
        consumer.key(key)
        consumer.start_array()
        consumer.string(value)
        consumer.start_array()
        if level < MAX_KEYWORD_LEVEL:
            is_nested = KEYWORD_LEVELS[level + 1]
            while is_nested(self.line):
                self._feed_keyword(consumer, level + 1)
        consumer.end_array()
        consumer.end_array()
        consumer.end_object()

    def _feed_qualifier(self, consumer):
        """Pass a /key=value qualifier to the consumer (PRIVATE).

        Qualifiers without a value (e.g. /pseudo) are given a null value.
        """
        text = self._fold_continuations(
            _keep_word_break(self.line[FEATURE_QUALIFIER_INDENT:]),
            FEATURE_QUALIFIER_INDENT,
            stop=is_qualifier,
        )
        key, equals, value = text.partition("=")
        consumer.start_object()
        if equals and value:
            consumer.key(key[1:])
            consumer.string(value)
        else:
            consumer.key(text[1:])
            consumer.null()
        consumer.end_object()

    def _feed_feature(self, consumer):
        """Pass a feature, its location and qualifiers to the consumer (PRIVATE).

        For example this GenBank feature::

             gene            <687..>3158
                             /gene="AXL2"
                             /pseudo

        becomes {"gene": [{"Location": "<687..>3158"}, {"gene": "\\"AXL2\\""},
        {"pseudo": null}]} where the qualifier values keep their quotes.
        """
        key = self.line[:FEATURE_QUALIFIER_INDENT].strip()
        location = self._fold_continuations(
            self.line[FEATURE_QUALIFIER_INDENT:].rstrip(),
            FEATURE_QUALIFIER_INDENT,
            stop=is_qualifier,
        )
        consumer.start_object()
        consumer.key(key)
        consumer.start_array()
        consumer.start_object()
        consumer.key("Location")
        consumer.string(location)
        consumer.end_object()
        while is_continuation(self.line) and is_qualifier(
            self.line[FEATURE_QUALIFIER_INDENT:]
        ):
            self._feed_qualifier(consumer)
        consumer.end_array()
        consumer.end_object()

    def _feed_features(self, consumer):
        logging.debug("Found feature table")
        consumer.start_object()
        consumer.key("FEATURES")
        consumer.start_array()
        self._next_line()
        while is_feature(self.line):
            self._feed_feature(consumer)
        consumer.end_array()
        consumer.end_object()

    def _feed_contig(self, consumer):
        logging.debug("Found CONTIG")
        value = self._fold_continuations(
            _keep_word_break(self.line[GENBANK_INDENT:]), GENBANK_INDENT
        )
        self._feed_envelope(consumer, "CONTIG", value or None)

    def _feed_sequence(self, consumer):
        logging.debug("Found start of sequence")
        seq_lines = []
        while is_sequence(self.line):
            seq_lines.append(self.line[SEQUENCE_DATA_START:])
            self._next_line()
        self._feed_envelope(
            consumer, "SEQUENCE", "".join(seq_lines).replace(" ", "") or None
        )

    def _feed_origin(self, consumer):
        """Pass the ORIGIN line and the following sequence or contig (PRIVATE)."""
        value = self.line[len(self.ORIGIN_HEADER) : MAX_WIDTH].strip()
        self._feed_envelope(consumer, "ORIGIN", value or None)
        self._next_line()
        if is_contig(self.line):
            self._feed_contig(consumer)
        elif is_sequence(self.line):
            self._feed_sequence(consumer)
        else:
            logging.debug("No sequence data after ORIGIN")

    def _feed_item(self, consumer):
        """Classify the current line and pass the item it starts on (PRIVATE)."""
        line = self.line
        if is_locus(line):
            self._feed_locus(consumer)
        elif not self.open_records:
            if is_end(line):
                logging.debug("Skipping // marking end of last record")
            elif line.strip():
                logging.debug("Skipping header line before record:\n" + line)
            self._next_line()
        elif is_end(line):
            consumer.end_array()
            self.open_records -= 1
            self._next_line()
        elif is_origin(line):
            self._feed_origin(consumer)
        elif is_keyword(line) and not is_feature_header(line):
            self._feed_keyword(consumer, 0)
        elif is_feature_header(line):
            self._feed_features(consumer)
        else:
            if line.strip():
                warnings.warn(
                    "Ignoring unexpected line in record: %r" % line,
                    GbJsonParserWarning,
                )
            self._next_line()

    def feed(self, handle, consumer):
        """Feed the contents of a handle to the consumer as events.

        Arguments:
         - handle - A handle with the GenBank text, opened in text mode.
         - consumer - The consumer that should be informed of events.

        A record missing its // line is left open; it is up to the consumer
        to notice the unbalanced events.
        """
        self.set_handle(handle)
        consumer.start_array()
        self._next_line()
        while not self.eof:
            self._feed_item(consumer)
        if self.open_records:
            logging.debug("End of file inside a record")
        consumer.end_array()


# Writer states.  The envelope states cover the (empty) sub item list of
# items which can't have sub items.
START = "START"
LOCUS = "LOCUS"
LOCUS_ENVELOPE = "LOCUS_ENVELOPE"
KEYWORD = "KEYWORD"
SUBKEYWORD = "SUBKEYWORD"
SUBSUBKEYWORD = "SUBSUBKEYWORD"
FEATURE_HEADER = "FEATURE_HEADER"
FEATURE = "FEATURE"
QUALIFIER_LOCATION = "QUALIFIER_LOCATION"
QUALIFIER = "QUALIFIER"
ORIGIN = "ORIGIN"
ORIGIN_ENVELOPE = "ORIGIN_ENVELOPE"
SEQUENCE = "SEQUENCE"
SEQUENCE_ENVELOPE = "SEQUENCE_ENVELOPE"
CONTIG = "CONTIG"
CONTIG_ENVELOPE = "CONTIG_ENVELOPE"
END = "END"


class GenBankWriter:
    """Write GenBank text from structural events.

    This is a finite state machine.  Keys select the state, and the state
    decides how the following string is laid out.  Each array or object
    opened saves the current state, and closing it restores that state.

    The writer trusts its input.  Events which don't follow the layout
    produced by GenBankScanner are rendered as well as they can be, and
    never raise.
    """

    MAX_WIDTH = MAX_WIDTH
    HEADER_WIDTH = GENBANK_INDENT
    QUALIFIER_INDENT = FEATURE_QUALIFIER_INDENT
    QUALIFIER_INDENT_STR = " " * QUALIFIER_INDENT
    FEATURE_HEADER_LINE = "FEATURES".ljust(QUALIFIER_INDENT) + "Location/Qualifiers\n"
    RECORD_END = "//\n"

    # Keys which start an item wrapped in a value/sub item envelope
    ENVELOPE_KEYS = {
        "LOCUS": LOCUS,
        "ORIGIN": ORIGIN,
        "SEQUENCE": SEQUENCE,
        "CONTIG": CONTIG,
    }
    KEY_INDENTS = {
        SUBKEYWORD: SUBKEYWORD_INDENT,
        SUBSUBKEYWORD: SUBSUBKEYWORD_INDENT,
        FEATURE: FEATURE_KEY_INDENT,
    }
    # State entered on opening a list from a given state
    ARRAY_STATES = {
        KEYWORD: SUBKEYWORD,
        SUBKEYWORD: SUBSUBKEYWORD,
        LOCUS: LOCUS_ENVELOPE,
        ORIGIN: ORIGIN_ENVELOPE,
        SEQUENCE: SEQUENCE_ENVELOPE,
        CONTIG: CONTIG_ENVELOPE,
        END: START,
    }
    # State entered on opening an object from a given state
    OBJECT_STATES = {FEATURE_HEADER: FEATURE, FEATURE: QUALIFIER}
    FEATURE_STATES = (FEATURE, QUALIFIER, QUALIFIER_LOCATION)
    KEYWORD_STATES = (KEYWORD, SUBKEYWORD, SUBSUBKEYWORD)

    def __init__(self, handle):
        """Initialize the writer.

        Arguments:
         - handle - Handle to an output file, e.g. as returned
           by open(filename, "w")

        """
        self.handle = handle
        self.state = START
        self.skip_state_update = False
        self.nwritten = 0
        # Saved state and is-a-record flag for each open array or object
        self._frames = []

    def _write(self, text):
        self.handle.write(text)

    def _update_state(self, key):
        """Pick the state for the value following a key (PRIVATE)."""
        if self.state == QUALIFIER and key == "Location":
            self.state = QUALIFIER_LOCATION
        elif self.state == QUALIFIER_LOCATION:
            self.state = QUALIFIER
        elif self.state in (FEATURE, QUALIFIER):
            pass
        elif key in self.ENVELOPE_KEYS:
            self.state = self.ENVELOPE_KEYS[key]
            self.skip_state_update = True
        elif key == "FEATURES":
            self.state = FEATURE_HEADER
        elif self.state in self.KEYWORD_STATES:
            self.skip_state_update = True
        else:
            self.state = KEYWORD
            self.skip_state_update = True

    def start_array(self):
        self._frames.append([self.state, False])
        if self.skip_state_update:
            # This is the envelope, the value comes next
            self.skip_state_update = False
        else:
            self.state = self.ARRAY_STATES.get(self.state, self.state)

    def end_array(self):
        self.state, is_record = self._frames.pop()
        if is_record:
            self._write(self.RECORD_END)
            self.nwritten = 0
            self.state = END

    def start_object(self):
        if self.state == START and self._frames:
            # Items are objects, so the enclosing list is a record
            self._frames[-1][1] = True
        self._frames.append([self.state, False])
        self.state = self.OBJECT_STATES.get(self.state, self.state)

    def end_object(self):
        self.state = self._frames.pop()[0]

    def key(self, name):
        """Write a key, padded up to the column its value starts in."""
        self._update_state(name)

        if self.state in (SEQUENCE, QUALIFIER_LOCATION):
            return
        if self.state == FEATURE_HEADER:
            self._write(self.FEATURE_HEADER_LINE)
            self.nwritten = 0
            return
        if self.state == QUALIFIER:
            text = "%s/%s" % (self.QUALIFIER_INDENT_STR, name)
        else:
            if self.state == FEATURE:
                value_indent = self.QUALIFIER_INDENT
            else:
                value_indent = self.HEADER_WIDTH
            text = (" " * self.KEY_INDENTS.get(self.state, 0) + name).ljust(
                value_indent
            )
        self._write(text)
        self.nwritten = len(text)

    def string(self, value):
        """Write a value laid out according to the current state."""
        if self.state in (LOCUS, ORIGIN):
            self._write(value + "\n")
        elif self.state == SEQUENCE:
            self._write(format_sequence(value))
        else:
            if self.state in self.FEATURE_STATES:
                indent = self.QUALIFIER_INDENT
            else:
                indent = self.HEADER_WIDTH
            if self.state == QUALIFIER:
                self._write("=")
                self.nwritten += 1
            self._write(
                block_pad(value, indent, self.MAX_WIDTH, self.nwritten - indent)
            )
        self.nwritten = 0

    def null(self):
        self._write("\n")
        self.nwritten = 0
