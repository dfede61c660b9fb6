# Copyright 2019 by Frank Buermann.  All rights reserved.
#
# This code is part of the gbjson distribution and governed by its
# license.  Please see the LICENSE file that should have been included
# as part of this package.

"""Interconvert GenBank flat files and JSON.

A GenBank record is turned into a JSON array of single-key objects, one
per top level item (LOCUS, each keyword, FEATURES, ORIGIN and SEQUENCE or
CONTIG).  Apart from FEATURES every item has the same shape, a two element
array holding the value and a list of sub items::

    [
        [
            {"LOCUS": ["SCU49845     5028 bp    DNA      PLN 21-JUN-1999", []]},
            {"DEFINITION": ["Saccharomyces cerevisiae TCP1-beta gene.", []]},
            {"FEATURES": [
                {"source": [{"Location": "1..5028"}, {"db_xref": "\\"taxon:4932\\""}]}
            ]},
            {"ORIGIN": [null, []]},
            {"SEQUENCE": ["gatcctccat", []]}
        ]
    ]

The two functions you want are:

    - gb2json   Convert a string of GenBank records into a JSON string.
    - json2gb   Convert a JSON string back into GenBank records.

>>> from GbJson import gb2json, json2gb
>>> text = "LOCUS       test\\n//\\n"
>>> json2gb(gb2json(text)) == text
True

Exceptions:
 - GbJsonError              Base class, carries the raising operation in .source
 - IncompleteDocumentError  GenBank input ended inside a record (missing //)
 - MalformedDocumentError   JSON input could not be parsed

"""

from io import StringIO

__version__ = "0.1.0"

# Text encoding of GenBank and JSON files
ENCODING = "utf-8"


class GbJsonWarning(Warning):
    """gbjson warning.

    gbjson should use this warning (or subclasses of it), making it easy to
    silence all our warning messages should you wish to:

    >>> import warnings
    >>> from GbJson import GbJsonWarning
    >>> warnings.simplefilter('ignore', GbJsonWarning)

    """

    pass


class GbJsonParserWarning(GbJsonWarning):
    """gbjson parser warning.

    Some GenBank files contain lines the parser does not understand.  These
    are skipped with this warning rather than treated as fatal.
    """

    pass


class GbJsonError(Exception):
    """Failure converting a document.

    The source attribute names the operation which raised the error.
    """

    def __init__(self, msg, source=None):
        """Initialize with a message and the name of the failing operation."""
        super().__init__(msg)
        self.msg = msg
        self.source = source


class IncompleteDocumentError(GbJsonError):
    """GenBank input ended with a record still open."""

    pass


class MalformedDocumentError(GbJsonError):
    """JSON input could not be parsed."""

    pass


def read_file(filename, encoding=ENCODING):
    """Return the contents of a text file as a string.

    Raises OSError if the file can't be read, and UnicodeDecodeError if it
    is not valid text in the given encoding (UTF-8 by default).
    """
    with open(filename, encoding=encoding) as handle:
        return handle.read()


def gb2json(text):
    """Convert GenBank text into JSON text.

    Raises IncompleteDocumentError if a record is not closed by a // line,
    in which case no JSON is returned.

    >>> print(gb2json("LOCUS       test\\n//\\n"))
    [
        [
            {
                "LOCUS": [
                    "test",
                    []
                ]
            }
        ]
    ]

    """
    from GbJson.GenBankIO import GenBankScanner
    from GbJson.JsonIO import TreeBuilder, dumps

    builder = TreeBuilder()
    GenBankScanner().feed(StringIO(text, newline=None), builder)
    if not builder.is_complete():
        raise IncompleteDocumentError("Incomplete GenBank", "gb2json")
    return dumps(builder.root)


def json2gb(text):
    """Convert JSON text into GenBank text.

    Raises MalformedDocumentError if the JSON can't be parsed.  The GenBank
    writer itself renders any parseable JSON on a best effort basis.

    >>> print(json2gb('[[{"LOCUS": ["test", []]}]]'), end="")
    LOCUS       test
    //

    """
    from GbJson.GenBankIO import GenBankWriter
    from GbJson.JsonIO import loads, walk_tree

    tree = loads(text)
    handle = StringIO()
    walk_tree(tree, GenBankWriter(handle))
    return handle.getvalue()
