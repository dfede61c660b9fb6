# Copyright 2019 by Frank Buermann.  All rights reserved.
#
# This code is part of the gbjson distribution and governed by its
# license.  Please see the LICENSE file that should have been included
# as part of this package.
"""JSON side of the structural event stream.

TreeBuilder collects events into plain Python lists and dicts, ready for
the json module, while walk_tree does the reverse and replays a parsed
JSON document as events.
"""
import json
import logging

from GbJson import MalformedDocumentError

JSON_INDENT = 4


class TreeBuilder:
    """Build a tree of lists, dicts and strings from structural events.

    >>> builder = TreeBuilder()
    >>> builder.start_array()
    >>> builder.start_object()
    >>> builder.key("pseudo")
    >>> builder.null()
    >>> builder.end_object()
    >>> builder.end_array()
    >>> builder.root
    [{'pseudo': None}]
    >>> builder.is_complete()
    True
    """

    def __init__(self):
        """Initialize an empty builder."""
        self.root = None
        self._has_root = False
        self._stack = []
        self._key = None

    def is_complete(self):
        """Return True if a single value was built and nothing is left open."""
        return self._has_root and not self._stack

    def _add(self, value):
        if not self._stack:
            if self._has_root:
                raise ValueError("Document already complete, got %r" % value)
            self.root = value
            self._has_root = True
        elif isinstance(self._stack[-1], list):
            self._stack[-1].append(value)
        else:
            if self._key is None:
                raise ValueError("Object value %r without a key" % value)
            self._stack[-1][self._key] = value
            self._key = None

    def _close(self, container_type):
        if not self._stack or not isinstance(self._stack[-1], container_type):
            raise ValueError("Unbalanced end of %s" % container_type.__name__)
        self._stack.pop()

    def start_array(self):
        value = []
        self._add(value)
        self._stack.append(value)

    def end_array(self):
        self._close(list)

    def start_object(self):
        value = {}
        self._add(value)
        self._stack.append(value)

    def end_object(self):
        self._close(dict)

    def key(self, name):
        self._key = name

    def string(self, text):
        self._add(text)

    def null(self):
        self._add(None)


def walk_tree(value, consumer):
    """Feed a parsed JSON value to the consumer as structural events.

    Lists and dicts are walked depth first, in order.  Numbers and booleans
    have no event of their own and are passed on as their JSON text, so
    {"codon_start": 1} reads the same as {"codon_start": "1"}.
    """
    if value is None:
        consumer.null()
    elif isinstance(value, str):
        consumer.string(value)
    elif isinstance(value, list):
        consumer.start_array()
        for item in value:
            walk_tree(item, consumer)
        consumer.end_array()
    elif isinstance(value, dict):
        consumer.start_object()
        for key, item in value.items():
            consumer.key(key)
            walk_tree(item, consumer)
        consumer.end_object()
    else:
        logging.debug("Passing JSON %s %r on as text" % (type(value).__name__, value))
        consumer.string(json.dumps(value))


def dumps(tree):
    """Return the tree as indented JSON text."""
    return json.dumps(tree, indent=JSON_INDENT, ensure_ascii=False)


def loads(text):
    """Parse JSON text into a tree of lists, dicts and strings.

    Raises MalformedDocumentError if the text isn't valid JSON.
    """
    try:
        return json.loads(text)
    except json.JSONDecodeError as err:
        raise MalformedDocumentError(
            "Unable to parse JSON: %s" % err, "json2gb"
        ) from err
