"""
Core text utilities for the RDF test framework.

This module contains the helpers for handling the string form of RDF
terms, writing triples as N-Quads lines and canonicalizing blank node
labels.

Terms are plain strings: IRIs are bare, blank nodes start with "_:" and
literals are the raw lexical value between double quotes, optionally
followed by "@lang" or "^^datatypeIRI".

Copyright (C) 2025, David Beckett https://www.dajobe.org/

This package is Free Software and part of Redland http://librdf.org/

It is licensed under the following three licenses as alternatives:
  1. GNU Lesser General Public License (LGPL) V2.1 or any newer version
  2. GNU General Public License (GPL) V2 or any newer version
  3. Apache License, V2.0 or any newer version

You may not use this file except in compliance with at least one of
the above three licenses.

See LICENSE.html or LICENSE.txt at the top of this package for the
complete terms and further detail along with the license texts for
the licenses in COPYING.LIB, COPYING and LICENSE-2.0.txt respectively.
"""

import re
from typing import Dict, Optional

# Blank node label: a run of non-space characters where a dot is only
# allowed when another non-space character follows it.
BLANK_NODE_RE = re.compile(r"(^|\s)_:((?:[^\s.]|\.(?=\S))+)")

_STRING_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
}


def is_blank_node(term: Optional[str]) -> bool:
    """Return True if the term is a blank node label."""
    return bool(term) and term.startswith("_:")


def is_literal(term: Optional[str]) -> bool:
    """Return True if the term is a literal."""
    return bool(term) and term.startswith('"')


def literal_value(term: Optional[str]) -> Optional[str]:
    """
    Return the lexical value of a literal term.

    Non-literal terms are returned unchanged.

    Args:
        term: Term string such as '"chat"@fr' or '"1"^^http://...#integer'

    Returns:
        The text between the outer quotes, or the term itself
    """
    if not is_literal(term):
        return term
    end = term.rfind('"')
    if end == 0:
        return term[1:]
    return term[1:end]


def _escape_unicode(value: str) -> str:
    """Escape characters outside printable ASCII as \\uXXXX or \\UXXXXXXXX."""
    result = []
    for char in value:
        code = ord(char)
        if 32 <= code < 127:
            result.append(char)
        elif code <= 0xFFFF:
            result.append(f"\\u{code:04X}")
        else:
            result.append(f"\\U{code:08X}")
    return "".join(result)


def escape_iri(value: str) -> str:
    """
    Escape the characters of an IRI for N-Quads output.

    Blank nodes are returned unchanged.

    Args:
        value: IRI string

    Returns:
        IRI with non-ASCII characters written as unicode escapes
    """
    if is_blank_node(value):
        return value
    return _escape_unicode(value)


def escape_string(value: Optional[str]) -> str:
    """
    Escape a plain string and wrap it in double quotes.

    Args:
        value: Unescaped text (None is treated as empty)

    Returns:
        Quoted string usable in N-Quads and Turtle documents
    """
    if not value:
        return '""'
    escaped = "".join(_STRING_ESCAPES.get(char, char) for char in value)
    return '"' + _escape_unicode(escaped) + '"'


def format_term(term: str) -> str:
    """Format a single term for an N-Quads line."""
    if is_blank_node(term):
        return term
    if is_literal(term):
        end = term.rfind('"')
        suffix = term[end + 1 :] if end > 0 else ""
        if suffix.startswith("^^"):
            suffix = "^^<" + escape_iri(suffix[2:]) + ">"
        return escape_string(literal_value(term)) + suffix
    return "<" + escape_iri(term) + ">"


def to_nquads(triple) -> str:
    """
    Convert a triple to an N-Quads line.

    Args:
        triple: Object with subject, predicate, object and graph attributes

    Returns:
        One line ending with a newline; the graph term, when present, is
        written before the final period
    """
    parts = [
        format_term(triple.subject),
        format_term(triple.predicate),
        format_term(triple.object),
    ]
    if triple.graph:
        parts.append(format_term(triple.graph))
    return " ".join(parts) + " .\n"


def rename_blank_nodes(nquads: str) -> str:
    """
    Assign incrementing labels to the blank nodes of an N-Quads fragment.

    Labels are rewritten to _:b0, _:b1, ... in order of first appearance.
    Applying the function to its own output returns the same text.

    Args:
        nquads: Text holding blank node labels

    Returns:
        Text with canonical blank node labels
    """
    blanks: Dict[str, str] = {}

    def replace(match: "re.Match") -> str:
        head, name = match.group(1), match.group(2)
        if name not in blanks:
            blanks[name] = f"_:b{len(blanks)}"
        return head + blanks[name]

    return BLANK_NODE_RE.sub(replace, nquads)
