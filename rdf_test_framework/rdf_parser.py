"""
Adapter around the RDF parser under test.

The framework talks to the parser through a narrow contract: parse a text
and call back once per emitted triple, then once more at the end with the
error (if any) and no triple. This module implements that contract on top
of rdflib, parsing triple syntaxes into a Graph and quad syntaxes into a
Dataset.

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

import logging
from typing import Callable, Iterator, Optional

import rdflib
from rdflib import BNode, Dataset, Graph, Literal
from rdflib.graph import DATASET_DEFAULT_GRAPH_ID

from .data import Triple
from .utils import ParseError

logger = logging.getLogger(__name__)

# Syntax name -> rdflib parser format
SYNTAX_FORMATS = {
    "turtle": "turtle",
    "ntriples": "nt",
    "nquads": "nquads",
    "trig": "trig",
}

QUAD_SYNTAXES = {"nquads", "trig"}

ParseCallback = Callable[[Optional[ParseError], Optional[Triple]], None]


def term_to_string(term) -> str:
    """
    Convert an rdflib term to the framework's string form.

    Args:
        term: URIRef, BNode or Literal

    Returns:
        Bare IRI, "_:label" for blank nodes, or a quoted literal with an
        optional "@lang" or "^^datatype" suffix
    """
    if isinstance(term, BNode):
        return f"_:{term}"
    if isinstance(term, Literal):
        value = f'"{term}"'
        if term.language:
            return f"{value}@{term.language}"
        if term.datatype:
            return f"{value}^^{term.datatype}"
        return value
    return str(term)


class RdfParser:
    """Parses RDF documents with rdflib and reports triples through a callback."""

    def __init__(self, syntax: str = "turtle", document_iri: Optional[str] = None):
        """
        Initialize the parser.

        Creating a parser switches off rdflib literal normalisation for the
        whole process (rdflib.NORMALIZE_LITERALS is a module global), so
        typed literals keep the lexical form written in the document rather
        than becoming e.g. "1" for "01"^^xsd:integer.

        Args:
            syntax: One of the keys of SYNTAX_FORMATS
            document_iri: Base IRI used to resolve relative IRIs

        Raises:
            ValueError: If the syntax is not supported
        """
        if syntax not in SYNTAX_FORMATS:
            raise ValueError(
                f"Unsupported syntax '{syntax}'. "
                f"Supported: {', '.join(sorted(SYNTAX_FORMATS))}"
            )
        self.syntax = syntax
        self.document_iri = document_iri
        rdflib.NORMALIZE_LITERALS = False

    def parse(self, text: Optional[str], callback: ParseCallback) -> None:
        """
        Parse a document and report its triples.

        The callback receives (None, triple) for every triple, then exactly
        one final call (error, None). Triples produced before a syntax error
        are still reported.

        Args:
            text: Document content
            callback: Function called with (error, triple)
        """
        graph = Dataset() if self.syntax in QUAD_SYNTAXES else Graph()
        error: Optional[ParseError] = None

        if text:
            try:
                graph.parse(
                    data=text,
                    format=SYNTAX_FORMATS[self.syntax],
                    publicID=self.document_iri,
                )
            except Exception as e:
                # rdflib raises a variety of exception types for bad input
                logger.debug(f"Parse error in {self.document_iri}: {e}")
                error = ParseError(str(e) or e.__class__.__name__, self.document_iri)

        for triple in self._iter_triples(graph):
            callback(None, triple)
        callback(error, None)

    def _iter_triples(self, graph) -> Iterator[Triple]:
        if isinstance(graph, Dataset):
            for s, p, o, g in graph.quads((None, None, None, None)):
                g = getattr(g, "identifier", g)
                graph_term = (
                    "" if g is None or g == DATASET_DEFAULT_GRAPH_ID else term_to_string(g)
                )
                yield Triple(
                    term_to_string(s), term_to_string(p), term_to_string(o), graph_term
                )
        else:
            for s, p, o in graph.triples((None, None, None)):
                yield Triple(term_to_string(s), term_to_string(p), term_to_string(o))
