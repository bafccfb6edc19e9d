"""
Custom exceptions for the RDF test runner.

This module provides specific exception types for the error conditions
that can occur while fetching fixtures, parsing documents and comparing
results.

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

from typing import Optional

from . import RdfTestError


class FetchError(RdfTestError):
    """Raised when a fixture cannot be retrieved from disk or the network."""

    def __init__(self, message: str, name: Optional[str] = None, url: Optional[str] = None):
        super().__init__(message)
        self.name = name
        self.url = url


class ParseError(RdfTestError):
    """Raised when the parser under test rejects a document."""

    def __init__(self, message: str, document_iri: Optional[str] = None):
        super().__init__(message)
        self.document_iri = document_iri


class ComparisonError(RdfTestError):
    """Raised when the external graph comparison tool could not be run."""

    def __init__(self, message: str, comparison_method: Optional[str] = None):
        super().__init__(message)
        self.comparison_method = comparison_method
