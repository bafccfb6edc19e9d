"""
RDF Test Framework

Runs the W3C RDF syntax test suites (Turtle, N-Triples, N-Quads, TriG)
against rdflib and writes an EARL report of the outcome.

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

# Framework metadata
__version__ = "1.0.0"
__author__ = "David Beckett"
__email__ = "dave@dajobe.org"
__license__ = "LGPL/GPL/Apache"

# Re-export main classes for convenience
from .config import (
    TestSuiteConfig,
    ReportMetadata,
    RunnerSettings,
    KNOWN_TEST_SUITES,
    get_test_suite_config,
    get_available_test_suites,
)
from .data import Triple, TestCase, Manifest, ComparisonResult, ExecutionResult
from .test_types import TestResult, TestTypeResolver, Namespaces
from .triple_store import TripleStore
from .rdf_parser import RdfParser
from .fixtures import FixtureCache
from .manifest import ManifestParser
from .execution import TestExecutor
from .utils import (
    RdfTestError,
    ManifestParsingError,
    FetchError,
    ParseError,
    ComparisonError,
    setup_logging,
    rename_blank_nodes,
    to_nquads,
)

# Re-export runners for direct access
from .runners import TestOrchestrator, GraphComparer, EarlReportGenerator

__all__ = [
    # Configuration
    "TestSuiteConfig",
    "ReportMetadata",
    "RunnerSettings",
    "KNOWN_TEST_SUITES",
    "get_test_suite_config",
    "get_available_test_suites",
    # Data models
    "Triple",
    "TestCase",
    "Manifest",
    "ComparisonResult",
    "ExecutionResult",
    # Types
    "TestResult",
    "TestTypeResolver",
    "Namespaces",
    # Components
    "TripleStore",
    "RdfParser",
    "FixtureCache",
    "ManifestParser",
    "TestExecutor",
    "TestOrchestrator",
    "GraphComparer",
    "EarlReportGenerator",
    # Errors and helpers
    "RdfTestError",
    "ManifestParsingError",
    "FetchError",
    "ParseError",
    "ComparisonError",
    "setup_logging",
    "rename_blank_nodes",
    "to_nquads",
]
