"""
Test configuration and suite management for the RDF Test Framework

This module contains the known W3C test suite definitions, the static
metadata written into EARL reports and the settings of a test run.

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

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

W3C_RDF_TESTS = "https://w3c.github.io/rdf-tests/rdf/rdf11"

DEFAULT_WORKERS = 4
DEFAULT_COMPARE_TOOL = "sparql"


@dataclass(frozen=True)
class TestSuiteConfig:
    """Configuration for a test suite defining its behavior."""

    __test__ = False  # not a pytest test class

    name: str
    title: str
    manifest_url: str
    syntax: str  # Syntax handed to the parser under test
    spec_uri: str  # Specification implemented, for doap:implements
    skip_negative: bool = False


KNOWN_TEST_SUITES: Dict[str, TestSuiteConfig] = {
    "turtle": TestSuiteConfig(
        name="turtle",
        title="Turtle conformance tests",
        manifest_url=f"{W3C_RDF_TESTS}/rdf-turtle/manifest.ttl",
        syntax="turtle",
        spec_uri="http://www.w3.org/TR/turtle/",
    ),
    "ntriples": TestSuiteConfig(
        name="ntriples",
        title="N-Triples conformance tests",
        manifest_url=f"{W3C_RDF_TESTS}/rdf-n-triples/manifest.ttl",
        syntax="ntriples",
        spec_uri="http://www.w3.org/TR/n-triples/",
    ),
    "nquads": TestSuiteConfig(
        name="nquads",
        title="N-Quads conformance tests",
        manifest_url=f"{W3C_RDF_TESTS}/rdf-n-quads/manifest.ttl",
        syntax="nquads",
        spec_uri="http://www.w3.org/TR/n-quads/",
    ),
    "trig": TestSuiteConfig(
        name="trig",
        title="TriG conformance tests",
        manifest_url=f"{W3C_RDF_TESTS}/rdf-trig/manifest.ttl",
        syntax="trig",
        spec_uri="http://www.w3.org/TR/trig/",
    ),
}


def get_test_suite_config(suite_name: str) -> TestSuiteConfig:
    """
    Get configuration for a test suite.

    Args:
        suite_name: Name of the test suite

    Returns:
        TestSuiteConfig for the suite

    Raises:
        ValueError: If the suite is not known
    """
    if suite_name not in KNOWN_TEST_SUITES:
        raise ValueError(
            f"Unknown test suite '{suite_name}'. "
            f"Available suites: {', '.join(get_available_test_suites())}"
        )
    return KNOWN_TEST_SUITES[suite_name]


def get_available_test_suites() -> List[str]:
    """Get the names of all known test suites."""
    return sorted(KNOWN_TEST_SUITES)


@dataclass(frozen=True)
class ReportMetadata:
    """Static description of the software under test and its maintainer for EARL reports."""

    name: str = "rdflib"
    description: str = "RDFLib is a pure Python package for working with RDF."
    homepage: str = "https://github.com/RDFLib/rdflib"
    license: str = "https://opensource.org/licenses/BSD-3-Clause"
    programming_language: str = "Python"
    category: str = "http://dbpedia.org/resource/Resource_Description_Framework"
    download_page: str = "https://pypi.org/project/rdflib/"
    developer: str = "https://rdflib.dev/#team"
    developer_name: str = "RDFLib Team"
    developer_homepage: str = "https://rdflib.dev/"

    @property
    def application(self) -> str:
        """IRI of the software under test."""
        return f"{self.homepage}#{self.name}"

    @property
    def bug_database(self) -> str:
        return f"{self.homepage}/issues"


DEFAULT_REPORT_METADATA = ReportMetadata()


@dataclass
class RunnerSettings:
    """Settings of a single test run."""

    suite: TestSuiteConfig
    manifest_url: Optional[str] = None
    workers: int = DEFAULT_WORKERS
    test_folder: Optional[Path] = None
    report_file: Optional[Path] = None
    compare_tool: str = DEFAULT_COMPARE_TOOL
    preserve_files: bool = False
    test_filter: Optional[str] = None
    skip_negative: Optional[bool] = None
    metadata: ReportMetadata = DEFAULT_REPORT_METADATA

    def __post_init__(self):
        if self.workers < 1:
            raise ValueError(f"workers must be a positive integer, got {self.workers}")
        if self.manifest_url is None:
            self.manifest_url = self.suite.manifest_url
        if self.test_folder is None:
            self.test_folder = Path.cwd() / "rdf-tests" / self.suite.name
        self.test_folder = Path(self.test_folder)
        if self.skip_negative is None:
            self.skip_negative = self.suite.skip_negative
        if self.report_file is None:
            self.report_file = self.output_folder / "earl-report.ttl"

    @property
    def output_folder(self) -> Path:
        """Directory holding the generated reports."""
        return self.test_folder / "results"
