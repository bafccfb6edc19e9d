"""
Test execution for the RDF Test Framework

This module runs the action document of a test case through the parser
under test and captures the emitted triples as N-Quads.

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
from pathlib import Path
from typing import List, Optional
from urllib.parse import urljoin

from .data import ExecutionResult, TestCase, Triple
from .fixtures import FixtureCache
from .rdf_parser import RdfParser
from .utils import ParseError, to_nquads

logger = logging.getLogger(__name__)

RESULT_SUFFIX = "-result.nq"


class TestExecutor:
    """Runs test cases through the parser under test."""

    __test__ = False  # not a pytest test class

    def __init__(self, test_folder: Path, manifest_url: str, syntax: str):
        """
        Initialize the executor.

        Args:
            test_folder: Directory where result files are written
            manifest_url: URL that action names are resolved against
            syntax: Syntax of the action documents
        """
        self.test_folder = Path(test_folder)
        self.manifest_url = manifest_url
        self.syntax = syntax
        self._fixtures = FixtureCache(self.test_folder, manifest_url)

    def result_path(self, test: TestCase) -> Path:
        """Get the file that receives the output for a test."""
        if not test.action:
            return self.test_folder / f"{test.id}{RESULT_SUFFIX}"
        action_path = self._fixtures.local_path(test.action)
        return action_path.with_name(action_path.stem + RESULT_SUFFIX)

    def execute(self, test: TestCase, action_content: Optional[str]) -> ExecutionResult:
        """
        Parse the action document of a test and write the emitted triples.

        A parser error is recorded on the test but does not stop the output
        being written; triples emitted before the error are kept.

        Args:
            test: Test case to run
            action_content: Content of the action fixture

        Returns:
            ExecutionResult with the result file (None if it could not be
            written) and the parser error message
        """
        document_iri = (
            urljoin(self.manifest_url, test.action) if test.action else self.manifest_url
        )
        lines: List[str] = []
        errors: List[ParseError] = []

        def on_triple(error: Optional[ParseError], triple: Optional[Triple]) -> None:
            if error is not None:
                errors.append(error)
            elif triple is not None:
                lines.append(to_nquads(triple))

        RdfParser(self.syntax, document_iri=document_iri).parse(action_content, on_triple)

        test.error = str(errors[0]) if errors else None
        if test.error:
            logger.debug(f"Test {test.id}: parser reported error: {test.error}")

        result_file: Optional[Path] = self.result_path(test)
        try:
            result_file.parent.mkdir(parents=True, exist_ok=True)
            with open(result_file, "w", encoding="utf-8", newline="") as f:
                f.writelines(lines)
        except OSError as e:
            logger.error(f"Could not write result file {result_file}: {e}")
            result_file = None

        test.result_file = result_file
        logger.debug(f"Test {test.id}: output written to {result_file}")
        return ExecutionResult(result_file=result_file, error=test.error, triple_count=len(lines))
