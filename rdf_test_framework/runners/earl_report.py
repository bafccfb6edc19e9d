"""
EARL report generation for the RDF Test Framework.

The report is a Turtle document in the EARL (Evaluation and Report
Language) vocabulary: a description of the software under test and its
developer, followed by one test case resource with a single assertion for
every executed test.

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
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional
from urllib.parse import urljoin

from ..config import DEFAULT_REPORT_METADATA, ReportMetadata
from ..data import TestCase
from ..test_types import Namespaces
from ..utils import escape_iri, escape_string

logger = logging.getLogger(__name__)

# Test ids that can be written as manifest:<id>
LOCAL_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_-]*$")


class EarlReportGenerator:
    """Writes test outcomes as an EARL report in Turtle."""

    def __init__(
        self,
        manifest_url: str,
        spec_uri: str,
        report_file: Optional[Path] = None,
        metadata: ReportMetadata = DEFAULT_REPORT_METADATA,
    ):
        """
        Initialize the generator.

        Args:
            manifest_url: URL of the manifest the tests come from
            spec_uri: Specification implemented by the software under test
            report_file: File to write; the report is only returned when None
            metadata: Description of the software under test
        """
        self.manifest_url = manifest_url
        self.spec_uri = spec_uri
        self.report_file = Path(report_file) if report_file else None
        self.metadata = metadata

    def generate(self, tests: Iterable[TestCase]) -> str:
        """
        Generate the report for the given tests.

        Every assertion carries the same timestamp, taken once when
        generation starts.

        Args:
            tests: Executed test cases with their success set

        Returns:
            The report document
        """
        date = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
        date = date.replace("+00:00", "Z")

        lines: List[str] = []
        lines.extend(self._header(date))
        count = 0
        for test in tests:
            lines.append("")
            lines.extend(self._test_case(test, date))
            count += 1
        report = "\n".join(lines) + "\n"

        if self.report_file:
            self.report_file.parent.mkdir(parents=True, exist_ok=True)
            self.report_file.write_text(report, encoding="utf-8")
            logger.info(f"EARL report with {count} assertions written to {self.report_file}")
        return report

    def _header(self, date: str) -> List[str]:
        meta = self.metadata
        application = meta.application
        developer = meta.developer
        description = escape_string(meta.description)

        lines = [f"@prefix {prefix}: <{uri}>." for prefix, uri in Namespaces.PREFIXES.items()]
        lines.append(f"@prefix manifest: <{escape_iri(self.manifest_url)}#>.")
        lines.append("")
        lines.extend(
            [
                f"<> foaf:primaryTopic <{application}>;",
                f'  dc:issued "{date}"^^xsd:dateTime;',
                f"  foaf:maker <{developer}>.",
                "",
                f"<{application}> a earl:Software, earl:TestSubject, doap:Project;",
                f"  doap:name {escape_string(meta.name)};",
                f"  doap:homepage <{meta.homepage}>;",
                f"  doap:license <{meta.license}>;",
                f"  doap:programming-language {escape_string(meta.programming_language)};",
                f"  doap:implements <{self.spec_uri}>;",
                f"  doap:category <{meta.category}>;",
                f"  doap:download-page <{meta.download_page}>;",
                f"  doap:bug-database <{meta.bug_database}>;",
                f"  doap:developer <{developer}>;",
                f"  doap:maintainer <{developer}>;",
                f"  doap:documenter <{developer}>;",
                f"  doap:maker <{developer}>;",
                f"  dc:title {escape_string(meta.name)};",
                f"  dc:description {description}@en;",
                f"  doap:description {description}@en;",
                f"  dc:creator <{developer}>.",
                "",
                f"<{developer}> a foaf:Person, earl:Assertor;",
                f"  foaf:name {escape_string(meta.developer_name)};",
                f"  foaf:homepage <{meta.developer_homepage}>.",
            ]
        )
        return lines

    def _test_node(self, test: TestCase) -> str:
        """Name a test as manifest:<id>, or by full IRI if the id is not a valid local name."""
        if LOCAL_NAME_RE.match(test.id):
            return f"manifest:{test.id}"
        return f"<{escape_iri(urljoin(self.manifest_url, '#' + test.id))}>"

    def _test_case(self, test: TestCase, date: str) -> List[str]:
        node = self._test_node(test)
        outcome = "passed" if test.success else "failed"

        lines = [
            f"{node} a earl:TestCriterion, earl:TestCase;",
            f"  dc:title {escape_string(test.name)};",
            f"  dc:description {escape_string(test.comment)};",
        ]
        if test.action:
            lines.append(f"  mf:action <{escape_iri(urljoin(self.manifest_url, test.action))}>;")
        if test.result:
            lines.append(f"  mf:result <{escape_iri(urljoin(self.manifest_url, test.result))}>;")
        lines.extend(
            [
                "  earl:assertions (",
                "     [ a earl:Assertion;",
                f"       earl:assertedBy <{self.metadata.developer}>;",
                f"       earl:test {node};",
                f"       earl:subject <{self.metadata.application}>;",
                "       earl:mode earl:automatic;",
                f"       earl:result [ a earl:TestResult; earl:outcome earl:{outcome}; "
                f'dc:date "{date}"^^xsd:dateTime ]]',
                "  ).",
            ]
        )
        return lines
