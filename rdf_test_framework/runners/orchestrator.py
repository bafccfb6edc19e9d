"""
Test Orchestrator

This module drives a complete conformance run: it fetches and parses the
manifest, executes the tests on a bounded worker pool, verifies each
result, prints a status line per test and a summary, and writes the EARL
report.

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

import argparse
import logging
import sys
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import List, Optional

from ..config import (
    DEFAULT_COMPARE_TOOL,
    DEFAULT_WORKERS,
    RunnerSettings,
    get_available_test_suites,
    get_test_suite_config,
)
from ..data import TestCase
from ..execution import TestExecutor
from ..fixtures import FixtureCache
from ..manifest import ManifestParser
from ..test_types import TestResult, TestTypeResolver
from ..utils import FetchError, RdfTestError, add_common_arguments, setup_logging
from .earl_report import EarlReportGenerator
from .result_comparer import GraphComparer

logger = logging.getLogger(__name__)

EMPTY_CONTENT = "(empty)"


# ANSI color codes
class Colors:
    """ANSI color codes for terminal output."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    GREY = "\033[90m"


STATUS_COLORS = {
    TestResult.PASSED: Colors.GREEN,
    TestResult.FAILED: Colors.RED,
    TestResult.SKIPPED: Colors.YELLOW,
}


def positive_int(value: str) -> int:
    """argparse type for a strictly positive integer."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{value}' is not an integer")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


class TestOrchestrator:
    """Runs the tests of one manifest and reports their outcome."""

    __test__ = False  # not a pytest test class

    def __init__(self, settings: Optional[RunnerSettings] = None):
        self.settings = settings
        self._display_lock = threading.Lock()

    # --- Test run ---

    def run(self, manifest_url: Optional[str] = None) -> bool:
        """
        Run every test of a manifest.

        Args:
            manifest_url: Manifest to run (defaults to the configured one)

        Returns:
            True if every non-skipped test succeeded

        Raises:
            FetchError: If the manifest cannot be retrieved
            ManifestParsingError: If the manifest is malformed
        """
        settings = self.settings
        manifest_url = manifest_url or settings.manifest_url
        print(self.paint(settings.suite.title, Colors.BOLD))

        fixtures = FixtureCache(settings.test_folder, manifest_url)
        manifest_name = manifest_url[manifest_url.rfind("/") + 1 :]
        manifest_text = fixtures.fetch(manifest_name)
        if manifest_text is None:
            raise FetchError(f"No manifest file name in {manifest_url}", url=manifest_url)

        manifest = ManifestParser(
            manifest_url,
            skip_negative=settings.skip_negative,
            test_filter=settings.test_filter,
        ).parse(manifest_text)

        executor = TestExecutor(settings.test_folder, manifest_url, settings.suite.syntax)
        comparer = GraphComparer(settings.compare_tool, settings.preserve_files)

        tests = self.execute_tests(manifest.tests, fixtures, executor, comparer)

        score = sum(1 for test in tests if test.success)
        for test in manifest.skipped:
            self.verify_result(test, None, comparer)
        summary = (
            f"* passed {score} out of {len(manifest.tests)} tests "
            f"({len(manifest.skipped)} skipped)"
        )
        print(self.paint(summary, Colors.BOLD))

        EarlReportGenerator(
            manifest_url,
            settings.suite.spec_uri,
            report_file=settings.report_file,
            metadata=settings.metadata,
        ).generate(tests)

        return all(test.success for test in tests)

    def execute_tests(
        self,
        tests: List[TestCase],
        fixtures: FixtureCache,
        executor: TestExecutor,
        comparer: GraphComparer,
    ) -> List[TestCase]:
        """
        Execute tests on the worker pool.

        Returns:
            The tests in the order given, whatever order they finished in
        """
        results: List[Optional[TestCase]] = [None] * len(tests)
        with ThreadPoolExecutor(
            max_workers=self.settings.workers, thread_name_prefix="rdf-test"
        ) as pool:
            futures = {
                pool.submit(self.run_test, test, fixtures, executor, comparer): index
                for index, test in enumerate(tests)
            }
            for future in as_completed(futures):
                results[futures[future]] = future.result()
        return results

    def run_test(
        self,
        test: TestCase,
        fixtures: FixtureCache,
        executor: TestExecutor,
        comparer: GraphComparer,
    ) -> TestCase:
        """
        Fetch the fixtures of one test, execute it and verify the result.

        Any error is recorded on the test, which then fails; it never
        reaches the other workers.
        """
        expected: Optional[str] = None
        try:
            with ThreadPoolExecutor(max_workers=2) as fetch_pool:
                action_future = fetch_pool.submit(fixtures.fetch, test.action)
                result_future = fetch_pool.submit(fixtures.fetch, test.result)
                action_content = action_future.result()
                expected = result_future.result()

            execution = executor.execute(test, action_content)
            logger.debug(
                f"Test {test.id}: {execution.triple_count} triples, "
                f"error={execution.error!r}"
            )
            self.verify_result(test, expected, comparer)
        except RdfTestError as e:
            logger.warning(f"Test {test.id}: {e}")
            self._fail_test(test, e, expected)
        except Exception as e:
            logger.exception(f"Test {test.id}: unexpected error")
            self._fail_test(test, e, expected)
        return test

    def _fail_test(self, test: TestCase, error: Exception, expected: Optional[str]) -> None:
        test.error = str(error) or error.__class__.__name__
        test.success = False
        self.display_result(test, expected)

    def verify_result(
        self, test: TestCase, expected: Optional[str], comparer: GraphComparer
    ) -> bool:
        """
        Decide whether a test succeeded and display the outcome.

        Negative and skipped tests succeed when an error occurred. Positive
        tests without an expected result succeed when none occurred; the
        others succeed when the output matches the expected result.
        """
        results_match: Optional[bool] = None
        actual: Optional[str] = None
        if not (test.skipped or test.negative) and test.result:
            if test.result_file is None:
                results_match = False
            else:
                actual = self._read_result_file(test)
                if actual is None:
                    results_match = False
                else:
                    outcome = comparer.compare(actual, expected or "")
                    logger.debug(
                        f"Test {test.id}: compared with {outcome.comparison_method}, "
                        f"match={outcome.is_match}"
                    )
                    results_match = outcome.is_match
                    test.comparison = outcome.diagnostic

        test.success = TestTypeResolver.determine_test_result(
            negative=test.negative,
            skipped=test.skipped,
            error_occurred=test.error is not None,
            has_expected_result=bool(test.result),
            results_match=results_match,
        )
        self.display_result(test, expected, actual)
        return test.success

    def _read_result_file(self, test: TestCase) -> Optional[str]:
        try:
            return test.result_file.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Could not read result file {test.result_file}: {e}")
            test.comparison = f"could not read {test.result_file}: {e}"
            return None

    def display_result(
        self, test: TestCase, expected: Optional[str], actual: Optional[str] = None
    ) -> None:
        """Print the status line of a test, with details when it failed."""
        if test.skipped:
            status = TestResult.SKIPPED
        elif test.success:
            status = TestResult.PASSED
        else:
            status = TestResult.FAILED

        paint = self.paint
        header = [paint(test.name or test.id, Colors.BOLD) + ":"]
        if test.comment:
            header.append(test.comment)
        header.append(paint(status.display_name(), Colors.BOLD, STATUS_COLORS[status]))
        lines = [" ".join(header)]

        if status == TestResult.FAILED:
            if actual is None and test.result_file is not None and test.result_file.exists():
                actual = self._read_result_file(test)
            lines.append(paint((expected or EMPTY_CONTENT).rstrip("\n"), Colors.GREY))
            lines.append(paint("  was expected, but got", Colors.BOLD, Colors.GREY))
            lines.append(paint((actual or EMPTY_CONTENT).rstrip("\n"), Colors.GREY))
            lines.append(
                paint("  error: ", Colors.BOLD, Colors.GREY)
                + paint(test.error or "(none)", Colors.GREY)
            )
            if test.comparison:
                lines.append(paint(f"  comparison: {test.comparison.rstrip()}", Colors.GREY))

        with self._display_lock:
            print("\n".join(lines), flush=True)

    def paint(self, text: str, *codes: str) -> str:
        """Wrap text in ANSI codes when stdout is a terminal."""
        isatty = getattr(sys.stdout, "isatty", None)
        if not codes or not (isatty and isatty()):
            return text
        return "".join(codes) + text + Colors.RESET

    # --- Command line ---

    def setup_argument_parser(self) -> argparse.ArgumentParser:
        """Setup argument parser for the orchestrator."""
        parser = argparse.ArgumentParser(
            description="Run W3C RDF syntax test suites against rdflib",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  %(prog)s turtle
  %(prog)s ntriples -w 8 --skip-negative
  %(prog)s turtle --test-case turtle-syntax-bad-struct-01
            """,
        )

        parser.add_argument(
            "suite",
            choices=get_available_test_suites(),
            help="Test suite to run",
        )
        parser.add_argument(
            "--manifest",
            help="Manifest URL (defaults to the W3C manifest of the suite)",
        )
        parser.add_argument(
            "-w",
            "--workers",
            type=positive_int,
            default=DEFAULT_WORKERS,
            help=f"Number of tests run in parallel (default: {DEFAULT_WORKERS})",
        )
        parser.add_argument(
            "--skip-negative",
            action="store_true",
            help="Do not count negative tests; only show whether they failed to parse",
        )
        parser.add_argument(
            "--earl-report",
            type=Path,
            help="Path of the EARL report (default: TEST_FOLDER/results/earl-report.ttl)",
        )
        parser.add_argument(
            "--compare-tool",
            default=DEFAULT_COMPARE_TOOL,
            help="Graph comparison tool invoked as TOOL -d EXPECTED --compare ACTUAL "
            f"(default: {DEFAULT_COMPARE_TOOL})",
        )
        parser.add_argument(
            "--test-case",
            help="Run only the test with this id or name",
        )
        add_common_arguments(parser)

        return parser

    def process_arguments(self, args: argparse.Namespace) -> RunnerSettings:
        """Process arguments and setup orchestrator state."""
        setup_logging(debug=args.debug)

        self.settings = RunnerSettings(
            suite=get_test_suite_config(args.suite),
            manifest_url=args.manifest,
            workers=args.workers,
            test_folder=args.test_folder,
            report_file=args.earl_report,
            compare_tool=args.compare_tool,
            preserve_files=args.preserve,
            test_filter=args.test_case,
            skip_negative=True if args.skip_negative else None,
        )
        logger.debug(f"Settings: {self.settings}")
        return self.settings

    def main(self, argv: Optional[List[str]] = None) -> int:
        """Main entry point for a test run."""
        parser = self.setup_argument_parser()
        args = parser.parse_args(argv)
        self.process_arguments(args)

        try:
            success = self.run()
        except Exception as e:
            logger.exception(f"ERROR: {e}")
            return 1

        return 0 if success else 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for a test run."""
    orchestrator = TestOrchestrator()
    return orchestrator.main(argv)


if __name__ == "__main__":
    sys.exit(main())
