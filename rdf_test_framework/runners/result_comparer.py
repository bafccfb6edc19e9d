"""
GraphComparer class for deciding whether two N-Quads documents describe
the same graph.

Comparison is attempted in three tiers, stopping at the first that matches:
exact text, text with canonical blank node labels, and finally an external
comparison tool invoked as `<tool> -d <expected> --compare <actual>`, which
prints `matched` when the graphs are equivalent.

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
import threading
from pathlib import Path
from typing import Optional

from ..config import DEFAULT_COMPARE_TOOL
from ..data import ComparisonResult
from ..utils import (
    ComparisonError,
    TempFileManager,
    find_tool,
    rename_blank_nodes,
    run_command,
)

MATCHED_TOKEN = "matched"


class GraphComparer:
    """Compares actual and expected graph serializations."""

    def __init__(
        self, compare_tool: str = DEFAULT_COMPARE_TOOL, preserve_files: bool = False
    ):
        self.compare_tool = compare_tool
        self.preserve_files = preserve_files
        self.logger = logging.getLogger(__name__)

        self._lock = threading.Lock()
        self._tool_path: Optional[str] = None
        self._tool_checked = False
        self._missing_tool_reported = False

    def compare(self, actual: str, expected: str) -> ComparisonResult:
        """
        Compare two serialized graphs.

        Args:
            actual: Output of the parser under test
            expected: Content of the expected result fixture

        Returns:
            ComparisonResult naming the tier that decided the outcome
        """
        if actual == expected:
            return ComparisonResult(is_match=True, comparison_method="exact")

        if rename_blank_nodes(actual) == rename_blank_nodes(expected):
            return ComparisonResult(is_match=True, comparison_method="blank-node")

        return self._compare_with_oracle(actual, expected)

    def _find_compare_tool(self) -> Optional[str]:
        """Locate the comparison tool once and remember the answer."""
        with self._lock:
            if not self._tool_checked:
                self._tool_path = find_tool(self.compare_tool)
                self._tool_checked = True
            return self._tool_path

    def _report_missing_tool(self) -> None:
        with self._lock:
            if self._missing_tool_reported:
                return
            self._missing_tool_reported = True
        self.logger.warning(
            f"Comparison tool '{self.compare_tool}' not found; graphs that differ "
            "textually will be reported as not matching"
        )

    def _compare_with_oracle(self, actual: str, expected: str) -> ComparisonResult:
        """Compare graphs using the external comparison tool."""
        tool = self._find_compare_tool()
        if tool is None:
            self._report_missing_tool()
            return ComparisonResult(
                is_match=False,
                diagnostic=f"comparison tool '{self.compare_tool}' not found",
                comparison_method="oracle",
            )

        with TempFileManager(preserve_files=self.preserve_files) as temp_files:
            try:
                expected_file = temp_files.write_file("expected.nq", expected)
                actual_file = temp_files.write_file("actual.nq", actual)
                output = self._run_compare_tool(tool, expected_file, actual_file)
            except ComparisonError as e:
                self.logger.debug(f"Comparison tool failed: {e}")
                return ComparisonResult(
                    is_match=False, diagnostic=str(e), comparison_method="oracle"
                )
            except OSError as e:
                return ComparisonResult(
                    is_match=False,
                    diagnostic=f"could not write comparison files: {e}",
                    comparison_method="oracle",
                )

        if output.strip() == MATCHED_TOKEN:
            return ComparisonResult(is_match=True, comparison_method="oracle")
        return ComparisonResult(
            is_match=False, diagnostic=output, comparison_method="oracle"
        )

    def _run_compare_tool(self, tool: str, expected_file: Path, actual_file: Path) -> str:
        """
        Run the comparison tool and return its output.

        Raises:
            ComparisonError: If the tool could not be executed
        """
        cmd = [tool, "-d", str(expected_file), "--compare", str(actual_file)]
        self.logger.debug(f"Running comparison: {' '.join(cmd)}")
        try:
            returncode, stdout, stderr = run_command(cmd)
        except (OSError, ValueError) as e:
            raise ComparisonError(
                f"could not run '{tool}': {e}", comparison_method="oracle"
            ) from e

        if returncode != 0 and stdout.strip() != MATCHED_TOKEN:
            self.logger.debug(f"'{tool}' exited with code {returncode}: {stderr.strip()}")
            return (stdout + stderr) or f"'{tool}' exited with code {returncode}"
        return stdout
