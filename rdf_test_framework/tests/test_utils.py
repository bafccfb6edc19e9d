#!/usr/bin/env python3
"""
Unit tests for utility functions and the temporary file manager.

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
import unittest
from unittest.mock import patch, MagicMock

import sys
import os

sys.path.insert(0, os.path.dirname(__file__))
from test_base import RdfTestFrameworkTestBase
from rdf_test_framework.utils import (
    RdfTestError,
    FetchError,
    ParseError,
    ComparisonError,
    ManifestParsingError,
    TempFileManager,
    add_common_arguments,
    find_tool,
    run_command,
    setup_logging,
)


class TestUtilityFunctions(RdfTestFrameworkTestBase):
    """Test utility functions."""

    def test_find_tool_in_path(self):
        with patch.dict(os.environ, {}, clear=False):
            os.environ.pop("MOCK_TOOL", None)
            with patch("shutil.which", return_value="/usr/bin/mock-tool"):
                self.assertEqual(find_tool("mock-tool"), "/usr/bin/mock-tool")

    def test_find_tool_from_environment(self):
        tool = self.write_fixture("bin/sparql", "#!/bin/sh\n")
        with patch.dict(os.environ, {"SPARQL": str(tool)}):
            with patch("shutil.which", return_value=None):
                self.assertEqual(find_tool("sparql"), str(tool))

    def test_find_tool_not_found(self):
        with patch.dict(os.environ, {}, clear=False):
            os.environ.pop("MOCK_TOOL", None)
            with patch("shutil.which", return_value=None):
                self.assertIsNone(find_tool("mock-tool"))

    def test_run_command_returns_output(self):
        mock_result = MagicMock(returncode=3, stdout="out", stderr="err")
        with patch("subprocess.run", return_value=mock_result) as mock_run:
            self.assertEqual(run_command(["tool", "-x"]), (3, "out", "err"))
            self.assertEqual(mock_run.call_args[0][0], ["tool", "-x"])

    def test_run_command_replaces_undecodable_output(self):
        script = "import sys; sys.stdout.buffer.write(b\"not \\xff\\xfe matched\\n\")"
        returncode, stdout, stderr = run_command([sys.executable, "-c", script])
        self.assertEqual(returncode, 0)
        self.assertEqual(stdout, "not \ufffd\ufffd matched\n")
        self.assertEqual(stderr, "")

    def test_run_command_missing_executable_raises(self):
        with patch("subprocess.run", side_effect=FileNotFoundError("no such file")):
            with self.assertRaises(OSError):
                run_command(["missing-tool"])

    def test_setup_logging_levels(self):
        with patch("logging.basicConfig") as mock_config:
            setup_logging(debug=True)
            self.assertEqual(mock_config.call_args[1]["level"], logging.DEBUG)
            setup_logging()
            self.assertEqual(mock_config.call_args[1]["level"], logging.INFO)

    def test_add_common_arguments(self):
        parser = argparse.ArgumentParser()
        add_common_arguments(parser)
        args = parser.parse_args(["-d", "--test-folder", "/tmp/x", "--preserve"])
        self.assertTrue(args.debug)
        self.assertTrue(args.preserve)
        self.assertEqual(str(args.test_folder), "/tmp/x")

    def test_exception_hierarchy(self):
        for error_class in (FetchError, ParseError, ComparisonError, ManifestParsingError):
            self.assertTrue(issubclass(error_class, RdfTestError))
        error = FetchError("boom", name="a.ttl", url="http://ex/a.ttl")
        self.assertEqual(str(error), "boom")
        self.assertEqual(error.url, "http://ex/a.ttl")


class TestTempFileManager(RdfTestFrameworkTestBase):
    """Test the TempFileManager class."""

    def test_write_and_cleanup(self):
        manager = TempFileManager(directory=self.test_data_dir)
        path = manager.write_file("expected.nq", "<a> <b> <c> .\n")
        self.assertTrue(path.exists())
        self.assertTrue(path.name.endswith("_expected.nq"))
        self.assertEqual(path.read_text(encoding="utf-8"), "<a> <b> <c> .\n")
        manager.cleanup()
        self.assertFalse(path.exists())

    def test_same_logical_name_reuses_path(self):
        with TempFileManager(directory=self.test_data_dir) as manager:
            first = manager.get_temp_file_path("actual.nq")
            self.assertEqual(manager.get_temp_file_path("actual.nq"), first)
            self.assertNotEqual(manager.get_temp_file_path("expected.nq"), first)

    def test_managers_use_distinct_files(self):
        with TempFileManager(directory=self.test_data_dir) as one:
            with TempFileManager(directory=self.test_data_dir) as two:
                self.assertNotEqual(
                    one.get_temp_file_path("actual.nq"), two.get_temp_file_path("actual.nq")
                )

    def test_preserve_mode_keeps_files(self):
        with TempFileManager(preserve_files=True, directory=self.test_data_dir) as manager:
            path = manager.write_file("actual.nq", "")
        self.assertTrue(path.exists())


if __name__ == "__main__":
    unittest.main()
