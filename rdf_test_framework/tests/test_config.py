#!/usr/bin/env python3
"""
Unit tests for test suite configuration and run settings.

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

import dataclasses
import unittest
from pathlib import Path

import sys
import os

sys.path.insert(0, os.path.dirname(__file__))
from test_base import RdfTestFrameworkTestBase
from rdf_test_framework import config


class TestSuiteConfiguration(RdfTestFrameworkTestBase):
    """Test the known test suites."""

    def test_available_suites(self):
        self.assertEqual(
            config.get_available_test_suites(), ["nquads", "ntriples", "trig", "turtle"]
        )

    def test_get_test_suite_config(self):
        suite = config.get_test_suite_config("turtle")
        self.assertEqual(suite.syntax, "turtle")
        self.assertTrue(suite.manifest_url.endswith("/rdf-turtle/manifest.ttl"))
        self.assertEqual(suite.spec_uri, "http://www.w3.org/TR/turtle/")

    def test_unknown_suite(self):
        with self.assertRaises(ValueError) as context:
            config.get_test_suite_config("rdfxml")
        self.assertIn("turtle", str(context.exception))

    def test_every_suite_syntax_is_parseable(self):
        from rdf_test_framework.rdf_parser import SYNTAX_FORMATS

        for suite in config.KNOWN_TEST_SUITES.values():
            self.assertIn(suite.syntax, SYNTAX_FORMATS)


class TestReportMetadata(RdfTestFrameworkTestBase):
    """Test the static report metadata."""

    def test_derived_iris(self):
        metadata = config.ReportMetadata(name="parser", homepage="https://ex.org/parser")
        self.assertEqual(metadata.application, "https://ex.org/parser#parser")
        self.assertEqual(metadata.bug_database, "https://ex.org/parser/issues")

    def test_metadata_is_immutable(self):
        with self.assertRaises(dataclasses.FrozenInstanceError):
            config.DEFAULT_REPORT_METADATA.name = "other"


class TestRunnerSettings(RdfTestFrameworkTestBase):
    """Test defaults applied to run settings."""

    def test_defaults(self):
        suite = config.get_test_suite_config("ntriples")
        settings = config.RunnerSettings(suite=suite, test_folder=self.test_data_dir)
        self.assertEqual(settings.manifest_url, suite.manifest_url)
        self.assertEqual(settings.workers, config.DEFAULT_WORKERS)
        self.assertEqual(settings.compare_tool, "sparql")
        self.assertFalse(settings.skip_negative)
        self.assertEqual(settings.output_folder, self.test_data_dir / "results")
        self.assertEqual(settings.report_file, self.test_data_dir / "results" / "earl-report.ttl")

    def test_default_test_folder(self):
        settings = config.RunnerSettings(suite=config.get_test_suite_config("trig"))
        self.assertEqual(settings.test_folder, Path.cwd() / "rdf-tests" / "trig")

    def test_overrides(self):
        settings = config.RunnerSettings(
            suite=config.get_test_suite_config("turtle"),
            manifest_url="file:///tmp/manifest.ttl",
            workers=1,
            test_folder=str(self.test_data_dir),
            report_file=self.test_data_dir / "report.ttl",
            skip_negative=True,
        )
        self.assertEqual(settings.test_folder, self.test_data_dir)
        self.assertEqual(settings.manifest_url, "file:///tmp/manifest.ttl")
        self.assertEqual(settings.report_file, self.test_data_dir / "report.ttl")
        self.assertTrue(settings.skip_negative)

    def test_workers_must_be_positive(self):
        with self.assertRaises(ValueError):
            config.RunnerSettings(suite=config.get_test_suite_config("turtle"), workers=0)


if __name__ == "__main__":
    unittest.main()
