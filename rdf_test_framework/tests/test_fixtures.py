#!/usr/bin/env python3
"""
Unit tests for the FixtureCache class.

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

import unittest
from unittest.mock import patch, MagicMock

import sys
import os

import requests

sys.path.insert(0, os.path.dirname(__file__))
from test_base import RdfTestFrameworkTestBase, MANIFEST_URL
from rdf_test_framework import FetchError, FixtureCache


def mock_response(content, status_code=200):
    response = MagicMock(status_code=status_code, content=content)
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Error")
    return response


class TestFixtureCache(RdfTestFrameworkTestBase):
    """Test fixture lookup, download and caching."""

    def setUp(self):
        """Set up test fixtures."""
        super().setUp()
        self.cache = FixtureCache(self.test_data_dir, MANIFEST_URL)

    def test_empty_name_returns_none(self):
        with patch("requests.get") as mock_get:
            self.assertIsNone(self.cache.fetch(None))
            self.assertIsNone(self.cache.fetch(""))
            mock_get.assert_not_called()

    def test_cached_fixture_is_read_from_disk(self):
        self.write_fixture("a.ttl", "<a> <b> <c> .\r\n")
        with patch("requests.get") as mock_get:
            self.assertEqual(self.cache.fetch("a.ttl"), "<a> <b> <c> .\r\n")
            mock_get.assert_not_called()

    def test_miss_downloads_and_stores(self):
        with patch("requests.get", return_value=mock_response("é .\n".encode("utf-8"))) as mock_get:
            self.assertEqual(self.cache.fetch("sub/b.ttl"), "é .\n")
            mock_get.assert_called_once_with("http://example.org/suite/sub/b.ttl")

        stored = self.test_data_dir / "sub" / "b.ttl"
        self.assertEqual(stored.read_bytes().decode("utf-8"), "é .\n")

        with patch("requests.get") as mock_get:
            self.assertEqual(self.cache.fetch("sub/b.ttl"), "é .\n")
            mock_get.assert_not_called()

    def test_http_error_raises_fetch_error(self):
        with patch("requests.get", return_value=mock_response(b"", status_code=404)):
            with self.assertRaises(FetchError) as context:
                self.cache.fetch("missing.ttl")
        self.assertEqual(context.exception.url, "http://example.org/suite/missing.ttl")
        self.assertFalse((self.test_data_dir / "missing.ttl").exists())

    def test_connection_error_raises_fetch_error(self):
        with patch("requests.get", side_effect=requests.ConnectionError("refused")):
            with self.assertRaises(FetchError):
                self.cache.fetch("c.ttl")

    def test_failed_store_leaves_no_partial_file(self):
        with patch("requests.get", return_value=mock_response(b"<a> <b> <c> .\n")):
            with patch("os.replace", side_effect=OSError("disk full")):
                with self.assertRaises(FetchError) as context:
                    self.cache.fetch("e.ttl")
        self.assertIn("disk full", str(context.exception))
        self.assertEqual(list(self.test_data_dir.iterdir()), [])

    def test_file_url(self):
        source_dir = self.test_data_dir / "source"
        self.write_fixture("source/manifest.ttl", "# manifest\n")
        self.write_fixture("source/d.nt", "<x> <y> <z> .\n")
        cache = FixtureCache(self.test_data_dir / "cache", source_dir.as_uri() + "/manifest.ttl")

        self.assertEqual(cache.fetch("d.nt"), "<x> <y> <z> .\n")
        self.assertTrue((self.test_data_dir / "cache" / "d.nt").exists())

    def test_missing_file_url_raises_fetch_error(self):
        cache = FixtureCache(self.test_data_dir / "cache", self.test_data_dir.as_uri() + "/m.ttl")
        with self.assertRaises(FetchError):
            cache.fetch("nothing-here.nt")

    def test_resolve_url(self):
        self.assertEqual(
            self.cache.resolve_url("x.ttl"), "http://example.org/suite/x.ttl"
        )
        self.assertEqual(
            self.cache.resolve_url("http://other.org/y.ttl"), "http://other.org/y.ttl"
        )

    def test_local_path_stays_in_test_folder(self):
        self.assertEqual(self.cache.local_path("a/b.ttl"), self.test_data_dir / "a" / "b.ttl")
        for name in ("http://other.org/y.ttl", "../escape.ttl", "/etc/passwd"):
            path = self.cache.local_path(name)
            self.assertEqual(path.parent, self.test_data_dir)


if __name__ == "__main__":
    unittest.main()
