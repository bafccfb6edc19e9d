"""
Fixture retrieval and caching for W3C test suites.

Fixtures (the manifest, action documents and expected results) are named
relative to the manifest URL. A fixture is read from the local test folder
when present; otherwise it is downloaded once and stored there for later
runs.

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
import os
import threading
from pathlib import Path, PurePosixPath
from typing import Optional
from urllib.parse import quote, urljoin, urlsplit
from urllib.request import url2pathname

import requests

from .utils import FetchError

logger = logging.getLogger(__name__)


class FixtureCache:
    """Fetches named fixtures, preferring copies stored in the test folder."""

    def __init__(self, test_folder: Path, base_url: str):
        """
        Initialize the cache.

        Args:
            test_folder: Directory where fixtures are stored
            base_url: URL that fixture names are resolved against
        """
        self.test_folder = Path(test_folder)
        self.base_url = base_url

    def resolve_url(self, name: str) -> str:
        """Resolve a fixture name against the base URL."""
        return urljoin(self.base_url, name)

    def local_path(self, name: str) -> Path:
        """
        Get the local path under which a fixture is stored.

        Names that are absolute, or that would leave the test folder, are
        stored under a single URL-quoted file name.

        Args:
            name: Fixture name

        Returns:
            Path inside the test folder
        """
        parts = PurePosixPath(name).parts
        if urlsplit(name).scheme or name.startswith("/") or ".." in parts:
            return self.test_folder / quote(name, safe="")
        return self.test_folder.joinpath(*parts)

    def fetch(self, name: Optional[str]) -> Optional[str]:
        """
        Get the content of a fixture.

        Args:
            name: Fixture name; empty or None means "no fixture"

        Returns:
            Fixture content, or None when no name was given

        Raises:
            FetchError: If the fixture is not cached and cannot be retrieved
        """
        if not name:
            return None

        path = self.local_path(name)
        if path.is_file():
            logger.debug(f"Fixture {name} read from {path}")
            try:
                return path.read_bytes().decode("utf-8")
            except (OSError, UnicodeDecodeError) as e:
                raise FetchError(f"Could not read fixture {path}: {e}", name=name) from e

        url = self.resolve_url(name)
        content = self._retrieve(url, name)
        self._store(path, content)
        return content

    def _retrieve(self, url: str, name: str) -> str:
        """Download or read the fixture at the given URL."""
        logger.debug(f"Fetching fixture {name} from {url}")
        scheme = urlsplit(url).scheme
        if scheme == "file":
            file_path = Path(url2pathname(urlsplit(url).path))
            try:
                return file_path.read_bytes().decode("utf-8")
            except (OSError, UnicodeDecodeError) as e:
                raise FetchError(f"Could not read {url}: {e}", name=name, url=url) from e

        try:
            response = requests.get(url)
            response.raise_for_status()
        except requests.RequestException as e:
            raise FetchError(f"Could not fetch {url}: {e}", name=name, url=url) from e
        # Servers often omit the charset of text/turtle; fixtures are UTF-8
        return response.content.decode("utf-8", errors="replace")

    def _store(self, path: Path, content: str) -> None:
        """Write a fixture into the cache without exposing partial files."""
        path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = path.with_name(
            f".{path.name}.{os.getpid()}.{threading.get_ident()}.tmp"
        )
        try:
            temp_path.write_bytes(content.encode("utf-8"))
            os.replace(temp_path, path)
        except OSError as e:
            temp_path.unlink(missing_ok=True)
            raise FetchError(f"Could not cache fixture at {path}: {e}", name=path.name) from e
        logger.debug(f"Fixture cached at {path}")
