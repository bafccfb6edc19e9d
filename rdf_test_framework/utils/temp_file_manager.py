"""
Temporary N-Quads documents for the external graph comparison tool.

Every comparison writes its expected and actual documents to files of
its own so that comparisons running on different workers never see each
other's data. The files are removed when the manager is closed unless
they were asked to be preserved for debugging.

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
import tempfile
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class TempFileManager:
    """Hands out one private file per document name and removes them on close."""

    def __init__(self, preserve_files: bool = False, directory: Optional[Path] = None):
        """
        Args:
            preserve_files: Leave the files on disk when the manager closes
            directory: Where to create the files; the system default when None
        """
        self.preserve_files = preserve_files
        self.directory = str(directory) if directory else None
        self._paths: Dict[str, Path] = {}

    def get_temp_file_path(self, logical_name: str) -> Path:
        """Return the file reserved for a document name, creating it on first use."""
        path = self._paths.get(logical_name)
        if path is None:
            fd, name = tempfile.mkstemp(
                prefix=f"rdf_test_{os.getpid()}_",
                suffix=f"_{logical_name}",
                dir=self.directory,
            )
            os.close(fd)
            path = self._paths[logical_name] = Path(name)
            logger.debug(f"Reserved {path} for {logical_name}")
        return path

    def write_file(self, logical_name: str, content: str) -> Path:
        """Write a document as UTF-8 and return the file it went to."""
        path = self.get_temp_file_path(logical_name)
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        return path

    def cleanup(self) -> None:
        """Remove every file handed out, or just report them when preserving."""
        if self.preserve_files:
            for logical_name, path in self._paths.items():
                logger.info(f"Preserved {logical_name} comparison input at {path}")
            return

        while self._paths:
            _, path = self._paths.popitem()
            try:
                path.unlink()
            except FileNotFoundError:
                pass
            except OSError as e:
                logger.warning(f"Could not remove temporary file {path}: {e}")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.cleanup()
