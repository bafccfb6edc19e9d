"""
Utility functions and classes for the RDF test framework.

This package contains the exception hierarchy, logging and command-line
helpers, tool discovery, and the text utilities used when writing and
comparing N-Quads output.

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
import os
import shutil
import subprocess
import sys
from pathlib import Path
from typing import Optional


# Base exception classes
class RdfTestError(Exception):
    """Base exception for RDF test runner errors."""

    pass


class ManifestParsingError(RdfTestError):
    """Raised when the test manifest is malformed or its entry list is broken."""

    pass


# Core utility functions
def setup_logging(
    debug: bool = False, level: Optional[int] = None, stream=sys.stderr
) -> logging.Logger:
    """Setup logging configuration and return logger."""
    if level is None:
        level = logging.DEBUG if debug else logging.INFO

    logging.basicConfig(level=level, format="%(levelname)s: %(message)s", stream=stream)
    logging.getLogger().setLevel(level)
    return logging.getLogger(__name__)


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    """
    Add common command-line arguments used by the test runners.

    Args:
        parser: ArgumentParser instance to add arguments to
    """
    parser.add_argument(
        "-d", "--debug", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--test-folder",
        type=Path,
        help="Directory holding cached fixtures and result files",
    )
    parser.add_argument(
        "--preserve",
        action="store_true",
        help="Preserve temporary comparison files for debugging",
    )


def find_tool(name: str) -> Optional[str]:
    """
    Finds an external tool (like the 'sparql' graph comparer) from an
    environment variable named after it, or else on the system PATH.

    Args:
        name: Name of the tool to find

    Returns:
        Path to the tool if found, None otherwise
    """
    logger = logging.getLogger(__name__)

    env_var = name.upper().replace("-", "_")
    env_val = os.environ.get(env_var)
    if env_val and Path(env_val).is_file():
        logger.debug(f"Found {name} via environment variable {env_var}: {env_val}")
        return env_val

    tool_path_in_path = shutil.which(name)
    if tool_path_in_path:
        logger.debug(f"Found {name} in system PATH: {tool_path_in_path}")
        return tool_path_in_path

    logger.debug(f"Tool '{name}' could not be found.")
    return None


def run_command(cmd: list) -> tuple[int, str, str]:
    """Run a command to completion and return (returncode, stdout, stderr).

    Output is decoded as UTF-8; undecodable bytes become U+FFFD.

    Raises:
        OSError: If the command cannot be started at all
    """
    result = subprocess.run(
        cmd, capture_output=True, encoding="utf-8", errors="replace"
    )
    return result.returncode, result.stdout, result.stderr


# Import utility functions from core_utils
from .core_utils import (
    literal_value,
    escape_iri,
    escape_string,
    to_nquads,
    rename_blank_nodes,
)

# Import utility classes
from .temp_file_manager import TempFileManager

# Import exception classes
from .exceptions import (
    FetchError,
    ParseError,
    ComparisonError,
)

__all__ = [
    # Base exceptions
    "RdfTestError",
    "ManifestParsingError",
    # Custom exceptions
    "FetchError",
    "ParseError",
    "ComparisonError",
    # Core utility functions
    "setup_logging",
    "add_common_arguments",
    "find_tool",
    "run_command",
    # Text helpers
    "literal_value",
    "escape_iri",
    "escape_string",
    "to_nquads",
    "rename_blank_nodes",
    # Managers
    "TempFileManager",
]
