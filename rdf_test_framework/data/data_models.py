"""
Data models for the RDF test runner.

This module contains the data classes passed between the manifest parser,
the executor, the comparer and the report generator.

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

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional


@dataclass(frozen=True)
class Triple:
    """An RDF statement with string-valued terms; graph is "" for the default graph."""

    subject: str
    predicate: str
    object: str
    graph: str = ""


@dataclass
class TestCase:
    """Represents a single manifest entry and, after execution, its outcome."""

    __test__ = False  # not a pytest test class

    id: str
    uri: str
    name: Optional[str] = None
    comment: Optional[str] = None
    type: Optional[str] = None
    action: Optional[str] = None
    result: Optional[str] = None
    negative: bool = False
    skipped: bool = False
    properties: Dict[str, str] = field(default_factory=dict)

    # Execution outcome
    error: Optional[str] = None
    success: Optional[bool] = None
    result_file: Optional[Path] = None
    comparison: Optional[str] = None


@dataclass
class Manifest:
    """Test cases of a manifest in declared order, split by skip status."""

    tests: List[TestCase] = field(default_factory=list)
    skipped: List[TestCase] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.tests) + len(self.skipped)


@dataclass
class ComparisonResult:
    """Represents the result of comparing two serialized graphs."""

    is_match: bool
    diagnostic: Optional[str] = None
    comparison_method: str = "unknown"


@dataclass
class ExecutionResult:
    """Represents the output of running one document through the parser."""

    result_file: Optional[Path]
    error: Optional[str]
    triple_count: int = 0
