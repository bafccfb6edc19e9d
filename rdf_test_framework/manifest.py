"""
Manifest parsing for the RDF Test Framework.

A W3C test manifest is a Turtle document whose mf:entries property points
at an RDF collection (rdf:first / rdf:rest cells ending in rdf:nil). This
module parses the manifest into a TripleStore and walks that collection to
produce the test cases in declared order.

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
from typing import Dict, Iterator, List, Optional

from .data import Manifest, TestCase, Triple
from .rdf_parser import RdfParser
from .test_types import Namespaces, TestTypeResolver
from .triple_store import TripleStore
from .utils import ManifestParsingError, ParseError, literal_value

logger = logging.getLogger(__name__)


class ManifestParser:
    """
    Turns a manifest document into an ordered list of test cases.
    """

    def __init__(
        self,
        manifest_url: str,
        skip_negative: bool = False,
        test_filter: Optional[str] = None,
    ):
        """
        Initialize manifest parser.

        Args:
            manifest_url: URL of the manifest; base for relative IRIs
            skip_negative: Mark negative tests as skipped
            test_filter: Only keep the test whose id or name equals this
        """
        self.manifest_url = manifest_url
        self.skip_negative = skip_negative
        self.test_filter = test_filter
        self.base_url = manifest_url[: manifest_url.rfind("/") + 1]

    def parse(self, text: str) -> Manifest:
        """
        Parse a manifest document.

        Args:
            text: Manifest content in Turtle

        Returns:
            Manifest with tests and skipped cases in list order

        Raises:
            ManifestParsingError: If the document does not parse, has no
                mf:entries list or the list is broken
        """
        store = self.load_triples(text)

        manifest = Manifest()
        seen_ids = set()
        for entry in self.iter_manifest_entries(store):
            test = self.build_test_case(store, entry)
            if test.id in seen_ids:
                raise ManifestParsingError(f"Duplicate test id '{test.id}' in manifest")
            seen_ids.add(test.id)

            if self.test_filter and self.test_filter not in (test.id, test.name):
                continue

            if test.skipped:
                manifest.skipped.append(test)
            else:
                manifest.tests.append(test)

        logger.debug(
            f"Manifest {self.manifest_url}: {len(manifest.tests)} tests, "
            f"{len(manifest.skipped)} skipped"
        )
        return manifest

    def load_triples(self, text: str) -> TripleStore:
        """Parse the manifest text into a frozen TripleStore."""
        store = TripleStore()
        errors: List[ParseError] = []

        def on_triple(error: Optional[ParseError], triple: Optional[Triple]) -> None:
            if error is not None:
                errors.append(error)
            elif triple is not None:
                store.add_triple(triple)

        RdfParser("turtle", document_iri=self.manifest_url).parse(text, on_triple)
        if errors:
            raise ManifestParsingError(
                f"Could not parse manifest {self.manifest_url}: {errors[0]}"
            ) from errors[0]

        logger.debug(f"Manifest {self.manifest_url} has {len(store)} triples")
        return store.freeze()

    def iter_manifest_entries(self, store: TripleStore) -> Iterator[str]:
        """
        Iterate over the mf:entries list and yield each entry identifier.

        Args:
            store: Triples of the manifest

        Yields:
            str: Each entry IRI or blank node, in list order
        """
        heads = store.find(predicate=Namespaces.ENTRIES)
        if not heads:
            raise ManifestParsingError("Could not find mf:entries list.")

        visited = set()
        cell = heads[0].object
        while cell != Namespaces.NIL:
            if cell in visited:
                raise ManifestParsingError(f"mf:entries list loops back to {cell}")
            visited.add(cell)

            entry = store.find_object(cell, Namespaces.FIRST)
            if entry is None:
                raise ManifestParsingError(f"List cell {cell} has no rdf:first")
            yield entry

            rest = store.find_object(cell, Namespaces.REST)
            if rest is None:
                raise ManifestParsingError(f"List cell {cell} has no rdf:rest")
            cell = rest

    def build_test_case(self, store: TripleStore, entry: str) -> TestCase:
        """Create a TestCase from the triples describing a manifest entry."""
        properties: Dict[str, str] = {}
        for triple in store.find(subject=entry):
            key = Namespaces.fragment_name(triple.predicate)
            if key:
                properties[key] = triple.object

        test_type = properties.get("type")
        negative = TestTypeResolver.is_negative(test_type)

        return TestCase(
            id=self.test_id(entry),
            uri=entry,
            name=literal_value(properties.get("name")),
            comment=literal_value(properties.get("comment")),
            type=test_type,
            action=self.fixture_name(properties.get("action")),
            result=self.fixture_name(properties.get("result")),
            negative=negative,
            skipped=self.skip_negative and negative,
            properties=properties,
        )

    def test_id(self, entry: str) -> str:
        """Get the id of an entry: its fragment relative to the manifest."""
        prefix = self.manifest_url + "#"
        if entry.startswith(prefix):
            return entry[len(prefix) :]
        return Namespaces.fragment_name(entry) or entry

    def fixture_name(self, iri: Optional[str]) -> Optional[str]:
        """Convert an IRI under the manifest directory to a relative fixture name."""
        if not iri:
            return None
        if self.base_url and iri.startswith(self.base_url):
            return iri[len(self.base_url) :]
        return iri
