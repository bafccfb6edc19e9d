"""
In-memory triple store used while reading test manifests.

The store is append-only: triples are added while a document is parsed,
then the store is frozen and only queried. Queries match a pattern in which
any of subject, predicate, object or graph may be a wildcard.

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

from typing import Dict, Iterator, List, Optional

from .data import Triple
from .utils import RdfTestError


class TripleStore:
    """Append-only triple collection with subject, predicate and object indexes."""

    def __init__(self):
        self._triples: List[Triple] = []
        self._by_subject: Dict[str, List[int]] = {}
        self._by_predicate: Dict[str, List[int]] = {}
        self._by_object: Dict[str, List[int]] = {}
        self._frozen = False

    def __len__(self) -> int:
        return len(self._triples)

    def __iter__(self) -> Iterator[Triple]:
        return iter(self._triples)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def add_triple(self, triple: Triple) -> None:
        """
        Append a triple to the store.

        Raises:
            RdfTestError: If the store has been frozen
        """
        if self._frozen:
            raise RdfTestError("Cannot add triples to a frozen store")
        index = len(self._triples)
        self._triples.append(triple)
        self._by_subject.setdefault(triple.subject, []).append(index)
        self._by_predicate.setdefault(triple.predicate, []).append(index)
        self._by_object.setdefault(triple.object, []).append(index)

    def freeze(self) -> "TripleStore":
        """Make the store read-only and return it."""
        self._frozen = True
        return self

    def find(
        self,
        subject: Optional[str] = None,
        predicate: Optional[str] = None,
        object: Optional[str] = None,
        graph: Optional[str] = None,
    ) -> List[Triple]:
        """
        Find all triples matching a pattern.

        Empty or None pattern terms match anything. Results are returned in
        insertion order.

        Args:
            subject: Subject to match
            predicate: Predicate to match
            object: Object to match
            graph: Graph to match

        Returns:
            List of matching triples
        """
        candidates: Optional[List[int]] = None
        for term, index in (
            (subject, self._by_subject),
            (predicate, self._by_predicate),
            (object, self._by_object),
        ):
            if not term:
                continue
            positions = index.get(term, [])
            if candidates is None or len(positions) < len(candidates):
                candidates = positions

        if candidates is None:
            candidates = range(len(self._triples))

        return [
            triple
            for triple in (self._triples[i] for i in candidates)
            if (not subject or triple.subject == subject)
            and (not predicate or triple.predicate == predicate)
            and (not object or triple.object == object)
            and (not graph or triple.graph == graph)
        ]

    def find_object(self, subject: str, predicate: str) -> Optional[str]:
        """Return the object of the first triple matching subject and predicate."""
        matches = self.find(subject, predicate)
        return matches[0].object if matches else None
