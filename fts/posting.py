"""
Document and inverted index data structures.

The inverted index maps each term to a posting list: the ascending,
duplicate-free list of ids of the documents containing that term.
AND queries are answered by intersecting posting lists with a linear merge,
which is only correct because every posting list stays sorted.
"""

from dataclasses import dataclass, field
from typing import Iterable, Iterator

from .tokenizer import analyze


@dataclass(frozen=True)
class Document:
    """
    One corpus entry.
    - id: sequential integer assigned at load time, starting at 0
    - text: body used for indexing (the abstract)
    - title, url: display metadata
    - url_sha1: SHA-1 digest of url
    """

    id: int
    text: str
    title: str = ""
    url: str = ""
    url_sha1: bytes = field(default=b"", repr=False)


def intersection(a: list[int], b: list[int]) -> list[int]:
    """
    Return the ids present in both a and b.
    Both inputs must be strictly increasing; the result is too.
    """
    result: list[int] = []
    i = j = 0
    while i < len(a) and j < len(b):
        if a[i] < b[j]:
            i += 1
        elif a[i] > b[j]:
            j += 1
        else:
            result.append(a[i])
            i += 1
            j += 1
    return result


class InvertedIndex:
    """
    Inverted index: map from term -> sorted list of document ids.
    Built once with add(), then queried with search().
    """

    def __init__(self) -> None:
        self._index: dict[str, list[int]] = {}

    def add(self, documents: Iterable[Document]) -> None:
        """
        Index documents in the order given.
        Ids must be increasing across calls; re-adding an id already present
        leaves the postings undefined.
        """
        for doc in documents:
            for term in analyze(doc.text):
                ids = self._index.get(term)
                if ids is None:
                    self._index[term] = [doc.id]
                elif ids[-1] != doc.id:
                    ids.append(doc.id)

    def search(self, query: str) -> list[int]:
        """
        Return ids of documents containing every term of query, ascending.
        A query that analyzes to no terms matches nothing; so does a query
        with any term missing from the index.
        """
        result: list[int] | None = None
        for term in analyze(query):
            ids = self._index.get(term)
            if ids is None:
                return []
            if result is None:
                result = list(ids)
            else:
                result = intersection(result, ids)
        return result if result is not None else []

    def get_postings(self, term: str) -> list[int]:
        """Return the posting list for an already analyzed term, or empty list."""
        return self._index.get(term, [])

    def tokens(self) -> Iterator[str]:
        """Iterate over all terms in the index."""
        return iter(self._index)

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, term: str) -> bool:
        return term in self._index

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InvertedIndex):
            return NotImplemented
        return self._index == other._index

    def __repr__(self) -> str:
        return f"InvertedIndex(terms={len(self._index)})"

    def to_dict(self) -> dict[str, list[int]]:
        """Return a plain copy of the term -> posting list mapping."""
        return {term: list(ids) for term, ids in self._index.items()}

    @classmethod
    def from_dict(cls, postings: dict[str, list[int]]) -> "InvertedIndex":
        """Build an index from a term -> posting list mapping (lists taken as sorted)."""
        index = cls()
        index._index = {term: list(ids) for term, ids in postings.items()}
        return index
