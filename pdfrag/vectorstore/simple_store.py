"""
Simple Vector Store
===================

In-memory vector store for document chunks, ranked by cosine similarity.

HOW IT WORKS:
1. Each chunk is stored as (id, text, embedding), appended in arrival order
2. A query embedding is compared against every stored embedding
3. Records are sorted by score (highest first), ties keep arrival order
4. The top `limit` records are returned as (id, text, score)

There is no index: every search is a full linear scan, O(N * D).
That is fine for a few hundred chunks from a handful of PDFs.
The store holds no lock; concurrent callers must serialize access themselves.
"""

import logging
import math
from dataclasses import dataclass
from typing import Sequence

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_LIMIT = 3


@dataclass(frozen=True)
class SearchResult:
    """A ranked match returned by `SimpleVectorStore.search`."""
    id: str
    text: str
    score: float


def cosine_similarity(vec_a: Sequence[float], vec_b: Sequence[float]) -> float:
    """
    Calculate cosine similarity between two vectors.

    Returns NaN when either vector is the zero vector. Magnitudes come from
    math.hypot and both vectors are scaled to unit length before the dot
    product, so very small (or very large) components neither underflow
    to a false zero vector nor overflow.

    Raises:
        ValueError: If the vectors have different dimensions
    """
    if len(vec_a) != len(vec_b):
        raise ValueError(
            f"Embedding dimension mismatch: {len(vec_a)} != {len(vec_b)}"
        )

    magnitude_a = math.hypot(*vec_a)
    magnitude_b = math.hypot(*vec_b)
    if magnitude_a == 0 or magnitude_b == 0:
        return math.nan

    return sum((a / magnitude_a) * (b / magnitude_b) for a, b in zip(vec_a, vec_b))


def _rank_key(score: float) -> tuple[int, float]:
    # NaN cannot be ordered, so it sorts after every real score
    if math.isnan(score):
        return (1, 0.0)
    return (0, -score)


class SimpleVectorStore:
    """
    Holds embedded document chunks and answers top-k similarity queries.

    Ids are not required to be unique; adding the same id twice keeps
    both records.

    Usage:
        store = SimpleVectorStore()
        store.add("guide.pdf_chunk_0", "Some text...", [0.1, 0.2, ...])
        for result in store.search(query_embedding, limit=3):
            print(result.id, result.score)
    """

    def __init__(self) -> None:
        self._ids: list[str] = []
        self._documents: list[str] = []
        self._embeddings: list[list[float]] = []

    def add(self, id: str, text: str, embedding: Sequence[float]) -> bool:
        """
        Add a document with its embedding to the end of the store.

        Args:
            id: Identifier for the document (not checked for uniqueness)
            text: Document text
            embedding: Vector embedding for the document

        Returns:
            True once the record is stored
        """
        self._ids.append(id)
        self._documents.append(text)
        self._embeddings.append(list(embedding))
        logger.debug(f"Added {id} ({len(self._ids)} records stored)")
        return True

    def search(
        self,
        query_embedding: Sequence[float],
        limit: int = DEFAULT_SEARCH_LIMIT,
    ) -> list[SearchResult]:
        """
        Search for the documents most similar to the query embedding.

        Args:
            query_embedding: Vector embedding of the query
            limit: Maximum number of results to return

        Returns:
            Up to `limit` SearchResult objects, highest score first
        """
        scores = [
            cosine_similarity(query_embedding, embedding)
            for embedding in self._embeddings
        ]

        # sorted() is stable, so equal scores keep insertion order
        ranked = sorted(range(len(scores)), key=lambda i: _rank_key(scores[i]))

        return [
            SearchResult(id=self._ids[i], text=self._documents[i], score=scores[i])
            for i in ranked[:limit]
        ]

    def similarity(self, vec_a: Sequence[float], vec_b: Sequence[float]) -> float:
        """Score a single pair of vectors the same way `search` does."""
        return cosine_similarity(vec_a, vec_b)

    @property
    def ids(self) -> list[str]:
        """Stored ids in insertion order."""
        return list(self._ids)

    @property
    def is_empty(self) -> bool:
        return not self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(records={len(self)})"
