"""
Vector Store Module
===================

Handles document embeddings and in-memory similarity search.
"""

from pdfrag.vectorstore.embeddings import EmbeddingManager, create_embeddings
from pdfrag.vectorstore.simple_store import (
    SearchResult,
    SimpleVectorStore,
    cosine_similarity,
)

__all__ = [
    "EmbeddingManager",
    "create_embeddings",
    "SearchResult",
    "SimpleVectorStore",
    "cosine_similarity",
]
