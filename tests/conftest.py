"""
Shared test fixtures and configuration for pytest.
"""

from unittest.mock import Mock

import pytest
from langchain_core.documents import Document
from langchain_core.embeddings import Embeddings

from pdfrag.config import get_settings
from pdfrag.vectorstore.embeddings import EmbeddingManager
from pdfrag.vectorstore.simple_store import SimpleVectorStore


VOCABULARY = ["refund", "shipping", "warranty", "password", "invoice"]


class KeywordEmbeddings(Embeddings):
    """Counts vocabulary words, so related texts get similar vectors."""

    def _embed(self, text: str) -> list[float]:
        words = text.lower().replace(".", " ").replace("?", " ").split()
        return [float(words.count(term)) for term in VOCABULARY]

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        return [self._embed(t) for t in texts]

    def embed_query(self, text: str) -> list[float]:
        return self._embed(text)


@pytest.fixture(autouse=True)
def fresh_settings():
    """Re-read settings and provider singletons for every test."""
    get_settings.cache_clear()
    EmbeddingManager.reset()
    yield
    get_settings.cache_clear()
    EmbeddingManager.reset()


@pytest.fixture
def store():
    return SimpleVectorStore()


@pytest.fixture
def embedding_manager():
    return EmbeddingManager(embeddings=KeywordEmbeddings())


@pytest.fixture
def pdf_pages():
    """
    Patch target for PyPDFLoader keyed by file name.

    Fill the dict with {"file.pdf": ["page 1 text", ...]}; a value that is an
    Exception instance is raised when the file is loaded.
    """
    return {}


@pytest.fixture
def fake_pdf_loader(pdf_pages):
    """A PyPDFLoader replacement that serves text from `pdf_pages`."""
    def make_loader(path):
        name = path.replace("\\", "/").rsplit("/", 1)[-1]
        pages = pdf_pages[name]
        loader = Mock()
        if isinstance(pages, Exception):
            loader.load.side_effect = pages
        else:
            loader.load.return_value = [
                Document(page_content=text, metadata={"page": i})
                for i, text in enumerate(pages)
            ]
        return loader

    return Mock(side_effect=make_loader)
