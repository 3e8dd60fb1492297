"""
Tests for the FastAPI routes.
"""

from unittest.mock import AsyncMock, Mock, patch

import pytest
from fastapi.testclient import TestClient
from langchain_core.messages import AIMessage

from pdfrag import __version__
from pdfrag.api import routes
from pdfrag.main import create_app
from pdfrag.services.document_service import DocumentService
from pdfrag.services.rag_service import NO_RESULTS_ANSWER, RAGService


@pytest.fixture
def llm():
    llm = Mock()
    llm.ainvoke = AsyncMock(return_value=AIMessage(content="Refunds take 5 days."))
    return llm


@pytest.fixture
def services(monkeypatch, store, embedding_manager, llm):
    """Point the route singletons at an isolated store and fake providers."""
    documents = DocumentService(store, embedding_manager)
    rag = RAGService(store, embedding_manager, llm=llm)
    monkeypatch.setattr(routes, "_vector_store", store)
    monkeypatch.setattr(routes, "_document_service", documents)
    monkeypatch.setattr(routes, "_rag_service", rag)
    return documents, rag


@pytest.fixture
def client(services):
    return TestClient(create_app(ingest_on_startup=False))


class TestHealth:
    """Test cases for GET /api/v1/health."""

    def test_empty_store(self, client):
        response = client.get("/api/v1/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "healthy",
            "version": __version__,
            "vector_store_ready": False,
            "document_count": 0,
        }

    def test_counts_chunks(self, client, store):
        store.add("a", "refund text", [1, 0, 0, 0, 0])

        data = client.get("/api/v1/health").json()

        assert data["vector_store_ready"] is True
        assert data["document_count"] == 1


class TestQuery:
    """Test cases for POST /api/v1/query."""

    def test_empty_store_gives_fallback(self, client, llm):
        response = client.post("/api/v1/query", json={"query": "refund?"})

        assert response.status_code == 200
        assert response.json()["answer"] == NO_RESULTS_ANSWER
        llm.ainvoke.assert_not_awaited()

    def test_answer_with_sources(self, client, store):
        store.add("r", "Refunds take 5 days.", [1, 0, 0, 0, 0])
        store.add("s", "Shipping is free.", [0, 1, 0, 0, 0])

        response = client.post("/api/v1/query", json={"query": "refund time?", "top_k": 1})

        assert response.status_code == 200
        data = response.json()
        assert data["answer"] == "Refunds take 5 days."
        assert data["sources"] == [
            {"id": "r", "content": "Refunds take 5 days.", "score": 1.0}
        ]

    def test_sources_can_be_omitted(self, client, store):
        store.add("r", "Refunds take 5 days.", [1, 0, 0, 0, 0])

        response = client.post(
            "/api/v1/query", json={"query": "refund?", "include_sources": False}
        )

        assert response.json()["sources"] == []

    def test_zero_vector_score_is_null(self, client, store):
        store.add("blank", "", [0, 0, 0, 0, 0])

        response = client.post("/api/v1/query", json={"query": "refund?"})

        assert response.status_code == 200
        assert response.json()["sources"][0]["score"] is None

    def test_failure_returns_500(self, client, store, llm):
        store.add("r", "Refunds take 5 days.", [1, 0, 0, 0, 0])
        llm.ainvoke.side_effect = RuntimeError("quota exceeded")

        response = client.post("/api/v1/query", json={"query": "refund?"})

        assert response.status_code == 500
        assert "quota exceeded" in response.json()["detail"]

    def test_empty_query_rejected(self, client):
        response = client.post("/api/v1/query", json={"query": ""})

        assert response.status_code == 422


class TestIngest:
    """Test cases for the ingestion endpoints."""

    def test_ingest_directory(self, client, store, tmp_path, pdf_pages, fake_pdf_loader):
        (tmp_path / "faq.pdf").write_bytes(b"%PDF")
        pdf_pages["faq.pdf"] = ["Invoice copies are emailed monthly."]

        with patch("pdfrag.services.document_service.PyPDFLoader", fake_pdf_loader):
            response = client.post("/api/v1/ingest", json={"directory": str(tmp_path)})

        assert response.status_code == 200
        data = response.json()
        assert data["documents_processed"] == 1
        assert data["chunks_created"] == 1
        assert data["errors"] == []
        assert store.ids == ["faq.pdf_chunk_0"]

    def test_ingest_missing_directory(self, client, tmp_path):
        response = client.post(
            "/api/v1/ingest", json={"directory": str(tmp_path / "missing")}
        )

        assert response.status_code == 200
        assert response.json()["errors"][0].startswith("Directory not found")

    def test_ingest_text(self, client, store):
        response = client.post(
            "/api/v1/ingest/text",
            json={"text": "Warranty claims need a receipt.", "source_name": "notes"},
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "chunks_created": 1,
            "source": "notes",
        }
        assert store.ids == ["notes_chunk_0"]

    def test_ingest_text_failure_returns_500(self, client, services):
        documents, _ = services
        with patch.object(
            documents, "ingest_text", AsyncMock(side_effect=RuntimeError("boom"))
        ):
            response = client.post("/api/v1/ingest/text", json={"text": "hello"})

        assert response.status_code == 500
        assert "boom" in response.json()["detail"]

    def test_document_count(self, client, store):
        store.add("a", "one", [1.0])
        store.add("a", "two", [1.0])

        assert client.get("/api/v1/documents/count").json() == {
            "count": 2,
            "ready": True,
        }


def test_root_redirects_to_docs(client):
    response = client.get("/", follow_redirects=False)

    assert response.status_code == 307
    assert response.headers["location"] == "/docs"
