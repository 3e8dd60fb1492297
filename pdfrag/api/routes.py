"""
API Routes
==========

FastAPI endpoints for the PDF RAG assistant.

ENDPOINTS:
- GET /health: Health check endpoint
- POST /query: Ask a question about the ingested PDFs
- POST /ingest: Ingest every PDF in a directory
- POST /ingest/text: Ingest raw text
- GET /documents/count: Number of stored chunks
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException

from pdfrag.schemas.models import (
    QueryRequest,
    QueryResponse,
    IngestionRequest,
    IngestionResponse,
    TextIngestionRequest,
    HealthResponse,
)
from pdfrag.services.document_service import DocumentService
from pdfrag.services.rag_service import RAGService
from pdfrag.vectorstore.embeddings import EmbeddingManager
from pdfrag.vectorstore.simple_store import SimpleVectorStore
from pdfrag import __version__

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["rag"])

# Lazy initialization of services
# Both services share one in-memory store for the life of the process
_vector_store: Optional[SimpleVectorStore] = None
_document_service: Optional[DocumentService] = None
_rag_service: Optional[RAGService] = None


def get_vector_store() -> SimpleVectorStore:
    """Get or create the process-wide vector store."""
    global _vector_store
    if _vector_store is None:
        _vector_store = SimpleVectorStore()
    return _vector_store


def get_document_service() -> DocumentService:
    """Get or create the document service instance."""
    global _document_service
    if _document_service is None:
        _document_service = DocumentService(get_vector_store(), EmbeddingManager())
    return _document_service


def get_rag_service() -> RAGService:
    """Get or create the RAG service instance."""
    global _rag_service
    if _rag_service is None:
        _rag_service = RAGService(get_vector_store(), EmbeddingManager())
    return _rag_service


# =============================================================================
# Health Check
# =============================================================================

@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Check if the API is running and the vector store has chunks",
)
async def health_check() -> HealthResponse:
    """Return the API status and the vector store size."""
    store = get_vector_store()

    return HealthResponse(
        status="healthy",
        version=__version__,
        vector_store_ready=not store.is_empty,
        document_count=len(store),
    )


# =============================================================================
# Query Endpoint
# =============================================================================

@router.post(
    "/query",
    response_model=QueryResponse,
    summary="Submit Query",
    description="Ask a question about the ingested documents",
)
async def submit_query(request: QueryRequest) -> QueryResponse:
    """
    Answer a question from the ingested documents.

    Raises:
        HTTPException: If embedding or answer generation fails
    """
    try:
        service = get_rag_service()

        if not service.is_ready:
            logger.warning("Query received but no documents in knowledge base")

        response = await service.answer(request.query, request.top_k)

        logger.info(
            f"Query processed: {request.query[:50]}... -> "
            f"{len(response.answer)} chars, {len(response.sources)} sources"
        )

        if not request.include_sources:
            response.sources = []
        return response

    except Exception as e:
        logger.error(f"Query processing failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Failed to process query: {str(e)}"
        )


# =============================================================================
# Document Ingestion
# =============================================================================

@router.post(
    "/ingest",
    response_model=IngestionResponse,
    summary="Ingest PDFs",
    description="Ingest every PDF in a directory into the knowledge base",
)
async def ingest_documents(request: IngestionRequest) -> IngestionResponse:
    """Ingest the PDFs in request.directory, or in settings.pdf_directory."""
    try:
        service = get_document_service()
        response = await service.process_all_pdfs(request.directory)

        if response.errors:
            logger.warning(f"Ingestion completed with errors: {response.errors}")
        else:
            logger.info(
                f"Ingestion complete: {response.documents_processed} documents, "
                f"{response.chunks_created} chunks"
            )

        return response

    except Exception as e:
        logger.error(f"Ingestion failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Failed to ingest documents: {str(e)}"
        )


@router.post(
    "/ingest/text",
    summary="Ingest Text",
    description="Ingest raw text directly into the knowledge base",
)
async def ingest_text(request: TextIngestionRequest) -> dict:
    """Chunk, embed and store raw text."""
    try:
        service = get_document_service()
        chunks = await service.ingest_text(request.text, request.source_name)

        return {
            "success": True,
            "chunks_created": chunks,
            "source": request.source_name,
        }

    except Exception as e:
        logger.error(f"Text ingestion failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Failed to ingest text: {str(e)}"
        )


# =============================================================================
# Document Management
# =============================================================================

@router.get(
    "/documents/count",
    summary="Document Count",
    description="Get the number of chunks in the knowledge base",
)
async def get_document_count() -> dict:
    store = get_vector_store()

    return {
        "count": len(store),
        "ready": not store.is_empty,
    }
