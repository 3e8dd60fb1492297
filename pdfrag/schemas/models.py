"""
Data Models
===========

Pydantic models used by the API and the services.
Models provide:
- Request/response validation for API endpoints
- Type safety between ingestion, retrieval and answering
- Automatic API documentation via OpenAPI
"""

import math
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from pdfrag.vectorstore.simple_store import SearchResult


# =============================================================================
# Document Models
# =============================================================================

class DocumentInfo(BaseModel):
    """Metadata about an ingested PDF (or raw text source)."""
    filename: str = Field(..., description="Original filename")
    file_type: str = Field(..., description="File extension (.pdf) or 'text'")
    chunk_count: int = Field(..., description="Number of chunks stored")
    character_count: int = Field(
        default=0,
        description="Characters of text extracted before chunking"
    )
    ingested_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="When document was processed"
    )


class RetrievedDocument(BaseModel):
    """
    A chunk returned by a similarity search.

    The score is the raw cosine similarity, so it ranges from -1.0 to 1.0.
    It is None when the similarity is undefined (zero-magnitude embedding),
    since JSON has no NaN.
    """
    id: str = Field(..., description="Chunk identifier, e.g. guide.pdf_chunk_3")
    content: str = Field(..., description="The text content of the chunk")
    score: Optional[float] = Field(
        ...,
        description="Cosine similarity to the question"
    )

    @classmethod
    def from_result(cls, result: SearchResult) -> "RetrievedDocument":
        """Convert a vector store match into its API representation."""
        score = result.score if math.isfinite(result.score) else None
        return cls(id=result.id, content=result.text, score=score)


# =============================================================================
# Query Models
# =============================================================================

class QueryRequest(BaseModel):
    """
    Question submitted to the RAG system.

    Example:
        {
            "query": "What does chapter 2 say about pricing?",
            "top_k": 3,
            "include_sources": true
        }
    """
    query: str = Field(
        ...,
        min_length=1,
        max_length=2000,
        description="The user's question"
    )
    top_k: Optional[int] = Field(
        default=None,
        ge=1,
        le=20,
        description="Chunks to retrieve (defaults to settings.retrieval_top_k)"
    )
    include_sources: bool = Field(
        default=True,
        description="Whether to return the retrieved chunks"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "query": "What does chapter 2 say about pricing?",
                "top_k": 3,
                "include_sources": True
            }
        }


class QueryResponse(BaseModel):
    """Answer from the RAG system plus the chunks it was grounded on."""
    answer: str = Field(..., description="The generated answer")
    sources: list[RetrievedDocument] = Field(
        default_factory=list,
        description="Chunks used as context"
    )
    processing_time_ms: float = Field(
        default=0.0,
        description="Total processing time in milliseconds"
    )


# =============================================================================
# Ingestion Models
# =============================================================================

class IngestionRequest(BaseModel):
    """Request to ingest a directory of PDFs."""
    directory: Optional[str] = Field(
        default=None,
        description="Directory to scan (defaults to settings.pdf_directory)"
    )


class TextIngestionRequest(BaseModel):
    """Request to ingest raw text without a file."""
    text: str = Field(..., min_length=1, description="Text to chunk and embed")
    source_name: str = Field(
        default="direct_input",
        description="Name used as the chunk id prefix"
    )


class IngestionResponse(BaseModel):
    """Response after document ingestion."""
    documents_processed: int = Field(..., description="Number of files processed")
    chunks_created: int = Field(..., description="Total chunks created")
    documents: list[DocumentInfo] = Field(
        default_factory=list,
        description="Details of each processed document"
    )
    errors: list[str] = Field(
        default_factory=list,
        description="Any errors encountered"
    )


# =============================================================================
# Health Check Model
# =============================================================================

class HealthResponse(BaseModel):
    """API health check response."""
    status: str = Field(..., description="'healthy' or 'unhealthy'")
    version: str = Field(..., description="API version")
    vector_store_ready: bool = Field(
        ...,
        description="Whether any chunks have been stored"
    )
    document_count: int = Field(
        ...,
        description="Number of chunks in the vector store"
    )
