"""
Pydantic Schemas
================

Data models for request/response validation.
"""

from pdfrag.schemas.models import (
    DocumentInfo,
    RetrievedDocument,
    QueryRequest,
    QueryResponse,
    IngestionRequest,
    TextIngestionRequest,
    IngestionResponse,
    HealthResponse,
)

__all__ = [
    "DocumentInfo",
    "RetrievedDocument",
    "QueryRequest",
    "QueryResponse",
    "IngestionRequest",
    "TextIngestionRequest",
    "IngestionResponse",
    "HealthResponse",
]
