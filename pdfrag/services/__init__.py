"""
Services Module
===============

Ingestion and question-answering logic built on the vector store.
"""

from pdfrag.services.document_service import (
    DocumentService,
    extract_text_from_pdf,
    split_text_into_chunks,
)
from pdfrag.services.rag_service import RAGService

__all__ = [
    "DocumentService",
    "RAGService",
    "extract_text_from_pdf",
    "split_text_into_chunks",
]
