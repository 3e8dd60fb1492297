"""
Document Service
================

Service for turning PDF files into embedded chunks in the vector store.

This service handles:
- Extracting text from PDF files
- Splitting text into sentence-packed chunks
- Embedding each chunk and adding it to the vector store
- Reporting per-file results and errors

Chunks get ids of the form "<file name>_chunk_<index>".
"""

import logging
import re
from pathlib import Path
from typing import Optional, Union

from langchain_community.document_loaders import PyPDFLoader

from pdfrag.config import get_settings
from pdfrag.schemas.models import DocumentInfo, IngestionResponse
from pdfrag.vectorstore.embeddings import EmbeddingManager
from pdfrag.vectorstore.simple_store import SimpleVectorStore

logger = logging.getLogger(__name__)

SENTENCE_BOUNDARY = re.compile(r"[.!?]+")


def extract_text_from_pdf(pdf_path: Union[str, Path]) -> str:
    """
    Extract the text of every page of a PDF.

    Args:
        pdf_path: Path to the PDF file

    Returns:
        Page texts joined with newlines

    Raises:
        FileNotFoundError: If the file doesn't exist
    """
    path = Path(pdf_path)
    try:
        logger.info(f"Reading PDF file: {path}")
        if not path.exists():
            raise FileNotFoundError(f"PDF file not found at path: {path}")

        logger.info(f"PDF file size: {path.stat().st_size} bytes")

        pages = PyPDFLoader(str(path)).load()
        text = "\n".join(page.page_content for page in pages)

        logger.info(f"Extracted {len(text)} characters of text")
        return text
    except Exception as e:
        logger.error(f"Error processing PDF {path}: {e}")
        raise


def split_text_into_chunks(text: str, chunk_size: int = 1000) -> list[str]:
    """
    Pack sentences into chunks of at most roughly `chunk_size` characters.

    Sentences are split on runs of '.', '!' and '?'. Each sentence is
    appended with a ". " terminator; a chunk is closed as soon as the next
    sentence would push it past `chunk_size`. A sentence longer than
    `chunk_size` still becomes its own (oversized) chunk. Blank fragments
    are dropped, so whitespace-only text yields no chunks.

    Args:
        text: Text to split
        chunk_size: Character budget per chunk

    Returns:
        List of stripped chunk strings
    """
    chunks = []
    current_chunk = ""

    for sentence in SENTENCE_BOUNDARY.split(text):
        if not sentence.strip():
            continue
        if len(current_chunk + sentence) > chunk_size:
            if current_chunk.strip():
                chunks.append(current_chunk.strip())
            current_chunk = sentence
        else:
            current_chunk += sentence + ". "

    if current_chunk.strip():
        chunks.append(current_chunk.strip())

    logger.info(f"Split text into {len(chunks)} chunks")
    return chunks


class DocumentService:
    """
    Service for PDF ingestion.

    Embeds a document's chunks one at a time, in order, and adds them to
    the store only once all of them are embedded. A document is either
    fully ingested or not at all.

    Usage:
        service = DocumentService(store)
        result = await service.process_all_pdfs("./pdfs")
    """

    def __init__(
        self,
        vector_store: Optional[SimpleVectorStore] = None,
        embedding_manager: Optional[EmbeddingManager] = None,
    ):
        """
        Initialize the document service.

        Args:
            vector_store: Store to fill (a new empty store if not provided)
            embedding_manager: Embedding source (configured provider if not provided)
        """
        self._vector_store = vector_store if vector_store is not None else SimpleVectorStore()
        self._embedding_manager = embedding_manager or EmbeddingManager()
        self._settings = get_settings()

    @property
    def vector_store(self) -> SimpleVectorStore:
        return self._vector_store

    async def _store_chunks(self, source_name: str, chunks: list[str]) -> int:
        """
        Embed every chunk, then store them in order.

        Nothing is added until all embeddings have come back, so a failed
        embedding leaves the store untouched for this source.

        Returns:
            How many chunks were stored
        """
        total = len(chunks)
        embeddings = []
        for i, chunk in enumerate(chunks):
            logger.info(f"Processing chunk {i + 1}/{total}")
            embeddings.append(await self._embedding_manager.aembed_text(chunk))

        for i, (chunk, embedding) in enumerate(zip(chunks, embeddings)):
            self._vector_store.add(f"{source_name}_chunk_{i}", chunk, embedding)
        return total

    async def process_pdf(self, pdf_path: Union[str, Path]) -> DocumentInfo:
        """
        Ingest a single PDF into the vector store.

        Args:
            pdf_path: Path to the PDF file

        Returns:
            DocumentInfo about the processed file

        Raises:
            FileNotFoundError: If the file doesn't exist
        """
        path = Path(pdf_path)
        logger.info(f"Processing PDF: {path}")

        text = extract_text_from_pdf(path)
        chunks = split_text_into_chunks(text, self._settings.chunk_size)

        if not chunks:
            logger.info("No valid chunks found in PDF, skipping...")
            chunk_count = 0
        else:
            logger.info(f"Processing {len(chunks)} chunks...")
            chunk_count = await self._store_chunks(path.name, chunks)
            logger.info(f"Successfully processed PDF: {path}")

        return DocumentInfo(
            filename=path.name,
            file_type=path.suffix.lower(),
            chunk_count=chunk_count,
            character_count=len(text),
        )

    async def process_all_pdfs(
        self,
        directory: Optional[Union[str, Path]] = None,
    ) -> IngestionResponse:
        """
        Ingest every PDF in a directory (not recursive).

        A PDF that fails is logged and listed in `errors`; the remaining
        files are still processed.

        Args:
            directory: Directory to scan (defaults to settings.pdf_directory)

        Returns:
            IngestionResponse with details
        """
        path = Path(directory) if directory is not None else self._settings.pdf_directory
        logger.info(f"Initializing vector database for directory: {path}")

        if not path.is_dir():
            return IngestionResponse(
                documents_processed=0,
                chunks_created=0,
                errors=[f"Directory not found: {path}"],
            )

        pdf_files = sorted(
            f for f in path.iterdir()
            if f.is_file() and f.suffix.lower() == ".pdf"
        )

        if not pdf_files:
            logger.info("No PDF files found in the directory.")
            return IngestionResponse(documents_processed=0, chunks_created=0)

        logger.info(f"Found {len(pdf_files)} PDF files: {[f.name for f in pdf_files]}")

        documents_info = []
        errors = []
        total_chunks = 0

        for pdf_file in pdf_files:
            try:
                info = await self.process_pdf(pdf_file)
                documents_info.append(info)
                total_chunks += info.chunk_count
            except Exception as e:
                error_msg = f"Failed to process PDF {pdf_file}: {e}"
                logger.error(error_msg)
                errors.append(error_msg)

        if errors:
            logger.warning(f"Processed PDFs with {len(errors)} failure(s)")
        else:
            logger.info("All PDFs have been processed successfully!")

        return IngestionResponse(
            documents_processed=len(documents_info),
            chunks_created=total_chunks,
            documents=documents_info,
            errors=errors,
        )

    async def ingest_text(self, text: str, source_name: str = "direct_input") -> int:
        """
        Ingest raw text directly.

        Args:
            text: Text content to ingest
            source_name: Prefix for the chunk ids

        Returns:
            Number of chunks created
        """
        chunks = split_text_into_chunks(text, self._settings.chunk_size)
        return await self._store_chunks(source_name, chunks)

    @property
    def document_count(self) -> int:
        """Get the total number of chunks in the store."""
        return len(self._vector_store)

    @property
    def is_ready(self) -> bool:
        """Check if the store has any chunks."""
        return not self._vector_store.is_empty
