"""
PDF RAG Assistant - Main Application
====================================

FastAPI application entry point.

This module:
- Creates the FastAPI application
- Includes API routes
- Sets up logging (shared with the CLI)
- Ingests the configured PDF directory on startup

RUNNING THE APP:
    Development: uvicorn pdfrag.main:app --reload
    Production:  uvicorn pdfrag.main:app --host 0.0.0.0 --port 8000
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from pdfrag.api.routes import router, get_document_service
from pdfrag.config import get_settings
from pdfrag import __version__

# =============================================================================
# Logging Setup
# =============================================================================

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure logging for the application.

    Args:
        level: Override settings.log_level
    """
    settings = get_settings()

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    root_logger = logging.getLogger()
    root_logger.setLevel(level or settings.log_level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)
    logging.getLogger("langchain").setLevel(logging.WARNING)


# =============================================================================
# Application Lifecycle
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup: configure logging, ingest the PDF directory if it has files.
    Shutdown: the in-memory store is simply dropped.
    """
    setup_logging()
    logger = logging.getLogger(__name__)

    settings = get_settings()
    settings.ensure_directories()

    logger.info(f"Starting PDF RAG Assistant v{__version__}")
    logger.info(f"PDF directory: {settings.pdf_directory}")

    result = await get_document_service().process_all_pdfs(settings.pdf_directory)
    logger.info(
        f"Startup ingestion: {result.documents_processed} PDFs, "
        f"{result.chunks_created} chunks"
    )

    yield

    logger.info("Shutting down PDF RAG Assistant")


# =============================================================================
# FastAPI Application
# =============================================================================

def create_app(ingest_on_startup: bool = True) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        ingest_on_startup: Run the lifespan hook that ingests the PDF directory

    Returns:
        Configured FastAPI instance
    """
    app = FastAPI(
        title="PDF RAG Assistant",
        description=(
            "Ask questions about a folder of PDF files. Chunks are embedded "
            "into an in-memory vector store and retrieved by cosine similarity."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan if ingest_on_startup else None,
    )

    app.include_router(router)

    @app.get("/", include_in_schema=False)
    async def root():
        """Redirect root to API documentation."""
        return RedirectResponse(url="/docs")

    return app


app = create_app()


def run() -> None:
    """Run the API with uvicorn using the configured host and port."""
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "pdfrag.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug_mode,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
