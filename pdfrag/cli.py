"""
Interactive CLI
===============

Index a folder of PDFs, then answer questions about them in a prompt loop.

Examples:
  # Use ./pdfs (or PDF_DIRECTORY from the environment)
  python -m pdfrag

  # Another folder, five chunks of context per answer
  python -m pdfrag --pdf-dir ~/papers --top-k 5
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Callable, List, Optional

from pdfrag.config import get_settings
from pdfrag.main import setup_logging
from pdfrag.services.document_service import DocumentService
from pdfrag.services.rag_service import RAGService
from pdfrag.vectorstore.embeddings import EmbeddingManager
from pdfrag.vectorstore.simple_store import SimpleVectorStore

logger = logging.getLogger(__name__)

QUESTION_PROMPT = '\nEnter your question (or type "exit" to quit): '
EXIT_COMMAND = "exit"


async def ask_questions(
    rag_service: RAGService,
    top_k: Optional[int] = None,
    input_fn: Callable[[str], str] = input,
    output_fn: Callable[[str], None] = print,
) -> int:
    """
    Prompt for questions until the user types "exit" or input ends.

    A failed question is logged and the loop keeps going.

    Returns:
        Number of questions answered
    """
    answered = 0
    while True:
        try:
            question = await asyncio.to_thread(input_fn, QUESTION_PROMPT)
        except EOFError:
            break

        if question.strip().lower() == EXIT_COMMAND:
            break
        if not question.strip():
            continue

        try:
            response = await rag_service.answer(question, top_k)
        except Exception as e:
            logger.error(f"Error getting answer: {e}")
            continue

        output_fn(f"\nAnswer: {response.answer}")
        answered += 1

    return answered


async def run_session(
    pdf_directory: Path,
    top_k: Optional[int] = None,
    embedding_manager: Optional[EmbeddingManager] = None,
    rag_service: Optional[RAGService] = None,
    input_fn: Callable[[str], str] = input,
    output_fn: Callable[[str], None] = print,
) -> int:
    """
    Ingest `pdf_directory` into a fresh store and start the question loop.

    Returns:
        Process exit code
    """
    logger.info(f"Looking for PDFs in: {pdf_directory}")

    if not pdf_directory.exists():
        pdf_directory.mkdir(parents=True)
        output_fn(
            f'Created "{pdf_directory}" directory. '
            "Please add your PDF files to this directory."
        )
        return 0

    store = SimpleVectorStore()
    embedding_manager = embedding_manager or EmbeddingManager()

    documents = DocumentService(store, embedding_manager)
    result = await documents.process_all_pdfs(pdf_directory)
    for error in result.errors:
        output_fn(error)

    if rag_service is None:
        rag_service = RAGService(store, embedding_manager)

    output_fn('\nYou can now ask questions about your PDFs. Type "exit" to quit.')
    await ask_questions(rag_service, top_k, input_fn, output_fn)
    return 0


def positive_int(value: str) -> int:
    """argparse type for options that must be an integer >= 1."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the interactive CLI."""
    parser = argparse.ArgumentParser(
        prog="pdf-rag",
        description="Ask questions about a folder of PDF files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--pdf-dir",
        type=Path,
        default=None,
        help="Directory of PDF files (default: settings.pdf_directory)",
    )
    parser.add_argument(
        "--top-k",
        type=positive_int,
        default=None,
        help="Chunks of context per answer (default: settings.retrieval_top_k)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: settings.log_level)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    settings = get_settings()

    setup_logging(args.log_level)

    pdf_directory = args.pdf_dir or settings.pdf_directory

    try:
        return asyncio.run(run_session(pdf_directory, args.top_k))
    except KeyboardInterrupt:
        return 0
    except Exception as e:
        logger.error(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
