"""
Embedding Manager
=================

This module handles the conversion of text to vector embeddings.

DEFAULT: OpenAI text-embedding-ada-002 (1536 dimensions, needs an API key)
FREE OPTION: HuggingFace sentence-transformers, runs locally

Embedding failures are raised to the caller; nothing is retried here and
nothing is written to the vector store until an embedding comes back.
"""

import logging
from typing import Optional

from langchain_core.embeddings import Embeddings

from pdfrag.config import get_settings

logger = logging.getLogger(__name__)


def create_embeddings(provider: Optional[str] = None) -> Embeddings:
    """
    Create embeddings instance based on provider.

    Args:
        provider: Override provider from settings ("openai" or "huggingface")

    Returns:
        LangChain Embeddings instance
    """
    settings = get_settings()
    provider = provider or settings.embedding_provider

    logger.info(f"Creating embeddings with provider: {provider}")

    if provider == "openai":
        from langchain_openai import OpenAIEmbeddings
        return OpenAIEmbeddings(
            model=settings.openai_embedding_model,
            openai_api_key=settings.openai_api_key,
        )

    elif provider == "huggingface":
        from langchain_huggingface import HuggingFaceEmbeddings
        return HuggingFaceEmbeddings(
            model_name=settings.huggingface_embedding_model,
            model_kwargs={"device": "cpu"},
        )

    else:
        raise ValueError(f"Unsupported embedding provider: {provider}")


class EmbeddingManager:
    """
    Manages text embedding generation.

    Pass an `Embeddings` instance to bypass provider lookup (tests, custom
    models). Without one, the first construction creates the configured
    provider and later constructions reuse it.

    Usage:
        manager = EmbeddingManager()
        vector = await manager.aembed_text("Hello world")
    """

    _shared: Optional[Embeddings] = None

    def __init__(self, embeddings: Optional[Embeddings] = None) -> None:
        """Initialize the embedding manager."""
        if embeddings is not None:
            self._embeddings = embeddings
            return

        if EmbeddingManager._shared is None:
            EmbeddingManager._shared = self._initialize_embeddings()
        self._embeddings = EmbeddingManager._shared

    @staticmethod
    def _initialize_embeddings() -> Embeddings:
        """Create the embeddings client."""
        settings = get_settings()

        try:
            embeddings = create_embeddings(settings.embedding_provider)
            logger.info(
                f"Initialized embeddings with provider: {settings.embedding_provider}"
            )
            return embeddings
        except Exception as e:
            logger.error(f"Failed to initialize embeddings: {e}")
            raise

    def get_embeddings(self) -> Embeddings:
        """Get the underlying LangChain embeddings instance."""
        return self._embeddings

    def embed_text(self, text: str) -> list[float]:
        """
        Embed a single text string.

        Args:
            text: Text to embed

        Returns:
            List of floats representing the embedding vector
        """
        return self._embeddings.embed_query(text)

    async def aembed_text(self, text: str) -> list[float]:
        """Async variant of `embed_text`; errors are logged and re-raised."""
        try:
            return await self._embeddings.aembed_query(text)
        except Exception as e:
            logger.error(f"Error getting embeddings: {e}")
            raise

    @classmethod
    def reset(cls) -> None:
        """Drop the shared provider so the next manager re-reads settings."""
        cls._shared = None
