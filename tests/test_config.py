"""
Tests for settings and provider factories.
"""

from pathlib import Path
from unittest.mock import AsyncMock, Mock, patch

import pytest
from langchain_core.embeddings import DeterministicFakeEmbedding
from pydantic import ValidationError

from pdfrag.config import Settings, get_settings
from pdfrag.services.llm import create_llm
from pdfrag.vectorstore.embeddings import EmbeddingManager, create_embeddings


class TestSettings:
    """Tests for Settings defaults and environment overrides."""

    def test_defaults(self, monkeypatch):
        for name in ["PDF_DIRECTORY", "CHUNK_SIZE", "RETRIEVAL_TOP_K", "LLM_PROVIDER"]:
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.pdf_directory == Path("./pdfs")
        assert settings.chunk_size == 1000
        assert settings.retrieval_top_k == 3
        assert settings.openai_embedding_model == "text-embedding-ada-002"
        assert settings.get_model_name() == settings.openai_model

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("PDF_DIRECTORY", str(tmp_path / "docs"))
        monkeypatch.setenv("RETRIEVAL_TOP_K", "5")
        monkeypatch.setenv("LLM_PROVIDER", "ollama")

        settings = get_settings()

        assert settings.pdf_directory == tmp_path / "docs"
        assert settings.retrieval_top_k == 5
        assert settings.get_model_name() == settings.ollama_model

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    @pytest.mark.parametrize("name,value", [
        ("CHUNK_SIZE", "0"),
        ("RETRIEVAL_TOP_K", "-1"),
        ("EMBEDDING_PROVIDER", "cohere"),
    ])
    def test_invalid_values_rejected(self, monkeypatch, name, value):
        monkeypatch.setenv(name, value)

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_ensure_directories(self, tmp_path):
        settings = Settings(_env_file=None, pdf_directory=tmp_path / "a" / "pdfs")

        settings.ensure_directories()

        assert (tmp_path / "a" / "pdfs").is_dir()


class TestProviders:
    """Tests for the embedding and chat model factories."""

    def test_unknown_embedding_provider(self):
        with pytest.raises(ValueError, match="Unsupported embedding provider"):
            create_embeddings("cohere")

    def test_unknown_llm_provider(self):
        with pytest.raises(ValueError, match="Unsupported LLM provider"):
            create_llm("anthropic-local")

    def test_manager_uses_injected_embeddings(self):
        fake = DeterministicFakeEmbedding(size=8)
        manager = EmbeddingManager(embeddings=fake)

        assert manager.get_embeddings() is fake
        assert len(manager.embed_text("hello")) == 8

    def test_manager_shares_provider(self):
        fake = DeterministicFakeEmbedding(size=4)
        with patch(
            "pdfrag.vectorstore.embeddings.create_embeddings", return_value=fake
        ) as factory:
            first = EmbeddingManager()
            second = EmbeddingManager()

        assert first.get_embeddings() is second.get_embeddings() is fake
        factory.assert_called_once()

    def test_manager_init_failure_is_raised(self):
        with patch(
            "pdfrag.vectorstore.embeddings.create_embeddings",
            side_effect=ValueError("missing api key"),
        ):
            with pytest.raises(ValueError, match="missing api key"):
                EmbeddingManager()

    @pytest.mark.asyncio
    async def test_aembed_text_reraises(self):
        embeddings = Mock()
        embeddings.aembed_query = AsyncMock(side_effect=TimeoutError("slow"))
        manager = EmbeddingManager(embeddings=embeddings)

        with pytest.raises(TimeoutError):
            await manager.aembed_text("hello")
