"""
Configuration Management
========================

This module centralizes all configuration using pydantic-settings.
It loads environment variables and provides type-safe access to config values.

SUPPORTED PROVIDERS:
1. openai      - Chat + embeddings (default, needs OPENAI_API_KEY)
2. ollama      - Local chat models - completely free
3. huggingface - Local sentence-transformers embeddings - free
"""

from pathlib import Path
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have sensible defaults for development.
    Override via environment variables or a .env file.
    """

    # =========================================================================
    # LLM Provider Selection
    # =========================================================================
    llm_provider: Literal["openai", "ollama"] = Field(
        default="openai",
        description="Which chat model provider answers questions"
    )

    openai_api_key: str = Field(
        default="",
        description="OpenAI API key (needed for the openai providers)"
    )

    openai_model: str = Field(
        default="gpt-3.5-turbo",
        description="OpenAI chat model"
    )

    ollama_model: str = Field(
        default="llama3.2",
        description="Ollama model (llama3.2, mistral, phi3, etc.)"
    )

    ollama_base_url: str = Field(
        default="http://localhost:11434",
        description="Ollama server URL"
    )

    # Temperature controls randomness: 0 = deterministic, 1 = creative
    llm_temperature: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="LLM temperature (lower = more focused)"
    )

    # =========================================================================
    # Embedding Configuration
    # =========================================================================
    embedding_provider: Literal["openai", "huggingface"] = Field(
        default="openai",
        description="Embedding provider"
    )

    openai_embedding_model: str = Field(
        default="text-embedding-ada-002",
        description="OpenAI embedding model"
    )

    huggingface_embedding_model: str = Field(
        default="sentence-transformers/all-MiniLM-L6-v2",
        description="Free local embedding model"
    )

    # =========================================================================
    # Ingestion / Retrieval Configuration
    # =========================================================================
    pdf_directory: Path = Field(
        default=Path("./pdfs"),
        description="Directory containing the PDF files to index"
    )

    chunk_size: int = Field(
        default=1000,
        gt=0,
        description="Maximum characters per sentence-packed chunk"
    )

    retrieval_top_k: int = Field(
        default=3,
        gt=0,
        description="Number of chunks handed to the chat model"
    )

    # =========================================================================
    # API Configuration
    # =========================================================================
    api_host: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server"
    )

    api_port: int = Field(
        default=8000,
        description="Port for the API server"
    )

    debug_mode: bool = Field(
        default=False,
        description="Enable auto-reload for development"
    )

    # =========================================================================
    # Logging Configuration
    # =========================================================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level"
    )

    class Config:
        """Pydantic configuration for settings."""
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    def ensure_directories(self) -> None:
        """Create the PDF directory if it doesn't exist."""
        self.pdf_directory.mkdir(parents=True, exist_ok=True)

    def get_model_name(self) -> str:
        """Get the chat model name for the selected provider."""
        model_map = {
            "openai": self.openai_model,
            "ollama": self.ollama_model,
        }
        return model_map.get(self.llm_provider, self.openai_model)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: Application configuration instance
    """
    return Settings()
