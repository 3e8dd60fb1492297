"""
Chat Model Factory
==================

Creates the LangChain chat model that writes answers from retrieved context.

SUPPORTED PROVIDERS:
1. openai - OpenAI chat models (default gpt-3.5-turbo)
2. ollama - Local LLMs (free, requires Ollama installed)
"""

import logging
from typing import Optional

from langchain_core.language_models.chat_models import BaseChatModel

from pdfrag.config import get_settings

logger = logging.getLogger(__name__)


def create_llm(
    provider: Optional[str] = None,
    temperature: Optional[float] = None,
) -> BaseChatModel:
    """
    Create an LLM instance based on the configured provider.

    Args:
        provider: Override the default provider from settings
        temperature: Override the default temperature

    Returns:
        A LangChain chat model instance

    Raises:
        ValueError: If provider is not supported
    """
    settings = get_settings()
    provider = provider or settings.llm_provider
    temp = temperature if temperature is not None else settings.llm_temperature

    logger.info(f"Creating LLM with provider: {provider}")

    if provider == "openai":
        from langchain_openai import ChatOpenAI
        return ChatOpenAI(
            model=settings.openai_model,
            openai_api_key=settings.openai_api_key,
            temperature=temp,
        )

    elif provider == "ollama":
        from langchain_community.chat_models import ChatOllama
        return ChatOllama(
            model=settings.ollama_model,
            base_url=settings.ollama_base_url,
            temperature=temp,
        )

    else:
        raise ValueError(f"Unsupported LLM provider: {provider}")
