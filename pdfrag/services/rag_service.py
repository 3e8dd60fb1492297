"""
RAG Service
===========

Answers questions from the chunks held in the vector store.

FLOW:
1. Embed the question with the same model used for the chunks
2. Search the vector store for the top-k chunks
3. No chunks -> return a fixed "nothing found" answer, skip the LLM
4. Otherwise join the chunk texts into a context block
5. Ask the chat model to answer from that context only
"""

import logging
import time
from typing import Optional

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage

from pdfrag.config import get_settings
from pdfrag.schemas.models import QueryResponse, RetrievedDocument
from pdfrag.services.llm import create_llm
from pdfrag.vectorstore.embeddings import EmbeddingManager
from pdfrag.vectorstore.simple_store import SearchResult, SimpleVectorStore

logger = logging.getLogger(__name__)

NO_RESULTS_ANSWER = (
    "I couldn't find any relevant information in the documents "
    "to answer your question."
)

SYSTEM_PROMPT = (
    "You are a helpful assistant that answers questions based on the provided "
    "context. If the context doesn't contain relevant information, say so."
)

USER_PROMPT = """Context: {context}

Question: {question}"""


class RAGService:
    """
    Retrieval + answer generation over a SimpleVectorStore.

    Usage:
        rag = RAGService(store)
        response = await rag.answer("What is the refund policy?")
        print(response.answer)
    """

    def __init__(
        self,
        vector_store: SimpleVectorStore,
        embedding_manager: Optional[EmbeddingManager] = None,
        llm: Optional[BaseChatModel] = None,
    ):
        """
        Initialize the RAG service.

        Args:
            vector_store: Store to search (shared with the DocumentService)
            embedding_manager: Embedding source (configured provider if not provided)
            llm: Pre-configured chat model (created lazily if not provided)
        """
        self._vector_store = vector_store
        self._embedding_manager = embedding_manager or EmbeddingManager()
        self._llm = llm
        self._settings = get_settings()

    def _get_llm(self) -> BaseChatModel:
        if self._llm is None:
            self._llm = create_llm()
        return self._llm

    async def retrieve(
        self,
        question: str,
        limit: Optional[int] = None,
    ) -> list[SearchResult]:
        """
        Find the chunks most similar to the question.

        Args:
            question: The user's question
            limit: Number of chunks (defaults to settings.retrieval_top_k)

        Returns:
            Ranked SearchResult list, possibly empty
        """
        limit = limit if limit is not None else self._settings.retrieval_top_k
        if limit < 1:
            raise ValueError(f"limit must be a positive integer, got {limit}")

        question_embedding = await self._embedding_manager.aembed_text(question)
        results = self._vector_store.search(question_embedding, limit)

        if results:
            logger.info(
                f"Retrieved {len(results)} chunks, best: {results[0].id} "
                f"({results[0].score:.3f})"
            )
        else:
            logger.info("Retrieved no chunks")
        return results

    @staticmethod
    def build_context(results: list[SearchResult]) -> str:
        """Join the retrieved chunk texts, separated by blank lines."""
        return "\n\n".join(result.text for result in results)

    async def answer(
        self,
        question: str,
        limit: Optional[int] = None,
    ) -> QueryResponse:
        """
        Answer a question from the indexed documents.

        Args:
            question: The user's question
            limit: Number of chunks to use as context

        Returns:
            QueryResponse with the answer and the chunks it used

        Raises:
            Exception: Embedding or chat model failures, after logging
        """
        start_time = time.time()

        try:
            results = await self.retrieve(question, limit)

            if not results:
                answer = NO_RESULTS_ANSWER
            else:
                messages = [
                    SystemMessage(content=SYSTEM_PROMPT),
                    HumanMessage(content=USER_PROMPT.format(
                        context=self.build_context(results),
                        question=question,
                    )),
                ]
                response = await self._get_llm().ainvoke(messages)
                answer = response.content
        except Exception as e:
            logger.error(f"Error querying RAG system: {e}")
            raise

        processing_time_ms = (time.time() - start_time) * 1000

        return QueryResponse(
            answer=answer,
            sources=[RetrievedDocument.from_result(r) for r in results],
            processing_time_ms=processing_time_ms,
        )

    @property
    def is_ready(self) -> bool:
        return not self._vector_store.is_empty
