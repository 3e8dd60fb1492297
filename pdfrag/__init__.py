"""
PDF RAG Assistant
=================

Retrieval-Augmented Generation over a folder of PDF files.

Architecture:
- Document Service: Extracts PDF text, chunks it and embeds each chunk
- Vector Store: In-memory cosine similarity search over the chunks
- RAG Service: Retrieves context for a question and asks the chat model
- CLI / API: Interactive question loop and FastAPI endpoints
"""

__version__ = "1.0.0"
