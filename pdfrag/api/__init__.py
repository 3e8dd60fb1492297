"""
API Module
==========

FastAPI routes and endpoint definitions.
"""

from pdfrag.api.routes import router

__all__ = ["router"]
