# backend/mathnotes/api/__init__.py
from .collections import router as collections_router
from .documents import router as documents_router
from .pages import router as pages_router
from .persistence import router as persistence_router

__all__ = ["collections_router", "documents_router", "pages_router", "persistence_router"]
