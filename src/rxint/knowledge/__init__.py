"""Static medical knowledge used for disease inference."""

from .base import KnowledgeBase, load_knowledge_base

__all__ = [
    "KnowledgeBase",
    "load_knowledge_base",
]
