"""
Storage Services
"""

from .document_storage import IDocumentStorage, LocalDocumentStorage

__all__ = [
    "IDocumentStorage",
    "LocalDocumentStorage",
]
