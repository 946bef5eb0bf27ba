"""Database related helpers."""

from __future__ import annotations

from .store import DocumentStore, open_document_store

__all__ = ["DocumentStore", "open_document_store"]
