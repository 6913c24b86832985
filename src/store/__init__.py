"""Storage for the list of uploaded documents and the active selection."""

from src.store.documents import DocumentStore, MappingDocumentStore

__all__ = ["DocumentStore", "MappingDocumentStore"]
