from .document_store import SQLAlchemyDocumentStore, SQLAlchemyStoreTransaction

__all__ = [
    "SQLAlchemyDocumentStore",
    "SQLAlchemyStoreTransaction",
]
