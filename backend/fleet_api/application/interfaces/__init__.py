from .document_store import DocumentStore, StoreTransaction
from .identity_verifier import IdentityVerifier

__all__ = [
    "DocumentStore",
    "StoreTransaction",
    "IdentityVerifier",
]
