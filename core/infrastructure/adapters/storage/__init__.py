"""File storage adapters."""

from .local_blob_store import LocalBlobStore

__all__ = ["LocalBlobStore"]
