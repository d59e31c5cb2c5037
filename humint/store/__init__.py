"""
Content-store adapters for encrypted post bundles.
"""

from humint.store.http_store import HttpContentStore
from humint.store.persistence import FileContentStore, MemoryContentStore

__all__ = ["FileContentStore", "HttpContentStore", "MemoryContentStore"]
