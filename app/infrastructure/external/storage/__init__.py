"""Fragment stores: in-memory and local filesystem backends.

Factory creates the backend from app.core.config. Implementations satisfy
IFragmentStore (write/read metadata, write/read data, list, delete, commit).
"""

from app.infrastructure.external.storage.factory import StorageFactory
from app.infrastructure.external.storage.local_storage import LocalFragmentStore
from app.infrastructure.external.storage.memory_storage import MemoryFragmentStore

__all__ = [
    "LocalFragmentStore",
    "MemoryFragmentStore",
    "StorageFactory",
]
