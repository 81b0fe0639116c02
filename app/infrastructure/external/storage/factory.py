"""Fragment store factory: creates memory or local backend from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.application.interfaces.storage import IFragmentStore
from app.domain.enums import StorageBackend

if TYPE_CHECKING:
    from app.core.config import Settings


class StorageFactory:
    """Factory for fragment store instances based on configuration."""

    @staticmethod
    def create_fragment_store(settings: "Settings | None" = None) -> IFragmentStore:
        """Create fragment store from settings.

        Args:
            settings: Application settings; if None, uses get_settings().

        Returns:
            MemoryFragmentStore or LocalFragmentStore.

        Raises:
            ValueError: Unknown backend or missing required config.
        """
        from app.core.config import get_settings

        s = settings or get_settings()
        backend = s.storage_backend.lower()

        if backend == StorageBackend.MEMORY:
            from app.infrastructure.external.storage.memory_storage import (
                MemoryFragmentStore,
            )

            return MemoryFragmentStore()
        if backend == StorageBackend.LOCAL:
            from app.infrastructure.external.storage.local_storage import (
                LocalFragmentStore,
            )

            if not s.storage_root:
                raise ValueError("STORAGE_ROOT required for local backend")
            return LocalFragmentStore(storage_root=s.storage_root)
        raise ValueError(
            f"Unknown storage backend: {backend}. Supported: {', '.join(StorageBackend.values())}"
        )
