"""Fragment store interface (port) for the application layer.

Every operation takes the owner id and the fragment id explicitly; no
implementation may resolve a fragment from its id alone.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.domain.value_objects.fragment_record import FragmentRecord


class IFragmentStore(Protocol):
    """Protocol for owner-scoped fragment persistence (DIP).

    Two independent namespaces keyed by (owner_id, fragment_id): metadata
    records and raw data. Writes are upserts; per-key atomicity (last write
    wins) is the only concurrency guarantee.
    """

    async def write_fragment(self, record: FragmentRecord) -> None:
        """Upsert metadata under (record.owner_id, record.id)."""

    async def read_fragment(self, owner_id: str, fragment_id: str) -> FragmentRecord | None:
        """Return metadata, or None when absent. Never raises for a missing key."""

    async def write_fragment_data(self, owner_id: str, fragment_id: str, data: bytes) -> None:
        """Upsert raw data. Does not require metadata to exist."""

    async def read_fragment_data(self, owner_id: str, fragment_id: str) -> bytes | None:
        """Return raw data, or None when absent."""

    async def list_fragments(
        self, owner_id: str, expand: bool = False
    ) -> list[str] | list[FragmentRecord]:
        """Return the owner's fragment ids (or records when expand is True); empty list if none."""

    async def delete_fragment(self, owner_id: str, fragment_id: str) -> None:
        """Remove metadata and data. No-op when absent."""

    async def commit_fragment(self, record: FragmentRecord, data: bytes) -> None:
        """Write data then metadata for one fragment.

        Not atomic unless the backend says so: if the metadata write fails
        after the data write succeeded, the data write is not rolled back.
        """
