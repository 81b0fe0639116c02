"""In-process fragment store backed by dicts. Contents are lost on restart."""

from __future__ import annotations

import logging

from app.domain.value_objects.fragment_record import FragmentRecord

logger = logging.getLogger(__name__)


class MemoryFragmentStore:
    """Two dicts keyed by (owner_id, fragment_id): metadata and data.

    Dict insertion order gives listing order. Data is copied in and out so
    callers cannot mutate stored payloads.
    """

    def __init__(self) -> None:
        self._metadata: dict[tuple[str, str], FragmentRecord] = {}
        self._data: dict[tuple[str, str], bytes] = {}

    async def write_fragment(self, record: FragmentRecord) -> None:
        self._metadata[(record.owner_id, record.id)] = record

    async def read_fragment(self, owner_id: str, fragment_id: str) -> FragmentRecord | None:
        return self._metadata.get((owner_id, fragment_id))

    async def write_fragment_data(self, owner_id: str, fragment_id: str, data: bytes) -> None:
        self._data[(owner_id, fragment_id)] = bytes(data)

    async def read_fragment_data(self, owner_id: str, fragment_id: str) -> bytes | None:
        data = self._data.get((owner_id, fragment_id))
        return bytes(data) if data is not None else None

    async def list_fragments(
        self, owner_id: str, expand: bool = False
    ) -> list[str] | list[FragmentRecord]:
        records = [r for (owner, _), r in self._metadata.items() if owner == owner_id]
        if expand:
            return records
        return [r.id for r in records]

    async def delete_fragment(self, owner_id: str, fragment_id: str) -> None:
        key = (owner_id, fragment_id)
        removed = self._metadata.pop(key, None) is not None
        removed = self._data.pop(key, None) is not None or removed
        if removed:
            logger.debug("Deleted fragment %s for owner %s", fragment_id, owner_id)

    async def commit_fragment(self, record: FragmentRecord, data: bytes) -> None:
        await self.write_fragment_data(record.owner_id, record.id, data)
        await self.write_fragment(record)
