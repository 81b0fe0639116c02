"""Fragment aggregate root.

A fragment is an owner-scoped, typed byte blob. Identity, owner and type are
fixed at construction; size and the updated timestamp follow the data. The
entity is bound to the store it was loaded from or will be saved to.

Lifecycle: nonexistent -> metadata-only (save before set_data) -> complete
(set_data) -> nonexistent (delete). get_data on a metadata-only fragment
returns None.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from app.domain import type_registry
from app.domain.conversion import convert
from app.domain.exceptions import (
    ConversionUnsupportedException,
    ResourceNotFoundException,
    UnsupportedTypeException,
    ValidationException,
)
from app.domain.value_objects.fragment_record import FragmentRecord
from app.shared.utils.datetime import utc_now_iso
from app.shared.utils.generators import generate_fragment_id

if TYPE_CHECKING:
    from app.application.interfaces.storage import IFragmentStore

logger = logging.getLogger(__name__)

_BUFFER_TYPES = (bytes, bytearray, memoryview)


@dataclass(eq=False)
class Fragment:
    """Domain entity for a fragment; validation runs on construction.

    id and both timestamps are generated when not given. Use the class-level
    lookups (by_user, by_id) to load fragments; each takes the owner id, so a
    fragment owned by someone else is indistinguishable from a missing one.
    """

    owner_id: str
    type: str
    id: str | None = None
    created: str | None = None
    updated: str | None = None
    size: int = 0
    store: IFragmentStore = field(kw_only=True, repr=False)

    def __post_init__(self) -> None:
        self.validate()
        now = utc_now_iso()
        self.id = self.id or generate_fragment_id()
        self.created = self.created or now
        self.updated = self.updated or now

    def validate(self) -> None:
        """Validate construction input. Raises ValidationException if invalid.

        Raises:
            ValidationException: Missing owner or type, bad id, or bad size.
            UnsupportedTypeException: Base type outside the supported set
                (a ValidationException subclass).
        """
        if not self.owner_id or not isinstance(self.owner_id, str):
            raise ValidationException("ownerId is required", field="owner_id")
        if not self.type or not isinstance(self.type, str):
            raise ValidationException("type is required", field="type")
        if type_registry.base_type_of(self.type) not in type_registry.SUPPORTED_TYPES:
            raise UnsupportedTypeException(self.type)
        if self.id is not None and not isinstance(self.id, str):
            raise ValidationException("id must be a string", field="id")
        if isinstance(self.size, bool) or not isinstance(self.size, int):
            raise ValidationException("size must be a number", field="size")
        if self.size < 0:
            raise ValidationException("size cannot be negative", field="size")

    # ---- Lookups ----

    @classmethod
    def from_record(cls, store: IFragmentStore, record: FragmentRecord) -> Fragment:
        return cls(
            owner_id=record.owner_id,
            type=record.type,
            id=record.id,
            created=record.created,
            updated=record.updated,
            size=record.size,
            store=store,
        )

    @classmethod
    async def by_user(
        cls, store: IFragmentStore, owner_id: str, expand: bool = False
    ) -> list[str] | list[Fragment]:
        """Return the owner's fragment ids, or full fragments when expand is True.

        When expanding, ids whose metadata disappeared after listing (concurrent
        delete) are skipped.
        """
        ids = await store.list_fragments(owner_id)
        if not expand:
            return ids
        fragments: list[Fragment] = []
        for fragment_id in ids:
            record = await store.read_fragment(owner_id, fragment_id)
            if record is None:
                logger.debug("Fragment %s vanished while listing", fragment_id)
                continue
            fragments.append(cls.from_record(store, record))
        return fragments

    @classmethod
    async def by_id(cls, store: IFragmentStore, owner_id: str, fragment_id: str) -> Fragment:
        """Load a fragment. Raises ResourceNotFoundException if absent for this owner."""
        record = await store.read_fragment(owner_id, fragment_id)
        if record is None:
            raise ResourceNotFoundException("fragment", fragment_id)
        return cls.from_record(store, record)

    @classmethod
    async def delete(cls, store: IFragmentStore, owner_id: str, fragment_id: str) -> None:
        """Remove metadata and data. Deleting a missing fragment is a no-op."""
        await store.delete_fragment(owner_id, fragment_id)

    # ---- Persistence ----

    def to_record(self) -> FragmentRecord:
        return FragmentRecord(
            id=self.id,
            owner_id=self.owner_id,
            created=self.created,
            updated=self.updated,
            type=self.type,
            size=self.size,
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the public metadata representation (same shape as the stored record)."""
        return self.to_record().to_dict()

    async def save(self) -> None:
        """Refresh updated and persist metadata."""
        self.updated = utc_now_iso()
        await self.store.write_fragment(self.to_record())

    async def get_data(self) -> bytes | None:
        """Return the stored data, or None if set_data has not run yet."""
        return await self.store.read_fragment_data(self.owner_id, self.id)

    async def set_data(self, data: bytes) -> None:
        """Replace the data; size and updated follow, and metadata is saved.

        Data is written before metadata. If the metadata write fails the data
        write is not rolled back.

        Raises:
            ValidationException: data is not a byte buffer.
        """
        if not isinstance(data, _BUFFER_TYPES):
            raise ValidationException("Data must be bytes", field="data")
        payload = bytes(data)
        self.size = len(payload)
        self.updated = utc_now_iso()
        await self.store.commit_fragment(self.to_record(), payload)

    # ---- Type information ----

    @property
    def mime_type(self) -> str:
        """Base type without parameters: 'text/html; charset=utf-8' -> 'text/html'."""
        return type_registry.base_type_of(self.type)

    @property
    def is_text(self) -> bool:
        return self.mime_type.startswith("text/")

    @property
    def formats(self) -> frozenset[str]:
        """Types this fragment's data can be converted into."""
        return type_registry.conversions_for(self.mime_type)

    async def convert_data(self, data: bytes, target_type: str) -> bytes:
        """Return data converted from this fragment's type to target_type.

        Raises:
            ConversionUnsupportedException: target_type is not in formats, or
                no conversion rule exists for the pair.
        """
        target = type_registry.base_type_of(target_type)
        if target not in self.formats:
            raise ConversionUnsupportedException(self.mime_type, target)
        if target == self.mime_type:
            return data
        return await asyncio.to_thread(convert, data, self.type, target)

    @staticmethod
    def is_supported_type(value: str) -> bool:
        return type_registry.is_supported_type(value)

    @staticmethod
    def is_valid_extension(ext: str) -> bool:
        return type_registry.is_valid_extension(ext)

    @staticmethod
    def mime_type_for_extension(ext: str) -> str | None:
        return type_registry.mime_type_for_extension(ext)
