"""Fragment operations: the entry points the HTTP layer calls into."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from app.application.interfaces.storage import IFragmentStore
from app.domain import type_registry
from app.domain.entities.fragment import Fragment
from app.domain.exceptions import (
    ConversionUnsupportedException,
    ResourceNotFoundException,
    UnsupportedTypeException,
    ValidationException,
)
from app.domain.value_objects.media_type import MediaType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FragmentRepresentation:
    """Converted fragment data with the media type it is encoded in.

    media_type carries the source charset when the fragment declared one.
    """

    data: bytes
    media_type: str


class FragmentService:
    """Create, list, load, delete and convert fragments for one store.

    Every operation takes the caller's owner id; ids are never resolved
    across owners.
    """

    def __init__(self, store: IFragmentStore) -> None:
        self.store = store

    async def create_fragment(self, owner_id: str, media_type: str, data: bytes) -> Fragment:
        """Construct a fragment of media_type and store data as its content.

        Raises:
            ValidationException: Missing owner, malformed type, or non-bytes data.
            UnsupportedTypeException: media_type's base type is not supported.
        """
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise ValidationException("Data must be bytes", field="data")
        fragment = Fragment(owner_id=owner_id, type=media_type, store=self.store)
        await fragment.set_data(data)
        logger.info("Created fragment %s (%s, %d bytes)", fragment.id, fragment.type, fragment.size)
        return fragment

    async def list_fragments(self, owner_id: str, expand: bool = False) -> list[str] | list[Fragment]:
        return await Fragment.by_user(self.store, owner_id, expand)

    async def get_fragment(self, owner_id: str, fragment_id: str) -> Fragment:
        """Return the fragment; raise ResourceNotFoundException if not found for this owner."""
        return await Fragment.by_id(self.store, owner_id, fragment_id)

    async def get_fragment_data(self, owner_id: str, fragment_id: str) -> tuple[Fragment, bytes]:
        """Return the fragment and its data (empty bytes if no data was ever set)."""
        fragment = await self.get_fragment(owner_id, fragment_id)
        data = await fragment.get_data()
        return fragment, data if data is not None else b""

    async def get_converted_data(
        self, owner_id: str, fragment_id: str, extension: str
    ) -> FragmentRepresentation:
        """Return the fragment's data converted to the type named by extension.

        Raises:
            UnsupportedTypeException: extension is not a known fragment extension.
            ResourceNotFoundException: fragment not found for this owner.
            ConversionUnsupportedException: the type is not reachable from the
                fragment's type.
        """
        target_type = type_registry.mime_type_for_extension(extension)
        if target_type is None:
            raise UnsupportedTypeException(extension)
        fragment = await self.get_fragment(owner_id, fragment_id)
        if target_type not in fragment.formats:
            raise ConversionUnsupportedException(fragment.mime_type, target_type)
        data = await fragment.get_data()
        converted = await fragment.convert_data(data if data is not None else b"", target_type)
        logger.debug("Converted fragment %s from %s to %s", fragment_id, fragment.mime_type, target_type)
        charset = MediaType.parse(fragment.type).charset
        media_type = f"{target_type}; charset={charset}" if charset else target_type
        return FragmentRepresentation(data=converted, media_type=media_type)

    async def delete_fragment(self, owner_id: str, fragment_id: str) -> None:
        """Delete the fragment; raise ResourceNotFoundException if it does not exist for this owner.

        The underlying Fragment.delete is idempotent; the existence check is
        what lets callers report a missing fragment.
        """
        if await self.store.read_fragment(owner_id, fragment_id) is None:
            raise ResourceNotFoundException("fragment", fragment_id)
        await Fragment.delete(self.store, owner_id, fragment_id)
        logger.info("Deleted fragment %s", fragment_id)
