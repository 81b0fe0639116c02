"""Local filesystem fragment store with path validation and atomic writes."""

from __future__ import annotations

import hashlib
import json
import logging
import os
import re
import tempfile
from pathlib import Path

import aiofiles
import aiofiles.os

from app.domain.exceptions import ValidationException
from app.domain.value_objects.fragment_record import FragmentRecord
from app.infrastructure.exceptions import (
    StorageDeleteError,
    StoragePermissionError,
    StorageReadError,
    StorageWriteError,
)

logger = logging.getLogger(__name__)

# Fragment ids become file names; anything else cannot address a file.
_FRAGMENT_ID_RE = re.compile(r"^[A-Za-z0-9_-]{1,128}$")

_META_SUFFIX = ".json"
_DATA_SUFFIX = ".bin"


class LocalFragmentStore:
    """Filesystem store: <root>/<sha256(owner_id)>/<id>.json and <id>.bin.

    The owner directory name is a digest so arbitrary owner ids are safe
    path components. Writes use temp file + rename. Listing is ordered by
    the record's created timestamp, then id.
    """

    def __init__(self, storage_root: str) -> None:
        """Initialize local storage.

        Args:
            storage_root: Base directory for all owners' fragments.
        """
        self.storage_root = Path(storage_root).resolve()
        self.storage_root.mkdir(parents=True, exist_ok=True, mode=0o750)

    def _owner_dir(self, owner_id: str) -> Path:
        digest = hashlib.sha256(owner_id.encode("utf-8")).hexdigest()
        return self.storage_root / digest

    def _get_full_path(self, owner_id: str, fragment_id: str, suffix: str) -> Path:
        """Resolve and validate path under storage_root. Raises StoragePermissionError if invalid."""
        if not _FRAGMENT_ID_RE.match(fragment_id):
            raise StoragePermissionError(fragment_id, "path_validation")
        full_path = (self._owner_dir(owner_id) / f"{fragment_id}{suffix}").resolve()
        try:
            full_path.relative_to(self.storage_root)
        except ValueError as e:
            raise StoragePermissionError(fragment_id, "path_validation") from e
        return full_path

    def _find_path(self, owner_id: str, fragment_id: str, suffix: str) -> Path | None:
        """Like _get_full_path, but an id that cannot name a file is simply absent."""
        try:
            return self._get_full_path(owner_id, fragment_id, suffix)
        except StoragePermissionError:
            return None

    async def _atomic_write(self, target_path: Path, content: bytes) -> None:
        target_path.parent.mkdir(parents=True, exist_ok=True, mode=0o750)
        temp_fd, temp_path = tempfile.mkstemp(
            dir=target_path.parent,
            prefix=".tmp_",
            suffix=target_path.suffix,
        )
        os.close(temp_fd)
        try:
            async with aiofiles.open(temp_path, "wb") as f:
                await f.write(content)
            os.chmod(temp_path, 0o640)
            await aiofiles.os.replace(temp_path, target_path)
        finally:
            if Path(temp_path).exists():
                os.unlink(temp_path)

    async def write_fragment(self, record: FragmentRecord) -> None:
        path = self._get_full_path(record.owner_id, record.id, _META_SUFFIX)
        try:
            await self._atomic_write(path, json.dumps(record.to_dict()).encode("utf-8"))
        except OSError as e:
            raise StorageWriteError(record.id, str(e)) from e

    async def read_fragment(self, owner_id: str, fragment_id: str) -> FragmentRecord | None:
        path = self._find_path(owner_id, fragment_id, _META_SUFFIX)
        if path is None:
            return None
        try:
            async with aiofiles.open(path, "r", encoding="utf-8") as f:
                content = await f.read()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageReadError(fragment_id, str(e)) from e
        try:
            return FragmentRecord.from_dict(json.loads(content))
        except (ValueError, ValidationException) as e:
            raise StorageReadError(fragment_id, f"corrupt metadata: {e}") from e

    async def write_fragment_data(self, owner_id: str, fragment_id: str, data: bytes) -> None:
        path = self._get_full_path(owner_id, fragment_id, _DATA_SUFFIX)
        try:
            await self._atomic_write(path, bytes(data))
        except OSError as e:
            raise StorageWriteError(fragment_id, str(e)) from e

    async def read_fragment_data(self, owner_id: str, fragment_id: str) -> bytes | None:
        path = self._find_path(owner_id, fragment_id, _DATA_SUFFIX)
        if path is None:
            return None
        try:
            async with aiofiles.open(path, "rb") as f:
                return await f.read()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageReadError(fragment_id, str(e)) from e

    async def list_fragments(
        self, owner_id: str, expand: bool = False
    ) -> list[str] | list[FragmentRecord]:
        owner_dir = self._owner_dir(owner_id)
        if not owner_dir.is_dir():
            return []
        records: list[FragmentRecord] = []
        for meta_path in owner_dir.glob(f"*{_META_SUFFIX}"):
            # Deleted between glob and read.
            record = await self.read_fragment(owner_id, meta_path.stem)
            if record is not None:
                records.append(record)
        records.sort(key=lambda r: (r.created, r.id))
        if expand:
            return records
        return [r.id for r in records]

    async def delete_fragment(self, owner_id: str, fragment_id: str) -> None:
        for suffix in (_META_SUFFIX, _DATA_SUFFIX):
            path = self._find_path(owner_id, fragment_id, suffix)
            if path is None:
                return
            try:
                await aiofiles.os.remove(path)
            except FileNotFoundError:
                continue
            except OSError as e:
                raise StorageDeleteError(fragment_id, str(e)) from e
        logger.debug("Deleted fragment %s from %s", fragment_id, self._owner_dir(owner_id))

    async def commit_fragment(self, record: FragmentRecord, data: bytes) -> None:
        await self.write_fragment_data(record.owner_id, record.id, data)
        await self.write_fragment(record)
