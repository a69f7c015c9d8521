"""
Hotel Listings Backend — Record Store
======================================

What:  Durable mapping `id → hotel document`, plus slug lookup.
How:   `RecordStore` is the abstract capability the services depend on;
       `JsonFileRecordStore` keeps one pretty-printed JSON file per hotel,
       named `<id>.json`, under `settings.data_dir`.
Who:   Used by HotelService and ImageService.

Write Model:
    Each write serializes the whole document to a hidden temporary file in
    the same directory and renames it over `<id>.json`. The rename is atomic
    on POSIX and Windows, so readers see either the old or the new document,
    never a partial one.

    The read-modify-write sequence around a write is NOT protected. Two
    concurrent updates of the same hotel both read the old state and the
    second write wins (last-writer-wins).

Slug Lookup:
    `find_by_slug` scans every record in ID order. Record counts are small;
    a persisted slug index would replace the scan at larger scale.
"""

import json
import logging
import os
import re
import uuid
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional

import aiofiles
import aiofiles.os

from listings.config import settings
from listings.exceptions import CorruptRecordError, StorageError

logger = logging.getLogger(__name__)

# Only `<digits>.json` files are records; temp files and strays are ignored
RECORD_FILE_PATTERN = re.compile(r"^([0-9]+)\.json$")

# ASCII digits only: "٣" or "12abc" resolve as slugs, not IDs
NUMERIC_IDENTIFIER_PATTERN = re.compile(r"^[0-9]+$")


class RecordStore(ABC):
    """
    Abstract persistence capability for hotel documents.

    Contract:
        - write() fully replaces the document stored under `record_id`
        - read() returns None when no record exists
        - ids() lists every stored record ID in ascending order
        - Implementation-specific failures surface as StorageError

    Lookup helpers (find_by_slug, resolve, list_all, next_id) are built on
    those primitives, so a key-value or database backend only needs to
    implement the abstract methods.
    """

    @abstractmethod
    async def write(self, record_id: int, document: Dict[str, Any]) -> None:
        """Persist `document` under `record_id`, replacing prior content."""

    @abstractmethod
    async def read(self, record_id: int) -> Optional[Dict[str, Any]]:
        """Load the document stored under `record_id`, or None."""

    @abstractmethod
    async def ids(self) -> List[int]:
        """All stored record IDs, ascending."""

    async def list_all(self) -> List[Dict[str, Any]]:
        """Every stored document, ordered by ID."""
        documents = []
        for record_id in await self.ids():
            document = await self.read(record_id)
            if document is not None:
                documents.append(document)
        return documents

    async def find_by_slug(self, slug: str) -> Optional[Dict[str, Any]]:
        """
        First document whose `slug` equals `slug`, scanning in ID order.

        Slugs are unique, so the first match is the only match.
        """
        for record_id in await self.ids():
            document = await self.read(record_id)
            if document is not None and document.get("slug") == slug:
                return document
        return None

    async def resolve(self, identifier: Any) -> Optional[Dict[str, Any]]:
        """
        Look a hotel up by numeric ID or by slug.

        Identifiers made only of ASCII digits are read as IDs; everything
        else goes through slug lookup and is never parsed as a number.
        """
        if identifier is None:
            return None
        key = str(identifier).strip()
        if not key:
            return None
        if NUMERIC_IDENTIFIER_PATTERN.match(key):
            return await self.read(int(key))
        return await self.find_by_slug(key)

    async def next_id(self) -> int:
        """One greater than the highest stored ID, or 1 for an empty store."""
        existing = await self.ids()
        return existing[-1] + 1 if existing else 1


class JsonFileRecordStore(RecordStore):
    """
    Filesystem implementation of RecordStore.

    Directory Structure:
        data/hotels/
        ├── 1.json
        ├── 2.json
        └── 7.json
    """

    def __init__(self, data_dir: Optional[str] = None):
        """
        Args:
            data_dir: Override the default record directory (used in tests).
                      If None, uses settings.data_dir.
        """
        self.data_dir = Path(data_dir or settings.data_dir).resolve()
        logger.info("JsonFileRecordStore initialized with data_dir=%s", self.data_dir)

    def path_for(self, record_id: int) -> Path:
        return self.data_dir / f"{int(record_id)}.json"

    async def write(self, record_id: int, document: Dict[str, Any]) -> None:
        """
        Serialize `document` to `<data_dir>/<record_id>.json`.

        Creates the data directory on first use.

        Raises:
            StorageError if the directory or file cannot be written.
        """
        path = self.path_for(record_id)
        tmp_path = path.with_name(f".{path.name}.{uuid.uuid4().hex}.tmp")
        payload = json.dumps(document, indent=2, ensure_ascii=False)

        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
                await f.write(payload)
            await aiofiles.os.replace(tmp_path, path)
        except OSError as e:
            logger.error("Failed to write hotel record %s: %s", path, str(e))
            self._discard_temp_file(tmp_path)
            raise StorageError(
                message="Failed to save hotel record. Please try again.",
                context={"path": str(path), "os_error": str(e)},
            ) from e

        logger.debug("Hotel record %s written (%d bytes)", record_id, len(payload))

    async def read(self, record_id: int) -> Optional[Dict[str, Any]]:
        """
        Deserialize `<data_dir>/<record_id>.json`.

        Returns:
            The stored document, or None when the file does not exist.

        Raises:
            CorruptRecordError if the file is not a JSON object.
            StorageError for any other OS-level failure.
        """
        path = self.path_for(record_id)
        try:
            async with aiofiles.open(path, "r", encoding="utf-8") as f:
                raw = await f.read()
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.error("Failed to read hotel record %s: %s", path, str(e))
            raise StorageError(
                message="Failed to load hotel record. Please try again.",
                context={"path": str(path), "os_error": str(e)},
            ) from e

        try:
            document = json.loads(raw)
        except ValueError as e:
            logger.error("Hotel record %s is not valid JSON: %s", path, str(e))
            raise CorruptRecordError(
                record_id=record_id,
                context={"path": str(path), "error": str(e)},
            ) from e

        if not isinstance(document, dict):
            logger.error("Hotel record %s does not hold a JSON object", path)
            raise CorruptRecordError(
                record_id=record_id,
                context={"path": str(path), "type": type(document).__name__},
            )
        return document

    async def ids(self) -> List[int]:
        if not self.data_dir.is_dir():
            return []
        try:
            names = os.listdir(self.data_dir)
        except OSError as e:
            logger.error("Failed to list hotel records in %s: %s", self.data_dir, str(e))
            raise StorageError(
                message="Failed to list hotel records. Please try again.",
                context={"path": str(self.data_dir), "os_error": str(e)},
            ) from e

        record_ids = []
        for name in names:
            match = RECORD_FILE_PATTERN.match(name)
            if match:
                record_ids.append(int(match.group(1)))
        return sorted(record_ids)

    def _discard_temp_file(self, tmp_path: Path) -> None:
        try:
            if tmp_path.exists():
                tmp_path.unlink()
        except OSError as e:
            logger.warning("Failed to remove temporary file %s: %s", tmp_path, str(e))


# ── Singleton Instance ────────────────────────────────────────────────────
record_store = JsonFileRecordStore()
