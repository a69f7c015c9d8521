"""
Hotel Listings Backend — Hotel Service (Business Logic Orchestrator)
=====================================================================

What:  Create / update / get / list use cases for hotel records.
How:   Composes the validator and the record store. Assigns IDs and slugs
       on creation; keeps them fixed on update.
Who:   Called by the /hotels route handlers.

Create Flow:
    ┌──────────┐    ┌────────────┐    ┌──────────────┐    ┌──────────┐
    │ Payload  │───▶│  Validate  │───▶│ Allocate ID  │───▶│  Write   │
    │ (Route)  │    │            │    │ + derive slug│    │ (Store)  │
    └──────────┘    └────────────┘    └──────────────┘    └──────────┘

Concurrency:
    Creation holds an asyncio.Lock around ID allocation and the first write,
    so one process never assigns the same ID or slug twice. Updates are
    unlocked read-modify-write: concurrent updates to one hotel are
    last-writer-wins.
"""

import asyncio
import logging
import re
import unicodedata
from typing import Any, Dict, List, Optional

from listings.exceptions import NotFoundError, ValidationError
from listings.services.record_store import RecordStore, record_store
from listings.services.validation import validate_hotel

logger = logging.getLogger(__name__)

# Fields owned by the service; client-supplied values are ignored
IMMUTABLE_FIELDS = ("id", "slug")

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]+")


def slugify(title: str) -> str:
    """
    Derive a URL-safe slug from a hotel title.

    "Test Hotel" → "test-hotel"; "Café  del Mar!" → "cafe-del-mar".
    Titles with no usable characters fall back to "hotel".
    """
    folded = unicodedata.normalize("NFKD", title).encode("ascii", "ignore").decode("ascii")
    slug = _NON_ALPHANUMERIC.sub("-", folded.lower()).strip("-")
    return slug or "hotel"


class HotelService:
    """
    Business logic layer for hotel records.

    Responsibilities:
        - create(): validate, assign ID and slug, persist
        - update(): merge, validate, persist with the same ID and slug
        - get(): resolve by ID or slug with not-found handling
        - list_all(): every record, ordered by ID
    """

    def __init__(self, store: Optional[RecordStore] = None):
        self.store = store or record_store
        self._create_lock = asyncio.Lock()

    async def create(self, document: Dict[str, Any]) -> Dict[str, Any]:
        """
        Validate and persist a new hotel.

        Returns:
            The stored document, including its assigned `id` and `slug`.

        Raises:
            ValidationError: One or more field rules failed (nothing written)
            StorageError: The record could not be written
        """
        violations = validate_hotel(document)
        if violations:
            raise ValidationError(violations)

        fields = {
            key: value
            for key, value in document.items()
            if key not in IMMUTABLE_FIELDS and key != "images"
        }

        async with self._create_lock:
            hotel_id = await self.store.next_id()
            slug = await self._unique_slug(slugify(fields["title"]))
            hotel = {"id": hotel_id, "slug": slug, **fields}
            await self.store.write(hotel_id, hotel)

        logger.info("Hotel created: id=%d slug=%s", hotel_id, slug)
        return hotel

    async def update(self, hotel_id: int, document: Dict[str, Any]) -> Dict[str, Any]:
        """
        Replace the fields of an existing hotel.

        The payload is merged over the stored record, so fields the caller
        omits (including `images`) keep their stored values. `id` and `slug`
        never change, even when the title does.

        Raises:
            ValidationError: The merged document fails field rules (nothing written)
            NotFoundError: No hotel has this ID
            StorageError: The record could not be read or written
        """
        if not isinstance(document, dict):
            raise ValidationError(validate_hotel(document))

        existing = await self.store.read(hotel_id)
        changes = {k: v for k, v in document.items() if k not in IMMUTABLE_FIELDS}
        merged = {**(existing or {}), **changes}

        violations = validate_hotel(merged)
        if violations:
            raise ValidationError(violations)
        if existing is None:
            raise NotFoundError(resource="hotel", resource_id=str(hotel_id))

        hotel = {**merged, "id": hotel_id, "slug": existing.get("slug")}
        await self.store.write(hotel_id, hotel)

        logger.info("Hotel updated: id=%d slug=%s", hotel_id, hotel["slug"])
        return hotel

    async def get(self, identifier: str) -> Dict[str, Any]:
        """
        Fetch a hotel by numeric ID or slug.

        Raises:
            NotFoundError: The identifier matches no hotel
        """
        hotel = await self.store.resolve(identifier)
        if hotel is None:
            raise NotFoundError(resource="hotel", resource_id=str(identifier))
        return hotel

    async def list_all(self) -> List[Dict[str, Any]]:
        return await self.store.list_all()

    async def _unique_slug(self, base: str) -> str:
        # Collisions get a numeric suffix: test-hotel, test-hotel-2, test-hotel-3
        taken = {hotel.get("slug") for hotel in await self.store.list_all()}
        if base not in taken:
            return base
        suffix = 2
        while f"{base}-{suffix}" in taken:
            suffix += 1
        return f"{base}-{suffix}"


# ── Singleton Instance ────────────────────────────────────────────────────
hotel_service = HotelService()


def get_hotel_service() -> HotelService:
    """FastAPI dependency returning the shared HotelService."""
    return hotel_service
