"""
Hotel Listings Backend — Image Attachment Service
==================================================

What:  Binds uploaded image files to a hotel record.
How:   Runs the upload filters, resolves the hotel by ID or slug, stores the
       files, appends their public paths to `images`, and rewrites the record.
Who:   Called by the POST /images route handler.

Attach Flow:
    1. Boundary filters on the batch       → BadRequestError
    2. Identifier present                  → BadRequestError
    3. Resolve hotel (ID or slug)          → NotFoundError (nothing stored)
    4. Store files                         → StorageError
    5. Append paths in upload order
    6. Write record under the hotel's ID   → StorageError (stored files removed)
    7. Return the full images list

Steps 3 to 6 are an unlocked read-modify-write. Two concurrent attaches to
the same hotel can lose one batch of paths (last-writer-wins).
"""

import logging
from typing import List, Optional, Sequence

from listings.exceptions import BadRequestError, NotFoundError, StorageError
from listings.services.file_service import FileService, IncomingFile, file_service
from listings.services.record_store import RecordStore, record_store

logger = logging.getLogger(__name__)


class ImageService:
    """Attach workflow; stateless apart from its injected collaborators."""

    def __init__(
        self,
        store: Optional[RecordStore] = None,
        files: Optional[FileService] = None,
    ):
        self.store = store or record_store
        self.files = files or file_service

    async def attach(self, identifier: Optional[str], uploads: Sequence[IncomingFile]) -> List[str]:
        """
        Append uploaded images to a hotel's `images` list.

        Args:
            identifier: Hotel ID (digits) or slug
            uploads: (original filename, bytes) pairs in upload order

        Returns:
            The hotel's complete `images` list after the append.

        Raises:
            BadRequestError: Missing identifier or a file failed the upload filters
            NotFoundError: No hotel matches the identifier
            StorageError: An image or the record could not be written
        """
        self.files.validate_batch(uploads)

        key = (identifier or "").strip()
        if not key:
            raise BadRequestError(message="Identifier is required", field="identifier")

        hotel = await self.store.resolve(key)
        if hotel is None:
            raise NotFoundError(resource="hotel", resource_id=key)

        stored = await self.files.store_batch(uploads)
        new_paths = [public_path for public_path, _ in stored]

        images = hotel.get("images")
        if not isinstance(images, list):
            images = []
        images.extend(new_paths)
        hotel["images"] = images

        try:
            await self.store.write(hotel["id"], hotel)
        except StorageError:
            await self.files.cleanup(new_paths)
            raise

        logger.info(
            "Attached %d image(s) to hotel id=%s slug=%s",
            len(new_paths),
            hotel["id"],
            hotel.get("slug"),
        )
        return images


# ── Singleton Instance ────────────────────────────────────────────────────
image_service = ImageService()


def get_image_service() -> ImageService:
    """FastAPI dependency returning the shared ImageService."""
    return image_service
