"""
Hotel Listings Backend — Image File Service
============================================

What:  The upload boundary: filters incoming image files, stores them in the
       public image directory, and removes them again when a later step fails.
How:   Validates extension, size, and count for the whole batch before any
       byte is written, then writes each file with a collision-resistant name.
Who:   Called by ImageService during the attach workflow.

Filters (all enforced before storage):
    1. Count:     at most settings.max_images_per_request files per request
    2. Extension: .jpg, .jpeg, .png, .gif, .webp (case-insensitive)
    3. Size:      non-empty and at most settings.max_image_size bytes

Stored Names:
    <epoch-milliseconds>-<random 0..999999999>-<original basename>
    e.g. 1718031234567-482913377-pool.jpg

    The timestamp and random component keep two concurrent uploads of
    "pool.jpg" from overwriting each other. Only the basename of the client
    filename is used, so "../../etc/x.jpg" becomes "x.jpg".
"""

import logging
import random
import re
import time
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import aiofiles

from listings.config import settings
from listings.exceptions import BadRequestError, StorageError

logger = logging.getLogger(__name__)

# What: (original filename, raw bytes) as read from the multipart request
IncomingFile = Tuple[str, bytes]

# What: (public path stored in the record, original filename)
StoredFile = Tuple[str, str]

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


class FileService:
    """
    Manages image validation, storage, and cleanup.

    Directory Structure:
        public/
        └── images/
            ├── 1718031234567-482913377-pool.jpg
            └── 1718031234581-100234871-lobby.png
    """

    def __init__(
        self,
        images_dir: Optional[str] = None,
        url_prefix: Optional[str] = None,
    ):
        """
        Args:
            images_dir: Override the default image directory (used in tests).
                        If None, uses settings.images_dir.
            url_prefix: Override the public URL prefix (default "/images").
        """
        self.images_dir = Path(images_dir or settings.images_dir).resolve()
        self.url_prefix = url_prefix or settings.images_url_prefix
        logger.info("FileService initialized with images_dir=%s", self.images_dir)

    def validate_extension(self, filename: str) -> str:
        """
        Returns:
            Normalized extension (lowercase with dot).

        Raises:
            BadRequestError if the extension is not an allowed image type.
        """
        ext = Path(filename).suffix.lower()
        allowed = settings.allowed_image_extensions_set
        if ext not in allowed:
            raise BadRequestError(
                message="Only image files are allowed!",
                field="images",
                context={"filename": filename, "extension": ext, "allowed": sorted(allowed)},
            )
        return ext

    def validate_size(self, filename: str, size: int) -> None:
        """Rejects empty files and files above settings.max_image_size."""
        if size == 0:
            raise BadRequestError(
                message=f"File '{filename}' is empty",
                field="images",
                context={"filename": filename},
            )
        if size > settings.max_image_size:
            max_mb = settings.max_image_size / (1024 * 1024)
            raise BadRequestError(
                message=f"File too large. Maximum size is {max_mb:.0f}MB per image.",
                field="images",
                context={"filename": filename, "max_size": settings.max_image_size, "actual_size": size},
            )

    def validate_batch(self, files: Sequence[IncomingFile]) -> None:
        """
        Apply every boundary filter to the batch without touching the disk.

        Raises:
            BadRequestError on the first file that fails a filter.
        """
        if len(files) > settings.max_images_per_request:
            raise BadRequestError(
                message=f"Too many files. At most {settings.max_images_per_request} images per upload.",
                field="images",
                context={"count": len(files), "limit": settings.max_images_per_request},
            )
        for filename, content in files:
            self.validate_extension(filename)
            self.validate_size(filename, len(content))

    def generate_filename(self, original_name: str) -> str:
        """Collision-resistant stored name preserving the original basename."""
        basename = Path(original_name.replace("\\", "/")).name
        safe_name = _UNSAFE_FILENAME_CHARS.sub("_", basename).lstrip(".") or "image"
        timestamp_ms = int(time.time() * 1000)
        return f"{timestamp_ms}-{random.randint(0, 999_999_999)}-{safe_name}"

    def public_path(self, stored_name: str) -> str:
        return f"{self.url_prefix}/{stored_name}"

    def absolute_path(self, public_path: str) -> Path:
        """Map a public path like /images/<name> back to its file on disk."""
        return self.images_dir / Path(public_path).name

    async def store_file(self, original_name: str, content: bytes) -> str:
        """
        Write one image to the image directory.

        Returns:
            Public path, e.g. "/images/1718031234567-482913377-pool.jpg".

        Raises:
            StorageError if directory creation or file write fails.
        """
        stored_name = self.generate_filename(original_name)
        absolute_path = self.images_dir / stored_name

        try:
            self.images_dir.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(absolute_path, "wb") as f:
                await f.write(content)
        except OSError as e:
            logger.error("Failed to store image at %s: %s", absolute_path, str(e))
            raise StorageError(
                message="Failed to save uploaded image. Please try again.",
                context={"path": str(absolute_path), "os_error": str(e)},
            ) from e

        logger.info("Image stored: %s (%d bytes)", stored_name, len(content))
        return self.public_path(stored_name)

    async def store_batch(self, files: Sequence[IncomingFile]) -> List[StoredFile]:
        """
        Store every file in upload order.

        If a write fails part way through, files already written for this
        batch are removed before the StorageError propagates.
        """
        stored: List[StoredFile] = []
        try:
            for original_name, content in files:
                public_path = await self.store_file(original_name, content)
                stored.append((public_path, original_name))
        except StorageError:
            await self.cleanup([path for path, _ in stored])
            raise
        return stored

    async def cleanup(self, public_paths: Sequence[str]) -> None:
        """
        Remove stored images after a failed attach (best effort).

        Missing files are ignored; other failures are logged, not raised,
        because the caller is already reporting the original error.
        """
        for public_path in public_paths:
            path = self.absolute_path(public_path)
            try:
                if path.exists():
                    path.unlink()
                    logger.info("Cleaned up image: %s", path.name)
                else:
                    logger.debug("Cleanup: image already gone: %s", path.name)
            except OSError as e:
                logger.warning("Failed to clean up image %s: %s", path, str(e))


# ── Singleton Instance ────────────────────────────────────────────────────
file_service = FileService()
