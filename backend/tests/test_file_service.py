"""
Hotel Listings Backend — File Service Unit Tests
=================================================

What:  Tests for FileService upload filters, storage, and cleanup.
Why:   The upload boundary decides what reaches disk; a gap here lets
       arbitrary files into the public image directory.
How:   Tests use in-memory bytes and a temporary image directory.

Test Strategy:
    ✅ Allowed extensions (.jpg, .jpeg, .png, .gif, .webp), case-insensitive
    ✅ Rejected extensions (.pdf, .exe, .svg, none)
    ✅ Size limits (empty, boundary at max_image_size)
    ✅ Batch count limit
    ✅ Stored filename pattern and path stripping
    ✅ Partial batch failure removes already-written files
"""

import re
from unittest.mock import AsyncMock, patch

import pytest

from listings.config import settings
from listings.exceptions import BadRequestError, StorageError


class TestFileValidation:
    """Filters applied before any byte is written."""

    # ── Extension Validation ──────────────────────────────────────────────

    @pytest.mark.parametrize(
        "filename",
        ["photo.jpg", "photo.jpeg", "photo.png", "anim.gif", "photo.webp"],
    )
    def test_allowed_extensions(self, file_service, filename):
        # Should not raise
        file_service.validate_extension(filename)

    def test_extension_check_is_case_insensitive(self, file_service):
        assert file_service.validate_extension("photo.JPG") == ".jpg"
        assert file_service.validate_extension("photo.Jpeg") == ".jpeg"
        assert file_service.validate_extension("photo.WebP") == ".webp"

    @pytest.mark.parametrize(
        "filename",
        ["document.pdf", "malware.exe", "vector.svg", "README", "photo.jpg.txt"],
    )
    def test_rejected_extensions(self, file_service, filename):
        with pytest.raises(BadRequestError, match="Only image files are allowed"):
            file_service.validate_extension(filename)

    # ── Size Validation ───────────────────────────────────────────────────

    def test_empty_file_rejected(self, file_service):
        with pytest.raises(BadRequestError, match="empty"):
            file_service.validate_size("photo.jpg", 0)

    def test_size_at_limit_passes(self, file_service):
        file_service.validate_size("photo.jpg", settings.max_image_size)

    def test_size_over_limit_rejected(self, file_service):
        with pytest.raises(BadRequestError, match="File too large") as exc_info:
            file_service.validate_size("photo.jpg", settings.max_image_size + 1)
        assert exc_info.value.field == "images"

    # ── Batch Validation ──────────────────────────────────────────────────

    def test_batch_over_count_limit_rejected(self, file_service, sample_image_bytes):
        files = [(f"p{i}.jpg", sample_image_bytes) for i in range(settings.max_images_per_request + 1)]

        with pytest.raises(BadRequestError, match="Too many files"):
            file_service.validate_batch(files)

    def test_batch_stops_on_any_bad_file(self, file_service, sample_image_bytes):
        files = [("good.jpg", sample_image_bytes), ("bad.pdf", b"%PDF-1.4")]

        with pytest.raises(BadRequestError, match="Only image files"):
            file_service.validate_batch(files)

    def test_empty_batch_passes(self, file_service):
        file_service.validate_batch([])


class TestFilenames:

    def test_generated_name_keeps_original_basename(self, file_service):
        name = file_service.generate_filename("photo.jpg")

        assert re.match(r"^\d+-\d+-photo\.jpg$", name)

    def test_generated_names_do_not_collide(self, file_service):
        names = {file_service.generate_filename("photo.jpg") for _ in range(20)}

        assert len(names) == 20

    def test_directory_components_are_stripped(self, file_service):
        assert file_service.generate_filename("../../etc/evil.jpg").endswith("-evil.jpg")
        assert file_service.generate_filename("C:\\Users\\me\\pic.png").endswith("-pic.png")

    def test_unsafe_characters_are_replaced(self, file_service):
        name = file_service.generate_filename("my holiday (1).jpg")

        assert re.match(r"^\d+-\d+-my_holiday_1_\.jpg$", name)

    def test_public_path_round_trips_to_disk_path(self, file_service, images_dir):
        public = file_service.public_path("123-456-photo.jpg")

        assert public == "/images/123-456-photo.jpg"
        assert file_service.absolute_path(public) == images_dir.resolve() / "123-456-photo.jpg"


class TestStorage:

    @pytest.mark.asyncio
    async def test_store_file_writes_bytes(self, file_service, sample_image_bytes):
        public_path = await file_service.store_file("photo.jpg", sample_image_bytes)

        assert re.match(r"^/images/\d+-\d+-photo\.jpg$", public_path)
        assert file_service.absolute_path(public_path).read_bytes() == sample_image_bytes

    @pytest.mark.asyncio
    async def test_store_batch_preserves_upload_order(self, file_service, sample_image_bytes, sample_png_bytes):
        stored = await file_service.store_batch([
            ("first.jpg", sample_image_bytes),
            ("second.png", sample_png_bytes),
        ])

        assert [original for _, original in stored] == ["first.jpg", "second.png"]
        assert stored[0][0].endswith("-first.jpg")
        assert stored[1][0].endswith("-second.png")

    @pytest.mark.asyncio
    async def test_failed_write_raises_storage_error(self, file_service, sample_image_bytes):
        with patch("aiofiles.open", side_effect=OSError("read-only filesystem")):
            with pytest.raises(StorageError, match="Failed to save uploaded image"):
                await file_service.store_file("photo.jpg", sample_image_bytes)

    @pytest.mark.asyncio
    async def test_partial_batch_failure_removes_written_files(
        self, file_service, images_dir, sample_image_bytes
    ):
        real_store_file = file_service.store_file
        calls = {"count": 0}

        async def fail_on_second(original_name, content):
            calls["count"] += 1
            if calls["count"] == 2:
                raise StorageError(message="Failed to save uploaded image. Please try again.")
            return await real_store_file(original_name, content)

        with patch.object(file_service, "store_file", AsyncMock(side_effect=fail_on_second)):
            with pytest.raises(StorageError):
                await file_service.store_batch([
                    ("a.jpg", sample_image_bytes),
                    ("b.jpg", sample_image_bytes),
                    ("c.jpg", sample_image_bytes),
                ])

        assert list(images_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_cleanup_ignores_missing_files(self, file_service):
        # Should not raise
        await file_service.cleanup(["/images/does-not-exist.jpg"])
