"""
Hotel Listings Backend — Image API Integration Tests
=====================================================

What:  Multipart uploads to POST /images and retrieval via GET /images/{filename}.
How:   HTTPX AsyncClient with ASGITransport against temporary directories.
"""

import re

import pytest

from listings.config import settings


@pytest.fixture
def upload_files(sample_image_bytes, sample_png_bytes):
    return [
        ("images", ("file1.jpg", sample_image_bytes, "image/jpeg")),
        ("images", ("file2.png", sample_png_bytes, "image/png")),
    ]


async def create_hotel(client, data):
    response = await client.post("/hotels", json=data)
    assert response.status_code == 201, response.text
    return response.json()["hotel"]


class TestUploadImages:

    @pytest.mark.asyncio
    async def test_upload_by_slug(self, test_client, sample_hotel_data, upload_files):
        await create_hotel(test_client, sample_hotel_data)

        response = await test_client.post("/images", data={"identifier": "test-hotel"}, files=upload_files)

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Image uploaded successfully"
        assert len(body["images"]) == 2
        assert all(re.match(r"^/images/.+", path) for path in body["images"])
        assert body["images"][0].endswith("-file1.jpg")
        assert body["images"][1].endswith("-file2.png")

        hotel = (await test_client.get("/hotels/test-hotel")).json()
        assert hotel["images"] == body["images"]

    @pytest.mark.asyncio
    async def test_upload_by_numeric_id(self, test_client, sample_hotel_data, upload_files):
        hotel = await create_hotel(test_client, sample_hotel_data)

        response = await test_client.post(
            "/images", data={"identifier": str(hotel["id"])}, files=upload_files
        )

        assert response.status_code == 200
        assert len(response.json()["images"]) == 2

    @pytest.mark.parametrize("identifier", ["9999", "non-existent-hotel"])
    @pytest.mark.asyncio
    async def test_unknown_hotel_returns_404_and_stores_nothing(self, test_client, upload_files, images_dir,
                                                                identifier):
        response = await test_client.post("/images", data={"identifier": identifier}, files=upload_files)

        assert response.status_code == 404
        assert not images_dir.exists() or list(images_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_missing_identifier_returns_400(self, test_client, upload_files):
        response = await test_client.post("/images", files=upload_files)

        assert response.status_code == 400
        assert response.json()["message"] == "Identifier is required"

    @pytest.mark.asyncio
    async def test_disallowed_file_type_returns_400(self, test_client, sample_hotel_data):
        await create_hotel(test_client, sample_hotel_data)

        response = await test_client.post(
            "/images",
            data={"identifier": "test-hotel"},
            files=[("images", ("notes.txt", b"plain text", "text/plain"))],
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Only image files are allowed!"

    @pytest.mark.asyncio
    async def test_oversized_file_returns_400(self, test_client, sample_hotel_data):
        await create_hotel(test_client, sample_hotel_data)
        too_big = b"\xff\xd8" + b"\x00" * settings.max_image_size

        response = await test_client.post(
            "/images",
            data={"identifier": "test-hotel"},
            files=[("images", ("huge.jpg", too_big, "image/jpeg"))],
        )

        assert response.status_code == 400
        assert "File too large" in response.json()["message"]

    @pytest.mark.asyncio
    async def test_too_many_files_returns_400(self, test_client, sample_hotel_data, sample_image_bytes):
        await create_hotel(test_client, sample_hotel_data)
        files = [
            ("images", (f"p{i}.jpg", sample_image_bytes, "image/jpeg"))
            for i in range(settings.max_images_per_request + 1)
        ]

        response = await test_client.post("/images", data={"identifier": "test-hotel"}, files=files)

        assert response.status_code == 400
        assert "Too many files" in response.json()["message"]


class TestServeImages:

    @pytest.mark.asyncio
    async def test_uploaded_image_is_served(self, test_client, sample_hotel_data, sample_image_bytes):
        await create_hotel(test_client, sample_hotel_data)
        upload = await test_client.post(
            "/images",
            data={"identifier": "test-hotel"},
            files=[("images", ("pool.jpg", sample_image_bytes, "image/jpeg"))],
        )
        path = upload.json()["images"][0]

        response = await test_client.get(path)

        assert response.status_code == 200
        assert response.content == sample_image_bytes
        assert "max-age" in response.headers["Cache-Control"]

    @pytest.mark.asyncio
    async def test_missing_image_returns_404(self, test_client):
        response = await test_client.get("/images/does-not-exist.jpg")

        assert response.status_code == 404
