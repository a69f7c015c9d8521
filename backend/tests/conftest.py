"""
Hotel Listings Backend — Test Configuration (conftest.py)
==========================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets its own record and image directories under tmp_path;
       the FastAPI app is pointed at them through dependency overrides.

Fixture Hierarchy:
    ├── record_store: JsonFileRecordStore over tmp_path/hotels
    ├── file_service: FileService over tmp_path/images
    ├── hotel_service / image_service: services wired to the above
    ├── sample_hotel_data: a complete, valid hotel document
    ├── sample_image_bytes / sample_png_bytes: tiny image payloads
    └── test_client: HTTPX AsyncClient talking to the app in-process
"""

import os
import tempfile

# Override settings BEFORE any listings imports so module-level singletons
# never touch the working directory
_TEST_ROOT = tempfile.mkdtemp(prefix="listings_test_")
os.environ["DATA_DIR"] = os.path.join(_TEST_ROOT, "hotels")
os.environ["IMAGES_DIR"] = os.path.join(_TEST_ROOT, "images")
os.environ["LOG_LEVEL"] = "WARNING"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from listings.services.file_service import FileService  # noqa: E402
from listings.services.hotel_service import HotelService, get_hotel_service  # noqa: E402
from listings.services.image_service import ImageService, get_image_service  # noqa: E402
from listings.services.record_store import JsonFileRecordStore  # noqa: E402


@pytest.fixture
def data_dir(tmp_path):
    return tmp_path / "hotels"


@pytest.fixture
def images_dir(tmp_path):
    return tmp_path / "images"


@pytest.fixture
def record_store(data_dir):
    return JsonFileRecordStore(data_dir=str(data_dir))


@pytest.fixture
def file_service(images_dir):
    return FileService(images_dir=str(images_dir), url_prefix="/images")


@pytest.fixture
def hotel_service(record_store):
    return HotelService(store=record_store)


@pytest.fixture
def image_service(record_store, file_service):
    return ImageService(store=record_store, files=file_service)


@pytest.fixture
def sample_hotel_data():
    """A complete hotel document that passes every validation rule."""
    return {
        "title": "Test Hotel",
        "description": "A beautiful hotel.",
        "guestCount": 4,
        "bedroomCount": 2,
        "bathroomCount": 2,
        "amenities": ["WiFi", "Pool"],
        "hostInfo": "Friendly host",
        "address": "123 Test St, Test City",
        "latitude": 12.34,
        "longitude": 56.78,
        "rooms": [
            {
                "hotelSlug": "test-hotel",
                "roomSlug": "room-1",
                "roomImage": "room1.jpg",
                "roomTitle": "Luxury Suite",
                "bedroomCount": 1,
            }
        ],
    }


@pytest.fixture
def sample_image_bytes():
    """Minimal JPEG: SOI marker + JFIF header + EOI marker."""
    return (
        b'\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00'
        b'\xff\xd9'
    )


@pytest.fixture
def sample_png_bytes():
    """PNG signature followed by a fake IHDR chunk."""
    return b'\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR' + b'\x00' * 17


@pytest_asyncio.fixture
async def test_client(hotel_service, image_service):
    """
    HTTPX AsyncClient routed straight into the FastAPI app.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/hotels")
            assert response.status_code == 200
    """
    from listings.main import app

    app.dependency_overrides[get_hotel_service] = lambda: hotel_service
    app.dependency_overrides[get_image_service] = lambda: image_service
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.clear()
