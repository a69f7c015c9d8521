"""
Hotel Listings Backend — Pydantic Request/Response Schemas
===========================================================

What:  Pydantic models describing the API contract.
How:   Routes declare these as response models; FastAPI serializes responses
       through them and builds the OpenAPI docs from them.

Request bodies for /hotels are accepted as free-form JSON objects and checked
by listings.services.validation, so a bad document yields the `{errors: [...]}`
400 response instead of FastAPI's 422. The HotelDocument model below is the
shape of a stored (already validated) record.
"""

from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field

Number = Union[int, float]


# ══════════════════════════════════════════════════════════════════════════
# Hotel Documents
# ══════════════════════════════════════════════════════════════════════════


class Room(BaseModel):
    """Room sub-document embedded in a hotel record."""
    hotelSlug: Optional[str] = Field(default=None, description="Slug of the owning hotel")
    roomSlug: Optional[str] = Field(default=None, description="Room identifier within the hotel")
    roomImage: Optional[str] = Field(default=None, description="Room image path or URL")
    roomTitle: Optional[str] = Field(default=None, description="Display title of the room")
    bedroomCount: Optional[Number] = Field(default=None, description="Bedrooms in this room")

    model_config = {"extra": "allow"}


class HotelDocument(BaseModel):
    """
    What:  A persisted hotel record.
    Who:   Returned by every /hotels endpoint.

    Unknown fields sent at creation are stored and returned unchanged.
    """
    id: int = Field(description="Numeric ID assigned at creation")
    slug: str = Field(description="Unique slug derived from the title at creation")
    title: Optional[str] = None
    description: Optional[str] = None
    guestCount: Optional[Number] = None
    bedroomCount: Optional[Number] = None
    bathroomCount: Optional[Number] = None
    amenities: Optional[List[str]] = None
    hostInfo: Optional[str] = None
    address: Optional[str] = None
    latitude: Optional[Number] = None
    longitude: Optional[Number] = None
    rooms: Optional[List[Room]] = None
    images: Optional[List[str]] = Field(
        default=None,
        description="Public image paths, in upload order (absent until the first upload)",
    )

    model_config = {"extra": "allow"}


class HotelEnvelope(BaseModel):
    """Returned by POST /hotels (201) and PUT /hotels/{hotel_id} (200)."""
    message: str = Field(description="Human-readable success message")
    hotel: HotelDocument


class ImageUploadResponse(BaseModel):
    """Returned by POST /images."""
    message: str = Field(default="Image uploaded successfully")
    images: List[str] = Field(description="The hotel's complete image list after the upload")


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models
# ══════════════════════════════════════════════════════════════════════════


class FieldError(BaseModel):
    msg: str = Field(description="What is wrong with the field")
    param: str = Field(description="Field path, e.g. 'bedroomCount' or 'rooms[0].roomSlug'")


class ErrorResponse(BaseModel):
    """
    Standard error body.

    Example:
        {
            "error": "not_found",
            "message": "Hotel not found",
            "request_id": "1f0c2a9b"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[Dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class ValidationErrorResponse(ErrorResponse):
    """400 body for hotel documents that fail validation."""
    errors: List[FieldError] = Field(description="Every violated field rule")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    record_store: str = Field(description="Record directory: available, unavailable")
    hotel_count: Optional[int] = Field(default=None, description="Stored hotel records")
    uptime_seconds: float = Field(description="Seconds since service started")
