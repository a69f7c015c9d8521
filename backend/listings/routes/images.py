"""
Hotel Listings Backend — Image Route Handlers
==============================================

What:  POST /images (attach uploads to a hotel) and GET /images/{filename}.
How:   Reads each multipart file (bounded by the size limit), hands the batch
       to ImageService, and serves stored images back from the image directory.

Request Flow (POST /images):
    1. Client sends multipart/form-data: `identifier` + up to 10 `images`
    2. Each file is read into memory, at most max_image_size + 1 bytes
    3. ImageService filters, resolves the hotel, stores, and persists
    4. 200 with the hotel's full image list
"""

import logging
from pathlib import Path
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import FileResponse

from listings.config import settings
from listings.exceptions import BadRequestError, NotFoundError
from listings.schemas.hotel import ErrorResponse, ImageUploadResponse
from listings.services.image_service import ImageService, get_image_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Images"])


@router.post(
    "/images",
    response_model=ImageUploadResponse,
    responses={
        200: {"description": "Images attached", "model": ImageUploadResponse},
        400: {"description": "Missing identifier or rejected file", "model": ErrorResponse},
        404: {"description": "Hotel not found", "model": ErrorResponse},
        500: {"description": "Image or record could not be written", "model": ErrorResponse},
    },
    summary="Upload images for a hotel",
    description=(
        "Attach up to 10 images (jpg, jpeg, png, gif, webp; max 5MB each) to the "
        "hotel given by `identifier`, which may be its numeric ID or its slug."
    ),
)
async def upload_images(
    identifier: Optional[str] = Form(default=None, description="Hotel ID or slug"),
    images: Optional[List[UploadFile]] = File(default=None, description="Image files"),
    service: ImageService = Depends(get_image_service),
) -> ImageUploadResponse:
    uploads = []
    try:
        for upload in images or []:
            # One byte past the limit is enough to reject an oversized file
            content = await upload.read(settings.max_image_size + 1)
            uploads.append((upload.filename or "", content))
    finally:
        for upload in images or []:
            await upload.close()

    logger.info(
        "Received image upload: identifier=%s files=%d",
        identifier,
        len(uploads),
    )

    paths = await service.attach(identifier, uploads)
    return ImageUploadResponse(message="Image uploaded successfully", images=paths)


@router.get(
    "/images/{filename}",
    summary="Serve an uploaded image",
    responses={
        200: {"description": "Image file"},
        400: {"description": "Invalid image path", "model": ErrorResponse},
        404: {"description": "Image not found", "model": ErrorResponse},
    },
)
async def serve_image(
    filename: str,
    service: ImageService = Depends(get_image_service),
) -> FileResponse:
    images_dir = service.files.images_dir
    full_path = (images_dir / filename).resolve()

    # Only direct children of the image directory are served
    if full_path.parent != images_dir or Path(filename).name != filename:
        raise BadRequestError(message="Invalid image path", field="filename")

    if not full_path.is_file():
        raise NotFoundError(resource="image", resource_id=filename)

    return FileResponse(
        path=str(full_path),
        headers={"Cache-Control": "public, max-age=86400"},
    )
