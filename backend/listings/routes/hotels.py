"""
Hotel Listings Backend — Hotel Route Handlers
==============================================

What:  POST /hotels, GET /hotels, GET /hotels/{identifier}, PUT /hotels/{hotel_id}.
How:   Extracts the JSON body or path parameter, delegates to HotelService,
       wraps the result in the response envelope.

Bodies are taken as plain JSON objects. Field rules run in the service so
that every violation is reported together as a 400 `errors` list.
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends

from listings.schemas.hotel import (
    ErrorResponse,
    HotelDocument,
    HotelEnvelope,
    ValidationErrorResponse,
)
from listings.services.hotel_service import HotelService, get_hotel_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Hotels"])


@router.post(
    "/hotels",
    status_code=201,
    response_model=HotelEnvelope,
    response_model_exclude_unset=True,
    responses={
        201: {"description": "Hotel created", "model": HotelEnvelope},
        400: {"description": "Hotel data failed validation", "model": ValidationErrorResponse},
        500: {"description": "Record could not be written", "model": ErrorResponse},
    },
    summary="Create a hotel",
    description=(
        "Validates the hotel document, assigns a numeric ID and a slug derived "
        "from the title, and stores the record."
    ),
)
async def create_hotel(
    payload: Dict[str, Any] = Body(..., description="Hotel document"),
    service: HotelService = Depends(get_hotel_service),
) -> Dict[str, Any]:
    hotel = await service.create(payload)
    return {"message": "Hotel created successfully", "hotel": hotel}


@router.get(
    "/hotels",
    response_model=List[HotelDocument],
    response_model_exclude_unset=True,
    summary="List all hotels",
    description="Returns every stored hotel, ordered by ID.",
)
async def list_hotels(
    service: HotelService = Depends(get_hotel_service),
) -> List[Dict[str, Any]]:
    return await service.list_all()


@router.get(
    "/hotels/{identifier}",
    response_model=HotelDocument,
    response_model_exclude_unset=True,
    responses={
        404: {"description": "Hotel not found", "model": ErrorResponse},
    },
    summary="Get a hotel by ID or slug",
    description=(
        "A purely numeric identifier is looked up as the hotel ID; anything "
        "else is looked up as the slug."
    ),
)
async def get_hotel(
    identifier: str,
    service: HotelService = Depends(get_hotel_service),
) -> Dict[str, Any]:
    return await service.get(identifier)


@router.put(
    "/hotels/{hotel_id}",
    response_model=HotelEnvelope,
    response_model_exclude_unset=True,
    responses={
        400: {"description": "Hotel data failed validation", "model": ValidationErrorResponse},
        404: {"description": "Hotel not found", "model": ErrorResponse},
    },
    summary="Update a hotel",
    description=(
        "Merges the body over the stored record and validates the result. "
        "The ID and slug never change; images are kept unless supplied."
    ),
)
async def update_hotel(
    hotel_id: int,
    payload: Dict[str, Any] = Body(..., description="Fields to replace"),
    service: HotelService = Depends(get_hotel_service),
) -> Dict[str, Any]:
    hotel = await service.update(hotel_id, payload)
    return {"message": "Hotel updated successfully", "hotel": hotel}
