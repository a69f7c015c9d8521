"""
Hotel Listings Backend — Health Check Route
============================================

What:  GET /health for monitoring and container probes.
How:   Lists the record directory (the only critical dependency) and checks
       that it can be written.

Status levels:
    - healthy:   record directory readable and writable (or not yet created)
    - unhealthy: listing failed or the directory is read-only
"""

import logging
import os
import time

from fastapi import APIRouter, Depends

from listings import __version__
from listings.exceptions import StorageError
from listings.schemas.hotel import HealthResponse
from listings.services.hotel_service import HotelService, get_hotel_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    service: HotelService = Depends(get_hotel_service),
) -> HealthResponse:
    store_status = "available"
    hotel_count = None

    try:
        hotel_count = len(await service.store.ids())
        data_dir = getattr(service.store, "data_dir", None)
        if data_dir is not None and data_dir.is_dir() and not os.access(data_dir, os.W_OK):
            store_status = "unavailable"
            logger.warning("Health check: record directory is not writable: %s", data_dir)
    except StorageError as e:
        store_status = "unavailable"
        logger.warning("Health check: record store unreachable: %s", e.message)

    return HealthResponse(
        status="healthy" if store_status == "available" else "unhealthy",
        version=__version__,
        record_store=store_status,
        hotel_count=hotel_count,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
