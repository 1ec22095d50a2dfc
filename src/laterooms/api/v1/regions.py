"""Region lookup endpoint."""

from fastapi import APIRouter

from laterooms.api.deps import ListingServiceDep
from laterooms.schemas.listing import RegionResponse

router = APIRouter()


@router.get("", response_model=list[RegionResponse])
async def list_regions(listing_service: ListingServiceDep):
    """Regions in display order."""
    return await listing_service.get_regions()
