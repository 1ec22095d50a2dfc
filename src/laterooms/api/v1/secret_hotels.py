"""Secret hotel browse endpoint."""

from fastapi import APIRouter, HTTPException, Query, status

from laterooms.api.deps import ListingServiceDep, Now
from laterooms.schemas.listing import (
    RegionResponse,
    SecretHotelCard,
    SecretHotelListPage,
    time_filter_options,
)
from laterooms.services.listing_filter import (
    ALL,
    SECRET_TIME_FILTERS,
    TimeFilter,
    count_label,
    filter_listings,
)

router = APIRouter()


@router.get("", response_model=SecretHotelListPage)
async def list_secret_hotels(
    listing_service: ListingServiceDep,
    now: Now,
    region: str = Query(ALL, description="Region name or 'all'"),
    time: TimeFilter = Query(TimeFilter.ALL, description="Time filter"),
):
    """Active secret listings, cheapest first. There is no "ending soon" filter."""
    if time not in SECRET_TIME_FILTERS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported time filter: {time.value}",
        )

    regions = await listing_service.get_regions()
    hotels = await listing_service.get_active_secret_hotels()
    filtered = filter_listings(hotels, now, region=region, time_filter=time)

    return SecretHotelListPage(
        hotels=[SecretHotelCard.from_row(row, now) for row in filtered],
        count=len(filtered),
        count_label=count_label(len(filtered), "secret hotel"),
        region=region,
        time_filter=time,
        time_filters=time_filter_options(SECRET_TIME_FILTERS, time),
        regions=[RegionResponse.model_validate(r) for r in regions],
    )
