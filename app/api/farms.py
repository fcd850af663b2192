from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.auth.security import is_farmer
from app.db.marketplace import MarketplaceStore
from app.db.session import get_store
from app.models.farm import Farm
from app.models.user import User
from app.schemas.farm import FarmFilters

router = APIRouter()


@router.get(
    "/",
    response_model=List[Farm],
    summary="Search farms",
    description="List farms matching a search text and meat-type filters."
)
def read_farms(
    search: Optional[str] = Query(None, description="Match farm name, location or meat type"),
    meat_type: Optional[List[str]] = Query(None, description="Only farms offering one of these types"),
    store: MarketplaceStore = Depends(get_store)
):
    """
    Retrieve farms, in listing order.

    - **search**: case-insensitive text matched against name, location and offering types
    - **meat_type**: repeatable; farm must offer at least one of the given types

    Omitted parameters fall back to the stored search text and filters.
    """
    return store.filtered_farms(search, meat_type)


@router.get("/meat-types", response_model=List[str])
def read_meat_types(store: MarketplaceStore = Depends(get_store)):
    return store.all_meat_types()


@router.get("/filters", response_model=FarmFilters)
def read_filters(store: MarketplaceStore = Depends(get_store)):
    return FarmFilters(
        search_text=store.search_text,
        selected_farm_filters=sorted(store.selected_farm_filters),
    )


@router.put("/filters", response_model=FarmFilters)
def update_filters(
    filters: FarmFilters,
    store: MarketplaceStore = Depends(get_store)
):
    store.search_text = filters.search_text
    store.selected_farm_filters = filters.selected_farm_filters
    return read_filters(store)


@router.post("/filters/{meat_type}/toggle", response_model=FarmFilters)
def toggle_filter(
    meat_type: str,
    store: MarketplaceStore = Depends(get_store)
):
    store.toggle_farm_filter(meat_type)
    return read_filters(store)


@router.delete("/filters", status_code=status.HTTP_204_NO_CONTENT)
def clear_filters(store: MarketplaceStore = Depends(get_store)):
    store.clear_farm_filters()


@router.get("/mine", response_model=Farm)
def read_my_farm(
    store: MarketplaceStore = Depends(get_store),
    current_user: User = Depends(is_farmer)
):
    farm = store.my_farm()
    if farm is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="You do not have a farm yet"
        )
    return farm


@router.get("/{farm_id}", response_model=Farm)
def read_farm(
    farm_id: UUID,
    store: MarketplaceStore = Depends(get_store)
):
    farm = store.get_farm(farm_id)
    if farm is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Farm not found"
        )
    return farm
