from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from app.auth.security import get_current_user, is_consumer, is_farmer
from app.core.errors import raise_for_result
from app.db.marketplace import MarketplaceStore
from app.db.session import get_store
from app.models.request import Request
from app.models.user import User
from app.schemas.request import AcceptResponse, RequestCreate, ResponseCreate

router = APIRouter()

@router.post("/", response_model=Request, status_code=status.HTTP_201_CREATED)
def create_request(
    draft: RequestCreate,
    store: MarketplaceStore = Depends(get_store),
    current_user: User = Depends(is_consumer)
):
    return raise_for_result(store.post_request(draft))

@router.get("/open", response_model=List[Request])
def read_open_requests(store: MarketplaceStore = Depends(get_store)):
    return store.open_requests()

@router.get("/mine", response_model=List[Request])
def read_my_requests(
    store: MarketplaceStore = Depends(get_store),
    current_user: User = Depends(get_current_user)
):
    return store.my_requests()

@router.get("/{request_id}", response_model=Request)
def read_request(
    request_id: UUID,
    store: MarketplaceStore = Depends(get_store)
):
    request = store.get_request(request_id)
    if request is None:
        raise HTTPException(status_code=404, detail="Request not found")
    return request

@router.post("/{request_id}/responses", response_model=Request, status_code=status.HTTP_201_CREATED)
def respond_to_request(
    request_id: UUID,
    offer: ResponseCreate,
    store: MarketplaceStore = Depends(get_store),
    current_user: User = Depends(is_farmer)
):
    result = store.respond_to_request(
        request_id,
        farmer_id=current_user.id,
        farmer_name=current_user.name,
        offer_amount=offer.offer_amount,
        message=offer.message,
    )
    return raise_for_result(result)

@router.post("/{request_id}/accept", response_model=Request)
def accept_request(
    request_id: UUID,
    acceptance: AcceptResponse,
    store: MarketplaceStore = Depends(get_store),
    current_user: User = Depends(get_current_user)
):
    # Only the consumer who posted the request can accept an offer on it
    result = store.accept_request(request_id, acceptance.response_index, as_session_owner=True)
    return raise_for_result(result)
