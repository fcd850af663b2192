from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from app.auth.security import get_current_user
from app.core.errors import raise_for_result
from app.db.marketplace import MarketplaceStore
from app.db.session import get_store
from app.models.conversation import Conversation
from app.models.user import User
from app.schemas.conversation import MessageCreate

router = APIRouter()

@router.get("/", response_model=List[Conversation])
def read_my_conversations(
    store: MarketplaceStore = Depends(get_store),
    current_user: User = Depends(get_current_user)
):
    return store.conversations_for_current_user()

@router.post("/messages", response_model=Conversation, status_code=status.HTTP_201_CREATED)
def send_message(
    message: MessageCreate,
    store: MarketplaceStore = Depends(get_store),
    current_user: User = Depends(get_current_user)
):
    return raise_for_result(store.send_message(message.receiver_id, message.content))

@router.get("/exists", response_model=bool)
def conversation_exists(
    user_a: UUID,
    user_b: UUID,
    store: MarketplaceStore = Depends(get_store)
):
    return store.conversation_exists(user_a, user_b)

@router.get("/{conversation_id}/partner", response_model=User)
def read_conversation_partner(
    conversation_id: UUID,
    store: MarketplaceStore = Depends(get_store),
    current_user: User = Depends(get_current_user)
):
    partner = store.conversation_partner(conversation_id)
    if partner is None:
        raise HTTPException(status_code=404, detail="Conversation partner not found")
    return partner
