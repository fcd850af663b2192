from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from app.auth.security import get_current_user
from app.core.errors import raise_for_result
from app.db.marketplace import MarketplaceStore
from app.db.session import get_store
from app.models.user import User
from app.schemas.user import ProfileUpdate

router = APIRouter()

# --------------------------------------------------------------------
# List users -> GET /users
# --------------------------------------------------------------------
@router.get("/", response_model=List[User])
def read_users(
    skip: int = 0,
    limit: int = 100,
    store: MarketplaceStore = Depends(get_store)
):
    return store.list_users()[skip:skip + limit]

# --------------------------------------------------------------------
# Update own profile -> PUT /users/me
# --------------------------------------------------------------------
@router.put("/me", response_model=User)
def update_my_profile(
    profile: ProfileUpdate,
    store: MarketplaceStore = Depends(get_store),
    current_user: User = Depends(get_current_user)
):
    return raise_for_result(store.update_profile(profile))

# --------------------------------------------------------------------
# Get user by id -> GET /users/{user_id}
# --------------------------------------------------------------------
@router.get("/{user_id}", response_model=User)
def read_user(
    user_id: UUID,
    store: MarketplaceStore = Depends(get_store)
):
    user = store.get_user(user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user
