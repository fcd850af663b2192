from fastapi import APIRouter, Depends

from app.auth.security import get_current_user
from app.core.errors import raise_for_result
from app.db.marketplace import MarketplaceStore
from app.db.session import get_store
from app.models.user import User
from app.schemas.user import LoginRequest

router = APIRouter(tags=["auth"])


# LOGIN: matches (email, role) case-insensitively, creates the user otherwise
@router.post("/login", response_model=User)
def login(
    credentials: LoginRequest,
    store: MarketplaceStore = Depends(get_store)
):
    result = store.login(credentials.email, credentials.role)
    return raise_for_result(result)


@router.post("/logout", status_code=204)
def logout(store: MarketplaceStore = Depends(get_store)):
    raise_for_result(store.logout())


@router.get("/me", response_model=User)
def read_current_user(current_user: User = Depends(get_current_user)):
    return current_user
