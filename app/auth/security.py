from fastapi import Depends, HTTPException, status

from app.db.marketplace import MarketplaceStore
from app.db.session import get_store
from app.models.user import User, UserRole


def get_current_user(store: MarketplaceStore = Depends(get_store)) -> User:
    user = store.current_user()
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No user is logged in",
        )
    return user


def is_farmer(user: User = Depends(get_current_user)):
    if user.role != UserRole.FARMER:
        raise HTTPException(status_code=403, detail="Farmer access required")
    return user


def is_consumer(user: User = Depends(get_current_user)):
    if user.role != UserRole.CONSUMER:
        raise HTTPException(status_code=403, detail="Consumer access required")
    return user
