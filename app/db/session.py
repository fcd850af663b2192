from typing import Optional

from fastapi import HTTPException, Request, status

from app.db.marketplace import MarketplaceStore


def get_store(request: Request) -> MarketplaceStore:
    store: Optional[MarketplaceStore] = getattr(request.app.state, "store", None)
    if store is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Marketplace is not initialized",
        )
    return store
