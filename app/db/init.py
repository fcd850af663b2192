from typing import Optional

from app.core.config import LOAD_RESOURCES, RESOURCE_DIR
from app.db.marketplace import MarketplaceStore
from app.notifications import Notifier


def init_store(notifier: Optional[Notifier] = None) -> MarketplaceStore:
    # Bundled resources first, built-in seed data otherwise
    store = MarketplaceStore(notifier=notifier)
    store.load_data(RESOURCE_DIR if LOAD_RESOURCES else None)
    return store
