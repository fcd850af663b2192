import pytest
from fastapi.testclient import TestClient

from app.db.marketplace import MarketplaceStore
from app.main import app
from app.notifications import RecordingNotifier


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def store(notifier):
    # Seed data only; the bundled resources are covered in test_loader
    store = MarketplaceStore(notifier=notifier)
    store.load_data(None)
    notifier.clear()
    return store


@pytest.fixture
def client(store):
    app.state.store = store
    with TestClient(app) as client:
        yield client
    app.state.store = None


@pytest.fixture
def by_email(store):
    def lookup(email):
        return next(u for u in store.list_users() if u.email == email)
    return lookup
