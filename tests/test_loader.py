import json
import shutil

import pytest

from app.core.config import RESOURCE_DIR
from app.core.errors import LoadFailure
from app.db.loader import load_collection, load_snapshot
from app.db.marketplace import MarketplaceStore
from app.models.user import UserRole

SEED_EMAILS = {
    "john@greenpastures.com",
    "mary@hillsidefarm.com",
    "alex@example.com",
    "sarah@example.com",
}


@pytest.fixture
def resources(tmp_path):
    for name in ("users", "farms", "requests"):
        shutil.copy(RESOURCE_DIR / f"{name}.json", tmp_path / f"{name}.json")
    return tmp_path


def test_bundled_resources_load():
    snapshot = load_snapshot(RESOURCE_DIR)
    assert len(snapshot.users) == 5
    assert len(snapshot.farms) == 3
    assert len(snapshot.requests) == 2
    assert snapshot.requests[1].responses[0].farmer_name == "Mary Johnson"


def test_store_uses_bundled_resources(resources):
    store = MarketplaceStore()

    assert store.load_data(resources) is True
    assert len(store.list_users()) == 5
    assert "Oak Ridge Ranch" in [f.name for f in store.filtered_farms("", set())]
    assert store.conversations_for_current_user() == []
    # first consumer in the file becomes the session user
    assert store.current_user().email == "alex@example.com"
    assert store.current_user().role == UserRole.CONSUMER


def test_malformed_requests_fall_back_for_everything(resources):
    (resources / "requests.json").write_text(json.dumps([{"id": "not-a-request"}]))
    store = MarketplaceStore()

    assert store.load_data(resources) is False
    assert {u.email for u in store.list_users()} == SEED_EMAILS
    assert [f.name for f in store.filtered_farms("", set())] == [
        "Green Pastures Farm", "Hillside Poultry Farm"
    ]
    assert len(store.open_requests()) == 2
    assert len(store.conversations_for_current_user()) == 1


@pytest.mark.parametrize("name", ["users", "farms", "requests"])
def test_missing_resource_falls_back(resources, name):
    (resources / f"{name}.json").unlink()
    store = MarketplaceStore()

    assert store.load_data(resources) is False
    assert {u.email for u in store.list_users()} == SEED_EMAILS


def test_empty_collection_is_a_load_failure(resources):
    (resources / "farms.json").write_text("[]")
    with pytest.raises(LoadFailure):
        load_collection(resources, "farms")


def test_invalid_json_is_a_load_failure(resources):
    (resources / "users.json").write_text("{not json")
    with pytest.raises(LoadFailure):
        load_collection(resources, "users")


def test_mobile_client_enum_spelling_is_accepted(tmp_path):
    (tmp_path / "users.json").write_text(json.dumps([
        {"email": "pat@example.com", "name": "Pat", "role": "Consumer", "location": "Davis, CA"}
    ]))
    users = load_collection(tmp_path, "users")
    assert users[0].role == UserRole.CONSUMER


def test_camel_case_records_are_accepted(tmp_path):
    user_id = "6f1c2a0e-1b7d-4c59-9f0e-0a1d2b3c4d99"
    (tmp_path / "users.json").write_text(json.dumps([
        {"id": user_id, "email": "pat@example.com", "name": "Pat", "userType": "Consumer",
         "location": "Davis, CA", "profileImageName": "person.crop.circle"}
    ]))
    (tmp_path / "farms.json").write_text(json.dumps([
        {"name": "Sunny Acres", "ownerId": user_id, "location": "Davis, CA",
         "description": "", "reviewCount": 3, "deliveryAvailable": True,
         "meatOfferings": [{"type": "Beef", "price": 9.0, "unit": "per pound", "description": ""}]}
    ]))
    (tmp_path / "requests.json").write_text(json.dumps([
        {"consumerId": user_id, "consumerName": "Pat", "meatType": "Beef", "quantity": 10,
         "unit": "pounds", "budget": 120, "deliveryOption": "Either",
         "preferredTime": "2026-11-20T12:00:00Z", "location": "Davis, CA",
         "additionalInfo": "Ground beef", "isOpen": False}
    ]))

    users, farms, requests = load_snapshot(tmp_path)

    assert users[0].role == UserRole.CONSUMER
    assert users[0].profile_image_name == "person.crop.circle"
    assert farms[0].owner_id == users[0].id
    assert farms[0].review_count == 3
    assert farms[0].meat_offerings[0].type == "Beef"
    assert requests[0].consumer_id == users[0].id
    assert requests[0].additional_info == "Ground beef"
    assert requests[0].is_open is False
    # output keeps snake_case field names
    assert "owner_id" in farms[0].model_dump(by_alias=True)
