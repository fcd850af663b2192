import inspect

from app.auth.security import get_current_user


def login(client, email, role):
    response = client.post("/auth/login", json={"email": email, "role": role})
    assert response.status_code == 200
    return response.json()


def request_draft(**overrides):
    draft = {
        "meat_type": "Lamb",
        "quantity": 20,
        "unit": "pounds",
        "budget": 250,
        "delivery_option": "pickup",
        "preferred_time": "2026-12-01T10:00:00Z",
        "location": "Berkeley, CA",
    }
    draft.update(overrides)
    return draft


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"message": "Welcome to LocalMeat API"}


def test_login_logout_me(client):
    assert client.get("/auth/me").json()["email"] == "alex@example.com"

    user = login(client, "JOHN@greenpastures.com", "farmer")
    assert user["name"] == "John Smith"
    assert client.get("/auth/me").json()["id"] == user["id"]

    assert client.post("/auth/logout").status_code == 204
    assert client.get("/auth/me").status_code == 401


def test_login_rejects_unknown_role(client):
    response = client.post("/auth/login", json={"email": "x@example.com", "role": "admin"})
    assert response.status_code == 422


def test_farm_search(client):
    response = client.get("/farms/", params={"search": "hill"})
    assert [f["name"] for f in response.json()] == ["Hillside Poultry Farm"]

    response = client.get("/farms/", params={"meat_type": ["Beef"]})
    assert [f["name"] for f in response.json()] == ["Green Pastures Farm"]

    response = client.get("/farms/", params={"search": "hill", "meat_type": ["Beef"]})
    assert response.json() == []

    assert client.get("/farms/meat-types").json() == ["Beef", "Chicken", "Pork", "Turkey"]


def test_farm_filter_state(client):
    response = client.put("/farms/filters", json={"search_text": "", "selected_farm_filters": ["Chicken"]})
    assert response.json()["selected_farm_filters"] == ["Chicken"]
    assert [f["name"] for f in client.get("/farms/").json()] == ["Hillside Poultry Farm"]

    client.post("/farms/filters/Beef/toggle")
    assert client.get("/farms/filters").json()["selected_farm_filters"] == ["Beef", "Chicken"]

    assert client.delete("/farms/filters").status_code == 204
    assert len(client.get("/farms/").json()) == 2


def test_my_farm_requires_farmer(client):
    assert client.get("/farms/mine").status_code == 403
    login(client, "mary@hillsidefarm.com", "farmer")
    assert client.get("/farms/mine").json()["name"] == "Hillside Poultry Farm"


def test_request_offer_accept_flow(client):
    alex = login(client, "alex@example.com", "consumer")
    response = client.post("/requests/", json=request_draft())
    assert response.status_code == 201
    request_id = response.json()["id"]
    assert response.json()["consumer_id"] == alex["id"]

    mary = login(client, "mary@hillsidefarm.com", "farmer")
    response = client.post(f"/requests/{request_id}/responses", json={"offer_amount": 240, "message": "Can do"})
    assert response.status_code == 201
    assert len(response.json()["responses"]) == 1

    # only the poster may accept
    response = client.post(f"/requests/{request_id}/accept", json={"response_index": 0})
    assert response.status_code == 403

    login(client, "alex@example.com", "consumer")
    response = client.post(f"/requests/{request_id}/accept", json={"response_index": 3})
    assert response.status_code == 400

    response = client.post(f"/requests/{request_id}/accept", json={"response_index": 0})
    assert response.status_code == 200
    assert response.json()["is_open"] is False
    assert request_id not in [r["id"] for r in client.get("/requests/open").json()]

    response = client.post(f"/requests/{request_id}/accept", json={"response_index": 0})
    assert response.status_code == 409

    exists = client.get("/conversations/exists", params={"user_a": alex["id"], "user_b": mary["id"]})
    assert exists.json() is True


def test_consumers_cannot_make_offers(client):
    request_id = client.get("/requests/open").json()[0]["id"]
    response = client.post(f"/requests/{request_id}/responses", json={"offer_amount": 10})
    assert response.status_code == 403


def test_unknown_request(client):
    login(client, "mary@hillsidefarm.com", "farmer")
    missing = "00000000-0000-4000-8000-000000000000"
    assert client.get(f"/requests/{missing}").status_code == 404
    response = client.post(f"/requests/{missing}/responses", json={"offer_amount": 10})
    assert response.status_code == 404


def test_messaging(client):
    john = login(client, "john@greenpastures.com", "farmer")
    sarah_id = next(u["id"] for u in client.get("/users/").json() if u["email"] == "sarah@example.com")

    response = client.post("/conversations/messages", json={"receiver_id": sarah_id, "content": "Fresh pork next week"})
    assert response.status_code == 201
    conversation = response.json()
    assert conversation["last_message"] == "Fresh pork next week"

    partner = client.get(f"/conversations/{conversation['id']}/partner").json()
    assert partner["id"] == sarah_id
    assert len(client.get("/conversations/").json()) == 2

    response = client.post("/conversations/messages", json={"receiver_id": john["id"], "content": "me"})
    assert response.status_code == 400


def test_update_profile(client):
    response = client.put("/users/me", json={"location": "Daly City, CA"})
    assert response.status_code == 200
    assert response.json()["location"] == "Daly City, CA"
    user_id = response.json()["id"]
    assert client.get(f"/users/{user_id}").json()["location"] == "Daly City, CA"


def test_session_dependency_runs_in_threadpool():
    # takes the store lock, so it must not run on the event loop
    assert not inspect.iscoroutinefunction(get_current_user)
