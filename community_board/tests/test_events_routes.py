from conftest import EVENT_FIELDS


def create(client, **overrides):
    return client.post("/api/events", json=dict(EVENT_FIELDS, **overrides))


def test_list_events_empty(client):
    response = client.get("/api/events")
    assert response.status_code == 200
    assert response.get_json() == {"events": []}


def test_create_event_success(alice_client, alice):
    response = create(alice_client)

    assert response.status_code == 201
    data = response.get_json()
    assert data["title"] == "Morning Yoga"
    assert data["creatorId"] == alice.id
    assert data["organizer"] == "Alice"
    assert data["category"] == "Fitness"


def test_create_event_requires_login(client):
    response = create(client)
    assert response.status_code == 401
    assert "error" in response.get_json()


def test_create_event_invalid_input(alice_client):
    response = alice_client.post("/api/events", json={"title": "New Event"})
    assert response.status_code == 400
    assert response.get_json()["error"] == "Event date is required"


def test_create_event_unknown_category(alice_client):
    response = create(alice_client, category="Sports")
    assert response.status_code == 400


def test_get_event_detail(client, alice_client):
    event_id = create(alice_client).get_json()["id"]

    response = client.get(f"/api/events/{event_id}")

    assert response.status_code == 200
    assert response.get_json()["title"] == "Morning Yoga"


def test_get_event_not_found(client):
    response = client.get("/api/events/999")
    assert response.status_code == 404
    assert response.get_json() == {"error": "Event not found"}


def test_list_events_wraps_array(client, alice_client):
    create(alice_client)
    create(alice_client, title="Book Club", category="Community")

    data = client.get("/api/events").get_json()

    assert [e["title"] for e in data["events"]] == ["Morning Yoga", "Book Club"]


def test_update_event(alice_client):
    event_id = create(alice_client).get_json()["id"]

    response = alice_client.put(f"/api/events/{event_id}", json={"title": "Updated Title"})

    assert response.status_code == 200
    assert response.get_json()["title"] == "Updated Title"
    assert response.get_json()["location"] == EVENT_FIELDS["location"]


def test_update_event_status_codes(client, alice_client, bob_client):
    event_id = create(alice_client).get_json()["id"]

    assert client.put(f"/api/events/{event_id}", json={"title": "x"}).status_code == 401
    assert bob_client.put(f"/api/events/{event_id}", json={"title": "x"}).status_code == 403
    assert alice_client.put("/api/events/999", json={"title": "x"}).status_code == 404
    assert alice_client.put(f"/api/events/{event_id}", json={"title": " "}).status_code == 400


def test_delete_event(alice_client, bob_client, client):
    event_id = create(alice_client).get_json()["id"]
    bob_client.post(f"/api/events/{event_id}/comments", json={"text": "Count me in"})

    assert client.delete(f"/api/events/{event_id}").status_code == 401
    assert bob_client.delete(f"/api/events/{event_id}").status_code == 403

    response = alice_client.delete(f"/api/events/{event_id}")
    assert response.status_code == 200
    assert response.get_json()["success"] is True

    assert client.get(f"/api/events/{event_id}").status_code == 404
    assert client.get(f"/api/events/{event_id}/comments").status_code == 404
    assert alice_client.delete(f"/api/events/{event_id}").status_code == 404


def test_search_events(client, alice_client):
    create(alice_client)
    create(alice_client, title="Book Club", category="Community", location="Library")
    create(alice_client, title="Gallery Night", category="Art", location="Old Mill")

    by_keyword = client.get("/api/events/search", query_string={"keyword": "yoga"}).get_json()
    by_category = client.get("/api/events/search", query_string={"category": "Art"}).get_json()
    by_location = client.get("/api/events/search", query_string={"location": "library", "keyword": ""}).get_json()
    everything = client.get("/api/events/search").get_json()

    assert [e["title"] for e in by_keyword["events"]] == ["Morning Yoga"]
    assert [e["title"] for e in by_category["events"]] == ["Gallery Night"]
    assert [e["title"] for e in by_location["events"]] == ["Book Club"]
    assert everything == client.get("/api/events").get_json()


def test_search_category_is_case_sensitive(client, alice_client):
    create(alice_client, title="Gallery Night", category="Art")
    response = client.get("/api/events/search", query_string={"category": "art"})
    assert response.get_json() == {"events": []}


def test_filters(client):
    data = client.get("/api/events/filters").get_json()
    assert set(data["filters"]) == {"keyword", "category", "date", "location"}
    assert data["categories"] == ["Community", "Market", "Fitness", "Art"]


def test_unknown_api_path(client):
    response = client.get("/api/nope")
    assert response.status_code == 404
    assert response.get_json() == {"error": "API endpoint not found: /api/nope"}


def test_health(client):
    assert client.get("/health").get_json() == {"status": "ok"}
    assert client.get("/").get_json() == {"status": "gateway_ok"}


def test_store_outage_is_503(client, services, mocker):
    from community_board.errors import StoreUnavailableError

    mocker.patch.object(services.store, "list_events", side_effect=StoreUnavailableError())

    response = client.get("/api/events")

    assert response.status_code == 503
    assert response.get_json() == {"error": "Storage temporarily unavailable, please retry"}


def test_unexpected_error_is_500(client, services, mocker):
    mocker.patch.object(services.catalog, "get", side_effect=RuntimeError("boom"))

    response = client.get("/api/events/1")

    assert response.status_code == 500
    assert response.get_json() == {"error": "Internal Server Error"}


def test_create_event_non_string_fields(alice_client, client):
    payload = dict(EVENT_FIELDS, title={"a": 1}, date=["2025"], time=True)

    response = alice_client.post("/api/events", json=payload)

    assert response.status_code == 400
    assert response.get_json() == {"error": "Event title must be a string"}
    assert client.get("/api/events").get_json() == {"events": []}
