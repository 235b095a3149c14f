from fastapi.testclient import TestClient

from dashboard.exceptions import PostgrestError


def test_list_partner_events(client: TestClient, admin_headers, fake_store):
    fake_store.seed("partner_events", [{"id": 1, "name": "Founders Mixer", "date": "Early March"}])

    response = client.get("/api/v1/partner-events/", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()[0]["date"] == "Early March"


def test_list_falls_back_to_spaced_table_name(client: TestClient, admin_headers, fake_store):
    fake_store.missing_tables.add("partner_events")
    fake_store.seed("partner events", [{"id": 2, "name": "Demo Day", "date": "TBC"}])

    response = client.get("/api/v1/partner-events/", headers=admin_headers)

    assert response.status_code == 200
    assert [e["name"] for e in response.json()] == ["Demo Day"]


def test_list_falls_back_on_access_denied(client: TestClient, admin_headers, fake_store):
    fake_store.fail("select", "partner_events", PostgrestError("new row violates row-level security policy", code="42501"))
    fake_store.seed("partner events", [{"id": 2, "name": "Demo Day", "date": "TBC"}])

    response = client.get("/api/v1/partner-events/", headers=admin_headers)

    assert response.status_code == 200
    assert len(response.json()) == 1


def test_list_fails_when_no_table_exists(client: TestClient, admin_headers, fake_store):
    fake_store.missing_tables.update({"partner_events", "partner events"})

    response = client.get("/api/v1/partner-events/", headers=admin_headers)

    assert response.status_code == 502


def test_create_partner_event(client: TestClient, admin_headers, fake_store):
    response = client.post(
        "/api/v1/partner-events/",
        json={"name": "Climate Hack Weekend", "date": "Spring 2027", "organiser": "GreenTech"},
        headers=admin_headers,
    )

    assert response.status_code == 201
    assert response.json()["organiser"] == "GreenTech"
    assert len(fake_store.tables["partner_events"]) == 1


def test_create_requires_date(client: TestClient, admin_headers):
    response = client.post("/api/v1/partner-events/", json={"name": "No Date"}, headers=admin_headers)
    assert response.status_code == 422


def test_create_falls_back_only_on_missing_table(client: TestClient, admin_headers, fake_store):
    fake_store.missing_tables.add("partner_events")

    response = client.post(
        "/api/v1/partner-events/", json={"name": "Meetup", "date": "June"}, headers=admin_headers
    )

    assert response.status_code == 201
    assert len(fake_store.tables["partner events"]) == 1


def test_create_error_is_not_retried_on_other_table(client: TestClient, admin_headers, fake_store):
    fake_store.fail("insert", "partner_events", PostgrestError("duplicate key value", code="23505"))

    response = client.post(
        "/api/v1/partner-events/", json={"name": "Meetup", "date": "June"}, headers=admin_headers
    )

    assert response.status_code == 409
    assert fake_store.count_calls("insert", "partner events") == 0


def test_update_partner_event_without_updated_at_column(client: TestClient, admin_headers, fake_store):
    fake_store.seed("partner_events", [{"id": 4, "name": "Old", "date": "May"}])
    fake_store.tables_without_updated_at.add("partner_events")

    response = client.put("/api/v1/partner-events/4", json={"name": "New"}, headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["name"] == "New"
    assert fake_store.count_calls("update", "partner_events") == 2
    assert "updated_at" not in fake_store.tables["partner_events"][0]


def test_delete_partner_event(client: TestClient, admin_headers, fake_store):
    fake_store.seed("partner_events", [{"id": 4, "name": "Old", "date": "May"}])

    response = client.delete("/api/v1/partner-events/4", headers=admin_headers)

    assert response.status_code == 204
    assert fake_store.tables["partner_events"] == []


def test_access_denied_is_not_masked_by_missing_fallback_table(client: TestClient, admin_headers, fake_store):
    fake_store.fail("select", "partner_events", PostgrestError("permission denied for table partner_events", code="42501"))
    fake_store.missing_tables.add("partner events")

    response = client.get("/api/v1/partner-events/", headers=admin_headers)

    assert response.status_code == 403
    assert "Access denied to partner_events" in response.json()["detail"]
