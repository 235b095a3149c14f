from fastapi.testclient import TestClient

from dashboard.exceptions import PostgrestError


def _seed_clicks(fake_store):
    fake_store.seed("link_clicks", [{"id": i} for i in range(10)])
    fake_store.seed("link_clicks_by_platform", [
        {"platform": "whatsapp", "item_type": "event", "clicks": 4},
        {"platform": "linkedin", "item_type": "event", "clicks": 3},
        {"platform": "whatsapp", "item_type": "scholarship", "clicks": 3},
    ])
    fake_store.seed("link_clicks_by_item", [
        {"item_type": "event", "item_id": 1, "platform": "whatsapp", "destination_url": "https://lu.ma/abc", "clicks": 4},
        {"item_type": "event", "item_id": 1, "platform": "linkedin", "destination_url": "https://lu.ma/abc", "clicks": 3},
        {"item_type": "scholarship", "item_id": 8, "platform": "whatsapp", "destination_url": "https://grants.example.org/x", "clicks": 3},
    ])
    fake_store.seed("events", [{"id": 1, "name": "AI Night"}])
    fake_store.seed("scholarships", [{"id": 8, "title": "STEM Bursary"}])


def test_link_tracking_summary(client: TestClient, admin_headers, fake_store):
    _seed_clicks(fake_store)

    response = client.get("/api/v1/link-tracking/", headers=admin_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["total_clicks"] == 10
    assert [(p["platform"], p["clicks"], p["percent_of_total"]) for p in data["platform_totals"]] == [
        ("whatsapp", 7, 70),
        ("linkedin", 3, 30),
    ]
    assert data["platform_totals"][0]["label"] == "WhatsApp"
    assert [(c["item_type"], c["clicks"]) for c in data["category_totals"]] == [
        ("event", 7),
        ("scholarship", 3),
    ]
    assert [p["platform"] for p in data["platforms"]] == ["linkedin", "whatsapp"]

    first = data["items"][0]
    assert first["item_id"] == "1"
    assert first["item_name"] == "AI Night"
    assert first["destination_host"] == "lu.ma"
    assert first["platforms"] == {"whatsapp": 4, "linkedin": 3}
    assert first["total"] == 7
    assert data["items"][1]["item_name"] == "STEM Bursary"


def test_link_tracking_filters(client: TestClient, admin_headers, fake_store):
    _seed_clicks(fake_store)

    response = client.get(
        "/api/v1/link-tracking/", params={"platform": "linkedin"}, headers=admin_headers
    )
    data = response.json()
    assert [i["item_id"] for i in data["items"]] == ["1"]
    assert data["platform_filter"] == "linkedin"
    # Totals are not narrowed by the filters
    assert data["total_clicks"] == 10

    response = client.get(
        "/api/v1/link-tracking/", params={"category": "all", "platform": "all"}, headers=admin_headers
    )
    data = response.json()
    assert len(data["items"]) == 2
    assert data["category_filter"] is None


def test_link_tracking_without_clicks(client: TestClient, admin_headers):
    response = client.get("/api/v1/link-tracking/", headers=admin_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["total_clicks"] == 0
    assert data["items"] == []
    assert data["platform_totals"] == []


def test_link_tracking_view_failure(client: TestClient, admin_headers, fake_store):
    fake_store.fail(
        "select", "link_clicks_by_item", PostgrestError("permission denied for view link_clicks_by_item", code="42501")
    )

    response = client.get("/api/v1/link-tracking/", headers=admin_headers)

    assert response.status_code == 403
