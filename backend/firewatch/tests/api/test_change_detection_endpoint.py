PAYLOAD = {
    "bounds": {"west": 5, "south": 5, "east": 25, "north": 25},
    "period1": {"startDate": "2024-01-01", "endDate": "2024-01-07", "label": "Semana 1"},
    "period2": {"startDate": "2024-01-08", "endDate": "2024-01-14", "label": "Semana 2"},
}


def test_change_detection_endpoint_returns_result(api_client, stub_provider):
    response = api_client.post("/api/change-detection", json=PAYLOAD)
    assert response.status_code == 200
    body = response.json()
    assert body["period1"] == PAYLOAD["period1"]
    assert body["period2"] == PAYLOAD["period2"]
    assert [c["changeType"] for c in body["changes"]] == ["growing", "new", "extinguished"]
    growing = body["changes"][0]
    assert growing["beforeFrp"] == 50
    assert growing["afterFrp"] == 80
    assert abs(growing["intensity"] - 0.6) < 1e-9
    assert growing["confidence"] == 80
    assert body["changes"][1]["intensity"] == 1.0
    assert body["summary"] == {
        "newFires": 1,
        "growingFires": 1,
        "diminishingFires": 0,
        "extinguishedFires": 1,
        "totalChanges": 3,
    }
    assert sorted(call["date"] for call in stub_provider.calls) == ["2024-01-01", "2024-01-08"]


def test_change_detection_missing_period_returns_422(api_client):
    payload = {"bounds": PAYLOAD["bounds"], "period1": PAYLOAD["period1"]}
    response = api_client.post("/api/change-detection", json=payload)
    assert response.status_code == 422


def test_change_detection_invalid_bounds_returns_400(api_client):
    payload = dict(PAYLOAD, bounds={"west": 0, "south": -95, "east": 10, "north": 10})
    response = api_client.post("/api/change-detection", json=payload)
    assert response.status_code == 400


def test_change_detection_invalid_date_returns_400(api_client):
    payload = dict(PAYLOAD, period2={"startDate": "next week", "endDate": "2024-01-14", "label": "x"})
    response = api_client.post("/api/change-detection", json=payload)
    assert response.status_code == 400


def test_change_detection_upstream_failure_returns_502(failing_api_client):
    response = failing_api_client.post("/api/change-detection", json=PAYLOAD)
    assert response.status_code == 502
    assert response.json()["detail"]["error"] == "Failed to perform change detection"
