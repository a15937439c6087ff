from __future__ import annotations

from fastapi.testclient import TestClient

from salon_api.main import app


client = TestClient(app)


def test_preserves_incoming_request_id_header():
    incoming_id = "test-request-id-123"
    resp = client.get("/health", headers={"X-Request-ID": incoming_id})

    assert resp.status_code == 200
    assert resp.headers.get("X-Request-ID") == incoming_id


def test_generates_request_id_when_missing():
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.headers.get("X-Request-ID")
    assert resp.headers.get("X-Request-Duration-ms") is not None


def test_throttled_response_carries_request_id():
    for _ in range(3):
        client.post("/api/enquiry", json={})

    resp = client.post("/api/enquiry", json={}, headers={"X-Request-ID": "req-429"})

    assert resp.status_code == 429
    assert resp.headers["X-Request-ID"] == "req-429"
    assert resp.json()["error"]["request_id"] == "req-429"
