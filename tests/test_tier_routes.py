import pytest
from fastapi.testclient import TestClient
from tierpricing.main import app

@pytest.fixture
def client():
    return TestClient(app)

def test_list_tiers(client):
    resp = client.get("/api/tiers")
    assert resp.status_code == 200
    data = resp.json()
    assert [t["tier"] for t in data] == ["NONE", "FREE", "BASIC", "PREMIUM", "VIP"]
    assert [t["rank"] for t in data] == [0, 1, 2, 3, 4]
    vip = data[-1]
    assert vip == {
        "tier": "VIP",
        "name": "VIP",
        "rank": 4,
        "prices": {"en": 199, "tr": 1999},
        "monthly_redemptions": None,
    }

def test_get_tier(client):
    resp = client.get("/api/tiers/BASIC")
    assert resp.status_code == 200
    assert resp.json()["prices"] == {"en": 29, "tr": 299}
    assert resp.json()["name"] == "Basic"
    assert resp.json()["monthly_redemptions"] == 5
    assert resp.headers["X-Request-ID"]

def test_unknown_tier_is_404(client):
    resp = client.get("/api/tiers/GOLD")
    assert resp.status_code == 404
    assert resp.json()["code"] == "UNKNOWN_TIER"
    assert resp.json()["tier"] == "GOLD"
    resp = client.get("/api/tiers/GOLD/renewal")
    assert resp.status_code == 404

def test_renewal(client):
    resp = client.get("/api/tiers/FREE/renewal")
    assert resp.status_code == 200
    assert resp.json()["tier"] == "FREE"
    assert resp.json()["next_renewal_date"].endswith("-01")

def test_request_id_is_echoed(client):
    resp = client.get("/healthz", headers={"X-Request-ID": "abc-123"})
    assert resp.status_code == 200
    assert resp.headers["X-Request-ID"] == "abc-123"

def test_metrics(client):
    client.get("/api/tiers")
    resp = client.get("/metrics")
    assert resp.status_code == 200
    assert "tier_lookups_total" in resp.text

def test_unhandled_error_gets_envelope(client, monkeypatch):
    def broken(tier):
        raise RuntimeError("boom")
    monkeypatch.setattr("tierpricing.routes.tiers.describe_tier", broken)
    resp = client.get("/api/tiers/BASIC", headers={"X-Request-ID": "req-500"})
    assert resp.status_code == 500
    assert resp.json() == {
        "error": {"message": "Internal server error", "code": "INTERNAL_SERVER_ERROR", "request_id": "req-500"}
    }

def test_unmatched_paths_share_one_metrics_label(client):
    assert client.get("/no/such/page-12345").status_code == 404
    text = client.get("/metrics").text
    assert 'path="<unmatched>"' in text
    assert "page-12345" not in text
