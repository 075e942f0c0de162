"""
Tests for the HTTP API - scan flow, detail parsers and history endpoints
"""

import pytest
from fastapi.testclient import TestClient

from scanverdict.api.v1 import routes_history
from scanverdict.core.errors import ScanConfigurationError, ScanRequestError
from scanverdict.main import app
from scanverdict.services import scan_service


@pytest.fixture
def client(monkeypatch, history_store):
    monkeypatch.setattr(scan_service, "history_store_service", history_store)
    monkeypatch.setattr(routes_history, "history_store_service", history_store)
    return TestClient(app)


@pytest.fixture
def fake_upstream(monkeypatch):
    calls = []

    def install(response=None, error=None):
        async def fake_fetch_scan(url, webhook_url=None, transport=None):
            calls.append(url)
            if error is not None:
                raise error
            return response

        monkeypatch.setattr(scan_service, "fetch_scan", fake_fetch_scan)
        return calls

    return install


def test_health(client):
    resp = client.get("/api/v1/health")

    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_scan_normalizes_decides_and_records(client, fake_upstream, sample_response):
    calls = fake_upstream(response=sample_response)

    resp = client.post("/api/v1/scan", json={"url": "example-bad.com"})

    assert resp.status_code == 200
    body = resp.json()
    assert calls == ["http://example-bad.com"]
    assert body["url"] == "http://example-bad.com"

    cat = body["categories"][0]
    assert cat["verdict"] == "SUSPICIOUS"
    assert cat["risk_score"] == 3
    assert cat["total_engines"] == 60
    assert cat["detections"][0]["engine"] == "AV-Test"
    result = cat["results"][0]
    assert result["domain"] == "example-bad.com"
    assert result["favicon_src"] is None
    assert result["whois"]["registrar"] == "BadRegistrar"

    history = client.get("/api/v1/history").json()
    assert len(history) == 1
    assert history[0]["url"] == "http://example-bad.com"
    assert history[0]["result"][0]["verdict"] == "SUSPICIOUS"


def test_scan_unrecognised_payload_gives_no_categories(client, fake_upstream):
    fake_upstream(response=None)

    resp = client.post("/api/v1/scan", json={"url": "https://example.com"})

    assert resp.status_code == 200
    assert resp.json()["categories"] == []


def test_scan_rejects_invalid_url(client, fake_upstream):
    calls = fake_upstream(response=[])

    resp = client.post("/api/v1/scan", json={"url": "http://"})

    assert resp.status_code == 400
    assert calls == []


def test_scan_upstream_failure_is_bad_gateway(client, fake_upstream):
    fake_upstream(error=ScanRequestError(500, "boom"))

    resp = client.post("/api/v1/scan", json={"url": "https://example.com"})

    assert resp.status_code == 502
    detail = resp.json()["detail"]
    assert detail["upstream_status"] == 500
    assert detail["upstream_body"] == "boom"


def test_scan_not_configured(client, fake_upstream):
    fake_upstream(error=ScanConfigurationError("SCAN_WEBHOOK_URL is not defined"))

    resp = client.post("/api/v1/scan", json={"url": "https://example.com"})

    assert resp.status_code == 503


def test_analyze_single_category_keeps_raw(client):
    payload = {"verdict": "MALICIOUS", "results": [{"domain": "x.com", "favicon": "https://x.com/f.ico"}]}

    resp = client.post("/api/v1/scan/analyze", json=payload)

    assert resp.status_code == 200
    cat = resp.json()[0]
    assert cat["verdict"] == "MALICIOUS"
    assert cat["total_engines"] == 1
    assert cat["_raw"] == payload
    assert cat["results"][0]["favicon_src"] == "https://x.com/f.ico"


def test_analyze_empty_payload(client):
    resp = client.post("/api/v1/scan/analyze", json={})
    assert resp.json() == []


def test_whois_parse_endpoint(client):
    resp = client.post(
        "/api/v1/whois/parse",
        json={"registrar": "GoDaddy.com, LLC", "name_servers": "ns1.example.com"},
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["knownRegistrar"] is True
    assert body["nameServers"] == ["ns1.example.com"]
    assert body["dates"]["ageInDays"] is None


def test_whois_parse_without_data_is_null(client):
    resp = client.post("/api/v1/whois/parse", json={"dnssec": "unsigned"})

    assert resp.status_code == 200
    assert resp.json() is None


def test_vt_parse_endpoint(client):
    resp = client.post("/api/v1/vt/parse", json={"verdict": "CLEAN", "malicious_count": 2})

    body = resp.json()
    assert body["is_malicious"] is True
    assert body["verdict"]["count"] == 1
    assert body["verdict"]["confidence"] == "Low"


def test_vt_parse_accepts_whole_category(client):
    category = {"verdict": "CLEAN", "virustotal": {"verdict": "MALICIOUS", "risk_score": 90}}

    body = client.post("/api/v1/vt/parse", json=category).json()

    assert body["verdict"]["verdict"] == "MALICIOUS"
    assert body["verdict"]["confidence"] == "High"
    assert body["is_malicious"] is True


def test_history_remove_and_clear(client, history_store):
    for url in ("http://a", "http://b"):
        history_store.add_to_history(url, [])

    remaining = client.delete("/api/v1/history/0").json()
    assert [i["url"] for i in remaining] == ["http://a"]

    assert client.delete("/api/v1/history").json() == {"cleared": True}
    assert client.get("/api/v1/history").json() == []
