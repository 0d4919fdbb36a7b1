# tests/test_health.py
from __future__ import annotations

import pytest

from helpers import _assert_status, _dump_response


@pytest.mark.timeout(5)
def test_health_ok(client):
    r = client.get("/health")
    _assert_status(r, 200)
    assert r.json() == {"status": "ok"}, _dump_response(r)


@pytest.mark.timeout(5)
def test_health_db_up(client):
    r = client.get("/health/db")
    _assert_status(r, 200)
    body = r.json()
    assert body["db"] == "up", body
    assert body["dialect"] == "sqlite", body


@pytest.mark.timeout(5)
def test_migrations_endpoint_reports_presence(client):
    r = client.get("/health/migrations")
    _assert_status(r, 200)
    body = r.json()
    # tabelele vin din create_all, nu din Alembic
    assert body["present"] is False, body
    assert body["alembic_version"] is None, body


@pytest.mark.timeout(5)
def test_request_id_is_propagated(client):
    r = client.get("/health", headers={"X-Request-ID": "req-abc123"})
    _assert_status(r, 200)
    assert r.headers.get("x-request-id") == "req-abc123"
    assert r.headers.get("x-process-time", "").endswith("ms")


@pytest.mark.timeout(5)
def test_root_reports_name_and_version(client):
    r = client.get("/")
    _assert_status(r, 200)
    body = r.json()
    assert body["name"] == "catalog-api", body
    assert "version" in body, body


@pytest.mark.timeout(5)
def test_unknown_route_is_json_404(client):
    r = client.get("/api/nope")
    _assert_status(r, 404)
    assert r.json()["detail"]["message"] == "Not Found", _dump_response(r)
