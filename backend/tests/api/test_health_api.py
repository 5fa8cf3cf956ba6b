"""Smoke tests for the API blueprint wiring."""

from __future__ import annotations

from redis.exceptions import ConnectionError as RedisConnectionError

from tests.helpers.assertions import assert_problem
from tests.helpers.http import API


def test_health_endpoint(client):
    """Health check should return OK payload."""

    response = client.get(f"{API}/health")
    assert response.status_code == 200
    payload = response.get_json()
    assert payload["status"] == "ok"
    assert payload["db"] == "ok"
    assert payload["sessions"] == "memory"


def test_unknown_route_is_problem_json(client):
    body = assert_problem(client.get(f"{API}/nope"), 404, "not_found")
    assert body["detail"] == f"Route '{API}/nope' not found"


def test_request_id_is_echoed(client):
    response = client.get(f"{API}/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


class _DownRedis:
    def ping(self):
        raise RedisConnectionError("down")


def test_health_reports_unreachable_registry(app, client):
    app.extensions["redis_client"] = _DownRedis()

    response = client.get(f"{API}/health")

    assert response.status_code == 503
    assert response.get_json()["status"] == "degraded"
    assert response.get_json()["sessions"] == "fail"
