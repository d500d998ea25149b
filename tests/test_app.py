from fastapi.testclient import TestClient

from smartnotes.main import app

tester = TestClient(app=app)


def test_health() -> None:
    response = tester.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert response.headers["X-Request-Id"]


def test_request_id_is_propagated() -> None:
    response = tester.get("/api/health", headers={"X-Request-Id": "abc123"})

    assert response.headers["X-Request-Id"] == "abc123"


def test_cors_allows_any_localhost_port() -> None:
    response = tester.get("/api/health", headers={"Origin": "http://localhost:4321"})

    assert response.headers["access-control-allow-origin"] == "http://localhost:4321"


def test_cors_allows_configured_origin_preflight() -> None:
    response = tester.options(
        "/api/notes",
        headers={"Origin": "http://localhost:5173", "Access-Control-Request-Method": "GET"},
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:5173"


def test_cors_rejects_unknown_origin() -> None:
    response = tester.get("/api/health", headers={"Origin": "https://evil.example.com"})

    assert "access-control-allow-origin" not in response.headers


def test_unknown_route_has_message_body() -> None:
    response = tester.get("/api/nope")

    assert response.status_code == 404
    assert response.json()["message"] == "Not Found"
