import mongomock
import pytest
import requests
from fastapi.testclient import TestClient

from smartnotes.infrastructure.db import mongo
from smartnotes.main import app
from smartnotes.services import summarize_service


@pytest.fixture
def db():
    database = mongomock.MongoClient().smart_notes_test
    database["user"].create_index("email", unique=True)
    mongo._db = database
    yield database
    mongo._db = None


@pytest.fixture(autouse=True)
def offline_summarizer(monkeypatch):
    """Sin red: el modelo externo siempre falla y se usa el truncado."""
    def _down(text, timeout=None):
        raise requests.ConnectionError("inference endpoint unreachable")

    monkeypatch.setattr(summarize_service, "hf_summarize", _down)


@pytest.fixture
def client(db):
    # Sin `with`: no corre el startup (no intenta conectar a Mongo real)
    yield TestClient(app=app)


@pytest.fixture
def register(client):
    def _register(email="ana@example.com", name="Ana", password="s3cret-pass"):
        response = client.post("/api/auth/register", json={"name": name, "email": email, "password": password})
        assert response.status_code == 201, response.text
        return response.json()

    return _register


@pytest.fixture
def auth_headers(register):
    def _headers(email="ana@example.com"):
        data = register(email=email)
        return {"Authorization": f"Bearer {data['token']}"}

    return _headers
