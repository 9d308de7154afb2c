import pytest
from fastapi.testclient import TestClient

from app.apis.deps import get_generation_client, get_store
from app.core.errors import StorageError, TransportError, UpstreamFormatError
from main import app

from conftest import FakeClient, FakeStore


@pytest.fixture
def api(store, client):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_generation_client] = lambda: client
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(api):
    response = api.get("/")
    assert response.status_code == 200
    assert response.json() == {"status": "running", "database": "connected"}
    assert response.headers["X-Request-ID"]


def test_health_reports_unavailable_database(api, store, monkeypatch):
    async def down():
        return False

    monkeypatch.setattr(store, "ping", down)
    assert api.get("/").json()["database"] == "unavailable"


def test_create_user_is_idempotent(api):
    first = api.post("/user", json={"username": "ana"})
    second = api.post("/user", json={"username": "ana"})
    assert first.status_code == 200
    assert first.json() == {"id": 1, "username": "ana"}
    assert second.json() == first.json()


def test_create_user_requires_username(api):
    response = api.post("/user", json={})
    assert response.status_code == 400
    assert response.json() == {"error": "Username required"}


def test_malformed_user_body_reads_as_missing_username(api):
    response = api.post(
        "/user", content="not json", headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Username required"}


def test_malformed_flashcards_body_is_bad_request(api):
    response = api.post(
        "/flashcards", content="not json", headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid request"}


def test_create_user_storage_failure(api, store, monkeypatch):
    async def broken(username):
        raise StorageError("connection reset")

    monkeypatch.setattr(store, "upsert_user", broken)
    response = api.post("/user", json={"username": "ana"})
    assert response.status_code == 500
    assert response.json() == {"error": "Database error"}


def test_generate_worked_example(api, store):
    api.post("/user", json={"username": "ana"})
    response = api.post(
        "/flashcards",
        json={"username": "ana", "topic": "Go channels", "count": 3, "level": "intermediate"},
    )
    assert response.status_code == 200
    assert response.json() == {
        "flashcards": [
            {"question": "Q1", "answer": "A1"},
            {"question": "Q2", "answer": "A2"},
        ]
    }
    assert len(store.cards) == 2


def test_generate_with_null_count_and_level_uses_defaults(api, client):
    api.post("/user", json={"username": "ana"})
    response = api.post(
        "/flashcards",
        json={"username": "ana", "topic": "sql", "count": None, "level": None},
    )
    assert response.status_code == 200
    assert len(response.json()["flashcards"]) == 2
    prompt = client.calls[0][1]
    assert "exactly 5 " in prompt
    assert "beginner level" in prompt


def test_generate_for_unknown_user(api, client):
    response = api.post("/flashcards", json={"username": "ghost", "topic": "sql"})
    assert response.status_code == 400
    assert response.json() == {"error": "User not found"}
    assert client.calls == []


def test_generate_requires_topic(api):
    api.post("/user", json={"username": "ana"})
    response = api.post("/flashcards", json={"username": "ana"})
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid request"}


@pytest.mark.parametrize(
    "fake, message",
    [
        (FakeClient(raw='{"question": "x"'), "Failed to parse flashcards"),
        (FakeClient(error=TransportError()), "AI request failed"),
        (FakeClient(error=UpstreamFormatError()), "Invalid AI response"),
    ],
)
def test_generation_failures_are_server_errors(fake, message):
    store = FakeStore()
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_generation_client] = lambda: fake
    try:
        api = TestClient(app)
        api.post("/user", json={"username": "ana"})
        response = api.post("/flashcards", json={"username": "ana", "topic": "sql"})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"error": message}
    assert store.cards == []


def test_list_flashcards(api):
    api.post("/user", json={"username": "ana"})
    api.post("/flashcards", json={"username": "ana", "topic": "Go channels"})

    response = api.get("/flashcards/ana")
    assert response.status_code == 200
    assert response.json() == [
        {"id": 2, "topic": "Go channels", "question": "Q2", "answer": "A2"},
        {"id": 1, "topic": "Go channels", "question": "Q1", "answer": "A1"},
    ]


def test_list_flashcards_for_unknown_user(api):
    response = api.get("/flashcards/nobody")
    assert response.status_code == 200
    assert response.json() == []
