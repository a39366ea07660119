"""Tests for the HTTP chat and health endpoints."""

import pytest
from fastapi.testclient import TestClient

from lingobot.api.routes import health
from lingobot.core.quiz.content import QuestionBank
from lingobot.core.service import ChatService, get_chat_service
from lingobot.core.session.store import SessionStore
from lingobot.main import app


@pytest.fixture
def service():
    """Fresh service per test."""
    return ChatService(
        store=SessionStore(),
        question_bank=QuestionBank.load(),
        serialize=True,
    )


@pytest.fixture
def client(service):
    """Test client with the service dependency overridden."""
    app.dependency_overrides[get_chat_service] = lambda: service
    app.dependency_overrides[health._service_or_none] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


def send(client, chat_id, message):
    response = client.post("/chat", json={"chat_id": chat_id, "message": message})
    assert response.status_code == 200, response.text
    return response.json()


class TestChatEndpoint:
    """Test POST /chat."""

    def test_start(self, client):
        """Test /start returns the language keyboard."""
        data = send(client, 42, "/start")

        assert data["chat_id"] == 42
        assert data["state"] == "none"
        assert data["language"] == "none"
        assert data["score"] == 0
        assert data["keyboard"] == [["1. English", "2. Spanish"], ["🔄 Reset"]]

    def test_english_scenario(self, client):
        """Test the English happy path over HTTP."""
        for message in ["/start", "english", "Alice", "I like hiking", "Grammar"]:
            send(client, 1, message)

        data = send(client, 1, "went")

        assert data["score"] == 1
        assert data["state"] == "choose_category"
        assert data["keyboard"][0] == ["📚 Grammar", "📖 Vocabulary"]

    def test_spanish_wrong_category(self, client):
        """Test the Spanish unknown-category reply over HTTP."""
        for message in ["/start", "2", "Bob", "introduce myself"]:
            send(client, 2, message)

        data = send(client, 2, "vocabulario-incorrecto")

        assert data["reply"].startswith("No entendí eso.")
        assert data["keyboard"] is not None
        assert data["score"] == 0
        assert data["language"] == "spanish"

    def test_empty_message_is_absorbed(self, client):
        """Test empty text gets a reply, not an error."""
        data = send(client, 3, "")

        assert data["reply"].startswith("Unknown command")

    def test_string_chat_id(self, client):
        """Test non-numeric chat ids are accepted."""
        data = send(client, "web-visitor", "english")

        assert data["chat_id"] == "web-visitor"
        assert data["state"] == "awaiting_name"

    def test_missing_message_is_validation_error(self, client):
        """Test missing fields return 422 with error body."""
        response = client.post("/chat", json={"chat_id": 1})

        assert response.status_code == 422
        assert response.json()["error"] == "Validation error"

    def test_too_long_message_rejected(self, client):
        """Test messages over the Telegram limit are rejected."""
        response = client.post("/chat", json={"chat_id": 1, "message": "x" * 4097})

        assert response.status_code == 422


class TestSessionEndpoints:
    """Test session lookup and reset."""

    def test_get_session(self, client):
        """Test session snapshot after a few messages."""
        for message in ["english", "Alice"]:
            send(client, 10, message)

        response = client.get("/chat/session/10")

        assert response.status_code == 200
        data = response.json()
        assert data["chat_id"] == 10
        assert data["state"] == "introduction"
        assert data["user_name"] == "alice"
        assert data["message_count"] == 2

    def test_get_unknown_session(self, client):
        """Test 404 for unknown chats."""
        response = client.get("/chat/session/999")

        assert response.status_code == 404

    def test_reset_session(self, client, service):
        """Test DELETE resets the session."""
        send(client, 11, "english")

        response = client.delete("/chat/session/11")

        assert response.status_code == 204
        assert service.get_session(11).language.value == "none"

    def test_numeric_string_id_shares_session(self, client):
        """Test a numeric string id in the body maps to the same session as the path."""
        data = send(client, "123", "english")

        assert data["chat_id"] == 123

        response = client.get("/chat/session/123")
        assert response.status_code == 200
        assert response.json()["state"] == "awaiting_name"

        assert client.delete("/chat/session/123").status_code == 204

    def test_int_and_string_ids_are_one_chat(self, client, service):
        """Test 7 and "7" reach the same session."""
        send(client, 7, "english")
        send(client, "7", "Alice")

        assert len(service.store) == 1
        assert service.get_session(7).user_name == "alice"

    def test_reset_unknown_session(self, client):
        """Test reset of unknown chat is 404."""
        response = client.delete("/chat/session/12345")

        assert response.status_code == 404


class TestHealthEndpoints:
    """Test health probes."""

    def test_health(self, client):
        """Test basic health."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_live(self, client):
        """Test liveness."""
        response = client.get("/health/live")

        assert response.status_code == 200
        assert response.json()["status"] == "alive"

    def test_ready(self, client):
        """Test readiness with content loaded."""
        send(client, 1, "/start")

        response = client.get("/health/ready")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ready"
        assert data["checks"]["question_bank"] == "ok"
        assert data["active_chats"] == 1

    def test_not_ready_without_content(self, client):
        """Test readiness fails when content cannot load."""
        app.dependency_overrides[health._service_or_none] = lambda: None

        response = client.get("/health/ready")

        assert response.status_code == 503
        assert response.json()["status"] == "not_ready"

    def test_root(self, client):
        """Test root endpoint."""
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["name"] == "lingobot"
